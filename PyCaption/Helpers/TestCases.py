import unittest
from collections.abc import Container, Sequence
from typing import Any

from PyCaption.Helpers.Tests import log_input_expected_result, log_test_name

class LoggedTestCase(unittest.TestCase):
    """
    TestCase that logs the test name and each checked value, so the test log reads as a record of what was verified
    """
    def setUp(self) -> None:
        super().setUp()
        log_test_name(self._testMethodName)

    def assertLoggedEqual(self, description : str, expected : Any, actual : Any, msg : str|None = None) -> None:
        log_input_expected_result(description, expected, actual)
        self.assertEqual(expected, actual, msg)

    def assertLoggedNotEqual(self, description : str, unexpected : Any, actual : Any, msg : str|None = None) -> None:
        log_input_expected_result(description, f"not {unexpected}", actual)
        self.assertNotEqual(unexpected, actual, msg)

    def assertLoggedAlmostEqual(self, description : str, expected : float, actual : float, places : int = 7, msg : str|None = None) -> None:
        log_input_expected_result(description, expected, actual)
        self.assertAlmostEqual(expected, actual, places=places, msg=msg)

    def assertLoggedTrue(self, description : str, value : Any, msg : str|None = None) -> None:
        log_input_expected_result(description, True, value)
        self.assertTrue(value, msg)

    def assertLoggedFalse(self, description : str, value : Any, msg : str|None = None) -> None:
        log_input_expected_result(description, False, value)
        self.assertFalse(value, msg)

    def assertLoggedIs(self, description : str, expected : Any, actual : Any, msg : str|None = None) -> None:
        log_input_expected_result(description, expected, actual)
        self.assertIs(expected, actual, msg)

    def assertLoggedIsNone(self, description : str, value : Any, msg : str|None = None) -> None:
        log_input_expected_result(description, None, value)
        self.assertIsNone(value, msg)

    def assertLoggedIsNotNone(self, description : str, value : Any, msg : str|None = None) -> None:
        log_input_expected_result(description, "not None", value)
        self.assertIsNotNone(value, msg)

    def assertLoggedIsInstance(self, description : str, value : Any, expected_type : type, msg : str|None = None) -> None:
        log_input_expected_result(description, expected_type.__name__, type(value).__name__)
        self.assertIsInstance(value, expected_type, msg)

    def assertLoggedIn(self, description : str, member : Any, container : Container, msg : str|None = None) -> None:
        log_input_expected_result(description, member, container)
        self.assertIn(member, container, msg)

    def assertLoggedNotIn(self, description : str, member : Any, container : Container, msg : str|None = None) -> None:
        log_input_expected_result(description, f"not {member}", container)
        self.assertNotIn(member, container, msg)

    def assertLoggedSequenceEqual(self, description : str, expected : Sequence, actual : Sequence, msg : str|None = None) -> None:
        log_input_expected_result(description, expected, actual)
        self.assertSequenceEqual(expected, actual, msg)

    def assertLoggedGreater(self, description : str, first : Any, second : Any, msg : str|None = None) -> None:
        log_input_expected_result(description, f"> {second}", first)
        self.assertGreater(first, second, msg)

    def assertLoggedGreaterEqual(self, description : str, first : Any, second : Any, msg : str|None = None) -> None:
        log_input_expected_result(description, f">= {second}", first)
        self.assertGreaterEqual(first, second, msg)

    def assertLoggedLess(self, description : str, first : Any, second : Any, msg : str|None = None) -> None:
        log_input_expected_result(description, f"< {second}", first)
        self.assertLess(first, second, msg)

    def assertLoggedLessEqual(self, description : str, first : Any, second : Any, msg : str|None = None) -> None:
        log_input_expected_result(description, f"<= {second}", first)
        self.assertLessEqual(first, second, msg)

class LoggedAsyncTestCase(LoggedTestCase, unittest.IsolatedAsyncioTestCase):
    """
    LoggedTestCase for coroutine test methods
    """
    pass
