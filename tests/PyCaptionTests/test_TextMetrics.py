import unittest

from PyCaption.Helpers import IterateBlocks, NormaliseLineEndings
from PyCaption.Helpers.Text import (
    EstimateTextWidth,
    GetCharWidth,
    IsCJKCharacter,
    ParseSizeValue,
    SplitByWidth,
)
from PyCaption.Helpers.TestCases import LoggedTestCase

class TestTextMetrics(LoggedTestCase):
    def test_CharWidths(self):
        cases = [
            ("中", 1.0),
            ("。", 1.0),
            ("！", 1.0),
            ("Ａ", 1.0),
            (" ", 0.25),
            ("\t", 0.25),
            ("a", 0.5),
            ("1", 0.5),
            (".", 0.5),
            ("é", 0.5),
        ]
        for char, expected in cases:
            with self.subTest(char=char):
                self.assertLoggedEqual(repr(char), expected, GetCharWidth(char))

    def test_IsCJKCharacter(self):
        self.assertLoggedTrue("ideograph", IsCJKCharacter("字"))
        self.assertLoggedFalse("latin", IsCJKCharacter("z"))

    def test_EstimateTextWidth(self):
        self.assertLoggedEqual("empty", 0, EstimateTextWidth(""))
        self.assertLoggedEqual("latin", 2.5, EstimateTextWidth("Hello"))
        self.assertLoggedEqual("mixed", 1.0 + 1.0 + 0.25 + 0.5 + 0.5, EstimateTextWidth("你好 ok"))

    def test_SplitByWidth(self):
        self.assertLoggedEqual("fits", ["abcd"], SplitByWidth("abcd", 2))

        pieces = SplitByWidth("abcdefg", 1.5)
        self.assertLoggedSequenceEqual("latin pieces", ["abc", "def", "g"], pieces)

        pieces = SplitByWidth("一二三四五", 2)
        self.assertLoggedSequenceEqual("cjk pieces", ["一二", "三四", "五"], pieces)

        pieces = SplitByWidth("一二", 0.5)
        self.assertLoggedSequenceEqual("wider than max still progresses", ["一", "二"], pieces)

    def test_ParseSizeValue(self):
        cases = [
            (1200, 1200.0),
            (12.5, 12.5),
            ("1200px", 1200.0),
            ("  64 ", 64.0),
            ("1.5em", 1.5),
            ("auto", 20.0),
            ("", 20.0),
            (None, 20.0),
            (True, 20.0),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertLoggedEqual(repr(value), expected, ParseSizeValue(value, 20.0))

    def test_NormaliseLineEndings(self):
        self.assertLoggedEqual("crlf and cr", "a\nb\nc", NormaliseLineEndings("a\r\nb\rc"))
        self.assertLoggedEqual("bom", "x", NormaliseLineEndings("\ufeffx"))

    def test_IterateBlocks(self):
        blocks = list(IterateBlocks(["", "a", "b  ", "", "", "c", "   ", "d"]))
        self.assertLoggedSequenceEqual("blocks", [["a", "b"], ["c"], ["d"]], blocks)

if __name__ == '__main__':
    unittest.main()
