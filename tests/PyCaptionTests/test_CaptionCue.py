import unittest

from PyCaption.CaptionCue import CaptionCue
from PyCaption.CaptionFormat import CaptionFormat
from PyCaption.CaptionError import CaptionFormatError
from PyCaption.Helpers.TestCases import LoggedTestCase

class TestCaptionCue(LoggedTestCase):
    def test_Contains(self):
        cue = CaptionCue(1.0, 2.0, "text")
        self.assertLoggedTrue("start", cue.Contains(1.0))
        self.assertLoggedTrue("middle", cue.Contains(1.5))
        self.assertLoggedFalse("end is exclusive", cue.Contains(2.0))
        self.assertLoggedFalse("before", cue.Contains(0.5))
        self.assertLoggedFalse("zero length", CaptionCue(1.0, 1.0, "x").Contains(1.0))

    def test_Validation(self):
        with self.assertRaises(ValueError):
            CaptionCue(2.0, 1.0, "backwards")
        with self.assertRaises(ValueError):
            CaptionCue(-1.0, 1.0, "negative")

    def test_ToDict(self):
        cue = CaptionCue(1.0, 2.5, "Hello", id="7", data={"speaker": "Ann"})
        expected = {"id": "7", "startTime": 1.0, "endTime": 2.5, "text": "Hello", "data": {"speaker": "Ann"}}
        self.assertLoggedEqual("full", expected, cue.to_dict())
        self.assertLoggedEqual("minimal", {"startTime": 0, "endTime": 1, "text": "x"}, CaptionCue(0, 1, "x").to_dict())

    def test_FromDict(self):
        cue = CaptionCue.from_dict({"id": 3, "startTime": "1.5", "endTime": 2, "text": "Hi"})
        self.assertLoggedEqual("id", "3", cue.id)
        self.assertLoggedEqual("start", 1.5, cue.start_time)
        self.assertLoggedEqual("duration", 0.5, cue.duration)
        self.assertLoggedIsNone("data", cue.data)

    def test_Str(self):
        self.assertLoggedEqual("str", "1: [0.000 -> 1.500] Hi", str(CaptionCue(0, 1.5, "Hi", id="1")))

class TestCaptionFormat(LoggedTestCase):
    def test_FromValue(self):
        cases = [ ("vtt", CaptionFormat.VTT), ("SRT", CaptionFormat.SRT), (".ass", CaptionFormat.ASS),
                  ("ssa", CaptionFormat.ASS), ("Sbv", CaptionFormat.SBV), (CaptionFormat.JSON, CaptionFormat.JSON) ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertLoggedEqual(str(value), expected, CaptionFormat.from_value(value))

    def test_Unknown(self):
        with self.assertRaises(CaptionFormatError):
            CaptionFormat.from_value("txt")

if __name__ == '__main__':
    unittest.main()
