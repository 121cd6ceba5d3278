import unittest

from PyCaption.CaptionCue import CaptionCue
from PyCaption.Formats.SrtFormat import compose, parse
from PyCaption.Helpers.TestCases import LoggedTestCase

class TestSrtFormat(LoggedTestCase):
    sample = (
        "1\n"
        "00:00:01,000 --> 00:00:04,500\n"
        "First subtitle\n"
        "\n"
        "2\n"
        "00:00:05,000 --> 00:00:08,250\n"
        "Second subtitle\n"
        "with two lines\n"
        "\n"
        "3\n"
        "00:01:00,000 --> 00:01:02,000\n"
        "Third subtitle\n"
    )

    def test_ParseSample(self):
        cues = parse(self.sample)
        self.assertLoggedEqual("cue count", 3, len(cues))
        self.assertLoggedSequenceEqual("ids", ["1", "2", "3"], [ cue.id for cue in cues ])
        self.assertLoggedAlmostEqual("first end", 4.5, cues[0].end_time)
        self.assertLoggedEqual("multi-line text", "Second subtitle\nwith two lines", cues[1].text)
        self.assertLoggedAlmostEqual("second end", 8.25, cues[1].end_time)
        self.assertLoggedEqual("third start", 60.0, cues[2].start_time)

    def test_MinimalEntry(self):
        cues = parse("1\n00:00:00,000 --> 00:00:05,000\nHi")
        self.assertLoggedEqual("cue count", 1, len(cues))
        cue = cues[0]
        self.assertLoggedEqual("id", "1", cue.id)
        self.assertLoggedEqual("start", 0.0, cue.start_time)
        self.assertLoggedEqual("end", 5.0, cue.end_time)
        self.assertLoggedEqual("text", "Hi", cue.text)

    def test_CRLF(self):
        cues = parse(self.sample.replace('\n', '\r\n'))
        self.assertLoggedEqual("cue count", 3, len(cues))
        self.assertLoggedEqual("text has no carriage return", "Second subtitle\nwith two lines", cues[1].text)

    def test_MalformedSequenceLineIsSkipped(self):
        content = (
            "garbage line\n"
            "1\n"
            "00:00:01,000 --> 00:00:02,000\n"
            "Kept\n"
            "\n"
            "x\n"
            "00:00:03,000 --> 00:00:04,000\n"
            "Orphaned text\n"
            "\n"
            "3\n"
            "not a timeline\n"
            "\n"
            "4\n"
            "00:00:05,000 --> 00:00:06,000\n"
            "Also kept\n"
        )
        cues = parse(content)
        self.assertLoggedSequenceEqual("texts", ["Kept", "Also kept"], [ cue.text for cue in cues ])
        self.assertLoggedSequenceEqual("ids", ["1", "4"], [ cue.id for cue in cues ])

    def test_TimelineCoordinatesIgnored(self):
        cues = parse("1\n00:00:01,000 --> 00:00:02,000 X1:100 X2:200 Y1:10 Y2:20\nPositioned")
        self.assertLoggedEqual("cue count", 1, len(cues))
        self.assertLoggedEqual("text", "Positioned", cues[0].text)
        self.assertLoggedEqual("end", 2.0, cues[0].end_time)

    def test_EntriesWithoutBlankLine(self):
        content = (
            "1\n"
            "00:00:01,000 --> 00:00:02,000\n"
            "Run on\n"
            "2\n"
            "00:00:03,000 --> 00:00:04,000\n"
            "Next entry\n"
        )
        cues = parse(content)
        self.assertLoggedSequenceEqual("texts", ["Run on", "Next entry"], [ cue.text for cue in cues ])
        self.assertLoggedSequenceEqual("ids", ["1", "2"], [ cue.id for cue in cues ])

    def test_DotDecimalAccepted(self):
        cues = parse("1\n00:00:01.500 --> 00:00:02.500\nDots")
        self.assertLoggedAlmostEqual("start", 1.5, cues[0].start_time)

    def test_EmptyContent(self):
        self.assertLoggedEqual("empty", [], parse(""))
        self.assertLoggedEqual("whitespace", [], parse("\n\n  \n"))

    def test_Compose(self):
        cues = [
            CaptionCue(1.0, 2.5, "Hello", id="7"),
            CaptionCue(3.0, 4.0, "Second\nline"),
        ]
        text = compose(cues)
        self.assertLoggedIn("first timeline", "00:00:01,000 --> 00:00:02,500", text)
        self.assertLoggedIn("renumbered", "1\n00:00:01,000", text)
        self.assertLoggedIn("second entry", "2\n00:00:03,000 --> 00:00:04,000\nSecond\nline", text)

        reparsed = parse(text)
        self.assertLoggedSequenceEqual("reparsed texts", ["Hello", "Second\nline"], [ cue.text for cue in reparsed ])

if __name__ == '__main__':
    unittest.main()
