import unittest

import pysubs2

from PyCaption.Helpers.Color import Color, ParseAssColor
from PyCaption.Helpers.TestCases import LoggedTestCase

class TestColor(LoggedTestCase):
    def test_FromAss(self):
        cases = [
            ("&H00FFFFFF", Color(255, 255, 255, 0)),
            ("&HFFFFFF", Color(255, 255, 255)),
            ("&H0000FF&", Color(255, 0, 0)),
            ("&HFF0000", Color(0, 0, 255)),
            ("&H80112233", Color(0x33, 0x22, 0x11, 0x80)),
            ("H00FF00", Color(0, 255, 0)),
            ("&HFF&", Color(255, 0, 0)),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertLoggedEqual(value, expected, Color.from_ass(value))

    def test_InvalidValues(self):
        for value in [None, "", "red", "&HGG0000", "&H123456789"]:
            with self.subTest(value=value):
                self.assertLoggedIsNone(repr(value), Color.from_ass(value))

    def test_Pysubs2Conversion(self):
        color = Color.from_pysubs2(pysubs2.Color(10, 20, 30, 40))
        self.assertLoggedEqual("from pysubs2", Color(10, 20, 30, 40), color)
        self.assertLoggedEqual("without alpha", Color(10, 20, 30), Color.from_pysubs2(pysubs2.Color(10, 20, 30, 40), has_alpha=False))
        self.assertLoggedEqual("to pysubs2", pysubs2.Color(1, 2, 3, 0), Color(1, 2, 3).to_pysubs2())

    def test_ToCss(self):
        self.assertLoggedEqual("opaque hex", "#FF8000", Color(255, 128, 0).to_css())
        self.assertLoggedEqual("alpha 00 is opaque", "rgba(255, 255, 255, 1.00)", Color(255, 255, 255, 0).to_css())
        self.assertLoggedEqual("alpha FF is transparent", "rgba(0, 0, 0, 0.00)", Color(0, 0, 0, 255).to_css())
        self.assertLoggedEqual("half transparent", "rgba(1, 2, 3, 0.50)", Color(1, 2, 3, 128).to_css())

    def test_Opacity(self):
        self.assertLoggedEqual("no alpha", 1.0, Color(0, 0, 0).opacity)
        self.assertLoggedAlmostEqual("alpha 0x40", (255 - 64) / 255, Color(0, 0, 0, 64).opacity)

    def test_Clamping(self):
        color = Color(300, -5, 128, 999)
        self.assertLoggedEqual("clamped", (255, 0, 128, 255), (color.r, color.g, color.b, color.a))

    def test_ParseAssColor(self):
        self.assertLoggedEqual("bgr", "#563412", ParseAssColor("&H123456&"))
        self.assertLoggedEqual("abgr", "rgba(86, 52, 18, 1.00)", ParseAssColor("&H00123456"))
        self.assertLoggedIsNone("invalid", ParseAssColor("not a color"))

if __name__ == '__main__':
    unittest.main()
