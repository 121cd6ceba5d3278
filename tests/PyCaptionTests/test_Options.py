import unittest

from PyCaption.CaptionFormat import CaptionFormat
from PyCaption.CaptionError import CaptionFormatError
from PyCaption.Helpers.TestCases import LoggedTestCase
from PyCaption.Options import Options, default_settings
from PyCaption.SettingsType import SettingsError, SettingsType

class TestOptions(LoggedTestCase):
    def test_Defaults(self):
        options = Options()
        self.assertLoggedFalse("auto_segment", options.auto_segment)
        self.assertLoggedIsNone("fixed_height", options.fixed_height)
        self.assertLoggedEqual("font_size", 20.0, options.font_size)
        self.assertLoggedEqual("max_width", 1200.0, options.max_width)
        self.assertLoggedEqual("line_height", 1.6, options.line_height)
        self.assertLoggedEqual("min_segment_duration", 1000.0, options.min_segment_duration)
        self.assertLoggedTrue("preserve_styles", options.preserve_styles)
        self.assertLoggedEqual("default_format", CaptionFormat(default_settings['default_format']), options.default_format)

    def test_SettingsAndKeywords(self):
        options = Options({'font_size': 24, 'auto_segment': True}, fixed_height="96px", max_width="800px")
        self.assertLoggedEqual("font_size", 24.0, options.font_size)
        self.assertLoggedTrue("auto_segment", options.auto_segment)
        self.assertLoggedEqual("fixed_height", 96.0, options.fixed_height)
        self.assertLoggedEqual("max_width", 800.0, options.max_width)

    def test_UpdateIgnoresNone(self):
        options = Options(font_size=30)
        options.update({'font_size': None, 'segment_duration': 1500})
        self.assertLoggedEqual("font_size kept", 30.0, options.font_size)
        self.assertLoggedEqual("segment_duration", 1500.0, options.segment_duration)

    def test_SetClearsValue(self):
        options = Options(fixed_height=64)
        options.set('fixed_height', None)
        self.assertLoggedIsNone("fixed_height cleared", options.fixed_height)

    def test_InvalidSizes(self):
        options = Options(fixed_height=0, font_size="big")
        self.assertLoggedIsNone("zero height", options.fixed_height)
        self.assertLoggedEqual("unparseable font size", 20.0, options.font_size)

    def test_DefaultFormat(self):
        self.assertLoggedEqual("ssa tag", CaptionFormat.ASS, Options(default_format="SSA").default_format)
        with self.assertRaises(CaptionFormatError):
            _ = Options(default_format="docx").default_format

    def test_OptionsAreIndependent(self):
        first = Options()
        second = Options(font_size=40)
        self.assertLoggedEqual("first unaffected", 20.0, first.font_size)
        self.assertLoggedEqual("second", 40.0, second.font_size)

class TestSettingsType(LoggedTestCase):
    def test_TypedGetters(self):
        settings = SettingsType({'flag': 'yes', 'count': '3', 'ratio': '0.5', 'name': 12, 'off': 0})
        self.assertLoggedTrue("bool from string", settings.get_bool('flag'))
        self.assertLoggedFalse("bool from int", settings.get_bool('off'))
        self.assertLoggedEqual("int from string", 3, settings.get_int('count'))
        self.assertLoggedEqual("float from string", 0.5, settings.get_float('ratio'))
        self.assertLoggedEqual("str from int", "12", settings.get_str('name'))
        self.assertLoggedIsNone("missing", settings.get_float('missing'))

    def test_InvalidValues(self):
        settings = SettingsType({'flag': 'maybe', 'count': 'three'})
        with self.assertRaises(SettingsError):
            settings.get_bool('flag')
        with self.assertRaises(SettingsError):
            settings.get_int('count')

if __name__ == '__main__':
    unittest.main()
