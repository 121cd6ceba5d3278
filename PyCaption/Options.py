from __future__ import annotations

import logging
from collections.abc import Mapping
from copy import deepcopy
from typing import Any

from PyCaption.CaptionFormat import CaptionFormat
from PyCaption.Helpers.Text import ParseSizeValue
from PyCaption.SettingsType import GetEnvironmentSetting, SettingType, SettingsType

DEFAULT_LINE_HEIGHT = 1.6
DEFAULT_FONT_SIZE = 20.0
DEFAULT_MAX_WIDTH = 1200.0

default_settings : dict[str, SettingType] = {
    'auto_segment': False,
    'fixed_height': None,
    'font_size': DEFAULT_FONT_SIZE,
    'max_width': DEFAULT_MAX_WIDTH,
    'line_height': DEFAULT_LINE_HEIGHT,
    'segment_duration': GetEnvironmentSetting('CAPTION_SEGMENT_DURATION', 3000),
    'min_segment_duration': 1000,
    'preserve_styles': True,
    'fetch_timeout': GetEnvironmentSetting('CAPTION_FETCH_TIMEOUT', 30.0),
    'default_format': GetEnvironmentSetting('CAPTION_DEFAULT_FORMAT', CaptionFormat.VTT.value),
}

class Options:
    """
    Settings for loading captions and segmenting long cues.

    Durations are in milliseconds except fetch_timeout, which is in seconds.
    Sizes are pixels, and may be given as numbers or strings such as "1200px".
    """
    def __init__(self, settings : Mapping[str, SettingType]|None = None, **kwargs : SettingType):
        self.settings : SettingsType = SettingsType(deepcopy(default_settings))
        if settings:
            self.update(settings)
        if kwargs:
            self.update(kwargs)

    def get(self, key : str, default : Any = None) -> Any:
        return self.settings.get(key, default)

    def set(self, key : str, value : SettingType) -> None:
        """ Set a single option. Unlike update, None is stored (e.g. to clear fixed_height) """
        self.settings[key] = value

    def update(self, settings : Mapping[str, SettingType]) -> None:
        """ Update options, ignoring None values """
        unknown = [ key for key in settings if key not in default_settings ]
        if unknown:
            logging.debug(f"Unrecognised caption options: {', '.join(unknown)}")
        self.settings.update({ key: value for key, value in settings.items() if value is not None })

    @property
    def auto_segment(self) -> bool:
        return self.settings.get_bool('auto_segment')

    @property
    def fixed_height(self) -> float|None:
        value = self.settings.get('fixed_height')
        if value is None or value == '':
            return None
        height = ParseSizeValue(value, 0.0)
        return height if height > 0 else None

    @property
    def font_size(self) -> float:
        size = ParseSizeValue(self.settings.get('font_size'), DEFAULT_FONT_SIZE)
        return size if size > 0 else DEFAULT_FONT_SIZE

    @property
    def max_width(self) -> float:
        return ParseSizeValue(self.settings.get('max_width'), DEFAULT_MAX_WIDTH)

    @property
    def line_height(self) -> float:
        return self.settings.get_float('line_height', DEFAULT_LINE_HEIGHT) or DEFAULT_LINE_HEIGHT

    @property
    def segment_duration(self) -> float:
        return self.settings.get_float('segment_duration', 3000) or 3000.0

    @property
    def min_segment_duration(self) -> float:
        return self.settings.get_float('min_segment_duration', 1000) or 0.0

    @property
    def preserve_styles(self) -> bool:
        return self.settings.get_bool('preserve_styles', True)

    @property
    def fetch_timeout(self) -> float:
        return self.settings.get_float('fetch_timeout', 30.0) or 30.0

    @property
    def default_format(self) -> CaptionFormat:
        return CaptionFormat.from_value(self.settings.get_str('default_format') or CaptionFormat.VTT)

    def __repr__(self) -> str:
        return f"Options({dict(self.settings)!r})"
