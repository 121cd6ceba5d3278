from __future__ import annotations

from enum import Enum

from PyCaption.CaptionError import CaptionFormatError

class CaptionFormat(str, Enum):
    """
    Supported caption grammars. The value is the canonical format tag.
    """
    VTT = 'vtt'
    SRT = 'srt'
    ASS = 'ass'
    SBV = 'sbv'
    JSON = 'json'

    @classmethod
    def from_value(cls, value : CaptionFormat|str) -> CaptionFormat:
        """
        Resolve a format from an enum member or a case-insensitive tag or extension, e.g. 'SRT', '.ssa'
        """
        if isinstance(value, CaptionFormat):
            return value

        tag = str(value or '').strip().lower().lstrip('.')
        if tag == 'ssa':
            tag = 'ass'

        try:
            return cls(tag)
        except ValueError:
            raise CaptionFormatError(f"Unknown caption format: {value}. Available formats: {', '.join(f.value for f in cls)}")

    def __str__(self) -> str:
        return self.value
