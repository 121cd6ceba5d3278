from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeAlias

from PyCaption.CaptionCue import CaptionCue
from PyCaption.CaptionFormat import CaptionFormat

@dataclass(frozen=True)
class UrlSource:
    """ Captions fetched from a URL. The format is sniffed from the extension unless given. """
    url : str
    format : CaptionFormat|str|None = None

@dataclass(frozen=True)
class ContentSource:
    """ Caption text already in memory, in a known format """
    content : str
    format : CaptionFormat|str = CaptionFormat.VTT

@dataclass(frozen=True)
class CuesSource:
    """ Pre-built cues, used as they are """
    cues : Sequence[CaptionCue]

CaptionSource : TypeAlias = UrlSource | ContentSource | CuesSource
