"""
PyCaption - Caption Ingestion and Playback Sync

A Python library for loading timed captions (WebVTT, SRT, ASS/SSA, SBV and JSON),
following a playback position to find the active caption, and splitting long
captions into segments that fit a fixed-size caption box.

Basic Usage
-----------

# Configure options
opts = init_options(auto_segment=True, fixed_height=64, font_size=20, max_width=400)

# Parse captions from a string or file
cues = init_captions(filepath="movie.srt")

# Create a track and follow the playback position
track = init_track(options=opts, on_change=lambda cue, index: print(index, cue))
track.SetCues(cues)
track.UpdateTime(12.5)

# Or load asynchronously from a URL
await track.Load(UrlSource("https://example.com/movie.vtt"))

# Cycle through the segments of a long caption
cycler = SegmentCycler(opts)
cycler.SetCue(track.current_cue)
print(cycler.current_segment_text)
"""
from __future__ import annotations

from collections.abc import Callable, Mapping

from PyCaption.CaptionCue import CaptionCue
from PyCaption.CaptionError import CaptionError, CaptionFormatError, CaptionLoadError
from PyCaption.CaptionEvents import CaptionEvents
from PyCaption.CaptionFormat import CaptionFormat
from PyCaption.CaptionFormatRegistry import AUTO_FORMAT, CaptionFormatRegistry, LoadCaptionFile
from PyCaption.CaptionSegmenter import SegmentCapacity, SegmentCycler, SegmentState, SegmentText
from PyCaption.CaptionSource import CaptionSource, ContentSource, CuesSource, UrlSource
from PyCaption.CaptionTimeline import CaptionTimeline
from PyCaption.CaptionTrack import ChangeCallback, CaptionTrack, TimeProvider
from PyCaption.Helpers import GetInputPath
from PyCaption.Helpers.Time import FormatTimestamp, ParseAssTimestamp, ParseTimelineLine, ParseTimestamp
from PyCaption.Options import Options
from PyCaption.SettingsType import SettingType, SettingsType
from PyCaption.version import __version__


def init_options(**settings: SettingType) -> Options:
    """
    Create and return an :class:`Options` instance for loading and segmenting captions.

    Parameters
    ----------
    **settings : SettingType
        Keyword settings, e.g.

        auto_segment = True,
        fixed_height = 64,
        font_size = 20,
        max_width = "1200px",
        segment_duration = 3000

        See :class:`Options` for available settings.
        Options that are not specified will be assigned default values.

    Returns
    -------
    Options
        An Options instance with the specified configuration.
    """
    return Options(SettingsType(settings))

def init_captions(
    filepath: str|None = None,
    content: str|None = None,
    *,
    format: CaptionFormat|str|None = None,
    options: Options|Mapping[str, SettingType]|None = None,
) -> list[CaptionCue]:
    """
    Parse cues from a caption file or string.

    Parameters
    ----------
    filepath : str|None
        Path to the caption file to load. The format is deduced from the extension unless given.

    content : str|None
        Caption content as a string. The format is detected from the content unless given.

    format : CaptionFormat|str|None
        Format tag such as "srt" or "ass", or "auto" to detect it from the content.

    options : Options or mapping, optional
        Settings such as `preserve_styles`.

    Returns
    -------
    list[CaptionCue] : the parsed cues, sorted by start time.

    Examples
    --------

    cues = init_captions(filepath="movie.ass")

    srt_content = "1\\n00:00:01,000 --> 00:00:03,000\\nHello world"
    cues = init_captions(content=srt_content)
    """
    if filepath and content:
        raise CaptionError("Only one of 'filepath' or 'content' should be provided, not both.")

    options = options if isinstance(options, Options) else Options(options)

    if filepath:
        path = GetInputPath(filepath) or filepath
        return LoadCaptionFile(path, format, preserve_styles=options.preserve_styles)

    if content:
        return CaptionFormatRegistry.parse_string(content, format or AUTO_FORMAT, preserve_styles=options.preserve_styles)

    return []

def init_track(
    options: Options|Mapping[str, SettingType]|None = None,
    *,
    current_time: TimeProvider|None = None,
    on_change: ChangeCallback|None = None,
    connect_loggers: bool = True,
) -> CaptionTrack:
    """
    Create a :class:`CaptionTrack` ready to load captions.

    Parameters
    ----------
    options : Options or mapping, optional
        Track settings, e.g. `fetch_timeout`, `default_format`.

    current_time : callable, optional
        Returns the current playback time in seconds (or None), used to synchronise after a load.

    on_change : callable, optional
        Called with (cue, index) each time the active cue changes.

    connect_loggers : bool
        If True (default), route the track's warning and info signals to the logging module.
    """
    options = options if isinstance(options, Options) else Options(options)
    track = CaptionTrack(options, current_time=current_time, on_change=on_change)
    if connect_loggers:
        track.events.connect_default_loggers()
    return track

__all__ = [
    '__version__',
    'AUTO_FORMAT',
    'CaptionCue',
    'CaptionError',
    'CaptionEvents',
    'CaptionFormat',
    'CaptionFormatError',
    'CaptionFormatRegistry',
    'CaptionLoadError',
    'CaptionSource',
    'CaptionTimeline',
    'CaptionTrack',
    'ContentSource',
    'CuesSource',
    'FormatTimestamp',
    'LoadCaptionFile',
    'Options',
    'ParseAssTimestamp',
    'ParseTimelineLine',
    'ParseTimestamp',
    'SegmentCapacity',
    'SegmentCycler',
    'SegmentState',
    'SegmentText',
    'SettingsType',
    'UrlSource',
    'init_captions',
    'init_options',
    'init_track',
]
