from __future__ import annotations

import logging
import math
import threading
from enum import Enum

import regex

from PyCaption.CaptionCue import CaptionCue
from PyCaption.CaptionEvents import CaptionEvents
from PyCaption.Helpers.Text import EstimateTextWidth, ParseSizeValue, SplitByWidth
from PyCaption.Helpers.Timer import StartRepeatingTimer, TimerFactory, TimerHandle
from PyCaption.Options import DEFAULT_FONT_SIZE, DEFAULT_LINE_HEIGHT, DEFAULT_MAX_WIDTH, Options

# A run of text followed by its sentence-ending punctuation, or trailing text with none
_SENTENCE_PATTERN = regex.compile(r'[^。！？.!?]*[。！？.!?]+|[^。！？.!?]+')

_EPSILON = 1e-9

def SegmentCapacity(height : float, font_size : float, max_width : float, line_height : float = DEFAULT_LINE_HEIGHT) -> float:
    """
    Number of width units (one CJK character each) that fit in a box of the given pixel size
    """
    if height <= 0 or font_size <= 0 or max_width <= 0:
        return 0

    max_lines = math.floor(height / (font_size * line_height) + _EPSILON)
    chars_per_line = math.floor(max_width / font_size + _EPSILON)
    return max_lines * chars_per_line

def SplitSentences(text : str) -> list[str]:
    """
    Split text after sentence-ending punctuation, keeping the punctuation with its sentence
    """
    return _SENTENCE_PATTERN.findall(text)

def SegmentText(text : str, auto_segment : bool, fixed_height : float|str|None, font_size : float|str|None = DEFAULT_FONT_SIZE,
                max_width : float|str|None = DEFAULT_MAX_WIDTH, line_height : float = DEFAULT_LINE_HEIGHT) -> list[str]:
    """
    Split text into segments that each fit a fixed-height caption box.

    Sentences are packed greedily into segments. A sentence too long for a segment
    on its own is split by width wherever it overflows. Text that already fits,
    or that is not being segmented, is returned as a single segment.
    """
    height = ParseSizeValue(fixed_height, 0.0)
    if not auto_segment or height <= 0:
        return [text]

    font_size = ParseSizeValue(font_size, DEFAULT_FONT_SIZE)
    max_width = ParseSizeValue(max_width, DEFAULT_MAX_WIDTH)
    capacity = SegmentCapacity(height, font_size, max_width, line_height)

    if capacity <= 0:
        logging.debug(f"Caption box {height}px high cannot hold a line at font size {font_size}, not segmenting")
        return [text]

    if EstimateTextWidth(text) <= capacity:
        return [text]

    segments : list[str] = []
    current = ''

    for sentence in SplitSentences(text):
        if EstimateTextWidth(current + sentence) <= capacity:
            current += sentence
            continue

        if current:
            segments.append(current.strip())

        if EstimateTextWidth(sentence) > capacity:
            pieces = SplitByWidth(sentence, capacity)
            segments.extend(piece.strip() for piece in pieces[:-1])
            current = pieces[-1]
        else:
            current = sentence

    if current:
        segments.append(current.strip())

    return [ segment for segment in segments if segment ]

class SegmentState(Enum):
    IDLE = 'idle'
    CYCLING = 'cycling'

class SegmentCycler:
    """
    Cycles through the segments of the active caption on a repeating timer.

    The cycler is a small state machine. It is CYCLING while segmentation is
    enabled, the caption is visible and the text has more than one segment,
    and IDLE otherwise. Changing the text or cue recomputes the segments,
    resets to the first segment and restarts the timer.

    Each segment is shown for the cue duration divided by the segment count,
    bounded below by min_segment_duration and above by twice segment_duration.
    Without a cue, segments are shown for segment_duration.

    Hosts may supply a timer_factory to drive the cycler from their own event loop.
    """
    def __init__(self, options : Options|None = None, timer_factory : TimerFactory|None = None, visible : bool = True):
        self.options : Options = options or Options()
        self.timer_factory : TimerFactory = timer_factory or StartRepeatingTimer
        self.events = CaptionEvents()

        self._lock = threading.RLock()
        self._text : str = ''
        self._cue : CaptionCue|None = None
        self._visible : bool = visible
        self._segments : list[str] = ['']
        self._index : int = 0
        self._timer : TimerHandle|None = None
        self._generation : int = 0
        self._closed : bool = False

    @property
    def segments(self) -> list[str]:
        with self._lock:
            return list(self._segments)

    @property
    def segment_count(self) -> int:
        with self._lock:
            return len(self._segments)

    @property
    def current_segment_index(self) -> int:
        with self._lock:
            return self._index

    @property
    def current_segment_text(self) -> str:
        with self._lock:
            if not self._segments:
                return ''
            return self._segments[min(self._index, len(self._segments) - 1)]

    @property
    def state(self) -> SegmentState:
        with self._lock:
            return SegmentState.CYCLING if self._timer is not None else SegmentState.IDLE

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def segment_duration(self) -> float:
        """
        How long each segment is shown, in milliseconds
        """
        with self._lock:
            default = self.options.segment_duration
            count = len(self._segments)
            if self._cue is None or count <= 1:
                return default

            average = self._cue.duration * 1000 / count
            if average < self.options.min_segment_duration:
                return max(default, self.options.min_segment_duration)

            return min(average, default * 2)

    def SetText(self, text : str|None, cue : CaptionCue|None = None) -> None:
        """
        Show new caption text, restarting from the first segment
        """
        with self._lock:
            self._text = text or ''
            self._cue = cue
            self._Resegment()

    def SetCue(self, cue : CaptionCue|None) -> None:
        """ Show the text of a cue, or nothing """
        self.SetText(cue.text if cue else '', cue)

    def SetVisible(self, visible : bool) -> None:
        with self._lock:
            if visible == self._visible:
                return
            self._visible = visible
            self._Reconcile()

    def SetOptions(self, options : Options) -> None:
        """ Replace the options and resegment the current text """
        with self._lock:
            self.options = options
            self._Resegment()

    def Close(self) -> None:
        """
        Stop cycling permanently. No tick is delivered after Close returns.
        """
        with self._lock:
            self._closed = True
            self._CancelTimer()

    def _Resegment(self) -> None:
        self._segments = SegmentText(self._text, self.options.auto_segment, self.options.fixed_height,
                                     self.options.font_size, self.options.max_width, self.options.line_height)
        self._index = 0
        self.events.segment_changed.send(self, index=0, text=self.current_segment_text)
        self._RestartTimer()

    def _Reconcile(self) -> None:
        """
        Start or stop the timer to match the current visibility and segments
        """
        if self._ShouldCycle():
            if self._timer is None:
                self._RestartTimer()
        else:
            self._CancelTimer()

    def _ShouldCycle(self) -> bool:
        return not self._closed and self._visible and self.options.auto_segment and len(self._segments) > 1

    def _RestartTimer(self) -> None:
        self._CancelTimer()
        if not self._ShouldCycle():
            return

        generation = self._generation
        interval = self.segment_duration / 1000
        logging.debug(f"Cycling {len(self._segments)} caption segments every {interval:.2f}s")
        self._timer = self.timer_factory(interval, lambda: self._Tick(generation))

    def _CancelTimer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _Tick(self, generation : int) -> None:
        with self._lock:
            if self._closed or generation != self._generation:
                return

            count = len(self._segments)
            if count <= 1:
                self._CancelTimer()
                self._SetIndex(0)
                return

            self._SetIndex((self._index + 1) % count)

    def _SetIndex(self, index : int) -> None:
        if index != self._index:
            self._index = index
            self.events.segment_changed.send(self, index=index, text=self.current_segment_text)
