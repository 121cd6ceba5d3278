from __future__ import annotations

import logging
from bisect import bisect_right
from collections.abc import Iterator, Sequence
from itertools import accumulate

from PyCaption.CaptionCue import CaptionCue

def IsSorted(cues : Sequence[CaptionCue]) -> bool:
    return all(cues[i].start_time <= cues[i + 1].start_time for i in range(len(cues) - 1))

def SortCues(cues : Sequence[CaptionCue]) -> list[CaptionCue]:
    """
    Return the cues ordered by start time, preserving the original order of cues that start together
    """
    if IsSorted(cues):
        return list(cues)

    logging.debug("Sorting cues by start time")
    return sorted(cues, key=lambda cue: cue.start_time)

class CaptionTimeline:
    """
    Immutable, sorted sequence of cues with a logarithmic active-cue search.

    The active cue at time t is the lowest-index cue with start_time <= t < end_time,
    which is exactly what a linear scan would return, overlaps included.

    Two arrays support the search: the start times, and a running maximum of end
    times. Cues before the first index whose running maximum exceeds t have all
    ended by t, so that index is the only candidate.
    """
    def __init__(self, cues : Sequence[CaptionCue]|None = None):
        self._cues : list[CaptionCue] = SortCues(cues or [])
        self._starts : list[float] = [ cue.start_time for cue in self._cues ]
        self._max_ends : list[float] = list(accumulate((cue.end_time for cue in self._cues), max))

    @property
    def cues(self) -> list[CaptionCue]:
        return self._cues

    def __len__(self) -> int:
        return len(self._cues)

    def __getitem__(self, index : int) -> CaptionCue:
        return self._cues[index]

    def __iter__(self) -> Iterator[CaptionCue]:
        return iter(self._cues)

    def FindIndex(self, time : float) -> int:
        """
        Binary search for the active cue index at time, or -1 if no cue is active
        """
        started = bisect_right(self._starts, time)
        if started == 0:
            return -1

        candidate = bisect_right(self._max_ends, time)
        return candidate if candidate < started else -1

    def FindIndexFrom(self, time : float, hint : int) -> int:
        """
        Find the active cue index, checking the hint and the cue after it before searching.

        Playback time mostly moves forward, so the previously active cue or its
        successor is usually the answer.
        """
        if 0 <= hint < len(self._cues):
            if self._is_first_match(hint, time):
                return hint

            if hint + 1 < len(self._cues) and self._is_first_match(hint + 1, time):
                return hint + 1

        return self.FindIndex(time)

    def LinearScan(self, time : float) -> int:
        """
        Reference implementation: the first cue containing time, or -1
        """
        return next((index for index, cue in enumerate(self._cues) if cue.Contains(time)), -1)

    def _is_first_match(self, index : int, time : float) -> bool:
        """
        True if the cue at index contains time and no earlier cue does
        """
        if not self._cues[index].Contains(time):
            return False
        return index == 0 or self._max_ends[index - 1] <= time
