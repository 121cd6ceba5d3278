from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

@dataclass(frozen=True)
class CaptionCue:
    """
    A single timed caption entry.

    Times are float seconds. A cue is active for `start_time <= t < end_time`,
    so a zero-length cue is never active and abutting cues never overlap.

    Cues are immutable: parsers create them, tracks hold them, and segmentation
    only ever reads their text.
    """
    start_time : float
    end_time : float
    text : str
    id : str|None = None
    data : dict[str, Any]|None = field(default=None, hash=False)

    def __post_init__(self):
        if self.start_time < 0 or self.end_time < 0:
            raise ValueError(f"Cue times must be non-negative ({self.start_time} -> {self.end_time})")
        if self.start_time > self.end_time:
            raise ValueError(f"Cue starts after it ends ({self.start_time} -> {self.end_time})")

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def Contains(self, time : float) -> bool:
        """ True if the cue should be visible at the given time """
        return self.start_time <= time < self.end_time

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to the external cue shape, {id?, startTime, endTime, text, data?}
        """
        result : dict[str, Any] = {}
        if self.id is not None:
            result['id'] = self.id
        result['startTime'] = self.start_time
        result['endTime'] = self.end_time
        result['text'] = self.text
        if self.data is not None:
            result['data'] = self.data
        return result

    @classmethod
    def from_dict(cls, values : Mapping[str, Any]) -> CaptionCue:
        """
        Create a cue from the external shape. Raises ValueError or KeyError if the shape is wrong.
        """
        cue_id = values.get('id')
        data = values.get('data')
        return cls(
            start_time=float(values['startTime']),
            end_time=float(values['endTime']),
            text=values['text'],
            id=str(cue_id) if cue_id is not None else None,
            data=dict(data) if isinstance(data, Mapping) else None
        )

    def __str__(self) -> str:
        prefix = f"{self.id}: " if self.id is not None else ""
        return f"{prefix}[{self.start_time:.3f} -> {self.end_time:.3f}] {self.text}"
