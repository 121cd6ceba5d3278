"""
YouTube SubViewer (SBV) parser.

    0:00:00.000,0:00:05.000
    First line

SBV has no cue ids, so they are numbered in file order.
"""
import logging

import regex

from PyCaption.CaptionCue import CaptionCue
from PyCaption.CaptionFormat import CaptionFormat
from PyCaption.Helpers import IsBlank, SplitLines
from PyCaption.Helpers.Time import ParseTimestamp

FORMAT = CaptionFormat.SBV

SUPPORTED_EXTENSIONS = {'.sbv': 10}

_SBV_TIMELINE_PATTERN = regex.compile(r'^\s*(?P<start>\d+:\d{1,2}:\d{1,2}\.\d+)\s*,\s*(?P<end>\d+:\d{1,2}:\d{1,2}\.\d+)\s*$')

def IsSbvTimeline(line : str) -> bool:
    return bool(_SBV_TIMELINE_PATTERN.match(line))

def parse(content : str) -> list[CaptionCue]:
    """
    Parse SBV content into cues, skipping lines that are not part of an entry
    """
    if not content:
        return []

    lines = SplitLines(content)
    cues : list[CaptionCue] = []
    i = 0

    while i < len(lines):
        match = _SBV_TIMELINE_PATTERN.match(lines[i])
        if not match:
            if not IsBlank(lines[i]):
                logging.debug(f"Skipping unexpected SBV line {i + 1}: {lines[i].strip()}")
            i += 1
            continue

        text_lines : list[str] = []
        i += 1
        while i < len(lines) and not IsBlank(lines[i]):
            text_lines.append(lines[i].rstrip())
            i += 1

        start = ParseTimestamp(match.group('start'))
        end = ParseTimestamp(match.group('end'))
        text = '\n'.join(text_lines)
        if text and start <= end:
            cues.append(CaptionCue(start_time=start, end_time=end, text=text, id=str(len(cues) + 1)))

    return cues
