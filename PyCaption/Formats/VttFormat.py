"""
WebVTT parser.

    WEBVTT

    NOTE comments are skipped

    intro
    00:00:00.000 --> 00:00:05.000 align:start
    First line
    Second line

Cue ids are optional, cue settings after the timeline are ignored and
the text lines of a cue are joined with newlines.
"""
import logging

import regex

from PyCaption.CaptionCue import CaptionCue
from PyCaption.CaptionFormat import CaptionFormat
from PyCaption.Helpers import IterateBlocks, SplitLines
from PyCaption.Helpers.Time import ParseTimelineLine

FORMAT = CaptionFormat.VTT

SUPPORTED_EXTENSIONS = {'.vtt': 10}

_HEADER_PATTERN = regex.compile(r'^WEBVTT(?:[ \t].*)?$')
_NON_CUE_BLOCK_PATTERN = regex.compile(r'^(?:NOTE|STYLE|REGION)(?:\s.*)?$')

def parse(content : str) -> list[CaptionCue]:
    """
    Parse WebVTT content into cues. Malformed cue blocks are skipped.
    """
    if not content:
        return []

    cues : list[CaptionCue] = []
    for block in IterateBlocks(SplitLines(content)):
        first_line = block[0].strip()

        if _HEADER_PATTERN.match(first_line):
            block = block[1:]
            if not block or ParseTimelineLine(block[0]) is None:
                continue
            first_line = block[0].strip()

        if _NON_CUE_BLOCK_PATTERN.match(first_line):
            continue

        cue = _parse_cue_block(block)
        if cue:
            cues.append(cue)

    return cues

def _parse_cue_block(block : list[str]) -> CaptionCue|None:
    """
    Parse a cue block: [id], timeline, text lines...
    """
    cue_id = None
    timeline = ParseTimelineLine(block[0])
    text_start = 1

    if timeline is None and len(block) > 1:
        timeline = ParseTimelineLine(block[1])
        cue_id = block[0].strip()
        text_start = 2

    if timeline is None:
        logging.debug(f"Skipping VTT block without a timeline: {block[0]}")
        return None

    start, end = timeline
    text = '\n'.join(block[text_start:])
    if not text:
        return None

    if end < start:
        logging.debug(f"Skipping VTT cue that ends before it starts: {block[text_start - 1]}")
        return None

    return CaptionCue(start_time=start, end_time=end, text=text, id=cue_id)
