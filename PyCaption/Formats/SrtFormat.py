"""
SubRip (SRT) parser.

    1
    00:00:01,000 --> 00:00:04,500
    First line
    Second line

The sequence number becomes the cue id. Each blank-line separated block is
handed to the srt library on its own, so an entry ends at the first blank
line. A line that should be a sequence number but isn't is skipped and
scanning resumes on the next line; an entry left without a sequence number
is dropped.
"""
import logging
from collections.abc import Sequence
from datetime import timedelta

import srt # type: ignore

from PyCaption.CaptionCue import CaptionCue
from PyCaption.CaptionFormat import CaptionFormat
from PyCaption.Helpers import IterateBlocks, SplitLines

FORMAT = CaptionFormat.SRT

SUPPORTED_EXTENSIONS = {'.srt': 10}

def parse(content : str) -> list[CaptionCue]:
    """
    Parse SRT content into cues, skipping malformed entries
    """
    if not content:
        return []

    cues : list[CaptionCue] = []
    for block in IterateBlocks(SplitLines(content)):
        cues.extend(_parse_block('\n'.join(block)))

    return cues

def _parse_block(block : str) -> list[CaptionCue]:
    try:
        items = list(srt.parse(block, ignore_errors=True))
    except (srt.SRTParseError, ValueError) as e:
        logging.debug(f"Skipping unparseable SRT entry: {e}")
        return []

    cues : list[CaptionCue] = []
    for item in items:
        if item.index is None:
            logging.debug(f"Skipping SRT entry without a sequence number at {srt.timedelta_to_srt_timestamp(item.start)}")
            continue

        text = '\n'.join(line.rstrip() for line in item.content.split('\n')).strip('\n')
        start = item.start.total_seconds()
        end = item.end.total_seconds()
        if text and start <= end:
            cues.append(CaptionCue(start_time=start, end_time=end, text=text, id=str(item.index)))

    return cues

def compose(cues : Sequence[CaptionCue]) -> str:
    """
    Render cues as SRT text, renumbering from 1
    """
    items = [
        srt.Subtitle(
            index=index,
            start=timedelta(seconds=cue.start_time),
            end=timedelta(seconds=cue.end_time),
            content=cue.text
        )
        for index, cue in enumerate(cues, 1)
    ]
    return srt.compose(items, reindex=True)
