import regex
from pysubs2.time import TIMESTAMP, TIMESTAMP_SHORT, timestamp_to_ms

# H:MM:SS.mmm, H:MM:SS,mmm or MM:SS.mmm
_TIMESTAMP_PATTERN = regex.compile(r'^(?:(?P<hours>\d+):)?(?P<minutes>\d{1,2}):(?P<seconds>\d{1,2})(?:[.,](?P<fraction>\d+))?$')

_TIMELINE_PATTERN = regex.compile(r'^\s*(?P<start>[\d:.,]+)\s*-->\s*(?P<end>[\d:.,]+)')

def _seconds_from_match(match) -> float:
    hours = int(match.group('hours') or 0)
    minutes = int(match.group('minutes'))
    seconds = int(match.group('seconds'))
    fraction = match.group('fraction')
    fractional = float(f"0.{fraction}") if fraction else 0.0
    return hours * 3600 + minutes * 60 + seconds + fractional

def ParseTimestamp(timestamp : str|None) -> float:
    """
    Parse a VTT/SRT/SBV style timestamp into seconds.

    Accepts H:MM:SS.mmm, H:MM:SS,mmm and the MM:SS.mmm shorthand.
    Anything else yields 0.0 so that one bad timestamp does not abort a parse.
    """
    if not timestamp:
        return 0.0

    match = _TIMESTAMP_PATTERN.match(timestamp.strip().replace(',', '.'))
    if not match:
        return 0.0

    return _seconds_from_match(match)

def ParseAssTimestamp(timestamp : str|None) -> float:
    """
    Parse an ASS/SSA timestamp (H:MM:SS.cc, centisecond precision) into seconds, or 0.0 if malformed
    """
    if not timestamp:
        return 0.0

    timestamp = timestamp.strip()
    match = TIMESTAMP.fullmatch(timestamp) or TIMESTAMP_SHORT.fullmatch(timestamp)
    if not match:
        return 0.0

    return timestamp_to_ms(match.groups()) / 1000

def ParseTimelineLine(line : str|None) -> tuple[float, float]|None:
    """
    Parse a "start --> end" timeline, ignoring any trailing cue settings.

    Returns None if the line is not a timeline.
    """
    if not line or '-->' not in line:
        return None

    match = _TIMELINE_PATTERN.match(line)
    if not match:
        return None

    return ParseTimestamp(match.group('start')), ParseTimestamp(match.group('end'))

def IsTimelineLine(line : str|None) -> bool:
    return ParseTimelineLine(line) is not None

def FormatTimestamp(seconds : float, separator : str = '.') -> str:
    """
    Format seconds as HH:MM:SS.mmm (or HH:MM:SS,mmm with separator=',')
    """
    total_milliseconds = int(round(max(seconds, 0.0) * 1000))
    hours, remainder = divmod(total_milliseconds, 3600000)
    minutes, remainder = divmod(remainder, 60000)
    secs, milliseconds = divmod(remainder, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}{separator}{milliseconds:03d}"
