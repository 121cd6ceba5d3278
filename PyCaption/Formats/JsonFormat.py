"""
JSON caption parser.

Accepts a bare array of cue objects or an object with a "cues" array:

    {"cues": [{"id": "1", "startTime": 0, "endTime": 5, "text": "Hello"}]}
"""
import json
import math
import logging
from typing import Any

from PyCaption.CaptionCue import CaptionCue
from PyCaption.CaptionFormat import CaptionFormat

FORMAT = CaptionFormat.JSON

SUPPORTED_EXTENSIONS = {'.json': 10}

def _is_number(value : Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)

def ValidateCueObject(item : Any) -> str|None:
    """
    Check that an item has the cue shape. Returns a description of the problem, or None if it is valid.
    """
    if not isinstance(item, dict):
        return f"expected an object, got {type(item).__name__}"
    if not _is_number(item.get('startTime')):
        return "startTime must be a number"
    if not _is_number(item.get('endTime')):
        return "endTime must be a number"
    if not isinstance(item.get('text'), str):
        return "text must be a string"
    if item.get('id') is not None and not isinstance(item['id'], (str, int)):
        return "id must be a string"
    if item.get('data') is not None and not isinstance(item['data'], dict):
        return "data must be an object"
    return None

def parse(content : str) -> list[CaptionCue]:
    """
    Parse JSON content into cues. Invalid entries are dropped with a warning; invalid JSON yields no cues.
    """
    if not content or not content.strip():
        return []

    try:
        document = json.loads(content)
    except (json.JSONDecodeError, TypeError, ValueError, RecursionError) as e:
        logging.warning(f"Failed to parse JSON captions: {e}")
        return []

    items = document.get('cues') if isinstance(document, dict) else document
    if not isinstance(items, list):
        logging.warning("JSON captions must be an array of cues or an object with a 'cues' array")
        return []

    cues : list[CaptionCue] = []
    for index, item in enumerate(items):
        problem = ValidateCueObject(item)
        if problem:
            logging.warning(f"Skipping invalid JSON cue at index {index}: {problem}")
            continue

        try:
            cues.append(CaptionCue.from_dict(item))
        except (ValueError, KeyError) as e:
            logging.warning(f"Skipping invalid JSON cue at index {index}: {e}")

    return cues
