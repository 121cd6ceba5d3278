"""
Advanced SubStation Alpha (ASS/SSA) parser.

    [V4+ Styles]
    Format: Name, Fontname, Fontsize, PrimaryColour, Bold, Italic, ...
    Style: Default,Arial,20,&H00FFFFFF,0,0,...

    [Events]
    Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text
    Dialogue: 0,0:00:00.00,0:00:05.00,Default,,0,0,0,,{\\b1}Hello{\\b0}, world

Columns are located through each section's Format line rather than by fixed
position, then converted to pysubs2 styles and events. Times have centisecond
precision. Override tags are reduced to a small inline style record (bold,
italic, underline, strikeout, primary colour, font size) and removed from the
text; other tags are dropped without being interpreted.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

import pysubs2
import regex

from PyCaption.CaptionCue import CaptionCue
from PyCaption.CaptionFormat import CaptionFormat
from PyCaption.Helpers import SplitLines
from PyCaption.Helpers.Color import Color, ParseAssColor
from PyCaption.Helpers.Time import ParseAssTimestamp

FORMAT = CaptionFormat.ASS

SUPPORTED_EXTENSIONS = {'.ass': 10, '.ssa': 10}

PRESERVES_STYLES = True

DEFAULT_EVENT_FORMAT = ['layer', 'start', 'end', 'style', 'name', 'marginl', 'marginr', 'marginv', 'effect', 'text']
DEFAULT_STYLE_FORMAT = [
    'name', 'fontname', 'fontsize', 'primarycolour', 'secondarycolour', 'outlinecolour', 'backcolour',
    'bold', 'italic', 'underline', 'strikeout', 'scalex', 'scaley', 'spacing', 'angle', 'borderstyle',
    'outline', 'shadow', 'alignment', 'marginl', 'marginr', 'marginv', 'encoding'
]

_SECTION_PATTERN = regex.compile(r'^\[(?P<name>[^\]]+)\]$')
_STYLES_SECTION_PATTERN = regex.compile(r'^v4\+? styles\+?$', regex.IGNORECASE)
_TAG_BLOCK_PATTERN = regex.compile(r'\{[^}]*\}')
_TOGGLE_TAG_PATTERN = regex.compile(r'\\(?P<tag>[bius])(?P<value>[01])(?![0-9])')
_COLOR_TAG_PATTERN = regex.compile(r'\\1?c(?P<color>&H[0-9A-Fa-f]+&?)')
_FONT_SIZE_TAG_PATTERN = regex.compile(r'\\fs(?P<size>\d+(?:\.\d+)?)')

_TOGGLE_FIELDS = {'b': 'bold', 'i': 'italic', 'u': 'underline', 's': 'strikeout'}

# Style columns that map onto pysubs2.SSAStyle flags
_STYLE_FLAGS = ['bold', 'italic', 'underline', 'strikeout']

@dataclass
class AssStyle:
    """ A named style from the styles section """
    name : str
    font_name : str|None = None
    font_size : float|None = None
    primary_color : str|None = None
    bold : bool|None = None
    italic : bool|None = None
    underline : bool|None = None
    strikeout : bool|None = None

    @classmethod
    def from_ssa_style(cls, name : str, style : pysubs2.SSAStyle, columns : set[str], color : Color|None = None) -> AssStyle:
        """
        Describe a pysubs2 style, keeping only the attributes that were present in the Style line
        """
        def field(attribute : str) -> Any:
            return getattr(style, attribute) if attribute in columns else None

        return cls(
            name=name,
            font_name=field('fontname') or None,
            font_size=field('fontsize'),
            primary_color=color.to_css() if color else None,
            bold=field('bold'),
            italic=field('italic'),
            underline=field('underline'),
            strikeout=field('strikeout')
        )

    def to_dict(self) -> dict[str, Any]:
        return { key: value for key, value in asdict(self).items() if value is not None }

@dataclass
class AssInlineStyle:
    """ Formatting requested by override tags inside a line of dialogue """
    bold : bool|None = None
    italic : bool|None = None
    underline : bool|None = None
    strikeout : bool|None = None
    color : str|None = None
    font_size : float|None = None

    def __bool__(self) -> bool:
        return any(value is not None for value in asdict(self).values())

    def to_dict(self) -> dict[str, Any]:
        return { key: value for key, value in asdict(self).items() if value is not None }

def parse(content : str, preserve_styles : bool = True) -> list[CaptionCue]:
    """
    Parse ASS/SSA content into cues sorted by start time.

    With preserve_styles, cues carry a data dict with the style name, the
    resolved base style and any inline style overrides.
    """
    if not content:
        return []

    cues : list[CaptionCue] = []
    styles : dict[str, AssStyle] = {}
    section = ''
    style_columns : dict[str, int] = _column_map(DEFAULT_STYLE_FORMAT)
    event_columns : list[str] = DEFAULT_EVENT_FORMAT

    for line in SplitLines(content):
        line = line.strip()
        if not line or line.startswith(';'):
            continue

        section_match = _SECTION_PATTERN.match(line)
        if section_match:
            section = section_match.group('name').strip().lower()
            continue

        key, separator, value = line.partition(':')
        if not separator:
            continue

        key = key.strip().lower()
        value = value.strip()

        try:
            if _STYLES_SECTION_PATTERN.match(section):
                if key == 'format':
                    style_columns = _column_map(_parse_format(value))
                elif key == 'style':
                    style = _parse_style(value, style_columns)
                    styles[style.name] = style

            elif section in ('events', ''):
                if key == 'format':
                    event_columns = _parse_format(value)
                elif key == 'dialogue':
                    cue = _parse_dialogue(value, event_columns, styles, len(cues) + 1, preserve_styles)
                    if cue:
                        cues.append(cue)

        except (ValueError, TypeError) as e:
            logging.debug(f"Skipping malformed {key} line: {e}")

    # Dialogue lines are not guaranteed to be in chronological order
    cues.sort(key=lambda cue: cue.start_time)
    return cues

def ParseInlineStyles(text : str) -> AssInlineStyle:
    """
    Collect the supported override tags from every {...} block in the text, later tags taking precedence
    """
    style = AssInlineStyle()

    for block in _TAG_BLOCK_PATTERN.findall(text):
        for toggle in _TOGGLE_TAG_PATTERN.finditer(block):
            setattr(style, _TOGGLE_FIELDS[toggle.group('tag')], toggle.group('value') == '1')

        for color in _COLOR_TAG_PATTERN.finditer(block):
            style.color = ParseAssColor(color.group('color'))

        for size in _FONT_SIZE_TAG_PATTERN.finditer(block):
            style.font_size = float(size.group('size'))

    return style

def CleanStyleTags(text : str) -> str:
    """
    Remove override tags and convert \\N, \\n and \\h escapes to plain text
    """
    return pysubs2.SSAEvent(text=text).plaintext.strip()

def _parse_format(value : str) -> list[str]:
    return [ column.strip().lower() for column in value.split(',') ]

def _column_map(columns : list[str]) -> dict[str, int]:
    return { name: index for index, name in enumerate(columns) }

def _parse_style(value : str, columns : dict[str, int]) -> AssStyle:
    """
    Build a pysubs2 style from the columns present in a Style line
    """
    fields = [ field.strip() for field in value.split(',') ]

    def get_field(*names : str) -> str|None:
        for name in names:
            index = columns.get(name)
            if index is not None and index < len(fields) and fields[index]:
                return fields[index]
        return None

    name = get_field('name') or 'Default'
    attributes : dict[str, Any] = {}

    font_name = get_field('fontname')
    if font_name:
        attributes['fontname'] = font_name

    size_value = get_field('fontsize')
    if size_value:
        try:
            attributes['fontsize'] = float(size_value)
        except ValueError:
            logging.debug(f"Ignoring invalid font size '{size_value}' in style {name}")

    color = Color.from_ass(get_field('primarycolour', 'primarycolor'))
    if color:
        attributes['primarycolor'] = color.to_pysubs2()

    for flag in _STYLE_FLAGS:
        flag_value = get_field(flag)
        if flag_value is not None:
            attributes[flag] = flag_value not in ('0', '')

    style = pysubs2.SSAStyle(**attributes)
    return AssStyle.from_ssa_style(name, style, set(attributes), color)

def _split_dialogue(value : str, columns : list[str]) -> dict[str, str]|None:
    """
    Split a Dialogue line into named fields. The Text field may itself contain commas,
    so any surplus fields are joined back into it.
    """
    parts = value.split(',')
    surplus = len(parts) - len(columns)
    if surplus < 0:
        return None

    text_index = columns.index('text') if 'text' in columns else len(columns) - 1

    fields : dict[str, str] = {}
    for index, name in enumerate(columns):
        if index < text_index:
            fields[name] = parts[index]
        elif index == text_index:
            fields['text'] = ','.join(parts[index:index + surplus + 1])
        else:
            fields[name] = parts[index + surplus]

    return fields

def _parse_event(fields : dict[str, str]) -> pysubs2.SSAEvent:
    return pysubs2.SSAEvent(
        start=round(ParseAssTimestamp(fields.get('start')) * 1000),
        end=round(ParseAssTimestamp(fields.get('end')) * 1000),
        style=(fields.get('style') or '').strip() or 'Default',
        name=fields.get('name', ''),
        effect=fields.get('effect', ''),
        text=fields.get('text', ''),
        type='Dialogue'
    )

def _parse_dialogue(value : str, columns : list[str], styles : dict[str, AssStyle], number : int, preserve_styles : bool) -> CaptionCue|None:
    fields = _split_dialogue(value, columns)
    if fields is None:
        logging.debug(f"Skipping Dialogue with too few fields: {value}")
        return None

    event = _parse_event(fields)
    if event.duration < 0:
        logging.debug(f"Skipping Dialogue that ends before it starts: {value}")
        return None

    text = event.plaintext.strip()
    if not text:
        return None

    data = None
    if preserve_styles:
        base_style = styles.get(event.style)
        inline_style = ParseInlineStyles(event.text)

        if base_style or inline_style:
            data = { 'style_name': event.style }
            if base_style:
                data['style'] = base_style.to_dict()
            if inline_style:
                data['inline_style'] = inline_style.to_dict()

    return CaptionCue(start_time=event.start / 1000, end_time=event.end / 1000, text=text, id=str(number), data=data)
