import regex

# CJK unified ideographs, CJK symbols and punctuation, halfwidth and fullwidth forms
_CJK_PATTERN = regex.compile(r'[\u4e00-\u9fa5\u3000-\u303f\uff00-\uffef]')

# Leading numeric part of a size value such as "1200px" or "1.5em"
_SIZE_PATTERN = regex.compile(r'^\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+))')

CJK_CHAR_WIDTH = 1.0
WHITESPACE_CHAR_WIDTH = 0.25
DEFAULT_CHAR_WIDTH = 0.5

def IsCJKCharacter(char : str) -> bool:
    return bool(_CJK_PATTERN.match(char))

def GetCharWidth(char : str) -> float:
    """
    Estimated display width of a character, in units of one CJK ideograph.

    This is a deterministic heuristic rather than a font measurement:
    CJK characters count 1, whitespace 0.25 and everything else 0.5.
    """
    if IsCJKCharacter(char):
        return CJK_CHAR_WIDTH
    if char.isspace():
        return WHITESPACE_CHAR_WIDTH
    return DEFAULT_CHAR_WIDTH

def EstimateTextWidth(text : str) -> float:
    """ Estimated display width of a string """
    return sum(GetCharWidth(char) for char in text)

def SplitByWidth(text : str, max_width : float) -> list[str]:
    """
    Split text into pieces no wider than max_width, ignoring word and sentence boundaries.

    A piece always holds at least one character, so a character wider than
    max_width still produces a (single character) piece.
    """
    if EstimateTextWidth(text) <= max_width:
        return [text]

    result : list[str] = []
    current : list[str] = []
    current_width = 0.0

    for char in text:
        char_width = GetCharWidth(char)

        if current and current_width + char_width > max_width:
            result.append(''.join(current))
            current = [char]
            current_width = char_width
        else:
            current.append(char)
            current_width += char_width

    if current:
        result.append(''.join(current))

    return result

def ParseSizeValue(value : int|float|str|None, fallback : float) -> float:
    """
    Parse a size given as a number or a CSS-like string ("1200px"), returning fallback if there is no number
    """
    if isinstance(value, bool) or value is None:
        return fallback

    if isinstance(value, (int, float)):
        return float(value)

    match = _SIZE_PATTERN.match(str(value))
    if not match:
        return fallback

    try:
        return float(match.group(1))
    except ValueError:
        return fallback
