import pysubs2
import regex
from pysubs2.formats.substation import rgba_to_color

_ASS_COLOR_PATTERN = regex.compile(r'^&?H?(?P<hex>[0-9A-Fa-f]{1,8})&?$', regex.IGNORECASE)

class Color:
    """
    Simple color representation, converted from ASS &H[AA]BBGGRR notation.

    ASS stores transparency rather than opacity, so an alpha byte of 00 is fully opaque.
    A color written without an alpha byte has no alpha.
    """

    def __init__(self, r : int, g : int, b : int, a : int|None = None):
        self.r = max(0, min(255, r))
        self.g = max(0, min(255, g))
        self.b = max(0, min(255, b))
        self.a = max(0, min(255, a)) if a is not None else None

    def __eq__(self, value: object) -> bool:
        if not isinstance(value, Color):
            return False

        return (self.r, self.g, self.b, self.a) == (value.r, value.g, value.b, value.a)

    def __repr__(self) -> str:
        return f"Color(r={self.r}, g={self.g}, b={self.b}, a={self.a})"

    @property
    def opacity(self) -> float:
        """ Opacity in the range 0-1 (ASS alpha is inverted) """
        return 1.0 if self.a is None else (255 - self.a) / 255

    @classmethod
    def from_ass(cls, color_str : str|None) -> 'Color|None':
        """
        Create Color from &HBBGGRR or &HAABBGGRR, returning None if the value is not an ASS hex color
        """
        if not color_str:
            return None

        match = _ASS_COLOR_PATTERN.match(color_str.strip())
        if not match:
            return None

        hex_str = match.group('hex')
        has_alpha = len(hex_str) > 6
        return cls.from_pysubs2(rgba_to_color(f"&H{hex_str}"), has_alpha)

    @classmethod
    def from_pysubs2(cls, color : pysubs2.Color, has_alpha : bool = True) -> 'Color':
        return cls(color.r, color.g, color.b, color.a if has_alpha else None)

    def to_pysubs2(self) -> pysubs2.Color:
        return pysubs2.Color(self.r, self.g, self.b, self.a or 0)

    def to_hex(self) -> str:
        """Convert to #RRGGBB format"""
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def to_css(self) -> str:
        """
        Convert to a CSS color: #RRGGBB when no alpha was given, otherwise rgba(r, g, b, opacity)
        """
        if self.a is None:
            return self.to_hex()
        return f"rgba({self.r}, {self.g}, {self.b}, {self.opacity:.2f})"

def ParseAssColor(color_str : str|None) -> str|None:
    """
    Convert an ASS color value to a CSS color string, or None if it cannot be parsed
    """
    color = Color.from_ass(color_str)
    return color.to_css() if color else None
