import importlib
import logging
import os
import pkgutil
from collections.abc import Callable
from pathlib import Path
from types import ModuleType
from urllib.parse import urlsplit

import pysubs2.formats
import regex
from pysubs2.exceptions import Pysubs2Error

from PyCaption.CaptionCue import CaptionCue
from PyCaption.CaptionError import CaptionFormatError, CaptionLoadError
from PyCaption.CaptionFormat import CaptionFormat
from PyCaption.Helpers import IsUrl

CaptionParser = Callable[..., list[CaptionCue]]

AUTO_FORMAT = 'auto'

# Default encodings for reading caption files
default_encoding = os.getenv('DEFAULT_ENCODING', 'utf-8')
fallback_encoding = os.getenv('FALLBACK_ENCODING', 'iso-8859-1')

_SBV_FIRST_LINE_PATTERN = regex.compile(r'^\s*\d+:\d{1,2}:\d{1,2}\.\d+\s*,\s*\d+:\d{1,2}:\d{1,2}\.\d+\s*$')
_SECTION_HEADER_PATTERN = regex.compile(r'^\[[A-Za-z][^\]]*\]\s*$')
_VTT_HEADER_PATTERN = regex.compile(r"^WEBVTT(?:[ \t].*)?$")
_ASS_SCRIPT_PATTERN = regex.compile(r"^\s*\[(?:Script Info|V4\+? Styles|Events)\]\s*$", regex.MULTILINE | regex.IGNORECASE)
_ASS_DIALOGUE_PATTERN = regex.compile(r'^\s*Dialogue\s*:', regex.MULTILINE | regex.IGNORECASE)

_PYSUBS2_FORMATS = {
    'srt': CaptionFormat.SRT,
    'vtt': CaptionFormat.VTT,
    'ass': CaptionFormat.ASS,
    'ssa': CaptionFormat.ASS,
}

class CaptionFormatRegistry:
    """
    Dispatch table from caption format to parser function.

    Parsers live in the Formats package, one module per format. Each module
    declares FORMAT, SUPPORTED_EXTENSIONS (extension -> priority) and a pure
    parse(content) function; they are discovered lazily on first use.
    Adding a format is a matter of adding one module, or calling register_parser.
    """
    _parsers : dict[CaptionFormat, CaptionParser] = {}
    _styled : set[CaptionFormat] = set()
    _extensions : dict[str, CaptionFormat] = {}
    _priorities : dict[str, int] = {}
    _discovered : bool = False

    @classmethod
    def register_parser(cls, caption_format : CaptionFormat, parser : CaptionParser, extensions : dict[str, int]|None = None, preserves_styles : bool = False) -> None:
        """
        Register a parser for a format and the file extensions that map to it.
        Higher priority registrations override lower priority ones for an extension.
        """
        cls._parsers[caption_format] = parser
        if preserves_styles:
            cls._styled.add(caption_format)
        else:
            cls._styled.discard(caption_format)

        for ext, priority in (extensions or {}).items():
            ext = ext.lower()
            if ext not in cls._extensions or priority >= cls._priorities[ext]:
                cls._extensions[ext] = caption_format
                cls._priorities[ext] = priority

    @classmethod
    def register_module(cls, module : ModuleType) -> None:
        """
        Register a Formats module exposing FORMAT, SUPPORTED_EXTENSIONS and parse
        """
        cls.register_parser(
            module.FORMAT,
            module.parse,
            getattr(module, 'SUPPORTED_EXTENSIONS', {}),
            preserves_styles=getattr(module, 'PRESERVES_STYLES', False)
        )

    @classmethod
    def get_parser(cls, caption_format : CaptionFormat|str) -> CaptionParser:
        """
        Get the parser function for a format
        """
        cls._ensure_discovered()
        resolved = CaptionFormat.from_value(caption_format)
        if resolved not in cls._parsers:
            raise CaptionFormatError(f"No parser registered for {resolved}. Available formats: {cls.list_available_formats()}")
        return cls._parsers[resolved]

    @classmethod
    def get_format_by_extension(cls, extension : str) -> CaptionFormat:
        """
        Get the format registered for a file extension, e.g. '.srt'
        """
        cls._ensure_discovered()
        ext = extension.lower()
        if not ext.startswith('.'):
            ext = f".{ext}"
        if ext not in cls._extensions:
            raise CaptionFormatError(f"Unknown caption extension: {extension}. Available extensions: {', '.join(sorted(cls._extensions))}")
        return cls._extensions[ext]

    @classmethod
    def get_format_from_filename(cls, filename : str|None) -> str|None:
        """
        Get the lower case extension of the last segment of a path or URL, ignoring any query or fragment
        """
        if not filename:
            return None

        path = urlsplit(filename).path if IsUrl(filename) else filename
        segment = regex.split(r'[\\/]', path)[-1]
        base, extension = os.path.splitext(segment) # type: ignore[ignore-unused]
        return extension.lower() if extension else None

    @classmethod
    def detect_format(cls, filename : str|None, default : CaptionFormat = CaptionFormat.VTT) -> CaptionFormat:
        """
        Deduce the caption format from a filename or URL extension, falling back to VTT
        """
        cls._ensure_discovered()
        extension = cls.get_format_from_filename(filename)
        if extension and extension in cls._extensions:
            return cls._extensions[extension]
        return default

    @classmethod
    def sniff_format(cls, content : str) -> CaptionFormat|None:
        """
        Guess the format from the content itself. Returns None if it cannot be decided.
        """
        text = (content or '').lstrip('\ufeff').lstrip()
        if not text:
            return None

        first_line = text.splitlines()[0]
        if text[0] == '{' or (text[0] == '[' and not _SECTION_HEADER_PATTERN.match(first_line)):
            return CaptionFormat.JSON

        if _VTT_HEADER_PATTERN.match(first_line):
            return CaptionFormat.VTT

        if _SBV_FIRST_LINE_PATTERN.match(first_line):
            return CaptionFormat.SBV

        if _ASS_SCRIPT_PATTERN.search(text) or _ASS_DIALOGUE_PATTERN.search(text):
            return CaptionFormat.ASS

        try:
            detected = pysubs2.formats.autodetect_format(text)
        except (Pysubs2Error, ValueError) as e:
            logging.debug(f"Unable to detect caption format: {e}")
            detected = None

        if detected in _PYSUBS2_FORMATS:
            return _PYSUBS2_FORMATS[detected]

        return None

    @classmethod
    def parse_string(cls, content : str, caption_format : CaptionFormat|str = CaptionFormat.VTT, preserve_styles : bool = True) -> list[CaptionCue]:
        """
        Parse caption content with the parser for the given format.

        Use format 'auto' to sniff the format from the content. Raises CaptionFormatError
        for an unknown format tag; malformed content never raises.
        """
        cls._ensure_discovered()
        if isinstance(caption_format, str) and caption_format.lower() == AUTO_FORMAT:
            caption_format = cls.sniff_format(content) or CaptionFormat.VTT
            logging.debug(f"Detected caption format '{caption_format}'")

        resolved = CaptionFormat.from_value(caption_format)
        parser = cls.get_parser(resolved)

        if resolved in cls._styled:
            return parser(content, preserve_styles=preserve_styles)

        return parser(content)

    @classmethod
    def load_file(cls, path : str, caption_format : CaptionFormat|str|None = None, preserve_styles : bool = True) -> list[CaptionCue]:
        """
        Read and parse a caption file, retrying with the fallback encoding if necessary.
        """
        caption_format = caption_format or cls.detect_format(path)
        try:
            try:
                with open(path, 'r', encoding=default_encoding) as f:
                    content = f.read()
            except UnicodeDecodeError:
                with open(path, 'r', encoding=fallback_encoding) as f:
                    content = f.read()
        except OSError as e:
            raise CaptionLoadError(f"Failed to read captions from {path}: {e}", e)

        return cls.parse_string(content, caption_format, preserve_styles=preserve_styles)

    @classmethod
    def enumerate_formats(cls) -> list[str]:
        """
        List all supported caption file extensions.
        """
        cls._ensure_discovered()
        return sorted(cls._extensions.keys())

    @classmethod
    def list_available_formats(cls) -> str:
        """
        Get a comma-separated string of all supported caption extensions.
        """
        formats = cls.enumerate_formats()
        return "None" if not formats else ", ".join(formats)

    @classmethod
    def disable_autodiscovery(cls) -> None:
        """ Disable automatic discovery of caption formats (for testing) """
        cls.clear()
        cls._discovered = True

    @classmethod
    def enable_autodiscovery(cls) -> None:
        """ Enable automatic discovery of caption formats (for testing) """
        cls._discovered = False

    @classmethod
    def discover(cls) -> None:
        """
        Discover and register all format modules in the Formats package.
        """
        package_path = Path(__file__).parent / "Formats"
        for _, module_name, _ in pkgutil.iter_modules([str(package_path)]):
            module = importlib.import_module(f"PyCaption.Formats.{module_name}")
            if hasattr(module, 'FORMAT') and hasattr(module, 'parse'):
                cls.register_module(module)
        cls._discovered = True

    @classmethod
    def clear(cls) -> None:
        """
        Clear all registered parsers
        """
        cls._parsers.clear()
        cls._styled.clear()
        cls._extensions.clear()
        cls._priorities.clear()
        cls._discovered = False

    @classmethod
    def _ensure_discovered(cls) -> None:
        if not cls._discovered:
            cls.discover()

def LoadCaptionFile(path : str, caption_format : CaptionFormat|str|None = None, preserve_styles : bool = True) -> list[CaptionCue]:
    """
    Load cues from a caption file. Raises CaptionLoadError if the file cannot be read.
    """
    return CaptionFormatRegistry.load_file(path, caption_format, preserve_styles=preserve_styles)
