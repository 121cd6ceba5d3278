"""
PyCaption.Formats - Format-specific caption parsers

Each module holds one pure parse(content) function for its grammar, plus the
FORMAT and SUPPORTED_EXTENSIONS the registry uses to dispatch to it.
"""

# Explicitly import all format modules so they can be found in frozen or pip-installed packages
from . import JsonFormat
from . import SbvFormat
from . import SrtFormat
from . import SsaFormat
from . import VttFormat
