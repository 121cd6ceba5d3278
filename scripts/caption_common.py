import os
import logging

from argparse import ArgumentParser, Namespace
from dataclasses import dataclass

from PyCaption import init_options
from PyCaption.CaptionFormatRegistry import AUTO_FORMAT, CaptionFormatRegistry
from PyCaption.Options import Options

log_dir = os.getenv('CAPTION_LOG_DIR') or os.path.join(os.path.expanduser('~'), '.pycaption')

@dataclass
class LoggerOptions():
    file_handler: logging.FileHandler|None
    log_path: str

def InitLogger(logfilename: str, debug: bool = False) -> LoggerOptions:
    """ Initialise the logger with a file handler and return the path to the log file """
    log_path = os.path.join(log_dir, f"{logfilename}.log")
    file_handler = None

    if debug:
        logging_level = logging.DEBUG
    else:
        level_name = os.getenv('LOG_LEVEL', 'INFO').upper()
        logging_level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(format='%(levelname)s: %(message)s', encoding='utf-8', level=logging_level)

    if debug:
        logging.debug("Debug logging enabled")

    # Create file handler with the same logging level
    try:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8', mode='w')
        file_handler.setLevel(logging_level)
        file_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logging.getLogger('').addHandler(file_handler)
    except OSError as e:
        logging.warning(f"Unable to create log file at {log_path}: {e}")

    return LoggerOptions(file_handler=file_handler, log_path=log_path)

def CreateArgParser(description : str) -> ArgumentParser:
    """
    Create new arg parser with the command line arguments shared by caption scripts
    """
    pre_parser = ArgumentParser(add_help=False)
    pre_parser.add_argument('--list-formats', action='store_true')
    pre_args, _ = pre_parser.parse_known_args()
    if pre_args.list_formats:
        HandleFormatListing(pre_args)

    parser = ArgumentParser(description=description)
    parser.add_argument('input', help="Path or URL of a caption file (see --list-formats for supported formats)")
    parser.add_argument('--list-formats', action='store_true', help="List supported caption formats and exit")
    parser.add_argument('-f', '--format', type=str, default=None, help=f"Caption format (vtt, srt, ass, ssa, sbv, json or {AUTO_FORMAT}); inferred from the extension if omitted")
    parser.add_argument('--debug', action='store_true', help="Run with DEBUG log level")
    parser.add_argument('--nostyles', action='store_true', help="Do not attach ASS style information to cues")
    parser.add_argument('--timeout', type=float, default=None, help="Seconds to wait when fetching captions from a URL")
    return parser

def HandleFormatListing(args: Namespace) -> None:
    """Print supported caption formats and exit if requested."""
    if getattr(args, "list_formats", False):
        formats = CaptionFormatRegistry.list_available_formats()
        if formats:
            print(f"Supported caption formats: {formats}")
        else:
            print("No caption formats available.")
        raise SystemExit(0)

def CreateOptions(args: Namespace, **kwargs) -> Options:
    """ Create options from the shared arguments plus any script-specific settings """
    settings = {
        'preserve_styles': not args.nostyles,
        'fetch_timeout': args.timeout,
    }

    settings.update(kwargs)

    return init_options(**settings)

def ParseBoxSize(value : str) -> tuple[float, float]:
    """
    Parse a HEIGHTxWIDTH box size, e.g. "64x400"
    """
    height, separator, width = value.lower().partition('x')
    if not separator:
        raise ValueError(f"Expected HEIGHTxWIDTH, got '{value}'")
    return float(height), float(width)
