import os
from collections.abc import Iterator

import regex

_LINE_ENDING_PATTERN = regex.compile(r'\r\n?')

def NormaliseLineEndings(content : str) -> str:
    """
    Convert CRLF and CR line endings to LF and drop any byte order mark
    """
    if not content:
        return ""
    return _LINE_ENDING_PATTERN.sub('\n', content.lstrip('\ufeff'))

def SplitLines(content : str) -> list[str]:
    """ Split content into lines, accepting any line ending """
    return NormaliseLineEndings(content).split('\n')

def IsBlank(line : str|None) -> bool:
    return not line or not line.strip()

def IterateBlocks(lines : list[str]) -> Iterator[list[str]]:
    """
    Yield runs of consecutive non-blank lines (blocks separated by one or more blank lines)
    """
    block : list[str] = []
    for line in lines:
        if IsBlank(line):
            if block:
                yield block
                block = []
        else:
            block.append(line.rstrip())

    if block:
        yield block

def GetInputPath(filepath : str|None) -> str|None:
    """
    Normalize the input file path for cross-platform compatibility.

    Returns None if filepath is empty. URLs are returned unchanged.
    """
    if not filepath:
        return None
    if IsUrl(filepath):
        return filepath
    return os.path.normpath(filepath)

def IsUrl(path : str|None) -> bool:
    return bool(path) and regex.match(r'^[a-zA-Z][a-zA-Z0-9+.-]*://', path or '') is not None
