"""
Loader for key=value properties resources.

Supports the subset of the properties format used by the bundled value
tables: one entry per line, '=' or ':' as separator, '#' and '!' comments,
blank lines ignored, backslash line continuations, escaped separators
in keys and \\uXXXX unicode escapes.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Tuple

logger = logging.getLogger(__name__)

_COMMENT_PREFIXES = ("#", "!")
_SEPARATORS = ("=", ":")
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _logical_lines(lines: Iterable[str]) -> Iterable[str]:
    """Join lines ending in an unescaped backslash with the following line."""
    buffer = ""
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not buffer:
            line = line.lstrip()
            if not line or line.startswith(_COMMENT_PREFIXES):
                continue
        else:
            line = line.lstrip()

        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            buffer += line[:-1]
            continue

        yield buffer + line
        buffer = ""

    if buffer:
        yield buffer


def _unescape(text: str) -> str:
    result = []
    i = 0
    while i < len(text):
        char = text[i]
        if char != "\\":
            result.append(char)
            i += 1
            continue
        escaped = text[i + 1:i + 2]
        if escaped == "u":
            digits = text[i + 2:i + 6]
            if len(digits) != 4 or any(d not in _HEX_DIGITS for d in digits):
                raise ValueError(f"Malformed \\uXXXX escape in '{text}'")
            result.append(chr(int(digits, 16)))
            i += 6
        else:
            result.append(_ESCAPES.get(escaped, escaped))
            i += 2
    # Surrogate pairs written as two \u escapes
    return "".join(result).encode("utf-16", "surrogatepass").decode("utf-16")


def parse_entry(line: str) -> Tuple[str, str]:
    """
    Split one logical line into key and value.

    The key ends at the first unescaped '=', ':' or whitespace. A line
    without separator is a key with an empty value.
    """
    i = 0
    while i < len(line):
        char = line[i]
        if char == "\\":
            i += 2
            continue
        if char in _SEPARATORS or char.isspace():
            break
        i += 1

    key = line[:i]
    rest = line[i:].lstrip()
    if rest[:1] in _SEPARATORS:
        rest = rest[1:].lstrip()
    return _unescape(key), _unescape(rest)


def parse_properties(text: str) -> Dict[str, str]:
    """Parse properties text. Later entries replace earlier ones."""
    properties = {}
    for line in _logical_lines(text.splitlines()):
        key, value = parse_entry(line)
        properties[key] = value
    return properties


def load_properties(path: Path) -> Dict[str, str]:
    """
    Read a properties file.

    Args:
        path: Location of the properties file (UTF-8)

    Returns:
        Mapping of key -> value

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not valid UTF-8
    """
    text = Path(path).read_text(encoding="utf-8")
    properties = parse_properties(text)
    logger.debug(f"Read {len(properties)} properties from {path}")
    return properties
