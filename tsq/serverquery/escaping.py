"""ServerQuery escaping."""

import re
from typing import Any, Final

# Don't change the order in this map, backslash has to be replaced first
ESCAPE_MAP: Final[list[tuple[str, str]]] = [
    ("\\", r"\\"),
    ("/", r"\/"),
    (" ", r"\s"),
    ("|", r"\p"),
    ("\a", r"\a"),
    ("\f", r"\f"),
    ("\n", r"\n"),
    ("\r", r"\r"),
    ("\t", r"\t"),
    ("\v", r"\v"),
]

UNESCAPE_MAP: Final[dict[str, str]] = {sequence: char for char, sequence in ESCAPE_MAP}

_SEQUENCE_RE: Final = re.compile(r"\\.", re.DOTALL)


def escape(raw: Any) -> Any:
    """Escape special characters for the ServerQuery protocol.

    Values that are not strings (ints used as argument values, for example)
    are returned unchanged.
    """
    if not isinstance(raw, str):
        return raw
    for char, replacement in ESCAPE_MAP:
        raw = raw.replace(char, replacement)
    return raw


def unescape(raw: Any) -> Any:
    """Unescape ServerQuery protocol characters.

    Every two-character sequence is translated on its own in a single pass,
    so an escaped backslash is never paired with the character after it.
    Unknown sequences are kept as they are.
    """
    if not isinstance(raw, str):
        return raw
    return _SEQUENCE_RE.sub(lambda m: UNESCAPE_MAP.get(m.group(0), m.group(0)), raw)
