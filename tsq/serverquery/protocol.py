"""ServerQuery protocol codec."""

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any, Final

from tsq.serverquery.escaping import escape, unescape
from tsq.serverquery.exceptions import MalformedResponseError, ProtocolError

logger = logging.getLogger(__name__)

GREETING: Final[str] = (
    'Welcome to the TeamSpeak 3 ServerQuery interface, type "help" for a list of commands '
    'and "help <command>" for information on a specific command.\n\r'
)

STATUS_PATTERN: Final = re.compile(
    r"error id=(?P<id>[0-9]+) msg=(?P<msg>\S+)(?: failed_permid=(?P<failed_permid>[0-9]+))?"
)

LINE_SEPARATOR: Final[str] = "\n\r"
RECORD_SEPARATOR: Final[str] = "|"


def build_command_line(
    name: str,
    args: Iterable[Any] = (),
    kwargs: Mapping[str, Any] | None = None,
) -> str:
    """Build a ServerQuery command line with proper escaping.

    Named arguments come first, positional arguments after them. No line
    terminator is appended.
    """
    line = name
    for key, value in (kwargs or {}).items():
        line += f" {escape(key)}={escape(value)}"
    for arg in args:
        line += f" {escape(arg)}"
    return line


def parse_record(segment: str) -> dict[str, str]:
    """Parse one ``|``-delimited record segment to a dictionary."""
    record: dict[str, str] = {}
    for token in segment.split(" "):
        key, sep, value = token.partition("=")
        # Flag without value
        record[key] = unescape(value) if sep else ""
    return record


def parse_status(text: str) -> re.Match[str]:
    """Find the status line anywhere in ``text``."""
    match = STATUS_PATTERN.search(text)
    if match is None:
        raise MalformedResponseError(text)
    return match


def parse_response(raw: bytes | str) -> list[dict[str, str]]:
    """Parse a raw ServerQuery response into a list of records.

    Raises ProtocolError when the status id is non-zero and
    MalformedResponseError when no status line is present.
    """
    text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    status = parse_status(text)

    error_id = int(status.group("id"))
    if error_id != 0:
        failed_permid = status.group("failed_permid")
        error = ProtocolError(
            error_id,
            unescape(status.group("msg")),
            failed_permid=int(failed_permid) if failed_permid is not None else None,
            status=unescape(status.group(0)),
        )
        logger.warning(f"Query failed: {error}")
        raise error

    data = text[: status.start()].replace(LINE_SEPARATOR, "", 1)
    return [parse_record(segment) for segment in data.split(RECORD_SEPARATOR)]
