"""
tsq.serverquery - Async TeamSpeak 3 ServerQuery codec and client.

Usage:
    from tsq.serverquery import Session

    async with Session() as session:
        await session.connect("localhost", 10011)
        await session.command("login", {"client_login_name": "serveradmin", "client_login_password": "pw"})
        await session.command("use", {"sid": 1})

        for client in await session.command("clientlist", ["-uid"]):
            print(client["client_nickname"])
"""

from tsq.serverquery.escaping import escape, unescape
from tsq.serverquery.exceptions import (
    MalformedResponseError,
    ProtocolError,
    TransportError,
    TransportTimeoutError,
    TS3Error,
)
from tsq.serverquery.protocol import (
    GREETING,
    STATUS_PATTERN,
    build_command_line,
    parse_record,
    parse_response,
)
from tsq.serverquery.session import QueryTransport, Session
from tsq.serverquery.transport import LineTransport
from tsq.serverquery.types import TS3ErrorCode

__all__ = [
    # Session
    "Session",
    "QueryTransport",
    "LineTransport",
    # Codec
    "escape",
    "unescape",
    "build_command_line",
    "parse_record",
    "parse_response",
    "GREETING",
    "STATUS_PATTERN",
    # Exceptions
    "TS3Error",
    "TransportError",
    "TransportTimeoutError",
    "MalformedResponseError",
    "ProtocolError",
    # Types
    "TS3ErrorCode",
]

__version__ = "1.0.0"
