"""Async ServerQuery session."""

import logging
import re
from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any, Protocol, Self

from tsq.serverquery.exceptions import TS3Error
from tsq.serverquery.protocol import GREETING, STATUS_PATTERN, build_command_line, parse_response
from tsq.serverquery.transport import LineTransport

logger = logging.getLogger(__name__)


class QueryTransport(Protocol):
    """Interactive line transport a session talks through."""

    async def connect(
        self,
        host: str,
        port: int,
        expected_greeting: str,
        strip_greeting: bool = True,
    ) -> None: ...

    async def execute(self, command_line: str, terminator: re.Pattern[str]) -> bytes: ...

    async def close(self) -> None: ...


class Session:
    """
    ServerQuery session over a single transport connection.

    Only one command may be pending at a time; responses carry no request id
    and are matched to commands by arrival order.

    Usage:
        async with Session() as session:
            await session.connect(host, port)
            await session.command("login", {"client_login_name": user, "client_login_password": pw})
            await session.command("use", ["sid=1"])
            clients = await session.clientlist("-uid")
    """

    DEFAULT_TIMEOUT: float = 10.0

    def __init__(
        self,
        transport: QueryTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._transport: QueryTransport = transport if transport is not None else LineTransport(timeout)

    @property
    def transport(self) -> QueryTransport:
        return self._transport

    async def connect(self, host: str = "127.0.0.1", port: int = 10011) -> None:
        """Connect and wait for the ServerQuery greeting."""
        await self._transport.connect(host, port, GREETING, strip_greeting=False)

    async def close(self) -> None:
        """Send quit and close the underlying transport."""
        try:
            await self.command("quit")
        except TS3Error as e:
            logger.debug(f"quit failed: {e}")
        await self._transport.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def command(
        self,
        name: str,
        kvargs: Mapping[str, Any] | Sequence[Any] | None = None,
        args: Sequence[Any] | None = None,
    ) -> list[dict[str, str]]:
        """
        Run a command and return the parsed records.

        A list or tuple as second argument is taken as the positional
        arguments (``args`` is then ignored), anything else as the named
        arguments, with ``args`` supplying positional arguments.
        """
        if isinstance(kvargs, (list, tuple)):
            positional: Sequence[Any] = kvargs
            named: Mapping[str, Any] = {}
        else:
            positional = args or ()
            named = kvargs or {}

        command_line = build_command_line(name, positional, named)
        logger.debug(f"Executing: {command_line}")
        raw = await self._transport.execute(command_line, STATUS_PATTERN)
        return parse_response(raw)

    # ============ Dynamic command support ============

    def __getattr__(self, name: str) -> Callable[..., Awaitable[list[dict[str, str]]]]:
        """
        Support arbitrary commands via attribute access.

        Example:
            result = await session.channellist("-topic", "-flags")
            result = await session.clientkick(clid=5, reasonid=4, reasonmsg="Bye")
        """
        if name.startswith("_"):
            raise AttributeError(name)

        async def command_wrapper(*args: Any, **kwargs: Any) -> list[dict[str, str]]:
            return await self.command(name, kwargs, list(args))

        return command_wrapper
