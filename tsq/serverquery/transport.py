"""Async line transport for ServerQuery connections."""

import asyncio
import logging
import re

from tsq.serverquery.exceptions import TransportError, TransportTimeoutError

logger = logging.getLogger(__name__)


class LineTransport:
    """
    Line-oriented asyncio stream transport.

    Lines are terminated by ``\\n\\r`` on the wire. ``execute`` sends one
    command line and collects every received line until the accumulated
    response matches the terminator pattern.

    Usage:
        transport = LineTransport(timeout=5.0)
        await transport.connect(host, port, greeting)
        raw = await transport.execute("whoami", STATUS_PATTERN)
        await transport.close()
    """

    DEFAULT_TIMEOUT: float = 10.0
    MAX_GREETING_LINES: int = 4
    STREAM_LIMIT: int = 2**20
    LINE_END: bytes = b"\n\r"
    SEND_END: bytes = b"\n"

    def __init__(self, timeout: float = DEFAULT_TIMEOUT) -> None:
        self._timeout = timeout
        self._reader: asyncio.StreamReader | None = None
        self._writer: asyncio.StreamWriter | None = None

        # Lock for executing commands (one at a time)
        self._exec_lock = asyncio.Lock()

        self.greeting: str = ""

    @property
    def connected(self) -> bool:
        """Check if the stream is open."""
        return self._writer is not None and not self._writer.is_closing()

    async def connect(
        self,
        host: str,
        port: int,
        expected_greeting: str,
        strip_greeting: bool = True,
    ) -> None:
        """Open the stream and wait for the expected greeting banner."""
        if self._writer:
            await self.close()

        try:
            self._reader, self._writer = await asyncio.wait_for(
                asyncio.open_connection(host, port, limit=self.STREAM_LIMIT),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise TransportTimeoutError(f"Connection to {host}:{port} timed out") from e
        except OSError as e:
            raise TransportError(f"Failed to connect: {e}") from e

        logger.info(f"Connected to {host}:{port}")

        received = ""
        for _ in range(self.MAX_GREETING_LINES):
            try:
                line = await self._read_line()
            except TransportError:
                await self.close()
                raise
            received += line.decode("utf-8", errors="replace")
            if expected_greeting in received:
                break
        else:
            await self.close()
            raise TransportError(f"Unexpected greeting from {host}:{port}: {received!r}")

        self.greeting = received.replace(expected_greeting, "") if strip_greeting else received

    async def close(self) -> None:
        """Close the stream."""
        if not self._writer:
            return

        writer = self._writer
        self._writer = None
        self._reader = None
        writer.close()
        try:
            await writer.wait_closed()
        except OSError as e:
            logger.debug(f"Error while closing stream: {e}")
        logger.info("Connection closed")

    async def _read_line(self) -> bytes:
        """Read a single line, keeping the trailing \\n\\r."""
        if not self._reader:
            raise TransportError("Not connected")

        try:
            return await asyncio.wait_for(
                self._reader.readuntil(self.LINE_END),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError as e:
            raise TransportTimeoutError("Read timed out") from e
        except asyncio.IncompleteReadError as e:
            raise TransportError("Connection closed unexpectedly") from e
        except asyncio.LimitOverrunError as e:
            raise TransportError("Received line exceeds stream limit") from e

    async def execute(self, command_line: str, terminator: re.Pattern[str]) -> bytes:
        """Send ``command_line`` and return everything received up to the terminator.

        Any failure or cancellation during the round trip closes the stream.
        """
        async with self._exec_lock:
            if not self._writer:
                raise TransportError("Not connected")

            try:
                response = await self._round_trip(command_line, terminator)
            except BaseException:
                await self.close()
                raise

            logger.debug(f"Received: {response!r}")
            return response

    async def _round_trip(self, command_line: str, terminator: re.Pattern[str]) -> bytes:
        assert self._writer is not None
        logger.debug(f"Sending: {command_line!r}")
        try:
            self._writer.write(command_line.encode("utf-8") + self.SEND_END)
            await self._writer.drain()
        except OSError as e:
            raise TransportError(f"Failed to send command: {e}") from e

        response = b""
        while True:
            response += await self._read_line()
            if terminator.search(response.decode("utf-8", errors="replace")):
                return response
