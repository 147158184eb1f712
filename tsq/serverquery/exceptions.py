"""ServerQuery exceptions."""

from tsq.serverquery.types import TS3ErrorCode


class TS3Error(Exception):
    """Base exception for ServerQuery errors."""

    pass


class TransportError(TS3Error):
    """Transport-level errors (refused, closed stream, unexpected greeting)."""

    pass


class TransportTimeoutError(TransportError):
    """Transport operation timed out."""

    pass


class MalformedResponseError(TS3Error):
    """Response did not contain a status line."""

    def __init__(self, response: str) -> None:
        self.response = response
        super().__init__(f"no status line in response: {response[:80]!r}")


class ProtocolError(TS3Error):
    """Query command failed with a non-zero status id reported by the server.

    ``message`` is the unescaped ``msg`` field, ``status`` the unescaped
    status line as received.
    """

    def __init__(
        self,
        error_id: int,
        message: str,
        failed_permid: int | None = None,
        status: str | None = None,
    ) -> None:
        try:
            self.error_code = TS3ErrorCode(error_id)
        except ValueError:
            self.error_code = TS3ErrorCode.UNDEFINED
        self.error_id = error_id
        self.message = message
        self.failed_permid = failed_permid
        self.status = status if status is not None else f"error id={error_id} msg={message}"
        super().__init__(self.status)
