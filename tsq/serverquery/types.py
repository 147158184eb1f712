"""ServerQuery type definitions."""

from enum import IntEnum


class TS3ErrorCode(IntEnum):
    """Error ids reported in the ``error id=... msg=...`` status line."""

    OK = 0
    UNDEFINED = 1
    NOT_IMPLEMENTED = 2
    LIB_TIME_LIMIT_REACHED = 5
    COMMAND_NOT_FOUND = 256
    UNABLE_TO_BIND_NETWORK_PORT = 257
    NO_NETWORK_PORT_AVAILABLE = 258

    CLIENT_INVALID_ID = 512
    CLIENT_NICKNAME_INUSE = 513
    CLIENT_PROTOCOL_LIMIT_REACHED = 515
    CLIENT_INVALID_TYPE = 516
    CLIENT_ALREADY_SUBSCRIBED = 517
    CLIENT_NOT_LOGGED_IN = 518
    CLIENT_COULD_NOT_VALIDATE_IDENTITY = 519
    CLIENT_INVALID_PASSWORD = 520
    CLIENT_TOO_MANY_CLONES_CONNECTED = 521
    CLIENT_VERSION_OUTDATED = 522
    CLIENT_IS_ONLINE = 523
    CLIENT_IS_FLOODING = 524

    CHANNEL_INVALID_ID = 768
    CHANNEL_PROTOCOL_LIMIT_REACHED = 769
    CHANNEL_ALREADY_IN = 770
    CHANNEL_NAME_INUSE = 771

    SERVER_INVALID_ID = 1024
    SERVER_RUNNING = 1025
    SERVER_IS_SHUTTING_DOWN = 1026
    SERVER_IS_NOT_RUNNING = 1033

    DATABASE = 1280
    DATABASE_EMPTY_RESULT = 1281

    PARAMETER_QUOTE = 1536
    PARAMETER_INVALID_COUNT = 1537
    PARAMETER_INVALID = 1538
    PARAMETER_NOT_FOUND = 1539
    PARAMETER_CONVERT = 1540
    PARAMETER_INVALID_SIZE = 1541
    PARAMETER_MISSING = 1542
    PARAMETER_CHECKSUM = 1543

    PERMISSIONS_INVALID_GROUP_ID = 2560
    PERMISSIONS_CLIENT_INSUFFICIENT = 2568
