import argparse
import asyncio
import logging
import sys
from pathlib import Path

from tsq.querycli.config import CONFIG_PATH, Settings, get_settings
from tsq.serverquery import ProtocolError, Session, TS3Error

logger = logging.getLogger(__name__)


def load_settings(config_path: Path) -> Settings:
    try:
        return get_settings(config_path)
    except Exception as e:
        logger.error("Failed to load config file %s: %s", config_path, e)
        sys.exit(1)


def split_tokens(tokens: list[str]) -> tuple[dict[str, str], list[str]]:
    """Split ``key=value`` tokens into named arguments, everything else is positional."""
    named: dict[str, str] = {}
    positional: list[str] = []
    for token in tokens:
        key, sep, value = token.partition("=")
        if sep and key:
            named[key] = value
        else:
            positional.append(token)
    return named, positional


def format_records(records: list[dict[str, str]]) -> str:
    blocks = []
    for record in records:
        blocks.append("\n".join(f"{key}={value}" if value else key for key, value in record.items() if key))
    return "\n\n".join(blocks)


async def run_query(settings: Settings, command: str, tokens: list[str]) -> list[dict[str, str]]:
    query = settings.query
    named, positional = split_tokens(tokens)

    async with Session(timeout=query.timeout) as session:
        await session.connect(query.host, query.port)

        if query.user:
            await session.command(
                "login",
                {"client_login_name": query.user, "client_login_password": query.password or ""},
            )

        if query.server_id is not None:
            await session.command("use", {"sid": query.server_id})

        if query.nickname:
            try:
                await session.command("clientupdate", {"client_nickname": query.nickname})
            except ProtocolError as e:
                logger.warning("Could not set nickname %r: %s", query.nickname, e.message)

        return await session.command(command, named, positional)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="TeamSpeak 3 ServerQuery client",
        epilog="Use -- before arguments starting with a dash, e.g. tsq-query clientlist -- -uid",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=CONFIG_PATH,
        help=f"Path to config file (default: {CONFIG_PATH})",
    )
    parser.add_argument("--host", help="Override the configured host")
    parser.add_argument("--port", type=int, help="Override the configured port")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log wire traffic")
    parser.add_argument("command", help="ServerQuery command, e.g. clientlist")
    parser.add_argument("tokens", nargs="*", help="key=value named arguments or positional arguments")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    settings = load_settings(args.config)
    if args.host:
        settings.query.host = args.host
    if args.port:
        settings.query.port = args.port

    try:
        records = asyncio.run(run_query(settings, args.command, args.tokens))
    except TS3Error as e:
        logger.error("%s", e)
        sys.exit(1)

    print(format_records(records))


if __name__ == "__main__":
    main()
