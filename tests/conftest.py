"""Shared fixtures: a local fake ServerQuery server."""

import asyncio

import pytest_asyncio

from tsq.serverquery.protocol import GREETING

RESPONSES: dict[str, bytes] = {
    "whoami": b"virtualserver_status=online client_id=1 client_nickname=serveradmin\n\rerror id=0 msg=ok\n\r",
    "clientlist": b"clid=1 client_nickname=A|clid=2 client_nickname=B\\sC\n\rerror id=0 msg=ok\n\r",
    "use sid=1": b"error id=0 msg=ok\n\r",
    "login client_login_name=serveradmin client_login_password=secret": b"error id=0 msg=ok\n\r",
    "clientupdate client_nickname=Query\\sBot": b"error id=513 msg=nickname\\sis\\salready\\sin\\suse\n\r",
}


class FakeServer:
    def __init__(self, greeting: bytes = b"TS3\n\r" + GREETING.encode("utf-8")) -> None:
        self.greeting = greeting
        self.responses = dict(RESPONSES)
        self.received: list[str] = []
        self.server: asyncio.Server | None = None
        self.port = 0

    async def handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        writer.write(self.greeting)
        await writer.drain()
        while True:
            line = await reader.readline()
            if not line:
                break
            command = line.decode("utf-8").rstrip("\n")
            self.received.append(command)
            if command == "quit":
                writer.write(b"error id=0 msg=ok\n\r")
                await writer.drain()
                break
            if command == "slow":
                # Never answers, lets the client time out
                continue
            if command == "late":
                # Answers after the client has given up waiting
                await asyncio.sleep(0.4)
                try:
                    writer.write(b"clid=99 client_nickname=STALE\n\rerror id=0 msg=ok\n\r")
                    await writer.drain()
                except ConnectionError:
                    break
                continue
            if command == "split":
                writer.write(b"clid=1")
                await writer.drain()
                await asyncio.sleep(0.05)
                writer.write(b"\n\rerror id=0 ")
                await writer.drain()
                await asyncio.sleep(0.05)
                writer.write(b"msg=ok\n\r")
                await writer.drain()
                continue
            writer.write(self.responses.get(command, b"error id=256 msg=command\\snot\\sfound\n\r"))
            await writer.drain()
        writer.close()

    async def start(self) -> None:
        self.server = await asyncio.start_server(self.handle, "127.0.0.1", 0)
        self.port = self.server.sockets[0].getsockname()[1]

    async def stop(self) -> None:
        assert self.server is not None
        self.server.close()
        await self.server.wait_closed()


@pytest_asyncio.fixture
async def server():
    fake = FakeServer()
    await fake.start()
    yield fake
    await fake.stop()


@pytest_asyncio.fixture
async def make_server():
    servers: list[FakeServer] = []

    async def factory(greeting: bytes) -> FakeServer:
        fake = FakeServer(greeting)
        await fake.start()
        servers.append(fake)
        return fake

    yield factory
    for fake in servers:
        await fake.stop()
