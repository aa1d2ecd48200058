"""Shared fixtures for Growl tests."""

import socket
import threading

import pytest

from growl import NotificationSession
from growl.constants import FRAME_TERMINATOR


class FakeStreamSocket:
    """Stream socket that replays canned input and records output."""

    def __init__(self, response: bytes = b"", chunk_size: int = 4096):
        self._input = response
        self._chunk_size = chunk_size
        self.output = bytearray()
        self.closed = False

    def sendall(self, data: bytes) -> None:
        self.output.extend(data)

    def recv(self, n: int) -> bytes:
        n = min(n, self._chunk_size)
        chunk, self._input = self._input[:n], self._input[n:]
        return chunk

    def close(self) -> None:
        self.closed = True


class FakeDatagramSocket:
    """Datagram socket that records options and sent packets."""

    def __init__(self, family=None, socktype=None, proto=None):
        self.family = family
        self.socktype = socktype
        self.options: dict[tuple[int, int], int] = {}
        self.connected_to = None
        self.sent: list[bytes] = []
        self.closed = False

    def setsockopt(self, level: int, option: int, value: int) -> None:
        self.options[(level, option)] = value

    def connect(self, address) -> None:
        self.connected_to = address

    def send(self, data: bytes) -> int:
        self.sent.append(data)
        return len(data)

    def close(self) -> None:
        self.closed = True


class FakeGNTPServer:
    """Threaded GNTP daemon answering each connection with canned frames."""

    def __init__(self, *responses: bytes):
        self.responses = list(responses)
        self.requests: list[bytes] = []
        self._srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._srv.bind(("127.0.0.1", 0))
        self._srv.listen()
        self.port = self._srv.getsockname()[1]
        self._thread = threading.Thread(target=self._serve, daemon=True)
        self._thread.start()

    def _serve(self) -> None:
        while True:
            try:
                conn, _ = self._srv.accept()
            except OSError:
                break  # socket closed
            with conn:
                request = bytearray()
                while FRAME_TERMINATOR not in request:
                    chunk = conn.recv(4096)
                    if not chunk:
                        break
                    request.extend(chunk)
                self.requests.append(bytes(request))
                for response in self.responses:
                    conn.sendall(response)

    def stop(self) -> None:
        try:
            self._srv.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        finally:
            self._srv.close()
        self._thread.join(timeout=1.0)


@pytest.fixture
def session() -> NotificationSession:
    return NotificationSession(application_name="test-app")


@pytest.fixture
def identifiers():
    return lambda: "4"


@pytest.fixture
def gntp_server():
    servers: list[FakeGNTPServer] = []

    def start(*responses: bytes) -> FakeGNTPServer:
        server = FakeGNTPServer(*responses)
        servers.append(server)
        return server

    yield start

    for server in servers:
        server.stop()
