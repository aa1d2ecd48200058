"""Tests for the UDP and GNTP transports."""

import socket

import pytest

from conftest import FakeDatagramSocket, FakeStreamSocket
from growl import BinaryTransport, ResponseError, ResponseType, TextTransport
from growl.transport import local_broadcast_addresses

OK = b"GNTP/1.0 -OK NONE\r\nResponse-Action: NOTIFY\r\nNotification-ID: 4\r\n\r\n\r\n"
CALLBACK = (
    b"GNTP/1.0 -CALLBACK NONE\r\n"
    b"Notification-ID: 4\r\n"
    b"Notification-Callback-Result: CLICKED\r\n"
    b"Notification-Callback-Context: context\r\n"
    b"Notification-Callback-Context-Type: type\r\n"
    b"\r\n\r\n"
)
ERROR = b"GNTP/1.0 -ERROR NONE\r\nError-Code: 402\r\nError-Description: unknown notification\r\n\r\n\r\n"


class FakeConnect:
    """Stands in for socket.create_connection."""

    def __init__(self, response: bytes):
        self.sock = FakeStreamSocket(response)
        self.calls = []

    def __call__(self, address, timeout=None):
        self.calls.append((address, timeout))
        return self.sock


# ----------------------------------------------------------------------------
# UDP
# ----------------------------------------------------------------------------


def test_local_broadcast_addresses() -> None:
    """Test interface broadcast addresses are strings."""
    addresses = local_broadcast_addresses()

    assert isinstance(addresses, set)
    assert all(isinstance(address, str) for address in addresses)


def test_binary_transport_unicast() -> None:
    """Test a unicast host does not enable broadcast."""
    sockets = []

    def factory(*args):
        sockets.append(FakeDatagramSocket(*args))
        return sockets[-1]

    transport = BinaryTransport("127.0.0.1", socket_factory=factory, interfaces=lambda: {"192.168.1.255"})
    sock = sockets[0]

    assert sock.family == socket.AF_INET
    assert sock.socktype == socket.SOCK_DGRAM
    assert sock.connected_to == ("127.0.0.1", 9887)
    assert (socket.SOL_SOCKET, socket.SO_BROADCAST) not in sock.options

    transport.send(b"packet")

    assert sock.sent == [b"packet"]
    assert sock.options[(socket.SOL_SOCKET, socket.SO_SNDBUF)] == len(b"packet")

    transport.close()
    assert sock.closed


@pytest.mark.parametrize(
    "host, interfaces",
    [
        ("255.255.255.255", set()),
        ("192.168.1.255", {"192.168.1.255"}),
    ],
)
def test_binary_transport_broadcast(host, interfaces) -> None:
    """Test broadcast is enabled for global and interface broadcast addresses."""
    sockets = []

    def factory(*args):
        sockets.append(FakeDatagramSocket(*args))
        return sockets[-1]

    BinaryTransport(host, port=1234, socket_factory=factory, interfaces=lambda: interfaces)

    assert sockets[0].options[(socket.SOL_SOCKET, socket.SO_BROADCAST)] == 1
    assert sockets[0].connected_to == (host, 1234)


def test_binary_transport_loopback() -> None:
    """Test a packet reaches a real UDP socket."""
    receiver = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    receiver.bind(("127.0.0.1", 0))
    receiver.settimeout(2.0)
    port = receiver.getsockname()[1]

    try:
        with BinaryTransport("127.0.0.1", port=port, interfaces=set) as transport:
            transport.send(b"\x01\x01hello")
        data, _ = receiver.recvfrom(4096)
    finally:
        receiver.close()

    assert data == b"\x01\x01hello"


# ----------------------------------------------------------------------------
# GNTP
# ----------------------------------------------------------------------------


def test_text_transport_exchange() -> None:
    """Test a request and its response."""
    connect = FakeConnect(OK)
    transport = TextTransport("growl.local", connect=connect, timeout=5.0)

    response = transport.exchange(b"request\r\n\r\n")

    assert connect.calls == [(("growl.local", 23053), 5.0)]
    assert bytes(connect.sock.output) == b"request\r\n\r\n"
    assert response.status == ResponseType.OK
    assert response["Notification-ID"] == "4"
    assert connect.sock.closed


def test_text_transport_error() -> None:
    """Test error responses are raised and the socket is closed."""
    connect = FakeConnect(ERROR)
    transport = TextTransport("growl.local", connect=connect)

    with pytest.raises(ResponseError) as excinfo:
        transport.exchange(b"request")

    assert excinfo.value.code == 402
    assert connect.sock.closed


def test_text_transport_closed_without_response() -> None:
    """Test a server closing without a response."""
    connect = FakeConnect(b"")
    transport = TextTransport("growl.local", connect=connect)

    with pytest.raises(ConnectionError):
        transport.exchange(b"request")

    assert connect.sock.closed


def test_text_transport_callback() -> None:
    """Test the callback frame following the response."""
    connect = FakeConnect(OK + CALLBACK)
    transport = TextTransport("growl.local", connect=connect)
    callbacks = []

    response = transport.exchange(b"request", on_callback=callbacks.append)

    assert response.status == ResponseType.OK
    assert len(callbacks) == 1
    assert callbacks[0].status == ResponseType.CALLBACK
    assert callbacks[0]["Notification-Callback-Result"] == "CLICKED"


def test_text_transport_callback_not_read_without_handler() -> None:
    """Test only the response frame is consumed without a handler."""
    connect = FakeConnect(OK + CALLBACK)
    transport = TextTransport("growl.local", connect=connect)

    response = transport.exchange(b"request")

    assert response["Response-Action"] == "NOTIFY"


def test_text_transport_server(gntp_server) -> None:
    """Test an exchange with a GNTP server over TCP."""
    server = gntp_server(OK)
    transport = TextTransport("127.0.0.1", port=server.port, timeout=5.0)
    request = b"GNTP/1.0 NOTIFY NONE\r\nApplication-Name: test-app\r\n\r\n\r\n"

    response = transport.exchange(request)

    assert response["Notification-ID"] == "4"
    assert server.requests == [request]


def test_text_transport_server_callback(gntp_server) -> None:
    """Test a callback delivered by a GNTP server over TCP."""
    server = gntp_server(OK, CALLBACK)
    transport = TextTransport("127.0.0.1", port=server.port, timeout=5.0)
    callbacks = []

    transport.exchange(b"GNTP/1.0 NOTIFY NONE\r\n\r\n\r\n", on_callback=callbacks.append)

    assert [callback["Notification-ID"] for callback in callbacks] == ["4"]
