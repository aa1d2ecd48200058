# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""UDP and GNTP socket transports."""

import logging
import socket
from collections.abc import Callable

import psutil

from .constants import BROADCAST_ADDRESS, GNTP_PORT, UDP_PORT
from .frames import FrameReader, Response, parse_response


def local_broadcast_addresses() -> set[str]:
    """Broadcast addresses of the local network interfaces."""
    addresses = set()
    for snics in psutil.net_if_addrs().values():
        for snic in snics:
            if snic.broadcast:
                addresses.add(snic.broadcast)
    return addresses


class BinaryTransport:
    """Connected datagram socket for the legacy UDP protocol.

    Sends are fire-and-forget; the protocol has no acknowledgement.
    """

    def __init__(
        self,
        host: str,
        port: int = UDP_PORT,
        socket_factory: Callable[..., socket.socket] = socket.socket,
        interfaces: Callable[[], set[str]] = local_broadcast_addresses,
    ):
        """Initialize transport.

        Args:
            host: Growl host or broadcast address
            port: Growl UDP port
            socket_factory: Creates the socket from (family, type, proto)
            interfaces: Returns local broadcast addresses
        """
        self.host = host
        self.port = port

        family, socktype, proto, _, address = socket.getaddrinfo(host, port, 0, socket.SOCK_DGRAM)[0]
        self.address = address

        self._sock = socket_factory(family, socktype, proto)
        if self._is_broadcast(address[0], interfaces):
            logging.debug("Enabling broadcast for %s", address[0])
            self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
        self._sock.connect(address)

    @staticmethod
    def _is_broadcast(ip_address: str, interfaces: Callable[[], set[str]]) -> bool:
        if ip_address == BROADCAST_ADDRESS:
            return True
        return ip_address in interfaces()

    def send(self, packet: bytes) -> None:
        """Send one packet."""
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_SNDBUF, len(packet))
        logging.debug("Sending %d byte packet to %s:%d", len(packet), self.host, self.port)
        self._sock.send(packet)

    def close(self) -> None:
        """Close the socket."""
        self._sock.close()

    def __enter__(self) -> "BinaryTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class TextTransport:
    """GNTP transport opening one TCP connection per exchange."""

    def __init__(
        self,
        host: str,
        port: int = GNTP_PORT,
        connect: Callable[..., socket.socket] = socket.create_connection,
        timeout: float | None = None,
    ):
        """Initialize transport.

        Args:
            host: Growl host
            port: GNTP port
            connect: Opens a stream connection from an (host, port) address
            timeout: Socket timeout; None blocks indefinitely
        """
        self.host = host
        self.port = port
        self.timeout = timeout
        self._connect = connect

    def exchange(self, packet: bytes, on_callback: Callable[[Response], None] | None = None) -> Response:
        """Send a request and read its response.

        Args:
            packet: Serialized request
            on_callback: Called with the callback frame, which is read after
                the response; blocks until the server sends it

        Returns:
            Parsed response

        Raises:
            ResponseError: If the server reported an error
            ConnectionError: If the server closed without responding
        """
        sock = self._connect((self.host, self.port), self.timeout)
        try:
            logging.debug("Sending %d byte packet to %s:%d", len(packet), self.host, self.port)
            sock.sendall(packet)

            reader = FrameReader(sock)
            response = parse_response(reader.read_frame())

            if on_callback is not None:
                callback = parse_response(reader.read_frame())
                on_callback(callback)

            return response
        finally:
            sock.close()
