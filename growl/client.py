# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Growl clients for the UDP and GNTP protocols."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .codecs import BinaryPacketCodec, TextPacketCodec, get_codec
from .constants import Protocol
from .frames import Response
from .notification import NotificationSession
from .transport import BinaryTransport, TextTransport


class Client(ABC):
    """Sends registrations and notifications for one session to one host."""

    protocol: Protocol

    def __init__(self, host: str, session: NotificationSession):
        self.host = host
        self.session = session

    @abstractmethod
    def register(self) -> Any:
        """Register the session's notification types with the host."""
        pass

    @abstractmethod
    def notify(self, name: str, title: str, text: str | None = None, priority: int = 0, sticky: bool = False, **options: Any) -> Any:
        """Send one notification."""
        pass

    def close(self) -> None:
        """Release any resources held by the client."""

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class BinaryClient(Client):
    """Client for the legacy UDP protocol used by Growl 1.2 and older."""

    protocol = Protocol.UDP

    def __init__(
        self,
        host: str,
        session: NotificationSession,
        default_notifications: list[str] | None = None,
        transport: BinaryTransport | None = None,
    ):
        """Initialize client.

        Args:
            host: Growl host or broadcast address
            session: Application name, password and notification types
            default_notifications: Names enabled by default
            transport: Transport to send through; a new UDP socket if omitted
        """
        super().__init__(host, session)
        self.codec: BinaryPacketCodec = get_codec(self.protocol, session, default_notifications=default_notifications)
        self.transport = transport or BinaryTransport(host)

    def register(self) -> None:
        """Send a registration packet."""
        self.transport.send(self.codec.registration_packet())

    def notify(self, name: str, title: str, text: str | None = None, priority: int = 0, sticky: bool = False) -> None:
        """Send a notification.

        GNTP-only options such as callbacks are not accepted.

        Raises:
            UnknownNotificationType: If name is not a session notification type
            InvalidPriority: If priority is outside -2 to 2
        """
        self.transport.send(self.codec.notification_packet(name, title, text, priority, sticky))

    def close(self) -> None:
        self.transport.close()


class TextClient(Client):
    """Client for GNTP, the protocol used by Growl 1.3 and later."""

    protocol = Protocol.GNTP

    def __init__(
        self,
        host: str,
        session: NotificationSession,
        codec: TextPacketCodec | None = None,
        transport: TextTransport | None = None,
    ):
        """Initialize client.

        Args:
            host: Growl host
            session: Application, password, encryption and notification types
            codec: Codec to build packets with
            transport: Transport to exchange packets through
        """
        super().__init__(host, session)
        self.codec: TextPacketCodec = codec or get_codec(self.protocol, session)
        self.transport = transport or TextTransport(host)

    def register(self) -> Response:
        """Send a REGISTER request.

        Raises:
            ResponseError: If the server rejected the registration
        """
        return self.transport.exchange(self.codec.registration_packet())

    def notify(
        self,
        name: str,
        title: str,
        text: str | None = None,
        priority: int = 0,
        sticky: bool = False,
        coalesce_id: str | None = None,
        callback_url: str | None = None,
        on_callback: Callable[[Response], None] | None = None,
        **options: Any,
    ) -> Response:
        """Send a NOTIFY request.

        If on_callback is given this blocks until the server reports that the
        notification was clicked, closed or timed out.

        Raises:
            AmbiguousCallback: If both callback_url and on_callback are given
            InvalidPriority: If priority is outside -2 to 2
            ResponseError: If the server rejected the notification
        """
        packet = self.codec.notification_packet(
            name,
            title,
            text,
            priority,
            sticky,
            coalesce_id=coalesce_id,
            callback_url=callback_url,
            on_callback=on_callback,
        )
        return self.transport.exchange(packet, on_callback)
