# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Legacy Growl UDP packet codec.

Registration packet::

    version:u8 type:u8 appNameLen:u16 numAll:u8 numDefault:u8
    <application name> (<nameLen:u16><name>){numAll} (<index:u8>){numDefault}
    <md5 checksum>

Notification packet::

    version:u8 type:u8 flags:u16 nameLen:u16 titleLen:u16 descLen:u16 appNameLen:u16
    <name><title><description><application name>
    <md5 checksum>

Lengths are big-endian.  The flags word (12 reserved bits, a signed 3-bit
priority and a sticky bit) is sent in host byte order, as the Growl daemon
reads it from a C bitfield.
"""

import hashlib
import struct

from ..constants import UDP_PROTOCOL_VERSION, PacketType
from ..errors import PacketTooLarge, UnknownNotificationType
from ..notification import NotificationSession, validate_priority
from .base import Codec

REGISTRATION_HEADER = struct.Struct(">BBHBB")
NOTIFICATION_PREFIX = struct.Struct(">BB")
NOTIFICATION_FLAGS = struct.Struct("=H")  # host byte order
NOTIFICATION_LENGTHS = struct.Struct(">HHHH")
NAME_LENGTH = struct.Struct(">H")

MAX_COUNT = 0xFF
MAX_LENGTH = 0xFFFF


def _encode(field: str, value: str) -> bytes:
    encoded = value.encode("utf-8")
    if len(encoded) > MAX_LENGTH:
        raise PacketTooLarge(f"{field} is {len(encoded)} bytes, the limit is {MAX_LENGTH}")
    return encoded


class BinaryPacketCodec(Codec):
    """Codec for the fixed-layout UDP protocol used by Growl 1.2 and older."""

    def __init__(self, session: NotificationSession, default_notifications: list[str] | None = None):
        """Initialize codec.

        Args:
            session: Application name, password and notification types
            default_notifications: Names enabled by default; the session's
                enabled types if omitted
        """
        super().__init__(session)
        self.default_notifications = default_notifications

    @property
    def all_notifications(self) -> list[str]:
        return self.session.notification_names

    @property
    def defaults(self) -> list[str]:
        if self.default_notifications is None:
            return self.session.default_notification_names
        return self.default_notifications

    def checksum(self, packet: bytes) -> bytes:
        """MD5 of the packet followed by the password, if any."""
        digest = hashlib.md5(packet)
        if self.session.password is not None:
            digest.update(self.session.password.encode("utf-8"))
        return digest.digest()

    def registration_packet(self) -> bytes:
        """Build a registration packet for every session notification type.

        Raises:
            PacketTooLarge: If there are more than 255 types or a name is
                longer than 65535 bytes
        """
        app_name = _encode("application name", self.session.application_name)
        all_notifications = self.all_notifications
        if len(all_notifications) > MAX_COUNT:
            raise PacketTooLarge(f"{len(all_notifications)} notification types, the limit is {MAX_COUNT}")

        data = bytearray(app_name)
        for name in all_notifications:
            encoded = _encode("notification name", name)
            data += NAME_LENGTH.pack(len(encoded))
            data += encoded

        # defaults are indices into all_notifications; unknown names are dropped
        indices = [all_notifications.index(name) for name in self.defaults if name in all_notifications]
        data += bytes(indices)

        packet = REGISTRATION_HEADER.pack(
            UDP_PROTOCOL_VERSION,
            PacketType.REGISTRATION,
            len(app_name),
            len(all_notifications),
            len(indices),
        )
        packet += bytes(data)

        return packet + self.checksum(packet)

    def notification_packet(
        self, name: str, title: str, text: str | None = None, priority: int = 0, sticky: bool = False
    ) -> bytes:
        """Build a notification packet.

        Args:
            name: Registered notification type
            title: Notification title
            text: Notification description
            priority: -2 (lowest) to 2 (highest)
            sticky: Keep the notification until it is clicked

        Raises:
            UnknownNotificationType: If name is not a session notification type
            InvalidPriority: If priority is outside -2 to 2
            PacketTooLarge: If a field is longer than 65535 bytes
        """
        if name not in self.session.notifications:
            raise UnknownNotificationType(name)
        validate_priority(priority)

        flags = (priority & 0x7) << 1
        if sticky:
            flags |= 1

        fields = [
            _encode("notification name", name),
            _encode("title", title),
            _encode("description", text or ""),
            _encode("application name", self.session.application_name),
        ]

        packet = NOTIFICATION_PREFIX.pack(UDP_PROTOCOL_VERSION, PacketType.NOTIFICATION)
        packet += NOTIFICATION_FLAGS.pack(flags)
        packet += NOTIFICATION_LENGTHS.pack(*(len(f) for f in fields))
        packet += b"".join(fields)

        return packet + self.checksum(packet)
