# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""GNTP 1.0 request codec."""

import logging
import platform
from collections.abc import Callable
from typing import Any

from ..constants import (
    CALLBACK_CONTEXT,
    CALLBACK_CONTEXT_TYPE,
    CRLF,
    GNTP_PROTOCOL,
    GNTP_VERSION,
    ORIGIN_PLATFORM_NAME,
    ORIGIN_SOFTWARE_NAME,
    ORIGIN_SOFTWARE_VERSION,
    RequestType,
)
from ..crypto import ENCRYPTION_ALGORITHMS, Cipher, key_hash, random_salt
from ..errors import AmbiguousCallback, GrowlError, UnsupportedCipher
from ..notification import NotificationSession, validate_priority
from ..resources import is_url, new_identifier, resource_uri
from .base import Codec


class TextPacketCodec(Codec):
    """Codec for the Growl Notification Transport Protocol.

    A packet is an info line, a CRLF separated header block and optional
    resource blocks carrying binary icons.  With a session password the info
    line carries a salted key hash; with encryption enabled the header block
    and each resource are encrypted with the derived key.
    """

    def __init__(
        self,
        session: NotificationSession,
        identifiers: Callable[[], str] = new_identifier,
        salt: Callable[[], bytes] = random_salt,
        iv: bytes | None = None,
    ):
        """Initialize codec.

        Args:
            session: Application, password, encryption and notification types
            identifiers: Generator for notification and resource identifiers
            salt: Source of key derivation salts
            iv: Fixed initialization vector; random per packet if omitted
        """
        super().__init__(session)
        self.identifiers = identifiers
        self.salt = salt
        self.iv = iv

    def envelope(self) -> list[str]:
        """Headers sent at the top of every request."""
        return [
            f"Application-Name: {self.session.application_name}",
            f"Origin-Software-Name: {ORIGIN_SOFTWARE_NAME}",
            f"Origin-Software-Version: {ORIGIN_SOFTWARE_VERSION}",
            f"Origin-Platform-Name: {ORIGIN_PLATFORM_NAME}",
            f"Origin-Platform-Version: {platform.python_version()}",
            "Connection: close",
        ]

    def packet(self, request_type: RequestType | str, headers: list[str], resources: dict[str, bytes] | None = None) -> bytes:
        """Build a request packet.

        Args:
            request_type: REGISTER or NOTIFY
            headers: Header lines following the envelope; "" for a blank line
            resources: Resource identifier to binary data

        Returns:
            Serialized packet

        Raises:
            UnsupportedCipher: If the session encryption mode is unknown or
                the session digest is too short to key it
            GrowlError: If encryption is enabled without a password
        """
        request_type = RequestType(request_type).value
        encryption = self.session.encryption
        if encryption != "NONE" and encryption not in ENCRYPTION_ALGORITHMS:
            raise UnsupportedCipher(encryption)

        body = CRLF.join([*self.envelope(), *headers, ""]).encode("utf-8")

        key_info = None
        if self.session.password is not None:
            key_info = key_hash(self.session.password, self.session.hash_algorithm, self.salt())

        cipher = None
        if encryption == "NONE":
            info = " ".join(
                token for token in (f"{GNTP_PROTOCOL}/{GNTP_VERSION}", request_type, "NONE", key_info and str(key_info)) if token
            )
        else:
            if key_info is None:
                raise GrowlError(f"{encryption} encryption requires a password")
            try:
                cipher = Cipher(encryption, key_info.key, self.iv)
            except UnsupportedCipher as e:
                raise UnsupportedCipher(
                    encryption, f"{key_info.algorithm} keys are too short for {encryption} encryption"
                ) from e
            info = f"{GNTP_PROTOCOL}/{GNTP_VERSION} {request_type} {cipher.spec} {key_info}"
            body = cipher.encrypt(body)

        parts = [info.encode("ascii"), body]

        for identifier, data in (resources or {}).items():
            if cipher is not None:
                data = cipher.encrypt(data)
            parts += [
                f"Identifier: {identifier}".encode("utf-8"),
                f"Length: {len(data)}".encode("ascii"),
                b"",
                data,
                b"",
            ]

        parts += [b"", b""]

        packet = CRLF.encode().join(parts)
        logging.debug("< %s", packet.decode("utf-8", errors="replace").replace(CRLF, "\n< "))
        return packet

    def _icon_header(self, header: str, icon: Any, resources: dict[str, bytes]) -> str | None:
        if icon is None:
            return None
        if is_url(icon):
            return f"{header}: {icon}"

        identifier = self.identifiers()
        resources[identifier] = bytes(icon)
        return f"{header}: {resource_uri(identifier)}"

    def registration_packet(self) -> bytes:
        """Build a REGISTER packet for every session notification type."""
        resources: dict[str, bytes] = {}
        headers: list[str] = []

        app_icon = self._icon_header("Application-Icon", self.session.icon, resources)
        if app_icon:
            headers.append(app_icon)

        headers.append(f"Notifications-Count: {len(self.session.notifications)}")
        headers.append("")

        for notification in self.session.notifications.values():
            headers.append(f"Notification-Name: {notification.name}")
            if notification.display_name is not None:
                headers.append(f"Notification-Display-Name: {notification.display_name}")
            if notification.enabled:
                headers.append("Notification-Enabled: true")

            icon = self._icon_header("Notification-Icon", notification.icon, resources)
            if icon:
                headers.append(icon)

            headers.append("")

        headers.pop()  # trailing blank line

        return self.packet(RequestType.REGISTER, headers, resources)

    def notification_packet(
        self,
        name: str,
        title: str,
        text: str | None = None,
        priority: int = 0,
        sticky: bool = False,
        coalesce_id: str | None = None,
        callback_url: str | None = None,
        on_callback: Callable[..., Any] | None = None,
        **options: Any,
    ) -> bytes:
        """Build a NOTIFY packet.

        The notification type need not be registered with the session, but
        the server rejects types it has not seen in a REGISTER request.

        Args:
            name: Notification type
            title: Notification title
            text: Notification body
            priority: -2 (lowest) to 2 (highest)
            sticky: Keep the notification until it is dismissed
            coalesce_id: Replace an earlier notification with this ID
            callback_url: URL the server opens when the notification is clicked
            on_callback: Local handler for the callback frame

        Raises:
            AmbiguousCallback: If both callback_url and on_callback are given
            InvalidPriority: If priority is outside -2 to 2
        """
        if callback_url is not None and on_callback is not None:
            raise AmbiguousCallback()
        validate_priority(priority)

        resources: dict[str, bytes] = {}
        notification = self.session.get(name)

        headers = [f"Notification-ID: {self.identifiers()}"]
        if coalesce_id is not None:
            headers.append(f"Notification-Coalescing-ID: {coalesce_id}")
        headers.append(f"Notification-Name: {name}")
        headers.append(f"Notification-Title: {title}")
        if text is not None:
            headers.append(f"Notification-Text: {text}")
        if priority:
            headers.append(f"Notification-Priority: {priority}")
        if sticky:
            headers.append("Notification-Sticky: True")

        icon = self._icon_header("Notification-Icon", notification and notification.icon, resources)
        if icon:
            headers.append(icon)

        if callback_url is not None or on_callback is not None:
            headers.append(f"Notification-Callback-Context: {CALLBACK_CONTEXT}")
            headers.append(f"Notification-Callback-Context-Type: {CALLBACK_CONTEXT_TYPE}")
            if callback_url is not None:
                headers.append(f"Notification-Callback-Target: {callback_url}")

        return self.packet(RequestType.NOTIFY, headers, resources)
