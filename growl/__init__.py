# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
r"""Growl network notification client.

This package sends desktop notifications to a remote Growl daemon using
either of its wire protocols:

- The legacy UDP protocol (Growl 1.2 and older) with MD5 checksums
- GNTP 1.0 over TCP (Growl 1.3 and later) with password authentication,
  DES/3DES/AES encryption, binary icon resources and click callbacks

The implementation provides:
- NotificationSession and NotificationType models shared by both protocols
- BinaryPacketCodec and TextPacketCodec packet builders
- BinaryTransport and TextTransport sockets
- BinaryClient and TextClient for sending registrations and notifications
- Response parsing with typed headers and server error codes
"""

# Import public API from modules
from .client import BinaryClient, Client, TextClient
from .codecs import (
    BinaryPacketCodec,
    Codec,
    TextPacketCodec,
    get_codec,
    list_codecs,
    register_codec,
)
from .constants import (
    GNTP_PORT,
    ORIGIN_SOFTWARE_VERSION,
    UDP_PORT,
    ErrorCode,
    PacketType,
    Protocol,
    RequestType,
    ResponseType,
)
from .crypto import Cipher, KeyInfo, key_hash
from .errors import (
    AmbiguousCallback,
    GrowlError,
    InvalidPriority,
    MalformedResponse,
    PacketTooLarge,
    ProtocolViolation,
    ResponseError,
    UnknownNotificationType,
    UnsupportedCipher,
    UnsupportedHashAlgorithm,
)
from .frames import FrameReader, Response, parse_header, parse_response
from .notification import NotificationSession, NotificationType, validate_priority
from .transport import BinaryTransport, TextTransport

__version__ = ORIGIN_SOFTWARE_VERSION

# Public API exports
__all__ = [
    # Clients
    "Client",
    "BinaryClient",
    "TextClient",
    # Session
    "NotificationSession",
    "NotificationType",
    "validate_priority",
    # Codecs
    "Codec",
    "BinaryPacketCodec",
    "TextPacketCodec",
    "get_codec",
    "list_codecs",
    "register_codec",
    # Transports
    "BinaryTransport",
    "TextTransport",
    # Responses
    "FrameReader",
    "Response",
    "parse_header",
    "parse_response",
    # Crypto
    "Cipher",
    "KeyInfo",
    "key_hash",
    # Constants and enums
    "UDP_PORT",
    "GNTP_PORT",
    "PacketType",
    "RequestType",
    "ResponseType",
    "Protocol",
    "ErrorCode",
    # Errors
    "GrowlError",
    "InvalidPriority",
    "UnknownNotificationType",
    "AmbiguousCallback",
    "UnsupportedCipher",
    "UnsupportedHashAlgorithm",
    "PacketTooLarge",
    "MalformedResponse",
    "ResponseError",
    "ProtocolViolation",
]
