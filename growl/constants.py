# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Growl protocol constants and enums."""

from enum import Enum, IntEnum

# ----------------------------------------------------------------------------
# Protocol constants
# ----------------------------------------------------------------------------

UDP_PORT = 9887
GNTP_PORT = 23053

UDP_PROTOCOL_VERSION = 1

GNTP_PROTOCOL = "GNTP"
GNTP_VERSION = "1.0"

FRAME_TERMINATOR = b"\r\n\r\n\r\n"
CRLF = "\r\n"

SALT_BYTES = 16

PRIORITY_MIN = -2
PRIORITY_MAX = 2

BROADCAST_ADDRESS = "255.255.255.255"

# ----------------------------------------------------------------------------
# Origin identification (text protocol envelope)
# ----------------------------------------------------------------------------

ORIGIN_SOFTWARE_NAME = "growl-client"
ORIGIN_SOFTWARE_VERSION = "1.0.0"
ORIGIN_PLATFORM_NAME = "python"

CALLBACK_CONTEXT = "context"
CALLBACK_CONTEXT_TYPE = "type"

RESOURCE_SCHEME = "x-growl-resource"

NULL_VALUE = "(null)"

# ----------------------------------------------------------------------------
# Binary protocol packet types
# ----------------------------------------------------------------------------


class PacketType(IntEnum):
    """Packet type byte of the legacy UDP protocol."""

    REGISTRATION = 0
    NOTIFICATION = 1


# ----------------------------------------------------------------------------
# Text protocol message types
# ----------------------------------------------------------------------------


class RequestType(str, Enum):
    """Request types sent in the GNTP info line."""

    REGISTER = "REGISTER"
    NOTIFY = "NOTIFY"


class ResponseType(str, Enum):
    """Response types received in the GNTP info line."""

    OK = "-OK"
    CALLBACK = "-CALLBACK"
    ERROR = "-ERROR"


class Protocol(str, Enum):
    """Wire protocols a client may speak."""

    UDP = "udp"
    GNTP = "gntp"


# ----------------------------------------------------------------------------
# Error codes
# ----------------------------------------------------------------------------


class ErrorCode(IntEnum):
    """Numeric Error-Code values reported by a GNTP server."""

    TIMED_OUT = 200  # Server timed out waiting for the request
    NETWORK_FAILURE = 201  # Server could not be reached
    INVALID_REQUEST = 300  # Malformed request
    UNKNOWN_PROTOCOL = 301  # Not a GNTP request
    UNKNOWN_PROTOCOL_VERSION = 302  # Unsupported GNTP version
    REQUIRED_HEADER_MISSING = 303
    NOT_AUTHORIZED = 400  # Missing or wrong password
    UNKNOWN_APPLICATION = 401  # Application not registered
    UNKNOWN_NOTIFICATION = 402  # Notification type not registered
    ALREADY_PROCESSED = 403
    NOTIFICATION_DISABLED = 404  # Registered but disabled by the user
    INTERNAL_SERVER_ERROR = 500
