# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Growl exception types."""

from typing import Any

from .constants import ErrorCode


class GrowlError(Exception):
    """Base class for all errors raised by this package."""


# ----------------------------------------------------------------------------
# Local validation errors (raised before any network I/O)
# ----------------------------------------------------------------------------


class InvalidPriority(GrowlError, ValueError):
    """Priority outside the range -2 to 2."""

    def __init__(self, priority: int):
        super().__init__(f"invalid priority level {priority}")
        self.priority = priority


class UnknownNotificationType(GrowlError, ValueError):
    """Notification type was not registered with the session."""

    def __init__(self, name: str):
        super().__init__(f"unknown notification type {name!r}")
        self.name = name


class AmbiguousCallback(GrowlError, ValueError):
    """Both a callback URL and a callback handler were supplied."""

    def __init__(self) -> None:
        super().__init__("provide either a url or a handler for callbacks, not both")


class UnsupportedCipher(GrowlError, ValueError):
    """Encryption mode is unknown or cannot be keyed by the chosen digest."""

    def __init__(self, mode: str, reason: str | None = None):
        super().__init__(reason or f"unknown GNTP encryption mode {mode}")
        self.mode = mode


class UnsupportedHashAlgorithm(GrowlError, ValueError):
    """Digest algorithm is not one of MD5, SHA1, SHA256 or SHA512."""

    def __init__(self, algorithm: str):
        super().__init__(f"unsupported hash algorithm {algorithm}")
        self.algorithm = algorithm


class PacketTooLarge(GrowlError, ValueError):
    """A field does not fit its length or count slot in a UDP packet."""


# ----------------------------------------------------------------------------
# Response errors
# ----------------------------------------------------------------------------


class MalformedResponse(GrowlError, ValueError):
    """Response frame could not be parsed."""


class ResponseError(GrowlError):
    """Error frame reported by the server.

    Attributes:
        code: Condition reported in the Error-Code header
        headers: Parsed headers of the error frame
        description: Error-Description text, if any
    """

    def __init__(self, code: ErrorCode, headers: dict[str, Any]):
        self.code = code
        self.headers = headers
        self.description = headers.get("Error-Description")
        super().__init__(self.description or code.name)


class ProtocolViolation(GrowlError):
    """Error frame carrying an Error-Code this client does not know."""

    def __init__(self, code: Any, headers: dict[str, Any]):
        self.code = code
        self.headers = headers
        self.description = headers.get("Error-Description")
        super().__init__(f"unknown GNTP error code {code!r}")
