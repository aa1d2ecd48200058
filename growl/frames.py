# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""GNTP response frames and header coercion."""

import logging
import re
import socket
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from .constants import FRAME_TERMINATOR, NULL_VALUE, ErrorCode, ResponseType
from .errors import MalformedResponse, ProtocolViolation, ResponseError
from .resources import to_url

INFO_LINE = re.compile(r"^GNTP/([\d.]+) (\S+) (\S+)$")

# ----------------------------------------------------------------------------
# Header coercion tables
# ----------------------------------------------------------------------------

BOOLEAN_HEADERS = frozenset(
    {
        "Notification-Enabled",
        "Notification-Sticky",
    }
)

INTEGER_HEADERS = frozenset(
    {
        "Error-Code",
        "Notifications-Count",
        "Notification-Priority",
        "Notifications-Priority",
        "Subscriber-Port",
        "Subscription-TTL",
    }
)

TIMESTAMP_HEADERS = frozenset(
    {
        "Notification-Callback-Timestamp",
    }
)

URL_HEADERS = frozenset(
    {
        "Application-Icon",
        "Notification-Icon",
    }
)

STRING_HEADERS = frozenset(
    {
        "Application-Name",
        "Error-Description",
        "Notification-Callback-Context",
        "Notification-Callback-Context-Type",
        "Notification-Callback-Result",
        "Notification-Callback-Target",
        "Notification-Coalescing-ID",
        "Notification-Display-Name",
        "Notification-ID",
        "Notification-Name",
        "Notification-Text",
        "Notification-Title",
        "Origin-Machine-Name",
        "Origin-Platform-Name",
        "Origin-Platform-Version",
        "Origin-Software-Name",
        "Origin-Software-Version",
        "Origin-Sofware-Name",  # misspelled by some servers
        "Response-Action",
        "Subscriber-ID",
        "Subscriber-Name",
    }
)


def _parse_boolean(value: str) -> bool | str:
    lowered = value.lower()
    if lowered in ("true", "yes"):
        return True
    if lowered in ("false", "no"):
        return False
    return value


def _parse_timestamp(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def parse_header(name: str, value: str) -> Any:
    """Convert a header value to the type its name implies.

    Args:
        name: Header name
        value: Raw header value

    Returns:
        bool, int, datetime, URL or str; None for "(null)"

    Raises:
        MalformedResponse: If a typed header cannot be converted
    """
    if value == NULL_VALUE:
        return None

    try:
        if name in BOOLEAN_HEADERS:
            return _parse_boolean(value)
        if name in INTEGER_HEADERS:
            return int(value)
        if name in TIMESTAMP_HEADERS:
            return _parse_timestamp(value)
        if name in URL_HEADERS:
            return to_url(value)
    except (ValueError, ValidationError) as e:
        raise MalformedResponse(f"invalid {name} header {value!r}") from e

    return value


# ----------------------------------------------------------------------------
# Responses
# ----------------------------------------------------------------------------


@dataclass
class Response:
    """Parsed -OK or -CALLBACK response."""

    version: str
    status: ResponseType
    encryption: str
    headers: dict[str, Any] = field(default_factory=dict)

    def __getitem__(self, name: str) -> Any:
        return self.headers[name]

    def get(self, name: str, default: Any = None) -> Any:
        """Header value, or default if the header is absent."""
        return self.headers.get(name, default)


def parse_response(data: bytes | str) -> Response:
    """Parse one response frame.

    Args:
        data: Frame bytes, with or without the terminator

    Returns:
        Parsed response for -OK and -CALLBACK frames

    Raises:
        MalformedResponse: If the info line or a header line is invalid
        ResponseError: If the server reported a known error code
        ProtocolViolation: If the server reported an unknown error code
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")

    logging.debug("> %s", data.replace("\r\n", "\n> "))

    lines = data.strip().split("\r\n")
    info = lines.pop(0)

    match = INFO_LINE.match(info)
    if not match:
        raise MalformedResponse(f"invalid info line {info!r}")
    version, status, encryption = match.groups()

    headers: dict[str, Any] = {}
    for line in lines:
        if not line:
            continue
        name, sep, value = line.partition(":")
        if not sep:
            raise MalformedResponse(f"invalid header line {line!r}")
        headers[name] = parse_header(name, value.lstrip(" "))

    if status == ResponseType.OK.value or status == ResponseType.CALLBACK.value:
        return Response(version=version, status=ResponseType(status), encryption=encryption, headers=headers)

    raw_code = headers.get("Error-Code")
    try:
        code = ErrorCode(raw_code)
    except ValueError:
        raise ProtocolViolation(raw_code, headers) from None

    raise ResponseError(code, headers)


# ----------------------------------------------------------------------------
# Frame reading
# ----------------------------------------------------------------------------


class FrameReader:
    """Read terminator-delimited frames from a stream socket."""

    def __init__(self, sock: socket.socket, bufsize: int = 4096):
        self._sock = sock
        self._bufsize = bufsize
        self._buf = bytearray()

    def read_frame(self) -> bytes:
        """Read the next frame including its terminator.

        Returns:
            Frame bytes; at EOF, whatever was buffered

        Raises:
            ConnectionError: If the peer closed before sending anything
        """
        while True:
            end = self._buf.find(FRAME_TERMINATOR)
            if end >= 0:
                end += len(FRAME_TERMINATOR)
                frame = bytes(self._buf[:end])
                del self._buf[:end]
                return frame

            chunk = self._sock.recv(self._bufsize)
            if not chunk:
                if self._buf.strip():
                    frame = bytes(self._buf)
                    self._buf.clear()
                    return frame
                raise ConnectionError("Unexpected EOF from peer")
            self._buf.extend(chunk)
