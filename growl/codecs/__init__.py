# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Growl packet codecs."""

from typing import Any

from ..constants import Protocol
from ..notification import NotificationSession
from .base import Codec

# Import all codec implementations
from .binary_codec import BinaryPacketCodec
from .text_codec import TextPacketCodec

__all__ = [
    "Codec",
    "BinaryPacketCodec",
    "TextPacketCodec",
    "register_codec",
    "get_codec",
    "list_codecs",
]


# Codec registry
_CODECS: dict[Protocol, type[Codec]] = {}


def register_codec(protocol: Protocol, codec_class: type[Codec]) -> None:
    """Register a codec implementation."""
    _CODECS[Protocol(protocol)] = codec_class


def get_codec(protocol: Protocol | str, session: NotificationSession, **kwargs: Any) -> Codec:
    """Get a codec instance for a protocol bound to a session."""
    try:
        codec_class = _CODECS[Protocol(protocol)]
    except (KeyError, ValueError):
        raise ValueError(f"Unsupported protocol: {protocol}") from None
    return codec_class(session, **kwargs)


def list_codecs() -> list[Protocol]:
    """List all registered protocols."""
    return list(_CODECS.keys())


# Register default codecs
register_codec(Protocol.UDP, BinaryPacketCodec)
register_codec(Protocol.GNTP, TextPacketCodec)
