# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Base codec interface for Growl protocols."""

from abc import ABC, abstractmethod
from typing import Any

from ..notification import NotificationSession


class Codec(ABC):
    """Base interface for Growl packet codecs."""

    def __init__(self, session: NotificationSession):
        self.session = session

    @abstractmethod
    def registration_packet(self) -> bytes:
        """Build a packet registering the session's notification types."""
        pass

    @abstractmethod
    def notification_packet(self, name: str, title: str, text: Any = None, priority: int = 0, sticky: bool = False, **options: Any) -> bytes:
        """Build a packet displaying one notification."""
        pass
