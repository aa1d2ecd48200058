# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Notification session shared by the UDP and GNTP codecs."""

from typing import Any, Literal

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, field_validator

from .constants import PRIORITY_MAX, PRIORITY_MIN
from .errors import InvalidPriority
from .resources import to_url


def _coerce_icon(value: Any) -> Any:
    # str icons are URLs, bytes icons are image data
    if isinstance(value, str):
        return to_url(value)
    return value


class NotificationType(BaseModel):
    """A notification type an application may send."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Internal name, unique within a session")
    display_name: str | None = Field(None, description="Name shown to the user")
    icon: bytes | AnyUrl | None = Field(None, description="Image data or icon URL")
    enabled: bool = Field(True, description="Displayed by default")

    @field_validator("icon", mode="before")
    @classmethod
    def _parse_icon(cls, value: Any) -> Any:
        return _coerce_icon(value)


class NotificationSession(BaseModel):
    """Application identity and registered notification types for one host.

    Notification types are kept in insertion order; the UDP registration
    packet encodes default notifications as indices into that order.
    """

    model_config = ConfigDict(validate_assignment=True)

    application_name: str
    password: str | None = None
    icon: bytes | AnyUrl | None = Field(None, description="Application icon (GNTP only)")
    encryption: Literal["NONE", "DES", "3DES", "AES"] = Field("NONE", description="Body cipher (GNTP only)")
    hash_algorithm: Literal["MD5", "SHA1", "SHA256", "SHA512"] = Field("SHA512", description="Key digest (GNTP only)")
    notifications: dict[str, NotificationType] = Field(default_factory=dict)

    @field_validator("icon", mode="before")
    @classmethod
    def _parse_icon(cls, value: Any) -> Any:
        return _coerce_icon(value)

    @classmethod
    def create(cls, application_name: str, notification_names: list[str] | None = None, **kwargs: Any) -> "NotificationSession":
        """Create a session with plain notification types for each name."""
        session = cls(application_name=application_name, **kwargs)
        for name in notification_names or []:
            session.add_notification(name)
        return session

    def add_notification(
        self,
        name: str,
        display_name: str | None = None,
        icon: bytes | AnyUrl | str | None = None,
        enabled: bool = True,
    ) -> NotificationType:
        """Register a notification type, replacing any type with the same name."""
        notification = NotificationType(name=name, display_name=display_name, icon=icon, enabled=enabled)
        self.notifications[name] = notification
        return notification

    def get(self, name: str) -> NotificationType | None:
        """Look up a registered notification type."""
        return self.notifications.get(name)

    @property
    def notification_names(self) -> list[str]:
        """Registered names in registration order."""
        return list(self.notifications)

    @property
    def default_notification_names(self) -> list[str]:
        """Names of the types enabled by default."""
        return [name for name, notification in self.notifications.items() if notification.enabled]


def validate_priority(priority: int) -> int:
    """Check a priority against the protocol range.

    Raises:
        InvalidPriority: If priority is outside -2 to 2
    """
    if not PRIORITY_MIN <= priority <= PRIORITY_MAX:
        raise InvalidPriority(priority)
    return priority
