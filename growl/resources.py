# Copyright 2025 Maida.AI
# SPDX-License-Identifier: Apache-2.0
"""Icon references and x-growl-resource identifiers."""

import uuid
from typing import Any

from pydantic import AnyUrl, TypeAdapter

from .constants import RESOURCE_SCHEME

_URL = TypeAdapter(AnyUrl)


def new_identifier() -> str:
    """Generate a fresh identifier for notifications and resources."""
    return str(uuid.uuid4())


def to_url(value: Any) -> AnyUrl:
    """Parse a string into a URL.

    Raises:
        pydantic.ValidationError: If the value is not a valid URL
    """
    return _URL.validate_python(value)


def is_url(icon: Any) -> bool:
    """Whether an icon reference is sent directly rather than as a resource."""
    return isinstance(icon, AnyUrl)


def resource_uri(identifier: str) -> str:
    """Back-reference to a resource block carried in the same packet."""
    return f"{RESOURCE_SCHEME}://{identifier}"
