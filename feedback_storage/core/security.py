"""Registration key generation for instructors."""

from __future__ import annotations

import secrets
from typing import Callable

RegistrationKeyGenerator = Callable[[str], str]


def secure_registration_key(unique_id: str) -> str:
    """Return ``unique_id`` followed by a random signed 32-bit integer."""
    return f"{unique_id}{secrets.randbits(32) - 2**31}"


_generator: RegistrationKeyGenerator = secure_registration_key


def get_registration_key_generator() -> RegistrationKeyGenerator:
    return _generator


def set_registration_key_generator(generator: RegistrationKeyGenerator | None) -> None:
    """Swap the generator used by new instructors; None restores the default."""
    global _generator
    _generator = generator or secure_registration_key


def generate_registration_key(unique_id: str) -> str:
    return _generator(unique_id)
