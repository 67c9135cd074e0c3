"""
Key helpers.

Row keys are handed to callers as opaque web-safe tokens: urlsafe base64 of
``"<Kind>:<row id>"`` without padding. Instructors use a natural composite key
``email%course_id`` wrapped in :class:`InstructorKey`.
"""
from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Optional

INSTRUCTOR_KEY_SEPARATOR = "%"


def make_web_safe_key(kind: str, row_id: str) -> str:
    raw = f"{kind}:{row_id}".encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def parse_web_safe_key(token: str | None, kind: str) -> Optional[str]:
    """Return the row id inside ``token`` or None when it is malformed or of another kind."""
    value = (token or "").strip()
    if not value:
        return None
    padded = value + "=" * (-len(value) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8")
    except (binascii.Error, ValueError, UnicodeError):
        return None
    prefix, sep, row_id = raw.partition(":")
    if not sep or prefix != kind or not row_id:
        return None
    return row_id


@dataclass(frozen=True)
class InstructorKey:
    """Natural key of an instructor-course association (format: email%course_id)."""

    email: str
    course_id: str

    def __post_init__(self) -> None:
        if INSTRUCTOR_KEY_SEPARATOR in (self.course_id or ""):
            raise ValueError(f"course id may not contain {INSTRUCTOR_KEY_SEPARATOR!r}: {self.course_id}")

    def encode(self) -> str:
        # e.g. adam@gmail.com%cs1101
        return f"{self.email}{INSTRUCTOR_KEY_SEPARATOR}{self.course_id}"

    @classmethod
    def decode(cls, value: str) -> "InstructorKey":
        # Emails may contain the separator; course ids never do.
        email, sep, course_id = (value or "").rpartition(INSTRUCTOR_KEY_SEPARATOR)
        if not sep:
            raise ValueError(f"not an instructor key: {value!r}")
        return cls(email=email, course_id=course_id)
