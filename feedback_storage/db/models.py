"""SQLAlchemy models for feedback questions and instructor-course associations."""
from __future__ import annotations

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    JSON,
    func,
    true,
)

from feedback_storage.core.keys import InstructorKey, make_web_safe_key
from feedback_storage.core.security import RegistrationKeyGenerator, generate_registration_key
from .session import Base


def _new_row_id() -> str:
    return uuid.uuid4().hex


class FeedbackQuestion(Base):
    __tablename__ = "feedback_questions"
    __table_args__ = (
        Index("ix_feedback_questions_session_course", "feedback_session_name", "course_id"),
    )

    KIND = "FeedbackQuestion"

    id = Column(String(32), primary_key=True, default=_new_row_id)
    feedback_session_name = Column(String(255), nullable=False)
    course_id = Column(String(64), nullable=False, index=True)
    question_number = Column(Integer, nullable=False)
    # Serialized question-type-specific details (JSON text).
    question_text = Column(Text, nullable=False)
    question_description = Column(Text, nullable=True)
    giver_type = Column(String(64), nullable=False)
    recipient_type = Column(String(64), nullable=False)
    show_responses_to = Column(JSON, default=list, nullable=False)
    show_giver_name_to = Column(JSON, default=list, nullable=False)
    show_recipient_name_to = Column(JSON, default=list, nullable=False)
    number_of_entities_to_give_feedback_to = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def web_safe_key(self) -> str | None:
        if self.id is None:
            return None
        return make_web_safe_key(self.KIND, self.id)


class Instructor(Base):
    """
    Association Account --> [is an instructor for] --> Course.

    The id is the natural key ``email%course_id`` and is derived once, in the
    constructor, after email and course id are set. Changing either afterwards
    does not re-key the row; call :meth:`regenerate_id` for that.
    """

    __tablename__ = "instructors"

    id = Column(String(320), primary_key=True)
    google_id = Column(String(255), nullable=True, index=True)
    course_id = Column(String(64), nullable=False, index=True)
    is_archived = Column(Boolean, default=False, nullable=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    registration_key = Column(String(400), nullable=False, index=True)
    role = Column(String(64), nullable=True)
    is_displayed_to_students = Column(Boolean, default=True, server_default=true(), nullable=False)
    displayed_name = Column(String(255), nullable=True)
    # Serialized privileges (JSON text); stored as given.
    instructor_privileges_as_text = Column(Text, nullable=True)

    def __init__(
        self,
        google_id: str | None,
        course_id: str,
        is_archived: bool,
        name: str,
        email: str,
        role: str | None = None,
        is_displayed_to_students: bool = True,
        displayed_name: str | None = None,
        instructor_privileges_as_text: str | None = None,
        *,
        key_generator: RegistrationKeyGenerator | None = None,
    ):
        self.google_id = google_id
        self.course_id = course_id
        self.is_archived = is_archived
        self.name = name
        self.email = email
        self.role = role
        self.is_displayed_to_students = is_displayed_to_students
        self.displayed_name = displayed_name
        self.instructor_privileges_as_text = instructor_privileges_as_text
        # id must be set after email and course_id, before the registration key
        self.id = self.generate_id(self.email, self.course_id)
        self.registration_key = (key_generator or generate_registration_key)(self.id)

    @staticmethod
    def generate_id(email: str, course_id: str) -> str:
        return InstructorKey(email=email, course_id=course_id).encode()

    @property
    def key(self) -> InstructorKey:
        return InstructorKey.decode(self.id)

    def regenerate_id(self) -> str:
        self.id = self.generate_id(self.email, self.course_id)
        return self.id

    def __repr__(self) -> str:  # pragma: no cover - repr not critical
        return f"Instructor(id={self.id!r}, role={self.role!r})"
