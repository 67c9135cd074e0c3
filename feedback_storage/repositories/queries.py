"""Filter values shared by the repositories and the one function that turns them into SQL."""
from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional

from sqlalchemy import Select


@dataclass(frozen=True)
class QuerySpec:
    """Optional equality predicates; the ones that are set are combined with AND."""

    course_id: Optional[str] = None
    feedback_session_name: Optional[str] = None
    question_number: Optional[int] = None
    giver_type: Optional[str] = None
    email: Optional[str] = None
    google_id: Optional[str] = None
    registration_key: Optional[str] = None

    def predicates(self) -> dict:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            result[f.name] = value.value if isinstance(value, Enum) else value
        return result

    def is_empty(self) -> bool:
        return not self.predicates()


@dataclass(frozen=True)
class DeletionQuery:
    """Scope of a bulk delete. At least one filter must be given."""

    course_id: Optional[str] = None
    feedback_session_name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.course_id is None and self.feedback_session_name is None:
            raise ValueError("DeletionQuery needs a course_id or a feedback_session_name")

    @property
    def is_course_id_present(self) -> bool:
        return self.course_id is not None

    @property
    def is_feedback_session_name_present(self) -> bool:
        return self.feedback_session_name is not None

    def to_spec(self) -> QuerySpec:
        return QuerySpec(course_id=self.course_id, feedback_session_name=self.feedback_session_name)


def apply_filters(stmt: Select, model, spec: QuerySpec) -> Select:
    for name, value in spec.predicates().items():
        column = getattr(model, name, None)
        if column is None:
            raise ValueError(f"{model.__name__} cannot be filtered by {name}")
        stmt = stmt.where(column == value)
    return stmt
