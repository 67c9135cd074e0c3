"""CRUD helpers for instructor-course associations."""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select, delete

from feedback_storage.db.models import Instructor
from feedback_storage.db.session import get_session
from .queries import DeletionQuery, QuerySpec, apply_filters

logger = logging.getLogger(__name__)


class InstructorsRepository:
    """Instructors are keyed by ``email%course_id``; saving the same pair again overwrites."""

    def put_instructor(self, instructor: Instructor) -> Instructor:
        with get_session() as session:
            merged = session.merge(instructor)
            session.commit()
            session.refresh(merged)
            return merged

    def get_instructor_for_email(self, email: str, course_id: str) -> Optional[Instructor]:
        with get_session() as session:
            return session.get(Instructor, Instructor.generate_id(email, course_id))

    def get_instructor_by_registration_key(self, registration_key: str) -> Optional[Instructor]:
        key = (registration_key or "").strip()
        if not key:
            return None
        with get_session() as session:
            stmt = apply_filters(select(Instructor), Instructor, QuerySpec(registration_key=key)).limit(1)
            return session.execute(stmt).scalars().first()

    def get_instructors_for_course(self, course_id: str) -> list[Instructor]:
        return self._list(QuerySpec(course_id=course_id))

    def get_instructors_for_google_id(self, google_id: str) -> list[Instructor]:
        return self._list(QuerySpec(google_id=google_id))

    def delete_instructor(self, email: str, course_id: str) -> None:
        with get_session() as session:
            session.execute(delete(Instructor).where(Instructor.id == Instructor.generate_id(email, course_id)))
            session.commit()

    def delete_instructors(self, query: DeletionQuery) -> int:
        if query is None:
            raise ValueError("query must not be empty")
        with get_session() as session:
            stmt = apply_filters(select(Instructor.id), Instructor, query.to_spec())
            keys = session.execute(stmt).scalars().all()
            if keys:
                session.execute(delete(Instructor).where(Instructor.id.in_(keys)))
                session.commit()
        logger.info("Deleted %d instructors (course_id=%s)", len(keys), query.course_id)
        return len(keys)

    def _list(self, spec: QuerySpec) -> list[Instructor]:
        with get_session() as session:
            return list(session.execute(apply_filters(select(Instructor), Instructor, spec)).scalars().all())
