"""CRUD helpers for feedback questions backed by SQLAlchemy."""
from __future__ import annotations

import copy
import logging
from typing import Optional

from sqlalchemy import select, delete

from feedback_storage.core.keys import parse_web_safe_key
from feedback_storage.db.models import FeedbackQuestion
from feedback_storage.db.session import get_session
from feedback_storage.domain.errors import (
    EntityAlreadyExistsError,
    EntityDoesNotExistError,
    InvalidParametersError,
)
from feedback_storage.domain.feedback_questions import FeedbackQuestionAttributes, UpdateOptions
from feedback_storage.domain.participants import FeedbackParticipantType
from .queries import DeletionQuery, QuerySpec, apply_filters

logger = logging.getLogger(__name__)

ERROR_UPDATE_NON_EXISTENT = "Trying to update non-existent Feedback Question : "
ERROR_CREATE_ENTITY_ALREADY_EXISTS = "Trying to create an entity that exists: "


def _require(value, name: str) -> None:
    if value is None or value == "":
        raise ValueError(f"{name} must not be empty")


class FeedbackQuestionsRepository:
    """Reads and writes feedback questions; ids are web-safe key tokens."""

    # -------------------------- reads --------------------------
    def get_feedback_question(self, feedback_question_id: str) -> Optional[FeedbackQuestionAttributes]:
        _require(feedback_question_id, "feedback_question_id")
        with get_session() as session:
            entity = self._get_entity(session, feedback_question_id)
            if entity is None:
                logger.debug("Trying to get non-existent Question: %s", feedback_question_id)
                return None
            return FeedbackQuestionAttributes.from_entity(entity)

    def get_feedback_question_by_number(
        self, feedback_session_name: str, course_id: str, question_number: int
    ) -> Optional[FeedbackQuestionAttributes]:
        _require(feedback_session_name, "feedback_session_name")
        _require(course_id, "course_id")
        _require(question_number, "question_number")
        spec = QuerySpec(
            feedback_session_name=feedback_session_name,
            course_id=course_id,
            question_number=question_number,
        )
        with get_session() as session:
            entity = session.execute(self._select(spec).limit(1)).scalars().first()
            if entity is None:
                logger.debug(
                    "Trying to get non-existent Question: %s.%s/%s", question_number, feedback_session_name, course_id
                )
                return None
            return FeedbackQuestionAttributes.from_entity(entity)

    def get_feedback_questions_for_session(
        self, feedback_session_name: str, course_id: str
    ) -> list[FeedbackQuestionAttributes]:
        _require(feedback_session_name, "feedback_session_name")
        _require(course_id, "course_id")
        return self._list(QuerySpec(feedback_session_name=feedback_session_name, course_id=course_id))

    def get_feedback_questions_for_giver_type(
        self, feedback_session_name: str, course_id: str, giver_type: FeedbackParticipantType
    ) -> list[FeedbackQuestionAttributes]:
        _require(feedback_session_name, "feedback_session_name")
        _require(course_id, "course_id")
        _require(giver_type, "giver_type")
        spec = QuerySpec(
            feedback_session_name=feedback_session_name,
            course_id=course_id,
            giver_type=FeedbackParticipantType.parse(giver_type),
        )
        return self._list(spec)

    def has_existing(self, attributes: FeedbackQuestionAttributes) -> bool:
        spec = QuerySpec(
            feedback_session_name=attributes.feedback_session_name,
            course_id=attributes.course_id,
            question_number=attributes.question_number,
        )
        with get_session() as session:
            stmt = apply_filters(select(FeedbackQuestion.id), FeedbackQuestion, spec).limit(1)
            return session.execute(stmt).first() is not None

    # -------------------------- writes --------------------------
    def create_feedback_question(self, attributes: FeedbackQuestionAttributes) -> FeedbackQuestionAttributes:
        _require(attributes, "attributes")
        candidate = copy.deepcopy(attributes)
        self._sanitize_and_validate(candidate)
        if self.has_existing(candidate):
            raise EntityAlreadyExistsError(
                f"{ERROR_CREATE_ENTITY_ALREADY_EXISTS}{candidate.question_number}."
                f"{candidate.feedback_session_name}/{candidate.course_id}"
            )
        entity = candidate.to_entity()
        with get_session() as session:
            session.add(entity)
            session.commit()
            session.refresh(entity)
            created = FeedbackQuestionAttributes.from_entity(entity)
        logger.info("Created feedback question %s", created.id)
        return created

    def update_feedback_question(self, update_options: UpdateOptions) -> FeedbackQuestionAttributes:
        _require(update_options, "update_options")
        with get_session() as session:
            entity = self._get_entity(session, update_options.feedback_question_id)
            if entity is None:
                raise EntityDoesNotExistError(f"{ERROR_UPDATE_NON_EXISTENT}{update_options}")

            new_attributes = FeedbackQuestionAttributes.from_entity(entity)
            new_attributes.update(update_options)
            self._sanitize_and_validate(new_attributes)

            entity.question_number = new_attributes.question_number
            entity.question_text = new_attributes.serialized_question_details()
            entity.question_description = new_attributes.question_description
            entity.giver_type = new_attributes.giver_type.value
            entity.recipient_type = new_attributes.recipient_type.value
            entity.show_responses_to = [p.value for p in new_attributes.show_responses_to]
            entity.show_giver_name_to = [p.value for p in new_attributes.show_giver_name_to]
            entity.show_recipient_name_to = [p.value for p in new_attributes.show_recipient_name_to]
            entity.number_of_entities_to_give_feedback_to = new_attributes.number_of_entities_to_give_feedback_to

            session.commit()
            session.refresh(entity)
            return FeedbackQuestionAttributes.from_entity(entity)

    def delete_feedback_question(self, feedback_question_id: str) -> None:
        row_id = parse_web_safe_key(feedback_question_id, FeedbackQuestion.KIND)
        if row_id is None:
            return
        with get_session() as session:
            session.execute(delete(FeedbackQuestion).where(FeedbackQuestion.id == row_id))
            session.commit()
        logger.info("Deleted feedback question %s", feedback_question_id)

    def delete_feedback_questions(self, query: DeletionQuery) -> int:
        """Delete every question matching ``query``; returns how many were removed."""
        _require(query, "query")
        with get_session() as session:
            stmt = apply_filters(select(FeedbackQuestion.id), FeedbackQuestion, query.to_spec())
            keys = session.execute(stmt).scalars().all()
            if keys:
                session.execute(delete(FeedbackQuestion).where(FeedbackQuestion.id.in_(keys)))
                session.commit()
        logger.info(
            "Deleted %d feedback questions (course_id=%s, feedback_session_name=%s)",
            len(keys),
            query.course_id,
            query.feedback_session_name,
        )
        return len(keys)

    # -------------------------- helpers --------------------------
    def _get_entity(self, session, feedback_question_id: str) -> Optional[FeedbackQuestion]:
        row_id = parse_web_safe_key(feedback_question_id, FeedbackQuestion.KIND)
        if row_id is None:
            return None
        return session.get(FeedbackQuestion, row_id)

    def _select(self, spec: QuerySpec):
        return apply_filters(select(FeedbackQuestion), FeedbackQuestion, spec)

    def _list(self, spec: QuerySpec) -> list[FeedbackQuestionAttributes]:
        with get_session() as session:
            entities = session.execute(self._select(spec)).scalars().all()
            return [FeedbackQuestionAttributes.from_entity(e) for e in entities]

    @staticmethod
    def _sanitize_and_validate(attributes: FeedbackQuestionAttributes) -> None:
        try:
            attributes.sanitize_for_saving()
        except ValueError as exc:
            # unknown participant type names
            raise InvalidParametersError([str(exc)]) from exc
        errors = attributes.get_invalidity_info()
        if errors:
            logger.warning("Rejected feedback question %s: %s", attributes.id, "; ".join(errors))
            raise InvalidParametersError(errors)
