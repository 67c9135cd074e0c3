"""
Detached representation of a feedback question.

Repositories never validate ORM rows directly: a row is copied into
:class:`FeedbackQuestionAttributes`, changed, sanitized and validated, and only
then copied back.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field, fields
from typing import Any, Optional

from feedback_storage.db.models import FeedbackQuestion
from . import validation
from .participants import FeedbackParticipantType


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass
class FeedbackQuestionAttributes:
    feedback_session_name: str
    course_id: str
    question_number: int
    question_details: dict
    giver_type: FeedbackParticipantType
    recipient_type: FeedbackParticipantType
    number_of_entities_to_give_feedback_to: int = validation.MAX_POSSIBLE_RECIPIENTS
    question_description: Optional[str] = None
    show_responses_to: list[FeedbackParticipantType] = field(default_factory=list)
    show_giver_name_to: list[FeedbackParticipantType] = field(default_factory=list)
    show_recipient_name_to: list[FeedbackParticipantType] = field(default_factory=list)
    id: Optional[str] = None

    @classmethod
    def from_entity(cls, entity: FeedbackQuestion) -> "FeedbackQuestionAttributes":
        return cls(
            id=entity.web_safe_key,
            feedback_session_name=entity.feedback_session_name,
            course_id=entity.course_id,
            question_number=entity.question_number,
            question_details=json.loads(entity.question_text or "{}"),
            question_description=entity.question_description,
            giver_type=FeedbackParticipantType.parse(entity.giver_type),
            recipient_type=FeedbackParticipantType.parse(entity.recipient_type),
            show_responses_to=[FeedbackParticipantType.parse(v) for v in entity.show_responses_to or []],
            show_giver_name_to=[FeedbackParticipantType.parse(v) for v in entity.show_giver_name_to or []],
            show_recipient_name_to=[FeedbackParticipantType.parse(v) for v in entity.show_recipient_name_to or []],
            number_of_entities_to_give_feedback_to=entity.number_of_entities_to_give_feedback_to,
        )

    def serialized_question_details(self) -> str:
        return json.dumps(self.question_details, ensure_ascii=False, sort_keys=True)

    def update(self, options: "UpdateOptions") -> None:
        for name, value in options.changes().items():
            setattr(self, name, copy.deepcopy(value))

    def sanitize_for_saving(self) -> None:
        self.feedback_session_name = (self.feedback_session_name or "").strip()
        self.course_id = (self.course_id or "").strip()
        self.question_description = validation.sanitize_text(self.question_description)
        self.giver_type = FeedbackParticipantType.parse(self.giver_type)
        self.recipient_type = FeedbackParticipantType.parse(self.recipient_type)
        self.show_responses_to = validation.sanitize_participants(self.show_responses_to)
        self.show_giver_name_to = validation.sanitize_participants(self.show_giver_name_to)
        self.show_recipient_name_to = validation.sanitize_participants(self.show_recipient_name_to)
        if isinstance(self.question_details, dict) and isinstance(self.question_details.get("questionText"), str):
            self.question_details["questionText"] = self.question_details["questionText"].strip()

    def get_invalidity_info(self) -> list[str]:
        errors = []
        for message in (
            validation.feedback_session_name_error(self.feedback_session_name),
            validation.course_id_error(self.course_id),
            validation.question_number_error(self.question_number),
            validation.number_of_entities_error(self.number_of_entities_to_give_feedback_to),
        ):
            if message:
                errors.append(message)
        errors.extend(validation.question_details_errors(self.question_details))
        errors.extend(validation.participant_type_errors(self.giver_type, self.recipient_type))
        errors.extend(
            validation.visibility_errors(self.show_responses_to, self.show_giver_name_to, self.show_recipient_name_to)
        )
        return errors

    def is_valid(self) -> bool:
        return not self.get_invalidity_info()

    def to_entity(self) -> FeedbackQuestion:
        return FeedbackQuestion(
            feedback_session_name=self.feedback_session_name,
            course_id=self.course_id,
            question_number=self.question_number,
            question_text=self.serialized_question_details(),
            question_description=self.question_description,
            giver_type=self.giver_type.value,
            recipient_type=self.recipient_type.value,
            show_responses_to=[p.value for p in self.show_responses_to],
            show_giver_name_to=[p.value for p in self.show_giver_name_to],
            show_recipient_name_to=[p.value for p in self.show_recipient_name_to],
            number_of_entities_to_give_feedback_to=self.number_of_entities_to_give_feedback_to,
        )


@dataclass
class UpdateOptions:
    """Sparse change-set for one feedback question; UNSET fields stay as stored."""

    feedback_question_id: str
    question_number: Any = UNSET
    question_details: Any = UNSET
    question_description: Any = UNSET
    giver_type: Any = UNSET
    recipient_type: Any = UNSET
    show_responses_to: Any = UNSET
    show_giver_name_to: Any = UNSET
    show_recipient_name_to: Any = UNSET
    number_of_entities_to_give_feedback_to: Any = UNSET

    def __post_init__(self) -> None:
        if not self.feedback_question_id:
            raise ValueError("feedback_question_id is required")

    def changes(self) -> dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "feedback_question_id" and getattr(self, f.name) is not UNSET
        }

    def __str__(self) -> str:
        parts = [f"feedback_question_id={self.feedback_question_id!r}"]
        parts.extend(f"{k}={v!r}" for k, v in self.changes().items())
        return f"UpdateOptions({', '.join(parts)})"
