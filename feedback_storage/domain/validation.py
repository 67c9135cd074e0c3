"""Field rules and sanitization helpers for stored feedback questions."""
from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

from .participants import FeedbackParticipantType

COURSE_ID_MAX_LENGTH = 64
COURSE_ID_PATTERN = re.compile(r"[a-zA-Z0-9_.$-]+")
FEEDBACK_SESSION_NAME_MAX_LENGTH = 38
FEEDBACK_SESSION_NAME_PATTERN = re.compile(r"[\w][^|%]*")
MAX_POSSIBLE_RECIPIENTS = -100
QUESTION_TYPES = {
    "MCQ",
    "MSQ",
    "TEXT",
    "NUMSCALE",
    "CONSTSUM",
    "CONTRIB",
    "RUBRIC",
    "RANK_OPTIONS",
    "RANK_RECIPIENTS",
}


def course_id_error(value: str | None) -> str | None:
    if not value:
        return "Course id is empty."
    if len(value) > COURSE_ID_MAX_LENGTH:
        return f"Course id \"{value}\" is longer than {COURSE_ID_MAX_LENGTH} characters."
    if not COURSE_ID_PATTERN.fullmatch(value):
        return f"Course id \"{value}\" may only contain letters, digits, and the characters _ . $ -"
    return None


def feedback_session_name_error(value: str | None) -> str | None:
    if not value:
        return "Feedback session name is empty."
    if len(value) > FEEDBACK_SESSION_NAME_MAX_LENGTH:
        return f"Feedback session name \"{value}\" is longer than {FEEDBACK_SESSION_NAME_MAX_LENGTH} characters."
    if not FEEDBACK_SESSION_NAME_PATTERN.fullmatch(value):
        return f"Feedback session name \"{value}\" must start with a letter or digit and may not contain | or %."
    return None


def question_number_error(value: int | None) -> str | None:
    if not _is_int(value) or value < 1:
        return f"Question number {value} is not a positive integer."
    return None


def number_of_entities_error(value: int | None) -> str | None:
    if not _is_int(value) or (value < 1 and value != MAX_POSSIBLE_RECIPIENTS):
        return f"Number of entities to give feedback to ({value}) must be positive or unlimited."
    return None


def question_details_errors(details: Mapping[str, Any] | None) -> list[str]:
    if not isinstance(details, Mapping):
        return ["Question details are missing."]
    errors = []
    question_type = details.get("questionType")
    if question_type not in QUESTION_TYPES:
        errors.append(f"Question type \"{question_type}\" is not supported.")
    if not str(details.get("questionText") or "").strip():
        errors.append("Question text is empty.")
    return errors


def participant_type_errors(
    giver_type: FeedbackParticipantType | None,
    recipient_type: FeedbackParticipantType | None,
) -> list[str]:
    errors = []
    if giver_type is None or not giver_type.is_valid_giver:
        errors.append(f"{_name(giver_type)} is not a valid feedback giver.")
    if recipient_type is None or not recipient_type.is_valid_recipient:
        errors.append(f"{_name(recipient_type)} is not a valid feedback recipient.")
    return errors


def visibility_errors(
    show_responses_to: Iterable[FeedbackParticipantType],
    show_giver_name_to: Iterable[FeedbackParticipantType],
    show_recipient_name_to: Iterable[FeedbackParticipantType],
) -> list[str]:
    responses = list(show_responses_to)
    errors = []
    for label, viewers in (
        ("responses", responses),
        ("giver name", list(show_giver_name_to)),
        ("recipient name", list(show_recipient_name_to)),
    ):
        for viewer in viewers:
            if not viewer.is_valid_viewer:
                errors.append(f"{viewer.value} is not a valid viewer of {label}.")
            elif label != "responses" and viewer not in responses:
                errors.append(f"Trying to show {label} to {viewer.value} without showing responses first.")
    return errors


def sanitize_text(value: str | None) -> str | None:
    """Trim surrounding whitespace; blank strings become None."""
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def sanitize_participants(values: Iterable[FeedbackParticipantType | str] | None) -> list[FeedbackParticipantType]:
    """Parse, then drop duplicates keeping the first occurrence."""
    seen: list[FeedbackParticipantType] = []
    for value in values or []:
        participant = FeedbackParticipantType.parse(value)
        if participant not in seen:
            seen.append(participant)
    return seen


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _name(participant: FeedbackParticipantType | None) -> str:
    return participant.value if participant is not None else "None"
