from __future__ import annotations

import pytest
from sqlalchemy import select

from feedback_storage.core.keys import InstructorKey, make_web_safe_key, parse_web_safe_key
from feedback_storage.db.models import FeedbackQuestion
from feedback_storage.domain.participants import FeedbackParticipantType
from feedback_storage.repositories.queries import DeletionQuery, QuerySpec, apply_filters


def test_web_safe_key_is_reversible_and_kind_checked():
    token = make_web_safe_key("FeedbackQuestion", "abc123")
    assert "=" not in token
    assert parse_web_safe_key(token, "FeedbackQuestion") == "abc123"
    assert parse_web_safe_key(token, "Instructor") is None


@pytest.mark.parametrize("token", [None, "", "   ", "%%%", "Zm9v"])
def test_malformed_web_safe_key_is_none(token):
    assert parse_web_safe_key(token, "FeedbackQuestion") is None


def test_instructor_key_allows_separator_in_email():
    key = InstructorKey(email="odd%name@example.com", course_id="cs1101")
    assert key.encode() == "odd%name@example.com%cs1101"
    assert InstructorKey.decode(key.encode()) == key


def test_instructor_key_decode_requires_separator():
    with pytest.raises(ValueError):
        InstructorKey.decode("adam@gmail.com")


def test_deletion_query_requires_a_filter():
    with pytest.raises(ValueError):
        DeletionQuery()
    query = DeletionQuery(course_id="CS1101")
    assert query.is_course_id_present
    assert not query.is_feedback_session_name_present


def test_query_spec_only_filters_on_set_fields():
    spec = QuerySpec(course_id="CS1101", giver_type=FeedbackParticipantType.TEAMS)
    assert spec.predicates() == {"course_id": "CS1101", "giver_type": "TEAMS"}
    assert QuerySpec().is_empty()

    sql = str(apply_filters(select(FeedbackQuestion), FeedbackQuestion, spec))
    assert "feedback_questions.course_id =" in sql
    assert "feedback_questions.giver_type =" in sql
    assert "feedback_session_name =" not in sql


def test_query_spec_rejects_unknown_column():
    with pytest.raises(ValueError):
        apply_filters(select(FeedbackQuestion), FeedbackQuestion, QuerySpec(email="a@b.c"))
