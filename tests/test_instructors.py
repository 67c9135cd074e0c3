from __future__ import annotations

import pytest

from feedback_storage.core import security
from feedback_storage.db.models import Instructor
from feedback_storage.repositories.instructors import InstructorsRepository
from feedback_storage.repositories.queries import DeletionQuery


def make_instructor(email="adam@gmail.com", course="cs1101", name="Adam", **kwargs):
    return Instructor(
        kwargs.pop("google_id", "adam.google"),
        course,
        kwargs.pop("is_archived", False),
        name,
        email,
        **kwargs,
    )


def test_id_is_email_and_course():
    instructor = make_instructor()
    assert instructor.id == "adam@gmail.com%cs1101"
    assert instructor.key.email == "adam@gmail.com"
    assert instructor.key.course_id == "cs1101"


def test_registration_key_starts_with_id_and_uses_generator():
    instructor = make_instructor()
    suffix = instructor.registration_key[len(instructor.id):]
    assert instructor.registration_key.startswith(instructor.id)
    assert -(2**31) <= int(suffix) < 2**31

    security.set_registration_key_generator(lambda unique_id: f"{unique_id}-fixed")
    assert make_instructor().registration_key == "adam@gmail.com%cs1101-fixed"

    custom = make_instructor(key_generator=lambda unique_id: "explicit")
    assert custom.registration_key == "explicit"


def test_changing_email_does_not_rekey_until_regenerated():
    instructor = make_instructor()
    key = instructor.registration_key
    instructor.email = "eve@gmail.com"
    assert instructor.id == "adam@gmail.com%cs1101"

    assert instructor.regenerate_id() == "eve@gmail.com%cs1101"
    assert instructor.registration_key == key


def test_displayed_to_students_defaults_to_true():
    assert make_instructor().is_displayed_to_students is True
    hidden = make_instructor(is_displayed_to_students=False)
    assert hidden.is_displayed_to_students is False


def test_course_id_with_separator_is_rejected():
    with pytest.raises(ValueError):
        make_instructor(course="cs%1101")


def test_same_email_and_course_overwrites(temp_db):
    repo = InstructorsRepository()
    first = repo.put_instructor(make_instructor(name="Adam", role="Co-owner"))
    second = make_instructor(name="Adam Smith", role="Tutor", is_displayed_to_students=False)
    assert second.id == first.id

    repo.put_instructor(second)

    stored = repo.get_instructor_for_email("adam@gmail.com", "cs1101")
    assert stored.name == "Adam Smith"
    assert stored.role == "Tutor"
    assert stored.is_displayed_to_students is False
    assert stored.registration_key == second.registration_key
    assert len(repo.get_instructors_for_course("cs1101")) == 1


def test_lookup_by_registration_key_and_google_id(temp_db):
    repo = InstructorsRepository()
    saved = repo.put_instructor(make_instructor(instructor_privileges_as_text='{"canModifyCourse": true}'))

    found = repo.get_instructor_by_registration_key(saved.registration_key)
    assert found is not None
    assert found.id == saved.id
    assert found.instructor_privileges_as_text == '{"canModifyCourse": true}'
    assert repo.get_instructor_by_registration_key("") is None
    assert [i.id for i in repo.get_instructors_for_google_id("adam.google")] == [saved.id]


def test_delete_instructor_and_course(temp_db):
    repo = InstructorsRepository()
    repo.put_instructor(make_instructor())
    repo.put_instructor(make_instructor(email="bea@gmail.com", google_id="bea.google"))
    repo.put_instructor(make_instructor(course="cs2103"))

    repo.delete_instructor("adam@gmail.com", "cs1101")
    repo.delete_instructor("adam@gmail.com", "cs1101")
    assert repo.get_instructor_for_email("adam@gmail.com", "cs1101") is None

    assert repo.delete_instructors(DeletionQuery(course_id="cs1101")) == 1
    assert repo.get_instructors_for_course("cs1101") == []
    assert len(repo.get_instructors_for_course("cs2103")) == 1

    with pytest.raises(ValueError):
        repo.delete_instructors(DeletionQuery(feedback_session_name="First Session"))
