from decimal import Decimal

import pytest

from tutorlink.core.exceptions import ForbiddenException, NotFoundException, ValidationException
from tutorlink.core.constants import DEFAULT_SUBJECTS
from tutorlink.services.student_service import StudentService
from tutorlink.services.subject_service import SubjectService
from tutorlink.services.teacher_service import TeacherService, parse_hourly_rate


@pytest.mark.parametrize(
    "raw, expected",
    [(40, Decimal("40.00")), ("35.5", Decimal("35.50")), (10.005, Decimal("10.01")), ("12.344", Decimal("12.34"))],
)
def test_parse_hourly_rate(raw, expected):
    assert parse_hourly_rate(raw) == expected


@pytest.mark.parametrize("raw", [0, -5, "abc", None, True, "NaN", "Infinity"])
def test_parse_hourly_rate_rejects(raw):
    with pytest.raises(ValidationException):
        parse_hourly_rate(raw)


def test_teacher_profile_includes_user_and_subjects(db, test_teacher, subjects):
    service = TeacherService(db)
    service.replace_subjects(test_teacher.id, [subjects["Physics"].id, subjects["Mathematics"].id])

    profile = service.get_profile(test_teacher.id)
    assert profile.user_id == test_teacher.id
    assert profile.user.email == test_teacher.email
    assert profile.city == "Paris"
    assert profile.hourly_rate == Decimal("40.00")
    assert sorted(s.name for s in profile.subjects) == ["Mathematics", "Physics"]


def test_get_profile_rejects_non_teachers(db, test_student):
    with pytest.raises(ForbiddenException):
        TeacherService(db).get_profile(test_student.id)


def test_update_teacher_profile(db, test_teacher):
    service = TeacherService(db)
    profile = service.update_profile(test_teacher.id, bio="  New bio ", hourly_rate="55")
    assert profile.bio == "New bio"
    assert profile.hourly_rate == Decimal("55.00")
    assert profile.city == "Paris"

    with pytest.raises(ValidationException):
        service.update_profile(test_teacher.id)
    with pytest.raises(ValidationException):
        service.update_profile(test_teacher.id, city="x" * 101)
    with pytest.raises(ValidationException):
        service.update_profile(test_teacher.id, bio="   ")


def test_replace_subjects_dedupes_and_validates(db, test_teacher, subjects):
    service = TeacherService(db)
    physics = subjects["Physics"].id
    profile = service.replace_subjects(test_teacher.id, [physics, physics])
    assert [s.id for s in profile.subjects] == [physics]

    with pytest.raises(ValidationException) as exc_info:
        service.replace_subjects(test_teacher.id, [physics, "unknown-subject"])
    assert exc_info.value.details == {"invalidIds": ["unknown-subject"]}
    # The failed call left the previous set intact
    assert [s.id for s in service.get_profile(test_teacher.id).subjects] == [physics]

    assert service.replace_subjects(test_teacher.id, []).subjects == []
    with pytest.raises(ValidationException):
        service.replace_subjects(test_teacher.id, "not-a-list")


def test_search_filters_by_city_and_subject(db, test_teacher, test_teacher_2, subjects):
    service = TeacherService(db)
    service.replace_subjects(test_teacher.id, [subjects["Physics"].id])
    service.replace_subjects(test_teacher_2.id, [subjects["Physics"].id, subjects["Music"].id])

    assert service.search().total == 2
    paris = service.search(city="Paris")
    assert [item.id for item in paris.items] == [test_teacher.id]
    music = service.search(subject_id=subjects["Music"].id)
    assert [item.id for item in music.items] == [test_teacher_2.id]
    assert service.search(city="Paris", subject_id=subjects["Music"].id).total == 0

    page = service.search(page=2, page_size=1)
    assert (page.page, page.page_size, page.total, len(page.items)) == (2, 1, 2, 1)


def test_student_profile_update(db, test_student):
    service = StudentService(db)
    profile = service.update_profile(test_student.id, city=" Lyon ", level="HIGH_SCHOOL", track="Science")
    assert (profile.city, profile.level, profile.track) == ("Lyon", "HIGH_SCHOOL", "Science")

    with pytest.raises(ValidationException):
        service.update_profile(test_student.id, level="KINDERGARTEN")
    with pytest.raises(ValidationException):
        service.update_profile(test_student.id)
    with pytest.raises(NotFoundException):
        service.get_profile("missing")


def test_seed_subjects_is_idempotent(db):
    service = SubjectService(db)
    assert service.seed_defaults() == len(DEFAULT_SUBJECTS)
    assert service.seed_defaults() == 0
    assert service.seed_defaults(["Art", "Art", "Physics"]) == 1
    names = [s.name for s in service.list_subjects()]
    assert names == sorted(names)
