from decimal import Decimal

import pytest

from tutorlink.core.exceptions import (
    DuplicateReviewException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)
from tutorlink.models.teacher_profile import TeacherProfile
from tutorlink.services.review_service import ReviewService


@pytest.fixture
def service(db):
    return ReviewService(db)


def _profile(db, teacher_id) -> TeacherProfile:
    profile = db.query(TeacherProfile).filter(TeacherProfile.user_id == teacher_id).one()
    db.refresh(profile)
    return profile


def test_create_review_updates_teacher_rating(db, service, test_teacher, test_student, test_student_2):
    service.create_review(teacher_id=test_teacher.id, student_id=test_student.id, rating=5, comment=" Great ")
    service.create_review(teacher_id=test_teacher.id, student_id=test_student_2.id, rating=4)

    profile = _profile(db, test_teacher.id)
    assert profile.reviews_count == 2
    assert profile.rating_avg == Decimal("4.50")


def test_one_review_per_pair(service, test_teacher, test_student):
    service.create_review(teacher_id=test_teacher.id, student_id=test_student.id, rating=5)
    with pytest.raises(DuplicateReviewException):
        service.create_review(teacher_id=test_teacher.id, student_id=test_student.id, rating=1)


def test_create_review_validation(service, test_teacher, test_student):
    with pytest.raises(ValidationException, match="teacherUserId"):
        service.create_review(teacher_id=None, student_id=test_student.id, rating=5)
    with pytest.raises(ValidationException):
        service.create_review(teacher_id=test_teacher.id, student_id=test_teacher.id, rating=5)
    with pytest.raises(NotFoundException):
        service.create_review(teacher_id=test_student.id, student_id=test_teacher.id, rating=5)
    with pytest.raises(ValidationException):
        service.create_review(teacher_id=test_teacher.id, student_id=test_student.id, rating=6)
    with pytest.raises(ValidationException):
        service.create_review(
            teacher_id=test_teacher.id, student_id=test_student.id, rating=3, comment="x" * 1001
        )


def test_update_review_recomputes_and_clears_comment(db, service, test_teacher, test_student):
    review = service.create_review(
        teacher_id=test_teacher.id, student_id=test_student.id, rating=2, comment="Meh"
    )

    updated = service.update_review(review.id, test_student.id, rating=4, comment="")
    assert updated.rating == 4
    assert updated.comment is None
    assert _profile(db, test_teacher.id).rating_avg == Decimal("4.00")

    # Omitted fields are left alone
    updated = service.update_review(review.id, test_student.id, comment="Much better")
    assert updated.rating == 4
    assert updated.comment == "Much better"


def test_update_review_requires_owner_and_fields(service, test_teacher, test_student, test_student_2):
    review = service.create_review(teacher_id=test_teacher.id, student_id=test_student.id, rating=5)
    with pytest.raises(ForbiddenException):
        service.update_review(review.id, test_student_2.id, rating=1)
    with pytest.raises(ValidationException):
        service.update_review(review.id, test_student.id)
    with pytest.raises(NotFoundException):
        service.update_review("missing", test_student.id, rating=1)


def test_delete_review_resets_rating(db, service, test_teacher, test_student, test_student_2):
    review = service.create_review(teacher_id=test_teacher.id, student_id=test_student.id, rating=3)
    with pytest.raises(ForbiddenException):
        service.delete_review(review.id, test_student_2.id)

    service.delete_review(review.id, test_student.id)
    profile = _profile(db, test_teacher.id)
    assert profile.reviews_count == 0
    assert profile.rating_avg is None


def test_listings_are_paginated(service, test_teacher, test_teacher_2, test_student, test_student_2):
    service.create_review(teacher_id=test_teacher.id, student_id=test_student.id, rating=5)
    service.create_review(teacher_id=test_teacher.id, student_id=test_student_2.id, rating=3)
    service.create_review(teacher_id=test_teacher_2.id, student_id=test_student.id, rating=4)

    items, page, size, total = service.list_for_teacher(test_teacher.id, page=1, page_size=1)
    assert (page, size, total, len(items)) == (1, 1, 2, 1)

    items, _, _, total = service.list_for_student(test_student.id)
    assert total == 2

    with pytest.raises(NotFoundException):
        service.list_for_teacher(test_student.id)
