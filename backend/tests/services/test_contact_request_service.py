from unittest.mock import MagicMock

import pytest

from tutorlink.core.exceptions import (
    ConflictException,
    ForbiddenException,
    NotFoundException,
    PendingRequestExistsException,
    ValidationException,
)
from tutorlink.models.conversation import Conversation
from tutorlink.services.contact_request_service import ContactRequestService
from tutorlink.services.messaging.events import EventType


@pytest.fixture
def publisher():
    return MagicMock()


@pytest.fixture
def service(db, publisher):
    return ContactRequestService(db, publisher)


def test_create_trims_message_and_notifies_both_users(service, publisher, test_student, test_teacher):
    request = service.create(test_student.id, test_teacher.id, "  Hi there  ")

    assert request.status == "PENDING"
    assert request.message == "Hi there"
    rooms, event, data = publisher.publish.call_args.args
    assert set(rooms) == {f"user:{test_teacher.id}", f"user:{test_student.id}"}
    assert event is EventType.CONTACT_REQUEST_CREATED
    assert data["contactRequest"]["id"] == request.id
    assert data["contactRequest"]["student"]["email"] == test_student.email


def test_missing_message_is_stored_empty(service, test_student, test_teacher):
    assert service.create(test_student.id, test_teacher.id, None).message == ""


def test_create_validation(service, test_student, test_teacher):
    with pytest.raises(ValidationException):
        service.create(test_student.id, None, "hi")
    with pytest.raises(ValidationException):
        service.create(test_teacher.id, test_teacher.id, "hi")
    with pytest.raises(ValidationException):
        service.create(test_student.id, test_teacher.id, "x" * 2001)
    with pytest.raises(NotFoundException):
        service.create(test_student.id, test_student.id + "X", "hi")


def test_target_must_be_a_teacher(service, test_student, test_student_2):
    with pytest.raises(NotFoundException):
        service.create(test_student.id, test_student_2.id, "hi")


def test_only_one_pending_request_per_pair(service, test_student, test_teacher):
    service.create(test_student.id, test_teacher.id, "first")
    with pytest.raises(PendingRequestExistsException):
        service.create(test_student.id, test_teacher.id, "second")


def test_new_request_allowed_after_rejection(service, test_student, test_teacher):
    first = service.create(test_student.id, test_teacher.id, "first")
    service.update_status(first.id, test_teacher.id, "REJECTED")
    second = service.create(test_student.id, test_teacher.id, "second")
    assert second.id != first.id


def test_accept_opens_exactly_one_conversation(db, service, test_student, test_teacher):
    request = service.create(test_student.id, test_teacher.id, "hi")
    updated, conversation = service.update_status(request.id, test_teacher.id, "ACCEPTED")

    assert updated.status == "ACCEPTED"
    assert conversation.request_id == request.id
    assert conversation.student_id == test_student.id
    assert conversation.teacher_id == test_teacher.id

    with pytest.raises(ConflictException):
        service.update_status(request.id, test_teacher.id, "ACCEPTED")
    assert db.query(Conversation).filter(Conversation.request_id == request.id).count() == 1


def test_reject_is_terminal_and_opens_nothing(db, service, test_student, test_teacher):
    request = service.create(test_student.id, test_teacher.id, "hi")
    _, conversation = service.update_status(request.id, test_teacher.id, "REJECTED")
    assert conversation is None
    with pytest.raises(ConflictException):
        service.update_status(request.id, test_teacher.id, "ACCEPTED")
    assert db.query(Conversation).count() == 0


def test_pending_on_pending_is_a_no_op(service, publisher, test_student, test_teacher):
    request = service.create(test_student.id, test_teacher.id, "hi")
    publisher.reset_mock()
    same, conversation = service.update_status(request.id, test_teacher.id, "PENDING")
    assert same.status == "PENDING"
    assert conversation is None
    publisher.publish.assert_not_called()


def test_update_status_checks(service, test_student, test_teacher, test_teacher_2):
    request = service.create(test_student.id, test_teacher.id, "hi")
    with pytest.raises(NotFoundException):
        service.update_status("missing", test_teacher.id, "ACCEPTED")
    with pytest.raises(ValidationException):
        service.update_status(request.id, test_teacher.id, "MAYBE")
    with pytest.raises(ForbiddenException):
        service.update_status(request.id, test_teacher_2.id, "ACCEPTED")
    with pytest.raises(ForbiddenException):
        service.update_status(request.id, test_student.id, "ACCEPTED")


def test_status_update_event_carries_conversation(service, publisher, test_student, test_teacher):
    request = service.create(test_student.id, test_teacher.id, "hi")
    _, conversation = service.update_status(request.id, test_teacher.id, "ACCEPTED")
    _, event, data = publisher.publish.call_args.args
    assert event is EventType.CONTACT_REQUEST_STATUS_UPDATED
    assert data["contactRequest"]["status"] == "ACCEPTED"
    assert data["conversation"]["id"] == conversation.id


def test_list_mine_by_role(service, test_student, test_teacher, test_teacher_2):
    first = service.create(test_student.id, test_teacher.id, "one")
    service.create(test_student.id, test_teacher_2.id, "two")
    service.update_status(first.id, test_teacher.id, "ACCEPTED")

    assert len(service.list_mine(test_student.id, "STUDENT")) == 2
    received = service.list_mine(test_teacher.id, "TEACHER")
    assert [r.id for r in received] == [first.id]
    assert received[0].teacher.id == test_teacher.id

    pending = service.list_mine(test_student.id, "STUDENT", "PENDING")
    assert [r.message for r in pending] == ["two"]
    with pytest.raises(ValidationException):
        service.list_mine(test_student.id, "STUDENT", "OPEN")
    with pytest.raises(ForbiddenException):
        service.list_mine(test_student.id, "ADMIN")


def test_cancel_deactivates_conversation(db, service, test_student, test_teacher, test_teacher_2):
    request = service.create(test_student.id, test_teacher.id, "hi")
    _, conversation = service.update_status(request.id, test_teacher.id, "ACCEPTED")

    with pytest.raises(ForbiddenException):
        service.cancel(request.id, test_teacher_2.id)

    service.cancel(request.id, test_student.id)
    db.refresh(conversation)
    assert conversation.request_id is None
    with pytest.raises(NotFoundException):
        service.cancel(request.id, test_student.id)
