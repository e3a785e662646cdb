from tutorlink.core.exceptions import (
    AvailabilityOverlapException,
    ConflictException,
    DuplicateReviewException,
    ForbiddenException,
    NotFoundException,
    ServiceException,
    UnauthorizedException,
    ValidationException,
)


def test_status_codes_and_taxonomy_codes():
    cases = [
        (ValidationException("bad"), 400, "VALIDATION_ERROR"),
        (UnauthorizedException("who"), 401, "UNAUTHORIZED"),
        (ForbiddenException("no"), 403, "FORBIDDEN"),
        (NotFoundException("gone"), 404, "NOT_FOUND"),
        (ConflictException("again"), 409, "CONFLICT"),
        (ServiceException("boom"), 500, "INTERNAL_ERROR"),
    ]
    for exc, status_code, code in cases:
        assert exc.status_code == status_code
        assert exc.code == code


def test_http_exception_carries_uniform_body():
    http_exc = NotFoundException("Teacher not found").to_http_exception()
    assert http_exc.status_code == 404
    assert http_exc.detail == {"code": "NOT_FOUND", "message": "Teacher not found", "details": None}


def test_unauthorized_sets_bearer_challenge():
    http_exc = UnauthorizedException("Invalid or expired token").to_http_exception()
    assert http_exc.headers == {"WWW-Authenticate": "Bearer"}


def test_service_exception_hides_internal_message():
    exc = ServiceException("Database operation failed: secret details")
    assert exc.to_http_exception().detail["message"] == "An unexpected error occurred."
    assert exc.to_socket_error() == {
        "code": 500,
        "type": "INTERNAL_ERROR",
        "message": "An unexpected error occurred.",
    }


def test_socket_error_payload():
    assert ForbiddenException("nope").to_socket_error() == {
        "code": 403,
        "type": "FORBIDDEN",
        "message": "nope",
    }


def test_specific_exceptions_are_conflicts():
    overlap = AvailabilityOverlapException(day_of_week=2, conflicting_slot_id="slot-1")
    assert overlap.status_code == 409
    assert overlap.details == {"dayOfWeek": 2, "conflictingSlotId": "slot-1"}
    assert DuplicateReviewException().status_code == 409
