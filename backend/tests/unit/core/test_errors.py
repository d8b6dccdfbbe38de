"""
Unit Tests for the exception hierarchy
"""
from app.core.exceptions import (
    EngineerGuideError,
    AuthenticationError,
    InvalidCredentialsError,
    AuthorizationError,
    InactiveAccountError,
    CategoryNotFoundError,
    HelpRequestNotFoundError,
    AdmissionTypeNotFoundError,
    StepNotFoundError,
    ValidationError,
    MissingFieldsError,
    DuplicateError,
    InvalidResetTokenError,
)


def test_status_codes():
    assert EngineerGuideError("boom").status_code == 500
    assert InvalidCredentialsError().status_code == 401
    assert InactiveAccountError().status_code == 403
    assert CategoryNotFoundError("c1").status_code == 404
    assert AdmissionTypeNotFoundError("jee").status_code == 404
    assert StepNotFoundError("ket", 9).status_code == 404
    assert MissingFieldsError(["title"]).status_code == 400
    assert InvalidResetTokenError().status_code == 400


def test_hierarchy():
    assert issubclass(InvalidCredentialsError, AuthenticationError)
    assert issubclass(InactiveAccountError, AuthorizationError)
    assert issubclass(DuplicateError, ValidationError)
    assert issubclass(ValidationError, EngineerGuideError)


def test_not_found_code_from_entity_name():
    error = HelpRequestNotFoundError("r1")

    assert error.code == "HELP_REQUEST_NOT_FOUND"
    assert error.details == {"entity_type": "Help request", "entity_id": "r1"}
    assert error.message == "Help request with ID 'r1' not found"


def test_missing_fields_payload():
    error = MissingFieldsError(["title", "content"])

    assert error.to_dict() == {
        "code": "MISSING_FIELDS",
        "message": "Please fill in all fields",
        "details": {"fields": ["title", "content"]},
    }


def test_duplicate_messages():
    assert DuplicateError("email").message == "Email already registered"
    assert DuplicateError("email").code == "DUPLICATE_EMAIL"
    assert DuplicateError("username", "Username already taken").details == {"field": "username"}


def test_credentials_message():
    assert InvalidCredentialsError().message == "Incorrect username/email or password"
