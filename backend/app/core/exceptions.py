"""
Custom Exceptions for Engineer Guide
====================================

Services raise these instead of HTTPException so the same rules hold for the
API, the management CLI and the tests. The FastAPI app converts them into
JSON responses using `status_code` and `to_dict()`.

Usage:
    from app.core.exceptions import CategoryNotFoundError

    if not category:
        raise CategoryNotFoundError(category_id)
"""

from typing import Optional, Any, Dict


class EngineerGuideError(Exception):
    """Base exception for all Engineer Guide errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(EngineerGuideError):
    """User authentication failed"""

    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTH_FAILED")


class InvalidCredentialsError(AuthenticationError):
    """Identifier/password pair did not match an account"""

    def __init__(self):
        super().__init__("Incorrect username/email or password")
        self.code = "INVALID_CREDENTIALS"


class InvalidTokenError(AuthenticationError):
    """JWT token is invalid or expired"""

    def __init__(self, message: str = "Could not validate credentials"):
        super().__init__(message)
        self.code = "INVALID_TOKEN"


class AuthorizationError(EngineerGuideError):
    """User not authorized for this action"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="NOT_AUTHORIZED")


class InactiveAccountError(AuthorizationError):
    def __init__(self):
        super().__init__("Account is inactive")
        self.code = "ACCOUNT_INACTIVE"


# ============================================
# Not Found Errors (404-type)
# ============================================

class EntityNotFoundError(EngineerGuideError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, entity_type: str, entity_id: str):
        super().__init__(
            f"{entity_type} with ID '{entity_id}' not found",
            code=f"{entity_type.upper().replace(' ', '_')}_NOT_FOUND",
            details={"entity_type": entity_type, "entity_id": entity_id}
        )


class UserNotFoundError(EntityNotFoundError):
    def __init__(self, user_id: str):
        super().__init__("User", user_id)


class CategoryNotFoundError(EntityNotFoundError):
    def __init__(self, category_id: str):
        super().__init__("Category", category_id)


class ResourceNotFoundError(EntityNotFoundError):
    """Learning resource not found"""

    def __init__(self, resource_id: str):
        super().__init__("Resource", resource_id)


class HelpRequestNotFoundError(EntityNotFoundError):
    def __init__(self, request_id: str):
        super().__init__("Help request", request_id)


class AdmissionTypeNotFoundError(EngineerGuideError):
    """Admission route outside ket/comedk/management"""

    status_code = 404

    def __init__(self, admission_type: str):
        super().__init__(
            f"Unknown admission type '{admission_type}'",
            code="ADMISSION_TYPE_NOT_FOUND",
            details={"admission_type": admission_type}
        )


class StepNotFoundError(EngineerGuideError):
    """Step index outside the guide"""

    status_code = 404

    def __init__(self, admission_type: str, index: int):
        super().__init__(
            f"Step {index} does not exist in the {admission_type} guide",
            code="STEP_NOT_FOUND",
            details={"admission_type": admission_type, "index": index}
        )


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(EngineerGuideError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class MissingFieldsError(ValidationError):
    """One or more required fields were blank"""

    def __init__(self, fields: list, message: str = "Please fill in all fields"):
        super().__init__(message)
        self.code = "MISSING_FIELDS"
        self.details = {"fields": fields}


class DuplicateError(ValidationError):
    """Unique value already taken"""

    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(message or f"{field.capitalize()} already registered", field=field)
        self.code = "DUPLICATE_" + field.upper()


class InvalidResetTokenError(ValidationError):
    def __init__(self, message: str = "Invalid or expired reset token"):
        super().__init__(message)
        self.code = "INVALID_RESET_TOKEN"


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: EngineerGuideError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "error": error.to_dict(),
        "detail": error.message,
    }
