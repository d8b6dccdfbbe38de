# Re-export all models for convenient imports
from app.models.user import User, UserRole
from app.models.catalog import Category, Resource
from app.models.admission import (
    AdmissionType,
    AdmissionGuide,
    AdmissionHelpRequest,
    ADMISSION_TITLES,
    DEFAULT_STEPS,
)
from app.models.help_request import HelpRequest, HelpRequestStatus

__all__ = [
    # User
    "User",
    "UserRole",
    # Catalog
    "Category",
    "Resource",
    # Admission
    "AdmissionType",
    "AdmissionGuide",
    "AdmissionHelpRequest",
    "ADMISSION_TITLES",
    "DEFAULT_STEPS",
    # Help
    "HelpRequest",
    "HelpRequestStatus",
]
