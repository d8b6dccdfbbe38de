from app.services.email_service import EmailService, email_service
from app.services.auth_service import AuthService
from app.services.catalog_service import CatalogService
from app.services.admission_service import AdmissionService, parse_admission_type
from app.services.help_request_service import HelpRequestService

__all__ = [
    "EmailService",
    "email_service",
    "AuthService",
    "CatalogService",
    "AdmissionService",
    "parse_admission_type",
    "HelpRequestService",
]
