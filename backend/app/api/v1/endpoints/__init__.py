# API endpoints
from . import auth, categories, resources, admission, help_requests, health

__all__ = ["auth", "categories", "resources", "admission", "help_requests", "health"]
