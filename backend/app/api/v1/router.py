from fastapi import APIRouter
from app.api.v1.endpoints import auth, categories, resources, admission, help_requests, health

api_router = APIRouter()

# Deep health checks (/health/live, /health/ready, /health/deep)
api_router.include_router(health.router)

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(categories.router, prefix="/categories", tags=["Categories"])
api_router.include_router(resources.router, prefix="/resources", tags=["Resources"])
api_router.include_router(admission.router, prefix="/admission", tags=["Admission"])
api_router.include_router(help_requests.router, prefix="/help-requests", tags=["Help Requests"])
