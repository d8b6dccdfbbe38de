from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.core.database import get_db
from app.core.logging_config import logger
from app.models.user import User
from app.modules.auth.dependencies import get_current_user, get_current_admin
from app.schemas.help_request import HelpRequestCreate, HelpRequestRespond, HelpRequestResponse
from app.services.email_service import email_service
from app.services.help_request_service import HelpRequestService

router = APIRouter()


@router.post("", response_model=HelpRequestResponse, status_code=status.HTTP_201_CREATED)
async def submit_help_request(
    payload: HelpRequestCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Ask for help with a project"""
    request = await HelpRequestService(db).submit(current_user, payload.title, payload.details)
    logger.info(f"[HelpRequest] {request.id} submitted by {current_user.email}")
    return request


@router.get("/mine", response_model=List[HelpRequestResponse])
async def list_my_help_requests(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await HelpRequestService(db).list_for_user(str(current_user.id))


@router.get("", response_model=List[HelpRequestResponse])
async def list_help_requests(
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """Every request, oldest first"""
    return await HelpRequestService(db).list_all()


@router.post("/{request_id}/respond", response_model=HelpRequestResponse)
async def respond_to_help_request(
    request_id: str,
    payload: HelpRequestRespond,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    request = await HelpRequestService(db).respond(request_id, payload.response)
    logger.log_admin_action("respond_help_request", request_id)

    if request.user is not None:
        await email_service.send_help_response_email(
            to_email=request.user.email,
            user_name=request.username,
            request_title=request.title,
            response=request.response
        )
    return request
