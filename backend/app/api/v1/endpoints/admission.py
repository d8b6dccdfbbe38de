"""
Admission guidance endpoints

Guides and help text are public, edits are admin-only. Questions may be
asked anonymously; the asker polls the request by id (or their history when
signed in) to see the admin's answer.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.database import get_db
from app.core.logging_config import logger
from app.models.admission import AdmissionType
from app.models.user import User
from app.modules.auth.dependencies import get_current_user, get_current_admin, get_optional_current_user
from app.schemas.admission import (
    AdmissionGuideResponse,
    StepsReplace,
    StepCreate,
    StepUpdate,
    HelpTextUpdate,
    HelpTextResponse,
    AdmissionHelpCreate,
    AdmissionHelpRespond,
    AdmissionHelpResponse,
)
from app.services.admission_service import AdmissionService, parse_admission_type

router = APIRouter()


def get_admission_type(
    admission_type: str = Path(..., description="ket, comedk or management")
) -> AdmissionType:
    return parse_admission_type(admission_type)


# ==================== Guides ====================

@router.get("", response_model=List[AdmissionGuideResponse])
async def list_guides(db: AsyncSession = Depends(get_db)):
    return await AdmissionService(db).list_guides()


@router.get("/{admission_type}", response_model=AdmissionGuideResponse)
async def get_guide(
    admission_type: AdmissionType = Depends(get_admission_type),
    db: AsyncSession = Depends(get_db)
):
    return await AdmissionService(db).get_guide(admission_type)


@router.get("/{admission_type}/steps", response_model=List[str])
async def get_steps(
    admission_type: AdmissionType = Depends(get_admission_type),
    db: AsyncSession = Depends(get_db)
):
    """Edited steps, or the built-in defaults when never edited"""
    return await AdmissionService(db).get_steps(admission_type)


@router.put("/{admission_type}/steps", response_model=AdmissionGuideResponse)
async def replace_steps(
    payload: StepsReplace,
    admission_type: AdmissionType = Depends(get_admission_type),
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    service = AdmissionService(db)
    await service.replace_steps(admission_type, payload.steps)
    logger.log_admin_action("replace_steps", admission_type.value, count=len(payload.steps))
    return await service.get_guide(admission_type)


@router.post("/{admission_type}/steps", response_model=AdmissionGuideResponse, status_code=status.HTTP_201_CREATED)
async def add_step(
    payload: StepCreate,
    admission_type: AdmissionType = Depends(get_admission_type),
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    service = AdmissionService(db)
    await service.add_step(admission_type, payload.step)
    logger.log_admin_action("add_step", admission_type.value)
    return await service.get_guide(admission_type)


@router.put("/{admission_type}/steps/{index}", response_model=AdmissionGuideResponse)
async def update_step(
    payload: StepUpdate,
    index: int = Path(..., description="Zero-based step position"),
    admission_type: AdmissionType = Depends(get_admission_type),
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    service = AdmissionService(db)
    await service.update_step(admission_type, index, payload.text)
    logger.log_admin_action("update_step", admission_type.value, index=index)
    return await service.get_guide(admission_type)


@router.delete("/{admission_type}/steps/{index}", response_model=AdmissionGuideResponse)
async def delete_step(
    index: int = Path(..., description="Zero-based step position"),
    admission_type: AdmissionType = Depends(get_admission_type),
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    service = AdmissionService(db)
    await service.delete_step(admission_type, index)
    logger.log_admin_action("delete_step", admission_type.value, index=index)
    return await service.get_guide(admission_type)


@router.get("/{admission_type}/help-text", response_model=HelpTextResponse)
async def get_help_text(
    admission_type: AdmissionType = Depends(get_admission_type),
    db: AsyncSession = Depends(get_db)
):
    """Empty string until an admin writes guidance"""
    help_text = await AdmissionService(db).get_help_text(admission_type)
    return HelpTextResponse(admission_type=admission_type, help_text=help_text)


@router.put("/{admission_type}/help-text", response_model=HelpTextResponse)
async def set_help_text(
    payload: HelpTextUpdate,
    admission_type: AdmissionType = Depends(get_admission_type),
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    help_text = await AdmissionService(db).set_help_text(admission_type, payload.help_text)
    logger.log_admin_action("set_help_text", admission_type.value)
    return HelpTextResponse(admission_type=admission_type, help_text=help_text)


# ==================== Help requests ====================

@router.post(
    "/{admission_type}/requests",
    response_model=AdmissionHelpResponse,
    status_code=status.HTTP_201_CREATED
)
async def submit_question(
    payload: AdmissionHelpCreate,
    admission_type: AdmissionType = Depends(get_admission_type),
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Ask the admin a question. No account needed."""
    request = await AdmissionService(db).submit_question(admission_type, payload.question, current_user)
    logger.info(f"[Admission] Question {request.id} submitted for {admission_type.value}")
    return request


@router.get("/{admission_type}/requests", response_model=List[AdmissionHelpResponse])
async def list_questions(
    admission_type: AdmissionType = Depends(get_admission_type),
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    return await AdmissionService(db).list_questions(admission_type)


@router.get("/{admission_type}/requests/mine", response_model=List[AdmissionHelpResponse])
async def my_questions(
    admission_type: AdmissionType = Depends(get_admission_type),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    return await AdmissionService(db).list_user_questions(admission_type, str(current_user.id))


@router.get("/{admission_type}/requests/{request_id}", response_model=AdmissionHelpResponse)
async def get_question(
    request_id: str,
    admission_type: AdmissionType = Depends(get_admission_type),
    db: AsyncSession = Depends(get_db)
):
    return await AdmissionService(db).get_question(admission_type, request_id)


@router.post("/{admission_type}/requests/{request_id}/respond", response_model=AdmissionHelpResponse)
async def respond_to_question(
    request_id: str,
    payload: AdmissionHelpRespond,
    admission_type: AdmissionType = Depends(get_admission_type),
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    request = await AdmissionService(db).respond(admission_type, request_id, payload.response)
    logger.log_admin_action("respond_admission_question", request_id, admission_type=admission_type.value)
    return request
