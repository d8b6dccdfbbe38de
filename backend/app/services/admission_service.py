"""
Admission Service
=================
Step-by-step guides for the KET, COMEDK and Management quota routes, the
admin-authored guidance text, and the question/answer loop between visitors
and the admin.

A guide that was never edited has no row; it serves DEFAULT_STEPS and an
empty help text until the first admin write creates it.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    AdmissionTypeNotFoundError,
    HelpRequestNotFoundError,
    StepNotFoundError,
    ValidationError,
)
from app.core.types import utcnow
from app.models.admission import (
    ADMISSION_TITLES,
    DEFAULT_STEPS,
    AdmissionGuide,
    AdmissionHelpRequest,
    AdmissionType,
)
from app.models.user import User

# Older links used the exam name instead of the route key
_TYPE_ALIASES = {"kcet": AdmissionType.KET}


def parse_admission_type(value: str) -> AdmissionType:
    key = (value or "").strip().lower()
    if key in _TYPE_ALIASES:
        return _TYPE_ALIASES[key]
    try:
        return AdmissionType(key)
    except ValueError:
        raise AdmissionTypeNotFoundError(value)


def _clean_step(text: Optional[str]) -> str:
    step = (text or "").strip()
    if not step:
        raise ValidationError("Step cannot be empty", field="step")
    return step


class AdmissionService:
    """Service for admission guides and admission questions"""

    def __init__(self, db: AsyncSession):
        self.db = db

    # =====================================================
    # GUIDES
    # =====================================================

    async def _find_guide(self, admission_type: AdmissionType) -> Optional[AdmissionGuide]:
        result = await self.db.execute(
            select(AdmissionGuide).where(AdmissionGuide.admission_type == admission_type)
        )
        return result.scalar_one_or_none()

    async def _get_or_create_guide(self, admission_type: AdmissionType) -> AdmissionGuide:
        guide = await self._find_guide(admission_type)
        if guide is None:
            guide = AdmissionGuide(
                admission_type=admission_type,
                steps=list(DEFAULT_STEPS[admission_type]),
                help_text="",
            )
            self.db.add(guide)
        return guide

    @staticmethod
    def _steps_of(guide: Optional[AdmissionGuide], admission_type: AdmissionType) -> List[str]:
        if guide is None or guide.steps is None:
            return list(DEFAULT_STEPS[admission_type])
        return list(guide.steps)

    async def get_steps(self, admission_type: AdmissionType) -> List[str]:
        guide = await self._find_guide(admission_type)
        return self._steps_of(guide, admission_type)

    async def get_guide(self, admission_type: AdmissionType) -> Dict[str, Any]:
        guide = await self._find_guide(admission_type)
        return {
            "admission_type": admission_type,
            "title": ADMISSION_TITLES[admission_type],
            "steps": self._steps_of(guide, admission_type),
            "help_text": guide.help_text if guide else "",
        }

    async def list_guides(self) -> List[Dict[str, Any]]:
        return [await self.get_guide(admission_type) for admission_type in AdmissionType]

    async def _save_steps(self, admission_type: AdmissionType, steps: List[str]) -> List[str]:
        guide = await self._get_or_create_guide(admission_type)
        # StringList is not mutation-tracked; always assign a new list
        guide.steps = list(steps)
        guide.updated_at = utcnow()
        await self.db.commit()
        return list(steps)

    async def replace_steps(self, admission_type: AdmissionType, steps: List[str]) -> List[str]:
        """Replace every step; blank entries are dropped"""
        cleaned = [step.strip() for step in steps if step and step.strip()]
        return await self._save_steps(admission_type, cleaned)

    async def add_step(self, admission_type: AdmissionType, text: str) -> List[str]:
        steps = await self.get_steps(admission_type)
        steps.append(_clean_step(text))
        return await self._save_steps(admission_type, steps)

    async def update_step(self, admission_type: AdmissionType, index: int, text: str) -> List[str]:
        steps = await self.get_steps(admission_type)
        if index < 0 or index >= len(steps):
            raise StepNotFoundError(admission_type.value, index)
        steps[index] = _clean_step(text)
        return await self._save_steps(admission_type, steps)

    async def delete_step(self, admission_type: AdmissionType, index: int) -> List[str]:
        steps = await self.get_steps(admission_type)
        if index < 0 or index >= len(steps):
            raise StepNotFoundError(admission_type.value, index)
        del steps[index]
        return await self._save_steps(admission_type, steps)

    async def get_help_text(self, admission_type: AdmissionType) -> str:
        guide = await self._find_guide(admission_type)
        return guide.help_text if guide else ""

    async def set_help_text(self, admission_type: AdmissionType, text: str) -> str:
        guide = await self._get_or_create_guide(admission_type)
        guide.help_text = text or ""
        guide.updated_at = utcnow()
        await self.db.commit()
        return guide.help_text

    # =====================================================
    # HELP REQUESTS
    # =====================================================

    async def submit_question(
        self,
        admission_type: AdmissionType,
        question: str,
        user: Optional[User] = None,
    ) -> AdmissionHelpRequest:
        """Record a question; anonymous visitors pass no user"""
        question = (question or "").strip()
        if not question:
            raise ValidationError("Question cannot be empty", field="question")

        request = AdmissionHelpRequest(
            admission_type=admission_type,
            question=question,
            response="",
            user_id=str(user.id) if user else None,
        )
        self.db.add(request)
        await self.db.commit()
        await self.db.refresh(request)
        return request

    async def list_questions(self, admission_type: AdmissionType) -> List[AdmissionHelpRequest]:
        result = await self.db.execute(
            select(AdmissionHelpRequest)
            .where(AdmissionHelpRequest.admission_type == admission_type)
            .order_by(AdmissionHelpRequest.created_at, AdmissionHelpRequest.id)
        )
        return list(result.scalars().all())

    async def list_user_questions(
        self,
        admission_type: AdmissionType,
        user_id: str,
    ) -> List[AdmissionHelpRequest]:
        result = await self.db.execute(
            select(AdmissionHelpRequest)
            .where(
                AdmissionHelpRequest.admission_type == admission_type,
                AdmissionHelpRequest.user_id == user_id,
            )
            .order_by(AdmissionHelpRequest.created_at, AdmissionHelpRequest.id)
        )
        return list(result.scalars().all())

    async def get_question(self, admission_type: AdmissionType, request_id: str) -> AdmissionHelpRequest:
        result = await self.db.execute(
            select(AdmissionHelpRequest).where(
                AdmissionHelpRequest.id == request_id,
                AdmissionHelpRequest.admission_type == admission_type,
            )
        )
        request = result.scalar_one_or_none()
        if not request:
            raise HelpRequestNotFoundError(request_id)
        return request

    async def respond(
        self,
        admission_type: AdmissionType,
        request_id: str,
        response: str,
    ) -> AdmissionHelpRequest:
        """Set or overwrite the admin answer"""
        response = (response or "").strip()
        if not response:
            raise ValidationError("Response cannot be empty", field="response")

        request = await self.get_question(admission_type, request_id)
        request.response = response
        request.responded_at = utcnow()
        await self.db.commit()
        await self.db.refresh(request)
        return request
