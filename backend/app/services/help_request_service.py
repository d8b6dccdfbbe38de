from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.exceptions import HelpRequestNotFoundError, MissingFieldsError, ValidationError
from app.core.types import utcnow
from app.models.help_request import HelpRequest, HelpRequestStatus
from app.models.user import User


class HelpRequestService:
    """Project help requests raised by users and answered by the admin"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def submit(self, user: User, title: str, details: str) -> HelpRequest:
        title = (title or "").strip()
        details = (details or "").strip()
        missing = [name for name, value in (("title", title), ("details", details)) if not value]
        if missing:
            raise MissingFieldsError(missing)

        request = HelpRequest(
            title=title,
            details=details,
            user_id=str(user.id),
            username=user.display_name,
            status=HelpRequestStatus.PENDING,
            response="",
        )
        self.db.add(request)
        await self.db.commit()
        await self.db.refresh(request)
        return request

    async def list_for_user(self, user_id: str) -> List[HelpRequest]:
        result = await self.db.execute(
            select(HelpRequest)
            .where(HelpRequest.user_id == user_id)
            .order_by(HelpRequest.created_at, HelpRequest.id)
        )
        return list(result.scalars().all())

    async def list_all(self) -> List[HelpRequest]:
        result = await self.db.execute(
            select(HelpRequest).order_by(HelpRequest.created_at, HelpRequest.id)
        )
        return list(result.scalars().all())

    async def get(self, request_id: str) -> HelpRequest:
        result = await self.db.execute(
            select(HelpRequest)
            .options(selectinload(HelpRequest.user))
            .where(HelpRequest.id == request_id)
        )
        request = result.scalar_one_or_none()
        if not request:
            raise HelpRequestNotFoundError(request_id)
        return request

    async def respond(self, request_id: str, response: str) -> HelpRequest:
        """Answer a request and mark it responded"""
        response = (response or "").strip()
        if not response:
            raise ValidationError("Response cannot be empty", field="response")

        request = await self.get(request_id)
        request.response = response
        request.status = HelpRequestStatus.RESPONDED
        request.responded_at = utcnow()
        await self.db.commit()
        return request
