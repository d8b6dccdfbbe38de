from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime

from app.models.help_request import HelpRequestStatus


class HelpRequestCreate(BaseModel):
    title: str
    details: str


class HelpRequestRespond(BaseModel):
    response: str


class HelpRequestResponse(BaseModel):
    id: str
    title: str
    details: str
    user_id: str
    username: str
    status: HelpRequestStatus
    response: str
    created_at: datetime
    responded_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
