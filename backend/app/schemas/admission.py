from pydantic import BaseModel, ConfigDict, computed_field
from typing import Optional, List
from datetime import datetime

from app.models.admission import AdmissionType


class AdmissionGuideResponse(BaseModel):
    admission_type: AdmissionType
    title: str
    steps: List[str]
    help_text: str = ""


class StepsReplace(BaseModel):
    steps: List[str]


class StepCreate(BaseModel):
    step: str


class StepUpdate(BaseModel):
    text: str


class HelpTextUpdate(BaseModel):
    help_text: str


class HelpTextResponse(BaseModel):
    admission_type: AdmissionType
    help_text: str


# ============================================
# Admission help requests
# ============================================

class AdmissionHelpCreate(BaseModel):
    question: str


class AdmissionHelpRespond(BaseModel):
    response: str


class AdmissionHelpResponse(BaseModel):
    id: str
    admission_type: AdmissionType
    question: str
    response: str
    user_id: Optional[str] = None
    created_at: datetime
    responded_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def answered(self) -> bool:
        return bool(self.response)
