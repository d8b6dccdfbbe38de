"""
Admission Models - Step-by-step guides per admission route and the
questions users ask about them
"""

from sqlalchemy import Column, DateTime, Text, ForeignKey, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship
import enum

from app.core.database import Base
from app.core.types import GUID, StringList, generate_uuid, utcnow


class AdmissionType(str, enum.Enum):
    """Engineering admission routes"""
    KET = "ket"
    COMEDK = "comedk"
    MANAGEMENT = "management"


ADMISSION_TITLES = {
    AdmissionType.KET: "KET Admission",
    AdmissionType.COMEDK: "COMEDK Admission",
    AdmissionType.MANAGEMENT: "Management Quota",
}

DEFAULT_STEPS = {
    AdmissionType.KET: [
        "Register for the KET exam on the official website.",
        "Download your admit card when available.",
        "Appear for the KET exam at your designated center.",
        "Check your results online.",
        "Participate in the counseling process and select your preferred colleges.",
        "Complete document verification and pay the admission fee.",
    ],
    AdmissionType.COMEDK: [
        "Register for COMEDK UGET on the official portal.",
        "Fill out the application form and upload required documents.",
        "Download your admit card.",
        "Take the COMEDK UGET exam.",
        "Check your results and download your rank card.",
        "Attend online counseling and select colleges/courses.",
        "Complete admission formalities at the allotted college.",
    ],
    AdmissionType.MANAGEMENT: [
        "Contact the college admission office directly.",
        "Fill out the management quota application form.",
        "Submit required documents and pay the application fee.",
        "Attend the interview/counseling if required.",
        "Receive admission offer and pay the admission fee.",
        "Complete document verification and join the college.",
    ],
}


class AdmissionGuide(Base):
    """Admin-edited steps and guidance text for one admission route.

    A route without a row serves DEFAULT_STEPS and an empty help text.
    """
    __tablename__ = "admission_guides"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    admission_type = Column(SQLEnum(AdmissionType), unique=True, nullable=False)
    steps = Column(StringList, nullable=True)
    help_text = Column(Text, nullable=False, default="")
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<AdmissionGuide {self.admission_type}>"


class AdmissionHelpRequest(Base):
    """Question about an admission route; an empty response means unanswered"""
    __tablename__ = "admission_help_requests"
    __table_args__ = (
        Index('ix_admission_help_type_created', 'admission_type', 'created_at'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    admission_type = Column(SQLEnum(AdmissionType), nullable=False)
    question = Column(Text, nullable=False)
    response = Column(Text, nullable=False, default="")
    # Anonymous visitors may ask too
    user_id = Column(GUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    responded_at = Column(DateTime, nullable=True)

    user = relationship("User", back_populates="admission_help_requests")

    @property
    def answered(self) -> bool:
        return bool(self.response)

    def __repr__(self):
        return f"<AdmissionHelpRequest {self.admission_type} {self.id}>"
