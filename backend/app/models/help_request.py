from sqlalchemy import Column, String, DateTime, Text, ForeignKey, Index, Enum as SQLEnum
from sqlalchemy.orm import relationship
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid, utcnow


class HelpRequestStatus(str, enum.Enum):
    PENDING = "pending"
    RESPONDED = "responded"


class HelpRequest(Base):
    """Project help request raised by a signed-in user"""
    __tablename__ = "help_requests"
    __table_args__ = (
        Index('ix_help_requests_user_id', 'user_id'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title = Column(String(500), nullable=False)
    details = Column(Text, nullable=False)

    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # Name shown to the admin, captured at submission time
    username = Column(String(255), nullable=False, default="")

    status = Column(SQLEnum(HelpRequestStatus), default=HelpRequestStatus.PENDING, nullable=False)
    response = Column(Text, nullable=False, default="")

    created_at = Column(DateTime, default=utcnow, nullable=False)
    responded_at = Column(DateTime, nullable=True)

    user = relationship("User", back_populates="help_requests")

    def __repr__(self):
        return f"<HelpRequest {self.title} ({self.status.value if self.status else None})>"
