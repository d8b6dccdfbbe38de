"""
Catalog Models - Categories and the learning resources filed under them
"""

from sqlalchemy import Column, String, Boolean, DateTime, Text, Integer, Index

from app.core.database import Base
from app.core.types import GUID, generate_uuid, utcnow


class Category(Base):
    """Subject area shown on the home page and as a resource filter"""
    __tablename__ = "categories"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    icon_name = Column(String(100), nullable=False)
    # Insertion order; listing follows it
    position = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Category {self.name}>"


class Resource(Base):
    """Learning resource"""
    __tablename__ = "resources"
    __table_args__ = (
        Index('ix_resources_category', 'category'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=False)
    # Plain category id; deleting a category leaves its resources in place
    category = Column(String(36), nullable=False)
    content = Column(Text, nullable=False)
    image_url = Column(Text, nullable=True)
    downloadable = Column(Boolean, default=False, nullable=False)
    position = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self):
        return f"<Resource {self.title}>"
