from pydantic import BaseModel, ConfigDict
from typing import Optional, List
from datetime import datetime


# ============================================
# Categories
# ============================================

class CategoryCreate(BaseModel):
    name: str
    description: str
    icon_name: str


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    icon_name: Optional[str] = None


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: str
    icon_name: str

    model_config = ConfigDict(from_attributes=True)


# ============================================
# Resources
# ============================================

class ResourceCreate(BaseModel):
    title: str
    description: str
    category: str
    content: str
    image_url: Optional[str] = None
    downloadable: bool = False


class ResourceUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    content: Optional[str] = None
    image_url: Optional[str] = None
    downloadable: Optional[bool] = None


class ResourceResponse(BaseModel):
    id: str
    title: str
    description: str
    category: str
    content: str
    image_url: Optional[str] = None
    downloadable: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ResourceDetailResponse(ResourceResponse):
    """Resource plus its category, when that category still exists"""
    category_info: Optional[CategoryResponse] = None


class ResourceListResponse(BaseModel):
    resources: List[ResourceResponse]
    total: int
