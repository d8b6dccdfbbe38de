"""
Catalog Service
Categories and learning resources: listing, search, admin edits and
plain-text export
"""

import re
from typing import Any, Dict, List, Optional

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    AuthorizationError,
    CategoryNotFoundError,
    MissingFieldsError,
    ResourceNotFoundError,
)
from app.core.types import utcnow
from app.models.catalog import Category, Resource

CATEGORY_FIELDS = ("name", "description", "icon_name")
RESOURCE_REQUIRED_FIELDS = ("title", "description", "category", "content")

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-z0-9]")


def export_filename(title: str) -> str:
    """Attachment name for a resource download"""
    # Header values are latin-1, so only ASCII letters and digits survive
    stem = _UNSAFE_FILENAME_CHARS.sub("_", (title or "").lower())
    return f"{stem or 'resource'}.txt"


def export_text(resource: Resource) -> str:
    """Plain-text body served by the download endpoint"""
    return (
        f"Title: {resource.title}\n\n"
        f"Description: {resource.description}\n\n"
        f"Content:\n{resource.content}"
    )


def _blank_fields(data: Dict[str, Any], fields) -> List[str]:
    return [field for field in fields if not str(data.get(field) or "").strip()]


def _clean_image_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class CatalogService:
    """Service for categories and resources"""

    def __init__(self, db: AsyncSession):
        self.db = db

    # =====================================================
    # CATEGORIES
    # =====================================================

    async def list_categories(self) -> List[Category]:
        result = await self.db.execute(
            select(Category).order_by(Category.position, Category.created_at)
        )
        return list(result.scalars().all())

    async def find_category(self, category_id: str) -> Optional[Category]:
        result = await self.db.execute(select(Category).where(Category.id == category_id))
        return result.scalar_one_or_none()

    async def get_category(self, category_id: str) -> Category:
        category = await self.find_category(category_id)
        if not category:
            raise CategoryNotFoundError(category_id)
        return category

    async def create_category(self, data: Dict[str, Any]) -> Category:
        missing = _blank_fields(data, CATEGORY_FIELDS)
        if missing:
            raise MissingFieldsError(missing)

        position = await self._next_position(Category)
        category = Category(
            name=data["name"].strip(),
            description=data["description"].strip(),
            icon_name=data["icon_name"].strip(),
            position=position,
        )
        self.db.add(category)
        await self.db.commit()
        await self.db.refresh(category)
        return category

    async def update_category(self, category_id: str, data: Dict[str, Any]) -> Category:
        """Merge the given fields into the category; None means unchanged"""
        category = await self.get_category(category_id)

        updates = {key: value for key, value in data.items() if key in CATEGORY_FIELDS and value is not None}
        missing = _blank_fields(updates, updates.keys())
        if missing:
            raise MissingFieldsError(missing)

        for key, value in updates.items():
            setattr(category, key, value.strip())

        await self.db.commit()
        await self.db.refresh(category)
        return category

    async def delete_category(self, category_id: str) -> None:
        """Delete the category. Resources filed under it are kept as they are."""
        category = await self.get_category(category_id)
        await self.db.delete(category)
        await self.db.commit()

    # =====================================================
    # RESOURCES
    # =====================================================

    async def list_resources(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Resource]:
        """
        Resources in insertion order.

        `search` keeps resources whose title, description or content contains
        the query, ignoring case. `category` is an exact category id match.
        """
        query = select(Resource).order_by(Resource.position, Resource.created_at)

        if search:
            query = query.where(
                or_(
                    Resource.title.icontains(search, autoescape=True),
                    Resource.description.icontains(search, autoescape=True),
                    Resource.content.icontains(search, autoescape=True),
                )
            )
        if category:
            query = query.where(Resource.category == category)
        if limit is not None:
            query = query.limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_by_category(self, category_id: str) -> List[Resource]:
        return await self.list_resources(category=category_id)

    async def get_resource(self, resource_id: str) -> Resource:
        result = await self.db.execute(select(Resource).where(Resource.id == resource_id))
        resource = result.scalar_one_or_none()
        if not resource:
            raise ResourceNotFoundError(resource_id)
        return resource

    async def get_resource_detail(self, resource_id: str) -> Dict[str, Any]:
        """Resource plus the category record it points at, if that still exists"""
        resource = await self.get_resource(resource_id)
        category = await self.find_category(resource.category)
        return {"resource": resource, "category": category}

    async def create_resource(self, data: Dict[str, Any]) -> Resource:
        missing = _blank_fields(data, RESOURCE_REQUIRED_FIELDS)
        if missing:
            raise MissingFieldsError(missing)

        category_id = data["category"].strip()
        await self.get_category(category_id)

        now = utcnow()
        resource = Resource(
            title=data["title"].strip(),
            description=data["description"].strip(),
            category=category_id,
            content=data["content"],
            image_url=_clean_image_url(data.get("image_url")),
            downloadable=bool(data.get("downloadable", False)),
            position=await self._next_position(Resource),
            created_at=now,
            updated_at=now,
        )
        self.db.add(resource)
        await self.db.commit()
        await self.db.refresh(resource)
        return resource

    async def update_resource(self, resource_id: str, data: Dict[str, Any]) -> Resource:
        """Merge the given fields into the resource and refresh updated_at"""
        resource = await self.get_resource(resource_id)

        updates = {key: value for key, value in data.items() if value is not None}
        text_updates = [key for key in RESOURCE_REQUIRED_FIELDS if key in updates]
        missing = _blank_fields(updates, text_updates)
        if missing:
            raise MissingFieldsError(missing)

        if "category" in updates and updates["category"].strip() != resource.category:
            await self.get_category(updates["category"].strip())

        for key in ("title", "description", "category"):
            if key in updates:
                setattr(resource, key, updates[key].strip())
        if "content" in updates:
            resource.content = updates["content"]
        if "image_url" in data:
            resource.image_url = _clean_image_url(data["image_url"])
        if "downloadable" in updates:
            resource.downloadable = bool(updates["downloadable"])

        resource.updated_at = utcnow()
        await self.db.commit()
        await self.db.refresh(resource)
        return resource

    async def delete_resource(self, resource_id: str) -> None:
        resource = await self.get_resource(resource_id)
        await self.db.delete(resource)
        await self.db.commit()

    async def toggle_downloadable(self, resource_id: str) -> Resource:
        resource = await self.get_resource(resource_id)
        resource.downloadable = not resource.downloadable
        resource.updated_at = utcnow()
        await self.db.commit()
        await self.db.refresh(resource)
        return resource

    async def export_resource(self, resource_id: str, is_admin: bool = False) -> Dict[str, str]:
        """
        Build the download for a resource.

        Non-downloadable resources are only exported for admins.
        """
        resource = await self.get_resource(resource_id)
        if not resource.downloadable and not is_admin:
            raise AuthorizationError("This resource is not available for download")

        return {
            "filename": export_filename(resource.title),
            "content": export_text(resource),
        }

    # =====================================================
    # HELPERS
    # =====================================================

    async def _next_position(self, model) -> int:
        result = await self.db.execute(select(func.coalesce(func.max(model.position), 0)))
        return int(result.scalar_one()) + 1
