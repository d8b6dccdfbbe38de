from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from app.core.database import get_db
from app.core.logging_config import logger
from app.models.user import User
from app.modules.auth.dependencies import get_current_admin, get_optional_current_user
from app.schemas.auth import MessageResponse
from app.schemas.catalog import (
    CategoryResponse,
    ResourceCreate,
    ResourceUpdate,
    ResourceResponse,
    ResourceDetailResponse,
    ResourceListResponse,
)
from app.services.catalog_service import CatalogService

router = APIRouter()


@router.get("", response_model=ResourceListResponse)
async def list_resources(
    search: Optional[str] = Query(None, description="Substring of title, description or content"),
    category: Optional[str] = Query(None, description="Category ID"),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: AsyncSession = Depends(get_db)
):
    """
    List resources in the order they were added.

    The home page asks for `limit=3`; the resources page combines `search`
    and `category`.
    """
    resources = await CatalogService(db).list_resources(search=search, category=category, limit=limit)
    return {"resources": resources, "total": len(resources)}


@router.get("/{resource_id}", response_model=ResourceDetailResponse)
async def get_resource(resource_id: str, db: AsyncSession = Depends(get_db)):
    detail = await CatalogService(db).get_resource_detail(resource_id)
    response = ResourceDetailResponse.model_validate(detail["resource"])
    if detail["category"] is not None:
        response.category_info = CategoryResponse.model_validate(detail["category"])
    return response


@router.get("/{resource_id}/download", response_class=PlainTextResponse)
async def download_resource(
    resource_id: str,
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Plain-text export. Admins may download resources not marked downloadable."""
    is_admin = bool(current_user and current_user.is_admin)
    export = await CatalogService(db).export_resource(resource_id, is_admin=is_admin)

    return PlainTextResponse(
        content=export["content"],
        headers={"Content-Disposition": f'attachment; filename="{export["filename"]}"'}
    )


@router.post("", response_model=ResourceResponse, status_code=status.HTTP_201_CREATED)
async def create_resource(
    resource_data: ResourceCreate,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    resource = await CatalogService(db).create_resource(resource_data.model_dump())
    logger.log_admin_action("create_resource", resource.title, resource_id=resource.id)
    return resource


@router.put("/{resource_id}", response_model=ResourceResponse)
async def update_resource(
    resource_id: str,
    resource_data: ResourceUpdate,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """Partial update; omitted fields keep their value"""
    resource = await CatalogService(db).update_resource(
        resource_id, resource_data.model_dump(exclude_unset=True)
    )
    logger.log_admin_action("update_resource", resource.title, resource_id=resource.id)
    return resource


@router.delete("/{resource_id}", response_model=MessageResponse)
async def delete_resource(
    resource_id: str,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    await CatalogService(db).delete_resource(resource_id)
    logger.log_admin_action("delete_resource", resource_id)
    return MessageResponse(message="Resource deleted")


@router.post("/{resource_id}/toggle-download", response_model=ResourceResponse)
async def toggle_downloadable(
    resource_id: str,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    resource = await CatalogService(db).toggle_downloadable(resource_id)
    logger.log_admin_action(
        "toggle_download", resource.title,
        resource_id=resource.id, downloadable=resource.downloadable
    )
    return resource
