from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.core.database import get_db
from app.core.logging_config import logger
from app.models.user import User
from app.modules.auth.dependencies import get_current_admin
from app.schemas.auth import MessageResponse
from app.schemas.catalog import CategoryCreate, CategoryUpdate, CategoryResponse, ResourceResponse
from app.services.catalog_service import CatalogService

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    """All categories in the order they were added"""
    return await CatalogService(db).list_categories()


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str, db: AsyncSession = Depends(get_db)):
    return await CatalogService(db).get_category(category_id)


@router.get("/{category_id}/resources", response_model=List[ResourceResponse])
async def list_category_resources(category_id: str, db: AsyncSession = Depends(get_db)):
    """Resources filed under a category id, including one that was since deleted"""
    return await CatalogService(db).list_by_category(category_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: CategoryCreate,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    category = await CatalogService(db).create_category(category_data.model_dump())
    logger.log_admin_action("create_category", category.name, category_id=category.id)
    return category


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    category_data: CategoryUpdate,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    """Partial update; omitted fields keep their value"""
    category = await CatalogService(db).update_category(
        category_id, category_data.model_dump(exclude_unset=True)
    )
    logger.log_admin_action("update_category", category.name, category_id=category.id)
    return category


@router.delete("/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: str,
    admin: User = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db)
):
    await CatalogService(db).delete_category(category_id)
    logger.log_admin_action("delete_category", category_id)
    return MessageResponse(message="Category deleted")
