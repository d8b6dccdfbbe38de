"""
Database Seed Data Module

Starter accounts, categories and resources. Each collection is seeded only
while it is empty, so running this repeatedly is safe.

Run with: python -m app.db.seed_data
"""
import asyncio
from typing import Dict, List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import AsyncSessionLocal, init_db
from app.core.logging_config import logger
from app.core.security import get_password_hash
from app.core.types import utcnow
from app.models.catalog import Category, Resource
from app.models.user import User, UserRole


# ==================== Sample Data Constants ====================

SAMPLE_USERS = [
    {"username": "admin", "email": "admin@example.com", "password": "admin123", "role": UserRole.ADMIN},
    {"username": "user", "email": "user@example.com", "password": "user123", "role": UserRole.USER},
]

SAMPLE_CATEGORIES = [
    {"name": "Mathematics", "description": "Essential mathematics for engineering", "icon_name": "Calculator"},
    {"name": "Physics", "description": "Applied physics for engineering students", "icon_name": "Atom"},
    {"name": "Computer Science", "description": "Programming and computing fundamentals", "icon_name": "Code"},
    {"name": "Mechanical Engineering", "description": "Principles of mechanical engineering", "icon_name": "Cog"},
]

# "category" refers to a SAMPLE_CATEGORIES name
SAMPLE_RESOURCES = [
    {
        "title": "Calculus Fundamentals",
        "description": "Essential calculus concepts for engineers",
        "category": "Mathematics",
        "content": "This guide covers derivatives, integrals, and their applications in engineering problems.",
        "image_url": "https://images.pexels.com/photos/6238297/pexels-photo-6238297.jpeg",
        "downloadable": True,
    },
    {
        "title": "Mechanics and Motion",
        "description": "Understanding forces and motion in engineering",
        "category": "Physics",
        "content": "Learn about Newton's laws, momentum, and energy conservation principles.",
        "image_url": "https://images.pexels.com/photos/2432221/pexels-photo-2432221.jpeg",
        "downloadable": True,
    },
    {
        "title": "Introduction to Python",
        "description": "Python programming for engineering applications",
        "category": "Computer Science",
        "content": "Get started with Python, a versatile language for data analysis and automation.",
        "image_url": "https://images.pexels.com/photos/1181671/pexels-photo-1181671.jpeg",
        "downloadable": True,
    },
    {
        "title": "Thermodynamics Principles",
        "description": "Understanding energy transfer and conversion",
        "category": "Mechanical Engineering",
        "content": "This guide covers the laws of thermodynamics and their applications.",
        "image_url": "https://images.pexels.com/photos/247763/pexels-photo-247763.jpeg",
        "downloadable": False,
    },
]


async def _is_empty(db: AsyncSession, model) -> bool:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one() == 0


# ==================== Seed Functions ====================

async def seed_users(db: AsyncSession) -> List[User]:
    """Create the default admin and user accounts"""
    if not await _is_empty(db, User):
        return []

    users = []
    for user_data in SAMPLE_USERS:
        user = User(
            username=user_data["username"],
            email=user_data["email"],
            hashed_password=get_password_hash(user_data["password"]),
            role=user_data["role"],
            is_active=True,
        )
        db.add(user)
        users.append(user)

    await db.flush()
    return users


async def seed_categories(db: AsyncSession) -> List[Category]:
    if not await _is_empty(db, Category):
        return []

    categories = []
    for position, category_data in enumerate(SAMPLE_CATEGORIES, start=1):
        category = Category(position=position, **category_data)
        db.add(category)
        categories.append(category)

    await db.flush()
    return categories


async def seed_resources(db: AsyncSession) -> List[Resource]:
    """Create sample resources, filed under the categories with matching names"""
    if not await _is_empty(db, Resource):
        return []

    result = await db.execute(select(Category))
    category_ids = {category.name: category.id for category in result.scalars().all()}

    resources = []
    now = utcnow()
    for position, resource_data in enumerate(SAMPLE_RESOURCES, start=1):
        category_id = category_ids.get(resource_data["category"])
        if category_id is None:
            logger.warning(f"[Seed] Skipping '{resource_data['title']}': no category '{resource_data['category']}'")
            continue

        resource = Resource(
            **{**resource_data, "category": category_id},
            position=position,
            created_at=now,
            updated_at=now,
        )
        db.add(resource)
        resources.append(resource)

    await db.flush()
    return resources


async def seed_database(db: AsyncSession) -> Dict[str, int]:
    """Seed every empty collection in one transaction. Returns rows created per collection."""
    try:
        users = await seed_users(db)
        categories = await seed_categories(db)
        resources = await seed_resources(db)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    counts = {"users": len(users), "categories": len(categories), "resources": len(resources)}
    if any(counts.values()):
        logger.info(f"[Seed] Created {counts}")
    return counts


async def seed_all(session: Optional[AsyncSession] = None) -> Dict[str, int]:
    """Create tables if needed, then seed"""
    if session is not None:
        return await seed_database(session)

    await init_db()
    async with AsyncSessionLocal() as db:
        return await seed_database(db)


if __name__ == "__main__":
    print(asyncio.run(seed_all()))
