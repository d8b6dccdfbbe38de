"""
Unit Tests for database seeding
"""
import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.seed_data import SAMPLE_RESOURCES, seed_database
from app.models.catalog import Category, Resource
from app.models.user import User, UserRole


@pytest.mark.asyncio
async def test_seed_empty_database(db_session: AsyncSession):
    counts = await seed_database(db_session)

    assert counts == {"users": 2, "categories": 4, "resources": len(SAMPLE_RESOURCES)}

    admin = (await db_session.execute(select(User).where(User.username == "admin"))).scalar_one()
    assert admin.role == UserRole.ADMIN


@pytest.mark.asyncio
async def test_seed_is_idempotent(db_session: AsyncSession):
    await seed_database(db_session)

    counts = await seed_database(db_session)

    assert counts == {"users": 0, "categories": 0, "resources": 0}


@pytest.mark.asyncio
async def test_resources_point_at_seeded_categories(db_session: AsyncSession):
    await seed_database(db_session)

    categories = {c.id: c.name for c in (await db_session.execute(select(Category))).scalars()}
    resources = (await db_session.execute(select(Resource).order_by(Resource.position))).scalars().all()

    assert all(r.category in categories for r in resources)
    assert categories[resources[0].category] == "Mathematics"
    locked = [r.title for r in resources if not r.downloadable]
    assert locked == ["Thermodynamics Principles"]


@pytest.mark.asyncio
async def test_existing_users_are_left_alone(db_session: AsyncSession, test_user):
    counts = await seed_database(db_session)

    assert counts["users"] == 0
    assert counts["categories"] == 4
