"""
Unit Tests for CatalogService
"""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    AuthorizationError,
    CategoryNotFoundError,
    MissingFieldsError,
    ResourceNotFoundError,
)
from app.models.catalog import Resource
from app.services.catalog_service import CatalogService, export_filename, export_text


class TestExportHelpers:

    @pytest.mark.parametrize("title,expected", [
        ("Calculus Fundamentals", "calculus_fundamentals.txt"),
        ("C++ & Data/Structures!", "c_____data_structures_.txt"),
        ("Ohm's Law 101", "ohm_s_law_101.txt"),
        ("", "resource.txt"),
        ("Clas\u017f notes", "clas__notes.txt"),
        ("\u00c9nergie \u212a", "_nergie_k.txt"),
    ])
    def test_export_filename(self, title, expected):
        assert export_filename(title) == expected

    def test_export_text_layout(self):
        resource = Resource(title="Statics", description="Forces at rest", content="Sum of forces is zero.")

        assert export_text(resource) == (
            "Title: Statics\n\n"
            "Description: Forces at rest\n\n"
            "Content:\nSum of forces is zero."
        )


class TestCategories:

    @pytest.mark.asyncio
    async def test_positions_increase(self, db_session: AsyncSession):
        service = CatalogService(db_session)

        first = await service.create_category({"name": "A", "description": "a", "icon_name": "Atom"})
        second = await service.create_category({"name": "B", "description": "b", "icon_name": "Code"})

        assert second.position == first.position + 1
        assert [c.name for c in await service.list_categories()] == ["A", "B"]

    @pytest.mark.asyncio
    async def test_create_strips_and_validates(self, db_session: AsyncSession):
        service = CatalogService(db_session)

        with pytest.raises(MissingFieldsError) as exc_info:
            await service.create_category({"name": " ", "description": "d"})

        assert exc_info.value.details == {"fields": ["name", "icon_name"]}

    @pytest.mark.asyncio
    async def test_update_ignores_none(self, db_session: AsyncSession, category):
        service = CatalogService(db_session)

        updated = await service.update_category(category.id, {"name": "Maths", "description": None})

        assert updated.name == "Maths"
        assert updated.description == "Essential mathematics for engineering"

    @pytest.mark.asyncio
    async def test_get_missing_category(self, db_session: AsyncSession):
        with pytest.raises(CategoryNotFoundError):
            await CatalogService(db_session).get_category("missing")


class TestResources:

    @pytest.mark.asyncio
    async def test_search_matches_any_text_field(self, db_session: AsyncSession, resources):
        service = CatalogService(db_session)

        assert [r.title for r in await service.list_resources(search="calculus")] == ["Calculus Fundamentals"]
        assert [r.title for r in await service.list_resources(search="EIGENVALUES")] == ["Linear Algebra"]
        assert await service.list_resources(search="_") == []

    @pytest.mark.asyncio
    async def test_search_folds_accented_letters(self, db_session: AsyncSession, category):
        service = CatalogService(db_session)
        await service.create_resource({
            "title": "\u00c9NERGIE Renouvelable",
            "description": "Solar and wind",
            "category": category.id,
            "content": "Photovoltaics.",
        })

        assert len(await service.list_resources(search="\u00e9nergie")) == 1
        assert len(await service.list_resources(search="RENOUVELABLE")) == 1

    @pytest.mark.asyncio
    async def test_limit_and_category(self, db_session: AsyncSession, category, resources):
        service = CatalogService(db_session)

        assert len(await service.list_resources(limit=2)) == 2
        assert len(await service.list_by_category(category.id)) == 3
        assert await service.list_by_category("other") == []

    @pytest.mark.asyncio
    async def test_create_requires_existing_category(self, db_session: AsyncSession):
        service = CatalogService(db_session)

        with pytest.raises(CategoryNotFoundError):
            await service.create_resource({
                "title": "t", "description": "d", "category": "missing", "content": "c"
            })

    @pytest.mark.asyncio
    async def test_create_appends(self, db_session: AsyncSession, category, resources):
        service = CatalogService(db_session)

        resource = await service.create_resource({
            "title": "Fluid Mechanics",
            "description": "Flow",
            "category": category.id,
            "content": "Bernoulli.",
            "image_url": "",
        })

        assert resource.image_url is None
        assert resource.downloadable is False
        assert (await service.list_resources())[-1].id == resource.id

    @pytest.mark.asyncio
    async def test_update_rejects_blank_title(self, db_session: AsyncSession, resources):
        service = CatalogService(db_session)

        with pytest.raises(MissingFieldsError):
            await service.update_resource(resources[0].id, {"title": "  "})

    @pytest.mark.asyncio
    async def test_update_clears_image(self, db_session: AsyncSession, resources):
        service = CatalogService(db_session)
        await service.update_resource(resources[0].id, {"image_url": "https://example.com/a.png"})

        updated = await service.update_resource(resources[0].id, {"image_url": None})

        assert updated.image_url is None

    @pytest.mark.asyncio
    async def test_toggle_twice(self, db_session: AsyncSession, resources):
        service = CatalogService(db_session)

        assert (await service.toggle_downloadable(resources[0].id)).downloadable is False
        assert (await service.toggle_downloadable(resources[0].id)).downloadable is True

    @pytest.mark.asyncio
    async def test_export_permissions(self, db_session: AsyncSession, resources):
        service = CatalogService(db_session)
        locked = resources[2]

        with pytest.raises(AuthorizationError):
            await service.export_resource(locked.id)

        export = await service.export_resource(locked.id, is_admin=True)
        assert export["filename"] == "thermodynamics_principles.txt"
        assert "The laws of THERMODYNAMICS." in export["content"]

    @pytest.mark.asyncio
    async def test_delete_missing_resource(self, db_session: AsyncSession):
        with pytest.raises(ResourceNotFoundError):
            await CatalogService(db_session).delete_resource("missing")
