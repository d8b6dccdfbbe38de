"""
Unit Tests for AdmissionService
"""
import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    AdmissionTypeNotFoundError,
    HelpRequestNotFoundError,
    StepNotFoundError,
    ValidationError,
)
from app.models.admission import AdmissionGuide, AdmissionHelpRequest, AdmissionType, DEFAULT_STEPS
from app.core.types import utcnow
from app.services.admission_service import AdmissionService, parse_admission_type


class TestParseAdmissionType:

    @pytest.mark.parametrize("value,expected", [
        ("ket", AdmissionType.KET),
        ("KET", AdmissionType.KET),
        ("kcet", AdmissionType.KET),
        (" comedk ", AdmissionType.COMEDK),
        ("management", AdmissionType.MANAGEMENT),
    ])
    def test_known_types(self, value, expected):
        assert parse_admission_type(value) == expected

    @pytest.mark.parametrize("value", ["jee", "", "neet"])
    def test_unknown_types(self, value):
        with pytest.raises(AdmissionTypeNotFoundError):
            parse_admission_type(value)


class TestSteps:

    @pytest.mark.asyncio
    async def test_reads_do_not_create_rows(self, db_session: AsyncSession):
        service = AdmissionService(db_session)

        assert await service.get_steps(AdmissionType.KET) == DEFAULT_STEPS[AdmissionType.KET]
        result = await db_session.execute(select(AdmissionGuide))
        assert result.scalars().all() == []

    @pytest.mark.asyncio
    async def test_defaults_are_not_mutated(self, db_session: AsyncSession):
        service = AdmissionService(db_session)
        original = list(DEFAULT_STEPS[AdmissionType.COMEDK])

        await service.delete_step(AdmissionType.COMEDK, 0)

        assert DEFAULT_STEPS[AdmissionType.COMEDK] == original
        assert await service.get_steps(AdmissionType.COMEDK) == original[1:]

    @pytest.mark.asyncio
    async def test_replace_drops_blank_entries(self, db_session: AsyncSession):
        service = AdmissionService(db_session)

        steps = await service.replace_steps(AdmissionType.KET, [" Apply ", "", "   ", "Attend"])

        assert steps == ["Apply", "Attend"]

    @pytest.mark.asyncio
    async def test_update_out_of_range(self, db_session: AsyncSession):
        service = AdmissionService(db_session)

        with pytest.raises(StepNotFoundError):
            await service.update_step(AdmissionType.KET, len(DEFAULT_STEPS[AdmissionType.KET]), "x")

    @pytest.mark.asyncio
    async def test_update_rejects_blank(self, db_session: AsyncSession):
        with pytest.raises(ValidationError):
            await AdmissionService(db_session).update_step(AdmissionType.KET, 0, " ")

    @pytest.mark.asyncio
    async def test_help_text_keeps_steps(self, db_session: AsyncSession):
        service = AdmissionService(db_session)

        await service.set_help_text(AdmissionType.MANAGEMENT, "Contact colleges directly.")

        guide = await service.get_guide(AdmissionType.MANAGEMENT)
        assert guide["help_text"] == "Contact colleges directly."
        assert guide["steps"] == DEFAULT_STEPS[AdmissionType.MANAGEMENT]
        assert guide["title"] == "Management Quota"

    @pytest.mark.asyncio
    async def test_list_guides_covers_every_type(self, db_session: AsyncSession):
        guides = await AdmissionService(db_session).list_guides()

        assert [g["admission_type"] for g in guides] == list(AdmissionType)


class TestQuestions:

    @pytest.mark.asyncio
    async def test_submit_for_user(self, db_session: AsyncSession, test_user):
        request = await AdmissionService(db_session).submit_question(
            AdmissionType.KET, "Documents needed?", test_user
        )

        assert request.user_id == test_user.id
        assert request.answered is False

    @pytest.mark.asyncio
    async def test_respond_overwrites(self, db_session: AsyncSession):
        service = AdmissionService(db_session)
        request = await service.submit_question(AdmissionType.COMEDK, "Cutoff?")

        await service.respond(AdmissionType.COMEDK, request.id, "First answer")
        answered = await service.respond(AdmissionType.COMEDK, request.id, "Corrected answer")

        assert answered.response == "Corrected answer"
        assert answered.answered is True
        assert answered.responded_at is not None

    @pytest.mark.asyncio
    async def test_wrong_type_not_found(self, db_session: AsyncSession):
        service = AdmissionService(db_session)
        request = await service.submit_question(AdmissionType.KET, "Q")

        with pytest.raises(HelpRequestNotFoundError):
            await service.get_question(AdmissionType.MANAGEMENT, request.id)

    @pytest.mark.asyncio
    async def test_same_timestamp_lists_in_stable_order(self, db_session: AsyncSession):
        stamp = utcnow()
        db_session.add_all([
            AdmissionHelpRequest(id="b-request", admission_type=AdmissionType.KET, question="B", created_at=stamp),
            AdmissionHelpRequest(id="a-request", admission_type=AdmissionType.KET, question="A", created_at=stamp),
        ])
        await db_session.commit()

        questions = await AdmissionService(db_session).list_questions(AdmissionType.KET)

        assert [q.id for q in questions] == ["a-request", "b-request"]
