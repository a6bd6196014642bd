"""
Tests for the program, program-day and prayer-request contract.

Every test runs against both the in-memory store and the SQL-backed
composite store (temporary SQLite file).

Covers:
- totalDays recount on day create/delete
- Cascade delete of days
- Atomic prayer counter
- Publish toggle
- Partial update merge
- Not-found behavior for mutations
"""

import asyncio

import pytest
from pydantic import ValidationError

from congregation_api.models import PrayerRequestUpdate, ProgramDayUpdate, ProgramUpdate
from congregation_api.storage import BackendFailure, NotFoundError

from payloads import day_payload, prayer_payload, program_payload


class TestPrograms:
    """Program create/read/update/delete."""

    @pytest.mark.asyncio
    async def test_create_fills_defaults(self, contract_storage):
        program = await contract_storage.create_program(program_payload())

        assert program.id >= 1
        assert program.total_days == 0
        assert program.published is False
        assert program.icon == "📖"
        assert program.color == "#3478F6"
        assert program.category == "christian-formation"
        assert program.version == "1.0.0"
        assert program.level == "basic"
        assert program.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_get_miss_returns_none(self, contract_storage):
        assert await contract_storage.get_program(999) is None
        assert await contract_storage.get_program_by_slug("missing") is None

    @pytest.mark.asyncio
    async def test_get_by_slug(self, contract_storage):
        created = await contract_storage.create_program(program_payload("advent"))

        found = await contract_storage.get_program_by_slug("advent")

        assert found is not None
        assert found.id == created.id

    @pytest.mark.asyncio
    async def test_duplicate_slug_is_backend_failure(self, contract_storage):
        await contract_storage.create_program(program_payload("advent"))

        with pytest.raises(BackendFailure):
            await contract_storage.create_program(program_payload("advent"))

    @pytest.mark.asyncio
    async def test_list_in_creation_order_with_published_filter(self, contract_storage):
        first = await contract_storage.create_program(program_payload("one", published=True))
        second = await contract_storage.create_program(program_payload("two"))
        third = await contract_storage.create_program(program_payload("three", published=True))

        everything = await contract_storage.list_programs()
        published = await contract_storage.list_programs(published=True)
        drafts = await contract_storage.list_programs(published=False)

        assert [p.id for p in everything] == [first.id, second.id, third.id]
        assert [p.id for p in published] == [first.id, third.id]
        assert [p.id for p in drafts] == [second.id]

    @pytest.mark.asyncio
    async def test_list_empty(self, contract_storage):
        assert await contract_storage.list_programs() == []
        assert await contract_storage.list_programs_with_days() == []

    @pytest.mark.asyncio
    async def test_list_with_days_orders_days(self, contract_storage):
        program = await contract_storage.create_program(program_payload())
        for number in (3, 1, 2):
            await contract_storage.create_program_day(day_payload(program.id, number))

        [loaded] = await contract_storage.list_programs_with_days()

        assert loaded.id == program.id
        assert loaded.total_days == 3
        assert [d.day_number for d in loaded.days] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_update_merges_only_given_fields(self, contract_storage):
        program = await contract_storage.create_program(program_payload())

        updated = await contract_storage.update_program(
            program.id, ProgramUpdate(description="x")
        )

        assert updated.description == "x"
        assert updated.updated_at >= program.updated_at
        before = program.model_dump(exclude={"description", "updated_at"})
        after = updated.model_dump(exclude={"description", "updated_at"})
        assert after == before

    @pytest.mark.asyncio
    async def test_null_for_required_field_is_rejected(self, contract_storage):
        program = await contract_storage.create_program(program_payload())

        for body in ({"name": None}, {"slug": None}, {"published": None}):
            with pytest.raises(ValidationError):
                ProgramUpdate.model_validate(body)

        assert await contract_storage.get_program(program.id) == program

    @pytest.mark.asyncio
    async def test_null_clears_optional_field(self, contract_storage):
        program = await contract_storage.create_program(program_payload())

        updated = await contract_storage.update_program(
            program.id, ProgramUpdate.model_validate({"description": None})
        )

        assert updated.description is None
        before = program.model_dump(exclude={"description", "updated_at"})
        after = updated.model_dump(exclude={"description", "updated_at"})
        assert after == before
        assert await contract_storage.get_program(program.id) == updated

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, contract_storage):
        with pytest.raises(NotFoundError):
            await contract_storage.update_program(42, ProgramUpdate(name="Nope"))

        assert await contract_storage.list_programs() == []

    @pytest.mark.asyncio
    async def test_delete_missing_is_silent(self, contract_storage):
        await contract_storage.delete_program(42)


class TestToggle:
    """Publish toggle."""

    @pytest.mark.asyncio
    async def test_toggle_pair_restores_value(self, contract_storage):
        program = await contract_storage.create_program(program_payload())

        toggled = await contract_storage.toggle_program_published(program.id)
        assert toggled.published is True

        restored = await contract_storage.toggle_program_published(program.id)
        assert restored.published is False

    @pytest.mark.asyncio
    async def test_toggle_missing_raises_not_found(self, contract_storage):
        with pytest.raises(NotFoundError):
            await contract_storage.toggle_program_published(7)


class TestProgramDays:
    """Days and the derived totalDays count."""

    @pytest.mark.asyncio
    async def test_three_days_then_delete_middle(self, contract_storage):
        program = await contract_storage.create_program(program_payload("ayuno-21"))
        assert program.total_days == 0

        days = [
            await contract_storage.create_program_day(day_payload(program.id, n))
            for n in (1, 2, 3)
        ]
        assert (await contract_storage.get_program(program.id)).total_days == 3

        await contract_storage.delete_program_day(days[1].id)

        assert (await contract_storage.get_program(program.id)).total_days == 2
        remaining = await contract_storage.list_program_days(program.id)
        assert [d.day_number for d in remaining] == [1, 3]

    @pytest.mark.asyncio
    async def test_total_days_tracks_any_sequence(self, contract_storage):
        program = await contract_storage.create_program(program_payload())
        created = []
        for n in range(1, 6):
            created.append(
                await contract_storage.create_program_day(day_payload(program.id, n))
            )
        await contract_storage.delete_program_day(created[0].id)
        await contract_storage.delete_program_day(created[3].id)
        await contract_storage.create_program_day(day_payload(program.id, 6))

        stored = await contract_storage.get_program(program.id)
        days = await contract_storage.list_program_days(program.id)
        assert stored.total_days == len(days) == 4

    @pytest.mark.asyncio
    async def test_days_of_other_programs_not_counted(self, contract_storage):
        first = await contract_storage.create_program(program_payload("first"))
        second = await contract_storage.create_program(program_payload("second"))
        await contract_storage.create_program_day(day_payload(first.id, 1))
        await contract_storage.create_program_day(day_payload(second.id, 1))
        await contract_storage.create_program_day(day_payload(second.id, 2))

        assert (await contract_storage.get_program(first.id)).total_days == 1
        assert (await contract_storage.get_program(second.id)).total_days == 2

    @pytest.mark.asyncio
    async def test_create_day_for_missing_program(self, contract_storage):
        with pytest.raises(NotFoundError):
            await contract_storage.create_program_day(day_payload(404, 1))

        assert await contract_storage.list_program_days(404) == []

    @pytest.mark.asyncio
    async def test_day_fields_round_trip(self, contract_storage):
        program = await contract_storage.create_program(program_payload())

        day = await contract_storage.create_program_day(day_payload(
            program.id, 1,
            scripture_reference="Isaiah 43:19",
            readings=["Isaiah 43", "Psalm 23"],
        ))
        fetched = await contract_storage.get_program_day(day.id)

        assert fetched.scripture_reference == "Isaiah 43:19"
        assert fetched.readings == ["Isaiah 43", "Psalm 23"]
        assert fetched.program_id == program.id

    @pytest.mark.asyncio
    async def test_update_day(self, contract_storage):
        program = await contract_storage.create_program(program_payload())
        day = await contract_storage.create_program_day(day_payload(program.id, 1))

        updated = await contract_storage.update_program_day(
            day.id, ProgramDayUpdate(title="A new beginning")
        )

        assert updated.title == "A new beginning"
        assert updated.day_number == 1
        assert (await contract_storage.get_program(program.id)).total_days == 1

    @pytest.mark.asyncio
    async def test_update_day_nulls(self, contract_storage):
        program = await contract_storage.create_program(program_payload())
        day = await contract_storage.create_program_day(
            day_payload(program.id, 1, reflection="Be still")
        )

        for body in ({"title": None}, {"dayNumber": None}):
            with pytest.raises(ValidationError):
                ProgramDayUpdate.model_validate(body)

        updated = await contract_storage.update_program_day(
            day.id, ProgramDayUpdate.model_validate({"reflection": None})
        )

        assert updated.reflection is None
        assert updated.title == day.title
        assert updated.day_number == 1

    @pytest.mark.asyncio
    async def test_update_missing_day_raises_not_found(self, contract_storage):
        with pytest.raises(NotFoundError):
            await contract_storage.update_program_day(3, ProgramDayUpdate(title="x"))

    @pytest.mark.asyncio
    async def test_delete_missing_day_is_silent(self, contract_storage):
        program = await contract_storage.create_program(program_payload())

        await contract_storage.delete_program_day(99)

        assert (await contract_storage.get_program(program.id)).total_days == 0

    @pytest.mark.asyncio
    async def test_delete_program_cascades_to_days(self, contract_storage):
        program = await contract_storage.create_program(program_payload())
        days = [
            await contract_storage.create_program_day(day_payload(program.id, n))
            for n in range(1, 6)
        ]

        await contract_storage.delete_program(program.id)

        assert await contract_storage.get_program(program.id) is None
        assert await contract_storage.list_program_days(program.id) == []
        for day in days:
            assert await contract_storage.get_program_day(day.id) is None


class TestPrayerRequests:
    """Prayer requests and their counter."""

    @pytest.mark.asyncio
    async def test_create_defaults(self, contract_storage):
        request = await contract_storage.create_prayer_request(
            prayer_payload(request="Por mi familia", author="Ana")
        )

        assert request.status == "pending"
        assert request.prayer_count == 0
        assert request.private is False
        assert request.category == "general"

    @pytest.mark.asyncio
    async def test_increment_three_times(self, contract_storage):
        request = await contract_storage.create_prayer_request(prayer_payload())

        for _ in range(3):
            result = await contract_storage.increment_prayer_count(request.id)

        assert result.prayer_count == 3
        assert result.status == "pending"
        assert result.updated_at >= request.updated_at
        stored = await contract_storage.get_prayer_request(request.id)
        assert stored.prayer_count == 3

    @pytest.mark.asyncio
    async def test_concurrent_increments_are_not_lost(self, contract_storage):
        request = await contract_storage.create_prayer_request(prayer_payload())

        await asyncio.gather(
            *(contract_storage.increment_prayer_count(request.id) for _ in range(10))
        )

        stored = await contract_storage.get_prayer_request(request.id)
        assert stored.prayer_count == 10

    @pytest.mark.asyncio
    async def test_increment_missing_raises_not_found(self, contract_storage):
        with pytest.raises(NotFoundError):
            await contract_storage.increment_prayer_count(77)

    @pytest.mark.asyncio
    async def test_update_missing_leaves_others_untouched(self, contract_storage):
        existing = await contract_storage.create_prayer_request(prayer_payload())

        with pytest.raises(NotFoundError):
            await contract_storage.update_prayer_request(
                existing.id + 100, PrayerRequestUpdate(status="answered")
            )

        assert await contract_storage.get_prayer_request(existing.id) == existing

    @pytest.mark.asyncio
    async def test_update_status_keeps_counter(self, contract_storage):
        request = await contract_storage.create_prayer_request(prayer_payload())
        await contract_storage.increment_prayer_count(request.id)

        updated = await contract_storage.update_prayer_request(
            request.id, PrayerRequestUpdate(status="in-prayer")
        )

        assert updated.status == "in-prayer"
        assert updated.prayer_count == 1

    @pytest.mark.asyncio
    async def test_null_status_is_rejected(self, contract_storage):
        request = await contract_storage.create_prayer_request(prayer_payload())

        for body in ({"status": None}, {"author": None}, {"private": None}):
            with pytest.raises(ValidationError):
                PrayerRequestUpdate.model_validate(body)

        assert await contract_storage.get_prayer_request(request.id) == request

    @pytest.mark.asyncio
    async def test_list_newest_first_with_status_filter(self, contract_storage):
        first = await contract_storage.create_prayer_request(prayer_payload(author="Ana"))
        second = await contract_storage.create_prayer_request(
            prayer_payload(author="Carlos", status="answered")
        )
        third = await contract_storage.create_prayer_request(prayer_payload(author="Lucía"))

        everything = await contract_storage.list_prayer_requests()
        pending = await contract_storage.list_prayer_requests(status="pending")
        in_prayer = await contract_storage.list_prayer_requests(status="in-prayer")

        assert [r.id for r in everything] == [third.id, second.id, first.id]
        assert [r.id for r in pending] == [third.id, first.id]
        assert in_prayer == []

    @pytest.mark.asyncio
    async def test_delete(self, contract_storage):
        request = await contract_storage.create_prayer_request(prayer_payload())

        await contract_storage.delete_prayer_request(request.id)
        await contract_storage.delete_prayer_request(request.id)

        assert await contract_storage.get_prayer_request(request.id) is None
