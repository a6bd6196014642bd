"""
Tests for the in-memory store beyond the shared contract.

Covers:
- Per-table identity sequences
- Sample data bootstrapping
- Users
- Job board
- Forum
"""

import pytest

from congregation_api.models import (
    BookmarkCreate,
    CategoryCreate,
    CategoryUpdate,
    JobApplicationCreate,
    JobCreate,
    JobFilters,
    NotificationCreate,
    PostCreate,
    PostUpdate,
    PrivateMessageCreate,
    ProfessionalAreaCreate,
    ReactionCreate,
    SubforumCreate,
    SubscriptionCreate,
    ThreadCreate,
    ThreadFilters,
    ThreadUpdate,
    UserCreate,
    UserProfileCreate,
    UserProfileFilters,
)
from congregation_api.storage import BackendFailure, NotFoundError

from payloads import day_payload, prayer_payload, program_payload


def job_payload(**overrides) -> JobCreate:
    data = {
        "title": "Sound Technician",
        "company": "Grace Media",
        "description": "Run the Sunday sound desk.",
        "job_type": "part-time",
        "experience_level": "entry",
        "contact_email": "media@example.org",
        "published_by": 1,
    }
    data.update(overrides)
    return JobCreate(**data)


def profile_payload(**overrides) -> UserProfileCreate:
    data = {"user_id": 1, "full_name": "Ana Díaz", "email": "ana@example.org"}
    data.update(overrides)
    return UserProfileCreate(**data)


def category_payload(slug: str = "youth", **overrides) -> CategoryCreate:
    data = {"name": "Youth", "icon": "Users", "color": "orange", "slug": slug}
    data.update(overrides)
    return CategoryCreate(**data)


def thread_payload(category_id: int = 1, **overrides) -> ThreadCreate:
    data = {"category_id": category_id, "author_id": "1", "title": "Hello", "content": "First!"}
    data.update(overrides)
    return ThreadCreate(**data)


class TestIdentity:
    """Each table keeps its own identity sequence."""

    @pytest.mark.asyncio
    async def test_sequences_are_independent(self, storage):
        program = await storage.create_program(program_payload())
        request = await storage.create_prayer_request(prayer_payload())
        day = await storage.create_program_day(day_payload(program.id, 1))
        second_program = await storage.create_program(program_payload("other"))

        assert program.id == 1
        assert request.id == 1
        assert day.id == 1
        assert second_program.id == 2

    @pytest.mark.asyncio
    async def test_ids_not_reused_after_delete(self, storage):
        first = await storage.create_prayer_request(prayer_payload())
        await storage.delete_prayer_request(first.id)

        second = await storage.create_prayer_request(prayer_payload())

        assert second.id == first.id + 1


class TestSampleData:
    """Seeded store."""

    @pytest.mark.asyncio
    async def test_empty_without_seed(self, storage):
        assert await storage.list_users() == []
        assert await storage.list_categories() == []
        assert await storage.list_programs() == []

    @pytest.mark.asyncio
    async def test_seeded_families(self, seeded_storage):
        assert len(await seeded_storage.list_users()) == 2
        assert len(await seeded_storage.list_professional_areas()) == 5
        assert len(await seeded_storage.list_jobs()) == 3
        assert len(await seeded_storage.list_user_profiles()) == 2
        assert len(await seeded_storage.list_job_applications()) == 4
        assert [c.slug for c in await seeded_storage.list_categories()] == [
            "daily-communion", "bible-courses", "events",
        ]
        assert len(await seeded_storage.list_prayer_requests()) == 3

    @pytest.mark.asyncio
    async def test_seeded_program_count_matches_days(self, seeded_storage):
        program = await seeded_storage.get_program_by_slug("fast-21")

        days = await seeded_storage.list_program_days(program.id)

        assert program.published is True
        assert program.total_days == len(days) == 3

    @pytest.mark.asyncio
    async def test_seeded_thread_reply_stats(self, seeded_storage):
        thread = await seeded_storage.get_thread(1)

        assert thread.reply_count == 2
        assert thread.last_reply_by == "1"


class TestUsers:
    """Admin users."""

    @pytest.mark.asyncio
    async def test_create_and_lookup(self, storage):
        user = await storage.create_user(UserCreate(username="deacon", password="pw"))

        assert await storage.get_user(user.id) == user
        assert await storage.get_user_by_username("deacon") == user
        assert await storage.get_user_by_username("nobody") is None
        assert user.role == "user"

    @pytest.mark.asyncio
    async def test_duplicate_username(self, storage):
        await storage.create_user(UserCreate(username="deacon", password="pw"))

        with pytest.raises(BackendFailure):
            await storage.create_user(UserCreate(username="deacon", password="other"))


class TestJobBoard:
    """Professional areas, jobs, profiles, applications."""

    @pytest.mark.asyncio
    async def test_areas_in_id_order(self, storage):
        await storage.create_professional_area(ProfessionalAreaCreate(name="Music"))
        await storage.create_professional_area(ProfessionalAreaCreate(name="Teaching"))

        assert [a.name for a in await storage.list_professional_areas()] == ["Music", "Teaching"]

    @pytest.mark.asyncio
    async def test_jobs_newest_first_and_filtered(self, storage):
        older = await storage.create_job(job_payload(professional_area_id=1))
        newer = await storage.create_job(job_payload(job_type="full-time", professional_area_id=2))

        assert [j.id for j in await storage.list_jobs()] == [newer.id, older.id]
        assert [j.id for j in await storage.list_jobs(JobFilters(job_type="full-time"))] == [newer.id]
        assert [j.id for j in await storage.list_jobs(JobFilters(professional_area_id=1))] == [older.id]

    @pytest.mark.asyncio
    async def test_toggle_job_status(self, storage):
        job = await storage.create_job(job_payload())

        toggled = await storage.toggle_job_status(job.id)

        assert toggled.is_active is False
        assert await storage.list_jobs(JobFilters(is_active=True)) == []
        with pytest.raises(NotFoundError):
            await storage.toggle_job_status(999)

    @pytest.mark.asyncio
    async def test_delete_job_removes_its_applications(self, storage):
        job = await storage.create_job(job_payload())
        profile = await storage.create_user_profile(profile_payload())
        await storage.create_job_application(JobApplicationCreate(
            job_id=job.id, user_profile_id=profile.id, cover_letter="Hire me",
        ))
        general = await storage.create_job_application(JobApplicationCreate(
            user_profile_id=profile.id, cover_letter="Anything",
        ))

        await storage.delete_job(job.id)

        assert await storage.get_job(job.id) is None
        assert [a.id for a in await storage.list_job_applications()] == [general.id]

    @pytest.mark.asyncio
    async def test_profiles_filtered(self, storage):
        await storage.create_user_profile(profile_payload(available_for_work=False))
        available = await storage.create_user_profile(profile_payload(professional_area_id=3))

        result = await storage.list_user_profiles(UserProfileFilters(available_for_work=True))
        by_area = await storage.list_user_profiles(UserProfileFilters(professional_area_id=3))

        assert [p.id for p in result] == [available.id]
        assert [p.id for p in by_area] == [available.id]

    @pytest.mark.asyncio
    async def test_application_review(self, storage):
        profile = await storage.create_user_profile(profile_payload())
        application = await storage.create_job_application(JobApplicationCreate(
            user_profile_id=profile.id, cover_letter="Please",
        ))
        assert application.status == "pending"

        reviewed = await storage.review_job_application(
            application.id, "accepted", notes="Welcome", reviewed_by=1
        )

        assert reviewed.status == "accepted"
        assert reviewed.notes == "Welcome"
        assert reviewed.reviewed_by == 1
        assert reviewed.reviewed_at is not None
        with pytest.raises(NotFoundError):
            await storage.review_job_application(999, "rejected")

    @pytest.mark.asyncio
    async def test_applications_with_details(self, storage):
        job = await storage.create_job(job_payload())
        profile = await storage.create_user_profile(profile_payload())
        await storage.create_job_application(JobApplicationCreate(
            job_id=job.id, user_profile_id=profile.id, cover_letter="Hi",
        ))

        [detail] = await storage.list_job_applications_with_details()

        assert detail.job == job
        assert detail.profile == profile

    @pytest.mark.asyncio
    async def test_system_stats(self, seeded_storage):
        stats = await seeded_storage.get_job_system_stats()

        assert stats.total_jobs == 3
        assert stats.jobs_this_month == 2
        assert stats.total_applications == 4
        assert stats.applications_this_week == 3
        assert stats.active_profiles == 2
        assert stats.profiles_available == 1
        assert stats.success_rate == "0.0"

    @pytest.mark.asyncio
    async def test_stats_on_empty_store(self, storage):
        stats = await storage.get_job_system_stats()

        assert stats.total_jobs == 0
        assert stats.success_rate == "0"


class TestForumCategories:
    """Categories and subforums."""

    @pytest.mark.asyncio
    async def test_categories_by_position(self, storage):
        await storage.create_category(category_payload("b", position=2))
        await storage.create_category(category_payload("a", position=1))

        assert [c.slug for c in await storage.list_categories()] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_duplicate_category_slug(self, storage):
        category = await storage.create_category(category_payload("youth"))
        other = await storage.create_category(category_payload("choir"))

        with pytest.raises(BackendFailure):
            await storage.create_category(category_payload("youth"))
        with pytest.raises(BackendFailure):
            await storage.update_category(other.id, CategoryUpdate(slug="youth"))

        renamed = await storage.update_category(category.id, CategoryUpdate(slug="youth", name="Youth Group"))
        assert renamed.name == "Youth Group"

    @pytest.mark.asyncio
    async def test_update_missing_category(self, storage):
        with pytest.raises(NotFoundError):
            await storage.update_category(5, CategoryUpdate(name="x"))

    @pytest.mark.asyncio
    async def test_subforums_per_category(self, storage):
        await storage.create_subforum(SubforumCreate(category_id=1, name="Second", position=2))
        await storage.create_subforum(SubforumCreate(category_id=1, name="First", position=1))
        await storage.create_subforum(SubforumCreate(category_id=2, name="Elsewhere"))

        assert [s.name for s in await storage.list_subforums(1)] == ["First", "Second"]
        assert len(await storage.list_subforums()) == 3


class TestForumThreads:
    """Threads and posts."""

    @pytest.mark.asyncio
    async def test_sticky_threads_first_then_latest_activity(self, storage):
        old = await storage.create_thread(thread_payload(title="Old"))
        sticky = await storage.create_thread(thread_payload(title="Pinned", is_sticky=True))
        new = await storage.create_thread(thread_payload(title="New"))
        await storage.create_post(PostCreate(thread_id=old.id, author_id="2", content="bump"))

        ordered = await storage.list_threads()

        assert [t.id for t in ordered] == [sticky.id, old.id, new.id]

    @pytest.mark.asyncio
    async def test_thread_filters(self, storage):
        await storage.create_thread(thread_payload(category_id=1, author_id="1"))
        other = await storage.create_thread(thread_payload(category_id=2, author_id="2"))

        assert [t.id for t in await storage.list_threads(ThreadFilters(category_id=2))] == [other.id]
        assert [t.id for t in await storage.list_threads(ThreadFilters(author_id="2"))] == [other.id]

    @pytest.mark.asyncio
    async def test_posts_update_reply_stats(self, storage):
        thread = await storage.create_thread(thread_payload())

        first = await storage.create_post(PostCreate(thread_id=thread.id, author_id="2", content="a"))
        second = await storage.create_post(PostCreate(thread_id=thread.id, author_id="3", content="b"))

        refreshed = await storage.get_thread(thread.id)
        assert refreshed.reply_count == 2
        assert refreshed.last_reply_by == "3"
        assert [p.id for p in await storage.list_posts(thread.id)] == [first.id, second.id]

        await storage.delete_post(second.id)

        refreshed = await storage.get_thread(thread.id)
        assert refreshed.reply_count == 1
        assert refreshed.last_reply_by == "2"

    @pytest.mark.asyncio
    async def test_post_to_missing_thread(self, storage):
        with pytest.raises(NotFoundError):
            await storage.create_post(PostCreate(thread_id=9, author_id="1", content="hi"))

    @pytest.mark.asyncio
    async def test_delete_post_removes_replies_and_reactions(self, storage):
        thread = await storage.create_thread(thread_payload())
        parent = await storage.create_post(PostCreate(thread_id=thread.id, author_id="1", content="a"))
        await storage.create_post(PostCreate(
            thread_id=thread.id, author_id="2", content="b", parent_id=parent.id,
        ))
        await storage.create_reaction(ReactionCreate(user_id="3", post_id=parent.id))

        await storage.delete_post(parent.id)

        assert await storage.list_posts(thread.id) == []
        assert await storage.list_reactions(post_id=parent.id) == []
        assert (await storage.get_thread(thread.id)).reply_count == 0

    @pytest.mark.asyncio
    async def test_delete_post_removes_nested_replies(self, storage):
        thread = await storage.create_thread(thread_payload())
        root = await storage.create_post(PostCreate(thread_id=thread.id, author_id="1", content="a"))
        reply = await storage.create_post(PostCreate(
            thread_id=thread.id, author_id="2", content="b", parent_id=root.id,
        ))
        nested = await storage.create_post(PostCreate(
            thread_id=thread.id, author_id="3", content="c", parent_id=reply.id,
        ))
        other = await storage.create_post(PostCreate(thread_id=thread.id, author_id="4", content="d"))
        await storage.create_reaction(ReactionCreate(user_id="5", post_id=nested.id))

        await storage.delete_post(root.id)

        assert [p.id for p in await storage.list_posts(thread.id)] == [other.id]
        assert await storage.list_reactions(post_id=nested.id) == []
        assert (await storage.get_thread(thread.id)).reply_count == 1

    @pytest.mark.asyncio
    async def test_update_thread_and_post(self, storage):
        thread = await storage.create_thread(thread_payload())
        post = await storage.create_post(PostCreate(thread_id=thread.id, author_id="1", content="a"))

        locked = await storage.update_thread(thread.id, ThreadUpdate(is_locked=True))
        edited = await storage.update_post(post.id, PostUpdate(content="edited"))

        assert locked.is_locked is True
        assert locked.title == thread.title
        assert edited.content == "edited"
        with pytest.raises(NotFoundError):
            await storage.update_thread(99, ThreadUpdate(title="x"))
        with pytest.raises(NotFoundError):
            await storage.update_post(99, PostUpdate(content="x"))

    @pytest.mark.asyncio
    async def test_delete_thread_cascades(self, storage):
        thread = await storage.create_thread(thread_payload())
        post = await storage.create_post(PostCreate(thread_id=thread.id, author_id="1", content="a"))
        await storage.create_reaction(ReactionCreate(user_id="2", post_id=post.id))
        await storage.create_reaction(ReactionCreate(user_id="2", thread_id=thread.id))
        await storage.create_bookmark(BookmarkCreate(user_id="2", thread_id=thread.id))

        await storage.delete_thread(thread.id)

        assert await storage.get_thread(thread.id) is None
        assert await storage.list_posts(thread.id) == []
        assert await storage.list_reactions() == []
        assert await storage.list_user_bookmarks("2") == []

    @pytest.mark.asyncio
    async def test_view_counter(self, storage):
        thread = await storage.create_thread(thread_payload())

        for _ in range(4):
            viewed = await storage.increment_thread_views(thread.id)

        assert viewed.view_count == 4
        with pytest.raises(NotFoundError):
            await storage.increment_thread_views(99)


class TestForumUserState:
    """Reactions, bookmarks, subscriptions, messages, notifications."""

    @pytest.mark.asyncio
    async def test_reactions_filtered(self, storage):
        on_post = await storage.create_reaction(ReactionCreate(user_id="1", post_id=1, type="heart"))
        on_thread = await storage.create_reaction(ReactionCreate(user_id="1", thread_id=1))

        assert await storage.list_reactions(post_id=1) == [on_post]
        assert await storage.list_reactions(thread_id=1) == [on_thread]

        await storage.delete_reaction(on_post.id)
        assert await storage.list_reactions() == [on_thread]

    @pytest.mark.asyncio
    async def test_bookmarks_and_subscriptions_per_user(self, storage):
        mine = await storage.create_bookmark(BookmarkCreate(user_id="1", thread_id=1))
        await storage.create_bookmark(BookmarkCreate(user_id="2", thread_id=1))
        subscription = await storage.create_subscription(
            SubscriptionCreate(user_id="1", category_id=1, notification_level="mentions")
        )

        assert await storage.list_user_bookmarks("1") == [mine]
        assert await storage.list_user_subscriptions("1") == [subscription]

        await storage.delete_bookmark(mine.id)
        await storage.delete_subscription(subscription.id)
        assert await storage.list_user_bookmarks("1") == []
        assert await storage.list_user_subscriptions("1") == []

    @pytest.mark.asyncio
    async def test_messages_sent_and_received(self, storage):
        sent = await storage.create_private_message(PrivateMessageCreate(
            from_user_id="1", to_user_id="2", subject="Hi", content="Hello",
        ))
        received = await storage.create_private_message(PrivateMessageCreate(
            from_user_id="3", to_user_id="1", subject="Re", content="Back",
        ))
        await storage.create_private_message(PrivateMessageCreate(
            from_user_id="2", to_user_id="3", subject="Other", content="x",
        ))

        assert [m.id for m in await storage.list_user_messages("1")] == [received.id, sent.id]

        read = await storage.mark_message_read(sent.id)
        assert read.is_read is True
        with pytest.raises(NotFoundError):
            await storage.mark_message_read(99)

    @pytest.mark.asyncio
    async def test_notifications(self, storage):
        first = await storage.create_notification(NotificationCreate(
            user_id="1", type="reply", title="New reply",
        ))
        await storage.create_notification(NotificationCreate(
            user_id="1", type="mention", title="Mentioned",
        ))
        other = await storage.create_notification(NotificationCreate(
            user_id="2", type="reply", title="New reply",
        ))

        assert (await storage.mark_notification_read(first.id)).is_read is True
        await storage.mark_all_notifications_read("1")

        assert all(n.is_read for n in await storage.list_user_notifications("1"))
        assert (await storage.list_user_notifications("2")) == [other]
        with pytest.raises(NotFoundError):
            await storage.mark_notification_read(99)


class TestOrderingTies:
    """Records created in the same instant still order deterministically."""

    @pytest.mark.asyncio
    async def test_prayer_requests_tie_broken_by_id(self, storage):
        first = await storage.create_prayer_request(prayer_payload())
        second = await storage.create_prayer_request(prayer_payload())
        storage._prayer_requests.put(second.model_copy(update={"created_at": first.created_at}))

        assert [r.id for r in await storage.list_prayer_requests()] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_programs_tie_broken_by_id(self, storage):
        first = await storage.create_program(program_payload("a"))
        second = await storage.create_program(program_payload("b"))
        storage._programs.put(second.model_copy(update={"created_at": first.created_at}))

        assert [p.id for p in await storage.list_programs()] == [first.id, second.id]
