"""
Composite storage: routes each entity family to its own backend.

Programs, program days and prayer requests go to their dedicated handlers
(usually the SQL ones). Every other family goes to the fallback store, which
is typically an ``InMemoryStorage`` and therefore not durable.
"""
from typing import Optional

from ..models import (
    Bookmark, BookmarkCreate,
    Category, CategoryCreate, CategoryUpdate,
    Job, JobApplication, JobApplicationCreate, JobApplicationDetail,
    JobCreate, JobFilters, JobSystemStats,
    Notification, NotificationCreate,
    Post, PostCreate, PostUpdate,
    PrayerRequest, PrayerRequestCreate, PrayerRequestUpdate, PrayerStatus,
    PrivateMessage, PrivateMessageCreate,
    ProfessionalArea, ProfessionalAreaCreate,
    Program, ProgramCreate, ProgramUpdate, ProgramWithDays,
    ProgramDay, ProgramDayCreate, ProgramDayUpdate,
    Reaction, ReactionCreate,
    Subforum, SubforumCreate,
    Subscription, SubscriptionCreate,
    Thread, ThreadCreate, ThreadFilters, ThreadUpdate,
    User, UserCreate,
    UserProfile, UserProfileCreate, UserProfileFilters,
)
from .base import Storage, ProgramStore, ProgramDayStore, PrayerRequestStore


class CompositeStorage(Storage):
    """Storage that dispatches each family to a handler, defaulting to ``fallback``."""

    def __init__(
        self,
        fallback: Storage,
        programs: Optional[ProgramStore] = None,
        program_days: Optional[ProgramDayStore] = None,
        prayer_requests: Optional[PrayerRequestStore] = None,
    ):
        self.fallback = fallback
        self.programs = programs or fallback
        self.program_days = program_days or fallback
        self.prayer_requests = prayer_requests or fallback

    # ========================================================================
    # Programs
    # ========================================================================

    async def list_programs(self, published: Optional[bool] = None) -> list[Program]:
        return await self.programs.list_programs(published)

    async def list_programs_with_days(
        self, published: Optional[bool] = None
    ) -> list[ProgramWithDays]:
        return await self.programs.list_programs_with_days(published)

    async def get_program(self, program_id: int) -> Optional[Program]:
        return await self.programs.get_program(program_id)

    async def get_program_by_slug(self, slug: str) -> Optional[Program]:
        return await self.programs.get_program_by_slug(slug)

    async def create_program(self, data: ProgramCreate) -> Program:
        return await self.programs.create_program(data)

    async def update_program(self, program_id: int, data: ProgramUpdate) -> Program:
        return await self.programs.update_program(program_id, data)

    async def delete_program(self, program_id: int) -> None:
        await self.programs.delete_program(program_id)

    async def toggle_program_published(self, program_id: int) -> Program:
        return await self.programs.toggle_program_published(program_id)

    # ========================================================================
    # Program days
    # ========================================================================

    async def list_program_days(self, program_id: int) -> list[ProgramDay]:
        return await self.program_days.list_program_days(program_id)

    async def get_program_day(self, day_id: int) -> Optional[ProgramDay]:
        return await self.program_days.get_program_day(day_id)

    async def create_program_day(self, data: ProgramDayCreate) -> ProgramDay:
        return await self.program_days.create_program_day(data)

    async def update_program_day(self, day_id: int, data: ProgramDayUpdate) -> ProgramDay:
        return await self.program_days.update_program_day(day_id, data)

    async def delete_program_day(self, day_id: int) -> None:
        await self.program_days.delete_program_day(day_id)

    # ========================================================================
    # Prayer requests
    # ========================================================================

    async def list_prayer_requests(
        self, status: Optional[PrayerStatus] = None
    ) -> list[PrayerRequest]:
        return await self.prayer_requests.list_prayer_requests(status)

    async def get_prayer_request(self, request_id: int) -> Optional[PrayerRequest]:
        return await self.prayer_requests.get_prayer_request(request_id)

    async def create_prayer_request(self, data: PrayerRequestCreate) -> PrayerRequest:
        return await self.prayer_requests.create_prayer_request(data)

    async def update_prayer_request(
        self, request_id: int, data: PrayerRequestUpdate
    ) -> PrayerRequest:
        return await self.prayer_requests.update_prayer_request(request_id, data)

    async def delete_prayer_request(self, request_id: int) -> None:
        await self.prayer_requests.delete_prayer_request(request_id)

    async def increment_prayer_count(self, request_id: int) -> PrayerRequest:
        return await self.prayer_requests.increment_prayer_count(request_id)

    # ========================================================================
    # Users (fallback)
    # ========================================================================

    async def get_user(self, user_id: int) -> Optional[User]:
        return await self.fallback.get_user(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return await self.fallback.get_user_by_username(username)

    async def create_user(self, data: UserCreate) -> User:
        return await self.fallback.create_user(data)

    async def list_users(self) -> list[User]:
        return await self.fallback.list_users()

    # ========================================================================
    # Job Board (fallback)
    # ========================================================================

    async def list_professional_areas(self) -> list[ProfessionalArea]:
        return await self.fallback.list_professional_areas()

    async def create_professional_area(
        self, data: ProfessionalAreaCreate
    ) -> ProfessionalArea:
        return await self.fallback.create_professional_area(data)

    async def list_jobs(self, filters: Optional[JobFilters] = None) -> list[Job]:
        return await self.fallback.list_jobs(filters)

    async def get_job(self, job_id: int) -> Optional[Job]:
        return await self.fallback.get_job(job_id)

    async def create_job(self, data: JobCreate) -> Job:
        return await self.fallback.create_job(data)

    async def toggle_job_status(self, job_id: int) -> Job:
        return await self.fallback.toggle_job_status(job_id)

    async def delete_job(self, job_id: int) -> None:
        await self.fallback.delete_job(job_id)

    async def list_user_profiles(
        self, filters: Optional[UserProfileFilters] = None
    ) -> list[UserProfile]:
        return await self.fallback.list_user_profiles(filters)

    async def create_user_profile(self, data: UserProfileCreate) -> UserProfile:
        return await self.fallback.create_user_profile(data)

    async def list_job_applications(self) -> list[JobApplication]:
        return await self.fallback.list_job_applications()

    async def list_job_applications_with_details(self) -> list[JobApplicationDetail]:
        return await self.fallback.list_job_applications_with_details()

    async def create_job_application(
        self, data: JobApplicationCreate
    ) -> JobApplication:
        return await self.fallback.create_job_application(data)

    async def review_job_application(
        self,
        application_id: int,
        status: str,
        notes: Optional[str] = None,
        reviewed_by: Optional[int] = None,
    ) -> JobApplication:
        return await self.fallback.review_job_application(
            application_id, status, notes=notes, reviewed_by=reviewed_by
        )

    async def get_job_system_stats(self) -> JobSystemStats:
        return await self.fallback.get_job_system_stats()

    # ========================================================================
    # Forum (fallback)
    # ========================================================================

    async def list_categories(self) -> list[Category]:
        return await self.fallback.list_categories()

    async def get_category(self, category_id: int) -> Optional[Category]:
        return await self.fallback.get_category(category_id)

    async def create_category(self, data: CategoryCreate) -> Category:
        return await self.fallback.create_category(data)

    async def update_category(self, category_id: int, data: CategoryUpdate) -> Category:
        return await self.fallback.update_category(category_id, data)

    async def list_subforums(self, category_id: Optional[int] = None) -> list[Subforum]:
        return await self.fallback.list_subforums(category_id)

    async def create_subforum(self, data: SubforumCreate) -> Subforum:
        return await self.fallback.create_subforum(data)

    async def list_threads(self, filters: Optional[ThreadFilters] = None) -> list[Thread]:
        return await self.fallback.list_threads(filters)

    async def get_thread(self, thread_id: int) -> Optional[Thread]:
        return await self.fallback.get_thread(thread_id)

    async def create_thread(self, data: ThreadCreate) -> Thread:
        return await self.fallback.create_thread(data)

    async def update_thread(self, thread_id: int, data: ThreadUpdate) -> Thread:
        return await self.fallback.update_thread(thread_id, data)

    async def delete_thread(self, thread_id: int) -> None:
        await self.fallback.delete_thread(thread_id)

    async def increment_thread_views(self, thread_id: int) -> Thread:
        return await self.fallback.increment_thread_views(thread_id)

    async def list_posts(self, thread_id: int) -> list[Post]:
        return await self.fallback.list_posts(thread_id)

    async def create_post(self, data: PostCreate) -> Post:
        return await self.fallback.create_post(data)

    async def update_post(self, post_id: int, data: PostUpdate) -> Post:
        return await self.fallback.update_post(post_id, data)

    async def delete_post(self, post_id: int) -> None:
        await self.fallback.delete_post(post_id)

    async def list_reactions(
        self, post_id: Optional[int] = None, thread_id: Optional[int] = None
    ) -> list[Reaction]:
        return await self.fallback.list_reactions(post_id=post_id, thread_id=thread_id)

    async def create_reaction(self, data: ReactionCreate) -> Reaction:
        return await self.fallback.create_reaction(data)

    async def delete_reaction(self, reaction_id: int) -> None:
        await self.fallback.delete_reaction(reaction_id)

    async def list_user_bookmarks(self, user_id: str) -> list[Bookmark]:
        return await self.fallback.list_user_bookmarks(user_id)

    async def create_bookmark(self, data: BookmarkCreate) -> Bookmark:
        return await self.fallback.create_bookmark(data)

    async def delete_bookmark(self, bookmark_id: int) -> None:
        await self.fallback.delete_bookmark(bookmark_id)

    async def list_user_subscriptions(self, user_id: str) -> list[Subscription]:
        return await self.fallback.list_user_subscriptions(user_id)

    async def create_subscription(self, data: SubscriptionCreate) -> Subscription:
        return await self.fallback.create_subscription(data)

    async def delete_subscription(self, subscription_id: int) -> None:
        await self.fallback.delete_subscription(subscription_id)

    async def list_user_messages(self, user_id: str) -> list[PrivateMessage]:
        return await self.fallback.list_user_messages(user_id)

    async def create_private_message(
        self, data: PrivateMessageCreate
    ) -> PrivateMessage:
        return await self.fallback.create_private_message(data)

    async def mark_message_read(self, message_id: int) -> PrivateMessage:
        return await self.fallback.mark_message_read(message_id)

    async def list_user_notifications(self, user_id: str) -> list[Notification]:
        return await self.fallback.list_user_notifications(user_id)

    async def create_notification(self, data: NotificationCreate) -> Notification:
        return await self.fallback.create_notification(data)

    async def mark_notification_read(self, notification_id: int) -> Notification:
        return await self.fallback.mark_notification_read(notification_id)

    async def mark_all_notifications_read(self, user_id: str) -> None:
        await self.fallback.mark_all_notifications_read(user_id)
