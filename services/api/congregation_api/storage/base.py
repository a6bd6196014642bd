"""
Abstract storage interfaces.

The contract is split per entity family so that a composite storage can route
each family to its own backend. ``Storage`` is the union of every family and
is what the route layer depends on.

Shared conventions:
    * get_* returns ``None`` on a miss, list_* returns ``[]``.
    * update_* and domain mutations raise ``NotFoundError`` for a missing target.
    * delete_* is a silent no-op for a missing target.
    * ``BackendFailure`` is raised when the storage medium rejects an operation.
"""
from abc import ABC, abstractmethod
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


class ProgramStore(ABC):
    """Programs (multi-day courses)."""

    @abstractmethod
    async def list_programs(self, published: Optional[bool] = None) -> list[Program]:
        """List programs in creation order, optionally only (un)published ones."""
        pass

    @abstractmethod
    async def list_programs_with_days(
        self, published: Optional[bool] = None
    ) -> list[ProgramWithDays]:
        """Same as list_programs, with each program's days pre-loaded."""
        pass

    @abstractmethod
    async def get_program(self, program_id: int) -> Optional[Program]:
        """Get program by ID. Returns None if not found."""
        pass

    @abstractmethod
    async def get_program_by_slug(self, slug: str) -> Optional[Program]:
        """Get program by slug. Returns None if not found."""
        pass

    @abstractmethod
    async def create_program(self, data: ProgramCreate) -> Program:
        """Create a program with no days (total_days = 0)."""
        pass

    @abstractmethod
    async def update_program(self, program_id: int, data: ProgramUpdate) -> Program:
        """Merge the set fields of ``data`` onto the program."""
        pass

    @abstractmethod
    async def delete_program(self, program_id: int) -> None:
        """Delete a program and all of its days."""
        pass

    @abstractmethod
    async def toggle_program_published(self, program_id: int) -> Program:
        """Flip the published flag. Returns the updated program."""
        pass


class ProgramDayStore(ABC):
    """Days of a program. Creating or deleting one recounts the parent's total_days."""

    @abstractmethod
    async def list_program_days(self, program_id: int) -> list[ProgramDay]:
        """List a program's days ordered by day number."""
        pass

    @abstractmethod
    async def get_program_day(self, day_id: int) -> Optional[ProgramDay]:
        """Get a day by ID. Returns None if not found."""
        pass

    @abstractmethod
    async def create_program_day(self, data: ProgramDayCreate) -> ProgramDay:
        """Create a day. Raises NotFoundError if the program does not exist."""
        pass

    @abstractmethod
    async def update_program_day(self, day_id: int, data: ProgramDayUpdate) -> ProgramDay:
        """Merge the set fields of ``data`` onto the day."""
        pass

    @abstractmethod
    async def delete_program_day(self, day_id: int) -> None:
        """Delete a day and recount its program's total_days."""
        pass


class PrayerRequestStore(ABC):
    """Prayer requests."""

    @abstractmethod
    async def list_prayer_requests(
        self, status: Optional[PrayerStatus] = None
    ) -> list[PrayerRequest]:
        """List prayer requests, newest first, optionally by status."""
        pass

    @abstractmethod
    async def get_prayer_request(self, request_id: int) -> Optional[PrayerRequest]:
        """Get a prayer request by ID. Returns None if not found."""
        pass

    @abstractmethod
    async def create_prayer_request(self, data: PrayerRequestCreate) -> PrayerRequest:
        """Create a prayer request with prayer_count = 0."""
        pass

    @abstractmethod
    async def update_prayer_request(
        self, request_id: int, data: PrayerRequestUpdate
    ) -> PrayerRequest:
        """Merge the set fields of ``data`` onto the prayer request."""
        pass

    @abstractmethod
    async def delete_prayer_request(self, request_id: int) -> None:
        """Delete a prayer request."""
        pass

    @abstractmethod
    async def increment_prayer_count(self, request_id: int) -> PrayerRequest:
        """Atomically add exactly one to prayer_count."""
        pass


class UserStore(ABC):
    """Admin console users."""

    @abstractmethod
    async def get_user(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    async def get_user_by_username(self, username: str) -> Optional[User]:
        pass

    @abstractmethod
    async def create_user(self, data: UserCreate) -> User:
        """Create a user. Raises BackendFailure if the username is taken."""
        pass

    @abstractmethod
    async def list_users(self) -> list[User]:
        pass


class JobBoardStore(ABC):
    """Professional areas, jobs, profiles and applications."""

    @abstractmethod
    async def list_professional_areas(self) -> list[ProfessionalArea]:
        pass

    @abstractmethod
    async def create_professional_area(
        self, data: ProfessionalAreaCreate
    ) -> ProfessionalArea:
        pass

    @abstractmethod
    async def list_jobs(self, filters: Optional[JobFilters] = None) -> list[Job]:
        """List jobs, newest first."""
        pass

    @abstractmethod
    async def get_job(self, job_id: int) -> Optional[Job]:
        pass

    @abstractmethod
    async def create_job(self, data: JobCreate) -> Job:
        pass

    @abstractmethod
    async def toggle_job_status(self, job_id: int) -> Job:
        """Flip is_active. Returns the updated job."""
        pass

    @abstractmethod
    async def delete_job(self, job_id: int) -> None:
        """Delete a job and its applications."""
        pass

    @abstractmethod
    async def list_user_profiles(
        self, filters: Optional[UserProfileFilters] = None
    ) -> list[UserProfile]:
        """List profiles, newest first."""
        pass

    @abstractmethod
    async def create_user_profile(self, data: UserProfileCreate) -> UserProfile:
        pass

    @abstractmethod
    async def list_job_applications(self) -> list[JobApplication]:
        """List applications, most recently applied first."""
        pass

    @abstractmethod
    async def list_job_applications_with_details(self) -> list[JobApplicationDetail]:
        """List applications joined with their job and profile."""
        pass

    @abstractmethod
    async def create_job_application(
        self, data: JobApplicationCreate
    ) -> JobApplication:
        pass

    @abstractmethod
    async def review_job_application(
        self,
        application_id: int,
        status: str,
        notes: Optional[str] = None,
        reviewed_by: Optional[int] = None,
    ) -> JobApplication:
        """Record a review decision on an application."""
        pass

    @abstractmethod
    async def get_job_system_stats(self) -> JobSystemStats:
        pass


class ForumStore(ABC):
    """Forum categories, subforums, threads, posts and per-user forum state."""

    # Categories and subforums

    @abstractmethod
    async def list_categories(self) -> list[Category]:
        """List categories ordered by position."""
        pass

    @abstractmethod
    async def get_category(self, category_id: int) -> Optional[Category]:
        pass

    @abstractmethod
    async def create_category(self, data: CategoryCreate) -> Category:
        pass

    @abstractmethod
    async def update_category(self, category_id: int, data: CategoryUpdate) -> Category:
        pass

    @abstractmethod
    async def list_subforums(self, category_id: Optional[int] = None) -> list[Subforum]:
        """List subforums ordered by position, optionally for one category."""
        pass

    @abstractmethod
    async def create_subforum(self, data: SubforumCreate) -> Subforum:
        pass

    # Threads and posts

    @abstractmethod
    async def list_threads(self, filters: Optional[ThreadFilters] = None) -> list[Thread]:
        """List threads: sticky first, then most recent activity first."""
        pass

    @abstractmethod
    async def get_thread(self, thread_id: int) -> Optional[Thread]:
        pass

    @abstractmethod
    async def create_thread(self, data: ThreadCreate) -> Thread:
        pass

    @abstractmethod
    async def update_thread(self, thread_id: int, data: ThreadUpdate) -> Thread:
        pass

    @abstractmethod
    async def delete_thread(self, thread_id: int) -> None:
        """Delete a thread with its posts, reactions and bookmarks."""
        pass

    @abstractmethod
    async def increment_thread_views(self, thread_id: int) -> Thread:
        """Atomically add exactly one to view_count."""
        pass

    @abstractmethod
    async def list_posts(self, thread_id: int) -> list[Post]:
        """List a thread's posts, oldest first."""
        pass

    @abstractmethod
    async def create_post(self, data: PostCreate) -> Post:
        """Create a post and refresh the thread's reply stats."""
        pass

    @abstractmethod
    async def update_post(self, post_id: int, data: PostUpdate) -> Post:
        pass

    @abstractmethod
    async def delete_post(self, post_id: int) -> None:
        """Delete a post, its direct replies and its reactions."""
        pass

    # Reactions, bookmarks, subscriptions

    @abstractmethod
    async def list_reactions(
        self, post_id: Optional[int] = None, thread_id: Optional[int] = None
    ) -> list[Reaction]:
        pass

    @abstractmethod
    async def create_reaction(self, data: ReactionCreate) -> Reaction:
        pass

    @abstractmethod
    async def delete_reaction(self, reaction_id: int) -> None:
        pass

    @abstractmethod
    async def list_user_bookmarks(self, user_id: str) -> list[Bookmark]:
        pass

    @abstractmethod
    async def create_bookmark(self, data: BookmarkCreate) -> Bookmark:
        pass

    @abstractmethod
    async def delete_bookmark(self, bookmark_id: int) -> None:
        pass

    @abstractmethod
    async def list_user_subscriptions(self, user_id: str) -> list[Subscription]:
        pass

    @abstractmethod
    async def create_subscription(self, data: SubscriptionCreate) -> Subscription:
        pass

    @abstractmethod
    async def delete_subscription(self, subscription_id: int) -> None:
        pass

    # Messages and notifications

    @abstractmethod
    async def list_user_messages(self, user_id: str) -> list[PrivateMessage]:
        """Messages sent or received by the user, newest first."""
        pass

    @abstractmethod
    async def create_private_message(
        self, data: PrivateMessageCreate
    ) -> PrivateMessage:
        pass

    @abstractmethod
    async def mark_message_read(self, message_id: int) -> PrivateMessage:
        pass

    @abstractmethod
    async def list_user_notifications(self, user_id: str) -> list[Notification]:
        pass

    @abstractmethod
    async def create_notification(self, data: NotificationCreate) -> Notification:
        pass

    @abstractmethod
    async def mark_notification_read(self, notification_id: int) -> Notification:
        pass

    @abstractmethod
    async def mark_all_notifications_read(self, user_id: str) -> None:
        pass


class Storage(
    UserStore,
    JobBoardStore,
    ForumStore,
    ProgramStore,
    ProgramDayStore,
    PrayerRequestStore,
):
    """Abstract storage interface for every entity family."""
