"""
In-memory storage implementation.

Every entity family lives in its own keyed table with its own identity
sequence. Data is lost when the process restarts; with ``seed=True`` the
tables are filled with sample data so the console has something to render.
"""
import asyncio
from datetime import datetime, timedelta, timezone
from typing import Generic, Iterable, Optional, TypeVar

from pydantic import BaseModel

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
from .base import Storage
from .errors import BackendFailure, NotFoundError

T = TypeVar("T", bound=BaseModel)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Table(Generic[T]):
    """Records keyed by identity, with a per-table auto-increment sequence."""

    def __init__(self, model: type[T]):
        self.model = model
        self.rows: dict[int, T] = {}
        self._last_id = 0

    def insert(self, **fields) -> T:
        """Assign the next identity, build the record and store it."""
        self._last_id += 1
        record = self.model(id=self._last_id, **fields)
        self.rows[self._last_id] = record
        return record

    def get(self, key: int) -> Optional[T]:
        return self.rows.get(key)

    def put(self, record: T) -> T:
        self.rows[record.id] = record
        return record

    def pop(self, key: int) -> Optional[T]:
        return self.rows.pop(key, None)

    def remove_where(self, predicate) -> list[T]:
        removed = [r for r in self.rows.values() if predicate(r)]
        for record in removed:
            del self.rows[record.id]
        return removed

    def values(self) -> list[T]:
        return list(self.rows.values())

    def __contains__(self, key: int) -> bool:
        return key in self.rows

    def __len__(self) -> int:
        return len(self.rows)


def _newest_first(records: Iterable[T], field: str = "created_at") -> list[T]:
    return sorted(records, key=lambda r: (getattr(r, field), r.id), reverse=True)


class InMemoryStorage(Storage):
    """In-memory storage using one dictionary-backed table per entity family."""

    def __init__(self, seed: bool = False):
        # Users
        self._users: Table[User] = Table(User)

        # Job board
        self._professional_areas: Table[ProfessionalArea] = Table(ProfessionalArea)
        self._jobs: Table[Job] = Table(Job)
        self._user_profiles: Table[UserProfile] = Table(UserProfile)
        self._job_applications: Table[JobApplication] = Table(JobApplication)

        # Forum
        self._categories: Table[Category] = Table(Category)
        self._subforums: Table[Subforum] = Table(Subforum)
        self._threads: Table[Thread] = Table(Thread)
        self._posts: Table[Post] = Table(Post)
        self._reactions: Table[Reaction] = Table(Reaction)
        self._bookmarks: Table[Bookmark] = Table(Bookmark)
        self._subscriptions: Table[Subscription] = Table(Subscription)
        self._messages: Table[PrivateMessage] = Table(PrivateMessage)
        self._notifications: Table[Notification] = Table(Notification)

        # Programs and prayer requests
        self._programs: Table[Program] = Table(Program)
        self._program_days: Table[ProgramDay] = Table(ProgramDay)
        self._prayer_requests: Table[PrayerRequest] = Table(PrayerRequest)

        # Guards read-increment-write counters
        self._counter_lock = asyncio.Lock()

        if seed:
            from .sample_data import load_sample_data
            load_sample_data(self)

    # ========================================================================
    # Users
    # ========================================================================

    async def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return next(
            (u for u in self._users.values() if u.username == username), None
        )

    async def create_user(self, data: UserCreate) -> User:
        if await self.get_user_by_username(data.username):
            raise BackendFailure("create_user", f"username '{data.username}' already exists")
        return self._users.insert(**data.model_dump(by_alias=False), created_at=_now())

    async def list_users(self) -> list[User]:
        return sorted(self._users.values(), key=lambda u: u.id)

    # ========================================================================
    # Job Board
    # ========================================================================

    async def list_professional_areas(self) -> list[ProfessionalArea]:
        return sorted(self._professional_areas.values(), key=lambda a: a.id)

    async def create_professional_area(
        self, data: ProfessionalAreaCreate
    ) -> ProfessionalArea:
        return self._professional_areas.insert(
            **data.model_dump(by_alias=False), created_at=_now()
        )

    async def list_jobs(self, filters: Optional[JobFilters] = None) -> list[Job]:
        jobs = self._jobs.values()
        if filters:
            if filters.professional_area_id is not None:
                jobs = [j for j in jobs if j.professional_area_id == filters.professional_area_id]
            if filters.is_active is not None:
                jobs = [j for j in jobs if j.is_active == filters.is_active]
            if filters.job_type:
                jobs = [j for j in jobs if j.job_type == filters.job_type]
            if filters.experience_level:
                jobs = [j for j in jobs if j.experience_level == filters.experience_level]
        return _newest_first(jobs)

    async def get_job(self, job_id: int) -> Optional[Job]:
        return self._jobs.get(job_id)

    async def create_job(self, data: JobCreate) -> Job:
        now = _now()
        return self._jobs.insert(
            **data.model_dump(by_alias=False), created_at=now, updated_at=now
        )

    async def toggle_job_status(self, job_id: int) -> Job:
        job = self._jobs.get(job_id)
        if not job:
            raise NotFoundError("Job", job_id)
        updated = job.model_copy(update={"is_active": not job.is_active, "updated_at": _now()})
        return self._jobs.put(updated)

    async def delete_job(self, job_id: int) -> None:
        self._job_applications.remove_where(lambda a: a.job_id == job_id)
        self._jobs.pop(job_id)

    async def list_user_profiles(
        self, filters: Optional[UserProfileFilters] = None
    ) -> list[UserProfile]:
        profiles = self._user_profiles.values()
        if filters:
            if filters.professional_area_id is not None:
                profiles = [
                    p for p in profiles
                    if p.professional_area_id == filters.professional_area_id
                ]
            if filters.available_for_work is not None:
                profiles = [
                    p for p in profiles
                    if p.available_for_work == filters.available_for_work
                ]
        return _newest_first(profiles)

    async def create_user_profile(self, data: UserProfileCreate) -> UserProfile:
        now = _now()
        return self._user_profiles.insert(
            **data.model_dump(by_alias=False), created_at=now, updated_at=now
        )

    async def list_job_applications(self) -> list[JobApplication]:
        return _newest_first(self._job_applications.values(), field="applied_at")

    async def list_job_applications_with_details(self) -> list[JobApplicationDetail]:
        details = []
        for application in await self.list_job_applications():
            job = self._jobs.get(application.job_id) if application.job_id else None
            details.append(JobApplicationDetail(
                **application.model_dump(by_alias=False),
                job=job,
                profile=self._user_profiles.get(application.user_profile_id),
            ))
        return details

    async def create_job_application(
        self, data: JobApplicationCreate
    ) -> JobApplication:
        now = _now()
        return self._job_applications.insert(
            **data.model_dump(by_alias=False),
            status="pending",
            applied_at=now,
            created_at=now,
            updated_at=now,
        )

    async def review_job_application(
        self,
        application_id: int,
        status: str,
        notes: Optional[str] = None,
        reviewed_by: Optional[int] = None,
    ) -> JobApplication:
        application = self._job_applications.get(application_id)
        if not application:
            raise NotFoundError("JobApplication", application_id)
        now = _now()
        updated = application.model_copy(update={
            "status": status,
            "notes": notes,
            "reviewed_by": reviewed_by,
            "reviewed_at": now,
            "updated_at": now,
        })
        return self._job_applications.put(updated)

    async def get_job_system_stats(self) -> JobSystemStats:
        jobs = self._jobs.values()
        applications = self._job_applications.values()
        profiles = self._user_profiles.values()

        now = _now()
        month_ago = now - timedelta(days=30)
        week_ago = now - timedelta(days=7)

        accepted = sum(1 for a in applications if a.status == "accepted")
        success_rate = (
            f"{accepted / len(applications) * 100:.1f}" if applications else "0"
        )

        return JobSystemStats(
            total_jobs=len(jobs),
            jobs_this_month=sum(1 for j in jobs if j.created_at >= month_ago),
            total_applications=len(applications),
            applications_this_week=sum(1 for a in applications if a.applied_at >= week_ago),
            active_profiles=len(profiles),
            profiles_available=sum(1 for p in profiles if p.available_for_work),
            success_rate=success_rate,
        )

    # ========================================================================
    # Forum: categories and subforums
    # ========================================================================

    async def list_categories(self) -> list[Category]:
        return sorted(self._categories.values(), key=lambda c: (c.position, c.id))

    async def get_category(self, category_id: int) -> Optional[Category]:
        return self._categories.get(category_id)

    async def create_category(self, data: CategoryCreate) -> Category:
        self._check_category_slug(data.slug)
        return self._categories.insert(**data.model_dump(by_alias=False), created_at=_now())

    async def update_category(self, category_id: int, data: CategoryUpdate) -> Category:
        category = self._categories.get(category_id)
        if not category:
            raise NotFoundError("Category", category_id)
        changes = data.changes()
        if changes.get("slug") not in (None, category.slug):
            self._check_category_slug(changes["slug"])
        return self._categories.put(category.model_copy(update=changes))

    def _check_category_slug(self, slug: str) -> None:
        if any(c.slug == slug for c in self._categories.values()):
            raise BackendFailure("category slug", f"'{slug}' already exists")

    async def list_subforums(self, category_id: Optional[int] = None) -> list[Subforum]:
        subforums = self._subforums.values()
        if category_id is not None:
            subforums = [s for s in subforums if s.category_id == category_id]
        return sorted(subforums, key=lambda s: (s.position, s.id))

    async def create_subforum(self, data: SubforumCreate) -> Subforum:
        return self._subforums.insert(**data.model_dump(by_alias=False), created_at=_now())

    # ========================================================================
    # Forum: threads and posts
    # ========================================================================

    async def list_threads(self, filters: Optional[ThreadFilters] = None) -> list[Thread]:
        threads = self._threads.values()
        if filters:
            if filters.category_id is not None:
                threads = [t for t in threads if t.category_id == filters.category_id]
            if filters.subforum_id is not None:
                threads = [t for t in threads if t.subforum_id == filters.subforum_id]
            if filters.author_id:
                threads = [t for t in threads if t.author_id == filters.author_id]

        # Sticky threads first, then by latest activity
        return sorted(
            threads,
            key=lambda t: (not t.is_sticky, -(t.last_reply_at or t.created_at).timestamp(), -t.id),
        )

    async def get_thread(self, thread_id: int) -> Optional[Thread]:
        return self._threads.get(thread_id)

    async def create_thread(self, data: ThreadCreate) -> Thread:
        now = _now()
        return self._threads.insert(
            **data.model_dump(by_alias=False), created_at=now, updated_at=now
        )

    async def update_thread(self, thread_id: int, data: ThreadUpdate) -> Thread:
        thread = self._threads.get(thread_id)
        if not thread:
            raise NotFoundError("Thread", thread_id)
        return self._threads.put(
            thread.model_copy(update={**data.changes(), "updated_at": _now()})
        )

    async def delete_thread(self, thread_id: int) -> None:
        posts = self._posts.remove_where(lambda p: p.thread_id == thread_id)
        post_ids = {p.id for p in posts}
        self._reactions.remove_where(
            lambda r: r.thread_id == thread_id or r.post_id in post_ids
        )
        self._bookmarks.remove_where(lambda b: b.thread_id == thread_id)
        self._threads.pop(thread_id)

    async def increment_thread_views(self, thread_id: int) -> Thread:
        async with self._counter_lock:
            thread = self._threads.get(thread_id)
            if not thread:
                raise NotFoundError("Thread", thread_id)
            return self._threads.put(
                thread.model_copy(update={"view_count": thread.view_count + 1})
            )

    async def list_posts(self, thread_id: int) -> list[Post]:
        posts = [p for p in self._posts.values() if p.thread_id == thread_id]
        return sorted(posts, key=lambda p: (p.created_at, p.id))

    async def create_post(self, data: PostCreate) -> Post:
        if data.thread_id not in self._threads:
            raise NotFoundError("Thread", data.thread_id)
        now = _now()
        post = self._posts.insert(
            **data.model_dump(by_alias=False), created_at=now, updated_at=now
        )
        self._refresh_thread_replies(data.thread_id)
        return post

    async def update_post(self, post_id: int, data: PostUpdate) -> Post:
        post = self._posts.get(post_id)
        if not post:
            raise NotFoundError("Post", post_id)
        return self._posts.put(
            post.model_copy(update={**data.changes(), "updated_at": _now()})
        )

    async def delete_post(self, post_id: int) -> None:
        post = self._posts.pop(post_id)
        if not post:
            return
        # Replies nest, so remove the whole subtree.
        removed_ids = {post_id}
        frontier = {post_id}
        while frontier:
            replies = self._posts.remove_where(lambda p: p.parent_id in frontier)
            frontier = {r.id for r in replies}
            removed_ids |= frontier
        self._reactions.remove_where(lambda r: r.post_id in removed_ids)
        self._refresh_thread_replies(post.thread_id)

    def _refresh_thread_replies(self, thread_id: int) -> None:
        """Recount a thread's replies and last-reply info from its posts."""
        thread = self._threads.get(thread_id)
        if not thread:
            return
        posts = [p for p in self._posts.values() if p.thread_id == thread_id]
        latest = max(posts, key=lambda p: (p.created_at, p.id), default=None)
        self._threads.put(thread.model_copy(update={
            "reply_count": len(posts),
            "last_reply_at": latest.created_at if latest else None,
            "last_reply_by": latest.author_id if latest else None,
            "updated_at": _now(),
        }))

    # ========================================================================
    # Forum: reactions, bookmarks, subscriptions
    # ========================================================================

    async def list_reactions(
        self, post_id: Optional[int] = None, thread_id: Optional[int] = None
    ) -> list[Reaction]:
        reactions = self._reactions.values()
        if post_id is not None:
            reactions = [r for r in reactions if r.post_id == post_id]
        if thread_id is not None:
            reactions = [r for r in reactions if r.thread_id == thread_id]
        return sorted(reactions, key=lambda r: r.id)

    async def create_reaction(self, data: ReactionCreate) -> Reaction:
        return self._reactions.insert(**data.model_dump(by_alias=False), created_at=_now())

    async def delete_reaction(self, reaction_id: int) -> None:
        self._reactions.pop(reaction_id)

    async def list_user_bookmarks(self, user_id: str) -> list[Bookmark]:
        return _newest_first(b for b in self._bookmarks.values() if b.user_id == user_id)

    async def create_bookmark(self, data: BookmarkCreate) -> Bookmark:
        return self._bookmarks.insert(**data.model_dump(by_alias=False), created_at=_now())

    async def delete_bookmark(self, bookmark_id: int) -> None:
        self._bookmarks.pop(bookmark_id)

    async def list_user_subscriptions(self, user_id: str) -> list[Subscription]:
        subscriptions = [s for s in self._subscriptions.values() if s.user_id == user_id]
        return sorted(subscriptions, key=lambda s: s.id)

    async def create_subscription(self, data: SubscriptionCreate) -> Subscription:
        return self._subscriptions.insert(
            **data.model_dump(by_alias=False), created_at=_now()
        )

    async def delete_subscription(self, subscription_id: int) -> None:
        self._subscriptions.pop(subscription_id)

    # ========================================================================
    # Forum: messages and notifications
    # ========================================================================

    async def list_user_messages(self, user_id: str) -> list[PrivateMessage]:
        return _newest_first(
            m for m in self._messages.values()
            if m.from_user_id == user_id or m.to_user_id == user_id
        )

    async def create_private_message(
        self, data: PrivateMessageCreate
    ) -> PrivateMessage:
        return self._messages.insert(**data.model_dump(by_alias=False), created_at=_now())

    async def mark_message_read(self, message_id: int) -> PrivateMessage:
        message = self._messages.get(message_id)
        if not message:
            raise NotFoundError("PrivateMessage", message_id)
        return self._messages.put(message.model_copy(update={"is_read": True}))

    async def list_user_notifications(self, user_id: str) -> list[Notification]:
        return _newest_first(n for n in self._notifications.values() if n.user_id == user_id)

    async def create_notification(self, data: NotificationCreate) -> Notification:
        return self._notifications.insert(
            **data.model_dump(by_alias=False), created_at=_now()
        )

    async def mark_notification_read(self, notification_id: int) -> Notification:
        notification = self._notifications.get(notification_id)
        if not notification:
            raise NotFoundError("Notification", notification_id)
        return self._notifications.put(notification.model_copy(update={"is_read": True}))

    async def mark_all_notifications_read(self, user_id: str) -> None:
        for notification in self._notifications.values():
            if notification.user_id == user_id and not notification.is_read:
                self._notifications.put(notification.model_copy(update={"is_read": True}))

    # ========================================================================
    # Programs
    # ========================================================================

    async def list_programs(self, published: Optional[bool] = None) -> list[Program]:
        programs = self._programs.values()
        if published is not None:
            programs = [p for p in programs if p.published == published]
        return sorted(programs, key=lambda p: (p.created_at, p.id))

    async def list_programs_with_days(
        self, published: Optional[bool] = None
    ) -> list[ProgramWithDays]:
        return [
            ProgramWithDays(
                **program.model_dump(by_alias=False),
                days=await self.list_program_days(program.id),
            )
            for program in await self.list_programs(published)
        ]

    async def get_program(self, program_id: int) -> Optional[Program]:
        return self._programs.get(program_id)

    async def get_program_by_slug(self, slug: str) -> Optional[Program]:
        return next((p for p in self._programs.values() if p.slug == slug), None)

    async def create_program(self, data: ProgramCreate) -> Program:
        if await self.get_program_by_slug(data.slug):
            raise BackendFailure("create_program", f"slug '{data.slug}' already exists")
        now = _now()
        return self._programs.insert(
            **data.model_dump(by_alias=False),
            total_days=0,
            created_at=now,
            updated_at=now,
        )

    async def update_program(self, program_id: int, data: ProgramUpdate) -> Program:
        program = self._programs.get(program_id)
        if not program:
            raise NotFoundError("Program", program_id)
        changes = data.changes()
        if changes.get("slug") not in (None, program.slug):
            if await self.get_program_by_slug(changes["slug"]):
                raise BackendFailure("update_program", f"slug '{changes['slug']}' already exists")
        return self._programs.put(
            program.model_copy(update={**changes, "updated_at": _now()})
        )

    async def delete_program(self, program_id: int) -> None:
        self._program_days.remove_where(lambda d: d.program_id == program_id)
        self._programs.pop(program_id)

    async def toggle_program_published(self, program_id: int) -> Program:
        program = self._programs.get(program_id)
        if not program:
            raise NotFoundError("Program", program_id)
        return await self.update_program(
            program_id, ProgramUpdate(published=not program.published)
        )

    # ========================================================================
    # Program days
    # ========================================================================

    async def list_program_days(self, program_id: int) -> list[ProgramDay]:
        days = [d for d in self._program_days.values() if d.program_id == program_id]
        return sorted(days, key=lambda d: (d.day_number, d.id))

    async def get_program_day(self, day_id: int) -> Optional[ProgramDay]:
        return self._program_days.get(day_id)

    async def create_program_day(self, data: ProgramDayCreate) -> ProgramDay:
        if data.program_id not in self._programs:
            raise NotFoundError("Program", data.program_id)
        now = _now()
        day = self._program_days.insert(
            **data.model_dump(by_alias=False), created_at=now, updated_at=now
        )
        self._recount_program_days(data.program_id)
        return day

    async def update_program_day(self, day_id: int, data: ProgramDayUpdate) -> ProgramDay:
        day = self._program_days.get(day_id)
        if not day:
            raise NotFoundError("ProgramDay", day_id)
        return self._program_days.put(
            day.model_copy(update={**data.changes(), "updated_at": _now()})
        )

    async def delete_program_day(self, day_id: int) -> None:
        day = self._program_days.pop(day_id)
        if day:
            self._recount_program_days(day.program_id)

    def _recount_program_days(self, program_id: int) -> None:
        """Store the program's total_days as a full recount of its days."""
        program = self._programs.get(program_id)
        if not program:
            return
        count = sum(1 for d in self._program_days.values() if d.program_id == program_id)
        self._programs.put(
            program.model_copy(update={"total_days": count, "updated_at": _now()})
        )

    # ========================================================================
    # Prayer requests
    # ========================================================================

    async def list_prayer_requests(
        self, status: Optional[PrayerStatus] = None
    ) -> list[PrayerRequest]:
        requests = self._prayer_requests.values()
        if status:
            requests = [r for r in requests if r.status == status]
        return _newest_first(requests)

    async def get_prayer_request(self, request_id: int) -> Optional[PrayerRequest]:
        return self._prayer_requests.get(request_id)

    async def create_prayer_request(self, data: PrayerRequestCreate) -> PrayerRequest:
        now = _now()
        return self._prayer_requests.insert(
            **data.model_dump(by_alias=False),
            prayer_count=0,
            created_at=now,
            updated_at=now,
        )

    async def update_prayer_request(
        self, request_id: int, data: PrayerRequestUpdate
    ) -> PrayerRequest:
        request = self._prayer_requests.get(request_id)
        if not request:
            raise NotFoundError("PrayerRequest", request_id)
        return self._prayer_requests.put(
            request.model_copy(update={**data.changes(), "updated_at": _now()})
        )

    async def delete_prayer_request(self, request_id: int) -> None:
        self._prayer_requests.pop(request_id)

    async def increment_prayer_count(self, request_id: int) -> PrayerRequest:
        async with self._counter_lock:
            request = self._prayer_requests.get(request_id)
            if not request:
                raise NotFoundError("PrayerRequest", request_id)
            return self._prayer_requests.put(request.model_copy(update={
                "prayer_count": request.prayer_count + 1,
                "updated_at": _now(),
            }))
