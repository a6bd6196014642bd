"""
Pydantic models for stored records and their create/update payloads.

Records are what the storage layer returns; ``...Create`` payloads carry the
client-supplied fields of a new record and ``...Update`` payloads carry any
subset of the mutable fields. Identity, timestamps and derived fields
(``total_days``, ``prayer_count``, ``reply_count``) are never part of a payload.

All models use camelCase for JSON serialization to match the admin console.
"""
from datetime import datetime
from typing import ClassVar, Optional, Literal
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelCaseModel(BaseModel):
    """
    Base model that converts snake_case to camelCase for JSON serialization.

    This ensures API responses match the console (e.g., total_days → totalDays).
    Also accepts camelCase in request bodies for client convenience.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,  # Accept both snake_case and camelCase in requests
        serialize_by_alias=True,  # Always serialize using camelCase aliases
    )


class UpdateModel(CamelCaseModel):
    """Partial update payload. Unknown (or derived) fields are rejected."""
    model_config = ConfigDict(extra="forbid")

    # Fields whose column is nullable; an explicit null clears them.
    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_for_required(self):
        """An explicit null is only accepted where the record allows one."""
        for name in self.model_fields_set - self.nullable_fields:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        """Only the fields the caller actually set."""
        return self.model_dump(exclude_unset=True, by_alias=False)


PrayerStatus = Literal["pending", "in-prayer", "answered"]
JobType = Literal["full-time", "part-time", "contract", "internship"]
ExperienceLevel = Literal["entry", "mid", "senior"]
ApplicationStatus = Literal["pending", "reviewed", "accepted", "rejected"]
ReactionType = Literal["like", "heart", "support", "thanks"]
NotificationLevel = Literal["all", "mentions", "none"]


# ============================================================================
# Programs (downloadable courses)
# ============================================================================

class Program(CamelCaseModel):
    """A multi-day devotional course."""
    id: int
    slug: str
    name: str
    description: Optional[str] = None
    icon: str = "📖"
    image_url: Optional[str] = None
    color: str = "#3478F6"
    category: str = "christian-formation"
    version: str = "1.0.0"
    total_days: int = 0
    duration: Optional[str] = None
    level: str = "basic"
    published: bool = False
    created_at: datetime
    updated_at: datetime


class ProgramCreate(CamelCaseModel):
    slug: str = Field(min_length=1, max_length=100)
    name: str = Field(min_length=1)
    description: Optional[str] = None
    icon: str = Field(default="📖", max_length=10)
    image_url: Optional[str] = None
    color: str = Field(default="#3478F6", max_length=20)
    category: str = Field(default="christian-formation", max_length=80)
    version: str = Field(default="1.0.0", max_length=20)
    duration: Optional[str] = Field(default=None, max_length=50)
    level: str = Field(default="basic", max_length=30)
    published: bool = False


class ProgramUpdate(UpdateModel):
    nullable_fields = frozenset({"description", "image_url", "duration"})

    slug: Optional[str] = Field(default=None, min_length=1, max_length=100)
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    icon: Optional[str] = Field(default=None, max_length=10)
    image_url: Optional[str] = None
    color: Optional[str] = Field(default=None, max_length=20)
    category: Optional[str] = Field(default=None, max_length=80)
    version: Optional[str] = Field(default=None, max_length=20)
    duration: Optional[str] = Field(default=None, max_length=50)
    level: Optional[str] = Field(default=None, max_length=30)
    published: Optional[bool] = None


class ProgramDay(CamelCaseModel):
    """One day's content unit of a program."""
    id: int
    program_id: int
    day_number: int
    title: str
    description: Optional[str] = None
    scripture_reference: Optional[str] = None
    scripture_text: Optional[str] = None
    reflection: Optional[str] = None
    activity_title: Optional[str] = None
    activity_description: Optional[str] = None
    audio_url: Optional[str] = None
    video_url: Optional[str] = None
    fasting_instructions: Optional[str] = None
    readings: Optional[list[str]] = None
    created_at: datetime
    updated_at: datetime


class ProgramDayFields(CamelCaseModel):
    """Day content as posted under ``/programs/{id}/days``."""
    day_number: int = Field(ge=1)
    title: str = Field(min_length=1)
    description: Optional[str] = None
    scripture_reference: Optional[str] = Field(default=None, max_length=100)
    scripture_text: Optional[str] = None
    reflection: Optional[str] = None
    activity_title: Optional[str] = Field(default=None, max_length=200)
    activity_description: Optional[str] = None
    audio_url: Optional[str] = None
    video_url: Optional[str] = None
    fasting_instructions: Optional[str] = None
    readings: Optional[list[str]] = None


class ProgramDayCreate(ProgramDayFields):
    program_id: int


class ProgramDayUpdate(UpdateModel):
    # No program_id: a day never changes owner
    nullable_fields = frozenset({
        "description", "scripture_reference", "scripture_text", "reflection",
        "activity_title", "activity_description", "audio_url", "video_url",
        "fasting_instructions", "readings",
    })

    day_number: Optional[int] = Field(default=None, ge=1)
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    scripture_reference: Optional[str] = Field(default=None, max_length=100)
    scripture_text: Optional[str] = None
    reflection: Optional[str] = None
    activity_title: Optional[str] = Field(default=None, max_length=200)
    activity_description: Optional[str] = None
    audio_url: Optional[str] = None
    video_url: Optional[str] = None
    fasting_instructions: Optional[str] = None
    readings: Optional[list[str]] = None


class ProgramWithDays(Program):
    """Program with its days pre-loaded, ordered by day number."""
    days: list[ProgramDay] = Field(default_factory=list)


# ============================================================================
# Prayer Requests
# ============================================================================

class PrayerRequest(CamelCaseModel):
    """A congregant-submitted prayer request."""
    id: int
    request: str
    author: str
    status: PrayerStatus = "pending"
    prayer_count: int = 0
    private: bool = False
    category: str = "general"
    created_at: datetime
    updated_at: datetime


class PrayerRequestCreate(CamelCaseModel):
    request: str = Field(min_length=1)
    author: str = Field(min_length=1)
    status: PrayerStatus = "pending"
    private: bool = False
    category: str = Field(default="general", max_length=80)


class PrayerRequestUpdate(UpdateModel):
    request: Optional[str] = Field(default=None, min_length=1)
    author: Optional[str] = Field(default=None, min_length=1)
    status: Optional[PrayerStatus] = None
    private: Optional[bool] = None
    category: Optional[str] = Field(default=None, max_length=80)


# ============================================================================
# Users
# ============================================================================

class UserPublic(CamelCaseModel):
    """A user as returned by the API, without the password."""
    id: int
    username: str
    email: Optional[str] = None
    role: str = "user"
    created_at: datetime


class User(UserPublic):
    password: str


class UserCreate(CamelCaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    email: Optional[str] = None
    role: str = "user"


# ============================================================================
# Job Board
# ============================================================================

class ProfessionalArea(CamelCaseModel):
    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime


class ProfessionalAreaCreate(CamelCaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None


class Job(CamelCaseModel):
    """A job posting on the congregation's job board."""
    id: int
    title: str
    company: str
    description: str
    requirements: Optional[list[str]] = None
    benefits: Optional[list[str]] = None
    professional_area_id: Optional[int] = None
    location: Optional[str] = None
    job_type: JobType
    experience_level: ExperienceLevel
    salary_range: Optional[str] = None
    contact_email: str
    contact_phone: Optional[str] = None
    application_deadline: Optional[datetime] = None
    is_active: bool = True
    published_by: int
    created_at: datetime
    updated_at: datetime


class JobCreate(CamelCaseModel):
    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    description: str = Field(min_length=1)
    requirements: Optional[list[str]] = None
    benefits: Optional[list[str]] = None
    professional_area_id: Optional[int] = None
    location: Optional[str] = None
    job_type: JobType
    experience_level: ExperienceLevel
    salary_range: Optional[str] = None
    contact_email: str = Field(min_length=3)
    contact_phone: Optional[str] = None
    application_deadline: Optional[datetime] = None
    is_active: bool = True
    published_by: int


class JobFilters(CamelCaseModel):
    professional_area_id: Optional[int] = None
    is_active: Optional[bool] = None
    job_type: Optional[JobType] = None
    experience_level: Optional[ExperienceLevel] = None


class UserProfile(CamelCaseModel):
    id: int
    user_id: int
    full_name: str
    email: str
    phone: Optional[str] = None
    professional_area_id: Optional[int] = None
    experience: Optional[str] = None
    skills: Optional[list[str]] = None
    education: Optional[str] = None
    summary: Optional[str] = None
    expected_salary: Optional[str] = None
    available_for_work: bool = True
    created_at: datetime
    updated_at: datetime


class UserProfileCreate(CamelCaseModel):
    user_id: int
    full_name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    phone: Optional[str] = None
    professional_area_id: Optional[int] = None
    experience: Optional[str] = None
    skills: Optional[list[str]] = None
    education: Optional[str] = None
    summary: Optional[str] = None
    expected_salary: Optional[str] = None
    available_for_work: bool = True


class UserProfileFilters(CamelCaseModel):
    professional_area_id: Optional[int] = None
    available_for_work: Optional[bool] = None


class JobApplication(CamelCaseModel):
    id: int
    job_id: Optional[int] = None  # None for a general application
    user_profile_id: int
    cover_letter: str
    status: ApplicationStatus = "pending"
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    notes: Optional[str] = None
    applied_at: datetime
    created_at: datetime
    updated_at: datetime


class JobApplicationCreate(CamelCaseModel):
    job_id: Optional[int] = None
    user_profile_id: int
    cover_letter: str = Field(min_length=1)


class JobApplicationDetail(JobApplication):
    """Application joined with its job and applicant profile."""
    job: Optional[Job] = None
    profile: Optional[UserProfile] = None


class JobApplicationReview(CamelCaseModel):
    status: ApplicationStatus
    notes: Optional[str] = None
    reviewed_by: Optional[int] = None


class JobSystemStats(CamelCaseModel):
    total_jobs: int
    jobs_this_month: int
    total_applications: int
    applications_this_week: int
    active_profiles: int
    profiles_available: int
    success_rate: str


# ============================================================================
# Forum
# ============================================================================

class Category(CamelCaseModel):
    id: int
    name: str
    description: Optional[str] = None
    icon: str
    color: str
    slug: str
    position: int = 0
    schedule: Optional[str] = None
    max_participants: Optional[int] = None
    is_active: bool = True
    created_at: datetime


class CategoryCreate(CamelCaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    icon: str
    color: str
    slug: str = Field(min_length=1)
    position: int = 0
    schedule: Optional[str] = None
    max_participants: Optional[int] = None
    is_active: bool = True


class CategoryUpdate(UpdateModel):
    nullable_fields = frozenset({"description", "schedule", "max_participants"})

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    slug: Optional[str] = Field(default=None, min_length=1)
    position: Optional[int] = None
    schedule: Optional[str] = None
    max_participants: Optional[int] = None
    is_active: Optional[bool] = None


class Subforum(CamelCaseModel):
    id: int
    category_id: int
    name: str
    description: Optional[str] = None
    position: int = 0
    is_active: bool = True
    created_at: datetime


class SubforumCreate(CamelCaseModel):
    category_id: int
    name: str = Field(min_length=1)
    description: Optional[str] = None
    position: int = 0
    is_active: bool = True


class Thread(CamelCaseModel):
    """A forum topic. ``reply_count`` is derived from its posts."""
    id: int
    category_id: int
    subforum_id: Optional[int] = None
    author_id: str
    title: str
    content: str
    is_sticky: bool = False
    is_locked: bool = False
    view_count: int = 0
    reply_count: int = 0
    last_reply_at: Optional[datetime] = None
    last_reply_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ThreadCreate(CamelCaseModel):
    category_id: int
    subforum_id: Optional[int] = None
    author_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    content: str = Field(min_length=1)
    is_sticky: bool = False
    is_locked: bool = False


class ThreadUpdate(UpdateModel):
    nullable_fields = frozenset({"subforum_id"})

    category_id: Optional[int] = None
    subforum_id: Optional[int] = None
    title: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = Field(default=None, min_length=1)
    is_sticky: Optional[bool] = None
    is_locked: Optional[bool] = None


class ThreadFilters(CamelCaseModel):
    category_id: Optional[int] = None
    subforum_id: Optional[int] = None
    author_id: Optional[str] = None


class Post(CamelCaseModel):
    id: int
    thread_id: int
    author_id: str
    content: str
    parent_id: Optional[int] = None
    is_moderated: bool = False
    created_at: datetime
    updated_at: datetime


class PostCreate(CamelCaseModel):
    thread_id: int
    author_id: str = Field(min_length=1)
    content: str = Field(min_length=1)
    parent_id: Optional[int] = None
    is_moderated: bool = False


class PostUpdate(UpdateModel):
    content: Optional[str] = Field(default=None, min_length=1)
    is_moderated: Optional[bool] = None


class Reaction(CamelCaseModel):
    id: int
    user_id: str
    post_id: Optional[int] = None
    thread_id: Optional[int] = None
    type: ReactionType = "like"
    created_at: datetime


class ReactionCreate(CamelCaseModel):
    user_id: str = Field(min_length=1)
    post_id: Optional[int] = None
    thread_id: Optional[int] = None
    type: ReactionType = "like"


class Bookmark(CamelCaseModel):
    id: int
    user_id: str
    thread_id: int
    created_at: datetime


class BookmarkCreate(CamelCaseModel):
    user_id: str = Field(min_length=1)
    thread_id: int


class Subscription(CamelCaseModel):
    id: int
    user_id: str
    category_id: Optional[int] = None
    subforum_id: Optional[int] = None
    thread_id: Optional[int] = None
    notification_level: NotificationLevel = "all"
    created_at: datetime


class SubscriptionCreate(CamelCaseModel):
    user_id: str = Field(min_length=1)
    category_id: Optional[int] = None
    subforum_id: Optional[int] = None
    thread_id: Optional[int] = None
    notification_level: NotificationLevel = "all"


class PrivateMessage(CamelCaseModel):
    id: int
    from_user_id: str
    to_user_id: str
    subject: str
    content: str
    is_read: bool = False
    created_at: datetime


class PrivateMessageCreate(CamelCaseModel):
    from_user_id: str = Field(min_length=1)
    to_user_id: str = Field(min_length=1)
    subject: str = Field(min_length=1)
    content: str = Field(min_length=1)


class Notification(CamelCaseModel):
    id: int
    user_id: str
    type: str
    title: str
    content: Optional[str] = None
    related_id: Optional[int] = None
    related_type: Optional[str] = None
    is_read: bool = False
    created_at: datetime


class NotificationCreate(CamelCaseModel):
    user_id: str = Field(min_length=1)
    type: str = Field(min_length=1)
    title: str = Field(min_length=1)
    content: Optional[str] = None
    related_id: Optional[int] = None
    related_type: Optional[str] = None


# ============================================================================
# API Response Models
# ============================================================================

class HealthResponse(CamelCaseModel):
    """Health check response."""
    status: str = "ok"
    version: str = "1.0.0"
    storage: str = "sql"


class ErrorResponse(CamelCaseModel):
    """Standard error response."""
    code: Literal["NOT_FOUND", "VALIDATION", "SERVER_ERROR"]
    message: str
