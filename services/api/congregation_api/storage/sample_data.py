"""
Sample data for the in-memory store.

Loaded at construction so the admin console has something to render before
any real writes happen. Rows go through each table's own identity sequence,
so references below rely on insertion order (first user is id 1, ...).
"""
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .memory import InMemoryStorage


def load_sample_data(store: "InMemoryStorage") -> None:
    """Populate every table of ``store`` with sample rows."""
    now = datetime.now(timezone.utc)
    _load_users(store, now)
    _load_job_board(store, now)
    _load_forum(store, now)
    _load_programs(store, now)
    _load_prayer_requests(store, now)


def _load_users(store: "InMemoryStorage", now: datetime) -> None:
    store._users.insert(
        username="pastor.admin", password="change-me", email="admin@example.org",
        role="admin", created_at=now,
    )
    store._users.insert(
        username="maria.gonzalez", password="change-me", email="maria@example.org",
        role="user", created_at=now,
    )


def _load_job_board(store: "InMemoryStorage", now: datetime) -> None:
    for name, description in [
        ("Technology", "Software development, IT, systems"),
        ("Marketing", "Digital marketing, advertising, sales"),
        ("Finance", "Accounting, financial analysis, banking"),
        ("Human Resources", "Talent management, recruiting"),
        ("Design", "Graphic design, UX/UI, creative work"),
    ]:
        store._professional_areas.insert(name=name, description=description, created_at=now)

    jobs = [
        dict(
            title="Frontend Developer", company="TechCorp",
            description="Frontend developer with React and TypeScript experience.",
            requirements=["React", "TypeScript", "CSS", "Git"],
            benefits=["Remote work", "Health insurance"],
            professional_area_id=1, location="Santo Domingo", job_type="full-time",
            experience_level="mid", salary_range="$35,000 - $45,000",
            contact_email="jobs@techcorp.example", contact_phone="809-555-0123",
            created=now - timedelta(days=20),
        ),
        dict(
            title="Digital Marketing Specialist", company="MarketPro",
            description="Run our social media campaigns and SEO.",
            requirements=["Google Ads", "SEO", "Analytics"],
            benefits=["Flexible hours"],
            professional_area_id=2, location="Santiago", job_type="full-time",
            experience_level="entry", salary_range="$25,000 - $32,000",
            contact_email="jobs@marketpro.example", contact_phone=None,
            created=now - timedelta(days=12),
        ),
        dict(
            title="UX/UI Designer", company="DesignStudio",
            description="Design digital experiences with our creative team.",
            requirements=["Figma", "Prototyping", "User research"],
            benefits=["International projects"],
            professional_area_id=5, location="Santo Domingo", job_type="contract",
            experience_level="senior", salary_range="$40,000 - $55,000",
            contact_email="careers@designstudio.example", contact_phone="809-555-0456",
            created=now - timedelta(days=45),
        ),
    ]
    for job in jobs:
        created = job.pop("created")
        store._jobs.insert(
            **job, application_deadline=None, is_active=True, published_by=1,
            created_at=created, updated_at=created,
        )

    store._user_profiles.insert(
        user_id=2, full_name="María González", email="maria@example.org",
        phone="809-555-1234", professional_area_id=1,
        experience="Three years of frontend development with React and Vue.",
        skills=["React", "Vue.js", "TypeScript", "CSS"],
        education="Systems Engineering", summary="Frontend developer.",
        expected_salary="$30,000 - $40,000", available_for_work=True,
        created_at=now - timedelta(days=25), updated_at=now - timedelta(days=25),
    )
    store._user_profiles.insert(
        user_id=1, full_name="Juan Pérez", email="admin@example.org",
        phone="809-555-5678", professional_area_id=2,
        experience="Five years in digital marketing.",
        skills=["Google Ads", "SEO", "Analytics"],
        education="Marketing", summary="Digital marketing specialist.",
        expected_salary="$35,000 - $45,000", available_for_work=False,
        created_at=now - timedelta(days=22), updated_at=now - timedelta(days=22),
    )

    applications = [
        (1, 1, "I would love to join the frontend team.", "pending", None, None, 3),
        (2, 2, "Five years running ad campaigns.", "reviewed", 1,
         "Promising candidate, schedule an interview.", 5),
        (3, 1, "Moving from frontend into UX design.", "rejected", 1,
         "Needs more UX experience.", 10),
        (None, 2, "Open to marketing opportunities.", "pending", None, None, 1),
    ]
    for job_id, profile_id, letter, status, reviewer, notes, days_ago in applications:
        applied = now - timedelta(days=days_ago)
        store._job_applications.insert(
            job_id=job_id, user_profile_id=profile_id, cover_letter=letter,
            status=status, reviewed_by=reviewer,
            reviewed_at=applied + timedelta(days=1) if reviewer else None,
            notes=notes, applied_at=applied, created_at=applied, updated_at=applied,
        )


def _load_forum(store: "InMemoryStorage", now: datetime) -> None:
    store._categories.insert(
        name="Daily Communion", description="Daily reflections and communion",
        icon="BookOpen", color="blue", slug="daily-communion", position=1,
        schedule="Monday to Friday, 7:00 AM", max_participants=100,
        is_active=True, created_at=now,
    )
    store._categories.insert(
        name="Bible Courses", description="Learn more about the Word",
        icon="GraduationCap", color="green", slug="bible-courses", position=2,
        is_active=True, created_at=now,
    )
    store._categories.insert(
        name="Events", description="Upcoming church events and activities",
        icon="Calendar", color="purple", slug="events", position=3,
        is_active=True, created_at=now,
    )

    threads = [
        (1, "1", "Reflection of the day: faith that moves mountains",
         "Sharing a reflection on Matthew 17:20...", True, 145, 24),
        (2, "1", "New course: Introduction to the Old Testament",
         "We are starting a new course on the Old Testament...", False, 89, 48),
        (3, "2", "Spiritual retreat next weekend",
         "Join our spiritual retreat!", True, 234, 72),
    ]
    for category_id, author, title, content, sticky, views, hours_ago in threads:
        created = now - timedelta(hours=hours_ago)
        store._threads.insert(
            category_id=category_id, author_id=author, title=title, content=content,
            is_sticky=sticky, is_locked=False, view_count=views, reply_count=0,
            created_at=created, updated_at=created,
        )

    posts = [
        (1, "2", "Wonderful reflection on the power of faith.", None, 30),
        (1, "1", "Thank you! Faith is the foundation of our life.", 1, 25),
        (2, "2", "When does the course start?", None, 120),
    ]
    for thread_id, author, content, parent_id, minutes_ago in posts:
        created = now - timedelta(minutes=minutes_ago)
        store._posts.insert(
            thread_id=thread_id, author_id=author, content=content,
            parent_id=parent_id, is_moderated=False,
            created_at=created, updated_at=created,
        )

    for thread_id in list(store._threads.rows):
        store._refresh_thread_replies(thread_id)


def _load_programs(store: "InMemoryStorage", now: datetime) -> None:
    store._programs.insert(
        slug="fast-21", name="21-Day Fast",
        description="Three weeks of prayer and fasting.",
        category="fasting", duration="21 days", published=True,
        total_days=0, created_at=now, updated_at=now,
    )
    for number, title, reference in [
        (1, "A new beginning", "Isaiah 43:19"),
        (2, "Hunger for God", "Matthew 5:6"),
        (3, "Strength in weakness", "2 Corinthians 12:9"),
    ]:
        store._program_days.insert(
            program_id=1, day_number=number, title=title,
            scripture_reference=reference, created_at=now, updated_at=now,
        )
    store._recount_program_days(1)


def _load_prayer_requests(store: "InMemoryStorage", now: datetime) -> None:
    for text, author, status, count, hours_ago in [
        ("For my family's health", "Ana", "pending", 0, 5),
        ("For a new job", "Carlos", "in-prayer", 7, 30),
        ("Thanks for a safe journey", "Lucía", "answered", 12, 96),
    ]:
        created = now - timedelta(hours=hours_ago)
        store._prayer_requests.insert(
            request=text, author=author, status=status, prayer_count=count,
            private=False, category="general", created_at=created, updated_at=created,
        )
