"""
API Routers for the congregation admin API.
"""
from .health import router as health_router
from .programs import router as programs_router
from .prayer_requests import router as prayer_requests_router
from .forum import router as forum_router
from .jobs import router as jobs_router
from .users import router as users_router

__all__ = [
    "health_router",
    "programs_router",
    "prayer_requests_router",
    "forum_router",
    "jobs_router",
    "users_router",
]
