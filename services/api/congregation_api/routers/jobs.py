"""
Job board API endpoints, plus the admin review actions.
"""
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from ..models import (
    ErrorResponse,
    ExperienceLevel,
    Job,
    JobApplication,
    JobApplicationCreate,
    JobApplicationDetail,
    JobApplicationReview,
    JobCreate,
    JobFilters,
    JobSystemStats,
    JobType,
    ProfessionalArea,
    ProfessionalAreaCreate,
    UserProfile,
    UserProfileCreate,
    UserProfileFilters,
)
from ..storage import Storage
from ..dependencies import get_storage
from .responses import not_found

router = APIRouter(tags=["jobs"])

StorageDep = Annotated[Storage, Depends(get_storage)]


# ============================================================================
# Professional areas
# ============================================================================


@router.get("/professional-areas", response_model=list[ProfessionalArea])
async def list_professional_areas(storage: StorageDep) -> list[ProfessionalArea]:
    return await storage.list_professional_areas()


@router.post(
    "/professional-areas",
    response_model=ProfessionalArea,
    status_code=status.HTTP_201_CREATED,
)
async def create_professional_area(
    request: ProfessionalAreaCreate, storage: StorageDep
) -> ProfessionalArea:
    return await storage.create_professional_area(request)


# ============================================================================
# Jobs
# ============================================================================


@router.get("/jobs", response_model=list[Job])
async def list_jobs(
    storage: StorageDep,
    professional_area_id: Annotated[Optional[int], Query(alias="professionalAreaId")] = None,
    is_active: Annotated[Optional[bool], Query(alias="isActive")] = None,
    job_type: Annotated[Optional[JobType], Query(alias="jobType")] = None,
    experience_level: Annotated[Optional[ExperienceLevel], Query(alias="experienceLevel")] = None,
) -> list[Job]:
    """List job postings, newest first."""
    filters = JobFilters(
        professional_area_id=professional_area_id,
        is_active=is_active,
        job_type=job_type,
        experience_level=experience_level,
    )
    return await storage.list_jobs(filters)


@router.post("/jobs", response_model=Job, status_code=status.HTTP_201_CREATED)
async def create_job(request: JobCreate, storage: StorageDep) -> Job:
    return await storage.create_job(request)


@router.get("/jobs/{job_id}", response_model=Job, responses={404: {"model": ErrorResponse}})
async def get_job(job_id: int, storage: StorageDep) -> Job:
    job = await storage.get_job(job_id)
    if not job:
        raise not_found("Job", job_id)
    return job


@router.delete("/jobs/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_job(job_id: int, storage: StorageDep) -> None:
    """Delete a job posting and every application to it."""
    await storage.delete_job(job_id)


# ============================================================================
# Profiles and applications
# ============================================================================


@router.get("/user-profiles", response_model=list[UserProfile])
async def list_user_profiles(
    storage: StorageDep,
    professional_area_id: Annotated[Optional[int], Query(alias="professionalAreaId")] = None,
    available_for_work: Annotated[Optional[bool], Query(alias="availableForWork")] = None,
) -> list[UserProfile]:
    filters = UserProfileFilters(
        professional_area_id=professional_area_id,
        available_for_work=available_for_work,
    )
    return await storage.list_user_profiles(filters)


@router.post("/user-profiles", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
async def create_user_profile(request: UserProfileCreate, storage: StorageDep) -> UserProfile:
    return await storage.create_user_profile(request)


@router.get("/job-applications", response_model=None)
async def list_job_applications(
    storage: StorageDep,
    with_details: Annotated[bool, Query(alias="withDetails")] = False,
) -> list[JobApplication] | list[JobApplicationDetail]:
    """List applications, most recent first; ``withDetails`` joins job and profile."""
    if with_details:
        return await storage.list_job_applications_with_details()
    return await storage.list_job_applications()


@router.post(
    "/job-applications",
    response_model=JobApplication,
    status_code=status.HTTP_201_CREATED,
)
async def create_job_application(
    request: JobApplicationCreate, storage: StorageDep
) -> JobApplication:
    return await storage.create_job_application(request)


# ============================================================================
# Admin
# ============================================================================


@router.patch(
    "/admin/jobs/{job_id}/toggle-status",
    response_model=Job,
    responses={404: {"model": ErrorResponse}},
)
async def toggle_job_status(job_id: int, storage: StorageDep) -> Job:
    return await storage.toggle_job_status(job_id)


@router.patch(
    "/admin/job-applications/{application_id}/review",
    response_model=JobApplication,
    responses={404: {"model": ErrorResponse}},
)
async def review_job_application(
    application_id: int, request: JobApplicationReview, storage: StorageDep
) -> JobApplication:
    return await storage.review_job_application(
        application_id,
        request.status,
        notes=request.notes,
        reviewed_by=request.reviewed_by,
    )


@router.get("/admin/job-stats", response_model=JobSystemStats)
async def get_job_stats(storage: StorageDep) -> JobSystemStats:
    return await storage.get_job_system_stats()
