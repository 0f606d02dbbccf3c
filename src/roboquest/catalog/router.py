"""Catalog endpoints: public reads and admin-gated content management."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from roboquest.auth.dependencies import require_admin
from roboquest.auth.roles import CurrentUser
from roboquest.auth.schemas import MessageResponse
from roboquest.catalog.models import ContentKind
from roboquest.catalog.schemas import (
    ContentListResponse,
    ContentResponse,
    ContentUpdateRequest,
    ContentUploadRequest,
    CourseListResponse,
    CourseResponse,
    ProjectListResponse,
    ProjectResponse,
    ViewRecordedResponse,
)
from roboquest.catalog.service import CatalogService
from roboquest.dependencies import get_catalog

router = APIRouter(prefix="/api/v1", tags=["Catalog"])


# ---- Public reads ----


@router.get("/content", response_model=ContentListResponse)
async def list_tutorials(catalog: CatalogService = Depends(get_catalog)) -> ContentListResponse:
    return ContentListResponse(content=await catalog.list_content(ContentKind.TUTORIAL))


@router.get("/our-content", response_model=ContentListResponse)
async def list_our_content(catalog: CatalogService = Depends(get_catalog)) -> ContentListResponse:
    return ContentListResponse(content=await catalog.list_content(ContentKind.SHOWCASE))


@router.get("/courses", response_model=CourseListResponse)
async def list_courses(catalog: CatalogService = Depends(get_catalog)) -> CourseListResponse:
    return CourseListResponse(courses=await catalog.list_courses())


@router.get("/course/{course_id}", response_model=CourseResponse)
async def get_course(course_id: str, catalog: CatalogService = Depends(get_catalog)) -> CourseResponse:
    return CourseResponse(course=await catalog.get_course(course_id))


@router.get("/projects", response_model=ProjectListResponse)
async def list_projects(catalog: CatalogService = Depends(get_catalog)) -> ProjectListResponse:
    return ProjectListResponse(projects=await catalog.list_projects())


@router.get("/project/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: str, catalog: CatalogService = Depends(get_catalog)) -> ProjectResponse:
    return ProjectResponse(project=await catalog.get_project(project_id))


@router.post("/content/{content_id}/view", response_model=ViewRecordedResponse)
async def record_view(content_id: str, catalog: CatalogService = Depends(get_catalog)) -> ViewRecordedResponse:
    return ViewRecordedResponse(views=await catalog.record_view(content_id))


# ---- Admin ----


@router.post("/content/upload", response_model=ContentResponse)
async def upload_content(
    body: ContentUploadRequest,
    admin: CurrentUser = Depends(require_admin),
    catalog: CatalogService = Depends(get_catalog),
) -> ContentResponse:
    """Add a tutorial, or a showcase item when ``is_our_content`` is set."""
    item = await catalog.upload_content(body, uploaded_by=admin.id)
    return ContentResponse(message="Content uploaded successfully", content=item)


@router.put("/content/{content_id}", response_model=ContentResponse)
async def update_content(
    content_id: str,
    body: ContentUpdateRequest,
    _admin: CurrentUser = Depends(require_admin),
    catalog: CatalogService = Depends(get_catalog),
) -> ContentResponse:
    item = await catalog.update_content(content_id, body)
    return ContentResponse(message="Content updated successfully", content=item)


@router.delete("/content/{content_id}", response_model=MessageResponse)
async def delete_content(
    content_id: str,
    _admin: CurrentUser = Depends(require_admin),
    catalog: CatalogService = Depends(get_catalog),
) -> MessageResponse:
    """Delete from whichever partition holds ``content_id``."""
    await catalog.delete_content(content_id)
    return MessageResponse(message="Content deleted successfully")
