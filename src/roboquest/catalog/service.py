"""Content catalog: tutorials, showcase videos, courses and practice projects.

All content items live in one physical store (``content:{id}``) partitioned by
:class:`ContentKind`; each kind keeps its own ordered id index. Courses and
projects are read-only catalog data loaded by :mod:`roboquest.catalog.seed`.
"""

from __future__ import annotations

import secrets
import time
from datetime import datetime, timezone
from typing import Any

import structlog

from roboquest.catalog.models import ContentItem, ContentKind, Course, PracticeProject
from roboquest.catalog.schemas import ContentUpdateRequest, ContentUploadRequest
from roboquest.errors import NotFoundError
from roboquest.storage.kv_store import KeyValueStore, Mutation

logger = structlog.get_logger()

COURSE_INDEX = "course:index"
PROJECT_INDEX = "project:index"


def content_key(content_id: str) -> str:
    return f"content:{content_id}"


def content_index_key(kind: ContentKind) -> str:
    return f"content:index:{kind.value}"


def course_key(course_id: str) -> str:
    return f"course:{course_id}"


def project_key(project_id: str) -> str:
    return f"project:{project_id}"


def new_content_id(kind: ContentKind) -> str:
    """``content_<ms>_<rand>`` for tutorials, ``our_content_<ms>_<rand>`` for showcase items."""
    prefix = "our_content" if kind is ContentKind.SHOWCASE else "content"
    return f"{prefix}_{int(time.time() * 1000)}_{secrets.token_hex(5)[:9]}"


class CatalogService:
    """Reads and admin writes over the content catalog."""

    def __init__(self, store: KeyValueStore, default_xp_reward: int = 50) -> None:
        self.store = store
        self.default_xp_reward = default_xp_reward

    # --- Content items ---

    async def list_content(self, kind: ContentKind) -> list[ContentItem]:
        """All items of ``kind`` in index order. Dangling index ids are skipped."""
        ids: list[str] = await self.store.get(content_index_key(kind)) or []
        rows = await self.store.mget([content_key(i) for i in ids])
        return [ContentItem.model_validate(row) for row in rows if row is not None]

    async def get_content(self, content_id: str) -> ContentItem:
        """Look up a tutorial or showcase item by id (either kind)."""
        row = await self.store.get(content_key(content_id))
        if row is None:
            raise NotFoundError("Content not found")
        return ContentItem.model_validate(row)

    async def record_view(self, content_id: str) -> int:
        """Increment the view counter. Returns the new count."""

        def bump(current: dict[str, Any] | None) -> Mutation[int]:
            if current is None:
                raise NotFoundError("Content not found")
            views = int(current.get("views") or 0) + 1
            return Mutation(value={**current, "views": views}, result=views)

        return await self.store.transact(content_key(content_id), bump)

    async def upload_content(self, request: ContentUploadRequest, uploaded_by: str) -> ContentItem:
        """Create a new item in the tutorial or showcase partition."""
        kind = ContentKind.SHOWCASE if request.is_our_content else ContentKind.TUTORIAL
        item = ContentItem(
            id=new_content_id(kind),
            kind=kind,
            title=request.title,
            description=request.description,
            type=request.type,
            category=request.category,
            difficulty=request.difficulty,
            duration=request.duration,
            youtube_id=request.youtube_id,
            xp_reward=request.xp_reward or self.default_xp_reward,
            uploaded_by=uploaded_by,
            uploaded_at=datetime.now(timezone.utc),
        )
        await self.store.set(content_key(item.id), item.model_dump(mode="json"))
        await self._update_index(content_index_key(kind), add=item.id)

        logger.info("content_uploaded", content_id=item.id, kind=kind.value, uploaded_by=uploaded_by)
        return item

    async def update_content(self, content_id: str, request: ContentUpdateRequest) -> ContentItem:
        """Merge the set, non-null fields of ``request`` into an existing item."""
        updates = request.model_dump(exclude_unset=True, exclude_none=True, mode="json")

        def merge(current: dict[str, Any] | None) -> Mutation[ContentItem]:
            if current is None:
                raise NotFoundError("Content not found")
            merged = ContentItem.model_validate(
                {**current, **updates, "updated_at": datetime.now(timezone.utc)},
            )
            return Mutation(value=merged.model_dump(mode="json"), result=merged)

        item = await self.store.transact(content_key(content_id), merge)
        logger.info("content_updated", content_id=content_id, fields=sorted(updates))
        return item

    async def delete_content(self, content_id: str) -> ContentItem:
        """Remove an item of either kind and drop it from its kind's index."""
        item = await self.get_content(content_id)
        await self.store.delete(content_key(content_id))
        await self._update_index(content_index_key(item.kind), remove=content_id)

        logger.info("content_deleted", content_id=content_id, kind=item.kind.value)
        return item

    async def _update_index(self, index_key: str, add: str | None = None, remove: str | None = None) -> None:
        def edit(current: list[str] | None) -> Mutation[None]:
            ids = [i for i in (current or []) if i != remove]
            if add is not None and add not in ids:
                ids.append(add)
            return Mutation(value=ids, result=None)

        await self.store.transact(index_key, edit)

    # --- Courses & projects ---

    async def list_courses(self) -> list[Course]:
        ids: list[str] = await self.store.get(COURSE_INDEX) or []
        rows = await self.store.mget([course_key(i) for i in ids])
        return [Course.model_validate(row) for row in rows if row is not None]

    async def get_course(self, course_id: str) -> Course:
        row = await self.store.get(course_key(course_id))
        if row is None:
            raise NotFoundError("Course not found")
        return Course.model_validate(row)

    async def list_projects(self) -> list[PracticeProject]:
        ids: list[str] = await self.store.get(PROJECT_INDEX) or []
        rows = await self.store.mget([project_key(i) for i in ids])
        return [PracticeProject.model_validate(row) for row in rows if row is not None]

    async def get_project(self, project_id: str) -> PracticeProject:
        row = await self.store.get(project_key(project_id))
        if row is None:
            raise NotFoundError("Project not found")
        return PracticeProject.model_validate(row)
