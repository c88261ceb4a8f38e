"""Progress API endpoints."""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from uuid import UUID

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from web3journey.auth import UserId
from web3journey.catalog import get_catalog
from web3journey.exceptions import ResourceNotFoundError

from .dependencies import CurrentProgressStore
from .realtime import change_feed
from .schemas import (
    ModuleProgressResponse,
    ProgressSnapshot,
    ProjectStatusResponse,
    ProjectStatusUpdate,
    TopicStatusResponse,
    TopicStatusUpdate,
)
from .store import PROGRESS_TABLES


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/progress", tags=["progress"])

KEEPALIVE_SECONDS = 15.0


@router.get("")
async def get_progress(store: CurrentProgressStore) -> ProgressSnapshot:
    """All of the user's progress with course, level and module percentages."""
    return store.snapshot()


@router.get("/modules/{module_id}")
async def get_module_progress(module_id: str, store: CurrentProgressStore) -> ModuleProgressResponse:
    """Per-topic statuses and completion percentage of one module."""
    module = get_catalog().get_module(module_id)
    if module is None:
        raise ResourceNotFoundError("Module", module_id)

    topics = {topic.id: store.get_topic_status(module_id, topic.id) for topic in module.topics}
    return ModuleProgressResponse(
        module_id=module_id,
        percentage=store.module_completion_percentage(module_id),
        completed=module_id in store.completed_module_ids(),
        topics=topics,
    )


@router.put("/modules/{module_id}/topics/{topic_id}")
async def set_topic_status(
    module_id: str,
    topic_id: str,
    update: TopicStatusUpdate,
    store: CurrentProgressStore,
) -> TopicStatusResponse:
    """Set a topic status. The new status is returned even if the remote write failed."""
    if not get_catalog().has_topic(module_id, topic_id):
        raise ResourceNotFoundError("Topic", f"{module_id}/{topic_id}")

    sync = await store.set_topic_status(module_id, topic_id, update.status, update.notes)
    return TopicStatusResponse(
        module_id=module_id,
        topic_id=topic_id,
        status=store.get_topic_status(module_id, topic_id),
        module_percentage=store.module_completion_percentage(module_id),
        sync=sync,
    )


@router.put("/projects/{project_id}")
async def set_project_status(
    project_id: str,
    update: ProjectStatusUpdate,
    store: CurrentProgressStore,
) -> ProjectStatusResponse:
    """Set a project status, optionally attaching repository and demo links."""
    if get_catalog().get_project(project_id) is None:
        raise ResourceNotFoundError("Project", project_id)

    sync = await store.set_project_status(
        project_id,
        update.status,
        github_url=update.github_url,
        demo_url=update.demo_url,
        notes=update.notes,
    )
    return ProjectStatusResponse(project_id=project_id, status=store.get_project_status(project_id), sync=sync)


async def _change_events(request: Request, user_id: UUID) -> AsyncGenerator[str, None]:
    """SSE frames for every committed change to the user's progress rows."""
    async with change_feed.listen(user_id, PROGRESS_TABLES) as queue:
        yield f"data: {json.dumps({'type': 'subscribed', 'tables': list(PROGRESS_TABLES)})}\n\n"
        while not await request.is_disconnected():
            try:
                event = await asyncio.wait_for(queue.get(), timeout=KEEPALIVE_SECONDS)
            except TimeoutError:
                yield ": keepalive\n\n"
                continue
            yield f"data: {json.dumps({'type': 'change', **event.to_payload()})}\n\n"


@router.get("/events")
async def progress_events(request: Request, user_id: UserId) -> StreamingResponse:
    """Stream change notifications so other tabs know to reload."""
    return StreamingResponse(
        _change_events(request, user_id),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        },
    )

