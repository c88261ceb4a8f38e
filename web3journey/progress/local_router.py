"""Endpoints for the no-account progress cache kept on this machine."""

from fastapi import APIRouter, status

from web3journey.catalog import get_achievement_by_id, get_catalog
from web3journey.exceptions import ResourceNotFoundError

from .dependencies import CurrentLocalCache
from .local_cache import LocalProgressCache, Skill
from .schemas import (
    LearningRecordCreate,
    LocalModuleStatusUpdate,
    LocalProgressSummary,
    ProjectStatusUpdate,
    SkillUpdate,
    TopicStatusUpdate,
)


router = APIRouter(prefix="/api/v1/local-progress", tags=["local-progress"])


def _summary(cache: LocalProgressCache) -> LocalProgressSummary:
    return LocalProgressSummary(
        state=cache.state.model_dump(mode="json"),
        course_percentage=cache.course_completion_percentage(),
        overall_progress=cache.overall_progress(),
        module_percentages={m.id: cache.module_completion_percentage(m.id) for m in cache.catalog.modules},
        completed_module_ids=cache.completed_module_ids(),
        learning_time=cache.learning_time,
    )


def _require_module(module_id: str) -> None:
    if get_catalog().get_module(module_id) is None:
        raise ResourceNotFoundError("Module", module_id)


@router.get("")
async def get_local_progress(cache: CurrentLocalCache) -> LocalProgressSummary:
    return _summary(cache)


@router.put("/modules/{module_id}")
async def update_module_status(
    module_id: str, update: LocalModuleStatusUpdate, cache: CurrentLocalCache
) -> LocalProgressSummary:
    _require_module(module_id)
    await cache.update_module_status(module_id, update.status)
    return _summary(cache)


@router.put("/modules/{module_id}/topics/{topic_id}")
async def set_topic_status(
    module_id: str, topic_id: str, update: TopicStatusUpdate, cache: CurrentLocalCache
) -> LocalProgressSummary:
    if not get_catalog().has_topic(module_id, topic_id):
        raise ResourceNotFoundError("Topic", f"{module_id}/{topic_id}")
    await cache.set_topic_status(module_id, topic_id, update.status)
    return _summary(cache)


@router.put("/projects/{project_id}")
async def update_project_status(
    project_id: str, update: ProjectStatusUpdate, cache: CurrentLocalCache
) -> LocalProgressSummary:
    if get_catalog().get_project(project_id) is None:
        raise ResourceNotFoundError("Project", project_id)
    await cache.update_project_status(project_id, update.status)
    return _summary(cache)


@router.post("/records", status_code=status.HTTP_201_CREATED)
async def add_learning_record(record: LearningRecordCreate, cache: CurrentLocalCache) -> LocalProgressSummary:
    _require_module(record.module_id)
    await cache.add_learning_record(record.module_id, record.duration)
    return _summary(cache)


@router.put("/skills/{skill}")
async def update_skill(skill: Skill, update: SkillUpdate, cache: CurrentLocalCache) -> LocalProgressSummary:
    await cache.update_skill(skill, update.value)
    return _summary(cache)


@router.post("/achievements/{achievement_id}")
async def unlock_achievement(achievement_id: str, cache: CurrentLocalCache) -> LocalProgressSummary:
    if get_achievement_by_id(achievement_id) is None:
        raise ResourceNotFoundError("Achievement", achievement_id)
    await cache.unlock_achievement(achievement_id)
    return _summary(cache)


@router.delete("")
async def reset_local_progress(cache: CurrentLocalCache) -> LocalProgressSummary:
    """Start over: clears every part of the cache in one write."""
    await cache.reset_progress()
    return _summary(cache)
