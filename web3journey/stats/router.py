"""Stats and achievements API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from web3journey.auth import OptionalUserId
from web3journey.database.session import async_session_maker
from web3journey.progress.dependencies import CurrentProgressStore
from web3journey.progress.realtime import change_feed

from .repository import SqlStatsRepository
from .schemas import (
    AchievementCheckResponse,
    AchievementListResponse,
    ActivityResponse,
    LearningMinutesRequest,
    StatsResponse,
)
from .service import StatsService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/stats", tags=["stats"])

repository = SqlStatsRepository(async_session_maker, change_feed)


async def get_stats_service(user_id: OptionalUserId) -> StatsService:
    service = StatsService(repository, user_id)
    await service.load()
    return service


CurrentStats = Annotated[StatsService, Depends(get_stats_service)]


@router.get("")
async def get_stats(service: CurrentStats) -> StatsResponse:
    """Streak, study time and unlocked achievement ids."""
    return service.to_response()


@router.post("/activity")
async def record_activity(service: CurrentStats) -> ActivityResponse:
    """Count today towards the learning streak (at most once per day)."""
    updated = await service.record_activity()
    return ActivityResponse(updated=updated, stats=service.to_response())


@router.post("/minutes")
async def add_learning_minutes(body: LearningMinutesRequest, service: CurrentStats) -> StatsResponse:
    await service.add_learning_minutes(body.minutes)
    return service.to_response()


@router.post("/achievements/check")
async def check_achievements(service: CurrentStats, progress: CurrentProgressStore) -> AchievementCheckResponse:
    """Unlock every achievement the current progress qualifies for."""
    new_ids = await service.check_and_unlock_achievements(progress)
    return AchievementCheckResponse(new_achievements=new_ids, achievements=service.achievements)


@router.get("/achievements")
async def list_achievements(service: CurrentStats) -> AchievementListResponse:
    return AchievementListResponse(unlocked=service.unlocked_achievements(), locked=service.locked_achievements())
