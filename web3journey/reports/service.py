"""Assemble the learning report from progress and stats."""

import re
from datetime import UTC, datetime

from web3journey.catalog import get_achievement_by_id
from web3journey.i18n import Locale, humanize_id
from web3journey.progress.schemas import ProgressStatus
from web3journey.progress.store import ProgressStore
from web3journey.stats.schemas import StatsResponse

from .schemas import AchievementRow, LearningReport, ModuleRow, ProjectRow
from .translations import get_labels, lookup


def _title_from_key(title_key: str) -> str:
    """``achievements.firstStep.title`` -> ``First Step``."""
    parts = title_key.split(".")
    name = parts[-2] if len(parts) > 1 else parts[0]
    return re.sub(r"([A-Z]|\d+)", r" \1", name).strip().title()


def _module_status(percentage: int) -> str:
    if percentage == 100:
        return ProgressStatus.COMPLETED.value
    if percentage > 0:
        return ProgressStatus.IN_PROGRESS.value
    return ProgressStatus.NOT_STARTED.value


def achievement_rows(achievement_ids: list[str]) -> list[AchievementRow]:
    """Rows for the unlocked achievements; unknown ids are skipped."""
    rows = []
    for achievement_id in achievement_ids:
        achievement = get_achievement_by_id(achievement_id)
        if achievement is None:
            continue
        rows.append(
            AchievementRow(
                achievement_id=achievement.id.value,
                icon=achievement.icon,
                name=_title_from_key(achievement.title_key),
                description=achievement.condition.replace("_", " ").capitalize(),
            )
        )
    return rows


def build_learning_report(
    store: ProgressStore,
    stats: StatsResponse | None,
    locale: Locale,
    user_name: str | None = None,
    generated_at: datetime | None = None,
) -> LearningReport:
    labels = get_labels(locale)
    catalog = store.catalog

    modules = []
    for module in catalog.modules:
        done = sum(
            1 for topic in module.topics if store.get_topic_status(module.id, topic.id) == ProgressStatus.COMPLETED
        )
        module_percentage = store.module_completion_percentage(module.id)
        modules.append(
            ModuleRow(
                module_id=module.id,
                name=humanize_id(module.id),
                level=lookup(labels.levels, module.level.value),
                completed_topics=done,
                total_topics=len(module.topics),
                percentage=module_percentage,
                status=lookup(labels.statuses, _module_status(module_percentage)),
            )
        )

    projects = [
        ProjectRow(
            project_id=project.id,
            name=humanize_id(project.id),
            difficulty=lookup(labels.difficulties, project.difficulty.value),
            status=lookup(labels.statuses, store.get_project_status(project.id).value),
        )
        for project in catalog.projects
    ]

    stats = stats or StatsResponse()
    return LearningReport(
        locale=locale,
        user_name=user_name or labels.default_user_name,
        generated_at=generated_at or datetime.now(UTC),
        total_progress=store.course_completion_percentage(),
        completed_topics=store.total_completed_topics(),
        total_topics=catalog.total_topics,
        completed_modules=len(store.completed_module_ids()),
        total_modules=len(catalog.modules),
        completed_projects=len(store.completed_project_ids()),
        total_projects=len(catalog.projects),
        current_streak=stats.current_streak,
        longest_streak=stats.longest_streak,
        modules=modules,
        projects=projects,
        achievements=achievement_rows(stats.achievements),
    )


def report_filename(generated_at: datetime) -> str:
    return f"web3-learning-report-{generated_at.date().isoformat()}.pdf"
