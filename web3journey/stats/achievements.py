"""Achievement unlock rules.

``evaluate_achievements`` is a pure function: it only reports which ids newly
qualify. Persisting them is the stats service's job.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from web3journey.catalog import ACHIEVEMENTS, AchievementId
from web3journey.progress.store import ProgressStore


@dataclass(frozen=True)
class AchievementInputs:
    completed_topics: int
    total_topics: int
    completed_module_ids: frozenset[str]
    completed_project_ids: frozenset[str]
    current_streak: int

    @classmethod
    def from_progress(cls, store: ProgressStore, current_streak: int) -> "AchievementInputs":
        return cls(
            completed_topics=store.total_completed_topics(),
            total_topics=store.catalog.total_topics,
            completed_module_ids=frozenset(store.completed_module_ids()),
            completed_project_ids=frozenset(store.completed_project_ids()),
            current_streak=current_streak,
        )


Rule = Callable[[AchievementInputs], bool]


def _module_done(module_id: str) -> Rule:
    return lambda inputs: module_id in inputs.completed_module_ids


RULES: dict[AchievementId, Rule] = {
    AchievementId.FIRST_STEP: lambda i: i.completed_topics >= 1,
    AchievementId.MODULE_MASTER: lambda i: len(i.completed_module_ids) >= 1,
    AchievementId.STREAK_7: lambda i: i.current_streak >= 7,
    AchievementId.STREAK_30: lambda i: i.current_streak >= 30,
    # Integer form of completed >= total / 2
    AchievementId.HALF_WAY: lambda i: i.total_topics > 0 and i.completed_topics * 2 >= i.total_topics,
    AchievementId.FULL_STACK: lambda i: len(i.completed_project_ids) >= 1,
    AchievementId.SECURITY_EXPERT: _module_done("contract-security"),
    AchievementId.DEFI_EXPLORER: _module_done("defi-development"),
    AchievementId.NFT_CREATOR: _module_done("nft-development"),
    AchievementId.ZK_PIONEER: _module_done("zk-applications"),
    AchievementId.COMPLETIONIST: lambda i: i.total_topics > 0 and i.completed_topics >= i.total_topics,
}


def evaluate_achievements(inputs: AchievementInputs, unlocked: Iterable[str]) -> list[str]:
    """Ids that qualify now and are not unlocked yet, in catalog order."""
    already = set(unlocked)
    return [
        achievement.id.value
        for achievement in ACHIEVEMENTS
        if achievement.id.value not in already and RULES[achievement.id](inputs)
    ]
