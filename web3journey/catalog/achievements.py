"""Achievement badge definitions."""

from collections.abc import Iterable

from .models import Achievement, AchievementId


def _achievement(achievement_id: AchievementId, key: str, icon: str, color: str, condition: str) -> Achievement:
    return Achievement(
        id=achievement_id,
        title_key=f"achievements.{key}.title",
        description_key=f"achievements.{key}.description",
        icon=icon,
        color=color,
        condition=condition,
    )


ACHIEVEMENTS: tuple[Achievement, ...] = (
    _achievement(AchievementId.FIRST_STEP, "firstStep", "🎯", "from-green-400 to-emerald-500", "complete_first_topic"),
    _achievement(
        AchievementId.MODULE_MASTER, "moduleMaster", "📚", "from-blue-400 to-indigo-500", "complete_first_module"
    ),
    _achievement(AchievementId.STREAK_7, "streak7", "🔥", "from-orange-400 to-red-500", "streak_7_days"),
    _achievement(AchievementId.STREAK_30, "streak30", "💪", "from-purple-400 to-pink-500", "streak_30_days"),
    _achievement(AchievementId.HALF_WAY, "halfWay", "🌟", "from-yellow-400 to-orange-500", "complete_50_percent"),
    _achievement(AchievementId.FULL_STACK, "fullStack", "🚀", "from-cyan-400 to-blue-500", "complete_first_project"),
    _achievement(
        AchievementId.SECURITY_EXPERT, "securityExpert", "🛡️", "from-red-400 to-rose-500", "complete_security_module"
    ),
    _achievement(
        AchievementId.DEFI_EXPLORER, "defiExplorer", "💰", "from-emerald-400 to-teal-500", "complete_defi_module"
    ),
    _achievement(AchievementId.NFT_CREATOR, "nftCreator", "🎨", "from-pink-400 to-purple-500", "complete_nft_module"),
    _achievement(AchievementId.ZK_PIONEER, "zkPioneer", "🔐", "from-indigo-400 to-violet-500", "complete_zk_module"),
    _achievement(
        AchievementId.COMPLETIONIST, "completionist", "👑", "from-amber-400 to-yellow-500", "complete_all_topics"
    ),
)


def get_achievement_by_id(achievement_id: str) -> Achievement | None:
    return next((a for a in ACHIEVEMENTS if a.id.value == achievement_id), None)


def get_unlocked_achievements(achievement_ids: Iterable[str]) -> list[Achievement]:
    unlocked = set(achievement_ids)
    return [a for a in ACHIEVEMENTS if a.id.value in unlocked]


def get_locked_achievements(achievement_ids: Iterable[str]) -> list[Achievement]:
    unlocked = set(achievement_ids)
    return [a for a in ACHIEVEMENTS if a.id.value not in unlocked]
