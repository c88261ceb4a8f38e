"""Labels used by the learning report."""

from pydantic import BaseModel, ConfigDict

from web3journey.i18n import FALLBACK_LOCALE, Locale


class ReportLabels(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    subtitle: str
    generated_at: str
    overview: str
    total_progress: str
    completed_modules: str
    completed_topics: str
    completed_projects: str
    current_streak: str
    longest_streak: str
    days: str
    module_progress: str
    module: str
    level: str
    progress: str
    status: str
    project_progress: str
    project: str
    difficulty: str
    achievements: str
    achievement_name: str
    achievement_description: str
    levels: dict[str, str]
    difficulties: dict[str, str]
    statuses: dict[str, str]
    footer: str
    no_data: str
    default_user_name: str


REPORT_LABELS: dict[Locale, ReportLabels] = {
    "zh": ReportLabels(
        title="Web3 学习报告",
        subtitle="学习进度与成就总结",
        generated_at="生成时间",
        overview="学习概览",
        total_progress="总体进度",
        completed_modules="完成模块",
        completed_topics="完成知识点",
        completed_projects="完成项目",
        current_streak="连续学习",
        longest_streak="最长连续",
        days="天",
        module_progress="模块进度详情",
        module="模块",
        level="等级",
        progress="进度",
        status="状态",
        project_progress="项目完成情况",
        project="项目",
        difficulty="难度",
        achievements="获得成就",
        achievement_name="成就名称",
        achievement_description="描述",
        levels={"foundation": "基础层", "development": "开发层", "advanced": "进阶层", "expert": "专家层"},
        difficulties={
            "beginner": "入门",
            "elementary": "初级",
            "intermediate": "中级",
            "advanced": "高级",
            "expert": "专家",
        },
        statuses={"not_started": "未开始", "in_progress": "进行中", "completed": "已完成"},
        footer="Web3 学习之路 - 系统化的 Web3 学习路径",
        no_data="暂无数据",
        default_user_name="学习者",
    ),
    "en": ReportLabels(
        title="Web3 Learning Report",
        subtitle="Progress & Achievement Summary",
        generated_at="Generated at",
        overview="Learning Overview",
        total_progress="Total Progress",
        completed_modules="Completed Modules",
        completed_topics="Completed Topics",
        completed_projects="Completed Projects",
        current_streak="Current Streak",
        longest_streak="Longest Streak",
        days="days",
        module_progress="Module Progress Details",
        module="Module",
        level="Level",
        progress="Progress",
        status="Status",
        project_progress="Project Completion",
        project="Project",
        difficulty="Difficulty",
        achievements="Achievements Earned",
        achievement_name="Achievement",
        achievement_description="Description",
        levels={"foundation": "Foundation", "development": "Development", "advanced": "Advanced", "expert": "Expert"},
        difficulties={
            "beginner": "Beginner",
            "elementary": "Elementary",
            "intermediate": "Intermediate",
            "advanced": "Advanced",
            "expert": "Expert",
        },
        statuses={"not_started": "Not Started", "in_progress": "In Progress", "completed": "Completed"},
        footer="Web3 Learning Journey - Systematic Web3 Learning Path",
        no_data="No data",
        default_user_name="Learner",
    ),
}


def get_labels(locale: str) -> ReportLabels:
    """Labels for ``locale``, falling back to English for anything unknown."""
    return REPORT_LABELS.get(locale) or REPORT_LABELS[FALLBACK_LOCALE]  # type: ignore[call-overload]


def lookup(table: dict[str, str], key: str) -> str:
    """Entry from one of the label tables; unknown keys render as themselves."""
    return table.get(key, key)
