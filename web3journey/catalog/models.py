"""Static catalog types: modules, topics, projects and achievements."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ModuleLevel(str, Enum):
    FOUNDATION = "foundation"
    DEVELOPMENT = "development"
    ADVANCED = "advanced"
    EXPERT = "expert"


class ProjectDifficulty(str, Enum):
    BEGINNER = "beginner"
    ELEMENTARY = "elementary"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class AchievementId(str, Enum):
    FIRST_STEP = "first_step"
    MODULE_MASTER = "module_master"
    STREAK_7 = "streak_7"
    STREAK_30 = "streak_30"
    HALF_WAY = "half_way"
    FULL_STACK = "full_stack"
    SECURITY_EXPERT = "security_expert"
    DEFI_EXPLORER = "defi_explorer"
    NFT_CREATOR = "nft_creator"
    ZK_PIONEER = "zk_pioneer"
    COMPLETIONIST = "completionist"


ResourceType = Literal["doc", "video", "article", "github"]


class CatalogModel(BaseModel):
    """Catalog entries are reference data and never change during a session."""

    model_config = ConfigDict(frozen=True)


class Resource(CatalogModel):
    type: ResourceType
    title: str
    url: str


class Topic(CatalogModel):
    id: str
    title_key: str
    description_key: str | None = None
    resources: tuple[Resource, ...] = ()


class LearningModule(CatalogModel):
    id: str
    title_key: str
    description_key: str
    level: ModuleLevel
    hours: int
    topics: tuple[Topic, ...]
    icon: str
    color: str
    prerequisites: tuple[str, ...] = ()

    @property
    def topic_ids(self) -> frozenset[str]:
        return frozenset(topic.id for topic in self.topics)


class ProjectStep(CatalogModel):
    title_key: str
    description_key: str


class Project(CatalogModel):
    id: str
    title_key: str
    description_key: str
    difficulty: ProjectDifficulty
    skills: tuple[str, ...] = ()
    estimated_hours: int
    github_url: str | None = None
    demo_url: str | None = None
    prerequisites: tuple[str, ...] = ()
    steps: tuple[ProjectStep, ...] = ()
    resources: tuple[Resource, ...] = ()


class ModuleDetail(BaseModel):
    module: LearningModule
    dependencies: list[str]


class ProjectDetail(BaseModel):
    project: Project
    stars: int


class Achievement(CatalogModel):
    id: AchievementId
    title_key: str
    description_key: str
    icon: str
    color: str
    condition: str = Field(..., description="Named unlock condition")
