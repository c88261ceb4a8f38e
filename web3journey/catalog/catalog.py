"""Catalog lookups over the static module/project data."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from functools import lru_cache

from .models import LearningModule, ModuleLevel, Project, ProjectDifficulty
from .modules import LEARNING_MODULES
from .projects import PROJECTS


@dataclass(frozen=True)
class Catalog:
    """Read-only view of the curriculum.

    Engine components take a Catalog instead of reaching for module globals so
    tests can run them against a small hand-built curriculum.
    """

    modules: tuple[LearningModule, ...]
    projects: tuple[Project, ...] = ()
    _modules_by_id: dict[str, LearningModule] = field(init=False, repr=False, compare=False)
    _projects_by_id: dict[str, Project] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_modules_by_id", {m.id: m for m in self.modules})
        object.__setattr__(self, "_projects_by_id", {p.id: p for p in self.projects})

    def get_module(self, module_id: str) -> LearningModule | None:
        return self._modules_by_id.get(module_id)

    def get_project(self, project_id: str) -> Project | None:
        return self._projects_by_id.get(project_id)

    def has_topic(self, module_id: str, topic_id: str) -> bool:
        module = self.get_module(module_id)
        return module is not None and topic_id in module.topic_ids

    def modules_by_level(self, level: ModuleLevel | str) -> list[LearningModule]:
        level = ModuleLevel(level)
        return [m for m in self.modules if m.level == level]

    def projects_by_difficulty(self, difficulty: ProjectDifficulty | str) -> list[Project]:
        difficulty = ProjectDifficulty(difficulty)
        return [p for p in self.projects if p.difficulty == difficulty]

    def module_dependencies(self, module_id: str) -> list[LearningModule]:
        """Prerequisite modules that exist in this catalog."""
        module = self.get_module(module_id)
        if module is None:
            return []
        return [dep for dep in (self.get_module(m) for m in module.prerequisites) if dep is not None]

    @property
    def total_topics(self) -> int:
        return sum(len(m.topics) for m in self.modules)

    @property
    def total_hours(self) -> int:
        return sum(m.hours for m in self.modules)

    def total_topics_in(self, modules: Iterable[LearningModule]) -> int:
        return sum(len(m.topics) for m in modules)


@lru_cache
def get_catalog() -> Catalog:
    """Default catalog built from the shipped curriculum."""
    return Catalog(modules=LEARNING_MODULES, projects=PROJECTS)
