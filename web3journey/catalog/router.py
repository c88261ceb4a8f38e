"""Catalog API endpoints (public, no auth required)."""

from fastapi import APIRouter

from web3journey.exceptions import ResourceNotFoundError

from .achievements import ACHIEVEMENTS
from .catalog import get_catalog
from .models import (
    Achievement,
    LearningModule,
    ModuleDetail,
    ModuleLevel,
    Project,
    ProjectDetail,
    ProjectDifficulty,
)
from .projects import DIFFICULTY_STARS


router = APIRouter(prefix="/api/v1/catalog", tags=["catalog"])


@router.get("/modules")
async def list_modules(level: ModuleLevel | None = None) -> list[LearningModule]:
    """List learning modules, optionally filtered by level."""
    catalog = get_catalog()
    if level is None:
        return list(catalog.modules)
    return catalog.modules_by_level(level)


@router.get("/modules/{module_id}")
async def get_module(module_id: str) -> ModuleDetail:
    """Get a module with its resolved prerequisite modules."""
    catalog = get_catalog()
    module = catalog.get_module(module_id)
    if module is None:
        raise ResourceNotFoundError("Module", module_id)
    return ModuleDetail(
        module=module,
        dependencies=[dep.id for dep in catalog.module_dependencies(module_id)],
    )


@router.get("/projects")
async def list_projects(difficulty: ProjectDifficulty | None = None) -> list[Project]:
    """List projects, optionally filtered by difficulty."""
    catalog = get_catalog()
    if difficulty is None:
        return list(catalog.projects)
    return catalog.projects_by_difficulty(difficulty)


@router.get("/projects/{project_id}")
async def get_project(project_id: str) -> ProjectDetail:
    """Get a single project with its difficulty star rating."""
    project = get_catalog().get_project(project_id)
    if project is None:
        raise ResourceNotFoundError("Project", project_id)
    return ProjectDetail(project=project, stars=DIFFICULTY_STARS[project.difficulty])


@router.get("/achievements")
async def list_achievements() -> list[Achievement]:
    """List every achievement definition."""
    return list(ACHIEVEMENTS)
