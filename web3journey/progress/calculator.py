"""Completion percentages over a set of completed topics.

Every aggregate goes through ``percentage`` so module, level and course
numbers always agree with each other. Only topics that exist in the catalog
are counted; stale rows for removed topics are ignored.
"""

from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal

from web3journey.catalog import Catalog, LearningModule, ModuleLevel


CompletedTopics = Mapping[str, frozenset[str]]


def round_half_up(value: Decimal | float | int) -> int:
    """Round to the nearest integer with halves going up (12.5 -> 13)."""
    return int(Decimal(str(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def percentage(completed: int, total: int) -> int:
    """Integer percentage of ``completed`` over ``total``; 0 when total is 0."""
    if total <= 0:
        return 0
    return round_half_up(Decimal(100 * completed) / Decimal(total))


def completed_topics_by_module(catalog: Catalog, pairs: Iterable[tuple[str, str]]) -> dict[str, frozenset[str]]:
    """Group completed (module_id, topic_id) pairs, keeping catalog topics only."""
    grouped: dict[str, set[str]] = {}
    for module_id, topic_id in pairs:
        if catalog.has_topic(module_id, topic_id):
            grouped.setdefault(module_id, set()).add(topic_id)
    return {module_id: frozenset(topics) for module_id, topics in grouped.items()}


def _completed_in(module: LearningModule, completed: CompletedTopics) -> int:
    return len(completed.get(module.id, frozenset()) & module.topic_ids)


def module_percentage(catalog: Catalog, completed: CompletedTopics, module_id: str) -> int:
    module = catalog.get_module(module_id)
    if module is None:
        return 0
    return percentage(_completed_in(module, completed), len(module.topics))


def level_percentage(catalog: Catalog, completed: CompletedTopics, level: ModuleLevel | str) -> int:
    modules = catalog.modules_by_level(level)
    done = sum(_completed_in(m, completed) for m in modules)
    return percentage(done, catalog.total_topics_in(modules))


def course_percentage(catalog: Catalog, completed: CompletedTopics) -> int:
    done = sum(_completed_in(m, completed) for m in catalog.modules)
    return percentage(done, catalog.total_topics)


def total_completed(catalog: Catalog, completed: CompletedTopics) -> int:
    return sum(_completed_in(m, completed) for m in catalog.modules)


def is_module_completed(catalog: Catalog, completed: CompletedTopics, module_id: str) -> bool:
    """A module is complete when it has topics and all of them are done."""
    module = catalog.get_module(module_id)
    if module is None or not module.topics:
        return False
    return _completed_in(module, completed) == len(module.topics)


def completed_module_ids(catalog: Catalog, completed: CompletedTopics) -> list[str]:
    """Fully completed modules, in catalog order."""
    return [m.id for m in catalog.modules if is_module_completed(catalog, completed, m.id)]
