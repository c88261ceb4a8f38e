"""Learning report summary and PDF rendering."""

from datetime import UTC, datetime
from uuid import uuid4

import pytest

from web3journey.catalog import get_catalog
from web3journey.progress.store import ProgressStore
from web3journey.reports.pdf import render_learning_report
from web3journey.reports.service import build_learning_report, report_filename
from web3journey.reports.translations import REPORT_LABELS, get_labels
from web3journey.stats.schemas import StatsResponse


GENERATED_AT = datetime(2026, 5, 10, 8, 0, tzinfo=UTC)


@pytest.fixture
async def store(progress_repository) -> ProgressStore:
    store = ProgressStore(progress_repository, uuid4())
    await store.load_all()
    for topic in get_catalog().get_module("ethereum-fundamentals").topics:
        await store.set_topic_status("ethereum-fundamentals", topic.id, "completed")
    await store.set_topic_status("blockchain-basics", "merkle-trees", "completed")
    await store.set_project_status("erc20-token", "completed")
    await store.set_project_status("voting-contract", "in_progress")
    return store


@pytest.fixture
def stats() -> StatsResponse:
    return StatsResponse(current_streak=3, longest_streak=5, achievements=["first_step", "module_master", "retired"])


class TestLabels:
    def test_locales_have_the_same_tables(self) -> None:
        zh, en = REPORT_LABELS["zh"], REPORT_LABELS["en"]
        assert zh.levels.keys() == en.levels.keys()
        assert zh.difficulties.keys() == en.difficulties.keys()
        assert zh.statuses.keys() == en.statuses.keys()

    def test_unknown_locale_falls_back_to_english(self) -> None:
        assert get_labels("fr") is REPORT_LABELS["en"]


class TestSummary:
    @pytest.mark.asyncio
    async def test_overview_numbers(self, store, stats) -> None:
        report = build_learning_report(store, stats, "en", "Ada", GENERATED_AT)

        assert report.total_progress == 9
        assert (report.completed_topics, report.total_topics) == (5, 55)
        assert (report.completed_modules, report.total_modules) == (1, 14)
        assert (report.completed_projects, report.total_projects) == (1, 9)
        assert (report.current_streak, report.longest_streak) == (3, 5)

    @pytest.mark.asyncio
    async def test_rows(self, store, stats) -> None:
        report = build_learning_report(store, stats, "en", "Ada", GENERATED_AT)

        ethereum = next(row for row in report.modules if row.module_id == "ethereum-fundamentals")
        assert (ethereum.name, ethereum.level, ethereum.status) == ("Ethereum Fundamentals", "Foundation", "Completed")
        basics = next(row for row in report.modules if row.module_id == "blockchain-basics")
        assert (basics.completed_topics, basics.total_topics, basics.percentage) == (1, 5, 20)
        assert basics.status == "In Progress"

        voting = next(row for row in report.projects if row.project_id == "voting-contract")
        assert (voting.difficulty, voting.status) == ("Beginner", "In Progress")

        assert [row.name for row in report.achievements] == ["First Step", "Module Master"]

    @pytest.mark.asyncio
    async def test_chinese_labels_and_default_name(self, store) -> None:
        report = build_learning_report(store, None, "zh", generated_at=GENERATED_AT)

        assert report.user_name == "学习者"
        assert report.modules[0].level == "基础层"
        assert report.current_streak == 0
        assert report.achievements == []

    def test_filename(self) -> None:
        assert report_filename(GENERATED_AT) == "web3-learning-report-2026-05-10.pdf"


class TestPdf:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("locale", ["en", "zh"])
    async def test_renders_a_pdf(self, store, stats, locale) -> None:
        report = build_learning_report(store, stats, locale, "Ada", GENERATED_AT)

        content = render_learning_report(report)

        assert content.startswith(b"%PDF")
        assert len(content) > 1000
