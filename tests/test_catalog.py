"""Curriculum data and locale helpers."""

from web3journey.catalog import ACHIEVEMENTS, get_achievement_by_id, get_catalog
from web3journey.i18n import humanize_id, localized, resolve_locale


class TestCatalog:
    def test_curriculum_size(self) -> None:
        catalog = get_catalog()
        assert len(catalog.modules) == 14
        assert catalog.total_topics == 55
        assert len(catalog.projects) == 9
        assert len(ACHIEVEMENTS) == 11

    def test_ids_are_unique(self) -> None:
        catalog = get_catalog()
        assert len({m.id for m in catalog.modules}) == len(catalog.modules)
        assert len({p.id for p in catalog.projects}) == len(catalog.projects)
        for module in catalog.modules:
            assert len(module.topic_ids) == len(module.topics)

    def test_prerequisites_resolve(self) -> None:
        catalog = get_catalog()
        assert [m.id for m in catalog.module_dependencies("ethereum-fundamentals")] == ["blockchain-basics"]
        assert catalog.module_dependencies("missing") == []

    def test_translation_keys(self) -> None:
        catalog = get_catalog()
        assert catalog.get_module("blockchain-basics").title_key == "modules.blockchainBasics.title"
        assert catalog.get_project("erc20-token").title_key == "projects.list.erc20.title"
        assert get_achievement_by_id("half_way").title_key == "achievements.halfWay.title"
        assert get_achievement_by_id("nope") is None


class TestLocale:
    def test_resolve_locale(self) -> None:
        assert resolve_locale("zh-CN") == "zh"
        assert resolve_locale("EN") == "en"
        assert resolve_locale("fr") == "en"

    def test_localized_falls_back(self) -> None:
        assert localized({"zh": "你好", "en": "Hello"}, "zh") == "你好"
        assert localized({"en": "Hello"}, "zh") == "Hello"
        assert localized({}, "zh", default="?") == "?"

    def test_humanize_id(self) -> None:
        assert humanize_id("defi-development") == "Defi Development"
        assert humanize_id("first_step") == "First Step"
