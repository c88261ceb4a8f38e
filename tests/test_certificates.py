"""Certificate eligibility, metadata and simulated minting."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from web3journey.catalog import get_catalog
from web3journey.certificates.chain import CertificateType, get_chain, list_owned_tokens
from web3journey.certificates.schemas import MintRequest
from web3journey.certificates.service import (
    COURSE_REFERENCE_ID,
    CertificateMinter,
    build_certificates,
    build_metadata,
    certificate_stats,
    filter_certificates,
)
from web3journey.exceptions import ResourceNotFoundError, ValidationError
from web3journey.progress.store import ProgressStore


ADDRESS = "0x" + "ab" * 20


@pytest.fixture
async def store(progress_repository) -> ProgressStore:
    store = ProgressStore(progress_repository, uuid4())
    await store.load_all()
    return store


async def _complete_module(store: ProgressStore, module_id: str) -> None:
    for topic in get_catalog().get_module(module_id).topics:
        await store.set_topic_status(module_id, topic.id, "completed")


def _find(certificates, certificate_type, reference_id):
    return next(c for c in certificates if c.type == certificate_type and c.reference_id == reference_id)


class TestEligibility:
    @pytest.mark.asyncio
    async def test_one_certificate_per_module_level_project_and_course(self, store) -> None:
        catalog = get_catalog()
        certificates = build_certificates(store, "en")

        assert len(certificates) == len(catalog.modules) + 4 + len(catalog.projects) + 1
        assert certificate_stats(certificates).eligible == 0

    @pytest.mark.asyncio
    async def test_completed_module_is_eligible(self, store) -> None:
        await _complete_module(store, "ethereum-fundamentals")
        await store.set_topic_status("blockchain-basics", "merkle-trees", "completed")

        certificates = build_certificates(store, "en")

        module = _find(certificates, CertificateType.MODULE_COMPLETION, "ethereum-fundamentals")
        assert module.eligible
        assert module.completion_percentage == 100
        partial = _find(certificates, CertificateType.MODULE_COMPLETION, "blockchain-basics")
        assert not partial.eligible
        assert partial.completion_percentage == 20
        level = _find(certificates, CertificateType.LEVEL_COMPLETION, "foundation")
        assert not level.eligible

    @pytest.mark.asyncio
    async def test_level_needs_every_module(self, store) -> None:
        for module in get_catalog().modules_by_level("foundation"):
            await _complete_module(store, module.id)

        certificates = build_certificates(store, "zh")

        level = _find(certificates, CertificateType.LEVEL_COMPLETION, "foundation")
        assert level.eligible
        assert level.title == "基础入门阶段"
        assert not _find(certificates, CertificateType.COURSE_COMPLETION, COURSE_REFERENCE_ID).eligible

    @pytest.mark.asyncio
    async def test_project_percentages(self, store) -> None:
        await store.set_project_status("erc20-token", "completed")
        await store.set_project_status("voting-contract", "in_progress")

        certificates = build_certificates(store, "en")

        assert _find(certificates, CertificateType.PROJECT_COMPLETION, "erc20-token").completion_percentage == 100
        voting = _find(certificates, CertificateType.PROJECT_COMPLETION, "voting-contract")
        assert voting.completion_percentage == 50
        assert not voting.eligible

    @pytest.mark.asyncio
    async def test_filters_and_minted_flags(self, store) -> None:
        await store.set_project_status("erc20-token", "completed")
        await _complete_module(store, "web3-ecosystem")
        minted = [(CertificateType.PROJECT_COMPLETION, "erc20-token")]

        certificates = build_certificates(store, "en", minted=minted)

        assert [c.reference_id for c in filter_certificates(certificates, "minted")] == ["erc20-token"]
        assert [c.reference_id for c in filter_certificates(certificates, "eligible")] == ["web3-ecosystem"]
        assert len(filter_certificates(certificates, "all")) == len(certificates)
        stats = certificate_stats(certificates)
        assert (stats.eligible, stats.minted) == (1, 1)


class TestMetadata:
    @pytest.mark.asyncio
    async def test_metadata_fields(self, store) -> None:
        await _complete_module(store, "ethereum-fundamentals")
        certificate = _find(build_certificates(store, "en"), CertificateType.MODULE_COMPLETION, "ethereum-fundamentals")

        metadata = build_metadata(certificate, "Ada", ADDRESS, "en", issued_at=datetime(2026, 5, 10, tzinfo=UTC))

        assert metadata.name == "Module Completion: Ethereum Fundamentals"
        assert metadata.module_id == "ethereum-fundamentals"
        assert metadata.project_id is None
        assert metadata.completion_percentage == 100
        assert {"trait_type": "Issued", "value": "2026-05-10"} in [a.model_dump() for a in metadata.attributes]


class TestMinting:
    @pytest.mark.asyncio
    async def test_mint_eligible_certificate(self, store) -> None:
        await store.set_project_status("erc20-token", "completed")
        sleep = AsyncMock()
        minter = CertificateMinter(chain_id=11155111, delay_seconds=2.0, sleep=sleep)

        result = await minter.mint(
            store,
            MintRequest(type=CertificateType.PROJECT_COMPLETION, reference_id="erc20-token", recipient_address=ADDRESS),
            "en",
        )

        sleep.assert_awaited_once_with(2.0)
        assert result.simulated
        assert result.transaction_hash.startswith("0x")
        assert len(result.transaction_hash) == 66
        assert result.metadata.project_id == "erc20-token"
        assert result.metadata.recipient_name == "Learner"

    @pytest.mark.asyncio
    async def test_mint_rejects_ineligible(self, store) -> None:
        minter = CertificateMinter(sleep=AsyncMock())
        request = MintRequest(
            type=CertificateType.COURSE_COMPLETION, reference_id="full-course", recipient_address=ADDRESS
        )

        with pytest.raises(ValidationError):
            await minter.mint(store, request, "en")

    @pytest.mark.asyncio
    async def test_mint_unknown_reference(self, store) -> None:
        minter = CertificateMinter(sleep=AsyncMock())
        request = MintRequest(
            type=CertificateType.MODULE_COMPLETION, reference_id="underwater-basket", recipient_address=ADDRESS
        )

        with pytest.raises(ResourceNotFoundError):
            await minter.mint(store, request, "en")

    def test_recipient_address_format(self) -> None:
        with pytest.raises(ValueError):
            MintRequest(type=CertificateType.MODULE_COMPLETION, reference_id="evm", recipient_address="0x1234")


class FakeReader:
    def __init__(self, owner: str, token_ids: list[int]) -> None:
        self.owner = owner
        self.token_ids = token_ids

    async def balance_of(self, owner: str) -> int:
        return len(self.token_ids) if owner == self.owner else 0

    async def token_of_owner_by_index(self, owner: str, index: int) -> int:
        return self.token_ids[index]

    async def token_uri(self, token_id: int) -> str:
        return f"ipfs://certificates/{token_id}.json"

    async def owner_of(self, token_id: int) -> str:
        return self.owner


@pytest.mark.asyncio
async def test_list_owned_tokens() -> None:
    tokens = await list_owned_tokens(FakeReader(ADDRESS, [7, 11]), ADDRESS, 11155111)

    assert [t.token_id for t in tokens] == [7, 11]
    assert tokens[1].token_uri == "ipfs://certificates/11.json"
    assert await list_owned_tokens(FakeReader(ADDRESS, [7]), "0x" + "00" * 20, 1) == []


def test_supported_chains() -> None:
    assert get_chain(11155111).testnet
    assert get_chain(42) is None
