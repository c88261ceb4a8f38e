"""Certificate eligibility and (simulated) minting."""

import asyncio
import logging
import secrets
from collections.abc import Callable, Collection
from datetime import UTC, datetime

from web3journey.catalog import ModuleLevel
from web3journey.config.settings import get_settings
from web3journey.exceptions import ResourceNotFoundError, ValidationError
from web3journey.i18n import Locale, humanize_id, localized
from web3journey.progress.calculator import percentage
from web3journey.progress.schemas import ProgressStatus
from web3journey.progress.store import ProgressStore

from .chain import CERTIFICATE_TYPE_NAMES, CertificateType, get_contract_address
from .schemas import (
    CertificateFilter,
    CertificateMetadata,
    CertificateStats,
    MetadataAttribute,
    MintableCertificate,
    MintRequest,
    MintResult,
)


logger = logging.getLogger(__name__)

COURSE_REFERENCE_ID = "full-course"
COURSE_NAME = "Web3 Journey"

LEVEL_NAMES: dict[ModuleLevel, dict[str, str]] = {
    ModuleLevel.FOUNDATION: {"zh": "基础入门阶段", "en": "Foundation Level"},
    ModuleLevel.DEVELOPMENT: {"zh": "开发实践阶段", "en": "Development Level"},
    ModuleLevel.ADVANCED: {"zh": "高级进阶阶段", "en": "Advanced Level"},
    ModuleLevel.EXPERT: {"zh": "专家精通阶段", "en": "Expert Level"},
}

COURSE_TITLE = {"zh": "Web3 全栈开发认证", "en": "Web3 Full-Stack Developer"}
COURSE_DESCRIPTION = {"zh": "完成所有课程内容和项目", "en": "Complete all courses and projects"}
TOPICS_LABEL = {"zh": "个知识点", "en": "topics"}
MODULES_LABEL = {"zh": "个模块", "en": "modules"}
COMPLETED_LABEL = {"zh": "完成", "en": "Completed"}

PROJECT_PERCENTAGES = {
    ProgressStatus.COMPLETED: 100,
    ProgressStatus.IN_PROGRESS: 50,
    ProgressStatus.NOT_STARTED: 0,
}

MintedKey = tuple[CertificateType, str]


def build_certificates(
    store: ProgressStore, locale: Locale, minted: Collection[MintedKey] = ()
) -> list[MintableCertificate]:
    """Every certificate the curriculum offers, with the user's standing on each.

    Percentages are rounded for display; eligibility requires everything to be
    done, so a 99.5% level never counts as complete.
    """
    catalog = store.catalog
    completed_modules = set(store.completed_module_ids())
    certificates: list[MintableCertificate] = []

    for module in catalog.modules:
        certificates.append(
            MintableCertificate(
                type=CertificateType.MODULE_COMPLETION,
                title=humanize_id(module.id),
                description=(
                    f"{localized(COMPLETED_LABEL, locale)} {len(module.topics)} {localized(TOPICS_LABEL, locale)}"
                ),
                reference_id=module.id,
                completion_percentage=store.module_completion_percentage(module.id),
                eligible=module.id in completed_modules,
            )
        )

    for level in ModuleLevel:
        level_modules = catalog.modules_by_level(level)
        total_topics = catalog.total_topics_in(level_modules)
        certificates.append(
            MintableCertificate(
                type=CertificateType.LEVEL_COMPLETION,
                title=localized(LEVEL_NAMES[level], locale),
                description=(
                    f"{len(level_modules)} {localized(MODULES_LABEL, locale)}, "
                    f"{total_topics} {localized(TOPICS_LABEL, locale)}"
                ),
                reference_id=level.value,
                completion_percentage=store.level_completion_percentage(level),
                eligible=total_topics > 0 and all(m.id in completed_modules for m in level_modules if m.topics),
            )
        )

    for project in catalog.projects:
        project_percentage = PROJECT_PERCENTAGES[store.get_project_status(project.id)]
        certificates.append(
            MintableCertificate(
                type=CertificateType.PROJECT_COMPLETION,
                title=humanize_id(project.id),
                description=f"{project.estimated_hours}h · {', '.join(project.skills)}",
                reference_id=project.id,
                completion_percentage=project_percentage,
                eligible=project_percentage == 100,
            )
        )

    total_topics = catalog.total_topics
    completed_topics = store.total_completed_topics()
    certificates.append(
        MintableCertificate(
            type=CertificateType.COURSE_COMPLETION,
            title=localized(COURSE_TITLE, locale),
            description=localized(COURSE_DESCRIPTION, locale),
            reference_id=COURSE_REFERENCE_ID,
            completion_percentage=percentage(completed_topics, total_topics),
            eligible=total_topics > 0 and completed_topics >= total_topics,
        )
    )

    minted_keys = set(minted)
    for certificate in certificates:
        certificate.minted = (certificate.type, certificate.reference_id) in minted_keys
    return certificates


def filter_certificates(
    certificates: list[MintableCertificate], certificate_filter: CertificateFilter
) -> list[MintableCertificate]:
    if certificate_filter == "eligible":
        return [c for c in certificates if c.eligible and not c.minted]
    if certificate_filter == "minted":
        return [c for c in certificates if c.minted]
    return list(certificates)


def certificate_stats(certificates: list[MintableCertificate]) -> CertificateStats:
    return CertificateStats(
        total=len(certificates),
        eligible=sum(1 for c in certificates if c.eligible and not c.minted),
        minted=sum(1 for c in certificates if c.minted),
    )


def build_metadata(
    certificate: MintableCertificate,
    recipient_name: str,
    recipient_address: str,
    locale: Locale,
    issued_at: datetime | None = None,
) -> CertificateMetadata:
    issued = issued_at or datetime.now(UTC)
    type_name = localized(CERTIFICATE_TYPE_NAMES[certificate.type], locale)
    return CertificateMetadata(
        name=f"{type_name}: {certificate.title}",
        description=certificate.description,
        image="",
        attributes=[
            MetadataAttribute(trait_type="Certificate Type", value=CERTIFICATE_TYPE_NAMES[certificate.type]["en"]),
            MetadataAttribute(trait_type="Reference", value=certificate.reference_id),
            MetadataAttribute(trait_type="Completion", value=certificate.completion_percentage),
            MetadataAttribute(trait_type="Issued", value=issued.date().isoformat()),
        ],
        certificate_type=certificate.type,
        issued_at=issued.isoformat(),
        recipient_name=recipient_name,
        recipient_address=recipient_address,
        course_name=COURSE_NAME,
        module_id=certificate.reference_id if certificate.type == CertificateType.MODULE_COMPLETION else None,
        project_id=certificate.reference_id if certificate.type == CertificateType.PROJECT_COMPLETION else None,
        level=certificate.reference_id if certificate.type == CertificateType.LEVEL_COMPLETION else None,
        completion_percentage=certificate.completion_percentage,
    )


class CertificateMinter:
    """Simulated mint: checks eligibility, waits, returns a fake transaction hash."""

    def __init__(
        self,
        chain_id: int | None = None,
        delay_seconds: float | None = None,
        sleep: Callable[[float], object] = asyncio.sleep,
    ) -> None:
        settings = get_settings()
        self.chain_id = chain_id if chain_id is not None else settings.CERTIFICATE_CHAIN_ID
        self.delay_seconds = delay_seconds if delay_seconds is not None else settings.CERTIFICATE_MINT_DELAY_SECONDS
        self._sleep = sleep

    async def mint(self, store: ProgressStore, request: MintRequest, locale: Locale) -> MintResult:
        certificate = next(
            (
                c
                for c in build_certificates(store, locale)
                if c.type == request.type and c.reference_id == request.reference_id
            ),
            None,
        )
        if certificate is None:
            raise ResourceNotFoundError("Certificate", f"{request.type.name}:{request.reference_id}")
        if not certificate.eligible:
            msg = f"Certificate {request.reference_id} is not eligible yet ({certificate.completion_percentage}%)"
            raise ValidationError(msg)

        metadata = build_metadata(certificate, request.recipient_name, request.recipient_address, locale)
        await self._sleep(self.delay_seconds)

        tx_hash = "0x" + secrets.token_hex(32)
        logger.info(
            "Simulated mint of %s %s for %s on chain %s (%s)",
            request.type.name,
            request.reference_id,
            request.recipient_address,
            self.chain_id,
            tx_hash,
        )
        return MintResult(
            transaction_hash=tx_hash,
            chain_id=self.chain_id,
            contract_address=get_contract_address(self.chain_id),
            metadata=metadata,
        )
