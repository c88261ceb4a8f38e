"""Certificate API endpoints."""

import logging

from fastapi import APIRouter, Request

from web3journey.auth import UserId
from web3journey.config.settings import get_settings
from web3journey.i18n import resolve_locale
from web3journey.middleware.security import mint_rate_limit
from web3journey.progress.dependencies import CurrentProgressStore

from .chain import get_contract_address
from .schemas import CertificateFilter, CertificateListResponse, MintRequest, MintResult
from .service import CertificateMinter, build_certificates, certificate_stats, filter_certificates


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/certificates", tags=["certificates"])


@router.get("", response_model_by_alias=True)
async def list_certificates(
    store: CurrentProgressStore,
    filter: CertificateFilter = "all",  # noqa: A002
    locale: str | None = None,
) -> CertificateListResponse:
    """Every certificate with completion, eligibility and minted flags."""
    certificates = build_certificates(store, resolve_locale(locale))
    chain_id = get_settings().CERTIFICATE_CHAIN_ID
    return CertificateListResponse(
        certificates=filter_certificates(certificates, filter),
        stats=certificate_stats(certificates),
        chain_id=chain_id,
        contract_address=get_contract_address(chain_id),
    )


@router.post("/mint", response_model_by_alias=True)
@mint_rate_limit
async def mint_certificate(
    request: Request,
    body: MintRequest,
    user_id: UserId,
    store: CurrentProgressStore,
    locale: str | None = None,
) -> MintResult:
    """Mint an eligible certificate. The transaction is simulated."""
    logger.info("User %s requested %s certificate %s", user_id, body.type.name, body.reference_id)
    return await CertificateMinter().mint(store, body, resolve_locale(locale))
