"""Schemas for certificates."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .chain import CertificateType


CertificateFilter = Literal["all", "eligible", "minted"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MintableCertificate(CamelModel):
    type: CertificateType
    title: str
    description: str
    reference_id: str = Field(..., description="Module id, level name, project id or 'full-course'")
    completion_percentage: int
    eligible: bool
    minted: bool = False


class CertificateStats(CamelModel):
    total: int
    eligible: int
    minted: int


class CertificateListResponse(CamelModel):
    certificates: list[MintableCertificate]
    stats: CertificateStats
    chain_id: int
    contract_address: str | None = None


class MetadataAttribute(BaseModel):
    trait_type: str
    value: str | int


class CertificateMetadata(BaseModel):
    """Token metadata document (ERC-721 JSON plus certificate fields)."""

    name: str
    description: str
    image: str
    attributes: list[MetadataAttribute]
    certificate_type: CertificateType
    issued_at: str
    recipient_name: str
    recipient_address: str
    course_name: str
    module_id: str | None = None
    project_id: str | None = None
    level: str | None = None
    completion_percentage: int


class MintRequest(CamelModel):
    type: CertificateType
    reference_id: str
    recipient_address: str = Field(..., pattern=r"^0x[0-9a-fA-F]{40}$")
    recipient_name: str = Field("Learner", min_length=1, max_length=100)


class MintResult(CamelModel):
    simulated: bool = True
    transaction_hash: str
    chain_id: int
    contract_address: str | None = None
    metadata: CertificateMetadata
