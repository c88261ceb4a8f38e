"""Chain-side description of the certificate NFT.

No contract is deployed yet, so every address is None and minting is
simulated by the service. Read-only calls go through a
``CertificateContractReader`` so a real RPC client can be plugged in later.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Protocol


@dataclass(frozen=True)
class SupportedChain:
    id: int
    name: str
    testnet: bool = False


MAINNET = SupportedChain(1, "Ethereum")
SEPOLIA = SupportedChain(11155111, "Sepolia", testnet=True)
POLYGON = SupportedChain(137, "Polygon")
POLYGON_AMOY = SupportedChain(80002, "Polygon Amoy", testnet=True)

SUPPORTED_CHAINS: tuple[SupportedChain, ...] = (MAINNET, SEPOLIA, POLYGON, POLYGON_AMOY)

# Placeholder until the contract is deployed
CERTIFICATE_CONTRACT_ADDRESSES: dict[int, str | None] = {chain.id: None for chain in SUPPORTED_CHAINS}


class CertificateType(IntEnum):
    """Values match the contract's ``certificateType`` uint8."""

    MODULE_COMPLETION = 0
    LEVEL_COMPLETION = 1
    PROJECT_COMPLETION = 2
    COURSE_COMPLETION = 3


CERTIFICATE_TYPE_NAMES: dict[CertificateType, dict[str, str]] = {
    CertificateType.MODULE_COMPLETION: {"zh": "模块完成证书", "en": "Module Completion"},
    CertificateType.LEVEL_COMPLETION: {"zh": "阶段完成证书", "en": "Level Completion"},
    CertificateType.PROJECT_COMPLETION: {"zh": "项目完成证书", "en": "Project Completion"},
    CertificateType.COURSE_COMPLETION: {"zh": "课程完成证书", "en": "Course Completion"},
}


def _function(name: str, inputs: list[tuple[str, str]], output: str, mutability: str = "view") -> dict[str, Any]:
    return {
        "name": name,
        "type": "function",
        "stateMutability": mutability,
        "inputs": [{"name": arg, "type": arg_type} for arg, arg_type in inputs],
        "outputs": [{"name": "", "type": output}],
    }


CERTIFICATE_NFT_ABI: list[dict[str, Any]] = [
    _function("balanceOf", [("owner", "address")], "uint256"),
    _function("tokenOfOwnerByIndex", [("owner", "address"), ("index", "uint256")], "uint256"),
    _function("tokenURI", [("tokenId", "uint256")], "string"),
    _function("ownerOf", [("tokenId", "uint256")], "address"),
    _function(
        "mint",
        [("to", "address"), ("certificateType", "uint8"), ("metadataURI", "string")],
        "uint256",
        mutability="nonpayable",
    ),
]


def get_chain(chain_id: int) -> SupportedChain | None:
    return next((chain for chain in SUPPORTED_CHAINS if chain.id == chain_id), None)


def get_contract_address(chain_id: int) -> str | None:
    return CERTIFICATE_CONTRACT_ADDRESSES.get(chain_id)


class CertificateContractReader(Protocol):
    """Read-only calls against a deployed certificate contract."""

    async def balance_of(self, owner: str) -> int: ...

    async def token_of_owner_by_index(self, owner: str, index: int) -> int: ...

    async def token_uri(self, token_id: int) -> str: ...

    async def owner_of(self, token_id: int) -> str: ...


@dataclass(frozen=True)
class OwnedToken:
    token_id: int
    token_uri: str
    owner: str
    chain_id: int


async def list_owned_tokens(reader: CertificateContractReader, owner: str, chain_id: int) -> list[OwnedToken]:
    """Enumerate every certificate token held by ``owner``."""
    balance = await reader.balance_of(owner)
    tokens = []
    for index in range(balance):
        token_id = await reader.token_of_owner_by_index(owner, index)
        tokens.append(
            OwnedToken(
                token_id=token_id,
                token_uri=await reader.token_uri(token_id),
                owner=await reader.owner_of(token_id),
                chain_id=chain_id,
            )
        )
    return tokens
