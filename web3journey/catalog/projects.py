"""Hands-on projects, ordered by difficulty."""

from .models import Project, ProjectDifficulty, Resource


def _project(
    project_id: str,
    key: str,
    difficulty: ProjectDifficulty,
    skills: tuple[str, ...],
    estimated_hours: int,
    prerequisites: tuple[str, ...],
    resources: tuple[Resource, ...] = (),
) -> Project:
    return Project(
        id=project_id,
        title_key=f"projects.list.{key}.title",
        description_key=f"projects.list.{key}.description",
        difficulty=difficulty,
        skills=skills,
        estimated_hours=estimated_hours,
        prerequisites=prerequisites,
        resources=resources,
    )


PROJECTS: tuple[Project, ...] = (
    _project(
        "erc20-token",
        "erc20",
        ProjectDifficulty.BEGINNER,
        ("Solidity Basics", "Contract Deployment"),
        4,
        ("solidity-programming",),
        (
            Resource(type="doc", title="OpenZeppelin ERC20", url="https://docs.openzeppelin.com/contracts/erc20"),
            Resource(type="article", title="ERC20 Standard", url="https://eips.ethereum.org/EIPS/eip-20"),
        ),
    ),
    _project(
        "voting-contract",
        "voting",
        ProjectDifficulty.BEGINNER,
        ("State Management", "Events"),
        6,
        ("solidity-programming",),
        (
            Resource(
                type="article",
                title="Solidity by Example - Voting",
                url="https://solidity-by-example.org/app/ballot/",
            ),
        ),
    ),
    _project(
        "nft-mint-page",
        "nftMint",
        ProjectDifficulty.ELEMENTARY,
        ("ERC-721", "Frontend Integration"),
        10,
        ("solidity-programming", "frontend-integration"),
    ),
    _project(
        "multisig-wallet",
        "multisig",
        ProjectDifficulty.ELEMENTARY,
        ("Access Control", "Security"),
        12,
        ("solidity-programming", "contract-security"),
        (Resource(type="github", title="Gnosis Safe Contracts", url="https://github.com/safe-global/safe-contracts"),),
    ),
    _project(
        "dex-interface",
        "dex",
        ProjectDifficulty.INTERMEDIATE,
        ("AMM Understanding", "Liquidity"),
        20,
        ("frontend-integration", "defi-development"),
    ),
    _project(
        "nft-marketplace",
        "nftMarket",
        ProjectDifficulty.INTERMEDIATE,
        ("Auction", "Royalties"),
        25,
        ("nft-development", "frontend-integration"),
    ),
    _project(
        "lending-protocol",
        "lending",
        ProjectDifficulty.ADVANCED,
        ("Interest Rate Model", "Liquidation"),
        40,
        ("defi-development", "contract-security"),
    ),
    _project(
        "dao-governance",
        "dao",
        ProjectDifficulty.ADVANCED,
        ("Voting", "Proposals", "Timelock"),
        35,
        ("solidity-programming", "contract-security"),
    ),
    _project(
        "crosschain-bridge",
        "bridge",
        ProjectDifficulty.EXPERT,
        ("Cross-chain Messaging", "Security"),
        50,
        ("crosschain-development", "contract-security"),
        (
            Resource(type="doc", title="LayerZero Docs", url="https://layerzero.gitbook.io/docs/"),
            Resource(type="doc", title="Axelar Docs", url="https://docs.axelar.dev/"),
        ),
    ),
)

DIFFICULTY_STARS: dict[ProjectDifficulty, int] = {
    ProjectDifficulty.BEGINNER: 1,
    ProjectDifficulty.ELEMENTARY: 2,
    ProjectDifficulty.INTERMEDIATE: 3,
    ProjectDifficulty.ADVANCED: 4,
    ProjectDifficulty.EXPERT: 5,
}

DIFFICULTY_COLORS: dict[ProjectDifficulty, str] = {
    ProjectDifficulty.BEGINNER: "green",
    ProjectDifficulty.ELEMENTARY: "blue",
    ProjectDifficulty.INTERMEDIATE: "yellow",
    ProjectDifficulty.ADVANCED: "orange",
    ProjectDifficulty.EXPERT: "red",
}
