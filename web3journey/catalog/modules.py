"""Learning modules, ordered from foundation to expert."""

from .models import LearningModule, ModuleLevel, Resource, Topic


def _camel(slug: str) -> str:
    head, *rest = slug.split("-")
    return head + "".join(part.capitalize() for part in rest)


def _module(
    module_id: str,
    level: ModuleLevel,
    hours: int,
    icon: str,
    color: str,
    topics: list[tuple[str, tuple[Resource, ...]]],
    prerequisites: tuple[str, ...] = (),
) -> LearningModule:
    key = f"modules.{_camel(module_id)}"
    return LearningModule(
        id=module_id,
        title_key=f"{key}.title",
        description_key=f"{key}.description",
        level=level,
        hours=hours,
        icon=icon,
        color=color,
        prerequisites=prerequisites,
        topics=tuple(
            Topic(
                id=topic_id,
                title_key=f"{key}.topics.{_camel(topic_id)}",
                description_key=f"{key}.topics.{_camel(topic_id)}Desc",
                resources=resources,
            )
            for topic_id, resources in topics
        ),
    )


def _doc(title: str, url: str) -> Resource:
    return Resource(type="doc", title=title, url=url)


def _article(title: str, url: str) -> Resource:
    return Resource(type="article", title=title, url=url)


def _video(title: str, url: str) -> Resource:
    return Resource(type="video", title=title, url=url)


def _github(title: str, url: str) -> Resource:
    return Resource(type="github", title=title, url=url)


LEARNING_MODULES: tuple[LearningModule, ...] = (
    # Foundation
    _module(
        "blockchain-basics",
        ModuleLevel.FOUNDATION,
        20,
        "cube",
        "purple",
        [
            (
                "distributed-systems",
                (
                    _doc("MIT Distributed Systems", "https://pdos.csail.mit.edu/6.824/"),
                    _video("MIT 6.824 分布式系统", "https://www.youtube.com/watch?v=cQP8WApzIQQ"),
                ),
            ),
            (
                "consensus-mechanisms",
                (_article("PoW vs PoS", "https://ethereum.org/en/developers/docs/consensus-mechanisms/"),),
            ),
            ("cryptography-basics", (_doc("Cryptography Fundamentals", "https://cryptobook.nakov.com/"),)),
            ("hash-algorithms", ()),
            ("merkle-trees", ()),
        ],
    ),
    _module(
        "ethereum-fundamentals",
        ModuleLevel.FOUNDATION,
        15,
        "ethereum",
        "blue",
        [
            (
                "evm",
                (
                    _doc("EVM Deep Dive", "https://ethereum.org/en/developers/docs/evm/"),
                    _article("Understanding EVM", "https://www.evm.codes/"),
                ),
            ),
            ("gas-mechanism", (_doc("Gas and Fees", "https://ethereum.org/en/developers/docs/gas/"),)),
            ("account-model", ()),
            ("transaction-structure", ()),
        ],
        prerequisites=("blockchain-basics",),
    ),
    _module(
        "web3-ecosystem",
        ModuleLevel.FOUNDATION,
        10,
        "globe",
        "cyan",
        [
            ("defi-overview", (_article("What is DeFi", "https://ethereum.org/en/defi/"),)),
            ("nft-overview", (_article("Non-fungible tokens", "https://ethereum.org/en/nft/"),)),
            ("dao-overview", ()),
            ("layer2-overview", (_doc("Layer 2", "https://ethereum.org/en/layer-2/"),)),
        ],
    ),
    # Development
    _module(
        "solidity-programming",
        ModuleLevel.DEVELOPMENT,
        40,
        "code",
        "purple",
        [
            ("syntax-basics", (_doc("Solidity Docs", "https://docs.soliditylang.org/"),)),
            ("data-types", ()),
            ("functions", ()),
            ("inheritance", ()),
            ("interfaces", ()),
            ("events-errors", ()),
        ],
        prerequisites=("ethereum-fundamentals",),
    ),
    _module(
        "contract-security",
        ModuleLevel.DEVELOPMENT,
        25,
        "shield",
        "red",
        [
            ("reentrancy", (_article("Reentrancy", "https://solidity-by-example.org/hacks/re-entrancy/"),)),
            ("overflow", ()),
            (
                "access-control",
                (_doc("OpenZeppelin Access Control", "https://docs.openzeppelin.com/contracts/access-control"),),
            ),
            ("audit-tools", (_github("Slither", "https://github.com/crytic/slither"),)),
        ],
        prerequisites=("solidity-programming",),
    ),
    _module(
        "dev-toolchain",
        ModuleLevel.DEVELOPMENT,
        20,
        "wrench",
        "orange",
        [
            ("hardhat", (_doc("Hardhat Docs", "https://hardhat.org/docs"),)),
            ("foundry", (_doc("Foundry Book", "https://book.getfoundry.sh/"),)),
            ("remix", (_doc("Remix IDE", "https://remix-ide.readthedocs.io/"),)),
            ("testing", ()),
        ],
        prerequisites=("solidity-programming",),
    ),
    _module(
        "frontend-integration",
        ModuleLevel.DEVELOPMENT,
        30,
        "layout",
        "green",
        [
            ("ethers-viem", (_doc("viem", "https://viem.sh/"),)),
            ("wagmi", (_doc("wagmi", "https://wagmi.sh/"),)),
            ("rainbowkit", (_doc("RainbowKit", "https://www.rainbowkit.com/docs/introduction"),)),
            ("wallet-connection", ()),
        ],
        prerequisites=("dev-toolchain",),
    ),
    # Advanced
    _module(
        "defi-development",
        ModuleLevel.ADVANCED,
        40,
        "trending",
        "blue",
        [
            ("amm", (_doc("Uniswap V2 Docs", "https://docs.uniswap.org/contracts/v2/overview"),)),
            ("lending-protocol", (_doc("Aave Docs", "https://docs.aave.com/"),)),
            ("oracle-integration", (_doc("Chainlink Data Feeds", "https://docs.chain.link/data-feeds"),)),
            ("yield-strategies", ()),
        ],
        prerequisites=("frontend-integration", "contract-security"),
    ),
    _module(
        "nft-development",
        ModuleLevel.ADVANCED,
        25,
        "image",
        "pink",
        [
            ("erc721", (_doc("OpenZeppelin ERC721", "https://docs.openzeppelin.com/contracts/erc721"),)),
            ("erc1155", ()),
            ("metadata", ()),
            ("marketplace", ()),
        ],
        prerequisites=("frontend-integration",),
    ),
    _module(
        "layer2-development",
        ModuleLevel.ADVANCED,
        20,
        "layers",
        "cyan",
        [
            ("optimism", (_doc("Optimism Docs", "https://docs.optimism.io/"),)),
            ("arbitrum", (_doc("Arbitrum Docs", "https://docs.arbitrum.io/"),)),
            ("zksync", (_doc("zkSync Docs", "https://docs.zksync.io/"),)),
        ],
        prerequisites=("frontend-integration",),
    ),
    _module(
        "contract-upgrades",
        ModuleLevel.ADVANCED,
        15,
        "refresh",
        "purple",
        [
            ("proxy-patterns", (_doc("OpenZeppelin Upgrades", "https://docs.openzeppelin.com/upgrades-plugins/"),)),
            ("diamond-pattern", (_article("EIP-2535", "https://eips.ethereum.org/EIPS/eip-2535"),)),
            ("upgrade-safety", ()),
        ],
        prerequisites=("contract-security",),
    ),
    # Expert
    _module(
        "mev-arbitrage",
        ModuleLevel.EXPERT,
        20,
        "zap",
        "yellow",
        [
            ("flashbots", (_doc("Flashbots Docs", "https://docs.flashbots.net/"),)),
            ("mev-protection", ()),
            ("sandwich-attacks", ()),
        ],
        prerequisites=("defi-development",),
    ),
    _module(
        "crosschain-development",
        ModuleLevel.EXPERT,
        25,
        "link",
        "blue",
        [
            ("bridge-protocols", ()),
            (
                "crosschain-messaging",
                (
                    _doc("LayerZero Docs", "https://layerzero.gitbook.io/"),
                    _doc("Axelar Docs", "https://docs.axelar.dev/"),
                ),
            ),
            ("security-considerations", ()),
        ],
        prerequisites=("layer2-development",),
    ),
    _module(
        "zk-applications",
        ModuleLevel.EXPERT,
        40,
        "lock",
        "green",
        [
            ("zk-basics", (_doc("ZK Learning", "https://zkhack.dev/zkleaning/"),)),
            ("circom", (_doc("Circom Docs", "https://docs.circom.io/"),)),
            ("zk-use-cases", ()),
            ("zk-rollups", ()),
        ],
        prerequisites=("layer2-development",),
    ),
)
