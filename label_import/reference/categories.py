"""
label_import/reference/categories.py

Usage category taxonomy and the category alias table.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Category:
    category_id: str
    name: str
    description: str
    main_category: str


def _group(main_category: str, *entries: tuple[str, str, str]) -> tuple[Category, ...]:
    return tuple(
        Category(category_id=category_id, name=name, description=description, main_category=main_category)
        for category_id, name, description in entries
    )


CATEGORIES: tuple[Category, ...] = (
    *_group(
        "CeFi",
        ("mev", "MEV", "MEV and arbitrage bots"),
        (
            "trading",
            "Trading",
            "Contracts whose primary objective is to trade tokens or NFTs based on arbitrage, "
            "MEV (Miner Extractable Value) or market-making strategies.",
        ),
        ("cex", "Centralized Exchange", "Contracts or wallets under the control of centralized exchanges."),
    ),
    *_group(
        "DeFi",
        ("dex", "Decentralized Exchange", "Contracts whose primary focus is on routing token swaps through liquidity pools (LPs)."),
        ("lending", "Lending", "Contracts that enable lending with the use of collateral."),
        ("derivative", "Derivative Exchange", "Contracts that facilitate the trading of derivatives."),
        ("staking", "Staking", "Contracts where the primary activity is staking tokens or LP positions."),
        ("index", "Index", "Crypto indexes that represent market performance."),
        ("rwa", "Real World Assets", "Contracts for tangible asset management."),
        ("insurance", "Insurance", "Contracts that provide risk management and insurance coverage."),
        ("custody", "Custody", "Services for secure storage and management of digital assets."),
        ("yield_vaults", "Yield Vaults", "Protocols that specialize in building vaults that maximize yields."),
    ),
    *_group(
        "NFT",
        ("nft_fi", "NFT Finance", "Contracts that involve the financialization of NFTs."),
        ("nft_marketplace", "NFT Marketplace", "Platform contracts for the sale or minting of NFTs."),
        ("non_fungible_tokens", "Non-Fungible Tokens", "Contracts that mostly adhere to the ERC721 or ERC1155 token standard."),
    ),
    *_group(
        "Social",
        ("community", "Community", "Contracts for social interactions and education."),
        ("gambling", "Gambling", "Contracts that govern games of chance."),
        ("gaming", "Gaming", "Contracts integrated into digital games."),
        ("governance", "Governance", "Platforms for managing voting and treasury."),
    ),
    *_group(
        "Token Transfers",
        ("native_transfer", "Native Transfer", "All native token transfers."),
        ("stablecoin", "Stablecoin", "ERC20 token contracts pegged to fiat."),
        ("fungible_tokens", "Fungible Tokens", "Standard ERC20 token contracts."),
    ),
    *_group(
        "Utility",
        ("middleware", "Middleware", "Contracts for protocol interoperability."),
        ("erc4337", "Account Abstraction (ERC4337)", "Contracts for account abstraction."),
        ("inscriptions", "Inscriptions", "Contracts for inscribing calldata."),
        ("oracle", "Oracle", "Contracts that feed external data."),
        ("depin", "Decentralized Physical Infrastructure", "Infrastructure for decentralized operations."),
        ("developer_tools", "Developer Tool", "Contracts for development support."),
        ("identity", "Identity", "Contracts for digital identification."),
        ("privacy", "Privacy", "Contracts for enhanced privacy."),
        ("airdrop", "Airdrop", "Contracts for token distribution."),
        ("payments", "Payments", "Contracts for transactions and payments."),
        ("donation", "Donation", "Contracts for fundraising."),
        ("cybercrime", "Cybercrime", "Malicious contracts and exploits."),
        ("contract_deplyoment", "Contract Deployments", "Contracts for deployments."),
        ("other", "Others", "Miscellaneous utility contracts."),
    ),
    *_group(
        "Cross-Chain",
        ("cc_communication", "Cross-Chain Communication", "Contracts for cross-chain data exchange."),
        ("bridge", "Bridge", "Contracts for cross-chain transfers."),
        ("settlement", "Settlement & DA", "Contracts for L2/L3 operations."),
    ),
)

CATEGORY_MAP: dict[str, Category] = {category.category_id: category for category in CATEGORIES}

VALID_CATEGORY_IDS: frozenset[str] = frozenset(CATEGORY_MAP)

DEFAULT_CATEGORY_ID = "other"

CATEGORY_ALIASES: dict[str, str] = {
    "defi": "dex",
    "exchange": "dex",
    "swap": "dex",
    "uniswap": "dex",
    "nft": "non_fungible_tokens",
    "erc721": "non_fungible_tokens",
    "erc1155": "non_fungible_tokens",
    "token": "fungible_tokens",
    "erc20": "fungible_tokens",
    "stable": "stablecoin",
    "usdc": "stablecoin",
    "usdt": "stablecoin",
    "game": "gaming",
    "vote": "governance",
    "dao": "governance",
    "yield": "yield_vaults",
    "farm": "yield_vaults",
    "vault": "yield_vaults",
    "loan": "lending",
    "borrow": "lending",
    "stake": "staking",
    "crosschain": "cc_communication",
    "cross-chain": "cc_communication",
    "payment": "payments",
    "exploit": "cybercrime",
    "hack": "cybercrime",
    "scam": "cybercrime",
    "arbitrage": "mev",
    "bot": "mev",
    "futures": "derivative",
    "options": "derivative",
    "perp": "derivative",
    "perpetual": "derivative",
    "etf": "index",
    "marketplace": "nft_marketplace",
    "opensea": "nft_marketplace",
    "mint": "nft_marketplace",
    "bet": "gambling",
    "lottery": "gambling",
    "social": "community",
    "abstraction": "erc4337",
    "aa": "erc4337",
    "inscription": "inscriptions",
    "ordinal": "inscriptions",
    "infrastructure": "depin",
    "developer": "developer_tools",
    "tool": "developer_tools",
    "dev": "developer_tools",
    "custodial": "custody",
    "real-world": "rwa",
    "asset": "rwa",
    "centralized": "cex",
    "da": "settlement",
    "l2": "settlement",
    "layer2": "settlement",
    "rollup": "settlement",
    "deployment": "contract_deplyoment",
    "deploy": "contract_deplyoment",
    "factory": "contract_deplyoment",
    "misc": "other",
    "miscellaneous": "other",
    "unknown": "other",
}
