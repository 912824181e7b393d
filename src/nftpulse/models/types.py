from enum import Enum


class ActivityEventType(str, Enum):
    SALE = "sale"
    TRANSFER = "transfer"
    MINT = "mint"
    LISTING = "listing"
    OFFER = "offer"
    TRAIT_OFFER = "trait_offer"
    COLLECTION_OFFER = "collection_offer"
    ORDER = "order"  # returned in place of listing/offer on some feeds
    CANCEL = "cancel"
    REDEMPTION = "redemption"
    BURN = "burn"


class Chain(str, Enum):
    Mainnet = "ethereum"
    Polygon = "matic"
    Arbitrum = "arbitrum"
    Optimism = "optimism"
    Base = "base"
    Avalanche = "avalanche"
    Zora = "zora"
    Blast = "blast"
    Solana = "solana"
    Sepolia = "sepolia"
