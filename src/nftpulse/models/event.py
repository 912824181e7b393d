from dataclasses import dataclass
from typing import NewType

from .types import ActivityEventType

# Server-issued pagination token. Passed back verbatim, never inspected.
Cursor = NewType("Cursor", str)


@dataclass(frozen=True)
class EventNFT:
    identifier: str   # token id, kept as a string
    contract: str
    collection: str
    name: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class EventPayment:
    quantity: str     # base units, e.g. wei
    token_address: str
    decimals: int
    symbol: str


@dataclass(frozen=True)
class ActivityEvent:
    event_type: ActivityEventType
    event_timestamp: int  # unix seconds, UTC
    nft: EventNFT | None = None
    seller: str | None = None
    buyer: str | None = None
    maker: str | None = None
    taker: str | None = None
    from_address: str | None = None
    to_address: str | None = None
    quantity: int | None = None
    chain: str | None = None
    transaction: str | None = None
    order_type: str | None = None
    payment: EventPayment | None = None

    def involves(self, address: str) -> bool:
        """True if the address appears as any participant of this event."""
        target = address.lower()
        return target in (
            self.seller, self.buyer, self.maker, self.taker,
            self.from_address, self.to_address,
        )


@dataclass(frozen=True)
class EventsPage:
    asset_events: tuple[ActivityEvent, ...]
    next: Cursor | None = None

    @property
    def exhausted(self) -> bool:
        return self.next is None
