from ..api.exceptions import DecodeError
from ..models.event import ActivityEvent, Cursor, EventNFT, EventPayment, EventsPage
from ..models.types import ActivityEventType

_PARTICIPANTS = ("seller", "buyer", "maker", "taker", "from_address", "to_address")


def _optional_str(raw: dict, key: str) -> str | None:
    value = raw.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError(f"expected '{key}' to be a string, got {type(value).__name__}", raw)
    return value


def _required_str(raw: dict, key: str) -> str:
    value = _optional_str(raw, key)
    if value is None:
        raise DecodeError(f"missing '{key}'", raw)
    return value


def _optional_int(raw: dict, key: str) -> int | None:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"expected '{key}' to be an integer, got {value!r}", raw)
    return value


def parse_nft(raw: dict) -> EventNFT:
    if not isinstance(raw, dict):
        raise DecodeError("expected 'nft' to be an object", raw)
    return EventNFT(
        identifier=_required_str(raw, "identifier"),
        contract=_required_str(raw, "contract"),
        collection=_required_str(raw, "collection"),
        name=_optional_str(raw, "name"),
        image_url=_optional_str(raw, "image_url"),
    )


def parse_payment(raw: dict) -> EventPayment:
    if not isinstance(raw, dict):
        raise DecodeError("expected 'payment' to be an object", raw)
    decimals = _optional_int(raw, "decimals")
    if decimals is None:
        raise DecodeError("missing 'decimals'", raw)
    # Amounts may exceed 2**53 upstream, so they travel as strings.
    quantity = raw.get("quantity")
    if isinstance(quantity, int) and not isinstance(quantity, bool):
        quantity = str(quantity)
    if not isinstance(quantity, str):
        raise DecodeError("missing 'quantity'", raw)
    return EventPayment(
        quantity=quantity,
        token_address=_required_str(raw, "token_address"),
        decimals=decimals,
        symbol=_required_str(raw, "symbol"),
    )


def parse_event(raw: dict) -> ActivityEvent:
    """
    Builds one ActivityEvent from a raw `asset_events` entry.

    Order events (listings, offers) carry the token under `asset` instead of
    `nft`; both are read into `nft`. Participant addresses are lower-cased.
    """
    if not isinstance(raw, dict):
        raise DecodeError("expected event to be an object", raw)

    type_str = _required_str(raw, "event_type")
    try:
        event_type = ActivityEventType(type_str)
    except ValueError:
        raise DecodeError(f"unknown event_type {type_str!r}", raw) from None

    timestamp = _optional_int(raw, "event_timestamp")
    if timestamp is None:
        raise DecodeError("missing 'event_timestamp'", raw)

    raw_nft = raw.get("nft") or raw.get("asset")
    raw_payment = raw.get("payment")
    participants = {}
    for key in _PARTICIPANTS:
        address = _optional_str(raw, key)
        participants[key] = address.lower() if address else None

    return ActivityEvent(
        event_type=event_type,
        event_timestamp=timestamp,
        nft=parse_nft(raw_nft) if raw_nft is not None else None,
        quantity=_optional_int(raw, "quantity"),
        chain=_optional_str(raw, "chain"),
        transaction=_optional_str(raw, "transaction"),
        order_type=_optional_str(raw, "order_type"),
        payment=parse_payment(raw_payment) if raw_payment is not None else None,
        **participants,
    )


def parse_page(body: object) -> EventsPage:
    """Decodes a `{asset_events: [...], next: str | null}` response body."""
    if not isinstance(body, dict):
        raise DecodeError("expected response body to be an object", body)
    raw_events = body.get("asset_events")
    if not isinstance(raw_events, list):
        raise DecodeError("expected 'asset_events' to be a list", body)

    next_cursor = body.get("next")
    if next_cursor is not None and not isinstance(next_cursor, str):
        raise DecodeError(f"expected 'next' to be a string, got {next_cursor!r}", body)

    return EventsPage(
        asset_events=tuple(parse_event(e) for e in raw_events),
        # An empty string is sent on the last page by some endpoints.
        next=Cursor(next_cursor) if next_cursor else None,
    )
