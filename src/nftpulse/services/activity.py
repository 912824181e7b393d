import logging
from collections.abc import Iterable

from ..api.events import EventsAPI
from ..api.exceptions import DecodeError
from ..engine.decode import parse_page
from ..engine.params import build_params
from ..models.event import Cursor, EventsPage
from ..models.query import EventQuery
from ..models.types import ActivityEventType, Chain

logger = logging.getLogger(__name__)

EventTypes = Iterable[ActivityEventType | str] | None


def _query(
    event_types: EventTypes,
    limit: int,
    cursor: Cursor | None,
    after: int | None,
    before: int | None,
) -> EventQuery:
    if isinstance(event_types, str):
        # A single type, not an iterable of one-letter types.
        event_types = (event_types,)
    return EventQuery(
        event_types=tuple(event_types) if event_types is not None else None,
        limit=limit,
        cursor=cursor,
        after=after,
        before=before,
    )


def _chain(chain: Chain | str) -> Chain:
    try:
        return Chain(chain)
    except ValueError:
        raise ValueError(f"unrecognised chain {chain!r}") from None


def _non_empty(name: str, value: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string, got {value!r}")
    return value


def _checked(page: EventsPage, query: EventQuery) -> EventsPage:
    """
    Rejects pages that break the guarantees of the request they answer.

    A page longer than the requested limit, or holding an event outside the
    requested time window, means the service and the client disagree about
    the contract. It is surfaced as a DecodeError rather than trimmed.
    """
    if len(page.asset_events) > query.limit:
        raise DecodeError(
            f"page holds {len(page.asset_events)} events, limit was {query.limit}", page
        )
    for event in page.asset_events:
        if query.after is not None and event.event_timestamp < query.after:
            raise DecodeError(
                f"event at {event.event_timestamp} is before requested start {query.after}", event
            )
        if query.before is not None and event.event_timestamp > query.before:
            raise DecodeError(
                f"event at {event.event_timestamp} is after requested end {query.before}", event
            )
    return page


class ActivityService:
    """
    Typed access to marketplace activity.

    Each call issues exactly one request and returns one page. To walk a
    result set, pass the previous page's `next` back as `cursor` until it
    comes back as None. Nothing is retried, buffered or cached here.
    """

    def __init__(self, api: EventsAPI):
        self._api = api

    def get_activity(
        self,
        event_types: EventTypes = None,
        limit: int = 50,
        cursor: Cursor | None = None,
        after: int | None = None,
        before: int | None = None,
    ) -> EventsPage:
        """Global event feed, across every collection."""
        query = _query(event_types, limit, cursor, after, before)
        body = self._api.get_events(build_params(query))
        return _checked(parse_page(body), query)

    def get_events_by_collection(
        self,
        collection_slug: str,
        event_types: EventTypes = None,
        limit: int = 50,
        cursor: Cursor | None = None,
        after: int | None = None,
        before: int | None = None,
    ) -> EventsPage:
        slug = _non_empty("collection_slug", collection_slug)
        query = _query(event_types, limit, cursor, after, before)
        body = self._api.get_events_by_collection(slug, build_params(query))
        return _checked(parse_page(body), query)

    def get_events_by_nft(
        self,
        contract_address: str,
        token_id: str,
        chain: Chain | str,
        event_types: EventTypes = None,
        limit: int = 50,
        cursor: Cursor | None = None,
        after: int | None = None,
        before: int | None = None,
    ) -> EventsPage:
        """Events for a single token, identified by contract and token id."""
        contract = _non_empty("contract_address", contract_address)
        token = _non_empty("token_id", token_id)
        network = _chain(chain)
        query = _query(event_types, limit, cursor, after, before)
        body = self._api.get_events_by_nft(network.value, contract, token, build_params(query))
        return _checked(parse_page(body), query)

    def get_events_by_account(
        self,
        address: str,
        chain: Chain | str,
        event_types: EventTypes = None,
        limit: int = 50,
        cursor: Cursor | None = None,
        after: int | None = None,
        before: int | None = None,
    ) -> EventsPage:
        """Events where the address took part as seller, buyer, maker, taker or transfer party."""
        account = _non_empty("address", address)
        network = _chain(chain)
        query = _query(event_types, limit, cursor, after, before)
        body = self._api.get_events_by_account(account, build_params(query, chain=network))
        page = _checked(parse_page(body), query)
        logger.debug("account %s: %d events, more=%s", account, len(page.asset_events), not page.exhausted)
        return page
