from ..models.query import EventQuery
from ..models.types import Chain

# Largest page the events endpoints will serve.
MAX_LIMIT = 50


def capped_limit(limit: int) -> int:
    return min(limit, MAX_LIMIT)


def build_params(query: EventQuery, chain: Chain | None = None) -> list[tuple[str, str]]:
    """
    Serialises a query into request parameters.

    Returned as a list of pairs because event types go out as a repeated
    parameter:  ?event_type=sale&event_type=transfer
    Fields left as None are omitted entirely.
    """
    params: list[tuple[str, str]] = []
    for event_type in query.event_types or ():
        params.append(("event_type", event_type.value))
    if chain is not None:
        params.append(("chain", chain.value))
    if query.after is not None:
        params.append(("occurred_after", str(query.after)))
    if query.before is not None:
        params.append(("occurred_before", str(query.before)))
    params.append(("limit", str(capped_limit(query.limit))))
    if query.cursor:
        params.append(("next", query.cursor))
    return params
