from dataclasses import dataclass

from .event import Cursor
from .types import ActivityEventType


def _check_timestamp(name: str, value: int | None) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative unix timestamp, got {value!r}")


@dataclass(frozen=True)
class EventQuery:
    """
    Filters shared by every events endpoint.

    event_types: only return these event types (sent as a repeated parameter).
                 None returns every type the endpoint knows about.
    limit:       page size; values above the service maximum are capped when
                 the request is built.
    cursor:      the `next` value of a previous page, to continue that chain.
    after:       only events at or after this unix timestamp.
    before:      only events at or before this unix timestamp.

    Which scope (collection, NFT, account or global) the filters apply to is
    chosen by the caller through the service method; combinations are not
    checked here.
    """

    event_types: tuple[ActivityEventType, ...] | None = None
    limit: int = 50
    cursor: Cursor | None = None
    after: int | None = None
    before: int | None = None

    def __post_init__(self) -> None:
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 1:
            raise ValueError(f"limit must be a positive integer, got {self.limit!r}")
        _check_timestamp("after", self.after)
        _check_timestamp("before", self.before)
        if self.event_types is not None:
            # Accept plain strings such as "sale" and normalise to the enum.
            object.__setattr__(
                self,
                "event_types",
                tuple(ActivityEventType(t) for t in self.event_types),
            )
        if self.cursor is not None and not isinstance(self.cursor, str):
            raise ValueError(f"cursor must be the opaque string from a previous page, got {self.cursor!r}")
