import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import Button, DataTable, Footer, Header, Label

from ..api.exceptions import EventsAPIError
from ..models.event import ActivityEvent, Cursor, EventsPage
from ..models.types import ActivityEventType

logger = logging.getLogger(__name__)

_PAGE_SIZE = 50
_FILTER_TYPES = (
    ActivityEventType.SALE,
    ActivityEventType.TRANSFER,
    ActivityEventType.MINT,
    ActivityEventType.LISTING,
    ActivityEventType.OFFER,
    ActivityEventType.CANCEL,
    ActivityEventType.BURN,
)

# (event_types, limit, cursor) -> page
PageFetcher = Callable[[tuple[ActivityEventType, ...] | None, int, Cursor | None], EventsPage]


def _trunc(text: str, width: int) -> str:
    """Truncate text to fit within width chars, appending … if needed."""
    if len(text) <= width:
        return text
    return text[: width - 1] + "…"


def _short_address(address: str | None) -> str:
    if not address:
        return "—"
    if len(address) < 10:
        return address
    return f"{address[:6]}…{address[-4:]}"


def _counterparties(event: ActivityEvent) -> tuple[str | None, str | None]:
    """Who the item moved from and to, whichever fields the event type uses."""
    return (
        event.seller or event.maker or event.from_address,
        event.buyer or event.taker or event.to_address,
    )


class ActivityScreen(Screen):
    CSS = """
    ActivityScreen {
        background: $surface;
    }

    #main-layout {
        height: 1fr;
    }

    #table-area {
        width: 1fr;
    }

    DataTable {
        margin: 1 2 0 2;
        height: 1fr;
    }

    #status {
        margin: 0 2;
        color: $text-muted;
    }

    #event-pagination {
        height: 3;
        align: center middle;
        padding: 0 2;
        border-top: solid $panel;
    }

    #event-pagination Button {
        width: 5;
        min-width: 5;
        height: 3;
    }

    #event-page-label {
        height: 3;
        width: 12;
        content-align: center middle;
        color: $text-muted;
    }

    #filter-panel {
        width: 26;
        padding: 1 1;
        border-left: solid $primary;
    }

    .filter-btn {
        width: 100%;
        margin-bottom: 1;
    }

    .filter-btn.active {
        background: $accent;
        color: $background;
        text-style: bold;
    }
    """

    _COL_WIDTHS = (16, 12, 40, 14, 14, 6)

    def __init__(self, title: str, fetch: PageFetcher) -> None:
        super().__init__()
        self._title = title
        self._fetch = fetch
        self._active_filters: set[ActivityEventType] = set()
        # Cursors that opened each page already visited; index 0 is the first page.
        self._cursors: list[Cursor | None] = [None]
        self._page: EventsPage | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="table-area"):
                yield Label(self._title, id="status")
                yield DataTable(cursor_type="row")
                with Horizontal(id="event-pagination"):
                    yield Button("<", id="event-prev", disabled=True)
                    yield Label("—", id="event-page-label")
                    yield Button(">", id="event-next", disabled=True)
            with VerticalScroll(id="filter-panel"):
                yield Button("All", id="filter-all", classes="filter-btn active")
                for event_type in _FILTER_TYPES:
                    yield Button(
                        event_type.value, id=f"filter-{event_type.value}", classes="filter-btn"
                    )
        yield Footer()

    async def on_mount(self) -> None:
        table = self.query_one(DataTable)
        for label, w in zip(
            ("Date / Time (UTC)", "Type", "Item", "From", "To", "Qty"),
            self._COL_WIDTHS,
        ):
            table.add_column(label, width=w)
        await self._load()

    async def _load(self) -> None:
        status = self.query_one("#status", Label)
        status.update(f"{self._title} · loading…")
        event_types = tuple(sorted(self._active_filters, key=lambda t: t.value)) or None
        try:
            self._page = await asyncio.to_thread(
                self._fetch, event_types, _PAGE_SIZE, self._cursors[-1]
            )
        except (EventsAPIError, ValueError) as exc:
            logger.warning("loading %s failed: %s", self._title, exc)
            self._page = None
            status.update(f"[red]{self._title} · {exc}[/red]")
        else:
            status.update(self._title)
        self._render_table()

    def _render_table(self) -> None:
        table = self.query_one(DataTable)
        table.clear()

        events = self._page.asset_events if self._page else ()
        w = self._COL_WIDTHS
        for e in events:
            dt = datetime.fromtimestamp(e.event_timestamp, tz=timezone.utc)
            item = "—"
            if e.nft:
                item = e.nft.name or f"{e.nft.collection} #{e.nft.identifier}"
            source, dest = _counterparties(e)
            table.add_row(
                dt.strftime("%Y-%m-%d %H:%M"),
                _trunc(e.event_type.value, w[1]),
                _trunc(item, w[2]),
                _short_address(source),
                _short_address(dest),
                str(e.quantity) if e.quantity is not None else "",
            )

        if self._page is not None and not events:
            self.query_one("#status", Label).update(f"{self._title} · [dim]No events.[/dim]")

        page_no = len(self._cursors)
        self.query_one("#event-page-label", Label).update(str(page_no))
        self.query_one("#event-prev", Button).disabled = page_no == 1
        self.query_one("#event-next", Button).disabled = self._page is None or self._page.exhausted

    def _sync_button_states(self) -> None:
        for btn in self.query(".filter-btn"):
            btn_id = btn.id or ""
            if btn_id == "filter-all":
                btn.set_class(not self._active_filters, "active")
                continue
            event_type = ActivityEventType(btn_id.removeprefix("filter-"))
            btn.set_class(event_type in self._active_filters, "active")

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        btn_id = event.button.id or ""

        if btn_id == "event-prev":
            if len(self._cursors) > 1:
                self._cursors.pop()
                await self._load()
            return

        if btn_id == "event-next":
            if self._page is not None and self._page.next is not None:
                self._cursors.append(self._page.next)
                await self._load()
            return

        if not btn_id.startswith("filter-"):
            return

        if btn_id == "filter-all":
            self._active_filters.clear()
        else:
            event_type = ActivityEventType(btn_id.removeprefix("filter-"))
            if event_type in self._active_filters:
                self._active_filters.discard(event_type)
            else:
                self._active_filters.add(event_type)

        self._cursors = [None]  # a cursor belongs to the query that issued it
        self._sync_button_states()
        await self._load()
