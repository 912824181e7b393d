import logging

from textual.app import App
from textual.logging import TextualHandler

from .api.events import EventsAPI
from .config.settings import Settings, load_settings
from .services.activity import ActivityService
from .ui.activity import ActivityScreen


class PulseApp(App):
    TITLE = "nftpulse - NFT Activity Terminal"
    BINDINGS = [
        ("g", "global_feed", "Global"),
        ("c", "collection", "Collection"),
        ("a", "account", "Account"),
        ("q", "quit", "Quit")
    ]

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self._settings = settings or load_settings()
        self._service = ActivityService(
            EventsAPI(
                self._settings.api_key,
                base_url=self._settings.base_url,
                timeout=self._settings.timeout,
            )
        )

    def on_mount(self) -> None:
        self.push_screen(self._global_screen())

    def _global_screen(self) -> ActivityScreen:
        return ActivityScreen(
            "All activity",
            lambda types, limit, cursor: self._service.get_activity(types, limit, cursor),
        )

    def action_global_feed(self) -> None:
        self.switch_screen(self._global_screen())

    def action_collection(self) -> None:
        slug = self._settings.collection_slug
        if not slug:
            self.notify("Set NFTPULSE_COLLECTION to watch a collection.", severity="warning")
            return
        self.switch_screen(ActivityScreen(
            f"Collection {slug}",
            lambda types, limit, cursor: self._service.get_events_by_collection(
                slug, types, limit, cursor
            ),
        ))

    def action_account(self) -> None:
        address = self._settings.account_address
        if not address:
            self.notify("Set NFTPULSE_ACCOUNT to watch a wallet.", severity="warning")
            return
        chain = self._settings.chain
        self.switch_screen(ActivityScreen(
            f"Account {address} on {chain.value}",
            lambda types, limit, cursor: self._service.get_events_by_account(
                address, chain, types, limit, cursor
            ),
        ))


def main() -> None:
    logging.basicConfig(level=logging.INFO, handlers=[TextualHandler()])
    PulseApp().run()


if __name__ == "__main__":
    main()
