import logging
import urllib.parse

import httpx

from .exceptions import DecodeError, RemoteError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "https://api.opensea.io"
_EVENTS_PATH = "/api/v2/events"


def _quote(segment: str) -> str:
    return urllib.parse.quote(segment, safe="")


def _error_message(resp: httpx.Response) -> str:
    """Pulls the human readable reason out of an error body, if there is one."""
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list) and errors:
            return "; ".join(str(e) for e in errors)
        for key in ("detail", "message", "error"):
            if body.get(key):
                return str(body[key])
    return resp.text or resp.reason_phrase


def _retry_after(resp: httpx.Response) -> int | None:
    value = resp.headers.get("retry-after")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class EventsAPI:
    """Raw HTTP calls to the marketplace events endpoints. No logic, no parsing."""

    def __init__(self, api_key: str, base_url: str = DEFAULT_HOST, timeout: float = 15.0):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._headers = {"Accept": "application/json", "X-API-KEY": api_key}

    def _get(self, path: str, params: list[tuple[str, str]]) -> dict:
        url = f"{self._base_url}{path}"
        logger.debug("GET %s params=%s", url, params)
        try:
            resp = httpx.get(url, params=params, headers=self._headers, timeout=self._timeout)
        except httpx.DecodingError as exc:
            # Body arrived but its content-encoding could not be undone.
            raise DecodeError(f"response from {url} could not be decoded: {exc}") from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise TransportError(f"request to {url} failed: {exc}") from exc

        if not resp.is_success:
            message = _error_message(resp)
            logger.warning("GET %s returned %s: %s", url, resp.status_code, message)
            raise RemoteError(message, status_code=resp.status_code, retry_after=_retry_after(resp))

        try:
            return resp.json()
        except ValueError as exc:
            raise DecodeError(f"response from {url} is not valid JSON", resp.text) from exc

    def get_events(self, params: list[tuple[str, str]]) -> dict:
        """Returns the raw page of the global event feed."""
        return self._get(_EVENTS_PATH, params)

    def get_events_by_collection(self, collection_slug: str, params: list[tuple[str, str]]) -> dict:
        return self._get(f"{_EVENTS_PATH}/collection/{_quote(collection_slug)}", params)

    def get_events_by_nft(
        self, chain: str, contract_address: str, token_id: str, params: list[tuple[str, str]]
    ) -> dict:
        return self._get(
            f"{_EVENTS_PATH}/chain/{_quote(chain)}/contract/{_quote(contract_address)}"
            f"/nfts/{_quote(token_id)}",
            params,
        )

    def get_events_by_account(self, address: str, params: list[tuple[str, str]]) -> dict:
        """Chain is passed as a query parameter on this endpoint, not in the path."""
        return self._get(f"{_EVENTS_PATH}/accounts/{_quote(address)}", params)
