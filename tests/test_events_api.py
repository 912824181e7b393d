"""Tests for EventsAPI: URLs, headers and error mapping."""

import httpx
import pytest

from conftest import json_response
from nftpulse.api.events import EventsAPI
from nftpulse.api.exceptions import DecodeError, EventsAPIError, RemoteError, TransportError


@pytest.fixture
def api():
    return EventsAPI("test-key", base_url="https://api.test/", timeout=5.0)


def _called_url(mock_get):
    return mock_get.call_args.args[0]


# ---------------------------------------------------------------------------
# endpoints
# ---------------------------------------------------------------------------


class TestEndpoints:
    def test_global_feed(self, api, mock_get):
        mock_get.return_value = json_response({"asset_events": [], "next": None})

        body = api.get_events([("limit", "10")])

        assert body == {"asset_events": [], "next": None}
        mock_get.assert_called_once_with(
            "https://api.test/api/v2/events",
            params=[("limit", "10")],
            headers={"Accept": "application/json", "X-API-KEY": "test-key"},
            timeout=5.0,
        )

    def test_collection(self, api, mock_get):
        mock_get.return_value = json_response({"asset_events": []})
        api.get_events_by_collection("doodles-official", [])
        assert _called_url(mock_get) == "https://api.test/api/v2/events/collection/doodles-official"

    def test_nft(self, api, mock_get):
        mock_get.return_value = json_response({"asset_events": []})
        api.get_events_by_nft("ethereum", "0xBC4C", "1", [])
        assert _called_url(mock_get) == (
            "https://api.test/api/v2/events/chain/ethereum/contract/0xBC4C/nfts/1"
        )

    def test_account(self, api, mock_get):
        mock_get.return_value = json_response({"asset_events": []})
        api.get_events_by_account("0xd8dA", [("chain", "ethereum")])
        assert _called_url(mock_get) == "https://api.test/api/v2/events/accounts/0xd8dA"
        assert mock_get.call_args.kwargs["params"] == [("chain", "ethereum")]

    def test_path_segments_are_escaped(self, api, mock_get):
        mock_get.return_value = json_response({"asset_events": []})
        api.get_events_by_collection("a/b c", [])
        assert _called_url(mock_get).endswith("/collection/a%2Fb%20c")


# ---------------------------------------------------------------------------
# failures
# ---------------------------------------------------------------------------


class TestFailures:
    def test_connect_error_is_transport_error(self, api, mock_get):
        mock_get.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(TransportError, match="connection refused") as exc_info:
            api.get_events([])
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_timeout_is_transport_error(self, api, mock_get):
        mock_get.side_effect = httpx.ReadTimeout("timed out")
        with pytest.raises(TransportError):
            api.get_events([])

    def test_bad_request_carries_service_message(self, api, mock_get):
        mock_get.return_value = json_response(
            {"errors": ["Invalid event_type: airdrop"]}, status_code=400
        )

        with pytest.raises(RemoteError) as exc_info:
            api.get_events([("event_type", "airdrop")])

        err = exc_info.value
        assert err.status_code == 400
        assert "Invalid event_type: airdrop" in err.message
        assert not err.retryable

    def test_rate_limited(self, api, mock_get):
        mock_get.return_value = json_response(
            {"detail": "Request was throttled."}, status_code=429, headers={"Retry-After": "12"}
        )

        with pytest.raises(RemoteError) as exc_info:
            api.get_events([])

        assert exc_info.value.retryable
        assert exc_info.value.retry_after == 12
        assert "throttled" in exc_info.value.message

    def test_not_found_with_plain_text_body(self, api, mock_get):
        mock_get.return_value = httpx.Response(
            404, text="not here", request=httpx.Request("GET", "https://api.test")
        )
        with pytest.raises(RemoteError, match="HTTP 404: not here"):
            api.get_events_by_collection("no-such-collection", [])

    def test_server_error_is_retryable(self, api, mock_get):
        mock_get.return_value = json_response({}, status_code=503)
        with pytest.raises(RemoteError) as exc_info:
            api.get_events([])
        assert exc_info.value.retryable

    def test_invalid_json_is_decode_error(self, api, mock_get):
        mock_get.return_value = httpx.Response(
            200, text="<html>", request=httpx.Request("GET", "https://api.test")
        )
        with pytest.raises(DecodeError) as exc_info:
            api.get_events([])
        assert exc_info.value.payload == "<html>"

    def test_redirect_is_remote_error(self, api, mock_get):
        mock_get.return_value = json_response(
            {"asset_events": [], "next": None},
            status_code=302,
            headers={"Location": "https://elsewhere.test/"},
        )

        with pytest.raises(RemoteError) as exc_info:
            api.get_events_by_collection("doodles-official", [])

        assert exc_info.value.status_code == 302
        assert not exc_info.value.retryable

    def test_bad_content_encoding_is_decode_error(self, api, mock_get):
        mock_get.side_effect = httpx.DecodingError(
            "Error -3 while decompressing data: incorrect header check"
        )

        with pytest.raises(DecodeError, match="decompressing") as exc_info:
            api.get_events([])
        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)

    @pytest.mark.parametrize("error", [
        httpx.TooManyRedirects("Exceeded maximum allowed redirects."),
        httpx.InvalidURL("Invalid URL"),
        httpx.UnsupportedProtocol("Request URL has an unsupported protocol"),
    ])
    def test_other_request_failures_are_transport_errors(self, api, mock_get, error):
        mock_get.side_effect = error
        with pytest.raises(TransportError):
            api.get_events([])

    def test_all_failures_share_a_base(self):
        for cls in (TransportError, RemoteError, DecodeError):
            assert issubclass(cls, EventsAPIError)
