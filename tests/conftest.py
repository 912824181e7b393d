"""Shared fixtures for the events client tests."""

from unittest.mock import MagicMock

import httpx
import pytest

BAYC_CONTRACT = "0xBC4CA0EdA7647A8aB7C2061c2E118A18a936f13D"
VITALIK = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"
NOW = 1_700_000_000


def raw_sale(timestamp=NOW, identifier="1", collection="boredapeyachtclub", **overrides):
    event = {
        "event_type": "sale",
        "event_timestamp": timestamp,
        "chain": "ethereum",
        "transaction": "0xabc",
        "quantity": 1,
        "seller": "0xAAAA000000000000000000000000000000000001",
        "buyer": "0xBBBB000000000000000000000000000000000002",
        "payment": {
            "quantity": "42000000000000000000",
            "token_address": "0x0000000000000000000000000000000000000000",
            "decimals": 18,
            "symbol": "ETH",
        },
        "nft": {
            "identifier": identifier,
            "collection": collection,
            "contract": BAYC_CONTRACT.lower(),
            "name": f"#{identifier}",
            "image_url": None,
        },
    }
    event.update(overrides)
    return event


def raw_transfer(timestamp=NOW, **overrides):
    event = {
        "event_type": "transfer",
        "event_timestamp": timestamp,
        "chain": "ethereum",
        "quantity": 3,
        "from_address": VITALIK,
        "to_address": "0xCCCC000000000000000000000000000000000003",
        "nft": {"identifier": "7", "collection": "some-1155", "contract": "0x1234"},
    }
    event.update(overrides)
    return event


def raw_order(timestamp=NOW, **overrides):
    event = {
        "event_type": "order",
        "order_type": "listing",
        "event_timestamp": timestamp,
        "maker": "0xDDDD000000000000000000000000000000000004",
        "taker": None,
        "quantity": 1,
        "asset": {"identifier": "9", "collection": "boredapeyachtclub", "contract": BAYC_CONTRACT},
    }
    event.update(overrides)
    return event


def json_response(body, status_code=200, headers=None):
    return httpx.Response(
        status_code,
        json=body,
        headers=headers,
        request=httpx.Request("GET", "https://api.test/api/v2/events"),
    )


@pytest.fixture
def mock_get(monkeypatch):
    """Replaces httpx.get; tests set `.return_value` or `.side_effect`."""
    fake = MagicMock()
    monkeypatch.setattr(httpx, "get", fake)
    return fake
