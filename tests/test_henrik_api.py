"""Tests for the HenrikDev and valorant-api.com clients using a mock transport."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from app.config import Settings
from app.services.henrik_api import HenrikAPIService, ValorantAPIError
from app.services.valorant_content import ValorantContentService


def _settings(api_key: str | None = "HDEV-test") -> Settings:
    settings = Settings()
    settings.henrik_api_key = api_key
    settings.henrik_api_base_url = "https://henrik.test/valorant"
    settings.valorant_api_base_url = "https://content.test/v1"
    settings.default_language = "en-US"
    settings.request_timeout = 1.0
    return settings


def _service(handler, api_key: str | None = "HDEV-test") -> HenrikAPIService:
    return HenrikAPIService(_settings(api_key), transport=httpx.MockTransport(handler))


def test_get_account_sends_key_and_encodes_path() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.raw_path.decode()
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"status": 200, "data": {"name": "Ali ce", "tag": "000"}})

    account = asyncio.run(_service(handler).get_account("Ali ce", "000"))

    assert account == {"name": "Ali ce", "tag": "000"}
    assert seen["path"] == "/valorant/v1/account/Ali%20ce/000"
    assert seen["auth"] == "HDEV-test"


def test_no_authorization_header_without_key() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json={"data": {"currenttierpatched": "Gold 2"}})

    mmr = asyncio.run(_service(handler, api_key=None).get_mmr("Alice", "000", "eu"))

    assert mmr == {"currenttierpatched": "Gold 2"}
    assert seen["auth"] is None


def test_match_history_query_parameters() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"data": [{"metadata": {}}]})

    matches = asyncio.run(_service(handler).get_match_history("Alice", "000", "na"))

    assert matches == [{"metadata": {}}]
    assert seen["path"] == "/valorant/v3/matches/na/Alice/000"
    assert seen["params"] == {"filter": "competitive", "size": "10"}


def test_error_status_raises_once_without_retry() -> None:
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(429, json={"errors": [{"message": "rate limited"}]})

    with pytest.raises(ValorantAPIError) as excinfo:
        asyncio.run(_service(handler).get_account("Alice", "000"))

    assert excinfo.value.status_code == 429
    assert len(calls) == 1


def test_transport_error_raises_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(ValorantAPIError) as excinfo:
        asyncio.run(_service(handler).get_mmr("Alice", "000", "eu"))

    assert excinfo.value.status_code is None


def test_invalid_json_raises_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>")

    with pytest.raises(ValorantAPIError):
        asyncio.run(_service(handler).get_match_history("Alice", "000", "eu"))


def test_empty_account_is_an_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": None})

    with pytest.raises(ValorantAPIError):
        asyncio.run(_service(handler).get_account("Alice", "000"))


def test_find_account_returns_first_matching_tag() -> None:
    tried = []

    def handler(request: httpx.Request) -> httpx.Response:
        tag = request.url.path.rsplit("/", 1)[-1]
        tried.append(tag)
        if tag == "EUW":
            return httpx.Response(200, json={"data": {"name": "Alice", "tag": "EUW"}})
        return httpx.Response(404, json={"errors": []})

    players = asyncio.run(_service(handler).find_account("Alice", "eu"))

    assert players == [{"name": "Alice", "tag": "EUW"}]
    assert tried == ["000", "NA1", "EUW"]


@pytest.mark.parametrize(
    ("region", "tags"),
    [("na", ["NA", "NA1"]), ("kr", ["KR", "NA"]), ("AP", ["AP", "OCE"]), ("mars", ["EUW", "EU"])],
)
def test_find_account_suggests_region_tags(region: str, tags: list) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"errors": []})

    players = asyncio.run(_service(handler).find_account("Alice", region))

    assert players == [{"name": "Alice", "tag": tags[0]}, {"name": "Alice", "tag": tags[1]}]


def test_content_service_agents() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(200, json={"status": 200, "data": [{"displayName": "Jett"}]})

    service = ValorantContentService(_settings(), transport=httpx.MockTransport(handler))
    agents = asyncio.run(service.get_agents())

    assert agents == [{"displayName": "Jett"}]
    assert seen["path"] == "/v1/agents"
    assert seen["params"] == {"isPlayableCharacter": "true", "language": "en-US"}


def test_content_service_missing_data() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": 200})

    service = ValorantContentService(_settings(), transport=httpx.MockTransport(handler))

    assert asyncio.run(service.get_maps("de-DE")) == []
    assert asyncio.run(service.get_agent("abc")) is None


def test_content_service_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="oops")

    service = ValorantContentService(_settings(), transport=httpx.MockTransport(handler))

    with pytest.raises(ValorantAPIError) as excinfo:
        asyncio.run(service.get_weapons())
    assert excinfo.value.status_code == 500
