"""Tests for the FastAPI transport."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest

from src.services.ner_intel.config import NerIntelConfig
from src.services.ner_intel.core.exceptions import ExternalServiceError
from src.services.ner_intel.transports.http.app import build_registration, create_app
from tests.unit.services.ner_intel.factories import FROZEN_ISO, make_entity


@pytest.fixture
def app_config(tmp_path: Path) -> NerIntelConfig:
    return NerIntelConfig(
        public_base_url="https://ner.example.com/",
        icon_path=str(tmp_path / "icon.png"),
    )


@pytest.fixture
async def client(
    app_config: NerIntelConfig,
    fake_gateway: MagicMock,
    frozen_clock: Callable[[], datetime],
) -> AsyncIterator[httpx.AsyncClient]:
    app = create_app(app_config, gateway=fake_gateway, clock=frozen_clock)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class TestServiceEndpoints:
    async def test_health(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "alive"}

    async def test_root(self, client: httpx.AsyncClient) -> None:
        data = (await client.get("/")).json()
        assert data["name"] == "ner-intel"
        assert data["entrypoints"] == ["overview", "extract", "annotate", "lookup", "details", "analyze"]

    async def test_list_entrypoints(self, client: httpx.AsyncClient) -> None:
        data = (await client.get("/entrypoints")).json()
        by_key = {ep["key"]: ep for ep in data["entrypoints"]}
        assert by_key["overview"]["price"] is None
        assert by_key["lookup"]["price"] == "2000"
        assert "query" in by_key["lookup"]["input"]["properties"]


class TestInvoke:
    async def test_overview_without_body(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/entrypoints/overview/invoke")
        assert response.status_code == 200
        assert response.json()["output"]["fetchedAt"] == FROZEN_ISO

    async def test_extract(self, client: httpx.AsyncClient, fake_gateway: MagicMock) -> None:
        fake_gateway.extract_entities.return_value = [make_entity("Berlin")]

        response = await client.post(
            "/entrypoints/extract/invoke", json={"input": {"text": "Berlin"}}
        )

        assert response.status_code == 200
        assert response.json()["output"]["entityCount"] == 1

    async def test_validation_error(self, client: httpx.AsyncClient, fake_gateway: MagicMock) -> None:
        response = await client.post(
            "/entrypoints/extract/invoke",
            json={"input": {"text": "Berlin", "confidence": 2}},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "Invalid input"
        assert body["issues"][0]["field"] == "confidence"
        fake_gateway.extract_entities.assert_not_awaited()

    async def test_string_confidence_rejected(
        self, client: httpx.AsyncClient, fake_gateway: MagicMock
    ) -> None:
        response = await client.post(
            "/entrypoints/extract/invoke",
            json={"input": {"text": "Berlin", "confidence": "0.5"}},
        )

        assert response.status_code == 422
        assert response.json()["issues"][0]["field"] == "confidence"
        fake_gateway.extract_entities.assert_not_awaited()

    @pytest.mark.parametrize("body", [{"input": "Berlin"}, {"input": ["Berlin"]}])
    async def test_non_object_input(
        self, client: httpx.AsyncClient, fake_gateway: MagicMock, body: dict
    ) -> None:
        response = await client.post("/entrypoints/extract/invoke", json=body)

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "Invalid input"
        assert data["issues"][0]["field"] == "body.input"
        assert "detail" not in data
        fake_gateway.extract_entities.assert_not_awaited()

    async def test_unknown_entrypoint(self, client: httpx.AsyncClient) -> None:
        response = await client.post("/entrypoints/translate/invoke", json={"input": {}})
        assert response.status_code == 404
        assert response.json() == {"error": "Unknown entrypoint: translate"}

    async def test_external_failure_is_502(
        self, client: httpx.AsyncClient, fake_gateway: MagicMock
    ) -> None:
        fake_gateway.search_knowledge_graph.side_effect = ExternalServiceError(
            "wikidata", "API error: 500", 500
        )

        response = await client.post(
            "/entrypoints/lookup/invoke", json={"input": {"query": "Paris"}}
        )

        assert response.status_code == 502
        assert response.json() == {
            "error": "wikidata: API error: 500",
            "service": "wikidata",
            "status": 500,
        }

    async def test_details_not_found_is_payload(self, client: httpx.AsyncClient) -> None:
        response = await client.post(
            "/entrypoints/details/invoke", json={"input": {"entityId": "Q999999999"}}
        )

        assert response.status_code == 200
        assert response.json() == {
            "output": {"error": "Entity not found", "entityId": "Q999999999"}
        }


class TestStaticResources:
    async def test_icon_missing(self, client: httpx.AsyncClient) -> None:
        response = await client.get("/icon.png")
        assert response.status_code == 404
        assert response.json() == {"error": "Icon not found"}

    async def test_icon_served(self, client: httpx.AsyncClient, app_config: NerIntelConfig) -> None:
        png = b"\x89PNG\r\n\x1a\nfake"
        Path(app_config.icon_path).write_bytes(png)

        response = await client.get("/icon.png")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content == png

    async def test_registration(self, client: httpx.AsyncClient) -> None:
        data = (await client.get("/.well-known/erc8004.json")).json()

        assert data["type"] == "https://eips.ethereum.org/EIPS/eip-8004#registration-v1"
        assert data["name"] == "ner-intel"
        assert data["image"] == "https://ner.example.com/icon.png"
        assert data["services"] == [
            {"name": "web", "endpoint": "https://ner.example.com"},
            {
                "name": "A2A",
                "endpoint": "https://ner.example.com/.well-known/agent.json",
                "version": "0.3.0",
            },
        ]
        assert data["x402Support"] is True
        assert data["supportedTrust"] == ["reputation"]


def test_build_registration_is_static() -> None:
    config = NerIntelConfig(public_base_url="https://a.example")
    assert build_registration(config) == build_registration(config)
