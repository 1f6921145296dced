"""
Knowledge Gateway

Facade over the three external services, bound to one configuration and
one shared JSON client.

Failure policy differs per operation:
- extract_entities / get_encyclopedia_summary never raise (empty / None)
- search_knowledge_graph / get_knowledge_entity raise ExternalServiceError
"""

from __future__ import annotations

import httpx

from ..config import NerIntelConfig
from ..core.models import (
    EncyclopediaSummary,
    ExtractedEntity,
    KnowledgeEntity,
    SearchResult,
)
from . import spotlight, wikidata, wikipedia
from .http import JsonHttpClient


class KnowledgeGateway:
    """Outbound calls to Spotlight, Wikidata and Wikipedia."""

    def __init__(
        self,
        config: NerIntelConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config or NerIntelConfig()
        self._client = JsonHttpClient(
            user_agent=self._config.user_agent,
            timeout_seconds=self._config.timeout_seconds,
            transport=transport,
        )

    @property
    def config(self) -> NerIntelConfig:
        return self._config

    async def close(self) -> None:
        await self._client.close()

    async def extract_entities(
        self,
        text: str,
        confidence: float = spotlight.DEFAULT_CONFIDENCE,
    ) -> list[ExtractedEntity]:
        return await spotlight.extract_entities(
            self._client, self._config.spotlight_url, text, confidence
        )

    async def search_knowledge_graph(
        self,
        query: str,
        limit: int = 5,
        language: str = "en",
    ) -> list[SearchResult]:
        return await wikidata.search_entities(
            self._client,
            self._config.wikidata_api_url,
            self._config.wikidata_entity_base_url,
            query,
            limit=limit,
            language=language,
        )

    async def get_knowledge_entity(
        self,
        entity_id: str,
        language: str = "en",
    ) -> KnowledgeEntity | None:
        return await wikidata.get_entity(
            self._client,
            self._config.wikidata_api_url,
            self._config.wikidata_entity_base_url,
            entity_id,
            language=language,
        )

    async def get_encyclopedia_summary(
        self,
        title: str,
        language: str | None = None,
    ) -> EncyclopediaSummary | None:
        return await wikipedia.get_summary(
            self._client,
            self._config.wikipedia_base_url,
            title,
            language=language or self._config.summary_language,
        )
