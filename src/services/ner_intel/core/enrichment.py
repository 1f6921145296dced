"""
Enrichment Orchestration

Combines extraction output with follow-up knowledge lookups:
- annotate: summaries for the first N extracted entities
- details: detail fetch, then a summary keyed by the resolved label
- analyze: type/uniqueness aggregation over all entities plus summaries
  for the first N

Independent follow-ups run concurrently and are joined before returning.
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from collections.abc import Awaitable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeVar

from .models import EncyclopediaSummary, ExtractedEntity, KnowledgeEntity

if TYPE_CHECKING:
    from ..adapters.gateway import KnowledgeGateway

logger = logging.getLogger(__name__)

T = TypeVar("T")

ANNOTATE_ENRICH_LIMIT = 10
ANALYZE_ENRICH_LIMIT = 5


@dataclass(frozen=True)
class EnrichedEntity:
    """An extracted entity paired with its summary, if one was found."""

    entity: ExtractedEntity
    summary: EncyclopediaSummary | None = None


@dataclass(frozen=True)
class EntityDetails:
    """Knowledge-graph record plus the summary for its label."""

    entity: KnowledgeEntity
    summary: EncyclopediaSummary | None = None


@dataclass(frozen=True)
class TextAnalysis:
    """Aggregates over every extracted entity plus the enriched head."""

    entities: list[ExtractedEntity]
    type_counts: dict[str, int] = field(default_factory=dict)
    unique_entities: int = 0
    top_entities: list[EnrichedEntity] = field(default_factory=list)


def summary_title_from_uri(uri: str) -> str | None:
    """
    Derive a summary page title from a knowledge-base resource URI.

    Takes the last path segment and turns underscores into spaces,
    e.g. ".../resource/New_York_City" -> "New York City".
    """
    segment = uri.rsplit("/", 1)[-1]
    return segment.replace("_", " ") or None


async def gather_isolated(
    awaitables: Sequence[Awaitable[T]], label: str = "task"
) -> list[T | None]:
    """
    Await all awaitables concurrently and return results in input order.

    A failing task yields None in its slot and does not affect its siblings.
    """
    results = await asyncio.gather(*awaitables, return_exceptions=True)

    collected: list[T | None] = []
    for i, result in enumerate(results):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.warning(f"{label} {i} failed: {result}")
            collected.append(None)
        else:
            collected.append(result)
    return collected


async def _summary_for(
    gateway: KnowledgeGateway, entity: ExtractedEntity
) -> EncyclopediaSummary | None:
    title = summary_title_from_uri(entity.dbpedia_url)
    if not title:
        return None
    return await gateway.get_encyclopedia_summary(title)


async def enrich_with_summaries(
    gateway: KnowledgeGateway,
    entities: Sequence[ExtractedEntity],
    limit: int,
) -> list[EnrichedEntity]:
    """
    Attach summaries to the first ``limit`` entities.

    Entities past the cutoff are kept, with no summary and no lookup.
    """
    head = list(entities[:limit])
    summaries = await gather_isolated(
        [_summary_for(gateway, e) for e in head], label="summary lookup"
    )

    enriched = [EnrichedEntity(e, s) for e, s in zip(head, summaries)]
    enriched.extend(EnrichedEntity(e) for e in entities[limit:])
    return enriched


async def annotate_text(
    gateway: KnowledgeGateway,
    text: str,
    confidence: float,
    limit: int = ANNOTATE_ENRICH_LIMIT,
) -> list[EnrichedEntity]:
    """Extract entities and enrich the first ``limit`` of them."""
    entities = await gateway.extract_entities(text, confidence)
    return await enrich_with_summaries(gateway, entities, limit)


async def fetch_entity_details(
    gateway: KnowledgeGateway,
    entity_id: str,
    language: str,
) -> EntityDetails | None:
    """
    Fetch an entity, then the summary for its label in the same language.

    Returns None if the ID does not exist. Detail failures propagate.
    """
    entity = await gateway.get_knowledge_entity(entity_id, language)
    if entity is None:
        return None

    summary = None
    if entity.label:
        summary = await gateway.get_encyclopedia_summary(entity.label, language)
    return EntityDetails(entity, summary)


def count_types(entities: Sequence[ExtractedEntity]) -> dict[str, int]:
    """Count taxonomy types across all entities, in first-seen order."""
    counts: Counter[str] = Counter()
    for entity in entities:
        counts.update(entity.type_names)
    return dict(counts)


def count_unique(entities: Sequence[ExtractedEntity]) -> int:
    """Number of distinct surface forms, ignoring case."""
    return len({e.text.lower() for e in entities})


async def analyze_text(
    gateway: KnowledgeGateway,
    text: str,
    confidence: float,
    limit: int = ANALYZE_ENRICH_LIMIT,
) -> TextAnalysis:
    """
    Extract entities, aggregate over all of them and enrich the first
    ``limit`` in extraction order.
    """
    entities = await gateway.extract_entities(text, confidence)
    top = await enrich_with_summaries(gateway, entities[:limit], limit)

    return TextAnalysis(
        entities=list(entities),
        type_counts=count_types(entities),
        unique_entities=count_unique(entities),
        top_entities=top,
    )
