"""
Response Formatting

Pure functions from orchestration results to the JSON contract of each
entrypoint. Apart from the caller-supplied timestamp the output is fully
determined by the input.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import Any

from .enrichment import EnrichedEntity, EntityDetails, TextAnalysis
from .models import EncyclopediaSummary, ExtractedEntity, SearchResult

ECHO_LIMIT = 100
ANNOTATE_EXTRACT_LIMIT = 200
ANALYZE_EXTRACT_LIMIT = 300
ELLIPSIS = "..."

# Payment amounts are expressed in 6-decimal base units (1000 = $0.001)
PRICE_UNITS_PER_DOLLAR = 1_000_000

_WHITESPACE = re.compile(r"\s+")

CAPABILITIES = [
    "Extract named entities (people, organizations, locations, products)",
    "Classify entities by type",
    "Link entities to knowledge bases (DBpedia, Wikidata, Wikipedia)",
    "Get detailed entity information",
    "Batch processing support",
]


def iso_timestamp(now: datetime | None = None) -> str:
    """UTC ISO-8601 timestamp with millisecond precision and a Z suffix."""
    now = now or datetime.now(timezone.utc)
    return (
        now.astimezone(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def truncate_echo(text: str, limit: int = ECHO_LIMIT) -> str:
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def clip(text: str | None, limit: int) -> str | None:
    return text[:limit] if text is not None else None


def round_confidence(value: float) -> float:
    """Round half-up to two decimals."""
    return math.floor(value * 100 + 0.5) / 100


def word_count(text: str) -> int:
    """Number of pieces when splitting on whitespace runs."""
    return len(_WHITESPACE.split(text))


def format_price(units: str | None) -> str:
    if units is None:
        return "free"
    return f"${int(units) / PRICE_UNITS_PER_DOLLAR:g}"


def format_overview(
    name: str,
    description: str,
    endpoints: Iterable[tuple[str, str | None, str]],
    timestamp: str,
) -> dict[str, Any]:
    """
    Format the free overview.

    Args:
        endpoints: (key, price in base units, short description) per paid entrypoint
    """
    return {
        "name": name,
        "description": description,
        "capabilities": list(CAPABILITIES),
        "endpoints": {
            key: {"price": format_price(price), "description": summary}
            for key, price, summary in endpoints
        },
        "dataSource": "DBpedia Spotlight + Wikidata (live)",
        "fetchedAt": timestamp,
    }


def format_extraction(
    text: str, entities: Sequence[ExtractedEntity], timestamp: str
) -> dict[str, Any]:
    return {
        "text": truncate_echo(text),
        "entityCount": len(entities),
        "entities": [
            {
                "text": e.text,
                "types": e.type_names,
                "confidence": round_confidence(e.confidence),
            }
            for e in entities
        ],
        "extractedAt": timestamp,
    }


def _annotation_summary(summary: EncyclopediaSummary | None) -> dict[str, Any] | None:
    if summary is None:
        return None
    return {
        "title": summary.title,
        "description": summary.description,
        "extract": clip(summary.extract, ANNOTATE_EXTRACT_LIMIT),
        "wikidataId": summary.wikidata_id,
    }


def format_annotation(
    text: str, enriched: Sequence[EnrichedEntity], timestamp: str
) -> dict[str, Any]:
    return {
        "textLength": len(text),
        "entityCount": len(enriched),
        "entities": [
            {**item.entity.to_dict(), "wikipedia": _annotation_summary(item.summary)}
            for item in enriched
        ],
        "annotatedAt": timestamp,
    }


def format_lookup(
    query: str, results: Sequence[SearchResult], timestamp: str
) -> dict[str, Any]:
    return {
        "query": query,
        "resultCount": len(results),
        "results": [r.to_dict() for r in results],
        "searchedAt": timestamp,
    }


def format_not_found(entity_id: str) -> dict[str, Any]:
    return {"error": "Entity not found", "entityId": entity_id}


def format_details(details: EntityDetails, timestamp: str) -> dict[str, Any]:
    summary = details.summary
    return {
        **details.entity.to_dict(),
        "wikipedia": (
            {"extract": summary.extract, "thumbnail": summary.thumbnail}
            if summary is not None
            else None
        ),
        "fetchedAt": timestamp,
    }


def _top_entity(item: EnrichedEntity) -> dict[str, Any]:
    entity, summary = item.entity, item.summary
    return {
        "text": entity.text,
        "types": entity.type_names,
        "confidence": entity.confidence,
        "dbpediaUrl": entity.dbpedia_url,
        "wikipedia": (
            {
                "title": summary.title,
                "description": summary.description,
                "extract": clip(summary.extract, ANALYZE_EXTRACT_LIMIT),
                "thumbnail": summary.thumbnail,
                "wikidataId": summary.wikidata_id,
            }
            if summary is not None
            else None
        ),
    }


def format_analysis(
    text: str, analysis: TextAnalysis, timestamp: str
) -> dict[str, Any]:
    return {
        "stats": {
            "textLength": len(text),
            "wordCount": word_count(text),
            "totalEntities": len(analysis.entities),
            "uniqueEntities": analysis.unique_entities,
            "typeCounts": dict(analysis.type_counts),
        },
        "topEntities": [_top_entity(item) for item in analysis.top_entities],
        "allEntities": [
            {"text": e.text, "types": e.type_names, "offset": e.offset}
            for e in analysis.entities
        ],
        "analyzedAt": timestamp,
    }
