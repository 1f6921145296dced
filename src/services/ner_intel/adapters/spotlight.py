"""
DBpedia Spotlight Integration

Named entity recognition is delegated entirely to Spotlight's annotate
endpoint. Extraction is enrichment: any failure yields an empty list.
"""

from __future__ import annotations

import logging
from typing import Any

from ..core.exceptions import ExternalServiceError
from ..core.models import ExtractedEntity
from ..core.taxonomy import normalize_types
from .http import JsonHttpClient

logger = logging.getLogger(__name__)

SERVICE_NAME = "spotlight"
DEFAULT_CONFIDENCE = 0.4


def parse_resource(resource: dict[str, Any]) -> ExtractedEntity:
    """Build an ExtractedEntity from one Spotlight ``Resources`` item."""
    uri = resource["@URI"]
    return ExtractedEntity(
        text=resource["@surfaceForm"],
        offset=int(resource["@offset"]),
        uri=uri,
        types=normalize_types(resource.get("@types")),
        confidence=float(resource["@similarityScore"]),
        dbpedia_url=uri,
    )


def parse_annotations(data: Any) -> list[ExtractedEntity]:
    """Parse a Spotlight annotate payload, one entity per well-formed mention."""
    if not isinstance(data, dict) or not data.get("Resources"):
        return []

    resources = data["Resources"]
    if isinstance(resources, dict):
        resources = [resources]

    entities = []
    for resource in resources:
        try:
            entities.append(parse_resource(resource))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed Spotlight resource: {e!r}")
    return entities


async def extract_entities(
    client: JsonHttpClient,
    url: str,
    text: str,
    confidence: float = DEFAULT_CONFIDENCE,
) -> list[ExtractedEntity]:
    """
    Extract named entities from text via Spotlight.

    Args:
        client: Shared JSON client
        url: Spotlight annotate endpoint
        text: Raw text to annotate
        confidence: Minimum confidence (0-1)

    Returns:
        Extracted entities in document order, or [] on any failure
    """
    try:
        data = await client.get_json(
            SERVICE_NAME,
            url,
            params={"text": text, "confidence": confidence},
        )
        return parse_annotations(data)
    except ExternalServiceError as e:
        logger.warning(f"Entity extraction failed: {e}")
    except (KeyError, TypeError, ValueError) as e:
        logger.warning(f"Malformed Spotlight response: {e}")

    return []
