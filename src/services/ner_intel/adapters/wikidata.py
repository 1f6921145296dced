"""
Wikidata Integration

Search and per-ID detail lookups against the Wikidata action API.
These are the primary deliverable of their endpoints, so failures
propagate as ExternalServiceError.
"""

from __future__ import annotations

from typing import Any

from ..core.models import KnowledgeEntity, SearchResult
from .http import JsonHttpClient

SERVICE_NAME = "wikidata"

DETAIL_PROPS = "labels|descriptions|claims|sitelinks"

# (property key, Wikidata property id, value field or None for a raw value)
MULTI_VALUED_CLAIMS: tuple[tuple[str, str, str], ...] = (
    ("instanceOf", "P31", "id"),
    ("occupation", "P106", "id"),
)
SINGLE_VALUED_CLAIMS: tuple[tuple[str, str, str | None], ...] = (
    ("country", "P17", "id"),
    ("inception", "P571", "time"),
    ("dateOfBirth", "P569", "time"),
    ("website", "P856", None),
)


def _claim_value(claim: Any, value_field: str | None) -> Any:
    """Dig the datavalue out of a claim, tolerating any missing level."""
    if not isinstance(claim, dict):
        return None
    value = ((claim.get("mainsnak") or {}).get("datavalue") or {}).get("value")
    if value_field is None:
        return value
    if isinstance(value, dict):
        return value.get(value_field)
    return None


def extract_properties(claims: dict[str, list[Any]]) -> dict[str, Any]:
    """
    Reduce a claims map to the fixed semantic property set.

    A key is present only if its claim exists. Multi-valued properties keep
    every non-empty value; single-valued ones take the first claim.
    """
    properties: dict[str, Any] = {}

    for key, pid, value_field in MULTI_VALUED_CLAIMS:
        if claims.get(pid):
            values = [_claim_value(c, value_field) for c in claims[pid]]
            properties[key] = [v for v in values if v]

    for key, pid, value_field in SINGLE_VALUED_CLAIMS:
        if claims.get(pid):
            value = _claim_value(claims[pid][0], value_field)
            if value is not None:
                properties[key] = value

    return properties


def entity_page_url(base_url: str, entity_id: str) -> str:
    return f"{base_url.rstrip('/')}/{entity_id}"


def parse_search_results(data: Any, entity_base_url: str) -> list[SearchResult]:
    """Project a wbsearchentities payload into SearchResult items."""
    items = data.get("search") if isinstance(data, dict) else None
    return [
        SearchResult(
            id=item["id"],
            label=item.get("label"),
            description=item.get("description") or None,
            wikidata_url=entity_page_url(entity_base_url, item["id"]),
        )
        for item in items or []
    ]


def _sitelink_url(sitelink: dict[str, Any] | None, language: str) -> str | None:
    if not sitelink:
        return None
    if sitelink.get("url"):
        return sitelink["url"]
    title = sitelink.get("title")
    if title:
        return f"https://{language}.wikipedia.org/wiki/{title.replace(' ', '_')}"
    return None


def parse_entity(
    data: Any,
    entity_id: str,
    language: str,
    entity_base_url: str,
) -> KnowledgeEntity | None:
    """
    Parse a wbgetentities payload for one ID.

    Returns None when the ID is absent from the response or marked missing.
    """
    entities = data.get("entities") if isinstance(data, dict) else None
    entity = (entities or {}).get(entity_id)
    if not entity or "missing" in entity:
        return None

    labels = entity.get("labels") or {}
    descriptions = entity.get("descriptions") or {}
    sitelinks = entity.get("sitelinks") or {}

    return KnowledgeEntity(
        id=entity.get("id", entity_id),
        label=(labels.get(language) or {}).get("value") or None,
        description=(descriptions.get(language) or {}).get("value") or None,
        properties=extract_properties(entity.get("claims") or {}),
        wikipedia_url=_sitelink_url(sitelinks.get(f"{language}wiki"), language),
        wikidata_url=entity_page_url(entity_base_url, entity_id),
    )


async def search_entities(
    client: JsonHttpClient,
    api_url: str,
    entity_base_url: str,
    query: str,
    limit: int = 5,
    language: str = "en",
) -> list[SearchResult]:
    """
    Search Wikidata for entities by name.

    Raises:
        ExternalServiceError: If the search call fails
    """
    data = await client.get_json(
        SERVICE_NAME,
        api_url,
        params={
            "action": "wbsearchentities",
            "search": query,
            "language": language,
            "format": "json",
            "limit": limit,
        },
    )
    return parse_search_results(data, entity_base_url)


async def get_entity(
    client: JsonHttpClient,
    api_url: str,
    entity_base_url: str,
    entity_id: str,
    language: str = "en",
) -> KnowledgeEntity | None:
    """
    Fetch one Wikidata entity with labels, descriptions, claims and sitelinks.

    Raises:
        ExternalServiceError: If the detail call fails
    """
    data = await client.get_json(
        SERVICE_NAME,
        api_url,
        params={
            "action": "wbgetentities",
            "ids": entity_id,
            "format": "json",
            "props": DETAIL_PROPS,
            "languages": language,
        },
    )
    return parse_entity(data, entity_id, language, entity_base_url)
