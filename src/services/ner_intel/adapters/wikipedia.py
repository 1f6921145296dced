"""
Wikipedia Summary Integration

Page summaries are enrichment: a missing page or failed call returns None.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from ..core.exceptions import ExternalServiceError
from ..core.models import EncyclopediaSummary
from .http import JsonHttpClient

logger = logging.getLogger(__name__)

SERVICE_NAME = "wikipedia"

# Characters left unescaped when a title becomes a single path segment
_TITLE_SAFE = "-_.!~*'()"


def summary_url(base_url: str, title: str, language: str) -> str:
    """Build the REST summary URL for a page title."""
    base = base_url.format(language=language).rstrip("/")
    return f"{base}/api/rest_v1/page/summary/{quote(title, safe=_TITLE_SAFE)}"


def parse_summary(data: dict[str, Any]) -> EncyclopediaSummary:
    return EncyclopediaSummary(
        title=data["title"],
        description=data.get("description") or None,
        extract=data.get("extract"),
        thumbnail=(data.get("thumbnail") or {}).get("source") or None,
        wikidata_id=data.get("wikibase_item") or None,
    )


async def get_summary(
    client: JsonHttpClient,
    base_url: str,
    title: str,
    language: str = "en",
) -> EncyclopediaSummary | None:
    """
    Fetch the summary for a page title.

    Returns:
        EncyclopediaSummary, or None if the page is missing or the call fails
    """
    try:
        data = await client.get_json(SERVICE_NAME, summary_url(base_url, title, language))
        return parse_summary(data)
    except ExternalServiceError as e:
        logger.debug(f"No summary for {title!r}: {e}")
    except (KeyError, TypeError, AttributeError) as e:
        logger.warning(f"Malformed summary response for {title!r}: {e}")

    return None
