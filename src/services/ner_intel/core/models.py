"""
NER Intel Models

Data classes for extracted and linked entities. All instances are
request-scoped and immutable; ``to_dict`` yields the camelCase wire shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TaxonomyType(str, Enum):
    """Closed set of entity categories vendor types are normalized into."""

    PERSON = "PERSON"
    ORG = "ORG"
    LOCATION = "LOCATION"
    WORK = "WORK"
    EVENT = "EVENT"
    PRODUCT = "PRODUCT"
    SPECIES = "SPECIES"
    MEDICAL = "MEDICAL"
    CHEMICAL = "CHEMICAL"
    ENTITY = "ENTITY"  # Fallback when nothing matched


@dataclass(frozen=True)
class ExtractedEntity:
    """
    One mention detected by the NER service.
    """

    text: str  # Surface form (e.g., "Berlin")
    offset: int  # Character offset in the source text
    uri: str  # Knowledge-base resource URI
    types: tuple[TaxonomyType, ...] = (TaxonomyType.ENTITY,)
    confidence: float = 0.0
    dbpedia_url: str = ""

    @property
    def type_names(self) -> list[str]:
        return [t.value for t in self.types]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "text": self.text,
            "offset": self.offset,
            "uri": self.uri,
            "types": self.type_names,
            "confidence": self.confidence,
            "dbpediaUrl": self.dbpedia_url,
        }


@dataclass(frozen=True)
class SearchResult:
    """Lightweight knowledge-graph search hit."""

    id: str
    label: str | None
    description: str | None
    wikidata_url: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "wikidataUrl": self.wikidata_url,
        }


@dataclass(frozen=True)
class KnowledgeEntity:
    """
    A knowledge-graph record reduced to a handful of semantic properties.

    ``properties`` only carries keys whose claim existed in the source
    record (instanceOf, occupation, country, inception, dateOfBirth, website).
    """

    id: str
    label: str | None = None
    description: str | None = None
    properties: dict[str, Any] = field(default_factory=dict)
    wikipedia_url: str | None = None
    wikidata_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "properties": dict(self.properties),
            "wikipediaUrl": self.wikipedia_url,
            "wikidataUrl": self.wikidata_url,
        }


@dataclass(frozen=True)
class EncyclopediaSummary:
    """Short page summary from the encyclopedia service."""

    title: str
    description: str | None
    extract: str | None
    thumbnail: str | None = None
    wikidata_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "extract": self.extract,
            "thumbnail": self.thumbnail,
            "wikidataId": self.wikidata_id,
        }
