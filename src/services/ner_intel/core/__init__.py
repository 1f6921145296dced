"""
Core NER Intel logic.

Type normalization, enrichment orchestration and response formatting,
independent of any transport or framework.
"""

from .exceptions import ExternalServiceError, NerIntelError, UnknownEntrypointError
from .models import (
    EncyclopediaSummary,
    ExtractedEntity,
    KnowledgeEntity,
    SearchResult,
    TaxonomyType,
)
from .taxonomy import normalize_types

__all__ = [
    "EncyclopediaSummary",
    "ExternalServiceError",
    "ExtractedEntity",
    "KnowledgeEntity",
    "NerIntelError",
    "SearchResult",
    "TaxonomyType",
    "UnknownEntrypointError",
    "normalize_types",
]
