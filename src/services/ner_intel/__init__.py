"""
NER Intel Service

Named entity recognition API: extracts entities from text with DBpedia
Spotlight and links them to Wikidata and Wikipedia.

Usage:
    # As a service
    python -m src.services.ner_intel --port 3000

    # Programmatic
    from src.services.ner_intel import KnowledgeGateway, create_registry
"""

__version__ = "1.0.0"

from .adapters.gateway import KnowledgeGateway
from .config import NerIntelConfig
from .core.models import TaxonomyType
from .core.taxonomy import normalize_types
from .entrypoints import EntrypointRegistry, create_registry

__all__ = [
    "EntrypointRegistry",
    "KnowledgeGateway",
    "NerIntelConfig",
    "TaxonomyType",
    "create_registry",
    "normalize_types",
]
