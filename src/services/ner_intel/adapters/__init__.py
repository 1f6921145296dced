"""External service adapters for the NER Intel service."""

from .gateway import KnowledgeGateway
from .http import JsonHttpClient

__all__ = [
    "JsonHttpClient",
    "KnowledgeGateway",
]
