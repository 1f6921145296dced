"""
Type Normalization

Maps vendor type annotations (e.g. "Http://xmlns.com/foaf/0.1/Person,
DBpedia:Place") onto the closed TaxonomyType set.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from .models import TaxonomyType

VENDOR_TYPES: Final[Mapping[str, TaxonomyType]] = MappingProxyType(
    {
        "Person": TaxonomyType.PERSON,
        "Organisation": TaxonomyType.ORG,
        "Organization": TaxonomyType.ORG,
        "Company": TaxonomyType.ORG,
        "Place": TaxonomyType.LOCATION,
        "Location": TaxonomyType.LOCATION,
        "Country": TaxonomyType.LOCATION,
        "City": TaxonomyType.LOCATION,
        "Work": TaxonomyType.WORK,
        "Event": TaxonomyType.EVENT,
        "Product": TaxonomyType.PRODUCT,
        "MeanOfTransportation": TaxonomyType.PRODUCT,
        "Automobile": TaxonomyType.PRODUCT,
        "Software": TaxonomyType.PRODUCT,
        "Species": TaxonomyType.SPECIES,
        "Disease": TaxonomyType.MEDICAL,
        "Drug": TaxonomyType.MEDICAL,
        "ChemicalSubstance": TaxonomyType.CHEMICAL,
    }
)


def lookup_vendor_type(token: str) -> TaxonomyType | None:
    """
    Map a single vendor type token to the taxonomy.

    The namespace prefix is stripped first: everything up to the last colon
    ("DBpedia:Place") and, for URI-style tokens, up to the last slash
    ("Http://xmlns.com/foaf/0.1/Person").
    Returns None when the suffix is not a known vendor type.
    """
    suffix = token.strip().rsplit(":", 1)[-1].rsplit("/", 1)[-1]
    return VENDOR_TYPES.get(suffix)


def normalize_types(raw_types: str | None) -> tuple[TaxonomyType, ...]:
    """
    Normalize a comma-separated vendor type string.

    Unknown tokens are ignored. The result is never empty: if nothing
    matched, it is the singleton (ENTITY,).

    Args:
        raw_types: Vendor type string, possibly empty or None

    Returns:
        Deduplicated taxonomy types in first-seen order
    """
    normalized: dict[TaxonomyType, None] = {}
    for token in (raw_types or "").split(","):
        mapped = lookup_vendor_type(token)
        if mapped is not None:
            normalized[mapped] = None

    if not normalized:
        return (TaxonomyType.ENTITY,)
    return tuple(normalized)
