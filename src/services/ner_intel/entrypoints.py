"""
Entrypoints

One class per operation exposed at the service boundary. Each entrypoint
validates its raw input against a pydantic model and then executes against
the knowledge gateway. Pricing is carried as metadata for whatever payment
layer fronts the service.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from datetime import datetime, timezone
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from .adapters.gateway import KnowledgeGateway
from .config import NerIntelConfig
from .core import enrichment, formatting
from .core.exceptions import UnknownEntrypointError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


# Input models
class InputModel(BaseModel):
    """Base for entrypoint inputs. Values must already have the declared JSON type."""

    model_config = ConfigDict(strict=True)


class EmptyInput(InputModel):
    """Input for entrypoints that take no parameters."""


class TextInput(InputModel):
    """Text plus a Spotlight confidence floor."""

    text: str = Field(..., min_length=1, max_length=5000, description="Text to process")
    confidence: float = Field(0.4, ge=0, le=1, description="Confidence threshold (0-1)")


class AnalyzeInput(TextInput):
    text: str = Field(..., min_length=1, max_length=10000, description="Text to analyze")
    confidence: float = Field(0.35, ge=0, le=1, description="Confidence threshold (0-1)")


class LookupInput(InputModel):
    query: str = Field(..., min_length=1, max_length=200, description="Entity name to search for")
    limit: int = Field(5, ge=1, le=20, description="Max results")
    language: str = Field("en", min_length=2, max_length=2, description="Language code")


class DetailsInput(InputModel):
    model_config = ConfigDict(strict=True, populate_by_name=True)

    entity_id: str = Field(
        ...,
        alias="entityId",
        pattern=r"^Q\d+$",
        description="Wikidata entity ID (e.g., Q317521)",
    )
    language: str = Field("en", min_length=2, max_length=2, description="Language code")


class Entrypoint(ABC):
    """
    A single operation: validate raw input, then execute.

    Subclasses set ``key``, ``description``, ``summary`` (short text shown in
    the overview), ``price`` (base units, None when free) and ``input_model``.
    """

    key: ClassVar[str]
    description: ClassVar[str]
    summary: ClassVar[str] = ""
    price: ClassVar[str | None] = None
    input_model: ClassVar[type[BaseModel]] = EmptyInput

    def __init__(
        self,
        gateway: KnowledgeGateway,
        config: NerIntelConfig,
        clock: Clock = utc_now,
    ):
        self._gateway = gateway
        self._config = config
        self._clock = clock

    def validate(self, payload: dict[str, Any]) -> BaseModel:
        """
        Validate raw input.

        Raises:
            pydantic.ValidationError: If any constraint is violated
        """
        return self.input_model.model_validate(payload)

    @abstractmethod
    async def execute(self, params: Any) -> dict[str, Any]:
        """Run the operation on validated input and return the output payload."""

    def timestamp(self) -> str:
        return formatting.iso_timestamp(self._clock())

    def describe(self) -> dict[str, Any]:
        """Registry metadata for listings."""
        return {
            "key": self.key,
            "description": self.description,
            "price": self.price,
            "input": self.input_model.model_json_schema(),
        }


class OverviewEntrypoint(Entrypoint):
    key = "overview"
    description = "Free overview of NER Intel capabilities - try before you buy"

    def __init__(self, registry: EntrypointRegistry, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._registry = registry

    async def execute(self, params: EmptyInput) -> dict[str, Any]:
        paid = [
            (ep.key, ep.price, ep.summary)
            for ep in self._registry
            if ep.price is not None
        ]
        return formatting.format_overview(
            name="NER Intel",
            description="Named Entity Recognition API for extracting and linking entities from text",
            endpoints=paid,
            timestamp=self.timestamp(),
        )


class ExtractEntrypoint(Entrypoint):
    key = "extract"
    description = "Extract named entities from text with types"
    summary = "Extract entities from text"
    price = "1000"
    input_model = TextInput

    async def execute(self, params: TextInput) -> dict[str, Any]:
        entities = await self._gateway.extract_entities(params.text, params.confidence)
        return formatting.format_extraction(params.text, entities, self.timestamp())


class AnnotateEntrypoint(Entrypoint):
    key = "annotate"
    description = "Extract entities and link them to knowledge bases"
    summary = "Extract + link entities with full metadata"
    price = "2000"
    input_model = TextInput

    async def execute(self, params: TextInput) -> dict[str, Any]:
        enriched = await enrichment.annotate_text(
            self._gateway,
            params.text,
            params.confidence,
            limit=self._config.annotate_enrich_limit,
        )
        return formatting.format_annotation(params.text, enriched, self.timestamp())


class LookupEntrypoint(Entrypoint):
    key = "lookup"
    description = "Search for an entity by name in Wikidata"
    summary = "Search for entity by name"
    price = "2000"
    input_model = LookupInput

    async def execute(self, params: LookupInput) -> dict[str, Any]:
        results = await self._gateway.search_knowledge_graph(
            params.query, params.limit, params.language
        )
        return formatting.format_lookup(params.query, results, self.timestamp())


class DetailsEntrypoint(Entrypoint):
    key = "details"
    description = "Get comprehensive details about an entity from Wikidata"
    summary = "Get comprehensive entity details"
    price = "3000"
    input_model = DetailsInput

    async def execute(self, params: DetailsInput) -> dict[str, Any]:
        details = await enrichment.fetch_entity_details(
            self._gateway, params.entity_id, params.language
        )
        if details is None:
            return formatting.format_not_found(params.entity_id)
        return formatting.format_details(details, self.timestamp())


class AnalyzeEntrypoint(Entrypoint):
    key = "analyze"
    description = "Comprehensive text analysis - entities, stats, and classifications"
    summary = "Full text analysis with stats"
    price = "5000"
    input_model = AnalyzeInput

    async def execute(self, params: AnalyzeInput) -> dict[str, Any]:
        analysis = await enrichment.analyze_text(
            self._gateway,
            params.text,
            params.confidence,
            limit=self._config.analyze_enrich_limit,
        )
        return formatting.format_analysis(params.text, analysis, self.timestamp())


class EntrypointRegistry:
    """Ordered collection of entrypoints keyed by ``Entrypoint.key``."""

    def __init__(self) -> None:
        self._entrypoints: dict[str, Entrypoint] = {}

    def register(self, entrypoint: Entrypoint) -> None:
        if entrypoint.key in self._entrypoints:
            raise ValueError(f"Entrypoint already registered: {entrypoint.key}")
        self._entrypoints[entrypoint.key] = entrypoint

    def get(self, key: str) -> Entrypoint:
        try:
            return self._entrypoints[key]
        except KeyError:
            raise UnknownEntrypointError(key) from None

    def __iter__(self) -> Iterator[Entrypoint]:
        return iter(self._entrypoints.values())

    def __len__(self) -> int:
        return len(self._entrypoints)

    def __contains__(self, key: object) -> bool:
        return key in self._entrypoints

    async def invoke(self, key: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Validate and execute an entrypoint.

        Raises:
            UnknownEntrypointError: If ``key`` is not registered
            pydantic.ValidationError: If the payload is invalid (no call is made)
            ExternalServiceError: If a primary external lookup fails
        """
        entrypoint = self.get(key)
        params = entrypoint.validate(payload or {})
        logger.debug(f"Invoking entrypoint {key}")
        return await entrypoint.execute(params)


PAID_ENTRYPOINTS: tuple[type[Entrypoint], ...] = (
    ExtractEntrypoint,
    AnnotateEntrypoint,
    LookupEntrypoint,
    DetailsEntrypoint,
    AnalyzeEntrypoint,
)


def create_registry(
    gateway: KnowledgeGateway,
    config: NerIntelConfig | None = None,
    clock: Clock = utc_now,
) -> EntrypointRegistry:
    """Build the registry with the free overview and every paid entrypoint."""
    config = config or gateway.config
    registry = EntrypointRegistry()
    registry.register(OverviewEntrypoint(registry, gateway, config, clock))
    for entrypoint_cls in PAID_ENTRYPOINTS:
        registry.register(entrypoint_cls(gateway, config, clock))
    return registry
