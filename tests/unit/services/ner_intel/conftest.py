"""Shared fixtures for NER Intel tests."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.services.ner_intel.config import NerIntelConfig
from tests.unit.services.ner_intel.factories import FROZEN_NOW


@pytest.fixture
def config() -> NerIntelConfig:
    return NerIntelConfig()


@pytest.fixture
def frozen_clock() -> Callable[[], datetime]:
    return lambda: FROZEN_NOW


@pytest.fixture
def fake_gateway(config: NerIntelConfig) -> MagicMock:
    """Gateway double whose lookups all return empty results."""
    gateway = MagicMock()
    gateway.config = config
    gateway.extract_entities = AsyncMock(return_value=[])
    gateway.search_knowledge_graph = AsyncMock(return_value=[])
    gateway.get_knowledge_entity = AsyncMock(return_value=None)
    gateway.get_encyclopedia_summary = AsyncMock(return_value=None)
    gateway.close = AsyncMock()
    return gateway
