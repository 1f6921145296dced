"""
NER Intel Service Configuration

Configuration settings using pydantic-settings for environment variable support.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class NerIntelConfig(BaseSettings):
    """
    Configuration for the NER Intel service.

    Reads from environment variables with NER_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="NER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server Identity
    server_name: str = Field(
        default="ner-intel",
        description="Server name for identification",
    )
    server_version: str = Field(
        default="1.0.0",
        description="Server version",
    )
    description: str = Field(
        default=(
            "Named Entity Recognition API - extract, classify, and link entities "
            "from text. Uses DBpedia Spotlight for NER and Wikidata for knowledge "
            "linking."
        ),
        description="Human readable service description",
    )

    # HTTP Configuration
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind for HTTP transport",
    )
    port: int = Field(
        default=3000,
        description="Port for HTTP transport",
    )

    # Outbound Requests
    user_agent: str = Field(
        default="ner-intel/1.0",
        description="Client identifier sent on every outbound request",
    )
    timeout_seconds: float = Field(
        default=10.0,
        description="Timeout for external API calls",
    )
    spotlight_url: str = Field(
        default="https://api.dbpedia-spotlight.org/en/annotate",
        description="DBpedia Spotlight annotate endpoint",
    )
    wikidata_api_url: str = Field(
        default="https://www.wikidata.org/w/api.php",
        description="Wikidata action API endpoint",
    )
    wikidata_entity_base_url: str = Field(
        default="https://www.wikidata.org/wiki",
        description="Base URL for public Wikidata entity pages",
    )
    wikipedia_base_url: str = Field(
        default="https://{language}.wikipedia.org",
        description="Wikipedia base URL template, {language} is substituted",
    )
    summary_language: str = Field(
        default="en",
        description="Language used for summaries of extracted entities",
    )

    # Enrichment Bounds
    annotate_enrich_limit: int = Field(
        default=10,
        ge=0,
        description="Entities enriched with a summary by annotate",
    )
    analyze_enrich_limit: int = Field(
        default=5,
        ge=0,
        description="Entities enriched with a summary by analyze",
    )

    # Public Surface
    public_base_url: str = Field(
        default="http://localhost:3000",
        description="Public URL advertised in the registration document",
    )
    icon_path: str = Field(
        default="icon.png",
        description="Path of the icon served at /icon.png",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )


def load_config() -> NerIntelConfig:
    """Load configuration from environment."""
    return NerIntelConfig()
