"""
FastAPI HTTP Transport for the NER Intel Service

Provides REST endpoints:
- /health - Liveness probe
- / - Service manifest
- /entrypoints - Entrypoint listing with prices and input schemas
- /entrypoints/{key}/invoke - Validate and run one entrypoint
- /icon.png - Service icon
- /.well-known/erc8004.json - Agent registration document

NOTE: Do NOT add `from __future__ import annotations` to this file.
PEP 563 breaks FastAPI's runtime introspection for parameter sources.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse, Response
from pydantic import BaseModel, Field, ValidationError

from ...adapters.gateway import KnowledgeGateway
from ...config import NerIntelConfig
from ...core.exceptions import ExternalServiceError, UnknownEntrypointError
from ...entrypoints import Clock, EntrypointRegistry, create_registry, utc_now

logger = logging.getLogger(__name__)

REGISTRATION_TYPE = "https://eips.ethereum.org/EIPS/eip-8004#registration-v1"


class InvokeRequest(BaseModel):
    """Request body for /entrypoints/{key}/invoke."""

    input: dict[str, Any] = Field(default_factory=dict)


def validation_issues(
    error: ValidationError | RequestValidationError,
) -> list[dict[str, str]]:
    """Flatten pydantic errors into field/message pairs."""
    return [
        {
            "field": ".".join(str(part) for part in issue["loc"]),
            "message": issue["msg"],
            "type": issue["type"],
        }
        for issue in error.errors()
    ]


def build_registration(config: NerIntelConfig) -> dict[str, Any]:
    """Static agent registration document advertised under /.well-known."""
    base_url = config.public_base_url.rstrip("/")
    return {
        "type": REGISTRATION_TYPE,
        "name": config.server_name,
        "description": (
            f"{config.description} 1 free + 5 paid endpoints via x402."
        ),
        "image": f"{base_url}/icon.png",
        "services": [
            {"name": "web", "endpoint": base_url},
            {
                "name": "A2A",
                "endpoint": f"{base_url}/.well-known/agent.json",
                "version": "0.3.0",
            },
        ],
        "x402Support": True,
        "active": True,
        "registrations": [],
        "supportedTrust": ["reputation"],
    }


def create_app(
    config: NerIntelConfig | None = None,
    gateway: KnowledgeGateway | None = None,
    clock: Clock = utc_now,
) -> FastAPI:
    """
    Create a FastAPI application for the NER Intel service.

    Args:
        config: Service configuration
        gateway: Knowledge gateway (built from config when omitted)
        clock: Time source for response timestamps

    Returns:
        FastAPI application instance
    """
    _config = config or NerIntelConfig()
    _gateway = gateway or KnowledgeGateway(_config)
    registry: EntrypointRegistry = create_registry(_gateway, _config, clock)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler."""
        logger.info(f"Starting NER Intel service: {_config.server_name}")
        yield
        logger.info("Shutting down NER Intel service")
        await _gateway.close()

    app = FastAPI(
        title="NER Intel",
        description=_config.description,
        version=_config.server_version,
        lifespan=lifespan,
    )
    app.state.config = _config
    app.state.registry = registry

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"error": "Invalid input", "issues": validation_issues(exc)},
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"error": "Invalid input", "issues": validation_issues(exc)},
        )

    @app.exception_handler(UnknownEntrypointError)
    async def handle_unknown_entrypoint(
        request: Request, exc: UnknownEntrypointError
    ) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(ExternalServiceError)
    async def handle_external_error(request: Request, exc: ExternalServiceError) -> JSONResponse:
        logger.warning(f"External service failure on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=502,
            content={
                "error": str(exc),
                "service": exc.service,
                "status": exc.status_code,
            },
        )

    @app.get("/health")
    async def liveness_check() -> JSONResponse:
        """Liveness probe - just checks if process is alive."""
        return JSONResponse(content={"status": "alive"}, status_code=200)

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with service info."""
        return {
            "name": _config.server_name,
            "version": _config.server_version,
            "description": _config.description,
            "entrypoints": [ep.key for ep in registry],
        }

    @app.get("/entrypoints")
    async def list_entrypoints() -> dict[str, Any]:
        return {"entrypoints": [ep.describe() for ep in registry]}

    @app.post("/entrypoints/{key}/invoke")
    async def invoke_entrypoint(key: str, body: InvokeRequest | None = None) -> dict[str, Any]:
        """Validate input and run the entrypoint."""
        payload = body.input if body is not None else {}
        output = await registry.invoke(key, payload)
        return {"output": output}

    @app.get("/icon.png", response_model=None)
    async def icon() -> Response:
        path = Path(_config.icon_path)
        if path.is_file():
            return FileResponse(path, media_type="image/png")
        return JSONResponse(status_code=404, content={"error": "Icon not found"})

    @app.get("/.well-known/erc8004.json")
    async def registration() -> dict[str, Any]:
        return build_registration(_config)

    return app


async def run_http_server(config: NerIntelConfig | None = None) -> None:
    """
    Run the HTTP server.

    Args:
        config: Service configuration
    """
    _config = config or NerIntelConfig()
    app = create_app(_config)

    logger.info(f"Starting HTTP server on {_config.host}:{_config.port}")

    server_config = uvicorn.Config(
        app,
        host=_config.host,
        port=_config.port,
        log_level=_config.log_level.lower(),
    )
    server = uvicorn.Server(server_config)
    await server.serve()
