"""
JSON-RPC Server - FastAPI Application

Application factory wiring a method registry, the JSON-RPC processor and the
HTTP router together.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI

from strict_jsonrpc import __version__
from strict_jsonrpc.config import Settings, get_settings
from strict_jsonrpc.routers.jsonrpc import build_router
from strict_jsonrpc.services.jsonrpc_handler import JsonRpcProcessor
from strict_jsonrpc.services.registry import MethodRegistry

logger = structlog.get_logger()


def create_app(registry: MethodRegistry, settings: Settings | None = None) -> FastAPI:
    """
    Create a FastAPI application serving the given methods.

    The registry is frozen by the processor; register every method before
    calling this.

    Example:
        >>> registry = MethodRegistry()
        >>> registry.register("ping", lambda context, params: "pong")
        >>> app = create_app(registry)
    """
    settings = settings or get_settings()

    app = FastAPI(title=settings.service_name, version=__version__)
    app.state.jsonrpc_processor = JsonRpcProcessor(registry, settings)
    app.include_router(build_router(settings.endpoint_path), prefix=settings.api_prefix)

    logger.info(
        "JSON-RPC application created",
        service=settings.service_name,
        endpoint=f"{settings.api_prefix}{settings.endpoint_path}",
        method_count=len(registry),
    )
    return app
