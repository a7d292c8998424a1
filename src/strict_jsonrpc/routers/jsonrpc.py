"""
JSON-RPC 2.0 API Router

FastAPI router binding the JSON-RPC processor to HTTP. The router has no
protocol awareness: it reads the raw body, hands the bytes to the processor
and writes back whatever bytes come out, or nothing.
"""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request, Response, status

from strict_jsonrpc.config import get_settings
from strict_jsonrpc.models.jsonrpc import JsonRpcErrorCode, create_error_response
from strict_jsonrpc.services.jsonrpc_handler import JsonRpcProcessor, dump_reply

logger = structlog.get_logger()

JSON_MEDIA_TYPE = "application/json"


def get_processor(request: Request) -> JsonRpcProcessor:
    """Fetch the processor installed on the application by create_app()."""
    return request.app.state.jsonrpc_processor


def build_router(endpoint_path: str | None = None) -> APIRouter:
    """
    Build the JSON-RPC router.

    Args:
        endpoint_path: Route of the JSON-RPC endpoint (defaults to settings)

    Returns:
        Router exposing POST {path} and GET {path}/methods
    """
    path = endpoint_path if endpoint_path is not None else get_settings().endpoint_path
    router = APIRouter()

    @router.post(path, summary="JSON-RPC 2.0 Endpoint")
    async def jsonrpc_endpoint(request: Request) -> Response:
        """
        Main JSON-RPC 2.0 endpoint.

        Accepts both single requests and batch requests. Returns 204 when
        every request in the message was a notification.
        """
        client_ip = request.client.host if request.client else "unknown"

        try:
            body = await request.body()
        except Exception as e:
            logger.warning("Failed to read JSON-RPC request body", client_ip=client_ip, error=str(e))
            reply = create_error_response(None, JsonRpcErrorCode.INVALID_REQUEST)
            return Response(content=dump_reply(reply), media_type=JSON_MEDIA_TYPE)

        logger.info(
            "Received JSON-RPC request",
            client_ip=client_ip,
            user_agent=request.headers.get("user-agent", "unknown"),
            content_type=request.headers.get("content-type"),
            content_length=len(body),
        )

        reply_bytes = await get_processor(request).process_raw_message(body, context=request)

        if reply_bytes is None:
            # Notification - no response expected
            return Response(status_code=status.HTTP_204_NO_CONTENT)

        return Response(content=reply_bytes, media_type=JSON_MEDIA_TYPE)

    @router.get(f"{path}/methods", summary="List JSON-RPC Methods")
    async def list_jsonrpc_methods(request: Request) -> dict[str, list[str]]:
        """List all registered JSON-RPC methods."""
        return {"methods": get_processor(request).methods}

    return router
