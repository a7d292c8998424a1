"""
JSON-RPC 2.0 Request Handler Service

Core service for processing JSON-RPC 2.0 messages. Handles parsing, single
vs. batch classification, per-request validation, method routing and
response assembly. Each member of a batch is processed independently, so one
malformed or failing request never affects its siblings.
"""

from __future__ import annotations

import asyncio
import json
import math
from typing import Any

import structlog

from strict_jsonrpc.config import Settings, get_settings
from strict_jsonrpc.models.jsonrpc import (
    JsonRpcErrorCode,
    JsonRpcResponse,
    create_error_response,
)
from strict_jsonrpc.services.method_call import call_method
from strict_jsonrpc.services.registry import MethodRegistry
from strict_jsonrpc.services.validator import validate_request

logger = structlog.get_logger()

JSON_WHITESPACE = " \t\n\r"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


def dump_reply(reply: JsonRpcResponse | list[JsonRpcResponse]) -> bytes:
    """Serialize a single response or a batch of responses to compact JSON."""
    if isinstance(reply, list):
        # Members are encoded one by one, exactly as call_method checked them.
        return b"[" + b",".join(response.model_dump_json().encode("utf-8") for response in reply) + b"]"
    return reply.model_dump_json().encode("utf-8")


class JsonRpcProcessor:
    """
    JSON-RPC 2.0 request processor.

    Handles the complete request/response lifecycle including:
    - Request parsing and single/batch classification
    - Structural validation of every request
    - Method routing through a frozen MethodRegistry
    - Safe handler invocation and response sanitizing
    - Suppression of replies to notifications
    """

    def __init__(self, registry: MethodRegistry, settings: Settings | None = None) -> None:
        """
        Initialize the JSON-RPC processor.

        The registry is frozen here: no methods can be added once serving
        can begin.
        """
        self.registry = registry
        self.settings = settings or get_settings()
        registry.freeze()

    @property
    def methods(self) -> list[str]:
        """Names of all registered methods."""
        return self.registry.names()

    async def process_raw_message(
        self, raw_data: str | bytes, context: Any = None
    ) -> bytes | None:
        """
        Process a raw JSON-RPC message.

        Args:
            raw_data: Raw JSON text or UTF-8 bytes
            context: Pass-through object handed to every method handler

        Returns:
            JSON reply bytes, or None when no reply is due
        """
        try:
            if isinstance(raw_data, (bytes, bytearray)):
                raw_data = bytes(raw_data).decode("utf-8")
            parsed_data = json.loads(
                raw_data, parse_constant=_reject_constant, parse_float=_parse_finite_float
            )
        except (ValueError, RecursionError) as e:
            logger.warning("JSON parse error", error=str(e))
            return dump_reply(create_error_response(None, JsonRpcErrorCode.PARSE_ERROR))

        is_batch = raw_data.lstrip(JSON_WHITESPACE).startswith("[")
        reply = await self.process_message(parsed_data, context, batch=is_batch)

        if reply is None:
            return None
        return dump_reply(reply)

    async def process_message(
        self,
        data: Any,
        context: Any = None,
        *,
        batch: bool | None = None,
    ) -> JsonRpcResponse | list[JsonRpcResponse] | None:
        """
        Process a parsed JSON-RPC message.

        Args:
            data: Parsed JSON data (single request or batch)
            context: Pass-through object handed to every method handler
            batch: Force the message shape; inferred from data when None

        Returns:
            A single response, a list of responses for a batch, or None when
            every request was a notification
        """
        if batch is None or not isinstance(data, list):
            batch = isinstance(data, list)

        members = data if batch else [data]

        if batch and not members:
            logger.warning("Empty JSON-RPC batch")
            return create_error_response(None, JsonRpcErrorCode.INVALID_REQUEST)

        if batch and self.settings.concurrent_batches:
            # gather() keeps results in submission order.
            results = await asyncio.gather(
                *(self._process_single_request(member, context) for member in members)
            )
        else:
            results = [await self._process_single_request(member, context) for member in members]

        responses = [response for response in results if response is not None]

        if not responses:
            return None
        if not batch:
            return responses[0]
        return responses

    async def _process_single_request(
        self, request_data: Any, context: Any
    ) -> JsonRpcResponse | None:
        """Process a single JSON-RPC request. Never raises."""
        validation = validate_request(request_data)
        if not validation.is_valid:
            logger.warning("Request validation failed", reason=validation.reason)
            return create_error_response(None, JsonRpcErrorCode.INVALID_REQUEST)

        request = validation.request
        request_id = request.id

        handler = self.registry.get(request.method)
        if handler is None:
            logger.warning(
                "JSON-RPC method not found",
                method=request.method,
                request_id=request_id,
                is_notification=request.is_notification,
            )
            if request.is_notification:
                return None
            return create_error_response(
                request_id, JsonRpcErrorCode.METHOD_NOT_FOUND, data=request.method
            )

        logger.debug(
            "Processing JSON-RPC request",
            method=request.method,
            request_id=request_id,
            is_notification=request.is_notification,
        )

        # A literal null "params" reaches the handler as None, same as absent.
        response = await call_method(
            handler,
            request.params,
            name=request.method,
            context=context,
            debug=self.settings.debug_methods,
        )

        if request.is_notification:
            return None
        return response.model_copy(update={"id": request_id})
