"""
JSON-RPC Method Call Wrapper

Invokes exactly one method handler and guarantees that a valid response
comes out, whatever the handler does. This is the only place in the server
where exceptions raised by application code are intercepted.

A handler is called as ``handler(context, params)`` and may return:

- any JSON-serializable value (or a pydantic model) as the method result
- a JsonRpcError to report a failure to the client
- an explicit Success(value) / Failure(error) outcome

Anything else (raising, returning None or an exception object, returning a
value that does not serialize, or using a reserved error code other than
Invalid Params) is a defect and collapses to a bare Internal Error.
"""

from __future__ import annotations

import inspect
import json
from dataclasses import dataclass
from typing import Any, Callable, Union

import structlog
from pydantic import BaseModel
from pydantic_core import PydanticSerializationError

from strict_jsonrpc.models.jsonrpc import (
    ERROR_MESSAGES,
    JsonRpcError,
    JsonRpcErrorCode,
    JsonRpcResponse,
    create_error_response,
    create_success_response,
)
from strict_jsonrpc.services.registry import MethodHandler

logger = structlog.get_logger()


@dataclass(frozen=True)
class Success:
    """Handler completed and produced a result."""

    value: Any


@dataclass(frozen=True)
class Failure:
    """Handler completed and reported an error to the client."""

    error: JsonRpcError


HandlerOutcome = Union[Success, Failure]


class MethodDefect(Exception):
    """A handler broke the method contract. Never escapes call_method()."""


def _encode_model(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _to_json_value(value: Any, *, what: str, name: str) -> Any:
    """Normalize value to plain JSON data, or raise MethodDefect."""
    try:
        encoded = json.dumps(value, allow_nan=False, default=_encode_model)
    except (TypeError, ValueError) as e:
        raise MethodDefect(f"method {name!r} returned {what} that cannot be serialized: {e}") from e
    return json.loads(encoded)


def _check_wire_encoding(response: JsonRpcResponse, name: str) -> JsonRpcResponse:
    """Encode response with the reply serializer, or raise MethodDefect."""
    try:
        # pydantic-core limits nesting depth more tightly than the json module.
        response.model_dump_json()
    except PydanticSerializationError as e:
        raise MethodDefect(f"method {name!r} produced a reply that cannot be encoded: {e}") from e
    return response


def _render(value: Any, render: Callable[[Any], str] = repr) -> str:
    """Render value for a log field; never raises."""
    try:
        return render(value)
    except Exception:
        return f"<unrenderable {type(value).__name__}>"


def _classify(returned: Any, name: str) -> HandlerOutcome:
    """Turn a raw handler return value into a HandlerOutcome."""
    if isinstance(returned, (Success, Failure)):
        return returned
    if returned is None:
        raise MethodDefect(f"method {name!r} returned None")
    if isinstance(returned, JsonRpcError):
        return Failure(returned)
    if isinstance(returned, BaseException):
        raise MethodDefect(f"method {name!r} returned an unexpected exception: {returned!r}")
    return Success(returned)


def _finalize(outcome: HandlerOutcome, name: str) -> JsonRpcResponse:
    """Sanitize an outcome into a response with no id assigned yet."""
    if isinstance(outcome, Failure):
        error = outcome.error
        if error.code == JsonRpcErrorCode.INVALID_PARAMS:
            # Handlers need not get the canonical message right.
            error = error.model_copy(
                update={"message": ERROR_MESSAGES[JsonRpcErrorCode.INVALID_PARAMS]}
            )
        elif error.is_reserved:
            raise MethodDefect(
                f"method {name!r} returned an error with reserved code {error.code}"
            )
        if error.data is not None:
            data = _to_json_value(error.data, what="error data", name=name)
            error = error.model_copy(update={"data": data})
        return _check_wire_encoding(JsonRpcResponse(id=None, error=error), name)

    if isinstance(outcome, Success):
        result = _to_json_value(outcome.value, what="a result", name=name)
        if result is None:
            raise MethodDefect(f"method {name!r} returned a result that serializes to null")
        return _check_wire_encoding(create_success_response(None, result), name)

    raise MethodDefect(f"method {name!r} produced an unknown outcome: {outcome!r}")


async def call_method(
    handler: MethodHandler,
    params: list[Any] | dict[str, Any] | None,
    *,
    name: str,
    context: Any = None,
    debug: bool = False,
) -> JsonRpcResponse:
    """
    Safely call a method handler.

    Args:
        handler: Registered handler, sync or async
        params: Raw "params" value; None when absent or null
        name: Method name, for diagnostics
        context: Pass-through object from the transport (e.g. the HTTP request)
        debug: Log raw params and return value when the call fails

    Returns:
        Response with exactly one of result or error populated and a null id.
        Assigning the id is the caller's job.
    """
    returned: Any = None
    try:
        pending = handler(context, params)
        returned = await pending if inspect.isawaitable(pending) else pending
        return _finalize(_classify(returned, name), name)
    except Exception as e:
        if debug:
            logger.error(
                "JSON-RPC method failed",
                method=name,
                handler=_render(handler),
                params=params,
                returned=_render(returned),
                error=_render(e, str),
                exc_info=True,
            )
        else:
            logger.error("JSON-RPC method failed", method=name, error=_render(e, str))
        return create_error_response(None, JsonRpcErrorCode.INTERNAL_ERROR)
