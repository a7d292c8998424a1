"""
JSON-RPC 2.0 Protocol Models

Implements JSON-RPC 2.0 specification compliant envelope models for
request/response handling, together with the reserved error-code taxonomy
shared by the validator, the method call wrapper and the batch processor.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_serializer,
    model_validator,
)

JSONRPC_VERSION = "2.0"


class JsonRpcErrorCode(int, Enum):
    """Standard JSON-RPC 2.0 error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # Reserved range (-32768 to -32000), owned by the protocol
    RESERVED_MIN = -32768
    RESERVED_MAX = -32000


ERROR_MESSAGES: dict[int, str] = {
    JsonRpcErrorCode.PARSE_ERROR: "Parse error",
    JsonRpcErrorCode.INVALID_REQUEST: "Invalid Request",
    JsonRpcErrorCode.METHOD_NOT_FOUND: "Method not found",
    JsonRpcErrorCode.INVALID_PARAMS: "Invalid params",
    JsonRpcErrorCode.INTERNAL_ERROR: "Internal error",
}


def is_reserved_error_code(code: int) -> bool:
    """Return True if code lies in the reserved band [-32768, -32000]."""
    return JsonRpcErrorCode.RESERVED_MIN <= code <= JsonRpcErrorCode.RESERVED_MAX


def is_valid_identifier(value: Any) -> bool:
    """
    Check whether value may be used as a request or response "id".

    Absent (None), numbers and strings are valid. Booleans, arrays,
    objects and non-finite floats (which cannot be echoed back) are not.
    """
    if value is None:
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return math.isfinite(value)
    return isinstance(value, (int, str))


def is_valid_params(value: Any) -> bool:
    """Check whether value may be used as "params": absent, array or object."""
    return value is None or isinstance(value, (list, dict))


class JsonRpcError(BaseModel):
    """JSON-RPC 2.0 error object."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    code: int = Field(..., description="Error code")
    message: str = Field(..., min_length=1, description="Error message")
    data: Any = Field(None, description="Additional error data")

    @field_validator("code", mode="before")
    @classmethod
    def validate_code(cls, v: Any) -> int:
        """Error codes are plain integers; booleans are rejected."""
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError("Error code must be an integer")
        return int(v)

    @property
    def is_reserved(self) -> bool:
        """Check if the code belongs to the protocol's reserved band."""
        return is_reserved_error_code(self.code)

    @model_serializer(mode="plain")
    def _serialize(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            payload["data"] = self.data
        return payload


class JsonRpcRequest(BaseModel):
    """
    JSON-RPC 2.0 request or notification object.

    The "id" member is tri-state: absent (a notification), explicitly null,
    or a number/string. Presence is tracked through ``model_fields_set`` so
    that ``"id": null`` and a missing "id" stay distinguishable after
    deserialization.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    jsonrpc: Literal["2.0"] = Field(default=JSONRPC_VERSION, description="JSON-RPC version")
    method: str = Field(..., min_length=1, description="Method name to invoke")
    params: list[Any] | dict[str, Any] | None = Field(None, description="Method parameters")
    id: int | float | str | None = Field(None, description="Request identifier (absent for notifications)")

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v: Any) -> Any:
        """Reject booleans, arrays and objects before union coercion kicks in."""
        if not is_valid_identifier(v):
            raise ValueError("id must be a number, a string or null")
        return v

    @field_validator("params", mode="before")
    @classmethod
    def validate_params(cls, v: Any) -> Any:
        """Params must be structured: an array or an object."""
        if not is_valid_params(v):
            raise ValueError("params must be an array or an object")
        return v

    @property
    def is_notification(self) -> bool:
        """Check if this is a notification (no response expected)."""
        return "id" not in self.model_fields_set

    @model_serializer(mode="plain")
    def _serialize(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "method": self.method}
        if self.params is not None:
            payload["params"] = self.params
        if not self.is_notification:
            payload["id"] = self.id
        return payload


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 response object."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    jsonrpc: Literal["2.0"] = Field(default=JSONRPC_VERSION, description="JSON-RPC version")
    result: Any = Field(None, description="Method result (present on success)")
    error: JsonRpcError | None = Field(None, description="Error object (present on error)")
    id: int | float | str | None = Field(..., description="Request identifier")

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v: Any) -> Any:
        if not is_valid_identifier(v):
            raise ValueError("id must be a number, a string or null")
        return v

    @model_validator(mode="after")
    def validate_result_or_error(self) -> JsonRpcResponse:
        """Validate that either result or error is present, but not both."""
        if self.result is not None and self.error is not None:
            raise ValueError("Response cannot have both result and error")
        if self.result is None and self.error is None:
            raise ValueError("Response must have either result or error")
        return self

    @property
    def is_error(self) -> bool:
        """Check if this response carries an error."""
        return self.error is not None

    @model_serializer(mode="plain")
    def _serialize(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION}
        if self.error is not None:
            payload["error"] = self.error.model_dump()
        else:
            payload["result"] = self.result
        payload["id"] = self.id
        return payload


def create_error_response(
    request_id: int | float | str | None,
    error_code: JsonRpcErrorCode | int,
    message: str | None = None,
    data: Any = None,
) -> JsonRpcResponse:
    """Create a standard JSON-RPC error response."""
    error_message = message or ERROR_MESSAGES.get(error_code, "Server error")

    return JsonRpcResponse(
        id=request_id,
        error=JsonRpcError(code=error_code, message=error_message, data=data),
    )


def create_success_response(
    request_id: int | float | str | None,
    result: Any,
) -> JsonRpcResponse:
    """Create a successful JSON-RPC response."""
    return JsonRpcResponse(id=request_id, result=result)


def invalid_params_error(data: Any = None) -> JsonRpcError:
    """
    Build the Invalid Params error a method handler returns on bad input.

    This is the only reserved error code handlers are allowed to use.
    """
    return JsonRpcError(
        code=JsonRpcErrorCode.INVALID_PARAMS,
        message=ERROR_MESSAGES[JsonRpcErrorCode.INVALID_PARAMS],
        data=data,
    )
