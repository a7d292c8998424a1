"""
JSON-RPC 2.0 Request Validator

Decides whether one decoded request envelope is well-formed enough to
attempt dispatch. Validation is pure: it never looks up methods, never logs
and never raises. The reason for a rejection is returned to the caller for
diagnostics only; it is not part of the Invalid Request reply.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from strict_jsonrpc.models.jsonrpc import (
    JSONRPC_VERSION,
    JsonRpcRequest,
    is_valid_identifier,
    is_valid_params,
)

REQUEST_FIELDS = frozenset({"jsonrpc", "method", "params", "id"})


@dataclass(frozen=True)
class RequestValidation:
    """Outcome of validating one request envelope."""

    request: JsonRpcRequest | None = None
    reason: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.request is not None


def _invalid(reason: str) -> RequestValidation:
    return RequestValidation(reason=reason)


def validate_request(raw: Any) -> RequestValidation:
    """
    Validate a single decoded request envelope.

    Checks, in order: the envelope is an object, the version tag is "2.0",
    "method" is a non-empty string, "id" (if present) is a number or string
    or null, "params" (if present) is an array or object or null, and no
    unrecognized top-level members are present.

    Args:
        raw: Decoded JSON value for one envelope

    Returns:
        RequestValidation holding the built request, or the rejection reason
    """
    if not isinstance(raw, dict):
        return _invalid(f"request must be a JSON object, not {type(raw).__name__}")

    if raw.get("jsonrpc") != JSONRPC_VERSION:
        return _invalid(f'"jsonrpc" must be exactly "{JSONRPC_VERSION}"')

    method = raw.get("method")
    if not isinstance(method, str) or not method:
        return _invalid('"method" must be a non-empty string')

    if "id" in raw and not is_valid_identifier(raw["id"]):
        return _invalid('"id" must be a number, a string or null')

    if "params" in raw and not is_valid_params(raw["params"]):
        return _invalid('"params" must be an array or an object')

    unknown = raw.keys() - REQUEST_FIELDS
    if unknown:
        return _invalid(f"unknown field(s): {', '.join(sorted(unknown))}")

    try:
        request = JsonRpcRequest.model_validate(raw)
    except ValidationError as e:
        return _invalid(str(e))

    return RequestValidation(request=request)
