"""
Example JSON-RPC server exposing a few arithmetic methods.

Run with any ASGI server, e.g.:

    uvicorn examples.arithmetic_server:app --port 8080

Then:

    curl -s localhost:8080/api/v1/jsonrpc \
        -d '{"jsonrpc":"2.0","method":"subtract","params":[42,23],"id":1}'
"""

from __future__ import annotations

from typing import Any

from strict_jsonrpc import MethodRegistry, invalid_params_error
from strict_jsonrpc.main import create_app

registry = MethodRegistry()


def _numbers(values: Any) -> bool:
    return all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in values)


@registry.method("subtract")
def subtract(context: Any, params: Any) -> Any:
    """Accepts [minuend, subtrahend] or {"minuend": .., "subtrahend": ..}."""
    if isinstance(params, list):
        if len(params) != 2 or not _numbers(params):
            return invalid_params_error("Invalid number of array params")
        return params[0] - params[1]
    if isinstance(params, dict):
        minuend, subtrahend = params.get("minuend"), params.get("subtrahend")
        if minuend is None or subtrahend is None or not _numbers([minuend, subtrahend]):
            return invalid_params_error('Required fields "subtrahend" and "minuend" must be valid numbers.')
        return minuend - subtrahend
    return invalid_params_error("params required")


@registry.method("sum")
def add(context: Any, params: Any) -> Any:
    if not isinstance(params, list) or not _numbers(params):
        return invalid_params_error("params must be an array of numbers")
    return sum(params)


@registry.method("notify_hello")
def notify_hello(context: Any, params: Any) -> Any:
    return ""


@registry.method("get_data")
async def get_data(context: Any, params: Any) -> Any:
    return ["hello", 5]


app = create_app(registry)
