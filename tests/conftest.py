"""Root-level pytest configuration for all tests."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from strict_jsonrpc.config import Settings
from strict_jsonrpc.models.jsonrpc import JsonRpcError, invalid_params_error
from strict_jsonrpc.services.jsonrpc_handler import JsonRpcProcessor
from strict_jsonrpc.services.registry import MethodRegistry


def handle_sum(context: Any, params: Any) -> Any:
    if not isinstance(params, list):
        return invalid_params_error("params must be an array of numbers")
    return sum(params)


def handle_subtract(context: Any, params: Any) -> Any:
    if isinstance(params, list) and len(params) == 2:
        return params[0] - params[1]
    if isinstance(params, dict) and {"minuend", "subtrahend"} <= params.keys():
        return params["minuend"] - params["subtrahend"]
    return invalid_params_error("Invalid number of array params")


def handle_notify_hello(context: Any, params: Any) -> Any:
    return ""


async def handle_get_data(context: Any, params: Any) -> Any:
    return ["hello", 5]


def handle_explode(context: Any, params: Any) -> Any:
    raise RuntimeError("boom")


def handle_reserved(context: Any, params: Any) -> Any:
    return JsonRpcError(code=-32601, message="Method not found")


def handle_custom_error(context: Any, params: Any) -> Any:
    return JsonRpcError(code=100, message="custom", data="data")


def handle_echo_params(context: Any, params: Any) -> Any:
    return {"params": params}


async def handle_sleep(context: Any, params: Any) -> Any:
    delay, value = params
    await asyncio.sleep(delay)
    return value


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults, independent of the environment."""
    return Settings(_env_file=None)


@pytest.fixture
def registry() -> MethodRegistry:
    """Registry with well-behaved and misbehaving methods."""
    return MethodRegistry(
        {
            "sum": handle_sum,
            "subtract": handle_subtract,
            "notify_hello": handle_notify_hello,
            "get_data": handle_get_data,
            "explode": handle_explode,
            "reserved": handle_reserved,
            "custom_error": handle_custom_error,
            "echo_params": handle_echo_params,
            "sleep": handle_sleep,
        }
    )


@pytest.fixture
def processor(registry: MethodRegistry, settings: Settings) -> JsonRpcProcessor:
    """Processor over the shared registry."""
    return JsonRpcProcessor(registry, settings)
