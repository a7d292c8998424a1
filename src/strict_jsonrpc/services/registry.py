"""
JSON-RPC Method Registry

Maps method names to handler callables. A registry is built once during
application setup, then frozen before serving begins; after that it is
read-only and safe to share between concurrent requests.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any

import structlog

from strict_jsonrpc.exceptions import RegistrationError

logger = structlog.get_logger()

# Method names beginning with "rpc." are reserved for protocol extensions.
RESERVED_METHOD_PREFIX = "rpc."

# A handler takes (context, params) and returns a result or a JsonRpcError.
# It may be a plain function or a coroutine function.
MethodHandler = Callable[[Any, Any], Any]


class MethodRegistry:
    """
    Name to handler mapping with a build-then-freeze lifecycle.

    Registration errors are configuration errors and raise
    RegistrationError immediately. Lookups never raise: an unknown name
    simply yields None.

    Example:
        >>> registry = MethodRegistry()
        >>> @registry.method("sum")
        ... def handle_sum(context, params):
        ...     return sum(params)
        >>> registry.freeze()
    """

    def __init__(self, methods: Mapping[str, MethodHandler] | None = None) -> None:
        self._methods: dict[str, MethodHandler] = {}
        self._frozen = False
        for name, handler in (methods or {}).items():
            self.register(name, handler)

    @property
    def frozen(self) -> bool:
        """Whether registration is closed."""
        return self._frozen

    def register(self, name: str, handler: MethodHandler) -> None:
        """
        Register a JSON-RPC method handler.

        Args:
            name: Method name (e.g., 'subtract', 'agent.status')
            handler: Callable invoked as handler(context, params)

        Raises:
            RegistrationError: If the registry is frozen, the name is empty,
                reserved or already registered, or the handler is not callable
        """
        if self._frozen:
            raise RegistrationError(
                "Cannot register methods after the registry is frozen", method=name
            )
        if not isinstance(name, str) or not name:
            raise RegistrationError("Method name cannot be empty", method=name)
        if name.startswith(RESERVED_METHOD_PREFIX):
            raise RegistrationError(
                f"Method names starting with '{RESERVED_METHOD_PREFIX}' are reserved",
                method=name,
            )
        if handler is None:
            raise RegistrationError("Method handler cannot be None", method=name)
        if not callable(handler):
            raise RegistrationError("Method handler must be callable", method=name)
        if name in self._methods:
            raise RegistrationError(f"Method '{name}' already registered", method=name)

        self._methods[name] = handler
        logger.debug("Registered JSON-RPC method", method=name)

    def method(self, name: str) -> Callable[[MethodHandler], MethodHandler]:
        """
        Decorator to register a JSON-RPC method handler.

        Usage:
            @registry.method("subtract")
            async def handle_subtract(context, params):
                return params[0] - params[1]
        """

        def decorator(func: MethodHandler) -> MethodHandler:
            self.register(name, func)
            return func

        return decorator

    def freeze(self) -> None:
        """Close registration. Idempotent."""
        if not self._frozen:
            self._frozen = True
            logger.debug("JSON-RPC method registry frozen", method_count=len(self._methods))

    def get(self, name: str) -> MethodHandler | None:
        """Look up a handler by exact name."""
        return self._methods.get(name)

    def names(self) -> list[str]:
        """List registered method names in registration order."""
        return list(self._methods)

    def __contains__(self, name: object) -> bool:
        return name in self._methods

    def __iter__(self) -> Iterator[str]:
        return iter(self._methods)

    def __len__(self) -> int:
        return len(self._methods)
