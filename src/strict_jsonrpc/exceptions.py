"""Server-side exceptions.

Request-level failures are never raised: they become JSON-RPC error
responses. The exceptions here signal configuration mistakes made while
setting up the server, before any request is served.
"""

from __future__ import annotations

from typing import Any


class JsonRpcServerError(Exception):
    """Base exception for strict_jsonrpc errors.

    Args:
        message: Human-readable error description
        code: JSON-RPC error code (optional)
        data: Additional error data (optional)
    """

    def __init__(
        self,
        message: str,
        code: int | None = None,
        data: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class RegistrationError(JsonRpcServerError):
    """Invalid method registration.

    Raised by MethodRegistry when a name is empty, reserved or already taken,
    when a handler is not callable, or when the registry is already frozen.

    Example:
        >>> registry.register("", handler)
        Traceback (most recent call last):
        ...
        RegistrationError: Method name cannot be empty
    """

    def __init__(self, message: str, method: str | None = None) -> None:
        super().__init__(message, data={"method": method} if method is not None else None)
        self.method = method
