"""strict_jsonrpc - a strictly conforming JSON-RPC 2.0 server core.

Servers register handlers in a MethodRegistry and hand raw request bytes to
a JsonRpcProcessor. The processor handles single and batch requests, catches
every protocol error and recovers from any exception or invalid return value
of a handler, so handlers only need to report errors specific to their own
method (such as Invalid Params).
"""

__version__ = "0.1.0"

from strict_jsonrpc.exceptions import JsonRpcServerError, RegistrationError
from strict_jsonrpc.models.jsonrpc import (
    JSONRPC_VERSION,
    JsonRpcError,
    JsonRpcErrorCode,
    JsonRpcRequest,
    JsonRpcResponse,
    create_error_response,
    create_success_response,
    invalid_params_error,
    is_valid_identifier,
    is_valid_params,
)
from strict_jsonrpc.services.jsonrpc_handler import JsonRpcProcessor
from strict_jsonrpc.services.method_call import Failure, Success, call_method
from strict_jsonrpc.services.registry import MethodHandler, MethodRegistry

__all__ = [
    "__version__",
    # Models
    "JSONRPC_VERSION",
    "JsonRpcError",
    "JsonRpcErrorCode",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "create_error_response",
    "create_success_response",
    "invalid_params_error",
    "is_valid_identifier",
    "is_valid_params",
    # Services
    "JsonRpcProcessor",
    "MethodHandler",
    "MethodRegistry",
    "call_method",
    "Success",
    "Failure",
    # Exceptions
    "JsonRpcServerError",
    "RegistrationError",
]
