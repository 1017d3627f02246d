"""Gateway module - tool invocation and remote call forwarding."""

from .schemas import (
    RemoteCallSpec,
    RemoteCallResult,
)
from .exceptions import (
    GatewayError,
    InvalidToolArgumentsError,
    RemoteCallError,
    BackendTimeoutError,
    BackendUnavailableError,
    BackendError,
    InvalidRemoteRequestError,
    ToolExecutionError,
)
from .proxy import RemoteInvoker
from .service import invoke_tool, build_remote_call, LOCAL_TOOL_HANDLERS


__all__ = [
    # Schemas
    "RemoteCallSpec",
    "RemoteCallResult",
    # Exceptions
    "GatewayError",
    "InvalidToolArgumentsError",
    "RemoteCallError",
    "BackendTimeoutError",
    "BackendUnavailableError",
    "BackendError",
    "InvalidRemoteRequestError",
    "ToolExecutionError",
    # Invoker
    "RemoteInvoker",
    # Service
    "invoke_tool",
    "build_remote_call",
    "LOCAL_TOOL_HANDLERS",
]
