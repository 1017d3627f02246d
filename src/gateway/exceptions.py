"""Custom exceptions for tool invocation and remote calls."""

from src.exceptions import DispatchError, MCPErrorCodes, MCPGatewayError


class GatewayError(MCPGatewayError):
    """Base exception for gateway-specific errors."""
    pass


class InvalidToolArgumentsError(DispatchError):
    """Raised when tool arguments do not match the tool's input schema.

    Attributes:
        tool_name: Tool being called.
        problems: Every violation found, in one list.
    """

    jsonrpc_code = MCPErrorCodes.INVALID_PARAMS

    def __init__(self, tool_name: str, problems: list[str]):
        super().__init__(
            message=f"Invalid arguments for tool '{tool_name}': {'; '.join(problems)}",
            code="INVALID_ARGUMENTS"
        )
        self.tool_name = tool_name
        self.problems = problems


class RemoteCallError(GatewayError):
    """Base class for transport-level failures of an outbound call.

    Attributes:
        backend_url: Called URL without its query string.
    """

    def __init__(self, backend_url: str, message: str, code: str):
        super().__init__(message=message, code=code)
        self.backend_url = backend_url


class BackendTimeoutError(RemoteCallError):
    """Raised when the remote backend doesn't respond in time.

    Attributes:
        timeout_seconds: Timeout duration that was exceeded.
    """

    def __init__(self, backend_url: str, timeout_seconds: float):
        super().__init__(
            backend_url=backend_url,
            message=f"Backend at '{backend_url}' timed out after {timeout_seconds}s",
            code="BACKEND_TIMEOUT"
        )
        self.timeout_seconds = timeout_seconds


class BackendUnavailableError(RemoteCallError):
    """Raised when the remote backend is unreachable.

    Attributes:
        reason: Description of the connection failure.
    """

    def __init__(self, backend_url: str, reason: str = "Connection failed"):
        super().__init__(
            backend_url=backend_url,
            message=f"Backend at '{backend_url}' is unavailable: {reason}",
            code="BACKEND_UNAVAILABLE"
        )
        self.reason = reason


class InvalidRemoteRequestError(RemoteCallError):
    """Raised when the outbound request cannot be encoded.

    For example a non-ASCII header value or a non-finite number in the body.
    The offending value is never included in the message.
    """

    def __init__(self, backend_url: str, error_type: str):
        super().__init__(
            backend_url=backend_url,
            message=f"Request to '{backend_url}' could not be encoded ({error_type})",
            code="INVALID_REMOTE_REQUEST"
        )
        self.error_type = error_type


class BackendError(RemoteCallError):
    """Raised when the remote backend answers with a body that is not JSON.

    Attributes:
        status_code: HTTP status code from backend.
        detail: Start of the response body.
    """

    def __init__(self, backend_url: str, status_code: int, detail: str = ""):
        super().__init__(
            backend_url=backend_url,
            message=f"Backend at '{backend_url}' returned a non-JSON response ({status_code}): {detail}",
            code="BACKEND_ERROR"
        )
        self.status_code = status_code
        self.detail = detail


class ToolExecutionError(GatewayError):
    """Raised when a tool's remote call fails at the transport level.

    Attributes:
        tool_name: Tool whose call failed.
        cause: Underlying remote call failure.
    """

    def __init__(self, tool_name: str, cause: RemoteCallError):
        super().__init__(
            message=f"Failed to call tool '{tool_name}': {cause.message}",
            code=cause.code
        )
        self.tool_name = tool_name
        self.cause = cause
