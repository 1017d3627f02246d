"""Base exceptions and JSON-RPC error codes for the MCP Gateway."""


class MCPErrorCodes:
    """JSON-RPC error codes used on the wire."""

    # JSON-RPC standard errors
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602

    # Downstream/transport failure (reserved server error range)
    SERVER_ERROR = -32000


class MCPGatewayError(Exception):
    """Base exception for all MCP Gateway errors.

    Attributes:
        message: Human-readable error message.
        code: Machine-readable error identifier.
        jsonrpc_code: Numeric code used when the error becomes a JSON-RPC reply.
    """

    jsonrpc_code: int = MCPErrorCodes.SERVER_ERROR

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ProtocolError(MCPGatewayError):
    """Raised when an inbound envelope is not a valid JSON-RPC 2.0 message.

    Rejected before dispatch and answered with an HTTP-level failure.
    """

    jsonrpc_code = MCPErrorCodes.INVALID_REQUEST

    def __init__(self, reason: str = "Invalid JSON-RPC message"):
        super().__init__(message=reason, code="INVALID_REQUEST")
        self.reason = reason


class DispatchError(MCPGatewayError):
    """Raised for errors answered as a JSON-RPC error with HTTP success."""
    pass


class InvalidParamsError(DispatchError):
    """Raised when method parameters are missing or malformed."""

    jsonrpc_code = MCPErrorCodes.INVALID_PARAMS

    def __init__(self, message: str):
        super().__init__(message=message, code="INVALID_PARAMS")
