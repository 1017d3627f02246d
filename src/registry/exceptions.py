"""Tool registry exceptions."""

from src.exceptions import DispatchError, MCPErrorCodes, MCPGatewayError


class ToolNotFoundError(DispatchError):
    """Raised when requested tool is not in the registry.

    Attributes:
        tool_name: Name of the tool that was not found.
    """

    jsonrpc_code = MCPErrorCodes.METHOD_NOT_FOUND

    def __init__(self, tool_name: str):
        super().__init__(
            message="Unknown tool",
            code="TOOL_NOT_FOUND"
        )
        self.tool_name = tool_name


class ToolConfigError(MCPGatewayError):
    """Raised at startup when the tool catalogue is inconsistent.

    Attributes:
        tool_name: Offending tool.
        reason: What is wrong with its definition.
    """

    def __init__(self, tool_name: str, reason: str):
        super().__init__(
            message=f"Invalid definition for tool '{tool_name}': {reason}",
            code="TOOL_CONFIG_INVALID"
        )
        self.tool_name = tool_name
        self.reason = reason


class DuplicateToolError(ToolConfigError):
    """Raised when two tools share a name."""

    def __init__(self, tool_name: str):
        super().__init__(tool_name=tool_name, reason="duplicate tool name")
