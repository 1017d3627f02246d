"""Pydantic schemas for MCP protocol messages."""

from typing import Any, Literal
from pydantic import BaseModel, ConfigDict, Field


class MCPServerInfo(BaseModel):
    """Server identity advertised to clients."""

    name: str
    version: str


class MCPServerDescription(BaseModel):
    """Protocol version, capabilities and identity.

    Shared by the ``initialize`` result and the ``mcp/hello`` notification.
    """

    protocolVersion: str = Field(description="MCP protocol version")
    capabilities: dict[str, Any] = Field(
        default_factory=lambda: {"tools": {"listChanged": False}}
    )
    serverInfo: MCPServerInfo


class MCPTool(BaseModel):
    """MCP tool definition."""

    name: str
    description: str
    inputSchema: dict[str, Any]


class MCPToolListResult(BaseModel):
    """Result for tools/list."""

    tools: list[MCPTool]


class MCPToolCallParams(BaseModel):
    """Parameters for tools/call."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(min_length=1)
    arguments: dict[str, Any] | None = None


class MCPContent(BaseModel):
    """Content item in tool response."""

    type: Literal["text", "image", "resource"]
    text: str | None = None
    data: str | None = None
    mimeType: str | None = None


class MCPToolCallResult(BaseModel):
    """Result for tools/call."""

    content: list[MCPContent]
    isError: bool = False


class MCPJSONRPCRequest(BaseModel):
    """Generic JSON-RPC 2.0 request."""

    jsonrpc: Literal["2.0"]
    id: str | int | None = None
    method: str
    params: dict[str, Any] | list[Any] | None = None


class MCPJSONRPCNotification(BaseModel):
    """JSON-RPC 2.0 notification (no id, no reply expected)."""

    jsonrpc: Literal["2.0"] = "2.0"
    method: str
    params: dict[str, Any] | None = None


class MCPErrorDetail(BaseModel):
    """Error details in JSON-RPC format."""

    code: int
    message: str
    data: Any | None = None


class MCPJSONRPCResponse(BaseModel):
    """Generic JSON-RPC 2.0 response.

    Exactly one of ``result`` or ``error`` is set.
    """

    jsonrpc: Literal["2.0"] = "2.0"
    id: str | int | None = None
    result: Any | None = None
    error: MCPErrorDetail | None = None

    @classmethod
    def success(cls, id: str | int | None, result: Any) -> "MCPJSONRPCResponse":
        return cls(id=id, result=result)

    @classmethod
    def error_response(
        cls,
        id: str | int | None,
        code: int,
        message: str,
        data: Any | None = None,
    ) -> "MCPJSONRPCResponse":
        return cls(id=id, error=MCPErrorDetail(code=code, message=message, data=data))

    def to_wire(self) -> dict[str, Any]:
        """Serialize with ``id`` always present and only one of result/error."""
        wire: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            wire["error"] = self.error.model_dump(exclude_none=True)
        else:
            wire["result"] = self.result
        return wire
