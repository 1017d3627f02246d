"""Business logic for MCP protocol handlers."""

import copy
from typing import Any

import structlog
from pydantic import ValidationError

from src.config import Settings
from src.exceptions import InvalidParamsError, MCPErrorCodes, MCPGatewayError, ProtocolError
from src.gateway.proxy import RemoteInvoker
from src.gateway.service import invoke_tool
from src.registry.schemas import ToolDescriptor
from src.registry.service import ToolRegistry

from .schemas import (
    MCPJSONRPCNotification,
    MCPJSONRPCRequest,
    MCPJSONRPCResponse,
    MCPServerDescription,
    MCPServerInfo,
    MCPTool,
    MCPToolCallParams,
    MCPToolCallResult,
    MCPToolListResult,
)


logger = structlog.get_logger(__name__)


def _server_description(settings: Settings) -> MCPServerDescription:
    return MCPServerDescription(
        protocolVersion=settings.MCP_PROTOCOL_VERSION,
        serverInfo=MCPServerInfo(
            name=settings.MCP_SERVER_NAME,
            version=settings.MCP_SERVER_VERSION,
        ),
    )


def build_hello_notification(settings: Settings) -> dict[str, Any]:
    """The ``mcp/hello`` notification pushed first on every SSE session."""
    return MCPJSONRPCNotification(
        method="mcp/hello",
        params=_server_description(settings).model_dump(),
    ).model_dump()


def _to_mcp_tool(tool: ToolDescriptor) -> MCPTool:
    return MCPTool(
        name=tool.name,
        description=tool.description,
        inputSchema=copy.deepcopy(tool.input_schema),
    )


def parse_envelope(body: Any) -> MCPJSONRPCRequest:
    """Validate a raw JSON-RPC envelope.

    Raises:
        ProtocolError: If the body is not a JSON-RPC 2.0 request object.
    """
    if not isinstance(body, dict) or body.get("jsonrpc") != "2.0":
        raise ProtocolError()
    try:
        return MCPJSONRPCRequest(**body)
    except ValidationError as e:
        raise ProtocolError() from e


def _parse_tool_call_params(params: Any) -> tuple[str, dict[str, Any]]:
    if not isinstance(params, dict) or not params.get("name"):
        raise InvalidParamsError("Missing tool name")
    try:
        call_params = MCPToolCallParams(**params)
    except ValidationError as e:
        fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in e.errors())
        raise InvalidParamsError(f"Invalid tool call parameters: {fields}") from e
    return call_params.name, call_params.arguments or {}


async def handle_initialize(settings: Settings) -> dict[str, Any]:
    """Handle initialize request.

    Client parameters are accepted but not used.

    Returns:
        Server initialization response.
    """
    return _server_description(settings).model_dump()


async def handle_tools_list(registry: ToolRegistry) -> MCPToolListResult:
    """Handle tools/list request.

    Args:
        registry: Tool registry.

    Returns:
        Every registered tool, in registration order, schemas as declared.
    """
    return MCPToolListResult(tools=[_to_mcp_tool(tool) for tool in registry.list()])


async def handle_tools_call(
    registry: ToolRegistry,
    invoker: RemoteInvoker,
    name: str,
    arguments: dict[str, Any],
) -> MCPToolCallResult:
    """Handle tools/call request.

    Args:
        registry: Tool registry.
        invoker: Remote invoker for outbound calls.
        name: Tool name to invoke.
        arguments: Tool arguments.

    Returns:
        Tool execution result.
    """
    return await invoke_tool(registry=registry, invoker=invoker, name=name, arguments=arguments)


async def dispatch(
    body: Any,
    registry: ToolRegistry,
    invoker: RemoteInvoker,
    settings: Settings,
) -> MCPJSONRPCResponse | None:
    """Route one JSON-RPC envelope and build its reply.

    Args:
        body: Decoded request body.
        registry: Tool registry.
        invoker: Remote invoker for outbound calls.
        settings: Application settings.

    Returns:
        The reply, or None for a notification.

    Raises:
        ProtocolError: If the envelope is malformed; nothing is dispatched.
    """
    request = parse_envelope(body)
    method = request.method

    if "id" not in body:
        # Notifications (e.g. notifications/initialized) get no reply
        logger.debug("jsonrpc_notification", method=method)
        return None

    try:
        if method == "initialize":
            result = await handle_initialize(settings)

        elif method == "tools/list":
            result = (await handle_tools_list(registry)).model_dump()

        elif method == "tools/call":
            name, arguments = _parse_tool_call_params(request.params)
            call_result = await handle_tools_call(registry, invoker, name, arguments)
            result = call_result.model_dump(exclude_none=True)

        else:
            return MCPJSONRPCResponse.error_response(
                id=request.id,
                code=MCPErrorCodes.METHOD_NOT_FOUND,
                message="Method not found",
            )

    except MCPGatewayError as e:
        logger.info("jsonrpc_error", method=method, error_code=e.code, jsonrpc_code=e.jsonrpc_code)
        return MCPJSONRPCResponse.error_response(
            id=request.id,
            code=e.jsonrpc_code,
            message=e.message,
        )
    except Exception as e:
        # No traceback: frame locals hold pass-through tokens
        logger.error("jsonrpc_internal_error", method=method, error_type=type(e).__name__)
        return MCPJSONRPCResponse.error_response(
            id=request.id,
            code=MCPErrorCodes.SERVER_ERROR,
            message=f"Internal error: {type(e).__name__}",
        )

    return MCPJSONRPCResponse.success(id=request.id, result=result)
