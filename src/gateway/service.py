"""Service layer for tool invocation: validation, call building and routing."""

import json
import time
from collections.abc import Callable
from typing import Any
from urllib.parse import quote

import structlog

from src.mcp_transport.schemas import MCPContent, MCPToolCallResult
from src.registry.schemas import ToolDescriptor
from src.registry.service import ToolRegistry

from .exceptions import RemoteCallError, ToolExecutionError
from .proxy import RemoteInvoker
from .schemas import RemoteCallSpec
from .validation import validate_arguments


logger = structlog.get_logger(__name__)

JSON_CONTENT_TYPE = "application/json"


def _echo(arguments: dict[str, Any]) -> str:
    message = arguments.get("message")
    return f"Echo: {message}" if isinstance(message, str) else "No message provided"


# Tools answered in-process, without the remote invoker
LOCAL_TOOL_HANDLERS: dict[str, Callable[[dict[str, Any]], str]] = {
    "echo": _echo,
}


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _encode(value: Any) -> str:
    """Percent-encode a value for a path segment or query component."""
    return quote(_stringify(value), safe="")


def build_remote_call(tool: ToolDescriptor, arguments: dict[str, Any]) -> RemoteCallSpec:
    """Turn validated arguments into the tool's outbound call.

    Pure function of the descriptor and the arguments.

    Args:
        tool: Tool with a route.
        arguments: Validated arguments.

    Returns:
        RemoteCallSpec ready for the remote invoker.
    """
    route = tool.route
    if route is None:
        raise ValueError(f"Tool '{tool.name}' has no route")

    path = route.path.format(**{name: _encode(arguments[name]) for name in route.path_params})

    query = "&".join(
        f"{quote(name, safe='')}={_encode(arguments[name])}"
        for name in route.query
        if arguments.get(name) is not None
    )
    if query:
        path = f"{path}?{query}"

    headers = {"accept": JSON_CONTENT_TYPE}
    for header_name, argument_name in route.headers.items():
        if arguments.get(argument_name) is not None:
            headers[header_name] = _stringify(arguments[argument_name])

    body = None
    if route.body:
        placed = route.placed_params
        body = {
            name: arguments[name]
            for name in tool.properties
            if name in arguments and name not in placed
        }
        headers["Content-Type"] = JSON_CONTENT_TYPE

    return RemoteCallSpec(
        tool_name=tool.name,
        target=route.target,
        method=route.method,
        path=path,
        headers=headers,
        body=body,
    )


def _text_result(text: str) -> MCPToolCallResult:
    return MCPToolCallResult(
        content=[MCPContent(type="text", text=text)],
        isError=False,
    )


async def invoke_tool(
    registry: ToolRegistry,
    invoker: RemoteInvoker,
    name: str,
    arguments: dict[str, Any],
) -> MCPToolCallResult:
    """Invoke a tool on behalf of a client.

    This is the main entry point for tool invocation. It:
    1. Looks up the tool in the registry
    2. Validates the arguments against the tool's input schema
    3. Builds the outbound call from the tool's route
    4. Executes it through the remote invoker
    5. Wraps the decoded payload as text content

    Args:
        registry: Tool registry.
        invoker: Remote invoker for outbound calls.
        name: Tool name.
        arguments: Tool arguments.

    Returns:
        MCPToolCallResult with the pretty-printed remote payload.

    Raises:
        ToolNotFoundError: If tool is not in registry.
        InvalidToolArgumentsError: If arguments do not match the schema.
        ToolExecutionError: If the remote call fails at the transport level.
    """
    tool = registry.get(name)

    if tool.local:
        text = LOCAL_TOOL_HANDLERS[tool.name](arguments)
        logger.info("tool_invocation", tool_name=name, status="success", local=True)
        return _text_result(text)

    validate_arguments(tool, arguments)
    spec = build_remote_call(tool, arguments)

    started = time.perf_counter()
    try:
        result = await invoker.invoke(spec)
    except RemoteCallError as e:
        logger.warning(
            "tool_invocation",
            tool_name=name,
            status="error",
            error_code=e.code,
            duration_ms=int((time.perf_counter() - started) * 1000),
        )
        raise ToolExecutionError(tool_name=name, cause=e) from e

    logger.info(
        "tool_invocation",
        tool_name=name,
        status="success",
        remote_status=result.status_code,
        duration_ms=int((time.perf_counter() - started) * 1000),
    )
    return _text_result(json.dumps(result.payload, indent=2, ensure_ascii=False))
