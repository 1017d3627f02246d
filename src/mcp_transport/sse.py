"""SSE transport implementation for MCP protocol."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse, StreamingResponse
from starlette.background import BackgroundTask

from src.config import Settings, get_settings
from src.dependencies import get_registry, get_remote_invoker, get_session_manager
from src.exceptions import ProtocolError
from src.gateway.proxy import RemoteInvoker
from src.registry.service import ToolRegistry

from .service import dispatch
from .sessions import SSE_HEADERS, SessionManager


router = APIRouter(prefix="", tags=["mcp-sse"])

SESSION_ID_HEADER = "Mcp-Session-Id"


def _protocol_error_response(exc: ProtocolError) -> JSONResponse:
    # Plain body, not a JSON-RPC envelope
    return JSONResponse(status_code=400, content={"error": exc.message})


@router.get("/sse", operation_id="sse_endpoint_get")
async def sse_get_endpoint(
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
) -> StreamingResponse:
    """Establish SSE stream; the first event is the mcp/hello notification."""
    session_id = sessions.open()
    return StreamingResponse(
        sessions.stream(session_id),
        media_type="text/event-stream",
        headers={**SSE_HEADERS, SESSION_ID_HEADER: session_id},
        background=BackgroundTask(sessions.close, session_id),
    )


@router.post("/sse", operation_id="sse_endpoint_post")
async def sse_post_endpoint(
    request: Request,
    registry: Annotated[ToolRegistry, Depends(get_registry)],
    invoker: Annotated[RemoteInvoker, Depends(get_remote_invoker)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Response:
    """Handle JSON-RPC 2.0 messages."""
    try:
        body = await request.json()
    except ValueError:
        return _protocol_error_response(ProtocolError())

    try:
        response = await dispatch(body, registry, invoker, settings)
    except ProtocolError as exc:
        return _protocol_error_response(exc)

    if response is None:
        return Response(status_code=202)
    return JSONResponse(content=response.to_wire())
