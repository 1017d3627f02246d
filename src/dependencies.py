"""Global dependencies for the application.

Every collaborator is created once in the ``main.py`` lifespan and kept on
``app.state``; these accessors hand them to routes.
"""

from fastapi import Request

from src.gateway.proxy import RemoteInvoker
from src.mcp_transport.sessions import SessionManager
from src.registry.service import ToolRegistry


async def get_registry(request: Request) -> ToolRegistry:
    """Dependency to get the tool registry built at startup."""
    return request.app.state.registry


async def get_session_manager(request: Request) -> SessionManager:
    """Dependency to get the SSE session manager."""
    return request.app.state.sessions


async def get_remote_invoker(request: Request) -> RemoteInvoker:
    """Dependency to get the remote invoker.

    The invoker wraps the shared ``httpx.AsyncClient`` so outbound calls
    reuse pooled connections.
    """
    return request.app.state.remote_invoker
