import logging
import time

import httpx
import structlog
import uvicorn
from fastapi import FastAPI
from contextlib import asynccontextmanager
from .config import get_settings
from .gateway.proxy import RemoteInvoker
from .gateway.service import LOCAL_TOOL_HANDLERS
from .registry import build_registry, load_tool_registry
from .mcp_transport.service import build_hello_notification
from .mcp_transport.sessions import SessionManager
from src.mcp_transport.sse import router as mcp_sse_router


settings = get_settings()
logger = structlog.get_logger(__name__)


def configure_logging(level: str) -> None:
    """Apply the configured log level to stdlib logging and structlog."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format="%(message)s")
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(numeric_level))


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.MCP_LOG_LEVEL)

    # Startup: build the tool registry once; a bad catalogue stops the process
    app.state.registry = build_registry(
        load_tool_registry(settings.TOOLS_CONFIG_PATH),
        local_handlers=LOCAL_TOOL_HANDLERS,
    )
    app.state.sessions = SessionManager(
        hello=build_hello_notification(settings),
        keepalive_seconds=settings.SSE_KEEPALIVE_SECONDS,
    )

    # Timeouts are applied per request by the remote invoker
    app.state.http_client = httpx.AsyncClient(timeout=None)
    app.state.remote_invoker = RemoteInvoker(
        client=app.state.http_client,
        base_urls={
            "backend": settings.BACKEND_BASE_URL,
            "gateway": settings.gateway_base_url,
        },
        timeout=settings.REMOTE_TIMEOUT_SECONDS,
    )
    logger.info("gateway_started", tools=len(app.state.registry), port=settings.PORT)

    yield

    # Shutdown: end open streams and close the HTTP client
    app.state.sessions.close_all()
    await app.state.http_client.aclose()

app = FastAPI(
    title=settings.APP_NAME,
    lifespan=lifespan,
    debug=settings.DEBUG
)

@app.get("/")
async def root():
    return {"message": "MCP server running!"}

@app.get("/api/ping")
async def api_ping():
    return {"status": "ok", "timestamp": int(time.time() * 1000)}

@app.get("/health")
async def health_check():
    return {"status": "ok", "app": settings.APP_NAME}

# Include routers
app.include_router(mcp_sse_router)


if __name__ == "__main__":
    uvicorn.run("src.main:app", host=settings.HOST, port=settings.PORT)
