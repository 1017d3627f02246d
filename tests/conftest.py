# Test configuration
import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

REPO_ROOT = Path(__file__).parent.parent

# Add repo root to path so tests can import modules
sys.path.insert(0, str(REPO_ROOT))

from src.config import Settings  # noqa: E402
from src.gateway.proxy import RemoteInvoker  # noqa: E402
from src.gateway.service import LOCAL_TOOL_HANDLERS  # noqa: E402
from src.registry import build_registry, load_tool_registry  # noqa: E402

TOOLS_CONFIG = REPO_ROOT / "config" / "tools.yaml"
BACKEND_URL = "https://backend.test"
GATEWAY_URL = "http://gateway.test"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        MCP_PROTOCOL_VERSION="2025-06-18",
        MCP_SERVER_NAME="sample-mcp-node",
        MCP_SERVER_VERSION="1.0.0",
        BACKEND_BASE_URL=BACKEND_URL,
        GATEWAY_BASE_URL=GATEWAY_URL,
    )


@pytest.fixture
def registry():
    return build_registry(load_tool_registry(str(TOOLS_CONFIG)), local_handlers=LOCAL_TOOL_HANDLERS)


@pytest.fixture
def http_client() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def invoker(http_client) -> RemoteInvoker:
    return RemoteInvoker(
        client=http_client,
        base_urls={"backend": BACKEND_URL, "gateway": GATEWAY_URL},
        timeout=5.0,
    )
