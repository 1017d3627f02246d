from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

class Settings(BaseSettings):
    # App
    APP_NAME: str = "MCP Gateway"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # MCP
    MCP_PROTOCOL_VERSION: str = "2025-06-18"
    MCP_SERVER_NAME: str = "sample-mcp-node"
    MCP_SERVER_VERSION: str = "1.0.0"
    MCP_LOG_LEVEL: str = "INFO"
    SSE_KEEPALIVE_SECONDS: float = 30.0

    # Remote calls
    BACKEND_BASE_URL: str = "https://hushh-api-53407187172.us-central1.run.app"
    # Empty means http://localhost:{PORT}
    GATEWAY_BASE_URL: str = ""
    REMOTE_TIMEOUT_SECONDS: float = 30.0

    # Tool catalogue
    TOOLS_CONFIG_PATH: str | None = None

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def gateway_base_url(self) -> str:
        """Base address the gateway uses to call its own routes."""
        return self.GATEWAY_BASE_URL or f"http://localhost:{self.PORT}"

@lru_cache()
def get_settings() -> Settings:
    return Settings()
