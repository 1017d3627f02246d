"""Static tool catalogue loader."""

from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, Field

from .schemas import ToolDescriptor


logger = structlog.get_logger(__name__)

DEFAULT_TOOLS_CONFIG = Path(__file__).parent.parent.parent / "config" / "tools.yaml"


class ToolRegistryConfig(BaseModel):
    """Container for tool definitions, in declaration order."""

    tools: list[ToolDescriptor] = Field(default_factory=list)


def load_tool_registry(config_path: str | None = None) -> ToolRegistryConfig:
    """Load the tool catalogue from YAML.

    Args:
        config_path: Optional custom path for the catalogue. When given, the
            file must exist.

    Returns:
        Parsed ToolRegistryConfig, or an empty config if the default file is missing.

    Raises:
        FileNotFoundError: If an explicit ``config_path`` does not exist.
    """
    if config_path is None:
        path = DEFAULT_TOOLS_CONFIG
        if not path.exists():
            logger.warning("tools_config_missing", path=str(path))
            return ToolRegistryConfig()
    else:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Tool catalogue not found: {path}")

    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    return ToolRegistryConfig(**data)
