"""Registry module - Tool definitions and lookup."""

from .schemas import ToolDescriptor, ToolRoute
from .config import ToolRegistryConfig, load_tool_registry
from .exceptions import ToolNotFoundError, ToolConfigError, DuplicateToolError
from .service import ToolRegistry, build_registry


__all__ = [
    "ToolDescriptor",
    "ToolRoute",
    "ToolRegistryConfig",
    "load_tool_registry",
    "ToolNotFoundError",
    "ToolConfigError",
    "DuplicateToolError",
    "ToolRegistry",
    "build_registry",
]
