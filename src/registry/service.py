"""Tool registry: an immutable, ordered catalogue of tool descriptors."""

from collections.abc import Collection, Iterable
from types import MappingProxyType

import structlog
from jsonschema import exceptions as jsonschema_exceptions, validators as jsonschema_validators

from .config import ToolRegistryConfig
from .exceptions import DuplicateToolError, ToolConfigError, ToolNotFoundError
from .schemas import ToolDescriptor


logger = structlog.get_logger(__name__)


class ToolRegistry:
    """Read-only tool catalogue built once at startup.

    Iteration order is registration order. The registry is never mutated
    after construction, so it is shared across requests without locking.
    """

    def __init__(self, tools: Iterable[ToolDescriptor]) -> None:
        by_name: dict[str, ToolDescriptor] = {}
        for tool in tools:
            if tool.name in by_name:
                raise DuplicateToolError(tool.name)
            by_name[tool.name] = tool
        self._tools = tuple(by_name.values())
        self._by_name = MappingProxyType(by_name)

    def list(self) -> list[ToolDescriptor]:
        """Return every tool in registration order."""
        return list(self._tools)

    def get(self, name: str) -> ToolDescriptor:
        """Look up a tool by name.

        Raises:
            ToolNotFoundError: If no tool has that name.
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise ToolNotFoundError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._tools)


def _check_schema(tool: ToolDescriptor) -> None:
    schema = tool.input_schema
    if schema.get("type") != "object":
        raise ToolConfigError(tool.name, "input_schema must be of type 'object'")
    try:
        validator_cls = jsonschema_validators.validator_for(schema)
        validator_cls.check_schema(schema)
    except jsonschema_exceptions.SchemaError as exc:
        raise ToolConfigError(tool.name, f"invalid input_schema: {exc.message}") from exc

    undeclared = [name for name in tool.required if name not in tool.properties]
    if undeclared:
        raise ToolConfigError(tool.name, f"required but undeclared: {', '.join(undeclared)}")


def _check_handler(tool: ToolDescriptor, local_handlers: Collection[str]) -> None:
    if tool.local:
        if tool.route is not None:
            raise ToolConfigError(tool.name, "a local tool cannot declare a route")
        if tool.name not in local_handlers:
            raise ToolConfigError(tool.name, "no local handler registered")
        return

    if tool.route is None:
        raise ToolConfigError(tool.name, "missing route")

    unknown = sorted(param for param in tool.route.placed_params if param not in tool.properties)
    if unknown:
        raise ToolConfigError(tool.name, f"route uses undeclared arguments: {', '.join(unknown)}")

    optional_path_params = [param for param in tool.route.path_params if param not in tool.required]
    if optional_path_params:
        raise ToolConfigError(tool.name, f"path arguments must be required: {', '.join(optional_path_params)}")


def build_registry(
    config: ToolRegistryConfig,
    local_handlers: Collection[str] = (),
) -> ToolRegistry:
    """Validate a tool catalogue and freeze it into a registry.

    Args:
        config: Parsed catalogue.
        local_handlers: Names of tools the gateway can answer in-process.

    Returns:
        The immutable registry.

    Raises:
        ToolConfigError: If any definition is inconsistent, including duplicates.
    """
    for tool in config.tools:
        _check_schema(tool)
        _check_handler(tool, local_handlers)

    registry = ToolRegistry(config.tools)
    logger.info("tool_registry_built", tool_count=len(registry))
    return registry
