"""Tests for the tool registry."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from src.registry import (
    DuplicateToolError,
    ToolConfigError,
    ToolDescriptor,
    ToolNotFoundError,
    ToolRegistry,
    ToolRegistryConfig,
    ToolRoute,
    build_registry,
    load_tool_registry,
)


TOOLS_CONFIG = Path(__file__).parent.parent / "config" / "tools.yaml"

EXPECTED_TOOLS = [
    "echo",
    "ping_api",
    "generate_token",
    "generate_session_token",
    "validate_token",
    "get_all_installed_cards",
    "get_consented_cards",
    "request_consent",
    "insert_receipt_data",
    "get_receipt_data",
    "insert_health_data",
    "get_health_data",
    "insert_browsing_data",
    "get_browsing_data",
    "insert_brand_preference_data",
    "get_brand_preference",
    "insert_fashion_data",
    "get_fashion_data",
    "get_food_data",
    "get_insurance_data",
]


def _tool(name: str, **overrides) -> ToolDescriptor:
    data = {
        "name": name,
        "description": f"{name} tool",
        "input_schema": {
            "type": "object",
            "properties": {"phone_number": {"type": "string"}},
            "required": ["phone_number"],
        },
        "route": {"path": "/api/v1/thing", "query": ["phone_number"]},
    }
    data.update(overrides)
    return ToolDescriptor(**data)


class TestToolRegistry:
    """Tests for registry lookup and ordering."""

    def test_catalogue_loads_every_tool_in_order(self, registry):
        assert [tool.name for tool in registry.list()] == EXPECTED_TOOLS

    def test_list_is_idempotent(self, registry):
        assert registry.list() == registry.list()

    def test_list_returns_a_copy(self, registry):
        tools = registry.list()
        tools.clear()
        assert len(registry) == len(EXPECTED_TOOLS)

    def test_get_known_tool(self, registry):
        tool = registry.get("get_food_data")
        assert tool.route.path == "/api/v1/food-data"
        assert tool.route.headers == {"token": "token"}

    def test_get_unknown_tool_raises(self, registry):
        with pytest.raises(ToolNotFoundError) as exc_info:
            registry.get("missing_tool")

        assert exc_info.value.tool_name == "missing_tool"
        assert exc_info.value.message == "Unknown tool"
        assert exc_info.value.jsonrpc_code == -32601

    def test_contains(self, registry):
        assert "echo" in registry
        assert "nope" not in registry

    def test_duplicate_names_rejected(self):
        with pytest.raises(DuplicateToolError):
            ToolRegistry([_tool("dup"), _tool("dup")])

    def test_descriptors_are_frozen(self, registry):
        tool = registry.get("echo")
        with pytest.raises(ValidationError):
            tool.name = "other"


class TestBuildRegistry:
    """Tests for startup validation of the catalogue."""

    def test_valid_catalogue(self):
        registry = build_registry(ToolRegistryConfig(tools=[_tool("a"), _tool("b")]))
        assert [tool.name for tool in registry.list()] == ["a", "b"]

    def test_duplicate_in_config_fails_fast(self):
        config = ToolRegistryConfig(tools=[_tool("a"), _tool("a")])
        with pytest.raises(DuplicateToolError):
            build_registry(config)

    def test_invalid_schema_rejected(self):
        broken = _tool("broken", input_schema={"type": "object", "properties": {"x": {"type": 12}}})
        with pytest.raises(ToolConfigError) as exc_info:
            build_registry(ToolRegistryConfig(tools=[broken]))

        assert exc_info.value.tool_name == "broken"

    def test_non_object_schema_rejected(self):
        broken = _tool("broken", input_schema={"type": "string"})
        with pytest.raises(ToolConfigError):
            build_registry(ToolRegistryConfig(tools=[broken]))

    def test_required_field_must_be_declared(self):
        broken = _tool(
            "broken",
            input_schema={"type": "object", "properties": {}, "required": ["ghost"]},
            route={"path": "/x"},
        )
        with pytest.raises(ToolConfigError) as exc_info:
            build_registry(ToolRegistryConfig(tools=[broken]))

        assert "ghost" in exc_info.value.message

    def test_remote_tool_without_route_rejected(self):
        with pytest.raises(ToolConfigError):
            build_registry(ToolRegistryConfig(tools=[_tool("no_route", route=None)]))

    def test_route_with_undeclared_argument_rejected(self):
        broken = _tool("broken", route={"path": "/x", "headers": {"token": "token"}})
        with pytest.raises(ToolConfigError) as exc_info:
            build_registry(ToolRegistryConfig(tools=[broken]))

        assert "token" in exc_info.value.message

    def test_optional_path_argument_rejected(self):
        broken = _tool(
            "broken",
            input_schema={"type": "object", "properties": {"item_id": {"type": "string"}}},
            route={"path": "/items/{item_id}"},
        )
        with pytest.raises(ToolConfigError):
            build_registry(ToolRegistryConfig(tools=[broken]))

    def test_local_tool_requires_handler(self):
        local = _tool("local_only", route=None, local=True)
        with pytest.raises(ToolConfigError):
            build_registry(ToolRegistryConfig(tools=[local]))

        registry = build_registry(ToolRegistryConfig(tools=[local]), local_handlers={"local_only"})
        assert registry.get("local_only").local is True

    def test_local_tool_cannot_have_route(self):
        local = _tool("local_only", local=True)
        with pytest.raises(ToolConfigError):
            build_registry(ToolRegistryConfig(tools=[local]), local_handlers={"local_only"})


class TestToolRoute:
    """Tests for route helpers."""

    def test_path_params(self):
        route = ToolRoute(path="/users/{user_id}/cards/{card}")
        assert route.path_params == ["user_id", "card"]

    def test_placed_params(self):
        route = ToolRoute(path="/x/{a}", query=("b",), headers={"token": "c"})
        assert route.placed_params == {"a", "b", "c"}

    def test_defaults_follow_backend_convention(self):
        route = ToolRoute(path="/x")
        assert route.method == "POST"
        assert route.target == "backend"
        assert route.body is False

    def test_unknown_route_key_rejected(self):
        with pytest.raises(ValueError):
            ToolRoute(path="/x", verb="POST")


class TestLoadToolRegistry:
    """Tests for the YAML loader."""

    def test_load_from_path(self, tmp_path):
        config_file = tmp_path / "tools.yaml"
        config_file.write_text(
            yaml.safe_dump({
                "tools": [{
                    "name": "one",
                    "description": "One",
                    "input_schema": {"type": "object", "properties": {}},
                    "route": {"path": "/one"},
                }]
            }),
            encoding="utf-8",
        )

        config = load_tool_registry(str(config_file))

        assert [tool.name for tool in config.tools] == ["one"]

    def test_explicit_missing_path_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_tool_registry(str(tmp_path / "missing.yaml"))

    def test_empty_file_yields_empty_config(self, tmp_path):
        config_file = tmp_path / "tools.yaml"
        config_file.write_text("", encoding="utf-8")

        assert load_tool_registry(str(config_file)).tools == []

    def test_schemas_match_yaml_exactly(self):
        raw = yaml.safe_load(TOOLS_CONFIG.read_text(encoding="utf-8"))
        config = load_tool_registry(str(TOOLS_CONFIG))

        assert [tool.input_schema for tool in config.tools] == [entry["input_schema"] for entry in raw["tools"]]
