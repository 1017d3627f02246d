"""Pydantic schemas for tool descriptors."""

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


_PATH_PARAM_PATTERN = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


class ToolRoute(BaseModel):
    """How a tool's arguments map onto one outbound HTTP call.

    Attributes:
        target: Which base address the call goes to.
        method: HTTP method.
        path: Path template; ``{name}`` placeholders take argument values.
        query: Argument names sent as query parameters.
        headers: Header name -> argument name, forwarded verbatim.
        body: Send the remaining declared arguments as a JSON body.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    target: Literal["backend", "gateway"] = Field(default="backend", description="Base address to call")
    method: Literal["GET", "POST", "PUT", "PATCH", "DELETE"] = Field(default="POST", description="HTTP method")
    path: str = Field(..., description="Path template")
    query: tuple[str, ...] = Field(default=(), description="Arguments placed in the query string")
    headers: dict[str, str] = Field(default_factory=dict, description="Pass-through headers")
    body: bool = Field(default=False, description="Send remaining arguments as JSON body")

    @property
    def path_params(self) -> list[str]:
        """Argument names interpolated into the path."""
        return _PATH_PARAM_PATTERN.findall(self.path)

    @property
    def placed_params(self) -> set[str]:
        """Arguments consumed by path, query or headers."""
        return {*self.path_params, *self.query, *self.headers.values()}


class ToolDescriptor(BaseModel):
    """Tool definition held by the registry.

    Only ``name``, ``description`` and ``input_schema`` are ever shown to
    clients; ``route`` and ``local`` are gateway-private.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="Unique tool identifier")
    description: str = Field(..., description="Human-readable description")
    input_schema: dict[str, Any] = Field(..., description="JSON schema of the tool arguments")
    route: ToolRoute | None = Field(default=None, description="Outbound call mapping")
    local: bool = Field(default=False, description="Handled in-process without a remote call")

    @property
    def properties(self) -> dict[str, Any]:
        return self.input_schema.get("properties") or {}

    @property
    def required(self) -> list[str]:
        return list(self.input_schema.get("required") or [])
