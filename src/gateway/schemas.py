"""Pydantic schemas for outbound remote calls."""

from typing import Any, Literal
from pydantic import BaseModel, ConfigDict, Field


class RemoteCallSpec(BaseModel):
    """One outbound HTTP call, built per tool invocation.

    Attributes:
        tool_name: Tool the call belongs to.
        target: Which configured base address to call.
        method: HTTP method.
        path: Path plus encoded query string, relative to the base address.
        headers: Request headers, including pass-through tokens.
        body: JSON body, or None to send an empty body.
    """

    model_config = ConfigDict(frozen=True)

    tool_name: str = Field(..., description="Tool the call belongs to")
    target: Literal["backend", "gateway"] = Field(default="backend", description="Base address to call")
    method: str = Field(default="POST", description="HTTP method")
    path: str = Field(..., description="Path and encoded query string")
    # Kept out of repr so tokens never end up in logs or tracebacks
    headers: dict[str, str] = Field(default_factory=dict, repr=False, description="Request headers")
    body: dict[str, Any] | None = Field(default=None, repr=False, description="JSON body")


class RemoteCallResult(BaseModel):
    """Decoded outcome of a remote call.

    The payload is relayed as-is; an application-level error encoded by the
    backend is still a successful result here.

    Attributes:
        status_code: HTTP status code returned.
        payload: Decoded JSON body.
        duration_ms: Wall time of the call.
    """

    status_code: int = Field(..., description="HTTP status code")
    payload: Any = Field(default=None, description="Decoded JSON body")
    duration_ms: int = Field(default=0, description="Call duration in milliseconds")
