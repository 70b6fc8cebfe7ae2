"""Tool response envelope contracts.

Every tool payload is wrapped here so success and failure shapes stay
consistent for MCP consumers.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


class ToolError(BaseModel):
    """Structured error for tool payloads."""

    code: str = Field(description="Stable machine-readable error code")
    message: str = Field(description="Human-readable error summary")
    details: dict[str, Any] | None = Field(
        default=None, description="Optional structured error details"
    )


class ToolEnvelope(BaseModel):
    """Unified response shape for all tool results."""

    ok: bool = Field(description="Success flag")
    data: Any | None = Field(default=None, description="Tool-specific payload")
    error: ToolError | None = Field(default=None, description="Structured error payload")

    @model_validator(mode="after")
    def _validate_coherence(self) -> "ToolEnvelope":
        if self.ok and self.error is not None:
            raise ValueError("ok=true responses must not include error")
        if not self.ok and self.error is None:
            raise ValueError("ok=false responses must include error")
        return self


class ResolutionData(BaseModel):
    """``data`` schema for ``deref_resolve`` results."""

    reference: str
    root_alias: str
    count: int
    aliases: list[str]
    documents: dict[str, Any]


def build_ok(data: Any) -> dict[str, Any]:
    """Build and validate a success envelope."""
    return ToolEnvelope(ok=True, data=data).model_dump(exclude_none=True)


def build_error(
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build and validate an error envelope."""
    return ToolEnvelope(
        ok=False,
        error=ToolError(code=code, message=message, details=details),
    ).model_dump(exclude_none=True)


def build_resolution_data(
    *,
    reference: str,
    root_alias: str,
    documents: dict[str, Any],
) -> dict[str, Any]:
    """Build and validate ``deref_resolve`` payloads."""
    return ResolutionData(
        reference=reference,
        root_alias=root_alias,
        count=len(documents),
        aliases=list(documents),
        documents=documents,
    ).model_dump()
