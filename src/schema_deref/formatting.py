"""Error rendering helpers for tool outputs."""

from __future__ import annotations

from typing import Any

from schema_deref.contracts import build_error
from schema_deref.exceptions import (
    DerefError,
    InvalidReferenceError,
    NotRootError,
    ParseError,
    RetrievalError,
)

_ACTIONS = {
    NotRootError.code: "pass an absolute URL or a file: / drive-qualified path",
    InvalidReferenceError.code: "fix the URL so it has a valid host and port",
    RetrievalError.code: "check that the location exists and is reachable, then retry",
    ParseError.code: "fix the document so it is valid JSON or YAML",
}


def deref_error_details(exc: DerefError) -> dict[str, Any]:
    """Collect diagnostic fields carried by a resolution error."""
    details: dict[str, Any] = {}
    if isinstance(exc, NotRootError):
        details["reference"] = exc.reference
    elif isinstance(exc, InvalidReferenceError):
        details["reference"] = exc.reference
        details["reason"] = exc.reason
    elif isinstance(exc, RetrievalError):
        details["location"] = exc.location
        details["origin"] = exc.origin
        details["reason"] = exc.reason
    elif isinstance(exc, ParseError):
        if exc.location:
            details["location"] = exc.location
        details["reason"] = exc.reason

    action = _ACTIONS.get(exc.code)
    if action:
        details["action"] = action
    return details


def build_deref_error(exc: DerefError) -> dict[str, Any]:
    """Build an error envelope for a failed resolution."""
    return build_error(exc.code, exc.message, deref_error_details(exc) or None)
