"""schema-deref tool implementations."""

from . import resolve_reference

__all__ = ["resolve_reference"]
