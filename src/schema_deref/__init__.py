"""Dereference $ref pointers across local and remote schema documents."""

__version__ = "0.1.0"

from schema_deref.exceptions import (
    DerefError,
    InvalidReferenceError,
    NotRootError,
    ParseError,
    RetrievalError,
)
from schema_deref.refs import RefKind, Reference, combine_refs, parse_ref, render_ref
from schema_deref.resolver import ROOT_ALIAS, ResolutionSession, assign_alias, resolve

__all__ = [
    "__version__",
    # Exceptions
    "DerefError",
    "InvalidReferenceError",
    "NotRootError",
    "RetrievalError",
    "ParseError",
    # Reference model
    "RefKind",
    "Reference",
    "parse_ref",
    "render_ref",
    "combine_refs",
    # Resolution
    "ROOT_ALIAS",
    "ResolutionSession",
    "assign_alias",
    "resolve",
]
