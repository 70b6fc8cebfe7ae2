"""Reference model: parsing, rendering and combining ``$ref`` pointers.

A reference is either a root (self-sufficient, retrievable on its own: an
absolute URL, or a filesystem path carrying a scheme-like ``x:/`` marker)
or a non-root (a bare fragment, or a path relative to some other root's
directory). Non-roots only become retrievable once combined with a root.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
import posixpath
import re
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from schema_deref.exceptions import InvalidReferenceError, NotRootError

FRAGMENT_MARKER = "#/"

_WEB_PATTERN = re.compile(r"^https?://", re.IGNORECASE)
_ABSOLUTE_PATTERN = re.compile(r"^.+?:/.+")
_DEFAULT_PORTS = {"http": 80, "https": 443}


class RefKind(str, Enum):
    """How a reference's location is retrieved."""

    WEB = "web"
    FILESYSTEM = "filesystem"


class Reference(BaseModel):
    """Structured form of a ``$ref`` pointer."""

    model_config = ConfigDict(frozen=True)

    location: str | None = None
    fragment: str | None = None
    kind: RefKind = RefKind.FILESYSTEM
    is_root: bool = False

    @field_validator("location", "fragment")
    @classmethod
    def _empty_as_none(cls, value: str | None) -> str | None:
        return value or None

    @model_validator(mode="after")
    def _validate_root(self) -> "Reference":
        if self.is_root and not self.location:
            raise ValueError("root references must have a location")
        return self

    @classmethod
    def from_path(cls, path: str | Path, fragment: str | None = None) -> "Reference":
        """Build a filesystem root for a local path.

        The path is made absolute and, unless it already carries a drive or
        scheme marker, prefixed with ``file:`` so it classifies as a root.
        """
        location = Path(path).resolve().as_posix()
        if not _ABSOLUTE_PATTERN.match(location):
            location = f"file:{location}"
        return cls(
            location=normalize_path(location),
            fragment=fragment,
            kind=RefKind.FILESYSTEM,
            is_root=True,
        )

    def __str__(self) -> str:
        return render_ref(self)


def normalize_path(path: str) -> str:
    """Canonicalize separators and collapse ``.``, ``..`` and repeated slashes."""
    normalized = posixpath.normpath(path.replace("\\", "/"))
    # normpath keeps a leading "//" as-is
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


def _origin(scheme: str, hostname: str | None, port: int | None) -> str:
    scheme = scheme.lower()
    host = (hostname or "").lower()
    if ":" in host:
        host = f"[{host}]"
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"
    return f"{scheme}://{host}"


def _split_url(url: str) -> tuple[str, str, str]:
    """Return ``(origin, path, fragment)`` for an http(s) URL."""
    try:
        parts = urlsplit(url)
        origin = _origin(parts.scheme, parts.hostname, parts.port)
    except ValueError as exc:
        raise InvalidReferenceError(url, str(exc)) from exc
    return origin, parts.path or "/", parts.fragment


def _directory_join(base_path: str, other_path: str | None) -> str:
    if not other_path:
        return normalize_path(base_path)
    return normalize_path(f"{posixpath.dirname(base_path)}/{other_path}")


def parse_ref(text: str) -> Reference:
    """Parse a textual ``$ref`` pointer into a :class:`Reference`.

    Examples:
        >>> parse_ref("https://x.test/schemas/./a.json#/defs/Foo")
        Reference(location='https://x.test/schemas/a.json', fragment='defs/Foo', kind=<RefKind.WEB: 'web'>, is_root=True)
        >>> parse_ref("#/defs/Foo").is_root
        False
    """
    if _WEB_PATTERN.match(text):
        origin, path, fragment = _split_url(text)
        if fragment.startswith("/"):
            fragment = fragment[1:]
        return Reference(
            location=f"{origin}{normalize_path(path)}",
            fragment=fragment,
            kind=RefKind.WEB,
            is_root=True,
        )

    path, _, fragment = text.partition(FRAGMENT_MARKER)
    location = normalize_path(path) if path else None
    return Reference(
        location=location,
        fragment=fragment,
        kind=RefKind.FILESYSTEM,
        is_root=bool(location and _ABSOLUTE_PATTERN.match(location)),
    )


def render_ref(ref: Reference) -> str:
    """Render a reference back to its textual form."""
    text = ref.location or ""
    if ref.fragment:
        text += f"{FRAGMENT_MARKER}{ref.fragment}"
    return text


def combine_refs(base: str | Reference, other: str | Reference) -> Reference:
    """Resolve ``other`` against ``base`` into a new root reference.

    A root ``other`` always wins. Otherwise ``other``'s location is joined
    onto the directory of ``base``'s location and ``other``'s fragment is
    kept.

    Raises:
        NotRootError: ``other`` is relative and ``base`` is not a root.
    """
    base_ref = parse_ref(base) if isinstance(base, str) else base
    other_ref = parse_ref(other) if isinstance(other, str) else other

    if other_ref.is_root:
        return other_ref

    if not base_ref.is_root:
        raise NotRootError(render_ref(base_ref), "Cannot combine against a non-root base reference")

    assert base_ref.location is not None

    if base_ref.kind == RefKind.WEB:
        origin, path, _ = _split_url(base_ref.location)
        location = f"{origin}{_directory_join(path, other_ref.location)}"
    else:
        location = _directory_join(base_ref.location, other_ref.location)

    return Reference(
        location=location,
        fragment=other_ref.fragment,
        kind=base_ref.kind,
        is_root=True,
    )
