"""Dereferencing exceptions mapped to stable error codes."""


class DerefError(Exception):
    """Base exception for reference resolution errors.

    Carries a machine-readable code that tool responses expose as
    ``error.code``.
    """

    code = "deref_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotRootError(DerefError):
    """A non-root reference was used where a root reference is required.

    Raised when combining against a relative base, or when resolution is
    started from a relative or fragment-only reference.
    """

    code = "not_root"

    def __init__(self, reference: str, message: str | None = None):
        self.reference = reference
        super().__init__(message or f"Reference is not a root: {reference!r}")


class RetrievalError(DerefError):
    """Fetching a document failed.

    ``origin`` tells web and filesystem failures apart for diagnostics;
    the underlying exception is chained as ``__cause__``.
    """

    code = "retrieval_failed"

    def __init__(self, location: str, origin: str, reason: str):
        self.location = location
        self.origin = origin
        self.reason = reason
        super().__init__(f"Failed to fetch schema from {origin}: {location} ({reason})")

    @classmethod
    def web(cls, location: str, reason: str) -> "RetrievalError":
        return cls(location, "web", reason)

    @classmethod
    def filesystem(cls, location: str, reason: str) -> "RetrievalError":
        return cls(location, "filesystem", reason)


class ParseError(DerefError):
    """Content is neither valid JSON nor valid YAML."""

    code = "parse_failed"

    def __init__(self, reason: str, location: str | None = None):
        self.reason = reason
        self.location = location
        where = f" at {location}" if location else ""
        super().__init__(f"Failed to parse content{where}: {reason}")


class InvalidReferenceError(DerefError):
    """A pointer could not be parsed as a reference (e.g. a malformed URL)."""

    code = "invalid_reference"

    def __init__(self, reference: str, reason: str):
        self.reference = reference
        self.reason = reason
        super().__init__(f"Invalid reference {reference!r}: {reason}")
