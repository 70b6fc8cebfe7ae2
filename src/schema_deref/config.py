"""Runtime configuration for schema-deref."""

from dataclasses import dataclass
import os

from schema_deref import __version__


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class DerefConfig:
    http_timeout_s: float
    follow_redirects: bool
    user_agent: str
    alias_length: int


@dataclass(frozen=True)
class ServerConfig:
    transport: str
    host: str
    port: int


def get_deref_config() -> DerefConfig:
    """Load resolution config from environment variables."""
    return DerefConfig(
        http_timeout_s=max(1.0, _env_float("SCHEMA_DEREF_HTTP_TIMEOUT_S", 10.0)),
        follow_redirects=_env_bool("SCHEMA_DEREF_FOLLOW_REDIRECTS", True),
        user_agent=os.getenv("SCHEMA_DEREF_USER_AGENT") or f"schema-deref/{__version__}",
        alias_length=min(32, max(6, _env_int("SCHEMA_DEREF_ALIAS_LENGTH", 12))),
    )


def get_server_config() -> ServerConfig:
    """Load MCP server config from environment variables."""
    transport = os.getenv("SCHEMA_DEREF_TRANSPORT", "stdio").strip().lower()
    if transport not in {"stdio", "http", "sse"}:
        transport = "stdio"
    return ServerConfig(
        transport=transport,
        host=os.getenv("SCHEMA_DEREF_HOST", "127.0.0.1"),
        port=_env_int("SCHEMA_DEREF_PORT", 8000),
    )
