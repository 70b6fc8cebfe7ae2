"""Document fetchers for web and filesystem references."""

from schema_deref.fetchers.filesystem import fetch_file
from schema_deref.fetchers.web import create_http_client, fetch_web

__all__ = ["fetch_file", "fetch_web", "create_http_client"]
