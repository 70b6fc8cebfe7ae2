"""Filesystem fetcher."""

import asyncio
import logging
import re

from schema_deref.exceptions import RetrievalError

logger = logging.getLogger("schema-deref.fetch")

_FILE_SCHEME = re.compile(r"^file:", re.IGNORECASE)


def to_local_path(location: str) -> str:
    """Strip a ``file:`` scheme so the location can be opened directly."""
    return _FILE_SCHEME.sub("", location, count=1)


def _read_text(path: str) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read()


async def fetch_file(location: str) -> str:
    """Read ``location`` from local disk as UTF-8 text.

    Raises:
        RetrievalError: Missing file, permission error or undecodable bytes.
    """
    path = to_local_path(location)
    logger.info("Reading %s", path)
    try:
        return await asyncio.to_thread(_read_text, path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Reading %s failed: %s", path, exc)
        raise RetrievalError.filesystem(location, str(exc) or type(exc).__name__) from exc
