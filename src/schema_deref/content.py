"""Content parser for fetched schema documents.

Strict JSON is tried first; YAML is the fallback (JSON is a subset of the
YAML accepted here).
"""

import json
import logging
from typing import Any

import yaml

from schema_deref.exceptions import ParseError

logger = logging.getLogger("schema-deref.content")


def parse_content(text: str, location: str | None = None) -> Any:
    """Parse raw document text into Python data.

    Raises:
        ParseError: The text is neither JSON nor YAML.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        logger.debug("Content at %s is not JSON, trying YAML", location or "<text>")

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParseError(str(exc).splitlines()[0] if str(exc) else "invalid YAML", location) from exc
