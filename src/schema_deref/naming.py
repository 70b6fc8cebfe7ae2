"""Alias name generation."""

import uuid

from schema_deref.config import get_deref_config


def fresh_name(length: int | None = None) -> str:
    """Return a new random alias.

    Hex prefix of a uuid4; unique in practice for the aliases of a single
    process, not guaranteed.
    """
    size = length if length is not None else get_deref_config().alias_length
    return uuid.uuid4().hex[:size]
