"""Reference resolution tool."""

import logging
from typing import Any

from fastmcp import FastMCP

from schema_deref.contracts import build_ok, build_resolution_data
from schema_deref.exceptions import DerefError
from schema_deref.formatting import build_deref_error
from schema_deref.resolver import ROOT_ALIAS, resolve
from schema_deref.utils import ReferenceText

logger = logging.getLogger("schema-deref.tools")


def register(mcp: FastMCP) -> None:
    """Register deref_resolve tool with the MCP server."""

    @mcp.tool()
    async def deref_resolve(reference: ReferenceText) -> dict[str, Any]:
        """Dereference every $ref reachable from a root schema document.

        Returns each distinct document under a generated alias, with inner
        $ref values rewritten to "<alias>#/<fragment>". The starting
        document is always under the alias "root".
        """
        try:
            documents = await resolve(reference)
        except DerefError as exc:
            logger.warning("deref_resolve failed for %s: %s", reference, exc)
            return build_deref_error(exc)

        return build_ok(
            build_resolution_data(
                reference=reference,
                root_alias=ROOT_ALIAS,
                documents=documents,
            )
        )
