"""schema-deref MCP server - $ref dereferencing exposed over MCP."""

import logging

from fastmcp import FastMCP

from schema_deref.config import get_server_config
from schema_deref.tools import resolve_reference

mcp = FastMCP(
    "Schema Deref Server",
    instructions=(
        "Dereferences JSON/YAML schema documents. Follows every $ref across "
        "local files and web URLs and returns the documents keyed by alias."
    ),
)

logger = logging.getLogger("schema-deref.server")

resolve_reference.register(mcp)


def main():
    """Entry point for the schema-deref MCP server."""
    config = get_server_config()

    run_kwargs: dict = {"transport": config.transport, "show_banner": False}
    if config.transport in ("http", "sse"):
        run_kwargs["host"] = config.host
        run_kwargs["port"] = config.port

    logger.info("Starting schema-deref server (transport=%s)", config.transport)
    try:
        mcp.run(**run_kwargs)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
