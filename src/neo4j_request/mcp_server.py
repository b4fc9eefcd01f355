"""
MCP Server implementation for neo4j-request

This module is the entrypoint used when running the MCP server process.
It imports the shared `mcp` instance and all MCP tools so they are
registered on the same FastMCP server.
"""

from __future__ import annotations

import logging

logging.basicConfig(
    level=logging.INFO,
    handlers=[logging.FileHandler("/tmp/neo4j_request_mcp_server.log")]
)

# Import tools so their @tool decorators run and register them on `mcp`.
from .tools import queries as query_tools  # noqa: F401
from .mcp_instance import config, mcp, neo4j_client  # shared FastMCP instance


logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point for the MCP server."""
    logging.getLogger().setLevel(config.log_level.upper())
    logger.info("Starting MCP server 'neo4j-request'...")

    # Fail fast (after the configured retries) if Neo4j is unreachable.
    neo4j_client.connect()
    try:
        # Run the shared FastMCP instance; this will block the current process.
        mcp.run(transport="streamable-http")
    finally:
        neo4j_client.close()


if __name__ == "__main__":
    main()
