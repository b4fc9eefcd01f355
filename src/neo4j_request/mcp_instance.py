"""Shared MCP server and Neo4j wiring for neo4j-request tools.

All MCP tools and the server entrypoint must import and use this module
so that there is exactly one FastMCP and one Neo4jClient per process.
"""

from mcp.server.fastmcp import FastMCP

from .config import Config
from .neo4j import Neo4jClient

# Shared configuration for the server and its Neo4j client
config = Config()

# Single shared MCP server instance
mcp = FastMCP(
    "neo4j-request",
    host=config.mcp_host,
    streamable_http_path="/",
    port=config.mcp_port,
)

# Connected lazily by the server entrypoint
neo4j_client = Neo4jClient.from_config(config)

# Convenience alias for defining tools bound to this server
tool = mcp.tool

__all__ = ["mcp", "tool", "config", "neo4j_client"]
