"""Configuration management for the Neo4j connection, CLI and MCP server.

Loads configuration from environment variables and an optional .env file
in the project root.

Example .env:

    NEO4J_URI=bolt://localhost:7687
    NEO4J_USERNAME=neo4j
    NEO4J_PASSWORD=your_password_here
    NEO4J_DATABASE=neo4j
    NEO4J_CONNECT_TRIALS=5
    NEO4J_DRIVER_OPTIONS={"encrypted": false}
    LOG_LEVEL=INFO
"""

from typing import Any, Dict

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration loaded from environment / .env file.

    We use explicit aliases so the mapping to env vars is obvious and
    easy to consume from scripts.
    """

    # Neo4j configuration
    neo4j_uri: AnyUrl = Field(
        "bolt://localhost:7687",
        alias="NEO4J_URI",
        description="Neo4j connection URI, e.g. bolt://localhost:7687",
    )
    neo4j_username: str = Field(
        "neo4j",
        alias="NEO4J_USERNAME",
        description="Neo4j username",
    )
    neo4j_password: str = Field(
        ...,
        alias="NEO4J_PASSWORD",
        description="Neo4j password",
    )
    neo4j_database: str = Field(
        "neo4j",
        alias="NEO4J_DATABASE",
        description="Target database, only used when the server supports multiple databases",
    )
    neo4j_connect_trials: int = Field(
        5,
        ge=1,
        alias="NEO4J_CONNECT_TRIALS",
        description="Number of connection attempts before giving up",
    )
    neo4j_connect_retry_delay: float = Field(
        5.0,
        ge=0,
        alias="NEO4J_CONNECT_RETRY_DELAY",
        description="Seconds to wait between connection attempts",
    )
    neo4j_max_connection_lifetime: int = Field(
        3600,
        alias="NEO4J_MAX_CONNECTION_LIFETIME",
        description="Maximum lifetime of a Neo4j connection in seconds",
    )
    neo4j_max_connection_pool_size: int = Field(
        100,
        alias="NEO4J_MAX_CONNECTION_POOL_SIZE",
        description="Maximum number of connections in the Neo4j pool",
    )
    neo4j_driver_options: Dict[str, Any] = Field(
        default_factory=dict,
        alias="NEO4J_DRIVER_OPTIONS",
        description="Extra keyword arguments for GraphDatabase.driver, as a JSON object",
    )

    # Server configuration
    log_level: str = Field(
        "INFO",
        alias="LOG_LEVEL",
        description="Log level for server / CLI (e.g. DEBUG, INFO, WARN, ERROR)",
    )
    mcp_host: str = Field(
        "0.0.0.0",
        alias="MCP_HOST",
        description="Bind address of the MCP server",
    )
    mcp_port: int = Field(
        8000,
        alias="MCP_PORT",
        description="Port of the MCP server",
    )

    # Pydantic v2 settings for env loading
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,  # we use explicit aliases, so keep env lookup strict
        extra="ignore",
        populate_by_name=False,
    )

    def driver_options(self) -> Dict[str, Any]:
        """Keyword arguments for ``GraphDatabase.driver``.

        Explicit ``NEO4J_DRIVER_OPTIONS`` entries win over the pool settings.
        """
        options: Dict[str, Any] = {
            "max_connection_lifetime": self.neo4j_max_connection_lifetime,
            "max_connection_pool_size": self.neo4j_max_connection_pool_size,
        }
        options.update(self.neo4j_driver_options)
        return options
