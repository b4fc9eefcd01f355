"""
Exception hierarchy for neo4j-request.

Everything raised by this package (as opposed to errors coming straight
from the driver) inherits from Neo4jRequestError so callers can catch it
uniformly.
"""


class Neo4jRequestError(Exception):
    """Base exception for all neo4j-request errors."""


class DriverNotInitializedError(Neo4jRequestError, RuntimeError):
    """A transaction helper was called before ``connect()``."""

    def __init__(self, message: str = "Neo4j driver not initialized, call connect() first"):
        super().__init__(message)


class ConnectivityError(Neo4jRequestError, ConnectionError):
    """The server could not be reached after all connection attempts."""

    def __init__(self, uri: str, trials: int):
        self.uri = uri
        self.trials = trials
        super().__init__(
            f"Cannot connect to Neo4j database at {uri} after {trials} attempt(s). "
            "Please ensure Neo4j is running and accessible."
        )
