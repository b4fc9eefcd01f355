"""Convenience layer over the Neo4j Python driver."""

from .config import Config
from .exceptions import ConnectivityError, DriverNotInitializedError, Neo4jRequestError
from .neo4j import (
    Neo4jClient,
    Statement,
    extract_records,
    normalize_value,
    remove_empty_arrays,
)

__all__ = [
    "Config",
    "ConnectivityError",
    "DriverNotInitializedError",
    "Neo4jRequestError",
    "Neo4jClient",
    "Statement",
    "extract_records",
    "normalize_value",
    "remove_empty_arrays",
]
