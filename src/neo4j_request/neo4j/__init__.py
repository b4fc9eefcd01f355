"""
Neo4j connection management, transaction helpers and result conversion.

This package should contain ONLY Neo4j-specific logic:
- Connection/client setup
- Running Cypher in read, write and multi-statement transactions
- Converting driver records into plain data

Exposing these helpers to other processes (CLI, MCP tools) belongs
outside of this package.
"""

from .client import Neo4jClient
from .records import MAX_SAFE_INTEGER, extract_records, normalize_value, remove_empty_arrays
from .statement import Statement

__all__ = [
    "Neo4jClient",
    "Statement",
    "MAX_SAFE_INTEGER",
    "extract_records",
    "normalize_value",
    "remove_empty_arrays",
]
