"""MCP tools for running Cypher through the shared Neo4jClient.

This module exposes the read, write and multi-statement transaction
helpers of `Neo4jClient` as MCP tools.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..mcp_instance import neo4j_client, tool
from ..neo4j import remove_empty_arrays
from .utils import logged_tool_call, tool_result


@tool()
def read_query(
    query: str,
    params: Optional[Dict[str, Any]] = None,
    array_key: Optional[str] = None,
    check_key: Optional[str] = None,
) -> Dict[str, Any]:
    """Run a read-only Cypher query.

    Use this tool when:
        - You need to look up nodes, relationships or paths without
          changing the graph.

    Args:
        query: Cypher query. Use `$name` placeholders for values.
        params: Values for the query placeholders.
        array_key: Optional name of a collected list column. Together with
            `check_key`, lists of the form `[{<check_key>: null, ...}]`
            (produced by `OPTIONAL MATCH` + `collect`) are returned as `[]`.
        check_key: Key of the first list element that is tested for null.

    Returns:
        A JSON-serializable dict:

            {
              "count": <int>,
              "results": [ { <column>: <value>, ... }, ... ]
            }
    """
    if (array_key is None) != (check_key is None):
        raise ValueError("array_key and check_key must be given together")

    with logged_tool_call(
        "read_query", query=query, params=params, array_key=array_key, check_key=check_key
    ) as outcome:
        records = neo4j_client.read_transaction(query, params)
        if array_key is not None:
            records = remove_empty_arrays(records, array_key, check_key)
        outcome["result_count"] = len(records)

    return tool_result(records)


@tool()
def write_query(
    query: str,
    params: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Run a Cypher query that modifies the graph (CREATE, MERGE, SET, DELETE).

    Args:
        query: Cypher query. Use `$name` placeholders for values.
        params: Values for the query placeholders.

    Returns:
        A JSON-serializable dict with the rows returned by the query:

            {
              "count": <int>,
              "results": [ { <column>: <value>, ... }, ... ]
            }
    """
    with logged_tool_call("write_query", query=query, params=params) as outcome:
        records = neo4j_client.write_transaction(query, params)
        outcome["result_count"] = len(records)

    return tool_result(records)


@tool()
def run_statements(statements: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Run several Cypher statements atomically in one transaction.

    Either all statements are committed or, if any of them fails, none.

    Args:
        statements: Ordered list of `{"statement": <cypher>, "parameters": {...}}`.

    Returns:
        A JSON-serializable dict with one result list per statement:

            {
              "count": <number of statements>,
              "results": [ [ { <column>: <value> }, ... ], ... ]
            }
    """
    with logged_tool_call("run_statements", statement_count=len(statements)) as outcome:
        results = neo4j_client.multiple_statements(statements)
        outcome["result_count"] = sum(len(r) for r in results)

    return tool_result(results)
