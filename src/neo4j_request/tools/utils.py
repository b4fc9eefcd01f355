"""Utility functions for MCP tools."""
from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

mcp_tools_logger = logging.getLogger('neo4j_request.mcp.tools')


def log_mcp_tool(function_name: str, phase: str, extra: Dict[str, Any], duration: Optional[float] = None) -> None:
    """Helper function to log MCP tool calls, completions and failures.

    Args:
        function_name: Name of the MCP tool function.
        phase: One of "called", "completed" or "failed".
        extra: Dictionary of additional data to log.
        duration: Optional duration in seconds (for "completed"/"failed").
    """
    if duration is not None:
        extra["duration_seconds"] = duration
    if phase == "failed":
        mcp_tools_logger.error(f"{function_name} {phase}", extra=extra, exc_info=True)
    else:
        mcp_tools_logger.info(f"{function_name} {phase}", extra=extra)


@contextmanager
def logged_tool_call(function_name: str, **fields: Any) -> Iterator[Dict[str, Any]]:
    """Wrap a tool body with ``log_mcp_tool`` calls for each phase.

    Yields a dict the tool may fill with result data (e.g. ``result_count``);
    it is merged into the "completed" log entry. Failures are logged with the
    traceback and re-raised.
    """
    log_mcp_tool(function_name, "called", dict(fields))
    outcome: Dict[str, Any] = {}
    start_time = time.time()
    try:
        yield outcome
    except Exception:
        log_mcp_tool(function_name, "failed", dict(fields), duration=time.time() - start_time)
        raise
    log_mcp_tool(function_name, "completed", {**fields, **outcome}, duration=time.time() - start_time)


def tool_result(records: List[Any]) -> Dict[str, Any]:
    """JSON-serializable envelope returned by every tool."""
    return {
        "count": len(records),
        "results": records,
    }
