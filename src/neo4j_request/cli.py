"""Simple CLI for checking a Neo4j connection and running ad-hoc Cypher.

Usage examples (from project root):

    # Ensure src is on PYTHONPATH (or install the package), then:
    PYTHONPATH=src python -m neo4j_request.cli info

    PYTHONPATH=src python -m neo4j_request.cli read \
        --query "MATCH (n) RETURN n AS node LIMIT 3"

    PYTHONPATH=src python -m neo4j_request.cli write \
        --query "CREATE (p:Person {name: $name}) RETURN p" --params '{"name": "Ada"}'

    PYTHONPATH=src python -m neo4j_request.cli statements --file statements.json

The CLI uses:
- .env configuration (NEO4J_URI, NEO4J_USERNAME, NEO4J_PASSWORD, ...)
- Neo4jClient for connection and transactions
"""

import argparse
import json
import logging
from typing import Any, Dict, List, Optional

from .config import Config
from .neo4j import Neo4jClient, remove_empty_arrays


def _print_json(payload: Any) -> None:
    # default=str covers anything the record conversion leaves untouched.
    print(json.dumps(payload, indent=2, sort_keys=True, default=str))


def _client(config: Config, args: argparse.Namespace) -> Neo4jClient:
    client = Neo4jClient.from_config(config)
    if args.trials is not None:
        client.trials = args.trials
    return client


def _cmd_info(args: argparse.Namespace, config: Config) -> None:
    """Connect, print server information and whether multiple databases are used."""

    with _client(config, args) as client:
        info = client.server_info
        result: Dict[str, Any] = {
            "address": info.address,
            "agent": info.agent,
            "protocol_version": info.protocol_version,
            "multi_db_support": client.multi_db_support,
            "database": client.database if client.multi_db_support else None,
        }

    _print_json(result)


def _cmd_indexes(args: argparse.Namespace, config: Config) -> None:
    """List the indexes of the target database."""

    with _client(config, args) as client:
        records = client.read_transaction("SHOW INDEXES")

    _print_json({"count": len(records), "results": records})


def _cmd_read(args: argparse.Namespace, config: Config) -> None:
    """Run a query in a read transaction."""

    with _client(config, args) as client:
        records = client.read_transaction(args.query, args.params)

    if args.array_key is not None:
        records = remove_empty_arrays(records, args.array_key, args.check_key)

    _print_json({"count": len(records), "results": records})


def _cmd_write(args: argparse.Namespace, config: Config) -> None:
    """Run a query in a write transaction."""

    with _client(config, args) as client:
        records = client.write_transaction(args.query, args.params)

    _print_json({"count": len(records), "results": records})


def _cmd_statements(args: argparse.Namespace, config: Config) -> None:
    """Run the statements of a JSON file in a single transaction."""

    statements = _load_statements(args.file)

    with _client(config, args) as client:
        results = client.multiple_statements(statements)

    _print_json({"count": len(results), "results": results})


def _load_statements(path: str) -> List[Dict[str, Any]]:
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of statements")
    return data


def _parse_params(value: Optional[str]) -> Dict[str, Any]:
    """Parse query parameters given as a JSON object."""
    if value is None:
        return {}
    try:
        params = json.loads(value)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"params must be valid JSON: {e}") from e
    if not isinstance(params, dict):
        raise argparse.ArgumentTypeError("params must be a JSON object")
    return params


def _positive_int(value: str) -> int:
    """Parse a strictly positive integer (e.g. the number of connection attempts)."""
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got \"{value}\"") from e
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="CLI for checking Neo4j connectivity and running Cypher",
    )
    parser.add_argument(
        "--trials",
        type=_positive_int,
        default=None,
        help="Connection attempts before giving up (default: NEO4J_CONNECT_TRIALS)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # info command
    p_info = subparsers.add_parser(
        "info",
        help="Connect and print server information",
    )
    p_info.set_defaults(func=_cmd_info)

    # indexes command
    p_indexes = subparsers.add_parser(
        "indexes",
        help="List the indexes of the target database",
    )
    p_indexes.set_defaults(func=_cmd_indexes)

    # read command
    p_read = subparsers.add_parser(
        "read",
        help="Run a Cypher query in a read transaction",
    )
    p_read.add_argument("--query", type=str, required=True, help="Cypher query")
    p_read.add_argument(
        "--params",
        type=_parse_params,
        default={},
        help="Query parameters as a JSON object",
    )
    p_read.add_argument(
        "--array-key",
        type=str,
        default=None,
        help="Collected list column to clean from OPTIONAL MATCH null placeholders",
        dest="array_key",
    )
    p_read.add_argument(
        "--check-key",
        type=str,
        default=None,
        help="Key of the first list element tested for null (requires --array-key)",
        dest="check_key",
    )
    p_read.set_defaults(func=_cmd_read)

    # write command
    p_write = subparsers.add_parser(
        "write",
        help="Run a Cypher query in a write transaction",
    )
    p_write.add_argument("--query", type=str, required=True, help="Cypher query")
    p_write.add_argument(
        "--params",
        type=_parse_params,
        default={},
        help="Query parameters as a JSON object",
    )
    p_write.set_defaults(func=_cmd_write)

    # statements command
    p_statements = subparsers.add_parser(
        "statements",
        help=(
            "Run statements from a JSON file "
            '([{"statement": ..., "parameters": {...}}, ...]) in one transaction'
        ),
    )
    p_statements.add_argument("--file", type=str, required=True, help="Path to the JSON file")
    p_statements.set_defaults(func=_cmd_statements)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return

    if getattr(args, "array_key", None) is not None and args.check_key is None:
        parser.error("--array-key requires --check-key")

    config = Config()
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s  %(name)-30s  %(levelname)-7s  %(message)s",
    )

    args.func(args, config)


if __name__ == "__main__":
    main()
