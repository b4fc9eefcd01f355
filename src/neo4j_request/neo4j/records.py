"""Conversion of driver results into plain Python data.

The driver hands back ``Record`` objects whose values may be graph
entities (nodes, relationships, paths), temporal and spatial types, or
integers too large to be represented exactly by a double. The helpers in
this module turn those into dicts, lists, strings and numbers that can be
serialized as JSON without a custom encoder.

All functions are pure: they build new containers and never modify the
data they are given.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from neo4j import Record
from neo4j.graph import Node, Path, Relationship
from neo4j.spatial import Point
from neo4j.time import Date, DateTime, Duration, Time

# Largest integer a double can hold exactly (2**53 - 1).
MAX_SAFE_INTEGER = 9007199254740991

_STRINGIFIED_TYPES = (Date, DateTime, Time, Duration, Point)


def extract_records(records: Optional[Iterable[Record]]) -> List[Dict[str, Any]]:
    """Extract and convert records returned by the driver.

    Args:
        records: Records of a query result, or None.

    Returns:
        One dict per record, keyed by the column names of the query.
    """
    if records is None:
        return []

    return [
        {key: normalize_value(record[key]) for key in record.keys()}
        for record in records
    ]


def normalize_value(value: Any) -> Any:
    """Recursively convert a single driver value into plain data."""
    if value is None or isinstance(value, bool):
        return value

    if isinstance(value, int):
        if -MAX_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER:
            return value
        return str(value)

    # neo4j date, time, duration and point
    if isinstance(value, _STRINGIFIED_TYPES):
        return str(value)

    if isinstance(value, (Node, Relationship)):
        return {key: normalize_value(v) for key, v in value.items()}

    if isinstance(value, Path):
        return _normalize_path(value)

    if isinstance(value, (list, tuple)):
        return [normalize_value(v) for v in value]

    if isinstance(value, Mapping):
        return {key: normalize_value(v) for key, v in value.items()}

    return value


def _normalize_path(path: Path) -> Dict[str, Any]:
    """Flatten a path into start/end nodes and its traversal segments."""
    nodes = list(path.nodes)
    relationships = list(path.relationships)

    segments = [
        {
            "start": normalize_value(nodes[i]),
            "relationship": normalize_value(rel),
            "end": normalize_value(nodes[i + 1]),
        }
        for i, rel in enumerate(relationships)
    ]

    return {
        "start": normalize_value(path.start_node),
        "end": normalize_value(path.end_node),
        "segments": segments,
        "length": len(relationships),
    }


def remove_empty_arrays(
    data: List[Any], array_key: str, check_key: str
) -> List[Any]:
    """Look for empty arrays returned by Neo4j and clean them.

    If a Cypher query combines ``OPTIONAL MATCH (node)`` with
    ``collect({key: node.value}) AS values``, a row without a match still
    gets a one-element list filled with nulls: ``[{"key": None}]``. Calling
    ``remove_empty_arrays(data, "values", "key")`` reduces such lists to
    ``[]``. Every list-valued field is searched as well, so nested
    occurrences are cleaned too.

    Args:
        data: Records (dicts) as returned by ``extract_records``.
        array_key: Key of the list to check.
        check_key: Key of the list's first element that is tested for None.

    Returns:
        A new list of records with the placeholder lists emptied.
    """
    return [_prune_record(item, array_key, check_key) for item in data]


def _prune_record(item: Any, array_key: str, check_key: str) -> Any:
    if not isinstance(item, Mapping):
        return item

    record = dict(item)

    values = record.get(array_key)
    if isinstance(values, list) and values:
        first = values[0]
        if isinstance(first, Mapping) and check_key in first and first[check_key] is None:
            record[array_key] = []

    for key, value in record.items():
        if isinstance(value, list):
            record[key] = remove_empty_arrays(value, array_key, check_key)

    return record
