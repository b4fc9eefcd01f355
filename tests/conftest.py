"""Shared fixtures: a Neo4jClient wired to a mocked driver."""

import os

import pytest
from unittest.mock import MagicMock, patch

# Config() is instantiated at import time by the MCP wiring.
os.environ.setdefault("NEO4J_PASSWORD", "test-password")


def make_server_info(agent: str = "Neo4j/5.12.0") -> MagicMock:
    info = MagicMock()
    info.agent = agent
    info.address = ("localhost", 7687)
    info.protocol_version = (5, 2)
    return info


@pytest.fixture
def mock_driver():
    """Driver whose sessions and transactions are MagicMocks."""
    driver = MagicMock()
    driver.get_server_info.return_value = make_server_info()

    session = MagicMock()
    tx = MagicMock()
    tx.closed.return_value = False
    tx.run.return_value = []
    session.begin_transaction.return_value = tx
    # Managed transactions call the work function with the transaction.
    session.execute_read.side_effect = lambda work, *args, **kwargs: work(tx, *args, **kwargs)
    session.execute_write.side_effect = lambda work, *args, **kwargs: work(tx, *args, **kwargs)
    driver.session.return_value = session

    return driver


@pytest.fixture
def graph_database(mock_driver):
    with patch("neo4j_request.neo4j.client.GraphDatabase") as gdb:
        gdb.driver.return_value = mock_driver
        yield gdb


@pytest.fixture
def client(graph_database):
    """Connected client backed by the mocked driver."""
    from neo4j_request.neo4j import Neo4jClient

    c = Neo4jClient("bolt://localhost:7687", "neo4j", "secret", retry_delay=0)
    c.connect()
    yield c
    c.close()
