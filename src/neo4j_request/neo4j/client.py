"""Neo4j connection bootstrap and transaction helpers."""

from __future__ import annotations

import atexit
import logging
import re
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Union

from neo4j import READ_ACCESS, Driver, GraphDatabase, ServerInfo, Session, basic_auth

from ..config import Config
from ..exceptions import ConnectivityError, DriverNotInitializedError
from .records import extract_records
from .statement import Statement

logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "neo4j"
DEFAULT_CONNECT_TRIALS = 5
DEFAULT_RETRY_DELAY = 5.0

_AGENT_VERSION = re.compile(r"^Neo4j/(\d+)")


class Neo4jClient:
    """Caller-owned Neo4j client: one driver, many short-lived sessions.

    Usage
    -----
    client = Neo4jClient("bolt://localhost:7687", "neo4j", "secret")
    client.connect()
    rows = client.read_transaction("MATCH (n) RETURN n AS node LIMIT 3")
    client.close()

    Or as a context manager:

        with Neo4jClient.from_config(Config()) as client:
            client.write_transaction("CREATE (:Person {name: $name})", {"name": "Ada"})
    """

    def __init__(
        self,
        uri: str,
        user: str,
        password: str,
        database: str = DEFAULT_DATABASE,
        options: Optional[Mapping[str, Any]] = None,
        *,
        trials: int = DEFAULT_CONNECT_TRIALS,
        retry_delay: float = DEFAULT_RETRY_DELAY,
    ) -> None:
        self.uri = uri
        self.user = user
        self._auth = basic_auth(user, password)
        self._database = database
        self.options: Dict[str, Any] = dict(options or {})
        self.trials = trials
        self.retry_delay = retry_delay

        self._driver: Optional[Driver] = None
        self._server_info: Optional[ServerInfo] = None
        self._multi_db_support = False

    @property
    def trials(self) -> int:
        """Total number of connection attempts made by ``connect()``."""
        return self._trials

    @trials.setter
    def trials(self, value: int) -> None:
        if value < 1:
            raise ValueError("trials must be at least 1")
        self._trials = value

    @classmethod
    def from_config(cls, config: Config) -> "Neo4jClient":
        """Build a client from application settings."""
        return cls(
            str(config.neo4j_uri),
            config.neo4j_username,
            config.neo4j_password,
            database=config.neo4j_database,
            options=config.driver_options(),
            trials=config.neo4j_connect_trials,
            retry_delay=config.neo4j_connect_retry_delay,
        )

    # ─── Lifecycle ──────────────────────────────────────────

    def connect(self) -> ServerInfo:
        """Create the driver, verify connectivity and detect the server version.

        Retries a few times if the server is not reachable yet (e.g. during
        server or database startup), waiting ``retry_delay`` seconds between
        attempts.

        Returns:
            Information about the connected server.

        Raises:
            ConnectivityError: If every connection attempt failed, or the server
                info could not be fetched afterwards.
        """
        if self._driver is not None and self._server_info is not None:
            return self._server_info

        driver = self._open_driver()
        try:
            server_info = driver.get_server_info()
        except Exception as e:
            driver.close()
            logger.error("Neo4j server info could not be fetched: %s", e)
            raise ConnectivityError(self.uri, self.trials) from e
        logger.info(
            "Neo4j Server: %s at %s (protocol %s)",
            server_info.agent,
            server_info.address,
            server_info.protocol_version,
        )

        self._driver = driver
        self._server_info = server_info
        self._multi_db_support = self._detect_multi_db_support(server_info.agent)

        atexit.register(self.close)
        return server_info

    def _open_driver(self) -> Driver:
        """Instantiate the driver, retrying up to ``trials`` times."""
        last_error: Optional[Exception] = None

        for attempt in range(1, self.trials + 1):
            if attempt > 1:
                logger.warning(
                    "Neo4j driver instantiation failed (attempt %d/%d): %s. Retry in %s seconds...",
                    attempt - 1,
                    self.trials,
                    last_error,
                    self.retry_delay,
                )
                time.sleep(self.retry_delay)

            driver = GraphDatabase.driver(self.uri, auth=self._auth, **self.options)
            try:
                driver.verify_connectivity()
                return driver
            except Exception as e:
                driver.close()
                last_error = e

        logger.error("Neo4j driver instantiation failed: %s", last_error)
        raise ConnectivityError(self.uri, self.trials) from last_error

    @staticmethod
    def _detect_multi_db_support(agent: Optional[str]) -> bool:
        """Multiple databases exist since Neo4j 4.0."""
        match = _AGENT_VERSION.match(agent or "")
        if match is None:
            logger.warning("Unrecognized Neo4j server agent %r, assuming a single database", agent)
            return False
        return int(match.group(1)) > 3

    def close(self) -> None:
        """Close the driver and release all pooled connections."""
        atexit.unregister(self.close)
        if self._driver is not None:
            self._driver.close()
            self._driver = None
            self._server_info = None
            self._multi_db_support = False
            logger.info("Neo4j connection closed")

    def __enter__(self) -> "Neo4jClient":
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    # ─── Properties ─────────────────────────────────────────

    @property
    def driver(self) -> Driver:
        """Return the raw driver for code that needs direct access.

        Raises:
            DriverNotInitializedError: If the client is not connected.
        """
        if self._driver is None:
            raise DriverNotInitializedError()
        return self._driver

    @property
    def server_info(self) -> Optional[ServerInfo]:
        return self._server_info

    @property
    def multi_db_support(self) -> bool:
        return self._multi_db_support

    @property
    def database(self) -> str:
        return self._database

    @contextmanager
    def session(self, **kwargs: Any) -> Iterator[Session]:
        """Context manager for a Neo4j session.

        The ``database`` argument is only passed when the server supports
        multiple databases; Neo4j 3.x rejects it.
        """
        driver = self.driver
        if self._multi_db_support:
            kwargs.setdefault("database", self._database)
        session = driver.session(**kwargs)
        try:
            yield session
        finally:
            session.close()

    # ─── Transactions ───────────────────────────────────────

    def read_transaction(
        self, query: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """READ transaction without modifying the database."""
        with self.session(default_access_mode=READ_ACCESS) as session:
            return session.execute_read(_run_and_extract, query, params or {})

    def write_transaction(
        self, query: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """WRITE transaction that modifies the database."""
        with self.session() as session:
            return session.execute_write(_run_and_extract, query, params or {})

    def multiple_statements(
        self, statements: Sequence[Union[Statement, Mapping[str, Any]]]
    ) -> List[List[Dict[str, Any]]]:
        """Run several statements in one transaction.

        Statements run in order. The transaction is committed only if all of
        them succeed, otherwise it is rolled back and the error re-raised.

        Args:
            statements: ``Statement`` objects or ``{"statement": ..., "parameters": ...}``
                mappings.

        Returns:
            The extracted records of each statement, in order.
        """
        parsed = [Statement.coerce(s) for s in statements]

        with self.session() as session:
            tx = session.begin_transaction()
            try:
                results = []
                for s in parsed:
                    result = tx.run(s.statement, s.parameters)
                    results.append(extract_records(list(result)))
                tx.commit()
                return results
            except Exception:
                if not tx.closed():
                    try:
                        tx.rollback()
                    except Exception:
                        logger.error("Rollback of multi-statement transaction failed", exc_info=True)
                raise


def _run_and_extract(tx, query: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Transaction function; records must be consumed before the tx ends."""
    result = tx.run(query, params)
    return extract_records(list(result))
