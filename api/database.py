import logging
from contextlib import contextmanager
from typing import Generator, Optional

from neo4j import Driver, GraphDatabase, Session
from config import settings

logger = logging.getLogger(__name__)

# Carriers merge on MC number; safety and insurance updates look up by DOT number.
SCHEMA_STATEMENTS = (
    "CREATE CONSTRAINT carrier_mc_number IF NOT EXISTS FOR (c:Carrier) REQUIRE c.mc_number IS UNIQUE",
    "CREATE INDEX carrier_dot_number IF NOT EXISTS FOR (c:Carrier) ON (c.dot_number)",
)


class Neo4jConnection:
    """Optional Neo4j store for scraped carriers.

    The driver is created on first use so the scraping API runs without a
    database; only persistence requires NEO4J_PASSWORD.
    """

    def __init__(self, uri: Optional[str] = None, user: Optional[str] = None, password: Optional[str] = None):
        self.uri = uri or settings.neo4j_uri
        self.user = user or settings.neo4j_user
        self.password = password or settings.neo4j_password
        self._driver: Optional[Driver] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.password)

    @property
    def driver(self) -> Driver:
        if self._driver is None:
            if not self.password:
                raise ValueError("NEO4J_PASSWORD is required to store carriers")
            logger.info(f"Connecting to Neo4j at {self.uri}")
            self._driver = GraphDatabase.driver(self.uri, auth=(self.user, self.password))
        return self._driver

    def close(self):
        if self._driver:
            self._driver.close()
            self._driver = None

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Open a session that is closed when the block exits."""
        session = self.driver.session()
        try:
            yield session
        finally:
            session.close()

    def verify_connectivity(self) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            with self.get_session() as session:
                return session.run("RETURN 1 as test").single()["test"] == 1
        except Exception as e:
            logger.error(f"Database connectivity check failed: {e}")
            return False

    def ensure_schema(self) -> None:
        """Create the carrier constraint and index if they are missing."""
        with self.get_session() as session:
            for statement in SCHEMA_STATEMENTS:
                session.run(statement).consume()
        logger.info("Carrier schema verified")


# Singleton instance
db = Neo4jConnection()


class BaseRepository:
    """Base class for repositories backed by a Neo4jConnection."""

    def __init__(self, connection: Optional[Neo4jConnection] = None):
        self.db = connection or db

    def execute_query(self, query: str, parameters: dict = None) -> list:
        """Run a Cypher statement and return its records as dictionaries.

        Args:
            query: Cypher query string
            parameters: Optional query parameters

        Returns:
            list: One dict per returned record
        """
        with self.db.get_session() as session:
            result = session.run(query, parameters or {})
            return [record.data() for record in result]
