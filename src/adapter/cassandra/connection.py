import os
import logging
from dataclasses import dataclass

from cassandra import ConsistencyLevel
from cassandra.cluster import Cluster, ExecutionProfile, EXEC_PROFILE_DEFAULT, Session

from adapter.cassandra import CASSANDRA_ERRORS
from domain.model.errors import StoreError

logger = logging.getLogger(__name__)

DEFAULT_CONTACT_POINTS = '127.0.0.1'
DEFAULT_PORT = 9042
DEFAULT_KEYSPACE = 'testtrx'
DEFAULT_REPLICATION_FACTOR = 1

_session_cache: Session | None = None
_connection_failed = False


@dataclass(frozen=True)
class CassandraConfig:
    """Where the cluster lives and which keyspace to use."""
    contact_points: tuple[str, ...] = (DEFAULT_CONTACT_POINTS,)
    port: int = DEFAULT_PORT
    keyspace: str = DEFAULT_KEYSPACE
    replication_factor: int = DEFAULT_REPLICATION_FACTOR

    @classmethod
    def from_env(cls) -> 'CassandraConfig':
        """Build a config from CASSANDRA_* environment variables."""
        raw_points = os.getenv('CASSANDRA_CONTACT_POINTS', DEFAULT_CONTACT_POINTS)
        contact_points = tuple(p.strip() for p in raw_points.split(',') if p.strip())
        return cls(
            contact_points=contact_points or (DEFAULT_CONTACT_POINTS,),
            port=int(os.getenv('CASSANDRA_PORT', DEFAULT_PORT)),
            keyspace=os.getenv('CASSANDRA_KEYSPACE', DEFAULT_KEYSPACE),
            replication_factor=int(os.getenv('CASSANDRA_REPLICATION_FACTOR', DEFAULT_REPLICATION_FACTOR)),
        )


def create_session(
    config: CassandraConfig,
    keyspace: str | None = None,
    consistency: int = ConsistencyLevel.ONE,
) -> Session:
    """Connect to the cluster and open a session.

    Args:
        config: Cluster location.
        keyspace: Keyspace to bind the session to. None opens an unbound
            session, which is what keyspace provisioning needs.
        consistency: Default consistency level for statements that don't set one.

    Raises:
        StoreError: the cluster could not be reached.
    """
    profile = ExecutionProfile(consistency_level=consistency)
    cluster = Cluster(
        contact_points=list(config.contact_points),
        port=config.port,
        execution_profiles={EXEC_PROFILE_DEFAULT: profile},
    )
    try:
        session = cluster.connect(keyspace)
    except CASSANDRA_ERRORS as e:
        cluster.shutdown()
        logger.error("Could not connect to cluster", extra={
            "contactPoints": list(config.contact_points), "keyspace": keyspace, "error": str(e),
        })
        raise StoreError("Could not connect to cluster", cause=e) from e

    logger.info("Connected to cluster", extra={"contactPoints": list(config.contact_points), "keyspace": keyspace})
    return session


def close_session(session: Session) -> None:
    """Shut down a session and the cluster object that owns it."""
    session.cluster.shutdown()


def reset_session():
    global _session_cache, _connection_failed
    if _session_cache is not None:
        close_session(_session_cache)
    _session_cache = None
    _connection_failed = False


def get_cassandra_session(config: CassandraConfig | None = None) -> Session | None:
    """Get the process-wide application session, connecting on first use.

    If the first connection attempt fails, later calls return None without
    retrying until ``reset_session()`` is called.

    Returns:
        Session bound to the configured keyspace, or None if connection failed
    """
    global _session_cache, _connection_failed

    if _session_cache is not None and not _session_cache.is_shutdown:
        return _session_cache

    if _connection_failed:
        return None

    config = config or CassandraConfig.from_env()
    try:
        _session_cache = create_session(config, keyspace=config.keyspace)
    except StoreError:
        _connection_failed = True
        return None
    return _session_cache
