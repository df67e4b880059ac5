"""Keyspace and table provisioning.

Used by the provisioning script and integration tests. Application code
expects the schema to exist already.
"""

from logging import getLogger

from cassandra.cluster import Session

from adapter.cassandra import CASSANDRA_ERRORS, USER_TABLE_NAME
from domain.model.errors import StoreError

logger = getLogger(__name__)

CREATE_USER_TABLE_CQL = f"""
    CREATE TABLE IF NOT EXISTS {USER_TABLE_NAME} (
        user_email varchar,
        password varchar,
        name varchar,
        status varchar,
        last_activity timestamp,
        auth_token varchar,
        google_token varchar,
        facebook_token varchar,
        PRIMARY KEY ((user_email), name)
    ) WITH CLUSTERING ORDER BY (name ASC)
"""


def _execute(session: Session, cql: str, description: str, **log_extra) -> None:
    try:
        session.execute(cql)
    except CASSANDRA_ERRORS as e:
        logger.error(f"Unable to {description}", extra={**log_extra, "error": str(e)})
        raise StoreError(f"Unable to {description}", cause=e) from e
    logger.info(f"Done: {description}", extra=log_extra)


def create_keyspace(session: Session, keyspace: str, replication_factor: int = 1) -> None:
    cql = (
        f"CREATE KEYSPACE IF NOT EXISTS {keyspace} WITH replication = "
        f"{{'class': 'SimpleStrategy', 'replication_factor': {int(replication_factor)}}}"
    )
    _execute(session, cql, "create keyspace", keyspace=keyspace)


def drop_keyspace(session: Session, keyspace: str) -> None:
    _execute(session, f"DROP KEYSPACE IF EXISTS {keyspace}", "drop keyspace", keyspace=keyspace)


def create_user_table(session: Session) -> None:
    _execute(session, CREATE_USER_TABLE_CQL, "create user table", table=USER_TABLE_NAME)


def drop_user_table(session: Session) -> None:
    _execute(session, f"DROP TABLE IF EXISTS {USER_TABLE_NAME}", "drop user table", table=USER_TABLE_NAME)
