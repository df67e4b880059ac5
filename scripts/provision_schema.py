#!/usr/bin/env python3
"""
Create or drop the keyspace and user table.

Reads the CASSANDRA_* settings from the environment (or a .env file).

    python scripts/provision_schema.py create
    python scripts/provision_schema.py drop --keyspace user_test
"""

import argparse
import logging
import sys

from cassandra import ConsistencyLevel
from dotenv import load_dotenv

sys.path.insert(0, "src")

from adapter.cassandra.connection import CassandraConfig, close_session, create_session
from adapter.cassandra.schema import create_keyspace, create_user_table, drop_keyspace
from domain.model.errors import StoreError
from utils.logging import setup_structured_logging

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def create(config: CassandraConfig) -> None:
    admin = create_session(config, consistency=ConsistencyLevel.QUORUM)
    try:
        create_keyspace(admin, config.keyspace, config.replication_factor)
    finally:
        close_session(admin)

    session = create_session(config, keyspace=config.keyspace)
    try:
        create_user_table(session)
    finally:
        close_session(session)


def drop(config: CassandraConfig) -> None:
    admin = create_session(config, consistency=ConsistencyLevel.QUORUM)
    try:
        drop_keyspace(admin, config.keyspace)
    finally:
        close_session(admin)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Provision the user keyspace and table")
    parser.add_argument("action", choices=["create", "drop"], help="What to do with the schema")
    parser.add_argument("--keyspace", type=str, default=None, help="Override CASSANDRA_KEYSPACE")
    parser.add_argument("--replication-factor", type=positive_int, default=None,
                        help="Override CASSANDRA_REPLICATION_FACTOR")
    return parser


def resolve_config(args: argparse.Namespace, base: CassandraConfig) -> CassandraConfig:
    """Apply command line overrides on top of the environment config."""
    return CassandraConfig(
        contact_points=base.contact_points,
        port=base.port,
        keyspace=base.keyspace if args.keyspace is None else args.keyspace,
        replication_factor=(
            base.replication_factor if args.replication_factor is None else args.replication_factor
        ),
    )


def main() -> int:
    load_dotenv()
    setup_structured_logging()

    args = build_parser().parse_args()
    config = resolve_config(args, CassandraConfig.from_env())

    try:
        if args.action == "create":
            create(config)
        else:
            drop(config)
    except StoreError as e:
        logger.error("Provisioning failed", extra={"action": args.action, "error": str(e)})
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
