"""Cassandra implementation of UserMapper."""

from logging import getLogger

from cassandra import ConsistencyLevel
from cassandra.cluster import Session
from cassandra.query import SimpleStatement

from adapter.cassandra import CASSANDRA_ERRORS, USER_COLUMNS, USER_TABLE_NAME
from domain.model.errors import NoActiveQueryError, NotFoundError, StoreError
from domain.model.user import User, UserPage, UserStatus
from utils.timestamps import from_store, to_store

logger = getLogger(__name__)

DEFAULT_PAGE_SIZE = 10

_COLUMN_LIST = ', '.join(USER_COLUMNS)

FIND_BY_ID_CQL = f"SELECT {_COLUMN_LIST} FROM {USER_TABLE_NAME} WHERE user_email = %s LIMIT 1"

# The store cannot ORDER BY without a partition restriction, so a full scan comes back in token order.
FIND_ALL_CQL = f"SELECT {_COLUMN_LIST} FROM {USER_TABLE_NAME}"

INSERT_CQL = (
    f"INSERT INTO {USER_TABLE_NAME} ({_COLUMN_LIST}) "
    f"VALUES ({', '.join(['%s'] * len(USER_COLUMNS))})"
)

# user_email and name make up the primary key and can't be SET.
UPDATE_CQL = (
    f"UPDATE {USER_TABLE_NAME} SET "
    "password = %s, status = %s, last_activity = %s, "
    "auth_token = %s, google_token = %s, facebook_token = %s "
    "WHERE user_email = %s AND name = %s IF EXISTS"
)

DELETE_CQL = f"DELETE FROM {USER_TABLE_NAME} WHERE user_email = %s AND name = %s IF EXISTS"


class CassandraUserMapper:
    """Maps User objects to rows of the user table.

    ``find_all``/``next_page`` keep the scan position on the instance, so one
    instance must not run two scans at once. Use ``find_page`` with a
    caller-held paging state when that matters.
    """

    def __init__(self, session: Session, page_size: int = DEFAULT_PAGE_SIZE):
        self.session = session
        self.page_size = page_size
        self._paged_statement: SimpleStatement | None = None
        self._next_paging_state: bytes | None = None

    def ensure_table(self) -> bool:
        """Create the user table if it doesn't exist."""
        from adapter.cassandra.schema import create_user_table

        try:
            create_user_table(self.session)
            return True
        except StoreError:
            return False

    def set_page_size(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"Page size must be positive, got {size}")
        self.page_size = size

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, row) -> User:
        """Convert a result row to the User domain model.

        Raises:
            StoreError: the row holds a status code outside UserStatus
        """
        try:
            status = UserStatus(row.status)
        except ValueError as e:
            logger.error("Unreadable user row", extra={"email": row.user_email, "error": str(e)})
            raise StoreError("Unreadable user row", cause=e) from e

        return User(
            email=row.user_email,
            password=row.password or '',
            name=row.name,
            status=status,
            last_activity=from_store(row.last_activity),
            auth_token=row.auth_token or '',
            google_token=row.google_token or '',
            facebook_token=row.facebook_token or '',
        )

    def _fetch_page(self, statement: SimpleStatement, paging_state: bytes | None) -> UserPage:
        try:
            result = self.session.execute(statement, paging_state=paging_state)
            users = [self._to_domain(row) for row in result.current_rows]
        except CASSANDRA_ERRORS as e:
            logger.error("Failed to fetch user page", extra={"error": str(e)})
            raise StoreError("Failed to fetch user page", cause=e) from e

        logger.debug("Fetched user page", extra={"count": len(users), "pagingState": result.paging_state})
        return UserPage(users=users, paging_state=result.paging_state)

    def _reset_paging(self) -> None:
        self._paged_statement = None
        self._next_paging_state = None

    # ── read operations ──────────────────────────────────────

    def find_by_id(self, user_id: str) -> User:
        """Find a user by email.

        Raises:
            NotFoundError: no user has this email
            StoreError: the query failed
        """
        statement = SimpleStatement(FIND_BY_ID_CQL, consistency_level=ConsistencyLevel.ONE)
        try:
            row = self.session.execute(statement, (user_id,)).one()
        except CASSANDRA_ERRORS as e:
            logger.error("Failed to get user by ID", extra={"email": user_id, "error": str(e)})
            raise StoreError("Failed to get user by ID", cause=e) from e

        if row is None:
            raise NotFoundError(f"User not found: {user_id}")
        return self._to_domain(row)

    def find_page(self, paging_state: bytes | None = None, page_size: int | None = None) -> UserPage:
        """Fetch one page of all users starting at ``paging_state``.

        Does not touch the scan started by ``find_all``. Pass the returned
        ``paging_state`` back in to get the following page; it is None on the
        last page.
        """
        if page_size is None:
            page_size = self.page_size
        elif page_size < 1:
            raise ValueError(f"Page size must be positive, got {page_size}")

        statement = SimpleStatement(FIND_ALL_CQL, fetch_size=page_size)
        return self._fetch_page(statement, paging_state)

    def find_all(self) -> list[User]:
        """Start a paged scan over all users and return the first page.

        Any scan already in progress is abandoned.
        """
        self._reset_paging()
        statement = SimpleStatement(FIND_ALL_CQL, fetch_size=self.page_size)
        page = self._fetch_page(statement, None)

        # The paging state of this page is where the next page starts
        self._paged_statement = statement
        self._next_paging_state = page.paging_state
        return page.users

    def next_page(self) -> tuple[list[User], bool]:
        """Fetch the next page of the scan started by ``find_all``.

        Returns:
            The page's users and True if this was the last page. The last
            page can still carry users. After the last page the scan is
            closed and further calls raise NoActiveQueryError.

        Raises:
            NoActiveQueryError: ``find_all`` was not called, or the scan already ended
            StoreError: the query failed
        """
        if self._paged_statement is None:
            raise NoActiveQueryError()

        if self._next_paging_state is None:
            # find_all already got everything
            self._reset_paging()
            return [], True

        self._paged_statement.fetch_size = self.page_size
        page = self._fetch_page(self._paged_statement, self._next_paging_state)

        if page.is_last:
            self._reset_paging()
            return page.users, True

        self._next_paging_state = page.paging_state
        return page.users, False

    # ── write operations ─────────────────────────────────────

    def insert(self, user: User) -> bool:
        """Insert all columns of a user. An existing row with the same key is overwritten."""
        try:
            self.session.execute(INSERT_CQL, (
                user.email,
                user.password,
                user.name,
                UserStatus(user.status).value,
                to_store(user.last_activity),
                user.auth_token,
                user.google_token,
                user.facebook_token,
            ))
        except CASSANDRA_ERRORS as e:
            logger.error("Failed to insert user", extra={"email": user.email, "error": str(e)})
            raise StoreError("Failed to insert user", cause=e) from e

        logger.info("User inserted", extra={"email": user.email})
        return True

    def update(self, user: User) -> bool:
        """Update every non-key column of the user identified by email and name.

        Returns True whenever the statement ran without error, even if no
        such user exists. Callers that need to know must check with
        ``find_by_id`` first.
        """
        try:
            result = self.session.execute(UPDATE_CQL, (
                user.password,
                UserStatus(user.status).value,
                to_store(user.last_activity),
                user.auth_token,
                user.google_token,
                user.facebook_token,
                user.email,
                user.name,
            ))
        except CASSANDRA_ERRORS as e:
            logger.error("Failed to update user", extra={"email": user.email, "error": str(e)})
            raise StoreError("Failed to update user", cause=e) from e

        if not result.was_applied:
            logger.warning("User not found for update", extra={"email": user.email, "userName": user.name})
        else:
            logger.info("User updated", extra={"email": user.email})
        return True

    def delete(self, user: User) -> bool:
        """Delete the user identified by email and name.

        Same caveat as ``update``: a missing user still returns True.
        """
        try:
            result = self.session.execute(DELETE_CQL, (user.email, user.name))
        except CASSANDRA_ERRORS as e:
            logger.error("Failed to delete user", extra={"email": user.email, "error": str(e)})
            raise StoreError("Failed to delete user", cause=e) from e

        if not result.was_applied:
            logger.warning("User not found for deletion", extra={"email": user.email, "userName": user.name})
        else:
            logger.info("User deleted", extra={"email": user.email})
        return True
