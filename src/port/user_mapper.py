from typing import Protocol

from domain.model.user import User, UserPage


class UserMapper(Protocol):
    """Protocol defining the data mapper interface for users.

    ``find_all``/``next_page`` keep the scan cursor on the mapper and are not
    safe to share between threads. ``find_page`` takes the cursor from the
    caller instead.
    """
    def set_page_size(self, size: int) -> None:
        """Set the number of users fetched per page by subsequent scans."""
        ...

    def find_by_id(self, user_id: str) -> User:
        """Find a user by email. Raise NotFoundError if there is none."""
        ...

    def find_all(self) -> list[User]:
        """Start a new paged scan over all users and return the first page."""
        ...

    def next_page(self) -> tuple[list[User], bool]:
        """Return the next page of the current scan and whether it was the last one.

        Raise NoActiveQueryError if no scan is in progress.
        """
        ...

    def find_page(self, paging_state: bytes | None = None, page_size: int | None = None) -> UserPage:
        """Fetch a single page starting at ``paging_state``."""
        ...

    def insert(self, user: User) -> bool:
        """Insert all columns of a user. Return True if successful."""
        ...

    def update(self, user: User) -> bool:
        """Update the non-key columns of an existing user. Return True if successful."""
        ...

    def delete(self, user: User) -> bool:
        """Delete a user by email and name. Return True if successful."""
        ...
