"""In-memory implementation of UserMapper for testing."""

from dataclasses import replace

from domain.model.errors import NoActiveQueryError, NotFoundError, StoreError
from domain.model.user import User, UserPage, UserStatus
from utils.timestamps import to_store

DEFAULT_PAGE_SIZE = 10


class FakeUserMapper:
    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE):
        self.store: dict[tuple[str, str], User] = {}
        self.page_size = page_size
        self._scan_active = False
        self._next_paging_state: bytes | None = None

    def set_page_size(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"Page size must be positive, got {size}")
        self.page_size = size

    def _stored_copy(self, user: User) -> User:
        # Same normalisation the real store applies on write
        return replace(
            user,
            status=UserStatus(user.status),
            last_activity=to_store(user.last_activity),
        )

    # ── write operations ─────────────────────────────────────

    def insert(self, user: User) -> bool:
        self.store[(user.email, user.name)] = self._stored_copy(user)
        return True

    def update(self, user: User) -> bool:
        key = (user.email, user.name)
        if key in self.store:
            self.store[key] = self._stored_copy(user)
        return True

    def delete(self, user: User) -> bool:
        self.store.pop((user.email, user.name), None)
        return True

    # ── read operations ──────────────────────────────────────

    def find_by_id(self, user_id: str) -> User:
        for (email, _), user in sorted(self.store.items()):
            if email == user_id:
                return replace(user)
        raise NotFoundError(f"User not found: {user_id}")

    def find_page(self, paging_state: bytes | None = None, page_size: int | None = None) -> UserPage:
        if page_size is None:
            size = self.page_size
        elif page_size < 1:
            raise ValueError(f"Page size must be positive, got {page_size}")
        else:
            size = page_size

        try:
            start = int(paging_state.decode()) if paging_state else 0
        except ValueError as e:
            raise StoreError("Invalid paging state", cause=e) from e
        if start < 0:
            raise StoreError("Invalid paging state")

        rows = [replace(user) for _, user in sorted(self.store.items())]
        end = start + size
        next_state = str(end).encode() if end < len(rows) else None
        return UserPage(users=rows[start:end], paging_state=next_state)

    def find_all(self) -> list[User]:
        page = self.find_page()
        self._scan_active = True
        self._next_paging_state = page.paging_state
        return page.users

    def next_page(self) -> tuple[list[User], bool]:
        if not self._scan_active:
            raise NoActiveQueryError()

        if self._next_paging_state is None:
            self._scan_active = False
            return [], True

        page = self.find_page(self._next_paging_state)
        if page.is_last:
            self._scan_active = False
            self._next_paging_state = None
            return page.users, True

        self._next_paging_state = page.paging_state
        return page.users, False
