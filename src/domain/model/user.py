from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class UserStatus(str, Enum):
    """Status codes stored in the ``status`` column."""
    ACTIVE = 'A'
    INACTIVE = 'I'
    DELETED = 'D'

    @property
    def label(self) -> str:
        return USER_STATUS_LABELS[self]


USER_STATUS_LABELS: dict[UserStatus, str] = {
    UserStatus.ACTIVE: 'Active',
    UserStatus.INACTIVE: 'Inactive',
    UserStatus.DELETED: 'Deleted',
}


@dataclass
class User:
    """Domain model representing a user.

    ``email`` and ``name`` form the row key and cannot be changed once stored.
    ``password`` is expected to be hashed by the caller.
    """
    email: str
    password: str
    name: str
    status: UserStatus = UserStatus.ACTIVE
    last_activity: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    auth_token: str = ''
    google_token: str = ''
    facebook_token: str = ''

    @property
    def id(self) -> str:
        return self.email


@dataclass(frozen=True)
class UserPage:
    """One page of a paged user scan and the token that resumes it."""
    users: list[User]
    paging_state: bytes | None = None

    @property
    def is_last(self) -> bool:
        return self.paging_state is None
