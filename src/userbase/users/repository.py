"""User repository contract implemented by every storage backend."""

from abc import abstractmethod
from typing import List, Tuple

from ..shared.search import SearchParams, SearchResult
from ..shared.searchable import SearchableRepository
from ..utils.text import contains_ignoring_accents
from .user_models import UserEntity

USER_SORTABLE_FIELDS: Tuple[str, ...] = ("name", "created_at", "updated_at")


def user_matches(user: UserEntity, filter_text: str) -> bool:
    """Search predicate: accent- and case-insensitive match on the name."""
    return contains_ignoring_accents(user.name, filter_text)


class UserRepository(SearchableRepository[UserEntity]):
    """
    Storage contract for users.

    Visibility rules:
    - "active only" operations ignore soft-deleted users entirely
    - "including deleted" operations see every stored user

    All lookups raise NotFoundError instead of returning None, and email
    uniqueness only considers active users.
    """

    sortable_fields: Tuple[str, ...] = USER_SORTABLE_FIELDS

    @abstractmethod
    def insert(self, entity: UserEntity) -> None:
        """Store a new user. Raises ConflictError on duplicate id or active email."""
        pass

    @abstractmethod
    def find_by_id(self, user_id: str) -> UserEntity:
        """Active user by id. Raises NotFoundError if absent or soft-deleted."""
        pass

    @abstractmethod
    def find_by_id_including_deleted(self, user_id: str) -> UserEntity:
        """User by id regardless of deletion state. Raises NotFoundError if never stored."""
        pass

    @abstractmethod
    def find_by_email(self, email: str) -> UserEntity:
        """Active user by email. Raises NotFoundError otherwise."""
        pass

    @abstractmethod
    def email_exists(self, email: str) -> None:
        """Raise ConflictError if an active user already has this email."""
        pass

    @abstractmethod
    def find_all(self) -> List[UserEntity]:
        pass

    @abstractmethod
    def find_all_including_deleted(self) -> List[UserEntity]:
        pass

    @abstractmethod
    def update(self, entity: UserEntity) -> None:
        """Persist changes to an active user. Raises NotFoundError otherwise."""
        pass

    @abstractmethod
    def delete(self, user_id: str) -> None:
        """Permanently remove a user, active or soft-deleted."""
        pass

    @abstractmethod
    def soft_delete(self, user_id: str) -> None:
        """Mark an active user deleted. Raises NotFoundError if not active."""
        pass

    @abstractmethod
    def restore(self, user_id: str) -> None:
        """Clear the deletion mark on a stored user."""
        pass

    @abstractmethod
    def search(self, params: SearchParams) -> SearchResult[UserEntity]:
        pass
