"""In-memory user repository, the reference backend used by fast tests.

Returned entities are the stored objects themselves, so mutating one in place
is visible to later reads. Other backends do not share this behavior; callers
must still go through ``update``/``soft_delete``/``restore`` to commit changes.
"""

from typing import List, Optional

from ..shared.errors import ConflictError, NotFoundError
from ..shared.search import SearchParams, SearchResult
from ..shared.searchable import search_entities
from ..utils.logging import get_logger
from .repository import UserRepository, user_matches
from .user_models import UserEntity

logger = get_logger(__name__)


class UserInMemoryRepository(UserRepository):
    def __init__(self, items: Optional[List[UserEntity]] = None):
        self.items: List[UserEntity] = list(items or [])

    def _find(self, predicate) -> Optional[UserEntity]:
        return next((item for item in self.items if predicate(item)), None)

    def insert(self, entity: UserEntity) -> None:
        if self._find(lambda item: item.id == entity.id):
            raise ConflictError(f"Entity already exists using id {entity.id}")
        self.email_exists(entity.email)
        self.items.append(entity)
        logger.debug(f"Inserted user {entity.id}")

    def find_by_id(self, user_id: str) -> UserEntity:
        entity = self._find(lambda item: item.id == user_id and not item.is_deleted())
        if entity is None:
            raise NotFoundError(f"Entity not found using id {user_id}")
        return entity

    def find_by_id_including_deleted(self, user_id: str) -> UserEntity:
        entity = self._find(lambda item: item.id == user_id)
        if entity is None:
            raise NotFoundError(f"Entity not found using id {user_id}")
        return entity

    def find_by_email(self, email: str) -> UserEntity:
        entity = self._find(lambda item: item.email == email and not item.is_deleted())
        if entity is None:
            raise NotFoundError(f"Entity not found using email {email}")
        return entity

    def email_exists(self, email: str) -> None:
        if self._find(lambda item: item.email == email and not item.is_deleted()):
            raise ConflictError("Email address already used")

    def find_all(self) -> List[UserEntity]:
        return [item for item in self.items if not item.is_deleted()]

    def find_all_including_deleted(self) -> List[UserEntity]:
        return list(self.items)

    def update(self, entity: UserEntity) -> None:
        self.find_by_id(entity.id)
        index = next(i for i, item in enumerate(self.items) if item.id == entity.id)
        self.items[index] = entity
        logger.debug(f"Updated user {entity.id}")

    def delete(self, user_id: str) -> None:
        entity = self.find_by_id_including_deleted(user_id)
        self.items = [item for item in self.items if item is not entity]
        logger.info(f"Hard deleted user {user_id}")

    def soft_delete(self, user_id: str) -> None:
        entity = self.find_by_id(user_id)
        entity.soft_delete()
        logger.info(f"Soft deleted user {user_id}")

    def restore(self, user_id: str) -> None:
        entity = self.find_by_id_including_deleted(user_id)
        entity.restore()
        logger.info(f"Restored user {user_id}")

    def search(self, params: SearchParams) -> SearchResult[UserEntity]:
        # search_entities works on its own copy; self.items is never reassigned
        return search_entities(
            tuple(self.items),
            params,
            sortable_fields=self.sortable_fields,
            matches=user_matches,
        )
