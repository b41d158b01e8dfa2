"""Users API: use cases over any UserRepository backend."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel

from ..shared.search import SearchParams, SortDirection
from ..users.repository import UserRepository
from ..users.user_models import UserEntity
from ..utils.logging import get_logger

logger = get_logger(__name__)


class UserOutput(BaseModel):
    """Public view of a user (no password)."""
    id: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None


class UserListOutput(BaseModel):
    items: List[UserOutput]
    total: int
    current_page: int
    last_page: int
    per_page: int
    sort: Optional[str] = None
    sort_dir: Optional[SortDirection] = None
    filter: Optional[str] = None


def to_user_output(entity: UserEntity) -> UserOutput:
    return UserOutput(
        id=entity.id,
        name=entity.name,
        email=entity.email,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
        deleted_at=entity.deleted_at,
    )


def create_user(repo: UserRepository, *, name: str, email: str, password: str) -> UserOutput:
    """Create a user. Raises ConflictError if an active user holds the email."""
    repo.email_exists(email)
    entity = UserEntity(name=name, email=email, password=password)
    repo.insert(entity)
    logger.info(f"Created user {entity.id}")
    return to_user_output(entity)


def get_user(repo: UserRepository, user_id: str) -> UserOutput:
    return to_user_output(repo.find_by_id(user_id))


def list_users(repo: UserRepository, params: Optional[SearchParams] = None) -> UserListOutput:
    """One page of active users matching params (defaults: page 1, 15 per page, newest first)."""
    result = repo.search(params or SearchParams())
    return UserListOutput(**result.to_dict(to_user_output))


def list_all_users(repo: UserRepository, include_deleted: bool = False) -> List[UserOutput]:
    users = repo.find_all_including_deleted() if include_deleted else repo.find_all()
    return [to_user_output(user) for user in users]


def soft_delete_user(repo: UserRepository, user_id: str) -> None:
    repo.soft_delete(user_id)


def restore_user(repo: UserRepository, user_id: str) -> UserOutput:
    """Restore a soft-deleted user and return its active view."""
    repo.restore(user_id)
    return to_user_output(repo.find_by_id(user_id))


def delete_user(repo: UserRepository, user_id: str) -> None:
    """Permanently remove a user. Cannot be undone."""
    repo.delete(user_id)
