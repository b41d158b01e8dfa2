"""Translate between UserRow ORM rows and UserEntity."""

from ..users.user_models import UserEntity
from ..utils.text import normalize
from .schema import UserRow


def to_entity(row: UserRow) -> UserEntity:
    return UserEntity.from_record(
        {
            "id": row.id,
            "name": row.name,
            "email": row.email,
            "password": row.password,
            "created_at": row.created_at,
            "updated_at": row.updated_at,
            "deleted_at": row.deleted_at,
        }
    )


def to_row(entity: UserEntity) -> UserRow:
    record = entity.to_record()
    return UserRow(name_normalized=normalize(entity.name), **record)


def apply_to_row(row: UserRow, entity: UserEntity) -> None:
    """Copy the mutable state of entity onto an existing row."""
    row.name = entity.name
    row.name_normalized = normalize(entity.name)
    row.email = entity.email
    row.password = entity.password
    row.updated_at = entity.updated_at
    row.deleted_at = entity.deleted_at
