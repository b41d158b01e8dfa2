"""User entity and its soft-delete lifecycle.

A user is Active until ``soft_delete()`` stamps ``deleted_at``; ``restore()``
clears it again. The cycle may repeat any number of times. ``deleted_at`` is
read-only: the only ways to change it are the two transitions above, or
rehydrating a stored record through ``UserEntity.from_record``.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, PrivateAttr, field_validator

from ..utils.id_generator import new_user_id
from ..utils.time import ensure_utc, utc_now


class UserEntity(BaseModel):
    id: str = Field(default_factory=new_user_id, frozen=True)
    name: str
    email: str
    password: str
    created_at: datetime = Field(default_factory=utc_now, frozen=True)
    updated_at: Optional[datetime] = None

    _deleted_at: Optional[datetime] = PrivateAttr(default=None)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value) if value is not None else None

    def model_post_init(self, __context: Any) -> None:
        if self.updated_at is None:
            self.updated_at = self.created_at

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "UserEntity":
        """
        Rebuild an entity from its stored shape (see ``to_record``).

        Raises:
            ValueError: If deleted_at precedes created_at
        """
        data = dict(record)
        deleted_at = data.pop("deleted_at", None)
        entity = cls(**data)
        if deleted_at is not None:
            deleted_at = ensure_utc(deleted_at)
            if deleted_at < entity.created_at:
                raise ValueError(
                    f"deleted_at ({deleted_at}) precedes created_at ({entity.created_at}) for user {entity.id}"
                )
            entity._deleted_at = deleted_at
        return entity

    @property
    def deleted_at(self) -> Optional[datetime]:
        return self._deleted_at

    def is_deleted(self) -> bool:
        return self._deleted_at is not None

    def _touch(self) -> datetime:
        # never stamp a mutation earlier than creation
        now = max(utc_now(), self.created_at)
        self.updated_at = now
        return now

    def update(self, name: str) -> None:
        self.name = name
        self._touch()

    def update_password(self, password: str) -> None:
        self.password = password
        self._touch()

    def soft_delete(self) -> None:
        """Mark the user deleted. No-op when already deleted."""
        if self.is_deleted():
            return
        self._deleted_at = self._touch()

    def restore(self) -> None:
        """Clear the deletion mark. No-op when the user is active."""
        if not self.is_deleted():
            return
        self._deleted_at = None
        self._touch()

    def to_record(self) -> Dict[str, Any]:
        """Flat dict persisted by storage backends, including deleted_at."""
        record = self.model_dump()
        record["deleted_at"] = self._deleted_at
        return record
