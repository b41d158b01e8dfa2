"""SQLAlchemy-backed user repository.

Search is pushed down to the database: the accent-insensitive filter runs as
a literal substring test (``instr``) on the precomputed ``name_normalized``
column, and ordering/paging run as ORDER BY/OFFSET/LIMIT with ``seq`` as the
tie-break. Pages come back in exactly the order the in-memory backend
produces.
"""

from typing import List

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session

from ..shared.errors import ConflictError, NotFoundError
from ..shared.search import SearchParams, SearchResult, SortDirection, page_window
from ..shared.searchable import resolve_sort
from ..users.repository import UserRepository
from ..users.user_models import UserEntity
from ..utils.logging import get_logger
from ..utils.text import normalize
from .schema import UserRow
from .user_mapper import apply_to_row, to_entity, to_row

logger = get_logger(__name__)


class UserSqlRepository(UserRepository):
    def __init__(self, session: Session):
        self.session = session

    # ── HELPERS ───────────────────────────────────────────

    def _query(self, include_deleted: bool = False) -> Query:
        query = self.session.query(UserRow)
        if not include_deleted:
            query = query.filter(UserRow.deleted_at.is_(None))
        return query

    def _get_row(self, user_id: str, include_deleted: bool = False) -> UserRow:
        try:
            row = self._query(include_deleted).filter(UserRow.id == user_id).first()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.warning(f"Lookup of user {user_id} failed: {e}")
            raise NotFoundError(f"Entity not found using id {user_id}") from e
        if row is None:
            raise NotFoundError(f"Entity not found using id {user_id}")
        return row

    def _commit(self, action: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise

    # ── CREATE ────────────────────────────────────────────

    def insert(self, entity: UserEntity) -> None:
        exists = self._query(include_deleted=True).filter(UserRow.id == entity.id).first()
        if exists is not None:
            raise ConflictError(f"Entity already exists using id {entity.id}")
        self.email_exists(entity.email)
        self.session.add(to_row(entity))
        self._commit(f"insert user {entity.id}")
        logger.debug(f"Inserted user {entity.id}")

    # ── READ ──────────────────────────────────────────────

    def find_by_id(self, user_id: str) -> UserEntity:
        return to_entity(self._get_row(user_id))

    def find_by_id_including_deleted(self, user_id: str) -> UserEntity:
        return to_entity(self._get_row(user_id, include_deleted=True))

    def find_by_email(self, email: str) -> UserEntity:
        try:
            row = self._query().filter(UserRow.email == email).first()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.warning(f"Lookup of email {email} failed: {e}")
            raise NotFoundError(f"Entity not found using email {email}") from e
        if row is None:
            raise NotFoundError(f"Entity not found using email {email}")
        return to_entity(row)

    def email_exists(self, email: str) -> None:
        row = self._query().filter(UserRow.email == email).first()
        if row is not None:
            raise ConflictError("Email address already used")

    def find_all(self) -> List[UserEntity]:
        return [to_entity(row) for row in self._query().order_by(UserRow.seq.asc()).all()]

    def find_all_including_deleted(self) -> List[UserEntity]:
        rows = self._query(include_deleted=True).order_by(UserRow.seq.asc()).all()
        return [to_entity(row) for row in rows]

    def search(self, params: SearchParams) -> SearchResult[UserEntity]:
        sort_field, sort_dir = resolve_sort(params, self.sortable_fields)

        query = self._query()
        if params.filter:
            needle = normalize(params.filter)
            query = query.filter(func.instr(UserRow.name_normalized, needle) > 0)

        # count and page are separate SELECTs; a writer committing between them
        # can make total disagree with items. Accepted for this single-process store.
        total = query.count()

        column = getattr(UserRow, sort_field)
        order = column.asc() if sort_dir == SortDirection.ASC else column.desc()
        skip, take = page_window(params.page, params.per_page)
        rows = query.order_by(order, UserRow.seq.asc()).offset(skip).limit(take).all()

        return SearchResult(
            items=[to_entity(row) for row in rows],
            total=total,
            current_page=params.page,
            per_page=params.per_page,
            sort=sort_field,
            sort_dir=sort_dir,
            filter=params.filter,
        )

    # ── UPDATE ────────────────────────────────────────────

    def update(self, entity: UserEntity) -> None:
        row = self._get_row(entity.id)
        apply_to_row(row, entity)
        self._commit(f"update user {entity.id}")
        logger.debug(f"Updated user {entity.id}")

    def soft_delete(self, user_id: str) -> None:
        row = self._get_row(user_id)
        entity = to_entity(row)
        entity.soft_delete()
        apply_to_row(row, entity)
        self._commit(f"soft delete user {user_id}")
        logger.info(f"Soft deleted user {user_id}")

    def restore(self, user_id: str) -> None:
        row = self._get_row(user_id, include_deleted=True)
        entity = to_entity(row)
        entity.restore()
        apply_to_row(row, entity)
        self._commit(f"restore user {user_id}")
        logger.info(f"Restored user {user_id}")

    # ── DELETE ────────────────────────────────────────────

    def delete(self, user_id: str) -> None:
        row = self._get_row(user_id, include_deleted=True)
        self.session.delete(row)
        self._commit(f"delete user {user_id}")
        logger.info(f"Hard deleted user {user_id}")
