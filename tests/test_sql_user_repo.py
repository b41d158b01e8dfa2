"""SQL-backend specific behavior of UserSqlRepository."""

import pytest
from sqlalchemy.exc import OperationalError

from helpers import make_user
from userbase.database.schema import UserRow
from userbase.database.user_repo import UserSqlRepository
from userbase.shared.errors import NotFoundError
from userbase.shared.search import SearchParams


@pytest.fixture
def repo(session):
    return UserSqlRepository(session)


def test_insert_stores_normalized_name(repo, session):
    user = make_user(name="Érick Nilson")
    repo.insert(user)

    row = session.query(UserRow).filter(UserRow.id == user.id).one()

    assert row.name == "Érick Nilson"
    assert row.name_normalized == "erick nilson"
    assert row.deleted_at is None


def test_update_refreshes_normalized_name(repo, session):
    user = make_user(name="José")
    repo.insert(user)

    entity = repo.find_by_id(user.id)
    entity.update("André")
    repo.update(entity)

    row = session.query(UserRow).filter(UserRow.id == user.id).one()
    assert row.name_normalized == "andre"


def test_returned_entities_are_detached_copies(repo):
    user = make_user(name="Original")
    repo.insert(user)

    entity = repo.find_by_id(user.id)
    entity.update("Changed Without Commit")

    assert repo.find_by_id(user.id).name == "Original"


def test_soft_delete_persists_deleted_at(repo, session):
    user = make_user()
    repo.insert(user)

    repo.soft_delete(user.id)

    row = session.query(UserRow).filter(UserRow.id == user.id).one()
    assert row.deleted_at is not None
    assert row.updated_at is not None


def test_lookup_storage_errors_surface_as_not_found(repo, monkeypatch):
    def broken_query(*_args, **_kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(repo.session, "query", broken_query)

    with pytest.raises(NotFoundError, match="Entity not found using id abc"):
        repo.find_by_id("abc")
    with pytest.raises(NotFoundError):
        repo.find_by_email("a@example.com")


def test_failed_commit_rolls_back_and_reraises(repo, monkeypatch):
    user = make_user()
    rolled_back = {"value": False}

    def failing_commit():
        raise OperationalError("INSERT", {}, Exception("disk full"))

    original_rollback = repo.session.rollback

    def tracking_rollback():
        rolled_back["value"] = True
        original_rollback()

    monkeypatch.setattr(repo.session, "commit", failing_commit)
    monkeypatch.setattr(repo.session, "rollback", tracking_rollback)

    with pytest.raises(OperationalError):
        repo.insert(user)
    assert rolled_back["value"] is True


def test_search_filter_matches_backslash_literally(repo):
    repo.insert(make_user(name="C:\\Users\\ana"))
    repo.insert(make_user(name="Plain Name"))

    result = repo.search(SearchParams(filter="\\users"))

    assert [u.name for u in result.items] == ["C:\\Users\\ana"]
