"""In-memory backend specifics: aliasing and side-effect-free search."""

from helpers import make_user
from userbase.shared.search import SearchParams
from userbase.users.in_memory_repo import UserInMemoryRepository


def test_returned_entity_is_the_stored_object():
    repo = UserInMemoryRepository()
    user = make_user()
    repo.insert(user)

    assert repo.find_by_id(user.id) is user


def test_soft_delete_transitions_the_stored_entity():
    user = make_user()
    repo = UserInMemoryRepository([user])

    repo.soft_delete(user.id)

    assert user.is_deleted()


def test_search_leaves_items_untouched():
    users = [make_user(name=n) for n in ("Érick", "José", "André")]
    repo = UserInMemoryRepository(users)
    repo.soft_delete(users[1].id)
    items_before = repo.items
    ids_before = [u.id for u in repo.items]

    repo.search(SearchParams(filter="erick", sort="name", sort_dir="asc"))

    assert repo.items is items_before
    assert [u.id for u in repo.items] == ids_before
    assert len(repo.items) == 3


def test_constructor_copies_the_initial_list():
    users = [make_user()]
    repo = UserInMemoryRepository(users)
    repo.insert(make_user())

    assert len(users) == 1
    assert len(repo.items) == 2
