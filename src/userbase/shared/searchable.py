"""Filter, sort and paginate orchestration shared by all backends.

``search_entities`` is a pure function: it reads a snapshot of the candidate
records and returns a new ``SearchResult`` without touching the source
collection. Backends that can push work down to their store (see
``userbase.database.user_repo``) must produce the same pages, in the same
order, as this reference path.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterable, List, Optional, Sequence, Tuple

from .search import ItemT, SearchParams, SearchResult, SortDirection, page_window

DEFAULT_SORT: Tuple[str, SortDirection] = ("created_at", SortDirection.DESC)

Matcher = Callable[[Any, str], bool]
FilterStrategy = Callable[[List[Any], Optional[str], Matcher], List[Any]]
SortStrategy = Callable[[List[Any], str, SortDirection], List[Any]]
Paginator = Callable[[List[Any], int, int], List[Any]]


def resolve_sort(
    params: SearchParams,
    sortable_fields: Iterable[str],
    default_sort: Tuple[str, SortDirection] = DEFAULT_SORT,
) -> Tuple[str, SortDirection]:
    """Pick the sort actually applied; unknown or absent fields use default_sort."""
    if params.sort and params.sort in tuple(sortable_fields):
        return params.sort, params.sort_dir or SortDirection.DESC
    return default_sort


def apply_filter(items: List[Any], filter_text: Optional[str], matches: Matcher) -> List[Any]:
    if not filter_text:
        return list(items)
    return [item for item in items if matches(item, filter_text)]


def _sort_key(field: str) -> Callable[[Any], Tuple[bool, Any]]:
    def key(item: Any) -> Tuple[bool, Any]:
        value = getattr(item, field, None)
        # None sorts before any value
        return (value is not None, value)

    return key


def apply_sort(items: List[Any], field: str, direction: SortDirection) -> List[Any]:
    """Stable sort: records with equal keys keep their relative order."""
    return sorted(items, key=_sort_key(field), reverse=direction == SortDirection.DESC)


def paginate(items: List[Any], page: int, per_page: int) -> List[Any]:
    skip, take = page_window(page, per_page)
    return items[skip:skip + take]


def search_entities(
    items: Sequence[ItemT],
    params: SearchParams,
    *,
    sortable_fields: Iterable[str],
    matches: Matcher,
    default_sort: Tuple[str, SortDirection] = DEFAULT_SORT,
    filter_strategy: FilterStrategy = apply_filter,
    sort_strategy: SortStrategy = apply_sort,
    paginator: Paginator = paginate,
) -> SearchResult[ItemT]:
    """
    Run the search algorithm over an in-memory snapshot.

    Steps: drop soft-deleted records, keep records matching ``params.filter``,
    sort, then slice out the requested page.

    Args:
        items: Candidate records (not modified)
        params: Query parameters
        sortable_fields: Fields a caller may sort by
        matches: Predicate ``(item, filter_text) -> bool``
        default_sort: Sort used when params.sort is absent or not sortable
        filter_strategy: Replaces the default filter step
        sort_strategy: Replaces the default sort step
        paginator: Replaces the default pagination step

    Returns:
        SearchResult with ``total`` counted before pagination
    """
    active = [item for item in items if not item.is_deleted()]
    filtered = filter_strategy(active, params.filter, matches)
    sort_field, sort_dir = resolve_sort(params, sortable_fields, default_sort)
    ordered = sort_strategy(filtered, sort_field, sort_dir)
    page_items = paginator(ordered, params.page, params.per_page)

    return SearchResult(
        items=page_items,
        total=len(filtered),
        current_page=params.page,
        per_page=params.per_page,
        sort=sort_field,
        sort_dir=sort_dir,
        filter=params.filter,
    )


class SearchableRepository(ABC, Generic[ItemT]):
    """A store that answers ``search`` with the shared filter/sort/page contract."""

    sortable_fields: Tuple[str, ...] = ()

    @abstractmethod
    def search(self, params: SearchParams) -> SearchResult[ItemT]:
        """Return one page of active records matching params."""
        pass
