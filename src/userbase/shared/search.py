"""Query contract shared by every searchable repository.

``SearchParams`` captures what the caller asked for; ``SearchResult`` carries
one page of matches plus the pagination and sort that were actually applied.
Invalid paging or sorting input never raises: it falls back to the defaults.
"""

import math
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, TypeVar

from pydantic import BaseModel, computed_field, field_validator, model_validator

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 15

ItemT = TypeVar("ItemT")


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


def _positive_int(value: Any, default: int) -> int:
    """Coerce value to an int >= 1, or return default."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, float):
        if not value.is_integer():
            return default
        value = int(value)
    elif isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return default
    if not isinstance(value, int) or value < 1:
        return default
    return value


def _blank_to_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def page_window(page: int, per_page: int) -> Tuple[int, int]:
    """
    Translate 1-based paging into (skip, take).

    Args:
        page: Requested page; values <= 0 read as the first page
        per_page: Page size; values <= 0 fall back to DEFAULT_PER_PAGE

    Returns:
        Tuple of (skip, take)
    """
    take = per_page if per_page and per_page > 0 else DEFAULT_PER_PAGE
    skip = (page - 1) * take if page and page > 0 else 0
    return skip, take


class SearchParams(BaseModel):
    page: int = DEFAULT_PAGE
    per_page: int = DEFAULT_PER_PAGE
    sort: Optional[str] = None
    sort_dir: Optional[SortDirection] = None
    filter: Optional[str] = None

    @field_validator("page", mode="before")
    @classmethod
    def _coerce_page(cls, value: Any) -> int:
        return _positive_int(value, DEFAULT_PAGE)

    @field_validator("per_page", mode="before")
    @classmethod
    def _coerce_per_page(cls, value: Any) -> int:
        return _positive_int(value, DEFAULT_PER_PAGE)

    @field_validator("sort", "filter", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        return _blank_to_none(value)

    @field_validator("sort_dir", mode="before")
    @classmethod
    def _coerce_sort_dir(cls, value: Any) -> Optional[SortDirection]:
        if value is None:
            return None
        if isinstance(value, SortDirection):
            return value
        try:
            return SortDirection(str(value).strip().lower())
        except ValueError:
            return None

    @model_validator(mode="after")
    def _sort_dir_follows_sort(self) -> "SearchParams":
        # a direction only means something alongside a sort field
        if self.sort is None:
            self.sort_dir = None
        elif self.sort_dir is None:
            self.sort_dir = SortDirection.DESC
        return self

    @property
    def skip(self) -> int:
        return page_window(self.page, self.per_page)[0]

    @property
    def take(self) -> int:
        return page_window(self.page, self.per_page)[1]


class SearchResult(BaseModel, Generic[ItemT]):
    items: List[ItemT]
    total: int
    current_page: int
    per_page: int
    sort: Optional[str] = None
    sort_dir: Optional[SortDirection] = None
    filter: Optional[str] = None

    @computed_field
    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    def to_dict(self, item_mapper: Optional[Callable[[ItemT], Any]] = None) -> Dict[str, Any]:
        """Flatten for presentation, optionally mapping each item."""
        items = [item_mapper(item) for item in self.items] if item_mapper else list(self.items)
        return {
            "items": items,
            "total": self.total,
            "current_page": self.current_page,
            "last_page": self.last_page,
            "per_page": self.per_page,
            "sort": self.sort,
            "sort_dir": self.sort_dir.value if self.sort_dir else None,
            "filter": self.filter,
        }
