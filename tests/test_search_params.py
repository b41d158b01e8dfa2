"""Tests for the query contract: SearchParams, page_window and SearchResult."""

import pytest

from userbase.shared.search import (
    DEFAULT_PAGE,
    DEFAULT_PER_PAGE,
    SearchParams,
    SearchResult,
    SortDirection,
    page_window,
)


def test_defaults():
    params = SearchParams()
    assert params.page == 1
    assert params.per_page == 15
    assert params.sort is None
    assert params.sort_dir is None
    assert params.filter is None


@pytest.mark.parametrize("value", [0, -1, 1.5, "abc", "", None, True, [1]])
def test_invalid_page_falls_back_to_default(value):
    assert SearchParams(page=value).page == DEFAULT_PAGE


@pytest.mark.parametrize("value", [0, -5, 2.7, "x", None, False])
def test_invalid_per_page_falls_back_to_default(value):
    assert SearchParams(per_page=value).per_page == DEFAULT_PER_PAGE


@pytest.mark.parametrize("value,expected", [(2, 2), ("3", 3), (4.0, 4), (" 5 ", 5)])
def test_integer_like_values_are_accepted(value, expected):
    assert SearchParams(page=value, per_page=value).page == expected
    assert SearchParams(page=value, per_page=value).per_page == expected


def test_sort_dir_is_dropped_without_sort():
    assert SearchParams(sort_dir="asc").sort_dir is None


def test_sort_dir_defaults_to_desc_with_sort():
    assert SearchParams(sort="name").sort_dir == SortDirection.DESC


@pytest.mark.parametrize("value,expected", [("ASC", SortDirection.ASC), ("desc", SortDirection.DESC), ("sideways", SortDirection.DESC)])
def test_sort_dir_is_case_insensitive_and_falls_back(value, expected):
    assert SearchParams(sort="name", sort_dir=value).sort_dir == expected


@pytest.mark.parametrize("value", ["", "   ", None])
def test_blank_filter_and_sort_are_absent(value):
    params = SearchParams(filter=value, sort=value)
    assert params.filter is None
    assert params.sort is None


def test_filter_is_kept_verbatim():
    assert SearchParams(filter=" Érick ").filter == " Érick "


@pytest.mark.parametrize(
    "page,per_page,expected",
    [
        (1, 15, (0, 15)),
        (2, 15, (15, 15)),
        (3, 10, (20, 10)),
        (0, 15, (0, 15)),
        (-4, 15, (0, 15)),
        (2, 0, (15, 15)),
        (2, -3, (15, 15)),
    ],
)
def test_page_window(page, per_page, expected):
    assert page_window(page, per_page) == expected


def test_params_expose_skip_and_take():
    params = SearchParams(page=3, per_page=7)
    assert (params.skip, params.take) == (14, 7)


@pytest.mark.parametrize("total,per_page,expected", [(0, 15, 1), (15, 15, 1), (16, 15, 2), (20, 15, 2), (31, 10, 4)])
def test_last_page(total, per_page, expected):
    result = SearchResult(items=[], total=total, current_page=1, per_page=per_page)
    assert result.last_page == expected


def test_to_dict_maps_items_and_echoes_query():
    result = SearchResult(
        items=[1, 2],
        total=12,
        current_page=2,
        per_page=10,
        sort="name",
        sort_dir=SortDirection.ASC,
        filter="jo",
    )

    assert result.to_dict(lambda item: item * 10) == {
        "items": [10, 20],
        "total": 12,
        "current_page": 2,
        "last_page": 2,
        "per_page": 10,
        "sort": "name",
        "sort_dir": "asc",
        "filter": "jo",
    }
