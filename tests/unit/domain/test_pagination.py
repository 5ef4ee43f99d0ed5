"""Unit tests for the shared page math."""

import pytest

from songlib.domain.entities import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from songlib.domain.exceptions import ErrorKind, PageNotFoundException
from songlib.domain.pagination import (
    PageWindow,
    count_pages,
    normalize_page_params,
    paginate,
)


class TestNormalizePageParams:
    """Tests for coercing client page parameters."""

    def test_positive_values_are_kept(self) -> None:
        assert normalize_page_params(3, 25) == (3, 25)

    @pytest.mark.parametrize("page", [0, -1, -100])
    def test_non_positive_page_falls_back_to_default(self, page: int) -> None:
        assert normalize_page_params(page, 5) == (DEFAULT_PAGE, 5)

    @pytest.mark.parametrize("page_size", [0, -3])
    def test_non_positive_page_size_falls_back_to_default(self, page_size: int) -> None:
        assert normalize_page_params(2, page_size) == (2, DEFAULT_PAGE_SIZE)


class TestCountPages:
    """Tests for ceiling division."""

    @pytest.mark.parametrize(
        ("total", "size", "expected"),
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 10, 3), (3, 1, 3)],
    )
    def test_count_pages(self, total: int, size: int, expected: int) -> None:
        assert count_pages(total, size) == expected


class TestPaginate:
    """Tests for resolving a page request against a total."""

    def test_first_page(self) -> None:
        window = paginate(25, 1, 10)
        assert window == PageWindow(page=1, page_size=10, total_pages=3, offset=0)
        assert window.limit == 10
        assert window.end == 10

    def test_last_partial_page(self) -> None:
        window = paginate(25, 3, 10)
        assert window.offset == 20
        assert window.total_pages == 3

    def test_defaults_applied_before_bounds_check(self) -> None:
        window = paginate(5, 0, 0)
        assert window.page == DEFAULT_PAGE
        assert window.page_size == DEFAULT_PAGE_SIZE
        assert window.total_pages == 1

    def test_page_beyond_last_raises(self) -> None:
        with pytest.raises(PageNotFoundException) as exc_info:
            paginate(25, 4, 10)

        assert exc_info.value.page == 4
        assert exc_info.value.total_pages == 3
        assert exc_info.value.kind is ErrorKind.NOT_FOUND
        assert exc_info.value.message == "page 4 does not exist, total pages: 3"

    def test_empty_result_has_no_first_page(self) -> None:
        """Zero items means zero pages, so even page 1 is out of range."""
        with pytest.raises(PageNotFoundException):
            paginate(0, 1, 10)

    def test_pages_partition_the_items(self) -> None:
        """Walking every page visits each index exactly once."""
        total, size = 23, 5
        seen: list[int] = []
        first = paginate(total, 1, size)
        for page in range(1, first.total_pages + 1):
            window = paginate(total, page, size)
            seen.extend(range(window.offset, min(window.end, total)))

        assert seen == list(range(total))
