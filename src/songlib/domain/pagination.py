"""Page math shared by song listing and lyrics pagination."""

from dataclasses import dataclass

from songlib.domain.entities import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from songlib.domain.exceptions import PageNotFoundException


@dataclass(frozen=True)
class PageWindow:
    """Resolved page position inside a result set."""

    page: int
    page_size: int
    total_pages: int
    offset: int

    @property
    def limit(self) -> int:
        """Maximum number of items on this page."""
        return self.page_size

    @property
    def end(self) -> int:
        """Exclusive end index of this page (not clamped to the item count)."""
        return self.offset + self.page_size


def normalize_page_params(page: int, page_size: int) -> tuple[int, int]:
    """Coerce non-positive page and page size to their defaults."""
    if page_size <= 0:
        page_size = DEFAULT_PAGE_SIZE
    if page <= 0:
        page = DEFAULT_PAGE
    return page, page_size


def count_pages(total_items: int, page_size: int) -> int:
    """Ceiling division of total_items by page_size."""
    return (total_items + page_size - 1) // page_size


# Hey future me - an EMPTY result set has zero pages, so page 1 of nothing raises too. That's
# deliberate: "page > total_pages" fails for every total, including 0. Don't special-case it
# here without updating the API tests that pin this behaviour.
def paginate(total_items: int, page: int, page_size: int) -> PageWindow:
    """Resolve a page request against a total item count.

    Args:
        total_items: Number of items matching the query
        page: Requested 1-based page (<= 0 means first page)
        page_size: Items per page (<= 0 means default size)

    Returns:
        PageWindow with total pages and the offset of the requested page

    Raises:
        PageNotFoundException: If page lies beyond the last page
    """
    page, page_size = normalize_page_params(page, page_size)
    total_pages = count_pages(total_items, page_size)

    if page > total_pages:
        raise PageNotFoundException(page, total_pages)

    return PageWindow(
        page=page,
        page_size=page_size,
        total_pages=total_pages,
        offset=(page - 1) * page_size,
    )
