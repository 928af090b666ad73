"""
Page arithmetic for pagination resolvers.

Every function here is pure: page metadata is derived from the requested
page, the page size and whichever of the total item count or the
(over-fetched) list length is known.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PageInfo:
    """Pagination metadata. Values that cannot be derived are ``None``."""

    current_page: int
    per_page: int
    item_count: Optional[int] = None
    page_count: Optional[int] = None
    has_previous_page: bool = False
    has_next_page: Optional[bool] = None


def compute_skip(page: int, per_page: int) -> int:
    """Number of records preceding ``page``."""
    return (page - 1) * per_page


def compute_page_count(item_count: int, per_page: int) -> int:
    """Ceiling division of ``item_count`` by ``per_page``; zero when empty."""
    if item_count <= 0:
        return 0
    return (item_count + per_page - 1) // per_page


def compute_page_info(
    page: int,
    per_page: int,
    item_count: Optional[int] = None,
    fetched_count: Optional[int] = None,
) -> PageInfo:
    """
    Build ``PageInfo`` for a page.

    ``item_count`` is authoritative when known. Otherwise ``fetched_count``,
    the length of a list fetched with ``limit = per_page + 1``, tells whether
    a record exists beyond the current page. Pages past the end are not
    re-validated: ``has_previous_page`` only depends on ``page``.
    """
    page_count = None
    has_next_page = None
    if item_count is not None:
        page_count = compute_page_count(item_count, per_page)
        has_next_page = page * per_page < item_count
    elif fetched_count is not None:
        has_next_page = fetched_count > per_page

    return PageInfo(
        current_page=page,
        per_page=per_page,
        item_count=item_count,
        page_count=page_count,
        has_previous_page=page > 1,
        has_next_page=has_next_page,
    )
