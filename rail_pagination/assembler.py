"""
Result envelope assembly.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from .page_math import PageInfo, compute_page_info


@dataclass(frozen=True)
class PaginationEnvelope:
    """
    Result of a pagination call.

    ``items`` is ``None`` when items were not requested and an empty list
    when they were requested but the page holds no records. ``count`` is
    ``None`` when the count operation did not run.
    """

    items: Optional[List[Any]]
    count: Optional[int]
    page_info: PageInfo


def assemble_envelope(
    count_result: Optional[int],
    list_result: Optional[Iterable[Any]],
    page: int,
    per_page: int,
    over_fetched: bool = True,
) -> PaginationEnvelope:
    """
    Combine delegated results into an envelope, dropping any over-fetched record.

    The list length only signals a next page when the list operation was asked
    for one record past the page (``over_fetched``).
    """
    items = None
    fetched_count = None
    if list_result is not None:
        records = list(list_result)
        if over_fetched:
            fetched_count = len(records)
        items = records[:per_page]

    return PaginationEnvelope(
        items=items,
        count=count_result,
        page_info=compute_page_info(
            page,
            per_page,
            item_count=count_result,
            fetched_count=fetched_count,
        ),
    )
