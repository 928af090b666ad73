"""
Argument composition for the delegated count and list operations.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .exceptions import PaginationError
from .page_math import compute_skip
from .projection import ITEMS_KEY, ProjectionTree, ProjectionPlan


@dataclass(frozen=True)
class PaginationArgs:
    """Normalised caller arguments for one pagination call."""

    page: int
    per_page: int
    filter: Any = field(default_factory=dict)
    sort: Any = None
    first: Optional[int] = None
    raw_query: Any = None


def _positive_int(value: Any, name: str, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise PaginationError(f"`{name}` should be an integer, got {value!r}")
    if value < minimum:
        raise PaginationError(
            f"`{name}` should be greater than or equal to {minimum}, got {value}",
            page=value if name == "page" else None,
            per_page=value if name != "page" else None,
        )
    return value


def parse_pagination_args(
    args: Optional[Mapping[str, Any]],
    default_per_page: int,
    settings: Any = None,
) -> PaginationArgs:
    """
    Apply defaults to caller arguments and reject invalid values.

    When ``first`` is supplied it becomes the page size and the page is
    normalised to 1, so the list operation is asked for the first records
    with no skip.
    """
    args = args or {}

    page = args.get("page")
    page = 1 if page is None else _positive_int(page, "page", 1)

    per_page = args.get("per_page")
    per_page = default_per_page if per_page is None else _positive_int(per_page, "per_page", 1)

    first = args.get("first")
    if first is not None:
        first = _positive_int(first, "first", 1)
        per_page = first
        page = 1

    if settings is not None:
        per_page = settings.clamp_per_page(per_page)

    filter_value = args.get("filter")
    return PaginationArgs(
        page=page,
        per_page=per_page,
        filter={} if filter_value is None else filter_value,
        sort=args.get("sort"),
        first=first,
        raw_query=args.get("raw_query"),
    )


def should_over_fetch(plan: ProjectionPlan, enabled: bool = True) -> bool:
    """
    Whether the list operation fetches one record past the page.

    The extra record only serves ``has_next_page`` when no count is fetched;
    a fetched count is always preferred.
    """
    return enabled and plan.need_items and not plan.need_count


def compose_count_args(args: PaginationArgs) -> Dict[str, Any]:
    """Arguments for the count operation. ``sort`` never affects a count."""
    return {"filter": args.filter, "raw_query": args.raw_query}


def compose_list_args(args: PaginationArgs, over_fetch: bool = False) -> Dict[str, Any]:
    """Arguments for the list operation."""
    return {
        "filter": args.filter,
        "sort": args.sort,
        "limit": args.per_page + 1 if over_fetch else args.per_page,
        "skip": compute_skip(args.page, args.per_page),
    }


def compose_list_projection(projection: ProjectionTree) -> Dict[str, Any]:
    """
    Projection forwarded to the list operation.

    Fields nested under ``items`` are lifted to the top level and merged with
    any pass-through top-level keys (custom projections such as score fields).
    """
    composed: Dict[str, Any] = {}
    items = projection.find(ITEMS_KEY)
    if isinstance(items, ProjectionTree):
        composed.update(items.to_dict())
    for key, child in projection.passthrough_items():
        composed[key] = child.to_value()
    return composed
