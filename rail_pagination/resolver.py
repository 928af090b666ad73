"""
Pagination resolver built from a record type's count and find operations.

``prepare_pagination_resolver`` validates the two delegated operations once,
at setup time, and returns a stateless ``PaginationOperation`` that can be
shared by concurrent calls. Each call only runs the delegated operations its
projection needs, concurrently when both are needed.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import graphene
from graphene.types.unmountedtype import UnmountedType

from .arguments import (
    compose_count_args,
    compose_list_args,
    compose_list_projection,
    parse_pagination_args,
    should_over_fetch,
)
from .assembler import PaginationEnvelope, assemble_envelope
from .exceptions import InvalidArgument, MissingOption, UnknownOperation
from .operations import Operation, ResolveParams, TypeDescriptor
from .projection import analyze_projection, coerce_projection, projection_from_info
from .scalars import JSON
from .settings import PaginationSettings
from .types import build_pagination_type

logger = logging.getLogger(__name__)

OPERATION_NAME = "pagination"


def _argument_from(declared: Any, fallback: Any, description: str) -> graphene.Argument:
    """Reuse the find operation's declared argument type when it has one."""
    if declared is None:
        return graphene.Argument(fallback, description=description)
    if isinstance(declared, graphene.Argument):
        return graphene.Argument(declared.type, description=description)
    if isinstance(declared, UnmountedType):
        return declared.Argument()
    return graphene.Argument(declared, description=description)


def build_pagination_args(find_operation: Operation, default_per_page: int) -> Dict[str, Any]:
    return {
        "page": graphene.Argument(graphene.Int, description="Page number for displaying"),
        "per_page": graphene.Argument(
            graphene.Int,
            description=f"Number of records per page (default {default_per_page})",
        ),
        "filter": _argument_from(
            find_operation.args.get("filter"), JSON, "Filter for matching records"
        ),
        "sort": _argument_from(
            find_operation.args.get("sort"), JSON, "Sort order of records"
        ),
        "first": graphene.Argument(
            graphene.Int, description="Fetch the first N records, overriding page and perPage"
        ),
    }


class PaginationOperation(Operation):
    """Query operation returning a page of records, their count and page metadata."""

    def __init__(
        self,
        type_descriptor: TypeDescriptor,
        count_operation: Operation,
        find_operation: Operation,
        per_page: int,
        settings: PaginationSettings,
    ):
        self.type_descriptor = type_descriptor
        self.count_operation = count_operation
        self.find_operation = find_operation
        self.per_page = per_page
        self.settings = settings
        super().__init__(
            name=OPERATION_NAME,
            resolve_fn=self._resolve_pagination,
            type=build_pagination_type(type_descriptor, settings.type_name_suffix),
            args=build_pagination_args(find_operation, per_page),
            kind="query",
            description=f"Paginated list of {type_descriptor.name} records",
        )

    async def _resolve_pagination(self, params: ResolveParams) -> PaginationEnvelope:
        projection = coerce_projection(params.projection)
        plan = analyze_projection(projection)
        args = parse_pagination_args(params.args, self.per_page, self.settings)
        over_fetch = should_over_fetch(plan, self.settings.over_fetch)

        pending = {}
        if plan.need_count:
            pending["count"] = self.count_operation.resolve(
                ResolveParams(
                    args=compose_count_args(args),
                    projection=projection.to_dict(),
                    source=params.source,
                    context=params.context,
                    info=params.info,
                )
            )
        if plan.need_items:
            list_args = compose_list_args(args, over_fetch=over_fetch)
            logger.debug(
                "Paginating %s with limit=%s skip=%s",
                self.type_descriptor.name,
                list_args["limit"],
                list_args["skip"],
            )
            pending["items"] = self.find_operation.resolve(
                ResolveParams(
                    args=list_args,
                    projection=compose_list_projection(projection),
                    source=params.source,
                    context=params.context,
                    info=params.info,
                )
            )

        results = dict(zip(pending, await asyncio.gather(*pending.values())))
        return assemble_envelope(
            results.get("count"),
            results.get("items"),
            args.page,
            args.per_page,
            over_fetched=over_fetch,
        )

    def as_field(self, description: Optional[str] = None) -> graphene.Field:
        """Expose the operation as a graphene field with an async resolver."""
        operation = self

        async def resolve_pagination(root: Any, info: graphene.ResolveInfo, **kwargs):
            return await operation.resolve(
                ResolveParams(
                    args=kwargs,
                    projection=projection_from_info(info),
                    source=root,
                    context=info.context,
                    info=info,
                )
            )

        return graphene.Field(
            self.type,
            args=self.args,
            resolver=resolve_pagination,
            description=description or self.description,
        )


def _require_operation(
    type_descriptor: TypeDescriptor, option_name: str, operation_name: Optional[str]
) -> Operation:
    type_name = type_descriptor.name
    if not operation_name:
        raise MissingOption(
            f"Type {type_name} should have option `{option_name}`",
            option_name=option_name,
            type_name=type_name,
        )
    if not type_descriptor.has_operation(operation_name):
        raise UnknownOperation(
            f"Type {type_name} does not have operation with name '{operation_name}'",
            operation_name=operation_name,
            type_name=type_name,
        )
    return type_descriptor.get_operation(operation_name)


def prepare_pagination_resolver(
    type_descriptor: TypeDescriptor,
    count_operation_name: Optional[str] = None,
    find_operation_name: Optional[str] = None,
    per_page: Optional[int] = None,
    settings: Optional[PaginationSettings] = None,
) -> PaginationOperation:
    """
    Build the ``pagination`` query operation for ``type_descriptor``.

    Args:
        type_descriptor: Record type owning the count and find operations.
        count_operation_name: Operation returning the number of matching records.
        find_operation_name: Operation returning records for ``filter``, ``sort``,
            ``limit`` and ``skip``.
        per_page: Page size used when callers omit ``per_page``. Falls back to
            ``settings.default_per_page``.
        settings: Pagination settings, read from Django settings when omitted.

    Raises:
        InvalidArgument: ``type_descriptor`` does not expose named operations,
            or ``per_page`` is not a positive integer.
        MissingOption: an operation name option is empty.
        UnknownOperation: a named operation does not exist.
    """
    if not isinstance(type_descriptor, TypeDescriptor):
        raise InvalidArgument(
            "First arg for prepare_pagination_resolver() should be instance of "
            f"TypeDescriptor, got {type(type_descriptor).__name__}"
        )

    count_operation = _require_operation(
        type_descriptor, "count_operation_name", count_operation_name
    )
    find_operation = _require_operation(
        type_descriptor, "find_operation_name", find_operation_name
    )

    settings = settings or PaginationSettings.from_django()
    if per_page is None:
        per_page = settings.default_per_page
    elif isinstance(per_page, bool) or not isinstance(per_page, int) or per_page <= 0:
        raise InvalidArgument(
            f"Option `per_page` should be a positive integer, got {per_page!r}",
            type_name=type_descriptor.name,
        )
    per_page = settings.clamp_per_page(per_page)

    operation = PaginationOperation(
        type_descriptor,
        count_operation,
        find_operation,
        per_page=per_page,
        settings=settings,
    )
    logger.debug(
        "Prepared pagination resolver for %s (count=%s, find=%s, per_page=%s)",
        type_descriptor.name,
        count_operation_name,
        find_operation_name,
        per_page,
    )
    return operation
