"""
Pagination resolvers composed from count and find operations.
"""

from .arguments import (
    PaginationArgs,
    compose_count_args,
    compose_list_args,
    compose_list_projection,
    parse_pagination_args,
    should_over_fetch,
)
from .assembler import PaginationEnvelope, assemble_envelope
from .exceptions import (
    InvalidArgument,
    MissingOption,
    PaginationError,
    PaginationResolverError,
    UnknownOperation,
)
from .operations import Operation, RecordType, ResolveParams, TypeDescriptor
from .page_math import PageInfo, compute_page_count, compute_page_info, compute_skip
from .projection import (
    ProjectionLeaf,
    ProjectionPlan,
    ProjectionTree,
    analyze_projection,
    projection_from_info,
)
from .resolver import PaginationOperation, prepare_pagination_resolver
from .scalars import JSON
from .settings import PaginationSettings
from .types import PaginationInfo, build_pagination_type

__all__ = [
    "PaginationArgs",
    "compose_count_args",
    "compose_list_args",
    "compose_list_projection",
    "parse_pagination_args",
    "should_over_fetch",
    "PaginationEnvelope",
    "assemble_envelope",
    "InvalidArgument",
    "MissingOption",
    "PaginationError",
    "PaginationResolverError",
    "UnknownOperation",
    "Operation",
    "RecordType",
    "ResolveParams",
    "TypeDescriptor",
    "PageInfo",
    "compute_page_count",
    "compute_page_info",
    "compute_skip",
    "ProjectionLeaf",
    "ProjectionPlan",
    "ProjectionTree",
    "analyze_projection",
    "projection_from_info",
    "PaginationOperation",
    "prepare_pagination_resolver",
    "JSON",
    "PaginationSettings",
    "PaginationInfo",
    "build_pagination_type",
]
