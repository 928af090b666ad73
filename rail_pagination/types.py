"""
Graphene types declared by pagination operations.
"""

import logging
from typing import Any, Dict

import graphene

from .operations import TypeDescriptor

logger = logging.getLogger(__name__)

_pagination_types: Dict[str, Any] = {}


class PaginationInfo(graphene.ObjectType):
    """Pagination metadata for paginated queries."""

    current_page = graphene.Int(required=True, description="Current page number")
    per_page = graphene.Int(required=True, description="Number of records per page")
    item_count = graphene.Int(description="Total number of records")
    page_count = graphene.Int(description="Total number of pages")
    has_previous_page = graphene.Boolean(description="Whether there is a previous page")
    has_next_page = graphene.Boolean(description="Whether there is a next page")


def build_pagination_type(
    type_descriptor: TypeDescriptor, suffix: str = "Pagination"
) -> Any:
    """
    Create the ``<Name><suffix>`` object type wrapping a record type.

    Types are reused per name so that several operations paginating the same
    record type can live in one schema.
    """
    type_name = f"{type_descriptor.name}{suffix}"
    record_type = type_descriptor.graphene_type

    cached = _pagination_types.get(type_name)
    if cached is not None and cached._record_type is record_type:
        return cached

    meta = type("Meta", (), {"name": type_name})
    pagination_type = type(
        type_name,
        (graphene.ObjectType,),
        {
            "Meta": meta,
            "_record_type": record_type,
            "items": graphene.List(
                graphene.NonNull(record_type),
                description=f"Array of {type_descriptor.name} records for the page",
            ),
            "count": graphene.Int(description="Total number of matching records"),
            "page_info": graphene.Field(
                graphene.NonNull(PaginationInfo), description="Pagination metadata"
            ),
        },
    )
    if cached is not None:
        logger.debug("Rebuilding %s for a different record type", type_name)
    _pagination_types[type_name] = pagination_type
    return pagination_type
