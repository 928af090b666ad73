"""
Projection trees and projection analysis.

A projection describes which output fields a caller asked for. Leaves hold
the requested value verbatim (usually ``True``; custom projections such as
``{"$meta": "textScore"}`` are kept as-is so they can be forwarded), subtrees
map field names to child nodes.

Reserved top-level keys are recognised in both GraphQL camelCase and
snake_case form (``pageInfo`` / ``page_info``), so schemas built with or
without auto camel-casing are analysed the same way.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from graphene.utils.str_converters import to_snake_case
from graphql import (
    FieldNode,
    FragmentSpreadNode,
    GraphQLIncludeDirective,
    GraphQLSkipDirective,
    InlineFragmentNode,
    SelectionSetNode,
)
from graphql.execution.values import get_directive_values

logger = logging.getLogger(__name__)

ITEMS_KEY = "items"
COUNT_KEY = "count"
PAGE_INFO_KEY = "page_info"
RESERVED_KEYS = frozenset([ITEMS_KEY, COUNT_KEY, PAGE_INFO_KEY])

# pageInfo leaves that can only be derived from the total count
COUNT_DERIVED_PAGE_INFO = frozenset(["item_count", "page_count"])


@dataclass(frozen=True)
class ProjectionLeaf:
    """A requested (or explicitly excluded) scalar field."""

    value: Any = True

    @property
    def requested(self) -> bool:
        return bool(self.value)

    def to_value(self) -> Any:
        return self.value


@dataclass(frozen=True)
class ProjectionTree:
    """A field with a nested selection."""

    children: Dict[str, "ProjectionNode"] = field(default_factory=dict)

    @property
    def requested(self) -> bool:
        return True

    @classmethod
    def from_dict(cls, mapping: Optional[Mapping[str, Any]]) -> "ProjectionTree":
        return cls(
            {name: build_projection_node(value) for name, value in (mapping or {}).items()}
        )

    def get(self, name: str) -> Optional["ProjectionNode"]:
        return self.children.get(name)

    def find(self, name: str) -> Optional["ProjectionNode"]:
        """Look up a child by its snake_case name, accepting camelCase keys."""
        node = self.children.get(name)
        if node is not None:
            return node
        for key, child in self.children.items():
            if to_snake_case(key) == name:
                return child
        return None

    def requests(self, name: str) -> bool:
        node = self.find(name)
        return node is not None and node.requested

    def passthrough_items(self) -> Iterator[tuple]:
        """Top-level entries that are not ``items``, ``count`` or ``pageInfo``."""
        for key, child in self.children.items():
            if to_snake_case(key) not in RESERVED_KEYS:
                yield key, child

    def to_dict(self) -> Dict[str, Any]:
        return {name: child.to_value() for name, child in self.children.items()}

    def to_value(self) -> Dict[str, Any]:
        return self.to_dict()

    def __contains__(self, name: str) -> bool:
        return name in self.children

    def __len__(self) -> int:
        return len(self.children)


ProjectionNode = Union[ProjectionLeaf, ProjectionTree]


def build_projection_node(value: Any) -> ProjectionNode:
    if isinstance(value, (ProjectionLeaf, ProjectionTree)):
        return value
    if isinstance(value, Mapping):
        return ProjectionTree.from_dict(value)
    return ProjectionLeaf(value)


def coerce_projection(
    projection: Union[None, Mapping[str, Any], ProjectionTree],
) -> ProjectionTree:
    """Accept a ``ProjectionTree`` or a plain nested mapping."""
    if isinstance(projection, ProjectionTree):
        return projection
    return ProjectionTree.from_dict(projection)


@dataclass(frozen=True)
class ProjectionPlan:
    """Which delegated operations a projection requires."""

    need_count: bool
    need_items: bool


def analyze_projection(
    projection: Union[None, Mapping[str, Any], ProjectionTree],
) -> ProjectionPlan:
    """
    Decide which of the count and list operations must run.

    * count is needed for ``count`` or ``pageInfo { itemCount | pageCount }``;
      a bare ``pageInfo: True`` leaf means every pageInfo field.
    * items are needed for ``items`` or any other top-level key, since such
      a field can only be populated from a listed record.
    * ``currentPage``, ``perPage``, ``hasPreviousPage`` and ``hasNextPage``
      need neither.
    """
    tree = coerce_projection(projection)

    need_count = tree.requests(COUNT_KEY)
    page_info = tree.find(PAGE_INFO_KEY)
    if isinstance(page_info, ProjectionTree):
        need_count = need_count or any(
            page_info.requests(name) for name in COUNT_DERIVED_PAGE_INFO
        )
    elif page_info is not None and page_info.requested:
        need_count = True

    need_items = tree.requests(ITEMS_KEY) or any(
        child.requested for _, child in tree.passthrough_items()
    )
    return ProjectionPlan(need_count=need_count, need_items=need_items)


# =============================================================================
# GraphQL selection sets
# =============================================================================


def _should_include(node: Any, variable_values: Dict[str, Any]) -> bool:
    skip = get_directive_values(GraphQLSkipDirective, node, variable_values)
    if skip and skip["if"] is True:
        return False
    include = get_directive_values(GraphQLIncludeDirective, node, variable_values)
    if include and include["if"] is False:
        return False
    return True


def _collect_selections(
    selection_set: Optional[SelectionSetNode], info: Any, into: Dict[str, Any]
) -> Dict[str, Any]:
    if selection_set is None:
        return into
    variable_values = info.variable_values or {}
    for selection in selection_set.selections:
        if not _should_include(selection, variable_values):
            continue
        if isinstance(selection, FieldNode):
            name = selection.name.value
            if name.startswith("__"):
                continue
            if selection.selection_set is None:
                into.setdefault(name, True)
                continue
            existing = into.get(name)
            nested = existing if isinstance(existing, dict) else {}
            into[name] = _collect_selections(selection.selection_set, info, nested)
        elif isinstance(selection, FragmentSpreadNode):
            fragment = info.fragments.get(selection.name.value)
            if fragment is None:
                logger.debug("Unknown fragment %s in projection", selection.name.value)
                continue
            _collect_selections(fragment.selection_set, info, into)
        elif isinstance(selection, InlineFragmentNode):
            _collect_selections(selection.selection_set, info, into)
    return into


def projection_from_info(info: Any) -> ProjectionTree:
    """Build the projection of the field being resolved from its selection set."""
    collected: Dict[str, Any] = {}
    for field_node in info.field_nodes:
        _collect_selections(field_node.selection_set, info, collected)
    return ProjectionTree.from_dict(collected)
