"""
JSON scalar for opaque pagination arguments (``filter``, ``sort``).
"""

import json
from typing import Any, Dict, Optional, Union

from graphene import Scalar
from graphql.error import GraphQLError
from graphql.language import (
    BooleanValueNode,
    FloatValueNode,
    IntValueNode,
    ListValueNode,
    NullValueNode,
    ObjectValueNode,
    StringValueNode,
    ValueNode,
    VariableNode,
)


class JSON(Scalar):
    """
    Arbitrary JSON value.

    Input may be an object literal, a JSON encoded string or a variable;
    output is the value itself so clients receive structured data.
    """

    @staticmethod
    def serialize(value: Any) -> Any:
        try:
            json.dumps(value, default=str)
        except (TypeError, ValueError) as e:
            raise GraphQLError(f"Cannot serialize value as JSON: {e}")
        return value

    @staticmethod
    def parse_literal(node: ValueNode, _variables: Optional[Dict[str, Any]] = None) -> Any:
        if isinstance(node, StringValueNode):
            return JSON.parse_value(node.value)
        if isinstance(node, ObjectValueNode):
            return {
                field.name.value: JSON._parse_nested(field.value, _variables)
                for field in node.fields
            }
        if isinstance(node, ListValueNode):
            return [JSON._parse_nested(value, _variables) for value in node.values]
        if isinstance(node, BooleanValueNode):
            return node.value
        if isinstance(node, IntValueNode):
            return int(node.value)
        if isinstance(node, FloatValueNode):
            return float(node.value)
        if isinstance(node, NullValueNode):
            return None
        if isinstance(node, VariableNode):
            return (_variables or {}).get(node.name.value)

        raise GraphQLError(f"Cannot parse {type(node).__name__} as JSON")

    @staticmethod
    def _parse_nested(node: ValueNode, _variables: Optional[Dict[str, Any]]) -> Any:
        # strings nested inside objects or lists are plain strings, not JSON
        if isinstance(node, StringValueNode):
            return node.value
        return JSON.parse_literal(node, _variables)

    @staticmethod
    def parse_value(value: Union[str, dict, list]) -> Any:
        if isinstance(value, str):
            try:
                return json.loads(value)
            except (json.JSONDecodeError, TypeError) as e:
                raise GraphQLError(f"Invalid JSON format: {e}")

        return value
