"""
Shared fixtures: minimal Django settings and an in-memory ``User`` record type.
"""

from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import django
import graphene
import pytest
from django.conf import settings

if not settings.configured:
    settings.configure(
        INSTALLED_APPS=[],
        RAIL_PAGINATION={"default_per_page": 20, "max_per_page": 100},
    )
    django.setup()

from rail_pagination import (
    JSON,
    Operation,
    PaginationSettings,
    RecordType,
    prepare_pagination_resolver,
)


class User(graphene.ObjectType):
    id = graphene.Int(required=True)
    name = graphene.String()
    age = graphene.Int()
    gender = graphene.String()


def build_users() -> List[Dict[str, Any]]:
    """Fifteen users; odd ids are male, ``age = 10 + id``."""
    return [
        {
            "id": user_id,
            "name": f"user{user_id:02d}",
            "age": 10 + user_id,
            "gender": "m" if user_id % 2 else "f",
        }
        for user_id in range(1, 16)
    ]


class UserStore:
    """In-memory stand-in for a storage backend."""

    def __init__(self, users: List[Dict[str, Any]]):
        self.users = users

    def _matching(self, filter_value: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
        filter_value = filter_value or {}
        return [
            user
            for user in self.users
            if all(user.get(key) == value for key, value in filter_value.items())
        ]

    def count(self, params) -> int:
        return len(self._matching(params.args.get("filter")))

    async def find_many(self, params) -> List[Dict[str, Any]]:
        records = self._matching(params.args.get("filter"))
        sort = params.args.get("sort") or {}
        for key, direction in reversed(list(sort.items())):
            records = sorted(records, key=lambda user: user[key], reverse=direction < 0)
        skip = params.args.get("skip") or 0
        limit = params.args.get("limit")
        records = records[skip:]
        if limit is not None:
            records = records[:limit]
        return [dict(user) for user in records]


@pytest.fixture
def user_store():
    return UserStore(build_users())


@pytest.fixture
def count_spy(user_store):
    return Mock(wraps=user_store.count)


@pytest.fixture
def find_spy(user_store):
    return Mock(wraps=user_store.find_many)


@pytest.fixture
def user_type(count_spy, find_spy):
    return RecordType(
        User,
        operations={
            "count": Operation(
                "count", count_spy, type=graphene.Int, args={"filter": JSON}
            ),
            "findMany": Operation(
                "findMany",
                find_spy,
                type=graphene.List(User),
                args={
                    "filter": JSON,
                    "sort": JSON,
                    "limit": graphene.Int,
                    "skip": graphene.Int,
                },
            ),
        },
    )


@pytest.fixture
def pagination_settings():
    return PaginationSettings()


@pytest.fixture
def pagination(user_type, pagination_settings):
    return prepare_pagination_resolver(
        user_type,
        count_operation_name="count",
        find_operation_name="findMany",
        per_page=5,
        settings=pagination_settings,
    )
