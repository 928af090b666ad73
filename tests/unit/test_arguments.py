"""
Unit tests for argument composition.
"""

import pytest

from rail_pagination.arguments import (
    PaginationArgs,
    compose_count_args,
    compose_list_args,
    compose_list_projection,
    parse_pagination_args,
    should_over_fetch,
)
from rail_pagination.exceptions import PaginationError
from rail_pagination.projection import ProjectionPlan, ProjectionTree
from rail_pagination.settings import PaginationSettings

pytestmark = pytest.mark.unit


class TestParsePaginationArgs:
    def test_defaults(self):
        args = parse_pagination_args({}, default_per_page=20)
        assert args == PaginationArgs(page=1, per_page=20, filter={}, sort=None)

    def test_none_args(self):
        assert parse_pagination_args(None, default_per_page=5).per_page == 5

    def test_explicit_values(self):
        args = parse_pagination_args(
            {"page": 3, "per_page": 7, "filter": {"gender": "m"}, "sort": {"id": -1}},
            default_per_page=20,
        )
        assert args.page == 3
        assert args.per_page == 7
        assert args.filter == {"gender": "m"}
        assert args.sort == {"id": -1}

    @pytest.mark.parametrize(
        "raw", [{"page": 0}, {"page": -1}, {"per_page": 0}, {"first": 0}, {"page": "2"}]
    )
    def test_rejects_invalid_values(self, raw):
        with pytest.raises(PaginationError):
            parse_pagination_args(raw, default_per_page=20)

    def test_error_carries_offending_value(self):
        with pytest.raises(PaginationError) as exc_info:
            parse_pagination_args({"per_page": -3}, default_per_page=20)
        assert exc_info.value.per_page == -3

    def test_first_overrides_page_and_per_page(self):
        args = parse_pagination_args({"page": 4, "per_page": 10, "first": 3}, 20)
        assert args.first == 3
        assert args.per_page == 3
        assert args.page == 1

    def test_per_page_clamped_by_settings(self):
        settings = PaginationSettings(default_per_page=10, max_per_page=50)
        args = parse_pagination_args({"per_page": 500}, 10, settings=settings)
        assert args.per_page == 50

    def test_raw_query_passed_through(self):
        raw_query = {"$where": "this.age > 12"}
        args = parse_pagination_args({"raw_query": raw_query}, 20)
        assert args.raw_query is raw_query


class TestShouldOverFetch:
    def test_items_without_count(self):
        assert should_over_fetch(ProjectionPlan(need_count=False, need_items=True))

    def test_count_available(self):
        assert not should_over_fetch(ProjectionPlan(need_count=True, need_items=True))

    def test_no_items(self):
        assert not should_over_fetch(ProjectionPlan(need_count=True, need_items=False))

    def test_disabled(self):
        plan = ProjectionPlan(need_count=False, need_items=True)
        assert not should_over_fetch(plan, enabled=False)


class TestComposeArgs:
    def test_count_args_never_receive_sort(self):
        args = PaginationArgs(page=2, per_page=5, filter={"gender": "m"}, sort={"id": 1})
        assert compose_count_args(args) == {"filter": {"gender": "m"}, "raw_query": None}

    def test_filter_identical_for_both_operations(self):
        args = PaginationArgs(page=1, per_page=5, filter={"gender": "f"})
        assert compose_count_args(args)["filter"] is compose_list_args(args)["filter"]

    def test_list_args(self):
        args = PaginationArgs(page=3, per_page=5, sort={"id": 1})
        assert compose_list_args(args) == {
            "filter": {},
            "sort": {"id": 1},
            "limit": 5,
            "skip": 10,
        }

    def test_list_args_over_fetch(self):
        args = PaginationArgs(page=1, per_page=5)
        composed = compose_list_args(args, over_fetch=True)
        assert composed["limit"] == 6
        assert composed["skip"] == 0


class TestComposeListProjection:
    def test_items_lifted_to_top_level(self):
        tree = ProjectionTree.from_dict({"items": {"name": True, "age": True}})
        assert compose_list_projection(tree) == {"name": True, "age": True}

    def test_passthrough_keys_merged(self):
        tree = ProjectionTree.from_dict(
            {
                "count": True,
                "pageInfo": {"itemCount": True},
                "items": {"name": True},
                "score": {"$meta": "textScore"},
            }
        )
        assert compose_list_projection(tree) == {
            "name": True,
            "score": {"$meta": "textScore"},
        }

    def test_bare_items_leaf(self):
        tree = ProjectionTree.from_dict({"items": True})
        assert compose_list_projection(tree) == {}
