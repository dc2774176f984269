"""Tests for listing query normalisation and page math."""

import pytest

from alumni_api.utils.pagination import ListQuery, build_meta, parse_list_query, total_pages


class TestParseListQuery:

    def test_defaults(self):
        query = parse_list_query()
        assert query == ListQuery(page=1, limit=10, sort_by="created_at", order="desc", search="")

    @pytest.mark.parametrize("page, limit", [("abc", "xyz"), ("0", "0"), ("-3", "-1"), (None, None)])
    def test_invalid_numbers_fall_back_to_defaults(self, page, limit):
        query = parse_list_query(page, limit)
        assert query.page == 1
        assert query.limit == 10

    def test_values_are_kept(self):
        query = parse_list_query("3", "25", "nama", "ASC", "budi")
        assert (query.page, query.limit, query.sort_by, query.order, query.search) == (3, 25, "nama", "asc", "budi")
        assert query.offset == 50
        assert query.direction == 1

    def test_unknown_order_means_desc(self):
        query = parse_list_query(order="sideways")
        assert query.order == "desc"
        assert query.direction == -1


class TestMeta:

    @pytest.mark.parametrize("total, limit, pages", [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 10, 3)])
    def test_total_pages(self, total, limit, pages):
        assert total_pages(total, limit) == pages

    def test_build_meta_serializes_sort_by_as_camel_case(self):
        meta = build_meta(parse_list_query("2", "5", "nim", "asc", "x"), 12)
        assert meta.pages == 3
        dumped = meta.model_dump(by_alias=True)
        assert dumped["sortBy"] == "nim"
        assert dumped["total"] == 12
