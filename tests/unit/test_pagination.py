"""Unit tests for pagination utilities and the response envelope."""

import pytest

from hr_api.crosscutting.envelope import (
    Envelope,
    PaginationMeta,
    error_body,
    paginated,
    success,
)
from hr_api.crosscutting.pagination import Page, PageRequest, total_pages

pytestmark = pytest.mark.unit


class TestPageRequest:
    def test_offset_is_derived_from_page(self):
        request = PageRequest(page=3, page_size=5)
        assert request.offset == 10
        assert request.limit == 5

    @pytest.mark.parametrize("page, size", [(0, 10), (1, 0), (-1, 5)])
    def test_rejects_out_of_range(self, page, size):
        with pytest.raises(ValueError):
            PageRequest(page=page, page_size=size)


class TestPage:
    def test_second_page_of_twelve(self):
        page = Page.from_slice(list(range(12)), PageRequest(page=2, page_size=5))

        assert page.items == [5, 6, 7, 8, 9]
        assert page.total == 12
        assert page.total_pages == 3

    def test_page_past_the_end_is_empty(self):
        page = Page.from_slice(list(range(3)), PageRequest(page=4, page_size=5))

        assert page.items == []
        assert page.total == 3
        assert page.total_pages == 1

    def test_total_pages_of_empty_result_is_zero(self):
        assert total_pages(0, 10) == 0
        assert total_pages(10, 10) == 1
        assert total_pages(11, 10) == 2

    def test_map_keeps_metadata(self):
        page = Page(items=[1, 2], total=7, page=2, page_size=2)
        mapped = page.map(str)

        assert mapped.items == ["1", "2"]
        assert (mapped.total, mapped.page, mapped.page_size) == (7, 2, 2)


class TestEnvelope:
    def test_success_without_data_omits_key(self):
        assert success("ok") == {"success": True, "message": "ok"}

    def test_paginated_builds_camel_case_meta(self):
        body = paginated("ok", Page(items=[1], total=12, page=2, page_size=5))
        meta = body["pagination"]

        assert isinstance(meta, PaginationMeta)
        assert meta.model_dump(by_alias=True) == {
            "total": 12,
            "page": 2,
            "limit": 5,
            "totalPages": 3,
        }

    def test_envelope_drops_empty_optional_keys(self):
        dumped = Envelope[int](success=True, message="ok").model_dump()
        assert dumped == {"success": True, "message": "ok"}

    def test_error_body_includes_errors_only_when_present(self):
        assert error_body("boom") == {"success": False, "message": "boom"}
        assert error_body("bad", [{"path": "name", "message": "x"}])["errors"] == [
            {"path": "name", "message": "x"}
        ]
