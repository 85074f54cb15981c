"""페이지 결과 계산 유닛 테스트.

Page metadata math, page request validation and sort parsing.
No database involved.
"""

import math

import pytest

from roster.utils.exceptions import InvalidArgumentError
from roster.utils.pagination import (
    Direction,
    Page,
    PageRequest,
    Sort,
    count_pages,
    resolve_total,
    window_length,
)


class TestPageRequest:
    """페이지 요청 검증."""

    def test_offset(self):
        assert PageRequest.of(0, 3).offset == 0
        assert PageRequest.of(2, 3).offset == 6

    def test_negative_page_rejected(self):
        with pytest.raises(InvalidArgumentError) as exc:
            PageRequest.of(-1, 10)
        assert exc.value.status_code == 400

    @pytest.mark.parametrize("size", [0, -5])
    def test_non_positive_size_rejected(self, size):
        with pytest.raises(InvalidArgumentError):
            PageRequest.of(0, size)

    def test_next_and_first_keep_size_and_sort(self):
        sort = Sort.by("username", direction=Direction.DESC)
        nxt = PageRequest.of(0, 5, sort).next()
        assert (nxt.page, nxt.size, nxt.sort) == (1, 5, sort)
        assert nxt.first().page == 0


class TestSort:
    """정렬 표현식 파싱."""

    def test_parse_direction(self):
        sort = Sort.parse("username,desc", "age")
        assert [(o.property, o.direction) for o in sort.orders] == [
            ("username", Direction.DESC),
            ("age", Direction.ASC),
        ]

    def test_parse_unknown_direction(self):
        with pytest.raises(InvalidArgumentError):
            Sort.parse("username,sideways")

    def test_parse_empty_property(self):
        with pytest.raises(InvalidArgumentError):
            Sort.parse(",desc")

    def test_unsorted(self):
        assert not Sort.unsorted().is_sorted
        assert Sort.by("age").and_(Sort.by("username")).is_sorted


class TestPageMetadata:
    """전체 페이지 수, 첫/마지막 페이지, 다음 페이지 여부."""

    def test_five_rows_first_page_of_three(self):
        page = Page.build(["e", "d", "c"], PageRequest.of(0, 3), total=5)
        assert page.total_pages == 2
        assert page.is_first is True
        assert page.has_next is True
        assert page.is_last is False
        assert page.has_previous is False
        assert page.number_of_elements == 3

    def test_last_page_has_no_next(self):
        page = Page.build(["b", "a"], PageRequest.of(1, 3), total=5)
        assert page.is_last is True
        assert page.has_next is False
        assert page.has_previous is True

    def test_empty(self):
        page = Page.build([], PageRequest.of(0, 10), total=0)
        assert page.total_pages == 0
        assert page.is_first is True
        assert page.has_next is False

    @pytest.mark.parametrize("total", [0, 1, 2, 9, 10, 11, 99, 100, 101])
    @pytest.mark.parametrize("size", [1, 3, 10])
    def test_total_pages_is_ceil(self, total, size):
        assert count_pages(total, size) == math.ceil(total / size)
        last = Page.build([], PageRequest.of(max(count_pages(total, size) - 1, 0), size), total)
        assert last.has_next is False

    def test_window_length(self):
        assert window_length(5, 0, 3) == 3
        assert window_length(5, 1, 3) == 2
        assert window_length(5, 2, 3) == 0
        assert window_length(0, 0, 3) == 0

    def test_map_keeps_metadata(self):
        page = Page.build([1, 2, 3], PageRequest.of(0, 3), total=7)
        mapped = page.map(str, str)
        assert mapped.content == ["1", "2", "3"]
        assert (mapped.number, mapped.size, mapped.total_elements) == (0, 3, 7)
        assert mapped.total_pages == 3

    def test_serialises_computed_fields(self):
        data = Page.build([1], PageRequest.of(0, 1), total=2).model_dump()
        assert data["total_pages"] == 2
        assert data["has_next"] is True
        assert data["is_first"] is True


class TestResolveTotal:
    """count 쿼리 생략 조건."""

    def test_first_page_partially_filled(self):
        assert resolve_total(2, PageRequest.of(0, 5)) == 2

    def test_later_page_partially_filled(self):
        assert resolve_total(2, PageRequest.of(3, 5)) == 17

    def test_full_window_needs_count(self):
        assert resolve_total(5, PageRequest.of(0, 5)) is None

    def test_empty_later_page_needs_count(self):
        assert resolve_total(0, PageRequest.of(4, 5)) is None
