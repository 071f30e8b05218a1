"""페이지네이션 유틸리티 테스트.

Pagination utility tests — PageRequest construction, Page invariants,
and page request validation.
"""

import pytest
from pydantic import ValidationError

from member_search.config import settings
from member_search.utils.exceptions import InvalidPageRequest, SearchError
from member_search.utils.pagination import Page, PageRequest, ensure_valid_page_request


class TestPageRequest:
    """페이지 요청 테스트."""

    def test_of_page_and_size(self):
        """페이지 번호와 크기로 offset 계산."""
        request = PageRequest.of(2, 5)
        assert request.offset == 10
        assert request.limit == 5
        assert request.page_index == 2

    def test_of_default_size(self):
        """크기 생략 시 설정값 사용."""
        request = PageRequest.of(0)
        assert request.limit == settings.DEFAULT_PAGE_SIZE

    def test_page_index_with_unaligned_offset(self):
        """페이지 경계가 아닌 offset."""
        assert PageRequest(offset=3, limit=2).page_index == 1

    def test_page_index_zero_limit(self):
        """limit 0이면 페이지 번호 0."""
        assert PageRequest(offset=5, limit=0).page_index == 0


class TestValidation:
    """페이지 요청 검증 테스트."""

    def test_valid_request(self):
        """0 이상은 통과."""
        ensure_valid_page_request(PageRequest(offset=0, limit=0))

    def test_negative_offset(self):
        """음수 offset 거부."""
        with pytest.raises(InvalidPageRequest) as exc_info:
            ensure_valid_page_request(PageRequest(offset=-1, limit=10))
        assert "offset" in exc_info.value.detail
        assert isinstance(exc_info.value, SearchError)

    def test_negative_limit(self):
        """음수 limit 거부."""
        with pytest.raises(InvalidPageRequest) as exc_info:
            ensure_valid_page_request(PageRequest(offset=0, limit=-5))
        assert "limit" in exc_info.value.detail


class TestPage:
    """페이지 결과 테스트."""

    def test_total_pages(self):
        """전체 페이지 수 올림 계산."""
        page = Page[int](content=[1, 2], total_count=5, page_index=0, page_size=2)
        assert page.total_pages == 3

    def test_content_larger_than_page_size(self):
        """컨텐츠가 페이지 크기보다 크면 거부."""
        with pytest.raises(ValidationError):
            Page[int](content=[1, 2, 3], total_count=3, page_index=0, page_size=2)

    def test_total_smaller_than_content(self):
        """전체 개수가 컨텐츠보다 작으면 거부."""
        with pytest.raises(ValidationError):
            Page[int](content=[1, 2], total_count=1, page_index=0, page_size=2)
