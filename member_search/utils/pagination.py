"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides the PageRequest / Page models and the two query helpers every
paged search is built from: a slice fetch (OFFSET/LIMIT) and a total
count over the same filtered query.
"""

from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel, model_validator
from sqlalchemy import Row, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from member_search.config import settings
from member_search.utils.exceptions import InvalidPageRequest

T = TypeVar("T")


class PageRequest(BaseModel):
    """페이지 요청 모델 — (offset, limit) 쌍.

    Page request describing which slice of an ordered result set to
    materialize. Values are not validated on construction; searches
    reject negative values with InvalidPageRequest before querying.

    Attributes:
        offset: 건너뛸 행 수 (Number of rows to skip)
        limit: 가져올 최대 행 수 (Maximum number of rows to fetch)
    """

    offset: int = 0  # 시작 위치 — 0부터 시작 (Start position, 0-based)
    limit: int = 20  # 페이지 크기 (Page size)

    model_config = {"frozen": True}

    @classmethod
    def of(cls, page: int, size: int | None = None) -> "PageRequest":
        """페이지 번호와 크기로 요청을 생성합니다.

        Build a request from a 0-based page number and a page size.
        The size defaults to settings.DEFAULT_PAGE_SIZE.
        """
        size = settings.DEFAULT_PAGE_SIZE if size is None else size
        return cls(offset=page * size, limit=size)

    @property
    def page_index(self) -> int:
        """0부터 시작하는 페이지 번호 (0-based page number)."""
        if self.limit <= 0:
            return 0
        return self.offset // self.limit


class Page(BaseModel, Generic[T]):
    """페이지네이션 결과 모델.

    Pagination result model for typed responses.
    Contains the page content and metadata for client-side pagination controls.

    Attributes:
        content: 현재 페이지 항목 목록 (Items for the current page)
        total_count: 전체 항목 수 (Total count across all pages)
        page_index: 현재 페이지 번호 (Current page number, 0-based)
        page_size: 페이지당 항목 수 (Requested items per page)
    """

    content: list[T]  # 현재 페이지 항목 목록 (Paginated items)
    total_count: int  # 전체 항목 수 (Total item count)
    page_index: int  # 현재 페이지 번호 — 0부터 시작 (Current page, 0-indexed)
    page_size: int  # 페이지당 항목 수 (Items per page)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_bounds(self) -> "Page[T]":
        if len(self.content) > self.page_size:
            raise ValueError("content exceeds page size")
        if self.total_count < len(self.content):
            raise ValueError("total_count is smaller than content")
        return self

    @property
    def total_pages(self) -> int:
        """전체 페이지 수 (ceil(total_count / page_size), 0 when page_size is 0)."""
        if self.page_size <= 0:
            return 0
        return -(-self.total_count // self.page_size)


def ensure_valid_page_request(page_request: PageRequest) -> None:
    """음수 offset/limit 요청을 거부합니다.

    Raises:
        InvalidPageRequest: offset 또는 limit이 음수일 때 (Negative offset or limit)
    """
    if page_request.offset < 0:
        raise InvalidPageRequest(f"offset must not be negative: {page_request.offset}")
    if page_request.limit < 0:
        raise InvalidPageRequest(f"limit must not be negative: {page_request.limit}")


async def fetch_slice(
    db: AsyncSession,
    query: Select[Any],
    page_request: PageRequest,
) -> Sequence[Row[Any]]:
    """OFFSET/LIMIT을 적용하여 한 페이지의 행을 조회합니다.

    Fetch one page of rows from an ordered query.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: 정렬된 SQLAlchemy Select 쿼리 (Ordered base query)
        page_request: 페이지 요청 (Offset/limit to apply)

    Returns:
        Sequence[Row[Any]]: 페이지 행 목록 (Rows of the requested page)
    """
    result = await db.execute(query.offset(page_request.offset).limit(page_request.limit))
    return result.all()


async def count_rows(
    db: AsyncSession,
    query: Select[Any],
) -> int:
    """쿼리 결과의 전체 행 수를 조회합니다.

    Count all rows a query would return, ignoring any paging.
    The ORDER BY is dropped and the query is wrapped in a subquery.

    Args:
        db: 비동기 DB 세션 (Async database session)
        query: SQLAlchemy Select 쿼리 (Filtered base query)

    Returns:
        int: 전체 행 수 (Total row count)
    """
    # 전체 개수 조회 — 서브쿼리로 감싸서 COUNT 실행 (Count total via subquery)
    count_query = select(func.count()).select_from(query.order_by(None).subquery())
    return (await db.execute(count_query)).scalar() or 0
