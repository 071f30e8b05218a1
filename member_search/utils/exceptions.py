"""검색 예외 클래스 모듈.

Search exception classes module.
Provides the errors raised by the search core itself. Failures coming
from the persistence layer are never wrapped: they surface as the
SQLAlchemy exception that was raised, exported here under the name
QueryExecutionFailure for callers that want to catch them.

Usage:
    from member_search.utils.exceptions import InvalidPageRequest
    raise InvalidPageRequest("offset must not be negative")
"""

from sqlalchemy.exc import SQLAlchemyError

# 영속성 계층 실패 — 그대로 전파됨 (Persistence failures, propagated unchanged)
QueryExecutionFailure = SQLAlchemyError


class SearchError(Exception):
    """검색 코어 예외의 부모 클래스.

    Base class for errors raised by the search core.

    Args:
        detail: 오류 메시지 (Error message, default: "Search failed")
    """

    def __init__(self, detail: str = "Search failed") -> None:
        super().__init__(detail)
        self.detail: str = detail


class InvalidPageRequest(SearchError):
    """잘못된 페이지 요청 예외 — 음수 offset/limit 요청 시 사용.

    Invalid page request exception.
    Raised before any query is issued when the page request carries a
    negative offset or a negative limit.

    Args:
        detail: 오류 메시지 (Error message, default: "Invalid page request")
    """

    def __init__(self, detail: str = "Invalid page request") -> None:
        super().__init__(detail)
