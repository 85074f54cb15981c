"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Repositories and services raise these directly; FastAPI turns them into
responses with the matching status code.

Usage:
    from roster.utils.exceptions import NotFoundError, PersistenceError
    raise NotFoundError("Member not found")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    Raised when deleting or addressing a row that does not exist.
    Plain lookups return None instead.
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class InvalidArgumentError(HTTPException):
    """400 Bad Request 예외 — 잘못된 페이지/정렬 인자.

    Raised before any store access for invalid paging input
    (negative page index, non-positive page size, unknown sort property).
    """

    def __init__(self, detail: str = "Invalid argument") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class PersistenceError(HTTPException):
    """409 Conflict 예외 — 제약 조건 위반.

    Raised when a write violates a constraint (NOT NULL, CHECK, foreign key)
    or the configured team delete policy. Never retried automatically.
    """

    def __init__(self, detail: str = "Persistence constraint violated") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class TransientError(HTTPException):
    """503 Service Unavailable 예외 — 일시적 저장소 장애.

    Raised when the store is unreachable or times out.
    The caller may retry with backoff.
    """

    def __init__(self, detail: str = "Store temporarily unavailable") -> None:
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
