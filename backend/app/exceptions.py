from fastapi import HTTPException
from pydantic import BaseModel
from typing import Optional


class ProblemDetail(BaseModel):
    """RFC 7807 compliant error response."""

    type: str = "about:blank"
    title: str
    detail: Optional[str] = None
    status: int
    instance: Optional[str] = None
    code: str


class DomainException(Exception):
    """Base class for domain-specific exceptions."""

    def __init__(
        self,
        status_code: int,
        title: str,
        *,
        code: str,
        detail: str | None = None,
        type_: str = "about:blank",
    ) -> None:
        super().__init__(detail or title)
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type = type_
        self.code = code


class SessionLocked(DomainException):
    def __init__(self, label: str) -> None:
        super().__init__(
            status_code=409,
            title="Session locked",
            detail=f"rounds can only be added to today's session, not '{label}'",
            code="session_locked",
        )


class PlayerIndexOutOfRange(DomainException):
    def __init__(self, index: int) -> None:
        super().__init__(
            status_code=404,
            title="Player not found",
            detail=f"no roster slot at index {index}",
            code="player_not_found",
        )


class StoreError(DomainException):
    """The game record store could not be read or written."""

    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=503,
            title="Store unavailable",
            detail=detail,
            code="store_unavailable",
        )


def http_problem(
    status_code: int,
    detail: str,
    code: str,
    *,
    headers: Optional[dict[str, str]] = None,
) -> HTTPException:
    """Create an HTTPException with an attached problem code."""

    exc = HTTPException(status_code=status_code, detail=detail, headers=headers)
    setattr(exc, "code", code)
    return exc
