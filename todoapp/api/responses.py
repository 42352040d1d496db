"""
Response envelopes for a future transport.

Plain data shapes: the only behaviour is stamping `timestamp` and computing
`total_pages`. Nothing here serialises anything.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Generic, List, Optional, Sequence, TypeVar

from todoapp.domain.common.result import Result

T = TypeVar("T")

STATUS_OK = 200
STATUS_BAD_REQUEST = 400


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    data: T
    status: int
    success: bool
    message: Optional[str] = None
    timestamp: datetime = field(default_factory=_utc_now)


@dataclass(frozen=True)
class PaginatedResponse(ApiResponse[List[T]]):
    page: int = 1
    page_size: int = 0
    total: int = 0
    total_pages: int = 0


def success_response(data: T, message: str = "Success") -> ApiResponse[T]:
    return ApiResponse(data=data, status=STATUS_OK, success=True, message=message)


def paginated_response(
    items: Sequence[T],
    page: int,
    page_size: int,
    total: int,
    message: str = "Success",
) -> PaginatedResponse[T]:
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return PaginatedResponse(
        data=list(items),
        status=STATUS_OK,
        success=True,
        message=message,
        page=page,
        page_size=page_size,
        total=total,
        total_pages=math.ceil(total / page_size),
    )


def error_response(status: int, message: str) -> ApiResponse[None]:
    return ApiResponse(data=None, status=status, success=False, message=message)


def result_to_response(result: Result[Any], error_status: int = STATUS_BAD_REQUEST) -> ApiResponse[Any]:
    if result.is_failure:
        return error_response(error_status, result.error or "Error")
    return success_response(result.get_value())
