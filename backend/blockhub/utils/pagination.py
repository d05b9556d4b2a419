# blockhub/utils/pagination.py
from __future__ import annotations

import math
from typing import Any, Generic, List, Optional, TypeVar
from dataclasses import dataclass

from flask import current_app, has_app_context
from sqlalchemy import func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from blockhub.domain.exceptions import ValidationError

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass
class PageResult(Generic[T]):
    """
    One page of an offset-paginated listing.

    ``total`` is the pre-pagination count; pages are 1-indexed.
    """
    items: List[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0


def resolve_page_params(page: Optional[int], page_size: Optional[int]) -> tuple[int, int]:
    """
    Apply defaults and bounds to raw page/page_size values.

    Raises:
    - ValidationError if either is below 1 or page_size exceeds the cap
    """
    default_size, max_size = DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
    if has_app_context():
        default_size = current_app.config.get("DEFAULT_PAGE_SIZE", default_size)
        max_size = current_app.config.get("MAX_PAGE_SIZE", max_size)

    page = DEFAULT_PAGE if page is None else page
    page_size = default_size if page_size is None else page_size

    if page < 1:
        raise ValidationError("page must be greater than zero")
    if page_size < 1:
        raise ValidationError("pageSize must be greater than zero")
    if page_size > max_size:
        raise ValidationError(f"pageSize must not exceed {max_size}")

    return page, page_size


def paginate(
    session: Session,
    stmt: Select,
    *,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
) -> PageResult[Any]:
    """
    Execute an ordered select with offset pagination.

    The caller owns ordering; this only counts, offsets and limits.
    """
    page, page_size = resolve_page_params(page, page_size)

    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = session.execute(count_stmt).scalar_one()

    rows = (
        session.execute(stmt.offset((page - 1) * page_size).limit(page_size))
        .scalars()
        .all()
    )

    return PageResult(items=list(rows), total=total, page=page, page_size=page_size)
