"""Page arithmetic and the pagination envelope returned by every list endpoint."""

import math
from typing import Callable, TypeVar

from jobboard.schemas.common import PageParams, Pagination

T = TypeVar("T")


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    total_pages = math.ceil(total / limit) if total else 0
    return Pagination(
        current_page=page,
        total_pages=total_pages,
        total=total,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )


def paginate(
    fetch: Callable[[int, int], tuple[list[T], int]],
    params: PageParams,
) -> tuple[list[T], Pagination]:
    """
    Run fetch(limit, offset) -> (items, total) for the requested page.
    A page past the end yields no items and a normal envelope.
    """
    items, total = fetch(params.limit, params.offset)
    return items, build_pagination(params.page, params.limit, total)
