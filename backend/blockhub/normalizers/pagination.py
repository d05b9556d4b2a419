# blockhub/normalizers/pagination.py
from typing import Any, Callable, Dict

from blockhub.utils.pagination import PageResult


def normalize_pagination(
    result: PageResult,
    normalize_fn: Callable[[Any], Dict[str, Any]],
) -> Dict[str, Any]:
    """
    Normalize an offset-paginated result.

    ``total`` counts every match before pagination; ``totalPages`` is
    ceil(total / pageSize).
    """
    return {
        "items": [normalize_fn(item) for item in result.items],
        "total": result.total,
        "page": result.page,
        "pageSize": result.page_size,
        "totalPages": result.total_pages,
    }
