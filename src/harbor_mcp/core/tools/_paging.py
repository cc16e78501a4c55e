"""
Shared helpers for Harbor's page/page_size list endpoints.
"""

from typing import Any, Dict, List, Optional

from harbor_mcp.core.errors import invalid_params

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise invalid_params(f"{field} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise invalid_params(f"{field} must be an integer") from exc


def clamp_page_size(page_size: int) -> int:
    """Clamp page_size into Harbor's accepted range to avoid huge payloads."""
    return max(1, min(_as_int(page_size, "page_size"), MAX_PAGE_SIZE))


def check_page(page: int) -> int:
    page = _as_int(page, "page")
    if page < 1:
        raise invalid_params("page must be >= 1")
    return page


def page_envelope(
    items: List[Dict[str, Any]], *, page: int, page_size: int, total: Optional[int]
) -> Dict[str, Any]:
    """
    Wrap one page of results:
        {"items": [...], "page": int, "page_size": int,
         "total": int | None, "next_page": int | None}
    """
    if total is None:
        more = len(items) >= page_size
    else:
        more = page * page_size < total
    return {
        "items": items,
        "page": page,
        "page_size": page_size,
        "total": total,
        "next_page": page + 1 if more else None,
    }
