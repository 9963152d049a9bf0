from typing import Callable, Any, List, Optional, Dict

from sitebuilder.utils.pagination import CursorMeta, OffsetMeta


def normalize_pagination(
    items: List[Any],
    normalize_fn: Callable[[Any], Dict[str, Any]],
    *,
    cursor: Optional[CursorMeta] = None,
    offset: Optional[OffsetMeta] = None,
) -> Dict[str, Any]:
    """
    Wrap a page of results as `{"items": [...], "pagination": {...}}`.

    Keyset listings pass `cursor`, offset listings pass `offset`; never both.
    """
    response: Dict[str, Any] = {
        "items": [normalize_fn(item) for item in items],
    }

    if cursor is not None:
        response["pagination"] = {
            "has_more": cursor["has_more"],
            "next_cursor": cursor["next_cursor"],
        }
    elif offset is not None:
        response["pagination"] = {
            "limit": offset["limit"],
            "offset": offset["offset"],
            "total": offset["total"],
            "has_more": offset["offset"] + len(items) < offset["total"],
        }

    return response
