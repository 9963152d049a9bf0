from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Tuple, Type, TypedDict

from sqlalchemy.orm import Query
from sqlalchemy.sql import and_, or_
from werkzeug.exceptions import BadRequest


class CursorMeta(TypedDict):
    has_more: bool
    next_cursor: Optional[str]


class OffsetMeta(TypedDict):
    limit: int
    offset: int
    total: int


def encode_cursor(created_at: datetime, row_id: Any) -> str:
    """Cursor format: `<ISO8601 created_at>|<id>`."""
    if not isinstance(created_at, datetime) or row_id is None:
        raise ValueError("created_at and row_id are required to encode cursor")
    return f"{created_at.isoformat()}|{row_id}"


def decode_cursor(cursor: str) -> Tuple[datetime, str]:
    if not cursor or "|" not in cursor:
        raise BadRequest("Invalid cursor format")
    ts_str, row_id = cursor.split("|", 1)
    try:
        return datetime.fromisoformat(ts_str), row_id
    except ValueError as exc:
        raise BadRequest("Invalid cursor format") from exc


def paginate_cursor(
    query: Query,
    *,
    model: Type[Any],
    limit: int,
    cursor: Optional[str] = None,
) -> tuple[list[Any], CursorMeta]:
    """
    Newest-first keyset pagination on (created_at, id).

    Fetches one extra row to know whether another page exists.
    """
    if limit <= 0:
        raise BadRequest("Limit must be greater than zero")

    if cursor:
        cursor_ts, cursor_id = decode_cursor(cursor)
        query = query.filter(
            or_(
                model.created_at < cursor_ts,
                and_(model.created_at == cursor_ts, model.id < cursor_id),
            )
        )

    rows = query.order_by(model.created_at.desc(), model.id.desc()).limit(limit + 1).all()
    has_more = len(rows) > limit
    items = rows[:limit]

    next_cursor = None
    if has_more and items:
        next_cursor = encode_cursor(items[-1].created_at, items[-1].id)

    return items, {"has_more": has_more, "next_cursor": next_cursor}


def paginate_offset(query: Query, *, limit: int, offset: int) -> tuple[list[Any], OffsetMeta]:
    total = query.order_by(None).count()
    items = query.limit(limit).offset(offset).all()
    return items, {"limit": limit, "offset": offset, "total": total}
