import logging

from .blocks import normalize_block
from .constants import LAYOUT_VERSION
from .fields import clamp_columns, new_id, utc_now_iso
from .grid import append_blocks_at_end, reindex_rows, section_column_count
from .schema import LayoutV1, parse_layout

logger = logging.getLogger(__name__)

EMPTY_LAYOUT = {"version": LAYOUT_VERSION, "sections": []}


def normalize_page_layout(layout, now=None) -> dict:
    """
    Validate any stored or submitted layout and return its canonical V2 form.

    Raises LayoutValidationError when the document does not match either
    schema generation.
    """
    now = now or utc_now_iso()
    parsed = parse_layout(layout if layout is not None else EMPTY_LAYOUT)
    raw = parsed.model_dump(by_alias=True, exclude_unset=True)
    if isinstance(parsed, LayoutV1):
        raw = migrate_layout_v1_to_v2(raw)
    return normalize_layout_v2(raw, now)


def migrate_layout_v1_to_v2(layout_v1: dict) -> dict:
    """Wrap the flat V1 columns into a single section."""
    columns = clamp_columns(layout_v1.get("columns") or 1)
    source = layout_v1.get("cols") or []
    cols = []
    for index in range(columns):
        col = source[index] if index < len(source) else {}
        cols.append({"id": col.get("id") or f"col-{index + 1}", "blocks": list(col.get("blocks") or [])})

    for col in source[columns:]:
        cols[-1]["blocks"].extend(col.get("blocks") or [])

    logger.debug("Migrated V1 layout with %d column(s) into one section", len(source))
    return {
        "version": 2,
        "sections": [{"id": new_id(), "columns": columns, "cols": cols, "settings": {}}],
    }


def _normalize_blocks(blocks, now):
    result = []
    for block in blocks or []:
        normalized = normalize_block(block, now)
        if normalized is None:
            logger.debug("Dropped block %s", (block or {}).get("id"))
            continue
        result.append(normalized)
    return result


def _normalize_settings(settings: dict, columns: int) -> dict:
    merged = dict(settings or {})
    merged["backgroundStyle"] = merged.get("backgroundStyle") or merged.get("background")
    merged["density"] = merged.get("density") or merged.get("padding")
    merged["width"] = merged.get("width") or merged.get("maxWidth")
    merged["columnsLayout"] = merged.get("columnsLayout") or (columns if columns >= 2 else None)
    return {key: value for key, value in merged.items() if value is not None}


def normalize_section(section: dict, now) -> dict:
    columns = section_column_count(section)
    source = section.get("cols") or []
    cols = []
    for index in range(columns):
        col = source[index] if index < len(source) else {}
        cols.append({
            "id": col.get("id") or f"col-{index + 1}",
            "blocks": reindex_rows(_normalize_blocks(col.get("blocks"), now)),
        })

    for col in source[columns:]:
        extra = reindex_rows(_normalize_blocks(col.get("blocks"), now))
        if extra:
            logger.debug("Moving %d block(s) from a removed column into %s", len(extra), cols[-1]["id"])
        cols[-1]["blocks"] = append_blocks_at_end(cols[-1]["blocks"], extra)

    normalized = {
        "id": section.get("id") or new_id(),
        "columns": columns,
        "cols": cols,
        "settings": _normalize_settings(section.get("settings"), columns),
    }
    if columns >= 2:
        normalized["columnsLayout"] = columns
    return normalized


def normalize_layout_v2(layout: dict, now=None) -> dict:
    now = now or utc_now_iso()
    return {
        "version": LAYOUT_VERSION,
        "sections": [normalize_section(section, now) for section in layout.get("sections") or []],
    }


def strip_hidden_blocks(layout: dict) -> dict:
    """Copy of a V2 layout without the blocks flagged `visible: false`."""
    return {
        **layout,
        "sections": [
            {
                **section,
                "cols": [
                    {**col, "blocks": [b for b in col.get("blocks") or [] if b.get("visible") is not False]}
                    for col in section.get("cols") or []
                ],
            }
            for section in layout.get("sections") or []
        ],
    }


def iter_columns(layout):
    """Yield every column of a stored layout, V2 sections or legacy flat V1."""
    layout = layout or {}
    if layout.get("version") == LAYOUT_VERSION:
        for section in layout.get("sections") or []:
            yield from section.get("cols") or []
    else:
        yield from layout.get("cols") or []
