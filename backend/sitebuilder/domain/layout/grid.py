"""
Row / column bookkeeping for V2 sections.

Blocks live in per-column lists; `rowIndex` places them on a grid row shared
by all columns of the section, so empty cells are meaningful and row gaps are
kept. Blocks without a usable `rowIndex` fall back to their list position.

The editor operations at the bottom are pure: they never mutate the layout
they receive and return the updated document. Unknown section or block ids
leave the layout unchanged.
"""
import copy

from .constants import FULL_WIDTH_BLOCK_TYPES
from .fields import clamp, clamp_columns, new_id


def is_valid_row_index(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def get_block_row_index(block: dict, fallback: int) -> int:
    value = block.get("rowIndex")
    return value if is_valid_row_index(value) else fallback


def sort_blocks_by_row_index(blocks: list) -> list:
    indexed = [(get_block_row_index(block, index), index, block) for index, block in enumerate(blocks)]
    indexed.sort(key=lambda entry: (entry[0], entry[1]))
    return [block for _, _, block in indexed]


def max_row_index(blocks: list) -> int:
    return max((get_block_row_index(block, index) for index, block in enumerate(blocks)), default=-1)


def shift_blocks_at_or_after(blocks: list, start_row: int) -> list:
    shifted = []
    for index, block in enumerate(blocks):
        row = get_block_row_index(block, index)
        shifted.append({**block, "rowIndex": row + 1} if row >= start_row else block)
    return shifted


def append_blocks_at_end(target: list, extra: list) -> list:
    if not extra:
        return target
    start_row = max_row_index(target) + 1
    return target + [{**block, "rowIndex": start_row + offset} for offset, block in enumerate(extra)]


def reindex_rows(blocks: list) -> list:
    """
    Give every block an explicit, strictly increasing rowIndex.

    Blocks are ordered by (rowIndex or position, position). A row that does
    not exceed its predecessor is bumped to predecessor + 1; gaps survive.
    """
    indexed = sorted(
        ((get_block_row_index(block, index), index, block) for index, block in enumerate(blocks)),
        key=lambda entry: (entry[0], entry[1]),
    )
    result = []
    previous = -1
    for row, _, block in indexed:
        if row <= previous:
            row = previous + 1
        result.append({**block, "rowIndex": row})
        previous = row
    return result


def section_column_count(section: dict) -> int:
    settings = section.get("settings") or {}
    for value in (settings.get("columnsLayout"), section.get("columnsLayout"), section.get("columns")):
        if value is not None:
            return clamp_columns(value)
    return 2


# -------------------------------------------------
# Rendering helpers
# -------------------------------------------------
def is_full_width_block(block: dict) -> bool:
    return block.get("type") in FULL_WIDTH_BLOCK_TYPES


def calculate_block_span(block: dict, section_columns: int) -> int:
    if is_full_width_block(block):
        return section_columns
    return clamp(block.get("colSpan") or 1, 1, section_columns)


def organize_section_blocks_into_rows(section: dict) -> list:
    """
    Lay the visible blocks of a section out row by row.

    Returns `[{"row_index": n, "cells": [{"col_index", "block"} | None, ...]}]`
    covering rows 0..max so empty cells keep the grid shape.
    """
    column_count = section_column_count(section)
    placed = {}
    last_row = -1
    for col_index, col in enumerate(section.get("cols") or []):
        visible = [block for block in col.get("blocks") or [] if block.get("visible") is not False]
        for block_index, block in enumerate(visible):
            row = get_block_row_index(block, block_index)
            placed[(col_index, row)] = block
            last_row = max(last_row, row)

    rows = []
    for row in range(last_row + 1):
        cells = []
        for col_index in range(column_count):
            block = placed.get((col_index, row))
            cells.append({"col_index": col_index, "block": block} if block is not None else None)
        rows.append({"row_index": row, "cells": cells})
    return rows


def validate_block_ordering(section: dict):
    """Return `(is_valid, issues)` for the row indexes of every column."""
    issues = []
    for col_index, col in enumerate(section.get("cols") or []):
        seen = set()
        previous = -1
        for block_index, block in enumerate(col.get("blocks") or []):
            raw = block.get("rowIndex")
            if raw is not None and not is_valid_row_index(raw):
                issues.append(f"Block {block.get('id')} in col {col_index} has invalid rowIndex {raw!r}")
                continue
            row = get_block_row_index(block, block_index)
            if row in seen:
                issues.append(f"Block {block.get('id')} in col {col_index} reuses row {row}")
            elif row < previous:
                issues.append(f"Block {block.get('id')} in col {col_index} is out of order (row {row} after {previous})")
            seen.add(row)
            previous = max(previous, row)
    return not issues, issues


# -------------------------------------------------
# Lookup
# -------------------------------------------------
def find_section(layout: dict, section_id: str):
    return next((s for s in layout.get("sections") or [] if s.get("id") == section_id), None)


def find_block(layout: dict, block_id: str):
    """Return `(section, column_index, block)` or None."""
    for section in layout.get("sections") or []:
        for col_index, col in enumerate(section.get("cols") or []):
            for block in col.get("blocks") or []:
                if block.get("id") == block_id:
                    return section, col_index, block
    return None


# -------------------------------------------------
# Editor operations
# -------------------------------------------------
def _map_section(layout, section_id, fn):
    result = copy.deepcopy(layout)
    result["sections"] = [fn(s) if s.get("id") == section_id else s for s in result.get("sections") or []]
    return result


def _map_column(layout, section_id, column_index, fn):
    def apply(section):
        cols = [
            fn(col) if index == column_index else col
            for index, col in enumerate(section.get("cols") or [])
        ]
        return {**section, "cols": cols}

    return _map_section(layout, section_id, apply)


def _clone_items(items):
    return [{**item, "id": new_id()} for item in items or []]


def deep_clone_block(block: dict) -> dict:
    """Copy a block with fresh ids for it and for its nested items."""
    cloned = copy.deepcopy(block)
    cloned["id"] = new_id()
    cloned["colSpan"] = block.get("colSpan") or 1
    data = cloned.get("data") or {}
    if cloned.get("type") in ("cards", "services") and data.get("items"):
        data["items"] = _clone_items(data["items"])
    if cloned.get("type") == "form" and data.get("fields"):
        data["fields"] = _clone_items(data["fields"])
    return cloned


def create_section(columns: int = 2) -> dict:
    columns = clamp_columns(columns)
    section = {
        "id": new_id(),
        "columns": columns,
        "cols": [{"id": f"col-{index + 1}", "blocks": []} for index in range(columns)],
        "settings": {},
    }
    if columns >= 2:
        section["columnsLayout"] = columns
    return section


def add_section(layout: dict, section: dict, index=None) -> dict:
    result = copy.deepcopy(layout)
    sections = result.setdefault("sections", [])
    if index is not None and 0 <= index <= len(sections):
        sections.insert(index, copy.deepcopy(section))
    else:
        sections.append(copy.deepcopy(section))
    return result


def remove_section(layout: dict, section_id: str) -> dict:
    result = copy.deepcopy(layout)
    result["sections"] = [s for s in result.get("sections") or [] if s.get("id") != section_id]
    return result


def move_section(layout: dict, section_id: str, direction: str) -> dict:
    result = copy.deepcopy(layout)
    sections = result.get("sections") or []
    index = next((i for i, s in enumerate(sections) if s.get("id") == section_id), -1)
    if index < 0:
        return result
    target = index - 1 if direction == "up" else index + 1
    if 0 <= target < len(sections):
        sections[index], sections[target] = sections[target], sections[index]
    return result


def duplicate_section(layout: dict, section_id: str) -> dict:
    result = copy.deepcopy(layout)
    sections = result.get("sections") or []
    index = next((i for i, s in enumerate(sections) if s.get("id") == section_id), -1)
    if index < 0:
        return result
    original = sections[index]
    clone = {
        **copy.deepcopy(original),
        "id": new_id(),
        "cols": [
            {**col, "id": new_id(), "blocks": [deep_clone_block(b) for b in col.get("blocks") or []]}
            for col in original.get("cols") or []
        ],
    }
    sections.insert(index + 1, clone)
    return result


def change_section_columns(layout: dict, section_id: str, new_columns: int) -> dict:
    new_columns = clamp_columns(new_columns)

    def fit(block):
        return {**block, "colSpan": clamp(block.get("colSpan") or 1, 1, new_columns)}

    def apply(section):
        old_cols = section.get("cols") or []
        cols = []
        for index in range(new_columns):
            source = old_cols[index] if index < len(old_cols) else {}
            cols.append({
                "id": source.get("id") or f"col-{index + 1}",
                "blocks": [fit(b) for b in source.get("blocks") or []],
            })
        for col in old_cols[new_columns:]:
            cols[-1]["blocks"] = append_blocks_at_end(cols[-1]["blocks"], [fit(b) for b in col.get("blocks") or []])

        updated = {
            **section,
            "columns": new_columns,
            "cols": [{**col, "blocks": sort_blocks_by_row_index(col["blocks"])} for col in cols],
            "settings": {**(section.get("settings") or {})},
        }
        if new_columns >= 2:
            updated["columnsLayout"] = new_columns
            updated["settings"]["columnsLayout"] = new_columns
        else:
            updated.pop("columnsLayout", None)
            updated["settings"].pop("columnsLayout", None)
        return updated

    return _map_section(layout, section_id, apply)


def add_block_to_section(layout, section_id, column_index, block, insert_index=None, placement="insert"):
    """
    Add `block` to a column.

    With `insert_index` the block takes that row; `insert` pushes the blocks
    at or below it down one row, `place` drops it into the cell as is.
    Without an index the block keeps its own rowIndex or goes to the end.
    """
    def apply(col):
        ordered = sort_blocks_by_row_index(col.get("blocks") or [])
        if insert_index is not None and insert_index >= 0:
            row = insert_index
        elif is_valid_row_index(block.get("rowIndex")):
            row = block["rowIndex"]
        else:
            row = max_row_index(ordered) + 1
        if insert_index is not None and placement == "insert":
            ordered = shift_blocks_at_or_after(ordered, row)
        return {**col, "blocks": sort_blocks_by_row_index(ordered + [{**block, "rowIndex": row}])}

    return _map_column(layout, section_id, column_index, apply)


def remove_block_from_section(layout, section_id, column_index, block_id):
    """Remove a block; the hero block is never removed."""
    def apply(col):
        blocks = col.get("blocks") or []
        target = next((b for b in blocks if b.get("id") == block_id), None)
        if target is not None and target.get("type") == "hero":
            return col
        return {**col, "blocks": [b for b in blocks if b.get("id") != block_id]}

    return _map_column(layout, section_id, column_index, apply)


def update_block_in_section(layout, section_id, column_index, block_id, updated_block):
    def apply(col):
        blocks = []
        for block in col.get("blocks") or []:
            if block.get("id") == block_id:
                row = updated_block.get("rowIndex")
                block = {**updated_block, "rowIndex": row if row is not None else block.get("rowIndex")}
                if block["rowIndex"] is None:
                    block.pop("rowIndex")
            blocks.append(block)
        return {**col, "blocks": blocks}

    return _map_column(layout, section_id, column_index, apply)


def move_block_in_column(layout, section_id, column_index, block_id, direction):
    """Move a block one row up or down, swapping with whatever occupies that row."""
    def apply(col):
        ordered = sort_blocks_by_row_index(col.get("blocks") or [])
        rows = {b.get("id"): get_block_row_index(b, i) for i, b in enumerate(ordered)}
        if block_id not in rows:
            return col
        current_row = rows[block_id]
        target_row = current_row - 1 if direction == "up" else current_row + 1
        if target_row < 0:
            return col
        target_id = next((bid for bid, row in rows.items() if row == target_row), None)

        moved = []
        for block in ordered:
            if block.get("id") == block_id:
                block = {**block, "rowIndex": target_row}
            elif target_id is not None and block.get("id") == target_id:
                block = {**block, "rowIndex": current_row}
            moved.append(block)
        return {**col, "blocks": sort_blocks_by_row_index(moved)}

    return _map_column(layout, section_id, column_index, apply)


def move_block_to_column(layout, section_id, from_column, to_column, block_id):
    """Move a block to the end of another column of the same section."""
    def apply(section):
        cols = section.get("cols") or []
        if not (0 <= from_column < len(cols) and 0 <= to_column < len(cols)):
            return section
        block = next((b for b in cols[from_column].get("blocks") or [] if b.get("id") == block_id), None)
        if block is None:
            return section
        columns = section.get("columns") or len(cols)
        block = {**block, "colSpan": clamp(block.get("colSpan") or 1, 1, columns)}

        updated = []
        for index, col in enumerate(cols):
            if index == from_column:
                col = {**col, "blocks": [b for b in col.get("blocks") or [] if b.get("id") != block_id]}
            elif index == to_column:
                ordered = sort_blocks_by_row_index(col.get("blocks") or [])
                moved = {**block, "rowIndex": max_row_index(ordered) + 1}
                col = {**col, "blocks": sort_blocks_by_row_index(ordered + [moved])}
            updated.append(col)
        return {**section, "cols": updated}

    return _map_section(layout, section_id, apply)


def duplicate_block(layout, section_id, column_index, block_id):
    """Insert a copy right below the original, pushing later rows down."""
    def apply(col):
        ordered = sort_blocks_by_row_index(col.get("blocks") or [])
        index = next((i for i, b in enumerate(ordered) if b.get("id") == block_id), -1)
        if index < 0:
            return col
        original = ordered[index]
        insert_row = get_block_row_index(original, index) + 1
        shifted = shift_blocks_at_or_after(ordered, insert_row)
        clone = {**deep_clone_block(original), "rowIndex": insert_row}
        return {**col, "blocks": sort_blocks_by_row_index(shifted + [clone])}

    return _map_column(layout, section_id, column_index, apply)
