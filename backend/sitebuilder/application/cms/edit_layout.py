from typing import Any, Dict, Tuple

from pydantic import TypeAdapter
from werkzeug.exceptions import NotFound

from sitebuilder.models.page import Page
from sitebuilder.domain.invariants.exceptions import InvariantViolation
from sitebuilder.domain.layout import grid
from .queries import get_page
from .schemas import (
    AddBlock,
    AddSection,
    ChangeSectionColumns,
    DuplicateBlock,
    DuplicateSection,
    LayoutOperation,
    MoveBlock,
    MoveBlockToColumn,
    MoveSection,
    RemoveBlock,
    RemoveSection,
    UpdateBlock,
)
from .update_page import update_page

_operation_adapter = TypeAdapter(LayoutOperation)


def _require_section(layout, section_id):
    section = grid.find_section(layout, section_id)
    if section is None:
        raise NotFound("Section not found")
    return section


def _require_block(layout, block_id):
    found = grid.find_block(layout, block_id)
    if found is None:
        raise NotFound("Block not found")
    return found


def _holds_hero(section):
    return any(
        block.get("type") == "hero"
        for col in section.get("cols") or []
        for block in col.get("blocks") or []
    )


def apply_operation(layout: dict, op) -> dict:
    """Apply one editor operation to a canonical layout and return the new document."""
    if isinstance(op, AddSection):
        return grid.add_section(layout, grid.create_section(op.columns), op.index)

    if isinstance(op, RemoveSection):
        section = _require_section(layout, op.section_id)
        if _holds_hero(section):
            raise InvariantViolation("The section holding the hero block cannot be removed.")
        return grid.remove_section(layout, op.section_id)

    if isinstance(op, MoveSection):
        _require_section(layout, op.section_id)
        return grid.move_section(layout, op.section_id, op.direction)

    if isinstance(op, DuplicateSection):
        _require_section(layout, op.section_id)
        return grid.duplicate_section(layout, op.section_id)

    if isinstance(op, ChangeSectionColumns):
        _require_section(layout, op.section_id)
        return grid.change_section_columns(layout, op.section_id, op.columns)

    if isinstance(op, AddBlock):
        section = _require_section(layout, op.section_id)
        if op.column_index >= len(section.get("cols") or []):
            raise InvariantViolation(f"Section has no column {op.column_index}.")
        return grid.add_block_to_section(
            layout, op.section_id, op.column_index, op.block, op.insert_index, op.placement
        )

    section, column_index, block = _require_block(layout, op.block_id)

    if isinstance(op, UpdateBlock):
        if block.get("type") == "hero" and op.block.get("type") != "hero":
            raise InvariantViolation("The hero block cannot change type.")
        updated = {**op.block, "id": op.block_id}
        return grid.update_block_in_section(layout, section["id"], column_index, op.block_id, updated)

    if isinstance(op, RemoveBlock):
        if block.get("type") == "hero":
            raise InvariantViolation("The hero block cannot be removed.")
        return grid.remove_block_from_section(layout, section["id"], column_index, op.block_id)

    if isinstance(op, MoveBlock):
        return grid.move_block_in_column(layout, section["id"], column_index, op.block_id, op.direction)

    if isinstance(op, MoveBlockToColumn):
        if op.to_column >= len(section.get("cols") or []):
            raise InvariantViolation(f"Section has no column {op.to_column}.")
        return grid.move_block_to_column(layout, section["id"], column_index, op.to_column, op.block_id)

    if isinstance(op, DuplicateBlock):
        return grid.duplicate_block(layout, section["id"], column_index, op.block_id)

    raise InvariantViolation(f"Unsupported layout operation: {op!r}")


def edit_layout(
    *,
    page_id: str,
    actor_id: str | None,
    operation: Dict[str, Any],
) -> Tuple[Page, bool]:
    """
    Run one editor operation against a stored page layout.

    The result goes through the regular page update, so it is normalized,
    hero-enforced on the home page and sends a published page back to draft.
    """
    op = _operation_adapter.validate_python(operation)
    page = get_page(page_id)
    layout = apply_operation(page.layout, op)
    return update_page(page_id=page.id, actor_id=actor_id, data={"layout": layout})
