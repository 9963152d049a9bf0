from .block import assert_block, assert_row_order
from .exceptions import InvariantViolation

def assert_section(section):
    columns = section.get("columns")

    if not isinstance(columns, int) or not 1 <= columns <= 3:
        raise InvariantViolation(f"Section {section.get('id')} must have 1 to 3 columns, got {columns!r}.")

    cols = section.get("cols") or []
    if len(cols) != columns:
        raise InvariantViolation(
            f"Section {section.get('id')} declares {columns} columns but holds {len(cols)}."
        )

    for col in cols:
        blocks = col.get("blocks") or []
        assert_row_order(blocks)

        for block in blocks:
            assert_block(block)
