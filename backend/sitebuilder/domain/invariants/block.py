from .exceptions import InvariantViolation

def assert_block(block):
    if len(block.get("id") or "") < 6:
        raise InvariantViolation(f"Block id is missing or too short: {block.get('id')!r}")

    if "data" not in block:
        raise InvariantViolation(f"Block {block['id']} has no data.")

    if block.get("type") == "hero" and not block.get("isLocked"):
        raise InvariantViolation(f"Hero block {block['id']} must be locked.")


def assert_row_order(blocks):
    rows = [block.get("rowIndex") for block in blocks]
    if not rows:
        return

    if any(not isinstance(row, int) or row < 0 for row in rows):
        raise InvariantViolation(f"Block rows must be integers >= 0: {rows}")

    if any(later <= earlier for earlier, later in zip(rows, rows[1:])):
        raise InvariantViolation(
            f"Block rows are not strictly increasing: {rows}"
        )
