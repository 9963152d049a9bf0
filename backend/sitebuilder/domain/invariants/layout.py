from .section import assert_section
from .exceptions import InvariantViolation

def assert_layout(layout, require_hero=False):
    if not isinstance(layout, dict) or layout.get("version") != 2:
        raise InvariantViolation("Layout must be a version 2 document.")

    sections = layout.get("sections") or []
    for section in sections:
        assert_section(section)

    if require_hero:
        assert_single_hero_on_top(sections)


def assert_single_hero_on_top(sections):
    heroes = [
        block
        for section in sections
        for col in section.get("cols") or []
        for block in col.get("blocks") or []
        if block.get("type") == "hero"
    ]
    if len(heroes) != 1:
        raise InvariantViolation(f"Layout must hold exactly one hero block, found {len(heroes)}.")

    first_column = sections[0]["cols"][0].get("blocks") or []
    if not first_column or first_column[0] is not heroes[0]:
        raise InvariantViolation("Hero block must be the first block of the first section.")

    if first_column[0].get("rowIndex") != 0:
        raise InvariantViolation("Hero block must sit on row 0.")
