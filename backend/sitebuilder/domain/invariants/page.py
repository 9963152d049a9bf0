from .layout import assert_layout
from .exceptions import InvariantViolation

def assert_page(page, publish=False):
    if publish and not (page.title or "").strip():
        raise InvariantViolation("Cannot publish page without a title.")

    assert_layout(page.layout, require_hero=page.is_home)
