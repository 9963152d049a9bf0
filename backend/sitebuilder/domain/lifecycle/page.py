from typing import Set
from sitebuilder.domain.invariants.exceptions import InvariantViolation

DRAFT = "draft"
PUBLISHED = "published"

ALLOWED_PAGE_TRANSITIONS: dict[str, Set[str]] = {
    DRAFT: {PUBLISHED},
    # re-publishing refreshes published_at
    PUBLISHED: {DRAFT, PUBLISHED},
}


def assert_page_transition(*, from_status: str, to_status: str) -> None:
    allowed = ALLOWED_PAGE_TRANSITIONS.get(from_status, set())

    if to_status not in allowed:
        raise InvariantViolation(
            f"Illegal page transition: {from_status} → {to_status}"
        )


def status_after_edit(*, current: str, requested: str | None, content_changed: bool) -> str:
    """
    Status a page ends up in after an admin edit.

    Live content is never changed in place: editing a published page sends
    it back to draft whatever status the request asked for.
    """
    if current == PUBLISHED and content_changed:
        return DRAFT
    return requested or current
