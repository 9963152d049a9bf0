from sitebuilder.models.page import Page
from sitebuilder.domain.invariants.exceptions import InvariantViolation
from sitebuilder.domain.lifecycle.page import assert_page_transition
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .queries import get_page


def unpublish_page(
    *,
    page_id: str,
    actor_id: str | None,
) -> Page:
    page = get_page(page_id)

    if page.is_home:
        raise InvariantViolation("The home page cannot be unpublished.")

    with transactional():
        assert_page_transition(from_status=page.status, to_status="draft")

        page.status = "draft"
        page.published_at = None

        log_action(
            action="page.unpublish",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
        )

    return page
