from datetime import datetime, timezone

from sitebuilder.models.page import Page
from sitebuilder.domain.invariants.exceptions import InvariantViolation
from sitebuilder.domain.invariants.page import assert_page
from sitebuilder.domain.lifecycle.page import assert_page_transition
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .queries import get_page


def publish_page(
    *,
    page_id: str,
    actor_id: str | None,
) -> Page:
    """Publish a page; re-publishing refreshes published_at."""
    page = get_page(page_id)

    if page.is_home:
        raise InvariantViolation("The home page is always published.")

    with transactional():
        assert_page_transition(from_status=page.status, to_status="published")

        page.status = "published"
        page.published_at = datetime.now(timezone.utc)

        assert_page(page, publish=True)

        log_action(
            action="page.publish",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={"published_at": page.published_at.isoformat()},
        )

    return page
