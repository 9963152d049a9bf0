from sitebuilder.extensions import db
from sitebuilder.domain.invariants.exceptions import InvariantViolation
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .queries import get_page


def delete_page(
    *,
    page_id: str,
    actor_id: str | None,
) -> None:
    """Hard-delete a page; its form submissions go with it."""
    page = get_page(page_id)

    if page.is_home:
        raise InvariantViolation("The home page cannot be removed.")

    with transactional():
        slug = page.slug
        db.session.delete(page)

        log_action(
            action="page.delete",
            entity_type="page",
            entity_id=page_id,
            actor_id=actor_id,
            payload={"slug": slug},
        )
