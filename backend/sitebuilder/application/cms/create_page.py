from datetime import datetime, timezone
from typing import Any, Dict

from sitebuilder.extensions import db
from sitebuilder.models.page import Page, HOME_PAGE_KEY, HOME_SLUG
from sitebuilder.domain.invariants.exceptions import InvariantViolation
from sitebuilder.domain.invariants.page import assert_page
from sitebuilder.domain.layout.normalize import normalize_page_layout
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .schemas import PageInput


def create_page(
    *,
    actor_id: str | None,
    data: Dict[str, Any],
) -> Page:
    """
    Create a page from an editor payload.

    - slug and page key are trimmed and lower-cased
    - the home page has its own endpoint and cannot be created here
    - the layout is stored in its canonical V2 form
    - a duplicate slug surfaces as IntegrityError (409)
    """
    payload = PageInput.model_validate(data)

    slug = payload.slug
    page_key = (payload.page_key or "").strip().lower() or None
    if slug == HOME_SLUG or page_key == HOME_PAGE_KEY:
        raise InvariantViolation("Use the home endpoint to create or edit the home page.")

    page = Page()
    page.slug = slug
    page.page_key = page_key
    page.title = payload.title
    page.description = payload.description
    page.layout = normalize_page_layout(payload.layout)
    page.status = payload.status
    if payload.status == "published":
        page.published_at = payload.published_at or datetime.now(timezone.utc)

    with transactional():
        assert_page(page, publish=page.status == "published")

        db.session.add(page)
        db.session.flush()  # ensures page.id is available

        log_action(
            action="page.create",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={
                "title": page.title,
                "slug": page.slug,
                "status": page.status,
            },
        )

    return page
