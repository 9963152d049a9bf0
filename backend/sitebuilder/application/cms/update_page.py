from datetime import datetime, timezone
from typing import Any, Dict, Tuple

from sitebuilder.models.page import Page, HOME_SLUG
from sitebuilder.domain.invariants.exceptions import InvariantViolation
from sitebuilder.domain.invariants.page import assert_page
from sitebuilder.domain.layout.normalize import normalize_page_layout
from sitebuilder.domain.lifecycle.page import assert_page_transition, status_after_edit
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .home import update_home
from .queries import get_page
from .schemas import PageUpdate

CONTENT_FIELDS = {"slug", "title", "description", "layout"}


def update_page(
    *,
    page_id: str,
    actor_id: str | None,
    data: Dict[str, Any],
) -> Tuple[Page, bool]:
    """
    Update a page and report whether it fell back to draft.

    Rules:
    - page_key is immutable
    - editing the content of a published page sends it back to draft
    - the home page is delegated to `update_home`
    """
    page = get_page(page_id)

    if page.is_home:
        return update_home(actor_id=actor_id, data=data), False

    payload = PageUpdate.model_validate(data)
    provided = payload.model_fields_set

    if payload.page_key and payload.page_key != page.page_key:
        raise InvariantViolation("page_key cannot be changed.")

    if payload.slug == HOME_SLUG:
        raise InvariantViolation("The home slug is reserved.")

    content_changed = bool(CONTENT_FIELDS & provided)
    status_before = page.status

    next_status = status_after_edit(
        current=status_before,
        requested=payload.status,
        content_changed=content_changed,
    )

    changed_fields: list[str] = []

    with transactional():
        if next_status != status_before:
            assert_page_transition(from_status=status_before, to_status=next_status)

        if "slug" in provided and payload.slug and payload.slug != page.slug:
            page.slug = payload.slug
            changed_fields.append("slug")

        if "title" in provided and payload.title and payload.title != page.title:
            page.title = payload.title
            changed_fields.append("title")

        if "description" in provided and payload.description != page.description:
            page.description = payload.description
            changed_fields.append("description")

        if "layout" in provided:
            page.layout = normalize_page_layout(payload.layout)
            changed_fields.append("layout")

        page.status = next_status
        if next_status == "published":
            page.published_at = payload.published_at or page.published_at or datetime.now(timezone.utc)
        elif "published_at" in provided:
            page.published_at = payload.published_at
        elif not (status_before == "published" and content_changed):
            page.published_at = None

        assert_page(page, publish=next_status == "published")

        log_action(
            action="page.update",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={
                "fields": changed_fields,
                "status": page.status,
            },
        )

    changed_to_draft = status_before == "published" and page.status == "draft"
    return page, changed_to_draft
