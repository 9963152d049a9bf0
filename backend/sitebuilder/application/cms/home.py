"""
The home page is a singleton: always published, always hero-first.

It is created on demand and repaired whenever it is read or written.
"""
from datetime import datetime, timezone
from typing import Any, Dict

from flask import current_app

from sitebuilder.extensions import db
from sitebuilder.models.page import Page, HOME_PAGE_KEY, HOME_SLUG
from sitebuilder.domain.invariants.page import assert_page
from sitebuilder.domain.layout.hero import ensure_hero_at_top
from sitebuilder.domain.layout.normalize import normalize_page_layout
from sitebuilder.domain.layout.fields import utc_now_iso
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.transaction import transactional
from .queries import find_home
from .schemas import HomeUpdate

HOME_TITLE = "Página Inicial"
HOME_DESCRIPTION = "Página inicial do site"


def normalize_home_layout(layout, now=None) -> dict:
    now = now or utc_now_iso()
    return ensure_hero_at_top(
        normalize_page_layout(layout, now),
        now,
        placeholder_image=current_app.config["HERO_PLACEHOLDER_IMAGE"],
    )


def _without_timestamps(value):
    if isinstance(value, dict):
        return {k: _without_timestamps(v) for k, v in value.items() if k != "updatedAt"}
    if isinstance(value, list):
        return [_without_timestamps(v) for v in value]
    return value


def ensure_home(*, actor_id: str | None = None) -> Page:
    """Create the home page, or repair it when it drifted from its invariants."""
    existing = find_home()
    layout = normalize_home_layout(existing.layout if existing else None)

    if existing is None:
        page = Page()
        page.slug = HOME_SLUG
        page.page_key = HOME_PAGE_KEY
        page.title = HOME_TITLE
        page.description = HOME_DESCRIPTION
        page.layout = layout
        page.status = "published"
        page.published_at = datetime.now(timezone.utc)

        with transactional():
            assert_page(page, publish=True)
            db.session.add(page)
            db.session.flush()
            log_action(action="home.create", entity_type="page", entity_id=page.id, actor_id=actor_id)

        current_app.logger.info("Home page created (%s)", page.id)
        return page

    needs_update = (
        existing.slug != HOME_SLUG
        or existing.page_key != HOME_PAGE_KEY
        or existing.status != "published"
        or existing.published_at is None
        or _without_timestamps(existing.layout) != _without_timestamps(layout)
    )
    if not needs_update:
        return existing

    with transactional():
        existing.slug = HOME_SLUG
        existing.page_key = HOME_PAGE_KEY
        existing.title = existing.title or HOME_TITLE
        existing.layout = layout
        existing.status = "published"
        existing.published_at = existing.published_at or datetime.now(timezone.utc)

        assert_page(existing, publish=True)
        log_action(action="home.repair", entity_type="page", entity_id=existing.id, actor_id=actor_id)

    current_app.logger.info("Home page repaired (%s)", existing.id)
    return existing


def update_home(*, actor_id: str | None, data: Dict[str, Any]) -> Page:
    payload = HomeUpdate.model_validate(data)
    provided = payload.model_fields_set
    page = ensure_home(actor_id=actor_id)

    with transactional():
        if payload.title:
            page.title = payload.title
        if "description" in provided:
            page.description = payload.description
        page.layout = normalize_home_layout(payload.layout if "layout" in provided else page.layout)
        page.status = "published"
        page.published_at = datetime.now(timezone.utc)

        assert_page(page, publish=True)

        log_action(
            action="home.update",
            entity_type="page",
            entity_id=page.id,
            actor_id=actor_id,
            payload={"fields": sorted(provided)},
        )

    return page
