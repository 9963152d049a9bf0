"""Bulk layout repairs run from the `flask layout` command group."""
import copy
from typing import Dict, List

from flask import current_app

from sitebuilder.models.page import Page
from sitebuilder.domain.invariants.exceptions import LayoutValidationError
from sitebuilder.domain.layout.hero import migrate_hero_v1_to_v2
from sitebuilder.domain.layout.normalize import iter_columns, normalize_page_layout
from sitebuilder.utils.audit import SYSTEM_ACTOR, log_action
from sitebuilder.utils.transaction import transactional
from .home import normalize_home_layout


def _normalize_for(page: Page, layout) -> dict:
    return normalize_home_layout(layout) if page.is_home else normalize_page_layout(layout)


def normalize_all_layouts(*, dry_run: bool = False) -> Dict[str, List[str]]:
    """
    Re-normalize every stored layout.

    Pages whose layout no longer validates are reported, not modified.
    """
    report: Dict[str, List[str]] = {"normalized": [], "invalid": []}

    with transactional():
        for page in Page.query.order_by(Page.slug).all():
            try:
                layout = _normalize_for(page, page.layout)
            except LayoutValidationError as exc:
                current_app.logger.warning("Layout of %s is invalid: %s", page.slug, exc.issues[:3])
                report["invalid"].append(page.slug)
                continue

            report["normalized"].append(page.slug)
            if not dry_run:
                page.layout = layout
                log_action(
                    action="layout.normalize",
                    entity_type="page",
                    entity_id=page.id,
                    actor_id=SYSTEM_ACTOR,
                )

    return report


def _migrate_blocks(blocks) -> int:
    migrated = 0
    for block in blocks or []:
        data = block.get("data") or {}
        if block.get("type") == "hero" and data.get("version") != 2:
            block["data"] = migrate_hero_v1_to_v2(data)
            migrated += 1
    return migrated


def migrate_heroes(*, dry_run: bool = False) -> List[str]:
    """Convert legacy flat hero data to the composite V2 form. Returns the touched slugs."""
    touched: List[str] = []

    with transactional():
        for page in Page.query.order_by(Page.slug).all():
            layout = copy.deepcopy(page.layout or {})
            count = sum(_migrate_blocks(col.get("blocks")) for col in iter_columns(layout))
            if not count:
                continue

            touched.append(page.slug)
            current_app.logger.info("Migrating %d hero block(s) on %s", count, page.slug)
            if not dry_run:
                page.layout = _normalize_for(page, layout)
                log_action(
                    action="layout.migrate_heroes",
                    entity_type="page",
                    entity_id=page.id,
                    actor_id=SYSTEM_ACTOR,
                    payload={"count": count},
                )

    return touched
