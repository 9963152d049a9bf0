from typing import List

from sqlalchemy import or_
from werkzeug.exceptions import NotFound

from sitebuilder.extensions import db
from sitebuilder.models.page import Page, HOME_PAGE_KEY, HOME_SLUG


def get_page(page_id: str) -> Page:
    page = db.session.get(Page, page_id)
    if page is None:
        raise NotFound("Page not found")
    return page


def find_home() -> Page | None:
    return Page.query.filter(
        or_(Page.slug == HOME_SLUG, Page.page_key == HOME_PAGE_KEY)
    ).first()


def list_pages(*, include_home: bool = False) -> List[Page]:
    query = Page.query
    if not include_home:
        query = query.filter(
            Page.slug != HOME_SLUG,
            or_(Page.page_key.is_(None), Page.page_key != HOME_PAGE_KEY),
        )
    return query.order_by(Page.updated_at.desc(), Page.id.desc()).all()


def get_published_by_slug(slug: str) -> Page:
    """The home page is served by its own route, never as a generic page."""
    if slug == HOME_SLUG:
        raise NotFound("Page not found")

    page = Page.query.filter_by(slug=slug, status="published").first()
    if page is None or page.is_home:
        raise NotFound("Page not found")
    return page


def get_published_by_key(page_key: str) -> Page:
    if page_key == HOME_PAGE_KEY:
        raise NotFound("Page not found")

    page = Page.query.filter_by(page_key=page_key, status="published").first()
    if page is None:
        raise NotFound("Page not found")
    return page
