from typing import Any, Dict, Iterator, Optional

from flask import current_app
from werkzeug.exceptions import NotFound

from sitebuilder.extensions import db
from sitebuilder.models.form_submission import FormSubmission
from sitebuilder.models.page import Page
from sitebuilder.domain.invariants.exceptions import InvariantViolation
from sitebuilder.domain.layout.normalize import iter_columns
from sitebuilder.utils.transaction import transactional
from .schemas import FormSubmissionInput


def iter_form_blocks(layout: dict) -> Iterator[dict]:
    """Yield the form blocks of a V2 layout (or a legacy flat one)."""
    for col in iter_columns(layout):
        for block in col.get("blocks") or []:
            if block.get("type") == "form":
                yield block


def find_form_block(layout: dict, block_id: str) -> Optional[dict]:
    return next((b for b in iter_form_blocks(layout) if b.get("id") == block_id), None)


def _is_blank(value) -> bool:
    return value is None or value is False or (isinstance(value, str) and not value.strip()) or value == []


def submit_form(
    *,
    data: Dict[str, Any],
    user_agent: Optional[str] = None,
    ip: Optional[str] = None,
) -> Optional[FormSubmission]:
    """
    Store a public form submission.

    A filled honeypot is accepted and discarded: the caller gets None.
    """
    payload = FormSubmissionInput.model_validate(data)

    if payload.honeypot:
        current_app.logger.info("Honeypot triggered on %s", payload.page_slug)
        return None

    page = Page.query.filter_by(slug=payload.page_slug, status="published").first()
    if page is None:
        raise NotFound("Page not found")

    form_block = find_form_block(page.layout, payload.form_block_id)
    if form_block is None:
        raise NotFound("Form not found on this page")

    form = form_block.get("data") or {}
    for field in form.get("fields") or []:
        if field.get("required") and _is_blank(payload.form_data.get(field.get("id"))):
            raise InvariantViolation(f'Field "{field.get("label")}" is required.')

    summary = {
        key: payload.form_data[key]
        for key in form.get("storeSummaryKeys") or []
        if not _is_blank(payload.form_data.get(key))
    }

    submission = FormSubmission()
    submission.page_id = page.id
    submission.form_block_id = payload.form_block_id
    submission.data = payload.form_data
    submission.summary = summary or None
    submission.user_agent = (user_agent or "")[:512] or None
    submission.ip = ip

    with transactional():
        db.session.add(submission)

    return submission
