import re
import unicodedata
from datetime import datetime, time, timedelta, timezone
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import String, cast, or_
from werkzeug.exceptions import NotFound

from sitebuilder.extensions import db
from sitebuilder.models.form_submission import FormSubmission
from sitebuilder.utils.audit import log_action
from sitebuilder.utils.pagination import OffsetMeta, paginate_offset
from sitebuilder.utils.transaction import transactional
from .schemas import SubmissionFilters
from .submit_form import iter_form_blocks

NAME_TERMS = ("nome", "name")
MESSAGE_TERMS = ("mensagem", "message", "coment", "observa", "descricao", "descri")
PHONE_TERMS = ("telefone", "whatsapp", "celular", "fone", "phone")
EMAIL_TERMS = ("email",)

_NON_DIGITS = re.compile(r"\D")


def fold_label(value) -> str:
    """Lower-case and strip accents so 'Descrição' matches 'descricao'."""
    decomposed = unicodedata.normalize("NFD", str(value or ""))
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).lower().strip()


def label_matches(label, terms) -> bool:
    folded = fold_label(label)
    return any(term in folded for term in terms)


def normalize_phone(value) -> Optional[str]:
    """Digits only with the 55 country prefix; too-short numbers are dropped."""
    digits = _NON_DIGITS.sub("", str(value or ""))
    if not digits:
        return None
    if not digits.startswith("55"):
        digits = f"55{digits}"
    return digits if len(digits) >= 12 else None


def form_fields_by_block(layout) -> Dict[str, List[dict]]:
    return {
        block.get("id"): (block.get("data") or {}).get("fields") or []
        for block in iter_form_blocks(layout)
    }


def enrich_submission(submission: FormSubmission, fields: List[dict]) -> Dict[str, Any]:
    """Resolve field labels and pick out the lead's name, message and phone."""
    meta = {field.get("id"): field for field in fields}
    resolved = [
        {
            "id": field_id,
            "label": (meta.get(field_id) or {}).get("label", ""),
            "type": (meta.get(field_id) or {}).get("type"),
            "value": value,
        }
        for field_id, value in (submission.data or {}).items()
    ]

    def first(terms):
        return next((f for f in resolved if label_matches(f["label"], terms)), None)

    name_field = first(NAME_TERMS)
    message_field = first(MESSAGE_TERMS)
    phone_field = first(PHONE_TERMS)
    email_field = first(EMAIL_TERMS)

    lead_name = None
    if name_field and name_field["value"]:
        lead_name = str(name_field["value"]).strip()
    elif email_field and email_field["value"]:
        lead_name = str(email_field["value"]).strip()

    if message_field and isinstance(message_field["value"], str) and message_field["value"].strip():
        lead_message = message_field["value"].strip()
    else:
        texts = [f["value"].strip() for f in resolved if isinstance(f["value"], str) and f["value"].strip()]
        lead_message = max(texts, key=len) if texts else None

    lead_phone = str(phone_field["value"]) if phone_field and phone_field["value"] else None

    return {
        "resolved_fields": resolved,
        "lead_name": lead_name,
        "lead_message": lead_message,
        "lead_phone": lead_phone,
        "lead_phone_normalized": normalize_phone(lead_phone),
    }


def list_submissions(filters: Dict[str, Any]) -> Tuple[List[Tuple[FormSubmission, Dict[str, Any]]], OffsetMeta]:
    """
    Newest-first submissions with their lead details.

    `end_date` is inclusive: the whole final day is covered.
    """
    params = SubmissionFilters.model_validate(filters)
    query = FormSubmission.query

    if params.page_id:
        query = query.filter(FormSubmission.page_id == params.page_id)
    if params.form_block_id:
        query = query.filter(FormSubmission.form_block_id == params.form_block_id)
    if params.search:
        pattern = f"%{params.search}%"
        query = query.filter(
            or_(
                cast(FormSubmission.data, String).ilike(pattern),
                cast(FormSubmission.summary, String).ilike(pattern),
            )
        )
    if params.start_date:
        query = query.filter(
            FormSubmission.created_at >= datetime.combine(params.start_date, time.min, tzinfo=timezone.utc)
        )
    if params.end_date:
        end = datetime.combine(params.end_date + timedelta(days=1), time.min, tzinfo=timezone.utc)
        query = query.filter(FormSubmission.created_at < end)

    query = query.order_by(FormSubmission.created_at.desc(), FormSubmission.id.desc())
    submissions, meta = paginate_offset(query, limit=params.limit, offset=params.offset)

    fields_cache: Dict[str, Dict[str, List[dict]]] = {}
    enriched = []
    for submission in submissions:
        if submission.page_id not in fields_cache:
            layout = submission.page.layout if submission.page else None
            fields_cache[submission.page_id] = form_fields_by_block(layout)
        fields = fields_cache[submission.page_id].get(submission.form_block_id, [])
        enriched.append((submission, enrich_submission(submission, fields)))

    return enriched, meta


def get_submission(submission_id: str) -> FormSubmission:
    submission = db.session.get(FormSubmission, submission_id)
    if submission is None:
        raise NotFound("Submission not found")
    return submission


def delete_submission(submission_id: str, *, actor_id: Optional[str] = None) -> None:
    submission = get_submission(submission_id)
    with transactional():
        db.session.delete(submission)
        log_action(
            action="submission.delete",
            entity_type="form_submission",
            entity_id=submission_id,
            actor_id=actor_id,
            payload={"page_id": submission.page_id, "form_block_id": submission.form_block_id},
        )
