from typing import Any, Dict, Optional


def normalize_form_submission(submission, lead: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    data = {
        "id": submission.id,
        "page_id": submission.page_id,
        "page_slug": submission.page.slug if submission.page else None,
        "form_block_id": submission.form_block_id,
        "data": submission.data or {},
        "summary": submission.summary,
        "user_agent": submission.user_agent,
        "ip": submission.ip,
        "created_at": submission.created_at.isoformat() if submission.created_at else None,
    }
    if lead is not None:
        data.update(lead)
    return data
