from typing import Any, Dict, Optional

from flask import current_app

from sitebuilder.extensions import db
from sitebuilder.models.audit_log import AuditLog

SYSTEM_ACTOR = "system"


def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: str,
    actor_id: Optional[str] = None,
    payload: Optional[Dict[str, Any]] = None,
) -> AuditLog:
    """
    Stage an audit entry in the current session.

    Call it inside the `transactional()` block of the write it describes so
    both commit or roll back together.
    """
    log = AuditLog(
        actor_id=actor_id or SYSTEM_ACTOR,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        payload=payload or {},
    )
    db.session.add(log)

    current_app.logger.debug("audit %s %s/%s by %s", action, entity_type, entity_id, log.actor_id)
    return log
