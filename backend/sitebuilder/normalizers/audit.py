from typing import Dict, Any
from sitebuilder.models.audit_log import AuditLog
from sitebuilder.utils.audit import SYSTEM_ACTOR


def normalize_audit_log(log: AuditLog) -> Dict[str, Any]:
    return {
        "id": log.id,
        "action": log.action,
        "actor_id": log.actor_id,
        "by_system": log.actor_id == SYSTEM_ACTOR,
        "entity": {"type": log.entity_type, "id": log.entity_id},
        "entity_id": log.entity_id,
        "payload": log.payload or {},
        "created_at": log.created_at.isoformat(),
    }
