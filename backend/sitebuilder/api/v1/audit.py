from flask import request
from flask_jwt_extended import jwt_required
from sitebuilder.utils.decorators import roles_required
from sitebuilder.utils.pagination import paginate_cursor
from sitebuilder.utils.responses import success
from sitebuilder.models.audit_log import AuditLog
from sitebuilder.normalizers.audit import normalize_audit_log
from sitebuilder.normalizers.pagination import normalize_pagination
from . import v1_bp


@v1_bp.route("/admin/audit", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_audit_logs():
    limit = min(request.args.get("limit", 20, type=int), 100)

    query = AuditLog.query

    # Optional filters
    if action := request.args.get("action"):
        query = query.filter(AuditLog.action == action)

    if entity_type := request.args.get("entity_type"):
        query = query.filter(AuditLog.entity_type == entity_type)

    if entity_id := request.args.get("entity_id"):
        query = query.filter(AuditLog.entity_id == entity_id)

    logs, meta = paginate_cursor(
        query,
        model=AuditLog,
        limit=limit,
        cursor=request.args.get("cursor"),
    )
    return success(normalize_pagination(logs, normalize_audit_log, cursor=meta))
