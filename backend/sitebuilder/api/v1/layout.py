from flask import request
from flask_jwt_extended import jwt_required, get_jwt_identity
from sitebuilder.utils.decorators import roles_required
from sitebuilder.utils.responses import success
from sitebuilder.application.cms.edit_layout import edit_layout
from sitebuilder.application.cms.home import normalize_home_layout
from sitebuilder.domain.layout.grid import validate_block_ordering
from sitebuilder.domain.layout.normalize import normalize_page_layout
from sitebuilder.normalizers.page import normalize_page
from . import v1_bp


@v1_bp.route("/admin/layout/normalize", methods=["POST"])
@jwt_required()
@roles_required("admin")
def normalize_layout():
    """Dry run for the editor: nothing is stored."""
    body = request.get_json(silent=True) or {}
    if body.get("home"):
        layout = normalize_home_layout(body.get("layout"))
    else:
        layout = normalize_page_layout(body.get("layout"))

    ordering = {}
    for section in layout["sections"]:
        is_valid, issues = validate_block_ordering(section)
        if not is_valid:
            ordering[section["id"]] = issues

    return success({"layout": layout, "ordering_issues": ordering})


@v1_bp.route("/admin/pages/<page_id>/layout/operations", methods=["POST"])
@jwt_required()
@roles_required("admin")
def apply_layout_operation(page_id):
    page, changed_to_draft = edit_layout(
        page_id=page_id,
        actor_id=get_jwt_identity(),
        operation=request.get_json(silent=True) or {},
    )
    return success({
        "page": normalize_page(page, admin=True),
        "changed_to_draft": changed_to_draft,
    })
