from flask import request
from flask_jwt_extended import jwt_required, get_jwt_identity
from sitebuilder.utils.decorators import roles_required
from sitebuilder.utils.responses import success
from sitebuilder.application.cms.home import ensure_home, update_home
from sitebuilder.normalizers.page import normalize_page
from . import v1_bp


@v1_bp.route("/admin/home", methods=["GET"])
@jwt_required()
@roles_required("admin")
def get_home_admin():
    page = ensure_home(actor_id=get_jwt_identity())
    return success(normalize_page(page, admin=True))


@v1_bp.route("/admin/home", methods=["PUT", "PATCH"])
@jwt_required()
@roles_required("admin")
def update_home_admin():
    page = update_home(
        actor_id=get_jwt_identity(),
        data=request.get_json(silent=True) or {},
    )
    return success({
        "page": normalize_page(page, admin=True),
        "changed_to_draft": False,
    })
