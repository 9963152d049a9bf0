from flask import request
from flask_jwt_extended import jwt_required, get_jwt_identity
from sitebuilder.utils.decorators import roles_required
from sitebuilder.utils.responses import success
from sitebuilder.application.cms.create_page import create_page as create_page_uc
from sitebuilder.application.cms.update_page import update_page as update_page_uc
from sitebuilder.application.cms.publish_page import publish_page as publish_page_uc
from sitebuilder.application.cms.unpublish_page import unpublish_page as unpublish_page_uc
from sitebuilder.application.cms.delete_page import delete_page as delete_page_uc
from sitebuilder.application.cms.home import ensure_home
from sitebuilder.application.cms.queries import get_page as get_page_q, list_pages as list_pages_q
from sitebuilder.normalizers.page import normalize_page, normalize_page_summary
from . import v1_bp


@v1_bp.route("/admin/pages", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_pages():
    include_home = request.args.get("include_home", "false").lower() in ("1", "true", "yes")
    pages = list_pages_q(include_home=include_home)
    return success([normalize_page_summary(p) for p in pages])


@v1_bp.route("/admin/pages", methods=["POST"])
@jwt_required()
@roles_required("admin")
def create_page():
    page = create_page_uc(
        actor_id=get_jwt_identity(),
        data=request.get_json(silent=True) or {},
    )
    return success(normalize_page(page, admin=True), 201)


@v1_bp.route("/admin/pages/<page_id>", methods=["GET"])
@jwt_required()
@roles_required("admin")
def get_page(page_id):
    page = get_page_q(page_id)
    if page.is_home:
        page = ensure_home(actor_id=get_jwt_identity())
    return success(normalize_page(page, admin=True))


@v1_bp.route("/admin/pages/<page_id>", methods=["PUT", "PATCH"])
@jwt_required()
@roles_required("admin")
def update_page(page_id):
    page, changed_to_draft = update_page_uc(
        page_id=page_id,
        actor_id=get_jwt_identity(),
        data=request.get_json(silent=True) or {},
    )
    return success({
        "page": normalize_page(page, admin=True),
        "changed_to_draft": changed_to_draft,
    })


@v1_bp.route("/admin/pages/<page_id>/publish", methods=["POST"])
@jwt_required()
@roles_required("admin")
def publish_page(page_id):
    page = publish_page_uc(page_id=page_id, actor_id=get_jwt_identity())
    return success(normalize_page(page, admin=True))


@v1_bp.route("/admin/pages/<page_id>/unpublish", methods=["POST"])
@jwt_required()
@roles_required("admin")
def unpublish_page(page_id):
    page = unpublish_page_uc(page_id=page_id, actor_id=get_jwt_identity())
    return success(normalize_page(page, admin=True))


@v1_bp.route("/admin/pages/<page_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
def delete_page(page_id):
    delete_page_uc(page_id=page_id, actor_id=get_jwt_identity())
    return success({"deleted": True})
