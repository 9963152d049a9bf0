from flask import request
from flask_jwt_extended import jwt_required, get_jwt_identity
from sitebuilder.utils.decorators import roles_required
from sitebuilder.utils.responses import success
from sitebuilder.application.blog.create_post import create_post as create_post_uc
from sitebuilder.application.blog.update_post import update_post as update_post_uc
from sitebuilder.application.blog.publish_post import publish_post as publish_post_uc
from sitebuilder.application.blog.unpublish_post import unpublish_post as unpublish_post_uc
from sitebuilder.application.blog.delete_post import delete_post as delete_post_uc
from sitebuilder.application.blog.record_view import record_view
from sitebuilder.application.blog.queries import (
    get_post as get_post_q,
    get_published_by_slug,
    list_featured,
    list_posts as list_posts_q,
    list_published,
)
from sitebuilder.normalizers.pagination import normalize_pagination
from sitebuilder.normalizers.post import normalize_post, normalize_post_card
from . import v1_bp


# -------------------------------------------------
# Admin
# -------------------------------------------------
@v1_bp.route("/admin/posts", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_posts():
    return success([normalize_post(p, admin=True) for p in list_posts_q()])


@v1_bp.route("/admin/posts", methods=["POST"])
@jwt_required()
@roles_required("admin")
def create_post():
    post = create_post_uc(
        actor_id=get_jwt_identity(),
        data=request.get_json(silent=True) or {},
    )
    return success(normalize_post(post, admin=True), 201)


@v1_bp.route("/admin/posts/<post_id>", methods=["GET"])
@jwt_required()
@roles_required("admin")
def get_post(post_id):
    return success(normalize_post(get_post_q(post_id), admin=True))


@v1_bp.route("/admin/posts/<post_id>", methods=["PUT", "PATCH"])
@jwt_required()
@roles_required("admin")
def update_post(post_id):
    post, changed_to_draft = update_post_uc(
        post_id=post_id,
        actor_id=get_jwt_identity(),
        data=request.get_json(silent=True) or {},
    )
    return success({
        "post": normalize_post(post, admin=True),
        "changed_to_draft": changed_to_draft,
    })


@v1_bp.route("/admin/posts/<post_id>/publish", methods=["POST"])
@jwt_required()
@roles_required("admin")
def publish_post(post_id):
    post = publish_post_uc(post_id=post_id, actor_id=get_jwt_identity())
    return success(normalize_post(post, admin=True))


@v1_bp.route("/admin/posts/<post_id>/unpublish", methods=["POST"])
@jwt_required()
@roles_required("admin")
def unpublish_post(post_id):
    post = unpublish_post_uc(post_id=post_id, actor_id=get_jwt_identity())
    return success(normalize_post(post, admin=True))


@v1_bp.route("/admin/posts/<post_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
def delete_post(post_id):
    delete_post_uc(post_id=post_id, actor_id=get_jwt_identity())
    return success({"deleted": True})


# -------------------------------------------------
# Public
# -------------------------------------------------
@v1_bp.route("/posts", methods=["GET"])
def list_public_posts():
    posts, meta = list_published(request.args.to_dict())
    return success(normalize_pagination(posts, normalize_post_card, offset=meta))


@v1_bp.route("/posts/featured", methods=["GET"])
def list_featured_posts():
    limit = request.args.get("limit", default=3, type=int)
    return success([normalize_post_card(p) for p in list_featured(limit)])


@v1_bp.route("/posts/<slug>", methods=["GET"])
def get_public_post(slug):
    return success(normalize_post(get_published_by_slug(slug.lower())))


@v1_bp.route("/posts/<post_id>/view", methods=["POST"])
def record_post_view(post_id):
    body, status = success({"views": record_view(post_id)})
    body.headers["Cache-Control"] = "no-store"
    return body, status
