from flask import request
from sitebuilder.utils.responses import success
from sitebuilder.application.cms.home import ensure_home
from sitebuilder.application.cms.queries import get_published_by_slug, get_published_by_key
from sitebuilder.application.forms.submit_form import submit_form as submit_form_uc
from sitebuilder.normalizers.page import normalize_page
from . import v1_bp


@v1_bp.route("/pages/<slug>", methods=["GET"])
def get_public_page(slug):
    page = get_published_by_slug(slug.lower())
    return success(normalize_page(page))


@v1_bp.route("/pages/key/<page_key>", methods=["GET"])
def get_public_page_by_key(page_key):
    page = get_published_by_key(page_key.lower())
    return success(normalize_page(page))


@v1_bp.route("/home", methods=["GET"])
def get_public_home():
    return success(normalize_page(ensure_home()))


@v1_bp.route("/forms/submit", methods=["POST"])
def submit_form():
    submission = submit_form_uc(
        data=request.get_json(silent=True) or {},
        user_agent=request.headers.get("User-Agent"),
        ip=request.remote_addr,
    )
    return success({
        "success": True,
        "submission_id": submission.id if submission else None,
    })
