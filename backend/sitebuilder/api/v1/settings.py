from flask import request
from flask_jwt_extended import jwt_required, get_jwt_identity
from sitebuilder.utils.decorators import roles_required
from sitebuilder.utils.responses import success
from sitebuilder.application.settings.site_settings import get_site_settings, update_site_settings
from sitebuilder.normalizers.site_settings import normalize_site_settings
from . import v1_bp


@v1_bp.route("/admin/site-settings", methods=["GET"])
@jwt_required()
@roles_required("admin")
def get_site_settings_admin():
    return success(normalize_site_settings(get_site_settings(), admin=True))


@v1_bp.route("/admin/site-settings", methods=["PUT", "PATCH"])
@jwt_required()
@roles_required("admin")
def update_site_settings_admin():
    settings = update_site_settings(
        actor_id=get_jwt_identity(),
        data=request.get_json(silent=True) or {},
    )
    return success(normalize_site_settings(settings, admin=True))


@v1_bp.route("/site-settings", methods=["GET"])
def get_public_site_settings():
    return success(normalize_site_settings(get_site_settings()))
