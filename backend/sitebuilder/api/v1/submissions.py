from flask import request
from flask_jwt_extended import jwt_required, get_jwt_identity
from sitebuilder.utils.decorators import roles_required
from sitebuilder.utils.responses import success
from sitebuilder.application.forms.submissions import (
    delete_submission as delete_submission_uc,
    get_submission as get_submission_uc,
    list_submissions as list_submissions_uc,
)
from sitebuilder.normalizers.form_submission import normalize_form_submission
from sitebuilder.normalizers.pagination import normalize_pagination
from . import v1_bp


@v1_bp.route("/admin/form-submissions", methods=["GET"])
@jwt_required()
@roles_required("admin")
def list_form_submissions():
    rows, meta = list_submissions_uc(request.args.to_dict())
    return success(
        normalize_pagination(
            rows,
            lambda row: normalize_form_submission(*row),
            offset=meta,
        )
    )


@v1_bp.route("/admin/form-submissions/<submission_id>", methods=["GET"])
@jwt_required()
@roles_required("admin")
def get_form_submission(submission_id):
    submission = get_submission_uc(submission_id)
    return success(normalize_form_submission(submission))


@v1_bp.route("/admin/form-submissions/<submission_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
def delete_form_submission(submission_id):
    delete_submission_uc(submission_id, actor_id=get_jwt_identity())
    return success({"deleted": True})
