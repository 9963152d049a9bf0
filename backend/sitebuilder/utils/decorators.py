from functools import wraps
from flask import jsonify
from flask_jwt_extended import get_jwt

ADMIN_ROLE = "admin"


def role_claims(role: str = ADMIN_ROLE) -> dict:
    """Extra JWT claims carried by tokens minted for the admin panel."""
    return {"role": role}


def roles_required(*allowed_roles):
    """
    Reject the request with 403 unless the token's `role` claim is allowed.

    Must sit below `@jwt_required()`.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if get_jwt().get("role") in allowed_roles:
                return fn(*args, **kwargs)

            return jsonify({
                "data": None,
                "error": {"message": "Insufficient permissions"}
            }), 403
        return wrapper
    return decorator
