from functools import wraps
from flask import jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity

def roles_required(*allowed_roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            claims = get_jwt()

            if claims.get("role") not in allowed_roles:
                return jsonify({"error": "Insufficient permissions"}), 403

            return fn(*args, **kwargs)
        return wrapper
    return decorator


def current_actor_id():
    """Identity of the authenticated caller; only valid inside jwt_required views."""
    return get_jwt_identity()


def current_actor_email():
    return get_jwt().get("email")
