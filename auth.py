import base64
import hashlib
import hmac
from functools import wraps

import bcrypt
from flask import jsonify, request
from flask_jwt_extended import create_access_token, get_jwt, verify_jwt_in_request

from errors import ForbiddenError
from models import Identity


def _peppered(password, pepper):
    raw = password.encode("utf-8")
    if pepper:
        # fixed-length digest keeps the pepper inside bcrypt's 72-byte window
        digest = hmac.new(pepper.encode("utf-8"), raw, hashlib.sha256).digest()
        raw = base64.b64encode(digest)
    # newer bcrypt releases reject input over 72 bytes
    return raw[:72]


def hash_password(password, pepper=""):
    # bcrypt stores the salt inside the hash
    return bcrypt.hashpw(_peppered(password, pepper), bcrypt.gensalt()).decode("utf-8")


def verify_password(entered_password, stored_hash, pepper=""):
    try:
        return bcrypt.checkpw(_peppered(entered_password, pepper), stored_hash.encode("utf-8"))
    except ValueError:
        return False


def issue_token(user):
    claims = {"userId": user.id, "username": user.username, "role": user.role}
    return create_access_token(identity=user.id, additional_claims=claims)


def current_identity():
    claims = get_jwt()
    return Identity(
        user_id=claims.get("userId") or claims.get("sub"),
        username=claims.get("username"),
        role=claims.get("role", "user"),
        email=claims.get("email"),
    )


def auth_required(roles=None):
    """Require a bearer token and hand the decoded Identity to the view.

    A missing Authorization header is answered with 401. A header that is
    present but not a valid, unexpired bearer token gets 403 (see
    register_jwt_callbacks).
    """

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            identity = current_identity()
            if roles and identity.role not in roles:
                raise ForbiddenError("Access denied")
            kwargs["identity"] = identity
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def register_jwt_callbacks(jwt):
    @jwt.unauthorized_loader
    def missing_token(reason):
        # a header we cannot read as a bearer token counts as an invalid token
        if request.headers.get("Authorization"):
            return jsonify({"message": "Invalid or expired token"}), 403
        return jsonify({"message": "Authorization token is required"}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({"message": "Invalid or expired token"}), 403

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({"message": "Invalid or expired token"}), 403
