from flask import Blueprint, jsonify

from auth import auth_required

user_bp = Blueprint("user_api", __name__, url_prefix="/api/users")


@user_bp.route("/me", methods=["GET"])
@auth_required()
def me(identity):
    """Profile of the token holder.
    ---
    get:
      tags: [Users]
      security:
        - bearerAuth: []
      responses:
        200:
          description: userId, username, email and role
        401:
          description: Authorization token is required
        403:
          description: Invalid or expired token
    """
    return jsonify(
        {
            "userId": identity.user_id,
            "username": identity.username,
            "email": identity.email,
            "role": identity.role,
        }
    )
