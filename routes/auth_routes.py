from flask import Blueprint, jsonify

from routes.common import load_payload
from schemas import login_schema, register_schema
from services.registry import get_services

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.route("/register", methods=["POST"])
def register():
    """Register a new user.
    ---
    post:
      tags: [Auth]
      requestBody:
        required: true
        content:
          application/json:
            schema: RegisterSchema
      responses:
        201:
          description: User registered, returns userId
        400:
          description: Missing fields or user already exists
    """
    payload = load_payload(register_schema)
    user_id = get_services().users.register(
        payload["username"], payload["password"], payload.get("role")
    )
    return jsonify({"message": "User registered successfully", "userId": user_id}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    """Log in and receive a bearer token.
    ---
    post:
      tags: [Auth]
      requestBody:
        required: true
        content:
          application/json:
            schema: LoginSchema
      responses:
        200:
          description: Login successful, returns token
        401:
          description: Invalid credentials
        404:
          description: User not found
    """
    payload = load_payload(login_schema)
    token = get_services().users.login(payload["username"], payload["password"])
    return jsonify({"message": "Login successful", "token": token})
