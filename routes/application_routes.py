from flask import Blueprint, jsonify, request

from auth import auth_required
from database import to_object_id
from errors import ValidationError
from routes.common import load_payload, store_upload
from schemas import application_schema, application_status_schema
from services.registry import get_services

application_bp = Blueprint("applications", __name__, url_prefix="/api/applications")


def _dump(applications):
    return jsonify([application.to_dict() for application in applications])


@application_bp.route("", methods=["POST"])
@auth_required()
def create_application(identity):
    """Submit a job application.
    ---
    post:
      tags: [Applications]
      security:
        - bearerAuth: []
      requestBody:
        required: true
        content:
          application/json:
            schema: ApplicationSchema
      responses:
        201:
          description: Application stored with status "new"
        400:
          description: Invalid input
    """
    payload = load_payload(application_schema)
    inserted_id = get_services().applications.create_application(payload, identity.user_id)
    return jsonify({"insertedId": inserted_id}), 201


@application_bp.route("", methods=["GET"])
@auth_required()
def list_applications(identity):
    """List applications, optionally filtered by email.
    ---
    get:
      tags: [Applications]
      security:
        - bearerAuth: []
      parameters:
        - {in: query, name: email, required: false, schema: {type: string}}
      responses:
        200:
          description: Array of applications
    """
    applications = get_services().applications
    email = request.args.get("email")
    if email:
        return _dump(applications.list_by_email(email))
    return _dump(applications.list_applications())


@application_bp.route("/user", methods=["GET"])
@auth_required()
def list_my_applications(identity):
    """
    ---
    get:
      tags: [Applications]
      summary: Applications submitted by the caller
      security:
        - bearerAuth: []
      responses:
        200:
          description: Array of applications
    """
    if not identity.user_id:
        raise ValidationError("User ID missing from token")
    return _dump(get_services().applications.list_by_user(identity.user_id))


@application_bp.route("/<application_id>/status", methods=["PUT"])
@auth_required()
def update_status(application_id, identity):
    """
    ---
    put:
      tags: [Applications]
      summary: Set an application's status
      security:
        - bearerAuth: []
      parameters:
        - {in: path, name: application_id, required: true, schema: {type: string}}
      requestBody:
        required: true
        content:
          application/json:
            schema: ApplicationStatusSchema
      responses:
        200:
          description: Status updated
        400:
          description: Invalid status or malformed id
        404:
          description: Application not found
    """
    to_object_id(application_id, "application ID")
    payload = load_payload(application_status_schema)
    get_services().applications.update_status(application_id, payload["status"])
    return jsonify({"message": "Application status updated successfully"})


@application_bp.route("/<application_id>/upload", methods=["POST"])
@auth_required()
def upload_image(application_id, identity):
    """
    ---
    post:
      tags: [Applications]
      summary: Attach an image to an application
      security:
        - bearerAuth: []
      parameters:
        - {in: path, name: application_id, required: true, schema: {type: string}}
      requestBody:
        required: true
        content:
          multipart/form-data:
            schema:
              type: object
              properties:
                image: {type: string, format: binary}
      responses:
        200:
          description: Image stored, returns its path
        400:
          description: Missing, oversized or non-image file
        404:
          description: Application not found
    """
    to_object_id(application_id, "application ID")
    applications = get_services().applications
    path = store_upload("image", lambda p: applications.attach_image(application_id, p))
    return jsonify({"message": "Image uploaded successfully", "path": path})
