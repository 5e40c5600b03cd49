"""OpenAPI document for the API, served at /api-docs.json with a Swagger UI
page at /api-docs.

Paths come from the YAML block after ``---`` in each view's docstring;
request bodies reference the marshmallow schemas in ``schemas.py``.
"""
from apispec import APISpec
from apispec.ext.marshmallow import MarshmallowPlugin
from apispec_webframeworks.flask import FlaskPlugin
from flask import Blueprint, current_app, jsonify

from schemas import (
    ApplicationSchema,
    ApplicationStatusSchema,
    ChatMessageSchema,
    LoginSchema,
    MovieSchema,
    RegisterSchema,
)

SPEC_KEY = "apispec"

docs_bp = Blueprint("docs", __name__)

SWAGGER_UI_PAGE = """<!DOCTYPE html>
<html>
  <head>
    <title>Movie Rental API</title>
    <link rel="stylesheet" href="https://unpkg.com/swagger-ui-dist@5/swagger-ui.css">
  </head>
  <body>
    <div id="swagger-ui"></div>
    <script src="https://unpkg.com/swagger-ui-dist@5/swagger-ui-bundle.js"></script>
    <script>
      window.onload = function () {
        SwaggerUIBundle({url: "/api-docs.json", dom_id: "#swagger-ui"});
      };
    </script>
  </body>
</html>
"""


def build_spec(app):
    spec = APISpec(
        title="Movie Rental API",
        version="1.0.0",
        openapi_version="3.0.3",
        info={"description": "API for managing movies, user authentication, and application processes."},
        plugins=[FlaskPlugin(), MarshmallowPlugin()],
    )
    spec.components.security_scheme("bearerAuth", {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"})
    spec.components.schema("Register", schema=RegisterSchema)
    spec.components.schema("Login", schema=LoginSchema)
    spec.components.schema("Movie", schema=MovieSchema)
    spec.components.schema("Application", schema=ApplicationSchema)
    spec.components.schema("ApplicationStatus", schema=ApplicationStatusSchema)
    spec.components.schema("ChatMessage", schema=ChatMessageSchema)

    for endpoint, view in app.view_functions.items():
        if endpoint.startswith("docs.") or "---" not in (view.__doc__ or ""):
            continue
        spec.path(view=view, app=app)
    return spec


def _spec():
    app = current_app._get_current_object()
    if SPEC_KEY not in app.extensions:
        app.extensions[SPEC_KEY] = build_spec(app)
    return app.extensions[SPEC_KEY]


@docs_bp.route("/api-docs.json", methods=["GET"])
def openapi_json():
    return jsonify(_spec().to_dict())


@docs_bp.route("/api-docs", methods=["GET"])
def swagger_ui():
    return SWAGGER_UI_PAGE
