from flask import current_app, request
from marshmallow import ValidationError as SchemaError

from errors import NotFoundError, ValidationError
from uploads import discard, save_image


def load_payload(schema):
    """Validate the JSON body against a marshmallow schema."""
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValidationError("JSON object body required")
    try:
        return schema.load(data)
    except SchemaError as exc:
        raise ValidationError.from_schema_error(exc)


def store_upload(field, attach):
    """Save the image in ``field`` and hand its path to ``attach``.

    The file is removed again when ``attach`` reports the owner missing, so no
    orphan path is left behind.
    """
    path = save_image(
        request.files.get(field),
        current_app.config["UPLOAD_FOLDER"],
        current_app.config["MAX_UPLOAD_BYTES"],
    )
    try:
        attach(path)
    except NotFoundError:
        discard(path)
        raise
    return path
