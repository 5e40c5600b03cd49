from typing import Any, Dict

from marshmallow import EXCLUDE, Schema, fields, pre_load, validate

from models import APPLICATION_STATUSES, MOVIE_STATUSES, USER_ROLES

_required = {"required": "Field is required", "null": "Field may not be null"}


class RegisterSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    username = fields.Str(required=True, validate=validate.Length(min=1), error_messages=_required)
    password = fields.Str(required=True, validate=validate.Length(min=1), error_messages=_required)
    role = fields.Str(load_default="user", validate=validate.OneOf(USER_ROLES))

    @pre_load
    def strip_username(self, data: Dict[str, Any], **kwargs):
        username = data.get("username")
        if isinstance(username, str):
            data["username"] = username.strip()
        # an explicit null or empty role falls back to the default
        if not data.get("role"):
            data.pop("role", None)
        return data


class LoginSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    username = fields.Str(required=True, validate=validate.Length(min=1), error_messages=_required)
    password = fields.Str(required=True, validate=validate.Length(min=1), error_messages=_required)


class MovieSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.Str(required=True, validate=validate.Length(min=1))
    year = fields.Int(required=True, strict=True, validate=validate.Range(min=1888))
    genre = fields.Str(required=True, validate=validate.Length(min=1))
    rating = fields.Float(required=True, validate=validate.Range(min=0, max=10))
    status = fields.Str(required=True, validate=validate.OneOf(MOVIE_STATUSES))


class ApplicationSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    applicantName = fields.Str(required=True, validate=validate.Length(min=1))
    applicantEmail = fields.Email(required=True)
    description = fields.Str(required=True, validate=validate.Length(min=1))


class ApplicationStatusSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    status = fields.Str(required=True, validate=validate.OneOf(APPLICATION_STATUSES))


class ChatMessageSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    message = fields.Str(required=True, validate=validate.Length(min=1))

    @pre_load
    def strip_message(self, data: Dict[str, Any], **kwargs):
        message = data.get("message")
        if isinstance(message, str):
            data["message"] = message.strip()
        return data


register_schema = RegisterSchema()
login_schema = LoginSchema()
movie_schema = MovieSchema()
application_schema = ApplicationSchema()
application_status_schema = ApplicationStatusSchema()
chat_message_schema = ChatMessageSchema()
