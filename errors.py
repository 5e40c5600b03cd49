class ApiError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None, errors=None, status_code=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.errors = errors
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        body = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(ApiError):
    status_code = 400
    default_message = "Invalid input"

    @classmethod
    def from_schema_error(cls, exc, message="Invalid input"):
        """Flatten marshmallow's {field: [messages]} into a list of {field, msg}."""
        errors = []
        for field, messages in (exc.messages or {}).items():
            if isinstance(messages, dict):
                messages = [str(m) for m in messages.values()]
            for msg in messages:
                errors.append({"field": field, "msg": msg})
        return cls(message, errors=errors)


class UnauthorizedError(ApiError):
    status_code = 401
    default_message = "Authorization token is required"


class ForbiddenError(ApiError):
    status_code = 403
    default_message = "Access denied"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Not found"


class ConflictError(ApiError):
    status_code = 409
    default_message = "Conflict"
