import logging

from auth import hash_password, issue_token, verify_password
from errors import ConflictError, NotFoundError, UnauthorizedError, ValidationError
from models import User

logger = logging.getLogger(__name__)


class UserService:
    """Credential store access plus registration and login."""

    def __init__(self, database, pepper=""):
        self.collection = database["users"]
        self.pepper = pepper

    def find_by_username(self, username):
        doc = self.collection.find_one({"username": username})
        return User.from_document(doc) if doc else None

    def register(self, username, password, role=None):
        if not username or not password:
            raise ValidationError("Username and password are required")

        if self.find_by_username(username):
            raise ConflictError("User already exists.", status_code=400)

        result = self.collection.insert_one(
            {
                "username": username,
                "passwordHash": hash_password(password, self.pepper),
                "role": role or "user",
            }
        )
        logger.info("Registered user %s", username)
        return str(result.inserted_id)

    def login(self, username, password):
        if not username or not password:
            raise ValidationError("Username and password are required")

        user = self.find_by_username(username)
        if not user:
            raise NotFoundError("User not found")

        if not verify_password(password, user.password_hash, self.pepper):
            raise UnauthorizedError("Invalid credentials")

        return issue_token(user)
