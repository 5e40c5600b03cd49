"""Support chats between users and employees.

A chat starts ``pending`` and moves to ``accepted`` exactly once. The move is
a single conditional update filtered on the current status, so when two
employees race for the same chat MongoDB lets only one of the updates match.
Messages are appended with ``$push`` and never edited.
"""
import logging
from datetime import datetime, timezone

from database import to_object_id
from errors import ConflictError, NotFoundError
from models import Chat

logger = logging.getLogger(__name__)


class ChatService:
    def __init__(self, database):
        self.collection = database["chats"]

    def create_chat(self, user_id, message):
        now = datetime.now(timezone.utc)
        result = self.collection.insert_one(
            {
                "userId": user_id,
                "adminId": None,
                "status": "pending",
                "messages": [{"sender": "user", "message": message, "timestamp": now}],
                "createdAt": now,
            }
        )
        logger.info("User %s started chat %s", user_id, result.inserted_id)
        return str(result.inserted_id)

    def accept_chat(self, chat_id, admin_id):
        result = self.collection.update_one(
            {"_id": to_object_id(chat_id, "chat ID"), "status": "pending"},
            {"$set": {"status": "accepted", "adminId": admin_id}},
        )
        if result.matched_count == 0:
            logger.warning("Accept of chat %s by %s rejected", chat_id, admin_id)
            raise ConflictError("Chat not found or already accepted")
        logger.info("Chat %s accepted by %s", chat_id, admin_id)

    def add_message(self, chat_id, sender, message):
        result = self.collection.update_one(
            {"_id": to_object_id(chat_id, "chat ID")},
            {
                "$push": {
                    "messages": {
                        "sender": sender,
                        "message": message,
                        "timestamp": datetime.now(timezone.utc),
                    }
                }
            },
        )
        if result.matched_count == 0:
            raise NotFoundError("Chat not found")

    def get_chat(self, chat_id):
        doc = self.collection.find_one({"_id": to_object_id(chat_id, "chat ID")})
        if not doc:
            raise NotFoundError("Chat not found")
        return Chat.from_document(doc)

    def list_pending(self):
        return [Chat.from_document(doc) for doc in self.collection.find({"status": "pending"})]

    def list_accepted_by_admin(self, admin_id):
        query = {"adminId": admin_id, "status": "accepted"}
        return [Chat.from_document(doc) for doc in self.collection.find(query)]
