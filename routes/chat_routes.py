from flask import Blueprint, jsonify

from auth import auth_required
from database import to_object_id
from routes.common import load_payload
from schemas import chat_message_schema
from services.registry import get_services

chat_bp = Blueprint("chats", __name__, url_prefix="/api/chats")


def _dump(chats):
    return jsonify([chat.to_dict() for chat in chats])


@chat_bp.route("/start", methods=["POST"])
@auth_required()
def start_chat(identity):
    """Open a pending chat with a first message.
    ---
    post:
      tags: [Chats]
      security:
        - bearerAuth: []
      requestBody:
        required: true
        content:
          application/json:
            schema: ChatMessageSchema
      responses:
        201:
          description: Chat created, returns chatId
    """
    payload = load_payload(chat_message_schema)
    chat_id = get_services().chats.create_chat(identity.user_id, payload["message"])
    return jsonify({"chatId": chat_id}), 201


@chat_bp.route("/pending", methods=["GET"])
@auth_required(roles=("employee",))
def pending_chats(identity):
    """
    ---
    get:
      tags: [Chats]
      summary: Chats waiting for an employee
      security:
        - bearerAuth: []
      responses:
        200:
          description: Array of pending chats
        403:
          description: Caller is not an employee
    """
    return _dump(get_services().chats.list_pending())


@chat_bp.route("/accepted", methods=["GET"])
@auth_required(roles=("employee",))
def accepted_chats(identity):
    """
    ---
    get:
      tags: [Chats]
      summary: Chats accepted by the calling employee
      security:
        - bearerAuth: []
      responses:
        200:
          description: Array of accepted chats
        403:
          description: Caller is not an employee
    """
    return _dump(get_services().chats.list_accepted_by_admin(identity.user_id))


@chat_bp.route("/<chat_id>/accept", methods=["POST"])
@auth_required()
def accept_chat(chat_id, identity):
    """
    ---
    post:
      tags: [Chats]
      summary: Accept a pending chat
      security:
        - bearerAuth: []
      parameters:
        - {in: path, name: chat_id, required: true, schema: {type: string}}
      responses:
        200:
          description: Chat accepted
        409:
          description: Chat not found or already accepted
    """
    get_services().chats.accept_chat(chat_id, identity.user_id)
    return jsonify({"message": "Chat accepted"})


@chat_bp.route("/<chat_id>/message", methods=["POST"])
@auth_required()
def send_message(chat_id, identity):
    """
    ---
    post:
      tags: [Chats]
      summary: Append a message to a chat
      security:
        - bearerAuth: []
      parameters:
        - {in: path, name: chat_id, required: true, schema: {type: string}}
      requestBody:
        required: true
        content:
          application/json:
            schema: ChatMessageSchema
      responses:
        200:
          description: Message sent
        404:
          description: Chat not found
    """
    to_object_id(chat_id, "chat ID")
    payload = load_payload(chat_message_schema)
    sender = "employee" if identity.is_employee else "user"
    get_services().chats.add_message(chat_id, sender, payload["message"])
    return jsonify({"message": "Message sent"})


@chat_bp.route("/<chat_id>", methods=["GET"])
@auth_required()
def get_chat(chat_id, identity):
    """
    ---
    get:
      tags: [Chats]
      summary: Fetch a chat with its messages
      security:
        - bearerAuth: []
      parameters:
        - {in: path, name: chat_id, required: true, schema: {type: string}}
      responses:
        200:
          description: The chat
        404:
          description: Chat not found
    """
    return jsonify(get_services().chats.get_chat(chat_id).to_dict())
