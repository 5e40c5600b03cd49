from helpers import post_json, register_and_login

MISSING_ID = "64b7f0c2a1b2c3d4e5f60718"


def start_chat(client, headers, message="Hello, I need help"):
    response = post_json(client, "/api/chats/start", {"message": message}, headers=headers)
    assert response.status_code == 201
    return response.get_json()["chatId"]


# a new chat is pending with the opening message
def test_start_chat(client, user_headers):
    chat_id = start_chat(client, user_headers)

    response = client.get(f"/api/chats/{chat_id}", headers=user_headers)

    assert response.status_code == 200
    chat = response.get_json()
    assert chat["status"] == "pending"
    assert chat["adminId"] is None
    assert [(m["sender"], m["message"]) for m in chat["messages"]] == [("user", "Hello, I need help")]


# blank messages are refused
def test_start_chat_requires_message(client, user_headers):
    response = post_json(client, "/api/chats/start", {"message": "   "}, headers=user_headers)
    assert response.status_code == 400


# no Authorization header at all
def test_start_chat_requires_auth(client):
    response = post_json(client, "/api/chats/start", {"message": "hi"})
    assert response.status_code == 401
    assert response.get_json()["message"] == "Authorization token is required"


# a header that is not a Bearer token counts as an invalid token
def test_start_chat_with_non_bearer_header(client):
    response = post_json(client, "/api/chats/start", {"message": "hi"}, headers={"Authorization": "Token abc"})
    assert response.status_code == 403
    assert response.get_json()["message"] == "Invalid or expired token"


# only employees see the pending queue
def test_pending_chats_employee_only(client, user_headers, employee_headers):
    start_chat(client, user_headers)

    denied = client.get("/api/chats/pending", headers=user_headers)
    allowed = client.get("/api/chats/pending", headers=employee_headers)

    assert denied.status_code == 403
    assert denied.get_json()["message"] == "Access denied"
    assert allowed.status_code == 200
    assert len(allowed.get_json()) == 1


# the second accept loses and the first admin stays
def test_accept_chat_only_once(client, user_headers, employee_headers):
    chat_id = start_chat(client, user_headers)
    other_employee, other_id = register_and_login(client, "staff_two", role="employee")

    first = client.post(f"/api/chats/{chat_id}/accept", headers=employee_headers)
    second = client.post(f"/api/chats/{chat_id}/accept", headers=other_employee)

    assert first.status_code == 200
    assert first.get_json()["message"] == "Chat accepted"
    assert second.status_code == 409
    chat = client.get(f"/api/chats/{chat_id}", headers=user_headers).get_json()
    assert chat["status"] == "accepted"
    assert chat["adminId"] != other_id
    assert chat["adminId"] is not None


# accepted chats move to the accepting employee's list
def test_accepted_chat_leaves_pending_list(client, user_headers, employee_headers):
    chat_id = start_chat(client, user_headers)
    start_chat(client, user_headers, "second question")

    client.post(f"/api/chats/{chat_id}/accept", headers=employee_headers)

    pending = client.get("/api/chats/pending", headers=employee_headers).get_json()
    accepted = client.get("/api/chats/accepted", headers=employee_headers).get_json()
    assert [chat["_id"] for chat in accepted] == [chat_id]
    assert chat_id not in [chat["_id"] for chat in pending]


# CHAT DOES NOT EXIST
def test_accept_missing_chat(client, employee_headers):
    response = client.post(f"/api/chats/{MISSING_ID}/accept", headers=employee_headers)
    assert response.status_code == 409


# BAD ID
def test_accept_malformed_chat_id(client, employee_headers):
    response = client.post("/api/chats/nope/accept", headers=employee_headers)
    assert response.status_code == 400


# messages come back in send order, sender taken from the role
def test_messages_keep_order_and_sender(client, user_headers, employee_headers):
    chat_id = start_chat(client, user_headers, "first")
    client.post(f"/api/chats/{chat_id}/accept", headers=employee_headers)

    exchange = [
        (employee_headers, "employee", "How can I help?"),
        (user_headers, "user", "My rental is late"),
        (user_headers, "user", "Order 42"),
        (employee_headers, "employee", "Extended by a day"),
    ]
    for headers, _, text in exchange:
        response = post_json(client, f"/api/chats/{chat_id}/message", {"message": text}, headers=headers)
        assert response.status_code == 200
        assert response.get_json()["message"] == "Message sent"

    messages = client.get(f"/api/chats/{chat_id}", headers=user_headers).get_json()["messages"]
    assert [(m["sender"], m["message"]) for m in messages] == [("user", "first")] + [
        (sender, text) for _, sender, text in exchange
    ]


# users can keep writing before anyone accepts
def test_message_on_pending_chat_is_allowed(client, user_headers):
    chat_id = start_chat(client, user_headers)
    response = post_json(client, f"/api/chats/{chat_id}/message", {"message": "anyone?"}, headers=user_headers)
    assert response.status_code == 200


# MISSING FIELDS
def test_message_requires_text(client, user_headers):
    chat_id = start_chat(client, user_headers)
    response = post_json(client, f"/api/chats/{chat_id}/message", {}, headers=user_headers)
    assert response.status_code == 400


# message to an unknown chat
def test_message_to_missing_chat(client, user_headers):
    response = post_json(client, f"/api/chats/{MISSING_ID}/message", {"message": "hi"}, headers=user_headers)
    assert response.status_code == 404


# reading an unknown chat
def test_get_missing_chat(client, user_headers):
    response = client.get(f"/api/chats/{MISSING_ID}", headers=user_headers)
    assert response.status_code == 404
    assert response.get_json()["message"] == "Chat not found"
