import json


def post_json(client, url, payload, headers=None):
    return client.post(url, data=json.dumps(payload), content_type="application/json", headers=headers)


def put_json(client, url, payload, headers=None):
    return client.put(url, data=json.dumps(payload), content_type="application/json", headers=headers)


def register_and_login(client, username, password="secret123!", role=None):
    payload = {"username": username, "password": password}
    if role:
        payload["role"] = role
    register = post_json(client, "/api/auth/register", payload)
    assert register.status_code == 201
    login = post_json(client, "/api/auth/login", {"username": username, "password": password})
    assert login.status_code == 200
    return {"Authorization": f"Bearer {login.get_json()['token']}"}, register.get_json()["userId"]
