import os
import sys
from pathlib import Path

import mongomock
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("SECRET_KEY", "test")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key-for-unit-tests")

from app import create_app
from helpers import register_and_login


@pytest.fixture()
def app(tmp_path):
    app = create_app(
        test_config={
            "TESTING": True,
            "MONGODB_DB": "movieRentalTest",
            "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        },
        mongo_client=mongomock.MongoClient(),
    )
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def user_headers(client):
    headers, _ = register_and_login(client, "regular_user")
    return headers


@pytest.fixture()
def employee_headers(client):
    headers, _ = register_and_login(client, "staff_member", role="employee")
    return headers
