import unittest

import mongomock
from fastapi.testclient import TestClient

from app.core import database
from app.core.auth_utils import create_access_token
from app.main import app


class ApiTestCase(unittest.TestCase):
    """Runs the app against a fresh in-memory MongoDB per test."""

    def setUp(self):
        self.db = database.init_mongo(mongomock.MongoClient())
        self.client = TestClient(app)

    def tearDown(self):
        database.close_mongo()

    def register(self, email, role=None, password="password123", **extra):
        body = {"name": email.split("@")[0], "email": email, "password": password, **extra}
        if role:
            body["role"] = role
        resp = self.client.post("/api/auth/register", json=body)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["token"]

    def user_id(self, email):
        return self.db["users"].find_one({"email": email})["_id"]

    @staticmethod
    def auth(token):
        return {"Authorization": f"Bearer {token}"}

    def token_for(self, email):
        doc = self.db["users"].find_one({"email": email})
        return create_access_token(doc["_id"], doc["role"])
