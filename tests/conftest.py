import json
import os
import uuid
from datetime import datetime, timezone

import httpx
import pytest
from fastapi.testclient import TestClient

# Set testing environment variable before the app is imported
os.environ["TESTING"] = "1"

from healthcare_plus.main import app
from healthcare_plus.core.config import settings
from healthcare_plus.core.redis import get_redis

class FakeHostedBackend:
    """In-memory stand-in for the hosted identity, data and storage services."""

    def __init__(self):
        self.users = {}
        self.access_tokens = {}
        self.refresh_tokens = {}
        self.profiles = {}
        self.objects = {}
        self.confirmation_tokens = {}
        self.requests = []
        self.autoconfirm = False
        self.fail_uploads = False
        self.fail_profiles = False
        self.fail_logout = False

    # Helpers for tests
    def add_user(self, email, password, user_type="patient", first_name="Test",
                 last_name="User", confirmed=True):
        user_id = str(uuid.uuid4())
        self.users[email] = {
            "id": user_id,
            "email": email,
            "password": password,
            "email_confirmed_at": datetime.now(timezone.utc).isoformat() if confirmed else None,
            "user_metadata": {},
        }
        self.profiles[user_id] = {
            "id": user_id,
            "first_name": first_name,
            "last_name": last_name,
            "phone": "555-0100",
            "profile_picture_url": None,
            "user_type": user_type,
        }
        return user_id

    def issue_confirmation(self, email):
        token_hash = uuid.uuid4().hex
        self.confirmation_tokens[token_hash] = email
        return token_hash

    def calls(self, path_prefix):
        return [path for _, path in self.requests if path.startswith(path_prefix)]

    # Transport
    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requests.append((request.method, path))

        if path == "/auth/v1/signup":
            return self._signup(request)
        if path == "/auth/v1/token":
            return self._token(request)
        if path == "/auth/v1/logout":
            return self._logout(request)
        if path == "/auth/v1/verify":
            return self._verify(request)
        if path == "/auth/v1/user":
            return self._user(request)
        if path == "/rest/v1/profiles":
            return self._profile(request)
        if path.startswith("/storage/v1/object/"):
            return self._upload(request)

        return httpx.Response(404, json={"message": "not found"})

    def _public_user(self, user):
        return {key: value for key, value in user.items() if key != "password"}

    def _grant(self, user):
        access_token = uuid.uuid4().hex
        refresh_token = uuid.uuid4().hex
        self.access_tokens[access_token] = user["email"]
        self.refresh_tokens[refresh_token] = user["email"]
        return {
            "access_token": access_token,
            "token_type": "bearer",
            "expires_in": 3600,
            "refresh_token": refresh_token,
            "user": self._public_user(user),
        }

    def _bearer_user(self, request):
        token = request.headers.get("Authorization", "").replace("Bearer ", "")
        email = self.access_tokens.get(token)
        return self.users.get(email) if email else None

    def _signup(self, request):
        body = json.loads(request.content)
        if body["email"] in self.users:
            return httpx.Response(422, json={"code": 422, "msg": "User already registered"})

        user_id = self.add_user(body["email"], body["password"], confirmed=self.autoconfirm)
        user = self.users[body["email"]]
        user["user_metadata"] = body.get("data") or {}
        user["redirect_to"] = request.url.params.get("redirect_to")

        metadata = user["user_metadata"]
        self.profiles[user_id].update({
            "first_name": metadata.get("first_name"),
            "last_name": metadata.get("last_name"),
            "phone": metadata.get("phone"),
            "profile_picture_url": metadata.get("profile_picture_url"),
            "user_type": metadata.get("user_type"),
        })

        if self.autoconfirm:
            return httpx.Response(200, json=self._grant(user))
        return httpx.Response(200, json=self._public_user(user))

    def _token(self, request):
        body = json.loads(request.content)
        grant_type = request.url.params.get("grant_type")

        if grant_type == "password":
            user = self.users.get(body.get("email"))
            if not user or user["password"] != body.get("password"):
                return httpx.Response(400, json={
                    "error": "invalid_grant",
                    "error_description": "Invalid login credentials",
                })
            if not user["email_confirmed_at"]:
                return httpx.Response(400, json={"error": "invalid_grant", "error_description": "Email not confirmed"})
            return httpx.Response(200, json=self._grant(user))

        if grant_type == "refresh_token":
            email = self.refresh_tokens.pop(body.get("refresh_token"), None)
            if not email:
                return httpx.Response(400, json={"error_description": "Invalid Refresh Token"})
            return httpx.Response(200, json=self._grant(self.users[email]))

        return httpx.Response(400, json={"msg": "unsupported grant type"})

    def _logout(self, request):
        if self.fail_logout:
            return httpx.Response(500, json={"msg": "logout unavailable"})
        token = request.headers.get("Authorization", "").replace("Bearer ", "")
        if token not in self.access_tokens:
            return httpx.Response(401, json={"msg": "invalid JWT"})
        del self.access_tokens[token]
        return httpx.Response(204)

    def _verify(self, request):
        body = json.loads(request.content)
        email = self.confirmation_tokens.pop(body.get("token_hash"), None)
        if not email:
            return httpx.Response(403, json={"msg": "Email link is invalid or has expired"})
        self.users[email]["email_confirmed_at"] = datetime.now(timezone.utc).isoformat()
        return httpx.Response(200, json=self._grant(self.users[email]))

    def _user(self, request):
        user = self._bearer_user(request)
        if not user:
            return httpx.Response(401, json={"msg": "invalid JWT"})
        return httpx.Response(200, json=self._public_user(user))

    def _profile(self, request):
        if self.fail_profiles:
            return httpx.Response(500, json={"message": "database unavailable"})
        if self._bearer_user(request) is None:
            return httpx.Response(401, json={"message": "JWT expired"})
        user_id = request.url.params.get("id", "").replace("eq.", "")
        row = self.profiles.get(user_id)
        if row is None:
            return httpx.Response(406, json={"code": "PGRST116", "message": "JSON object requested, multiple (or no) rows returned"})
        return httpx.Response(200, json=row)

    def _upload(self, request):
        if self.fail_uploads:
            return httpx.Response(500, json={"message": "storage unavailable"})
        key = request.url.path.replace("/storage/v1/object/", "", 1)
        self.objects[key] = request.content
        return httpx.Response(200, json={"Key": key})

class FakeRedis:
    """Dict-backed redis used for rate limit counters in tests."""

    def __init__(self):
        self.data = {}

    def setex(self, key, time, value):
        self.data[key] = str(value)
        return True

    def get(self, key):
        return self.data.get(key)

    def incr(self, key):
        self.data[key] = str(int(self.data.get(key, "0")) + 1)
        return int(self.data[key])

@pytest.fixture
def hosted():
    return FakeHostedBackend()

@pytest.fixture
def fake_redis():
    return FakeRedis()

@pytest.fixture
def transport(hosted):
    return httpx.MockTransport(hosted.handler)

@pytest.fixture
def client(transport, fake_redis):
    app.state.gateway_transport = transport
    app.dependency_overrides[get_redis] = lambda: fake_redis
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client
    app.dependency_overrides.clear()
    app.state.gateway_transport = None

@pytest.fixture
def jwt_secret(monkeypatch):
    monkeypatch.setattr(settings, "GATEWAY_JWT_SECRET", "test-jwt-secret")
    return "test-jwt-secret"
