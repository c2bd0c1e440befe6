import pytest
from fastapi import Depends, FastAPI, Request
from fastapi.testclient import TestClient

from noteapp.features.auth.dependencies.session import get_current_identity
from noteapp.features.auth.models.token import TokenData
from noteapp.features.auth.utils.security import create_access_token, decode_access_token
from noteapp.platform.exceptions import add_exception_handlers


@pytest.fixture
def whoami_client():
    """A bare app with one route that echoes what the session gate resolved."""
    app = FastAPI()
    add_exception_handlers(app)

    @app.get("/whoami")
    async def whoami(request: Request, identity: TokenData = Depends(get_current_identity)):
        return {
            "state_user_id": request.state.user_id,
            "user_id": identity.user_id,
            "email": identity.email,
        }

    with TestClient(app) as test_client:
        yield test_client


def _whoami(client, token):
    return client.get("/whoami", headers={"Authorization": f"Bearer {token}"})


def test_identity_is_attached_to_request_state(whoami_client):
    token = create_access_token({"sub": "user-a", "email": "a@example.com"})

    response = _whoami(whoami_client, token)

    assert response.status_code == 200
    body = response.json()
    assert body["state_user_id"] == "user-a"
    assert body["user_id"] == "user-a"
    assert body["email"] == "a@example.com"


def test_each_token_resolves_to_its_own_user(whoami_client):
    token_a = create_access_token({"sub": "user-a", "email": "a@example.com"})
    token_b = create_access_token({"sub": "user-b", "email": "b@example.com"})

    resolved_a = _whoami(whoami_client, token_a).json()["state_user_id"]
    resolved_b = _whoami(whoami_client, token_b).json()["state_user_id"]

    assert resolved_a == "user-a"
    assert resolved_b == "user-b"


def test_signed_up_users_never_resolve_to_each_other(whoami_client, signup):
    email_a, token_a = signup(name="Alice")
    email_b, token_b = signup(name="Bob")

    body_a = _whoami(whoami_client, token_a).json()
    body_b = _whoami(whoami_client, token_b).json()

    assert body_a["state_user_id"] == decode_access_token(token_a)["sub"]
    assert body_b["state_user_id"] == decode_access_token(token_b)["sub"]
    assert body_a["state_user_id"] != body_b["state_user_id"]
    assert (body_a["email"], body_b["email"]) == (email_a, email_b)


def test_missing_token_never_reaches_the_route(whoami_client):
    response = whoami_client.get("/whoami")

    assert response.status_code == 401
    assert response.json()["message"] == "No token provided"
