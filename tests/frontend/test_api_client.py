"""Tests for the HTTP client using httpx.MockTransport."""

import json

import httpx
import pytest

from app.frontend.api_client import ApiError, ApiUnavailableError, SkillChainClient


def make_client(handler, token=None) -> SkillChainClient:
    return SkillChainClient(
        base_url="http://api.test/", token=token, transport=httpx.MockTransport(handler)
    )


def test_login_posts_credentials():
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"token": "t", "user": {"id": "u1"}})

    with make_client(handler) as client:
        result = client.login("a@example.com", "Secret1!")

    assert seen["url"] == "http://api.test/api/auth/login"
    assert seen["body"] == {"email": "a@example.com", "password": "Secret1!"}
    assert result["token"] == "t"


def test_bearer_token_sent():
    def handler(request: httpx.Request):
        assert request.headers["Authorization"] == "Bearer secret-token"
        return httpx.Response(201, json={"certificateId": "crt-1"})

    with make_client(handler, token="secret-token") as client:
        assert client.create_certificate({"certificateId": "crt-1"})["certificateId"] == "crt-1"


def test_anonymous_lookup_sends_no_token():
    def handler(request: httpx.Request):
        assert "Authorization" not in request.headers
        assert request.url.path == "/api/certificates/crt-1"
        return httpx.Response(200, json={"certificateId": "crt-1"})

    with make_client(handler) as client:
        assert client.get_certificate("crt-1")["certificateId"] == "crt-1"


def test_error_response_raises_api_error():
    def handler(request: httpx.Request):
        return httpx.Response(403, json={"detail": "Account not active", "userId": "u1", "status": "pending"})

    with make_client(handler) as client:
        with pytest.raises(ApiError) as exc_info:
            client.login("a@example.com", "Secret1!")

    assert exc_info.value.status_code == 403
    assert exc_info.value.message == "Account not active"
    assert exc_info.value.payload["userId"] == "u1"


def test_validation_error_message_falls_back():
    def handler(request: httpx.Request):
        return httpx.Response(422, json={"detail": [{"loc": ["body", "email"], "msg": "bad"}]})

    with make_client(handler) as client:
        with pytest.raises(ApiError) as exc_info:
            client.forgot_password("nope")

    assert exc_info.value.status_code == 422
    assert isinstance(exc_info.value.message, str)


def test_transport_failure_raises_unavailable():
    def handler(request: httpx.Request):
        raise httpx.ConnectError("connection refused", request=request)

    with make_client(handler) as client:
        with pytest.raises(ApiUnavailableError):
            client.list_certificates()


def test_register_drops_empty_fields():
    seen = {}

    def handler(request: httpx.Request):
        seen["body"] = json.loads(request.content)
        return httpx.Response(201, json={"userId": "u1", "email": "a@example.com"})

    with make_client(handler) as client:
        client.register(role="STUDENT", name="A", email="a@example.com", password="Secret1!", phone="", apparId=None)

    assert seen["body"] == {"role": "STUDENT", "name": "A", "email": "a@example.com", "password": "Secret1!"}


def test_update_issuer_uses_put():
    def handler(request: httpx.Request):
        assert request.method == "PUT"
        assert request.url.path == "/api/certificates/crt-1"
        assert json.loads(request.content) == {"issuerName": "New"}
        return httpx.Response(200, json={"issuerName": "New"})

    with make_client(handler, token="t") as client:
        assert client.update_certificate_issuer("crt-1", "New")["issuerName"] == "New"
