"""Tests for token and user auth methods."""

import httpx
import pytest

from aiven_rest import AivenClient, with_api_url, with_token_auth, with_transport
from aiven_rest.auth.methods import AuthMethod, AuthResponse, TokenAuth, UserAuth
from aiven_rest.errors.exceptions import APIError, AuthenticationError, DecodeError, TransportError
from aiven_rest.testing import RecordingTransport, failing_handler, json_response


def bootstrap_client(transport, api_url):
    """A client that can issue requests, for driving UserAuth directly."""
    return AivenClient(with_token_auth("bootstrap"), with_api_url(api_url), with_transport(transport))


class TestTokenAuth:
    def test_returns_token_without_requests(self, projects_backend, api_url):
        client = bootstrap_client(projects_backend, api_url)

        assert TokenAuth("abc123").token(client) == "abc123"
        assert projects_backend.call_count == 0

    def test_repr_hides_token(self):
        assert "abc123" not in repr(TokenAuth("abc123"))

    def test_is_auth_method(self):
        assert isinstance(TokenAuth("x"), AuthMethod)


class TestUserAuth:
    def test_exchanges_credentials_for_token(self, api_url):
        transport = RecordingTransport(
            lambda request: json_response(200, {"state": "active", "token": "xyz", "user_email": "jane@example.com"})
        )
        client = bootstrap_client(transport, api_url)

        token = UserAuth("jane@example.com", "hunter2", "654321").token(client)

        assert token == "xyz"
        assert transport.call_count == 1
        assert transport.requests[0].url.path == "/v1/userauth"
        assert transport.json_bodies() == [{"email": "jane@example.com", "otp": "654321", "password": "hunter2"}]

    def test_request_failure_is_wrapped(self, api_url):
        transport = RecordingTransport(failing_handler(10, lambda r: httpx.Response(200)))
        client = bootstrap_client(transport, api_url)

        with pytest.raises(AuthenticationError) as exc_info:
            UserAuth("jane@example.com", "hunter2").token(client)

        assert "unable to perform /userauth request" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, TransportError)

    def test_malformed_response_is_wrapped(self, api_url):
        transport = RecordingTransport(lambda request: httpx.Response(200, content=b"<html>"))
        client = bootstrap_client(transport, api_url)

        with pytest.raises(AuthenticationError) as exc_info:
            UserAuth("jane@example.com", "hunter2").token(client)

        assert "bad API response" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, DecodeError)

    def test_embedded_error_is_wrapped(self, api_url):
        body = {"errors": [{"message": "Account locked", "status": 403}]}
        transport = RecordingTransport(lambda request: json_response(200, body))
        client = bootstrap_client(transport, api_url)

        with pytest.raises(AuthenticationError) as exc_info:
            UserAuth("jane@example.com", "hunter2").token(client)

        cause = exc_info.value.__cause__
        assert isinstance(cause, APIError)
        assert cause.message == "Account locked"
        assert cause.status == 403

    def test_repr_hides_secrets(self):
        text = repr(UserAuth("jane@example.com", "hunter2", "123456"))

        assert "jane@example.com" in text
        assert "hunter2" not in text
        assert "123456" not in text


def test_auth_response_fields():
    rsp = AuthResponse.from_dict({"token": "t", "state": "active", "user_email": "a@b.c", "user": {"id": 1}})

    assert rsp.token == "t"
    assert rsp.state == "active"
    assert rsp.user_email == "a@b.c"
    assert rsp.extra == {"user": {"id": 1}}
