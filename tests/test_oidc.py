"""Tests for azlogin.oidc — GitHub Actions ID token retrieval."""

import base64
import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from azlogin.errors import TokenRetrievalFailure
from azlogin.oidc import DEFAULT_AUDIENCE, decode_claims, fetch_id_token, log_token_claims


def _jwt(claims: dict) -> str:
    def seg(data: dict) -> str:
        return base64.urlsafe_b64encode(json.dumps(data).encode()).decode().rstrip("=")

    return f"{seg({'alg': 'RS256', 'typ': 'JWT'})}.{seg(claims)}.signature"


@pytest.fixture
def oidc_env(monkeypatch):
    monkeypatch.setenv("ACTIONS_ID_TOKEN_REQUEST_URL", "https://token.actions.example/idtoken?api-version=2.0")
    monkeypatch.setenv("ACTIONS_ID_TOKEN_REQUEST_TOKEN", "runtime-bearer")


class TestFetchIdToken:

    @patch("azlogin.oidc.requests.get")
    def test_success(self, mock_get, oidc_env):
        mock_get.return_value = MagicMock(status_code=200)
        mock_get.return_value.json.return_value = {"value": "id-token"}

        assert fetch_id_token() == "id-token"

        url = mock_get.call_args.args[0]
        assert url == (
            "https://token.actions.example/idtoken?api-version=2.0"
            "&audience=api%3A%2F%2FAzureADTokenExchange"
        )
        headers = mock_get.call_args.kwargs["headers"]
        assert headers["Authorization"] == "bearer runtime-bearer"
        assert mock_get.call_args.kwargs["timeout"] > 0

    @patch("azlogin.oidc.requests.get")
    def test_custom_audience(self, mock_get, oidc_env):
        mock_get.return_value = MagicMock(status_code=200)
        mock_get.return_value.json.return_value = {"value": "id-token"}

        fetch_id_token("api://custom")

        assert mock_get.call_args.args[0].endswith("&audience=api%3A%2F%2Fcustom")

    def test_missing_runtime_env(self):
        with pytest.raises(TokenRetrievalFailure, match="id-token"):
            fetch_id_token(DEFAULT_AUDIENCE)

    @patch("azlogin.oidc.requests.get", side_effect=requests.ConnectionError("connection refused"))
    def test_network_error(self, _mock_get, oidc_env):
        with pytest.raises(TokenRetrievalFailure, match="connection refused"):
            fetch_id_token()

    @patch("azlogin.oidc.requests.get")
    def test_http_error(self, mock_get, oidc_env):
        mock_get.return_value = MagicMock(status_code=403)

        with pytest.raises(TokenRetrievalFailure, match="HTTP 403"):
            fetch_id_token()

    @patch("azlogin.oidc.requests.get")
    def test_missing_value(self, mock_get, oidc_env):
        mock_get.return_value = MagicMock(status_code=200)
        mock_get.return_value.json.return_value = {"count": 0}

        with pytest.raises(TokenRetrievalFailure, match="no token value"):
            fetch_id_token()

    @patch("azlogin.oidc.requests.get")
    def test_non_json_body(self, mock_get, oidc_env):
        mock_get.return_value = MagicMock(status_code=200)
        mock_get.return_value.json.side_effect = ValueError("not json")

        with pytest.raises(TokenRetrievalFailure):
            fetch_id_token()


class TestClaims:

    def test_decode(self):
        token = _jwt({"iss": "https://token.actions.githubusercontent.com", "sub": "repo:octo/app:ref:refs/heads/main"})
        claims = decode_claims(token)
        assert claims["sub"] == "repo:octo/app:ref:refs/heads/main"

    def test_not_a_jwt(self):
        assert decode_claims("opaque") == {}

    def test_garbage_payload(self):
        assert decode_claims("a.@@@.c") == {}

    def test_log_claims(self, caplog):
        token = _jwt({"iss": "issuer-x", "sub": "subject-y", "aud": "api://AzureADTokenExchange"})

        with caplog.at_level("INFO", logger="azlogin.oidc"):
            log_token_claims(token)

        assert "issuer-x" in caplog.text
        assert "subject-y" in caplog.text
