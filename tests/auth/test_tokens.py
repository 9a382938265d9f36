"""
Tests for token issuance and verification.
"""
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from jose import jwt

from conftest import API, TEST_SIGNING_KEY, auth_headers
from medical.config import Settings
from medical.core.security import TokenConfigurationError, TokenDecodeError, TokenIssuer

USER = SimpleNamespace(id="user-1", email="user@example.com", first_name="Ada", last_name="Lovelace")
FIXED_NOW = datetime(2030, 1, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)


def _settings(**overrides):
    values = {"_env_file": None, "jwt_signing_key": TEST_SIGNING_KEY, "jwt_duration_minutes": 60}
    values.update(overrides)
    return Settings(**values)


def test_token_carries_identity_and_roles():
    issuer = TokenIssuer(_settings())
    issued = issuer.issue(USER, ["Patient"])

    claims = issuer.decode(issued.token)
    assert claims.user_id == "user-1"
    assert claims.email == "user@example.com"
    assert claims.first_name == "Ada"
    assert claims.last_name == "Lovelace"
    assert claims.roles == ["Patient"]
    assert claims.token_id
    assert claims.expires_at == issued.expires_at


def test_token_expires_after_configured_duration():
    issuer = TokenIssuer(_settings(jwt_duration_minutes=45), clock=lambda: FIXED_NOW)
    issued = issuer.issue(USER, ["Doctor"])

    assert issued.expires_at == FIXED_NOW.replace(microsecond=0) + timedelta(minutes=45)

    payload = jwt.get_unverified_claims(issued.token)
    assert payload["exp"] - payload["iat"] == 45 * 60
    assert payload["iss"] == "medical-api"
    assert payload["aud"] == "medical-clients"
    assert payload["given_name"] == "Ada"
    assert payload["family_name"] == "Lovelace"


def test_each_token_has_unique_id():
    issuer = TokenIssuer(_settings())
    first = jwt.get_unverified_claims(issuer.issue(USER, []).token)
    second = jwt.get_unverified_claims(issuer.issue(USER, []).token)
    assert first["jti"] != second["jti"]


def test_expired_token_is_rejected():
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    issued = TokenIssuer(_settings(), clock=lambda: past).issue(USER, ["Patient"])

    with pytest.raises(TokenDecodeError):
        TokenIssuer(_settings()).decode(issued.token)


@pytest.mark.parametrize(
    "overrides",
    [
        {"jwt_signing_key": "another-signing-key-of-32-bytes-or-more"},
        {"jwt_issuer": "someone-else"},
        {"jwt_audience": "other-clients"},
    ],
)
def test_token_from_foreign_issuer_is_rejected(overrides):
    foreign = TokenIssuer(_settings(**overrides)).issue(USER, ["Patient"])

    with pytest.raises(TokenDecodeError):
        TokenIssuer(_settings()).decode(foreign.token)


def test_short_signing_key_is_rejected():
    with pytest.raises(TokenConfigurationError):
        TokenIssuer(_settings(jwt_signing_key="x" * 31))


def test_expired_token_is_unauthorized_over_http(client, app, patient):
    past = datetime.now(timezone.utc) - timedelta(hours=2)
    issuer = TokenIssuer(app.state.settings, clock=lambda: past)
    user = SimpleNamespace(id=patient["userId"], email=patient["email"], first_name="Pat", last_name="Jones")
    expired = issuer.issue(user, ["Patient"])

    response = client.get(f"{API}/patients/profile", headers=auth_headers(expired.token))
    assert response.status_code == 401
