"""Tests for OAuth client authentication and token flows."""

import json
from unittest.mock import MagicMock

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import RSAAlgorithm

from verifyctl.auth.oauth import (
    JWT_BEARER_ASSERTION,
    ClientSecretPost,
    DeviceAuthResponse,
    OAuthClient,
    PrivateKeyJWT,
    load_private_key,
)
from verifyctl.errors import InvalidKeyError, OAuthError

TENANT = "abc.verify.ibm.com"
TOKEN_URL = f"https://{TENANT}/oauth2/token"


@pytest.fixture(scope="module")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def private_jwk(rsa_key):
    jwk = json.loads(RSAAlgorithm.to_jwk(rsa_key))
    jwk["kid"] = "key-1"
    return jwk


def device_auth(**overrides):
    values = {
        "device_code": "dc",
        "user_code": "UC-123",
        "verification_uri": f"https://{TENANT}/device",
        "expires_in": 600,
        "interval": 5,
    }
    values.update(overrides)
    return DeviceAuthResponse(**values)


class TestLoadPrivateKey:
    def test_mapping_is_returned_as_is(self, private_jwk):
        assert load_private_key(private_jwk) is private_jwk

    def test_inline_json(self, private_jwk):
        assert load_private_key(json.dumps(private_jwk))["kid"] == "key-1"

    def test_file_reference(self, private_jwk, tmp_path):
        path = tmp_path / "key.json"
        path.write_text(json.dumps(private_jwk))

        assert load_private_key(f"@{path}")["kid"] == "key-1"

    def test_invalid_json(self):
        with pytest.raises(InvalidKeyError, match="JSON Web Key"):
            load_private_key("{not json")

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidKeyError, match="unable to read"):
            load_private_key(f"@{tmp_path / 'missing.json'}")


class TestClientAuth:
    def test_client_secret_post(self):
        assert ClientSecretPost("id", "secret").get_parameters(TOKEN_URL) == {
            "client_id": "id",
            "client_secret": "secret",
        }

    def test_public_client_omits_secret(self):
        assert ClientSecretPost("id").get_parameters(TOKEN_URL) == {"client_id": "id"}

    def test_private_key_jwt_assertion(self, private_jwk, rsa_key):
        auth = PrivateKeyJWT("client-1", private_jwk, clock=lambda: 1_700_000_000)

        params = auth.get_parameters(TOKEN_URL)

        assert params["client_id"] == "client-1"
        assert params["client_assertion_type"] == JWT_BEARER_ASSERTION
        assertion = params["client_assertion"]
        assert jwt.get_unverified_header(assertion)["kid"] == "key-1"
        claims = jwt.decode(
            assertion,
            rsa_key.public_key(),
            algorithms=["RS256"],
            audience=TOKEN_URL,
            options={"verify_exp": False, "verify_iat": False},
        )
        assert claims["iss"] == claims["sub"] == "client-1"
        assert claims["exp"] - claims["iat"] == 300
        assert claims["jti"]

    def test_unusable_key(self):
        with pytest.raises(InvalidKeyError):
            PrivateKeyJWT("client-1", {"kty": "RSA", "n": "x"})


class TestOAuthClient:
    def test_client_credentials(self, fake_http):
        fake_http.queue(200, {"access_token": "at", "token_type": "Bearer", "expires_in": 7200})
        client = OAuthClient(
            TENANT,
            ClientSecretPost("id", "secret"),
            scopes=["openid", "profile"],
            parameters={"audience": "x"},
            http_client=fake_http,
        )

        token = client.token_with_client_credentials()

        assert token.access_token == "at"
        call = fake_http.calls[0]
        assert call.url == TOKEN_URL
        assert call.body == {
            "audience": "x",
            "scope": "openid profile",
            "grant_type": "client_credentials",
            "client_id": "id",
            "client_secret": "secret",
        }

    def test_token_endpoint_error(self, fake_http):
        fake_http.queue(401, {"error": "invalid_client", "error_description": "bad secret"})
        client = OAuthClient(TENANT, ClientSecretPost("id", "x"), http_client=fake_http)

        with pytest.raises(OAuthError) as exc_info:
            client.token_with_client_credentials()

        assert exc_info.value.error == "invalid_client"
        assert str(exc_info.value) == "invalid_client: bad secret"

    def test_non_oauth_error_body(self, fake_http):
        fake_http.queue(502, b"gateway")
        client = OAuthClient(TENANT, ClientSecretPost("id"), http_client=fake_http)

        with pytest.raises(OAuthError, match="server_error"):
            client.token_with_client_credentials()

    def test_authorize_with_device_flow(self, fake_http):
        fake_http.queue(
            200,
            {
                "device_code": "dc",
                "user_code": "UC",
                "verification_uri": f"https://{TENANT}/device",
                "verification_uri_complete": f"https://{TENANT}/device?code=UC",
                "expires_in": 300,
            },
        )
        client = OAuthClient(TENANT, ClientSecretPost("id"), http_client=fake_http)

        response = client.authorize_with_device_flow()

        assert fake_http.calls[0].url == f"https://{TENANT}/oauth2/device_authorization"
        assert fake_http.calls[0].body == {"client_id": "id"}
        assert response.interval == 5
        assert response.login_url == f"https://{TENANT}/device?code=UC"

    def test_device_flow_pending_then_success(self, fake_http):
        fake_http.queue(400, {"error": "authorization_pending"})
        fake_http.queue(400, {"error": "authorization_pending"})
        fake_http.queue(200, {"access_token": "at"})
        sleep = MagicMock()
        client = OAuthClient(TENANT, ClientSecretPost("id"), http_client=fake_http, sleep=sleep)

        token = client.token_with_device_flow(device_auth(), max_polls=5)

        assert token.access_token == "at"
        assert len(fake_http.calls) == 3
        assert fake_http.calls[0].body["grant_type"] == "urn:ietf:params:oauth:grant-type:device_code"
        assert fake_http.calls[0].body["device_code"] == "dc"
        assert [c.args[0] for c in sleep.call_args_list] == [5, 5, 5]

    def test_device_flow_slow_down_increases_interval(self, fake_http):
        fake_http.queue(400, {"error": "slow_down"})
        fake_http.queue(200, {"access_token": "at"})
        sleep = MagicMock()
        client = OAuthClient(TENANT, ClientSecretPost("id"), http_client=fake_http, sleep=sleep)

        client.token_with_device_flow(device_auth())

        assert [c.args[0] for c in sleep.call_args_list] == [5, 10]

    def test_device_flow_denied(self, fake_http):
        fake_http.queue(400, {"error": "access_denied", "error_description": "User said no"})
        client = OAuthClient(
            TENANT, ClientSecretPost("id"), http_client=fake_http, sleep=MagicMock()
        )

        with pytest.raises(OAuthError) as exc_info:
            client.token_with_device_flow(device_auth())

        assert exc_info.value.error == "access_denied"

    def test_device_flow_poll_budget(self, fake_http):
        for _ in range(3):
            fake_http.queue(400, {"error": "authorization_pending"})
        client = OAuthClient(
            TENANT, ClientSecretPost("id"), http_client=fake_http, sleep=MagicMock()
        )

        with pytest.raises(OAuthError) as exc_info:
            client.token_with_device_flow(device_auth(), max_polls=3)

        assert exc_info.value.error == "expired_token"
        assert len(fake_http.calls) == 3

    def test_default_poll_budget_covers_code_lifetime(self, fake_http):
        for _ in range(2):
            fake_http.queue(400, {"error": "authorization_pending"})
        client = OAuthClient(
            TENANT, ClientSecretPost("id"), http_client=fake_http, sleep=MagicMock()
        )

        with pytest.raises(OAuthError, match="expired_token"):
            client.token_with_device_flow(device_auth(expires_in=10, interval=5))

        assert len(fake_http.calls) == 2
