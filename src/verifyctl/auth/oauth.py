"""
OAuth 2.0 token acquisition against a tenant.

Supports the client credentials grant and the device authorization grant,
with the client authenticating either by secret (``client_secret_post``) or
by a signed JWT assertion (``private_key_jwt``).
"""

import json
import logging
import math
import time
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import jwt
from pydantic import BaseModel, ConfigDict

from verifyctl.api.http_client import HttpClient, Response
from verifyctl.errors import InvalidKeyError, OAuthError

logger = logging.getLogger(__name__)

CLIENT_CREDENTIALS_GRANT = "client_credentials"
DEVICE_CODE_GRANT = "urn:ietf:params:oauth:grant-type:device_code"
JWT_BEARER_ASSERTION = "urn:ietf:params:oauth:client-assertion-type:jwt-bearer"

DEFAULT_POLL_INTERVAL = 5
SLOW_DOWN_INCREMENT = 5
ASSERTION_LIFETIME = 300


class TokenResponse(BaseModel):
    access_token: str
    token_type: Optional[str] = None
    expires_in: Optional[int] = None
    refresh_token: Optional[str] = None
    scope: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class DeviceAuthResponse(BaseModel):
    device_code: str
    user_code: Optional[str] = None
    verification_uri: str
    verification_uri_complete: Optional[str] = None
    expires_in: int = 600
    interval: int = DEFAULT_POLL_INTERVAL

    model_config = ConfigDict(extra="allow")

    @property
    def login_url(self) -> str:
        return self.verification_uri_complete or self.verification_uri


def load_private_key(key: Union[str, Dict[str, Any]]) -> Dict[str, Any]:
    """
    Parse a private JWK.

    Args:
        key: JWK as a mapping, as JSON text, or ``@<path>`` to a file holding the JSON

    Returns:
        The JWK as a dictionary
    """
    if isinstance(key, dict):
        return key

    text = key.strip()
    if text.startswith("@"):
        path = Path(text[1:]).expanduser()
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise InvalidKeyError(f"unable to read the private key file '{path}': {e}") from e

    try:
        jwk = json.loads(text)
    except ValueError as e:
        raise InvalidKeyError(f"unable to parse the private key as a JSON Web Key: {e}") from e

    if not isinstance(jwk, dict):
        raise InvalidKeyError("unable to parse the private key as a JSON Web Key: not an object")
    return jwk


class ClientAuth(ABC):
    """How the client proves its identity to the token endpoint."""

    def __init__(self, client_id: str):
        self.client_id = client_id

    @abstractmethod
    def get_parameters(self, token_url: str) -> Dict[str, str]:
        """Form parameters that authenticate the client."""


class ClientSecretPost(ClientAuth):
    def __init__(self, client_id: str, client_secret: Optional[str] = None):
        super().__init__(client_id)
        self.client_secret = client_secret

    def get_parameters(self, token_url: str) -> Dict[str, str]:
        params = {"client_id": self.client_id}
        if self.client_secret:
            params["client_secret"] = self.client_secret
        return params


class PrivateKeyJWT(ClientAuth):
    """
    Client authentication with a JWT signed by the client's private key.

    The assertion is issued and subject to the client ID, addressed to the
    token endpoint and valid for a few minutes.
    """

    def __init__(
        self,
        client_id: str,
        jwk: Dict[str, Any],
        lifetime: int = ASSERTION_LIFETIME,
        clock: Callable[[], float] = time.time,
    ):
        super().__init__(client_id)
        try:
            self.key = jwt.PyJWK(jwk)
        except (jwt.exceptions.PyJWKError, jwt.exceptions.InvalidKeyError, ValueError) as e:
            raise InvalidKeyError(f"unable to use the private key: {e}") from e
        self.kid = jwk.get("kid")
        self.lifetime = lifetime
        self.clock = clock

    @property
    def algorithm(self) -> str:
        return self.key.algorithm_name

    def create_assertion(self, token_url: str) -> str:
        issued_at = int(self.clock())
        claims = {
            "iss": self.client_id,
            "sub": self.client_id,
            "aud": token_url,
            "jti": str(uuid.uuid4()),
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        headers = {"kid": self.kid} if self.kid else None
        return jwt.encode(claims, self.key.key, algorithm=self.algorithm, headers=headers)

    def get_parameters(self, token_url: str) -> Dict[str, str]:
        return {
            "client_id": self.client_id,
            "client_assertion_type": JWT_BEARER_ASSERTION,
            "client_assertion": self.create_assertion(token_url),
        }


def parse_error(response: Response) -> OAuthError:
    """Build an ``OAuthError`` from an RFC 6749 error response."""
    try:
        body = json.loads(response.body or b"{}")
    except ValueError:
        body = None

    if isinstance(body, dict) and body.get("error"):
        return OAuthError(body["error"], body.get("error_description"))
    return OAuthError(
        "server_error", f"code={response.status_code}, body={response.text}"
    )


class OAuthClient:
    """
    OAuth 2.0 client for one tenant.

    Args:
        tenant: Tenant host name
        client_auth: Client authentication strategy
        scopes: Scopes to request
        parameters: Extra form parameters sent with every request
        http_client: HTTP client to use
        sleep: Function used to wait between device flow polls
    """

    def __init__(
        self,
        tenant: str,
        client_auth: ClientAuth,
        scopes: Optional[List[str]] = None,
        parameters: Optional[Dict[str, str]] = None,
        http_client: Optional[HttpClient] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.tenant = tenant
        self.client_auth = client_auth
        self.scopes = scopes or []
        self.parameters = parameters or {}
        self.http = http_client or HttpClient()
        self.sleep = sleep or time.sleep

    @property
    def token_url(self) -> str:
        return f"https://{self.tenant}/oauth2/token"

    @property
    def device_authorization_url(self) -> str:
        return f"https://{self.tenant}/oauth2/device_authorization"

    def _form(self, **values: str) -> Dict[str, str]:
        form = dict(self.parameters)
        if self.scopes:
            form["scope"] = " ".join(self.scopes)
        form.update(values)
        return form

    def _post(self, url: str, form: Dict[str, str]) -> Response:
        return self.http.post(url, headers={"Accept": "application/json"}, body=form)

    def _request_token(self, **values: str) -> Response:
        form = self._form(**values)
        form.update(self.client_auth.get_parameters(self.token_url))
        return self._post(self.token_url, form)

    def _parse_token(self, response: Response) -> TokenResponse:
        try:
            return TokenResponse.model_validate_json(response.body)
        except ValueError as e:
            raise OAuthError("invalid_response", f"unable to parse the token response: {e}") from e

    def token_with_client_credentials(self) -> TokenResponse:
        """Exchange the client credentials for an access token."""
        response = self._request_token(grant_type=CLIENT_CREDENTIALS_GRANT)
        if not response.ok:
            raise parse_error(response)
        return self._parse_token(response)

    def authorize_with_device_flow(self) -> DeviceAuthResponse:
        """Start a device authorization and return the codes to show the user."""
        form = self._form(client_id=self.client_auth.client_id)
        response = self._post(self.device_authorization_url, form)
        if not response.ok:
            raise parse_error(response)
        try:
            return DeviceAuthResponse.model_validate_json(response.body)
        except ValueError as e:
            raise OAuthError(
                "invalid_response", f"unable to parse the device authorization response: {e}"
            ) from e

    def token_with_device_flow(
        self, device_auth: DeviceAuthResponse, max_polls: Optional[int] = None
    ) -> TokenResponse:
        """
        Poll the token endpoint until the user completes the device login.

        Args:
            device_auth: Response of ``authorize_with_device_flow``
            max_polls: Upper bound on token requests; by default enough polls
                to cover the device code lifetime

        Returns:
            The issued token

        Raises:
            OAuthError: when the user denies access, the device code expires
                or the poll budget is exhausted
        """
        interval = device_auth.interval or DEFAULT_POLL_INTERVAL
        if max_polls is None:
            max_polls = max(1, math.ceil(device_auth.expires_in / interval))

        for attempt in range(1, max_polls + 1):
            self.sleep(interval)
            response = self._request_token(
                grant_type=DEVICE_CODE_GRANT, device_code=device_auth.device_code
            )
            if response.ok:
                logger.debug(f"Device login completed after {attempt} polls")
                return self._parse_token(response)

            error = parse_error(response)
            if error.error == "authorization_pending":
                logger.debug(f"Authorization pending, poll {attempt}/{max_polls}")
                continue
            if error.error == "slow_down":
                interval += SLOW_DOWN_INCREMENT
                logger.debug(f"Slowing down polling to {interval}s")
                continue
            raise error

        raise OAuthError("expired_token", "the device login was not completed in time")
