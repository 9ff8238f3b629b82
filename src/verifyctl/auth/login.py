"""Choose the login strategy described by an auth resource and run it."""

import logging
from typing import Callable, Optional

from verifyctl.api.http_client import HttpClient
from verifyctl.auth.oauth import (
    ClientAuth,
    ClientSecretPost,
    OAuthClient,
    PrivateKeyJWT,
    TokenResponse,
    load_private_key,
)
from verifyctl.errors import InvalidInputError, InvalidKeyError
from verifyctl.models.auth import AuthResource

logger = logging.getLogger(__name__)

UNSUPPORTED_USER_GRANTS = ("auth_code", "jwt_bearer")


def client_auth_for(resource: AuthResource) -> ClientAuth:
    """Build the client authentication named by ``auth_type``."""
    if resource.uses_private_key_jwt:
        if not resource.key:
            raise InvalidKeyError("'key' is required when 'auth_type' is private_key_jwt")
        return PrivateKeyJWT(resource.client_id, load_private_key(resource.key))
    return ClientSecretPost(resource.client_id, resource.client_secret)


def acquire_token(
    tenant: str,
    resource: AuthResource,
    notify: Callable[[str], None],
    http_client: Optional[HttpClient] = None,
    max_polls: Optional[int] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> TokenResponse:
    """
    Obtain an access token for ``tenant``.

    Args:
        tenant: Tenant host name
        resource: Login properties
        notify: Receives the message asking the user to open the login URL
        http_client: HTTP client to use
        max_polls: Bound on device flow token polls
        sleep: Wait function used between device flow polls

    Returns:
        The token response
    """
    if resource.user and resource.grant_type in UNSUPPORTED_USER_GRANTS:
        raise InvalidInputError(f"grant type '{resource.grant_type}' is not supported")

    client = OAuthClient(
        tenant,
        client_auth_for(resource),
        scopes=resource.scopes,
        parameters=resource.parameters,
        http_client=http_client,
        sleep=sleep,
    )

    if not resource.user:
        logger.debug(f"Requesting a client credentials token from {tenant}")
        return client.token_with_client_credentials()

    device_auth = client.authorize_with_device_flow()
    url = device_auth.login_url
    if not device_auth.verification_uri_complete and device_auth.user_code:
        url = f"{url} (code: {device_auth.user_code})"
    notify(f"Complete login by accessing the URL: {url}")
    return client.token_with_device_flow(device_auth, max_polls=max_polls)
