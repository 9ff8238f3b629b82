from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

PRIVATE_KEY_JWT = "private_key_jwt"
CLIENT_SECRET_POST = "client_secret_post"


class AuthResource(BaseModel):
    """
    Login properties read from an ``IBMVerifyAuth`` resource file.

    ``key`` holds a private JWK for ``private_key_jwt`` client authentication,
    either inline or as ``@<path>`` to a file holding it.
    """

    tenant: Optional[str] = None
    client_id: str
    auth_type: Optional[str] = None
    client_secret: Optional[str] = None
    user: bool = False
    grant_type: Optional[str] = None
    scopes: Optional[List[str]] = None
    parameters: Optional[Dict[str, str]] = None
    key: Optional[Union[str, Dict[str, Any]]] = None

    model_config = ConfigDict(extra="ignore")

    @property
    def uses_private_key_jwt(self) -> bool:
        return (self.auth_type or "").lower() == PRIVATE_KEY_JWT

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True, mode="json")

    @classmethod
    def boilerplate(cls) -> "AuthResource":
        return cls(
            client_id="<client id>",
            auth_type=CLIENT_SECRET_POST,
            client_secret="<client secret>",
            user=False,
        )
