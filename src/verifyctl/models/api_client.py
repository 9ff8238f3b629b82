from typing import Any, Dict, List, Optional

from pydantic import Field, ValidationInfo, model_validator

from verifyctl.models.common import VerifyModel, from_resource_file


class Scope(VerifyModel):
    name: str
    description: Optional[str] = None


class OverrideSettings(VerifyModel):
    restrict_scopes: Optional[bool] = Field(None, alias="restrictScopes")
    scopes: Optional[List[Scope]] = None


class AdditionalConfig(VerifyModel):
    client_auth_method: Optional[str] = Field(None, alias="clientAuthMethod")
    validate_client_assertion_jti: Optional[bool] = Field(
        None, alias="validateClientAssertionJti"
    )
    allowed_client_assertion_verification_keys: Optional[List[str]] = Field(
        None, alias="allowedClientAssertionVerificationKeys"
    )


class APIClient(VerifyModel):
    """An API client registered under ``/v1.0/apiclients``."""

    id: Optional[str] = None
    client_id: Optional[str] = Field(None, alias="clientId")
    client_name: Optional[str] = Field(None, alias="clientName")
    client_secret: Optional[str] = Field(None, alias="clientSecret")
    entitlements: Optional[List[str]] = None
    enabled: Optional[bool] = None
    description: Optional[str] = None
    ip_filter_op: Optional[str] = Field(None, alias="ipFilterOp")
    ip_filters: Optional[List[str]] = Field(None, alias="ipFilters")
    jwk_uri: Optional[str] = Field(None, alias="jwkUri")
    override_settings: Optional[OverrideSettings] = Field(None, alias="overrideSettings")
    additional_config: Optional[AdditionalConfig] = Field(None, alias="additionalConfig")
    additional_properties: Optional[Dict[str, Any]] = Field(
        None, alias="additionalProperties"
    )

    @model_validator(mode="after")
    def _check_resource_file(self, info: ValidationInfo) -> "APIClient":
        if not from_resource_file(info):
            return self
        if not (self.client_name or "").strip():
            raise ValueError("clientName is required")
        if not self.entitlements:
            raise ValueError("entitlements list is empty")
        return self

    @classmethod
    def boilerplate(cls) -> "APIClient":
        return cls(
            client_name="<client name>",
            entitlements=["<entitlement>"],
            enabled=True,
            description="<description>",
            override_settings=OverrideSettings(
                restrict_scopes=False, scopes=[Scope(name="<scope>")]
            ),
        )
