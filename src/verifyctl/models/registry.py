"""
Registry of resource types and typed parsing of resource envelopes.

Every type known to the CLI is described once here (kind, API version,
required entitlement, payload model). Envelopes read from files are validated
through a discriminated union keyed on ``kind`` so ``data`` arrives as the
right model.
"""

from dataclasses import dataclass
from typing import Annotated, Any, Dict, Literal, Optional, Type, Union

from pydantic import BaseModel, Field, TypeAdapter, create_model

from verifyctl.models.access_policy import AccessPolicy
from verifyctl.models.api_client import APIClient
from verifyctl.models.application import Application
from verifyctl.models.attribute import Attribute
from verifyctl.models.auth import AuthResource
from verifyctl.models.common import FILE_CONTEXT
from verifyctl.models.certificate import PersonalCert, SignerCert
from verifyctl.models.group import Group, GroupPatchRequest
from verifyctl.models.identity_agent import IdentityAgent
from verifyctl.models.identity_source import IdentitySource
from verifyctl.models.password_policy import PasswordPolicy
from verifyctl.models.resource import (
    ACCESS_POLICY_KIND,
    API_CLIENT_KIND,
    APPLICATION_KIND,
    ATTRIBUTE_KIND,
    AUTH_KIND,
    GROUP_KIND,
    IDENTITY_AGENT_KIND,
    IDENTITY_SOURCE_KIND,
    PASSWORD_POLICY_KIND,
    PERSONAL_CERT_KIND,
    SIGNER_CERT_KIND,
    THEME_KIND,
    USER_KIND,
    Envelope,
    ResourceObject,
    normalize_kind,
)
from verifyctl.models.theme import Theme
from verifyctl.models.user import User, UserPatchRequest

ENTITLEMENTS_MESSAGE = (
    "Choose any of the following entitlements to configure your application or API client:\n"
)


@dataclass(frozen=True)
class ResourceType:
    """Static description of one resource type."""

    name: str
    plural: str
    kind: str
    api_version: str
    entitlements: str
    model: Type[BaseModel]
    replace_model: Optional[Type[BaseModel]] = None

    @property
    def update_model(self) -> Type[BaseModel]:
        return self.replace_model or self.model

    def entitlements_message(self) -> str:
        return f"{ENTITLEMENTS_MESSAGE}  {self.entitlements}"

    def envelope(
        self, data: Any, metadata: Optional[Dict[str, Any]] = None
    ) -> ResourceObject:
        """Wrap a payload in an envelope of this type."""
        return ResourceObject(
            kind=self.kind,
            api_version=self.api_version,
            metadata=metadata,
            data=data,
        )


USER = ResourceType(
    "user", "users", USER_KIND, "2.0", "Manage users", User, UserPatchRequest
)
GROUP = ResourceType(
    "group", "groups", GROUP_KIND, "2.0", "Manage groups", Group, GroupPatchRequest
)
APPLICATION = ResourceType(
    "application",
    "applications",
    APPLICATION_KIND,
    "1.0",
    "Manage applications",
    Application,
)
API_CLIENT = ResourceType(
    "apiclient", "apiclients", API_CLIENT_KIND, "1.0", "Manage API Clients", APIClient
)
ACCESS_POLICY = ResourceType(
    "accesspolicy",
    "accesspolicies",
    ACCESS_POLICY_KIND,
    "5.0",
    "Manage Access Policies",
    AccessPolicy,
)
IDENTITY_SOURCE = ResourceType(
    "identitysource",
    "identitysources",
    IDENTITY_SOURCE_KIND,
    "2.0",
    "Manage identitySources",
    IdentitySource,
)
IDENTITY_AGENT = ResourceType(
    "identityagent",
    "identityagents",
    IDENTITY_AGENT_KIND,
    "1.0",
    "Manage Identity Agents",
    IdentityAgent,
)
PERSONAL_CERT = ResourceType(
    "personalcert",
    "personalcerts",
    PERSONAL_CERT_KIND,
    "1.0",
    "Manage personal certificates",
    PersonalCert,
)
SIGNER_CERT = ResourceType(
    "signercert",
    "signercerts",
    SIGNER_CERT_KIND,
    "1.0",
    "Manage signer certificates",
    SignerCert,
)
PASSWORD_POLICY = ResourceType(
    "passwordpolicy",
    "passwordpolicies",
    PASSWORD_POLICY_KIND,
    "3.0",
    "Manage password policies",
    PasswordPolicy,
)
THEME = ResourceType(
    "theme",
    "themes",
    THEME_KIND,
    "1.0",
    "manageTemplates (Manage templates and themes) or readTemplates (Read templates and themes)",
    Theme,
)
ATTRIBUTE = ResourceType(
    "attribute", "attributes", ATTRIBUTE_KIND, "1.0", "Manage attributes", Attribute
)

RESOURCE_TYPES = (
    USER,
    GROUP,
    APPLICATION,
    API_CLIENT,
    ACCESS_POLICY,
    IDENTITY_SOURCE,
    IDENTITY_AGENT,
    PERSONAL_CERT,
    SIGNER_CERT,
    PASSWORD_POLICY,
    THEME,
    ATTRIBUTE,
)

_BY_KIND = {rt.kind: rt for rt in RESOURCE_TYPES}


def resource_type_for_kind(kind: Optional[str]) -> Optional[ResourceType]:
    return _BY_KIND.get(normalize_kind(kind) or "")


def _typed_envelope(kind: str, model: Type[BaseModel], suffix: str) -> Type[Envelope]:
    return create_model(
        f"{model.__name__}{suffix}",
        __base__=Envelope,
        kind=(Literal[kind], ...),
        data=(model, ...),
    )


def _union_adapter(envelopes) -> TypeAdapter:
    return TypeAdapter(Annotated[Union[tuple(envelopes)], Field(discriminator="kind")])


_CREATE_ADAPTER = _union_adapter(
    [_typed_envelope(AUTH_KIND, AuthResource, "Object")]
    + [_typed_envelope(rt.kind, rt.model, "Object") for rt in RESOURCE_TYPES]
)

_REPLACE_ADAPTER = _union_adapter(
    [_typed_envelope(rt.kind, rt.update_model, "UpdateObject") for rt in RESOURCE_TYPES]
)


def _prepare(document: Dict[str, Any]) -> Dict[str, Any]:
    prepared = dict(document)
    prepared["kind"] = normalize_kind(prepared.get("kind"))
    return prepared


def parse_resource(document: Dict[str, Any]) -> Envelope:
    """
    Validate an envelope whose ``data`` is a full resource (create and auth files).

    Args:
        document: Envelope read from a resource file

    Returns:
        An envelope whose ``data`` is the model registered for its kind

    Raises:
        pydantic.ValidationError: for an unknown kind or invalid data
    """
    return _CREATE_ADAPTER.validate_python(_prepare(document), context=FILE_CONTEXT)


def parse_update_resource(document: Dict[str, Any]) -> Envelope:
    """Validate an envelope whose ``data`` is an update (replace files)."""
    return _REPLACE_ADAPTER.validate_python(_prepare(document), context=FILE_CONTEXT)
