"""
Application (single sign-on integration) resources.

The application schema is wide and varies by template, so only the common
top-level fields are typed; provider specific settings pass through untouched.
"""

from typing import Any, Dict, List, Optional

from pydantic import Field

from verifyctl.models.common import VerifyModel

APPLICATION_TYPES = ("oidc", "saml", "aclc", "bookmark")


class ApplicationLinks(VerifyModel):
    self_link: Optional[Dict[str, Any]] = Field(None, alias="self")


class Application(VerifyModel):
    """An application registered under ``/v1.0/applications``."""

    id: Optional[str] = None
    name: str
    description: Optional[str] = None
    template_id: Optional[str] = Field(None, alias="templateId")
    application_state: Optional[bool] = Field(None, alias="applicationState")
    approval_required: Optional[bool] = Field(None, alias="approvalRequired")
    sign_on_url: Optional[str] = Field(None, alias="signonUrl")
    visible_on_launchpad: Optional[bool] = Field(None, alias="visibleOnLaunchpad")
    owners: Optional[List[str]] = None
    providers: Optional[Dict[str, Any]] = None
    provisioning: Optional[Dict[str, Any]] = None
    attribute_mappings: Optional[List[Dict[str, Any]]] = Field(
        None, alias="attributeMappings"
    )
    customization: Optional[Dict[str, Any]] = None
    links: Optional[ApplicationLinks] = Field(None, alias="_links")

    @property
    def application_id(self) -> Optional[str]:
        """ID of the application, taken from its self link when ``id`` is absent."""
        if self.id:
            return self.id
        if self.links and self.links.self_link:
            href = self.links.self_link.get("href", "")
            return href.rstrip("/").rsplit("/", 1)[-1] or None
        return None

    @classmethod
    def boilerplate(cls, application_type: str = "") -> "Application":
        """
        Placeholder application, optionally preset for one sign-on protocol.

        Args:
            application_type: One of ``oidc``, ``saml``, ``aclc``, ``bookmark`` or empty
        """
        application_type = (application_type or "").lower()
        if application_type and application_type not in APPLICATION_TYPES:
            raise ValueError("unknown application type")

        app = cls(
            name="<application name>",
            description="<description>",
            application_state=True,
            visible_on_launchpad=True,
        )
        if not application_type:
            return app

        if application_type == "oidc":
            app.providers = {
                "oidc": {
                    "properties": {
                        "grantTypes": {"authorizationCode": True},
                        "redirectUris": ["<redirect uri>"],
                    }
                },
                "sso": {"userOptions": "oidc"},
            }
        elif application_type == "saml":
            app.providers = {
                "saml": {
                    "properties": {
                        "providerId": "<entity id>",
                        "assertionConsumerServiceUrl": "<acs url>",
                    }
                },
                "sso": {"userOptions": "saml"},
            }
        elif application_type == "aclc":
            app.providers = {
                "oidc": {
                    "properties": {
                        "grantTypes": {"clientCredentials": True},
                    }
                },
                "sso": {"userOptions": "aclc"},
            }
        else:
            app.providers = {"bookmark": {"properties": {"url": "<bookmark url>"}}}
        return app
