from typing import List, Optional

from pydantic import Field, ValidationInfo, model_validator

from verifyctl.models.common import VerifyModel, from_resource_file

AGENT_PURPOSES = ("PROV", "LDAPAUTH", "EXTAUTHN")


class AgentModule(VerifyModel):
    id: Optional[str] = None
    enabled: Optional[bool] = None


class IdentityAgent(VerifyModel):
    """An on-premise identity agent registered under ``/v1.0/identity-agents``."""

    id: Optional[str] = None
    name: Optional[str] = None
    purpose: Optional[str] = None
    description: Optional[str] = None
    references: Optional[List[str]] = None
    modules: Optional[List[AgentModule]] = None
    cert_label: Optional[str] = Field(None, alias="certLabel")

    @model_validator(mode="after")
    def _check_resource_file(self, info: ValidationInfo) -> "IdentityAgent":
        if not from_resource_file(info):
            return self
        if not self.name:
            raise ValueError("name is required")
        if self.purpose and self.purpose not in AGENT_PURPOSES:
            raise ValueError(f"purpose must be one of {', '.join(AGENT_PURPOSES)}")
        return self

    @classmethod
    def boilerplate(cls) -> "IdentityAgent":
        return cls(
            name="<agent name>",
            purpose="LDAPAUTH",
            description="<description>",
            modules=[AgentModule(id="<module id>", enabled=True)],
        )
