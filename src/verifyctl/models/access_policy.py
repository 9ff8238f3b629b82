from typing import Any, Dict, List, Optional

from pydantic import Field

from verifyctl.models.common import VerifyModel


class RuleResult(VerifyModel):
    action: str
    server_side_actions: Optional[List[Dict[str, Any]]] = Field(
        None, alias="serverSideActions"
    )
    authn_methods: Optional[List[str]] = Field(None, alias="authnMethods")


class Rule(VerifyModel):
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    always_run: Optional[bool] = Field(None, alias="alwaysRun")
    first_factor: Optional[bool] = Field(None, alias="firstFactor")
    conditions: Optional[Dict[str, Any]] = None
    result: Optional[RuleResult] = None


class PolicyMeta(VerifyModel):
    state: Optional[str] = None
    revision: Optional[int] = None
    label: Optional[str] = None
    predefined: Optional[bool] = None
    created: Optional[int] = None
    created_by: Optional[str] = Field(None, alias="createdBy")
    last_active: Optional[int] = Field(None, alias="lastActive")
    modified: Optional[int] = None
    modified_by: Optional[str] = Field(None, alias="modifiedBy")
    scope: Optional[List[str]] = None
    enforcement_type: Optional[str] = Field(None, alias="enforcementType")


class AccessPolicy(VerifyModel):
    """An access policy stored in ``/v5.0/policyvault/accesspolicy``."""

    id: Optional[int] = None
    name: str
    description: Optional[str] = None
    rules: List[Rule] = Field(default_factory=list)
    meta: Optional[PolicyMeta] = None
    validations: Optional[Dict[str, Any]] = None
    required_subscriptions: Optional[List[str]] = Field(
        None, alias="requiredSubscriptions"
    )

    @classmethod
    def boilerplate(cls) -> "AccessPolicy":
        return cls(
            name="<policy name>",
            description="<description>",
            rules=[
                Rule(
                    name="<rule name>",
                    always_run=False,
                    first_factor=False,
                    conditions={},
                    result=RuleResult(action="ACTION_ALLOW"),
                )
            ],
            meta=PolicyMeta(state="ACTIVE", scope=["administrators"]),
        )
