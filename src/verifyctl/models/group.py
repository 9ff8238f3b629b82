"""SCIM 2.0 group resources."""

from typing import List, Optional

from pydantic import Field

from verifyctl.models.common import Meta, PatchOperation, SCIMPatch, VerifyModel

GROUP_SCHEMA = "urn:ietf:params:scim:schemas:core:2.0:Group"
IBM_GROUP_SCHEMA = "urn:ietf:params:scim:schemas:extension:ibm:2.0:Group"


class GroupMember(VerifyModel):
    type: Optional[str] = None
    value: str
    display: Optional[str] = None
    ref: Optional[str] = Field(None, alias="$ref")


class GroupOwner(VerifyModel):
    id: Optional[str] = None
    user_name: Optional[str] = Field(None, alias="userName")
    display_name: Optional[str] = Field(None, alias="displayName")


class IBMGroupExtension(VerifyModel):
    description: Optional[str] = None
    owners: Optional[List[GroupOwner]] = None


class Group(VerifyModel):
    """A tenant group as exposed by ``/v2.0/Groups``."""

    schemas: Optional[List[str]] = None
    id: Optional[str] = None
    external_id: Optional[str] = Field(None, alias="externalId")
    display_name: str = Field(..., alias="displayName")
    visible: Optional[bool] = None
    members: Optional[List[GroupMember]] = None
    ibm_extension: Optional[IBMGroupExtension] = Field(None, alias=IBM_GROUP_SCHEMA)
    meta: Optional[Meta] = None

    @classmethod
    def boilerplate(cls) -> "Group":
        return cls(
            schemas=[GROUP_SCHEMA, IBM_GROUP_SCHEMA],
            display_name="<group name>",
            members=[GroupMember(type="user", value="<username>")],
            ibm_extension=IBMGroupExtension(description="<description>"),
        )


class GroupPatchRequest(VerifyModel):
    """
    Operations to apply to the group identified by ``displayName``.

    Member operations may name users by ``userName``; they are resolved to user
    IDs before the patch is sent.
    """

    display_name: str = Field(..., alias="displayName")
    scim_patch: SCIMPatch = Field(default_factory=SCIMPatch, alias="scimPatch")

    @classmethod
    def boilerplate(cls) -> "GroupPatchRequest":
        return cls(
            display_name="<group name>",
            scim_patch=SCIMPatch(
                operations=[
                    PatchOperation(
                        op="add",
                        path="members",
                        value=[{"type": "user", "value": "<username>"}],
                    ),
                    PatchOperation(op="remove", path='members[value eq "<username>"]'),
                ]
            ),
        )
