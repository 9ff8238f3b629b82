from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo

# Validation context for payloads read from resource files. Checks that only
# apply to what a user submits look for it; API responses are validated without it.
RESOURCE_FILE = "resource_file"
FILE_CONTEXT = {RESOURCE_FILE: True}


def from_resource_file(info: ValidationInfo) -> bool:
    return bool(info.context and info.context.get(RESOURCE_FILE))


class VerifyModel(BaseModel):
    """Base for API payloads: camelCase on the wire, unknown fields preserved."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def to_dict(self) -> Dict[str, Any]:
        """Dump as API JSON (aliases, no unset optionals)."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Meta(VerifyModel):
    """Server-maintained bookkeeping attached to SCIM and policy resources."""

    resource_type: Optional[str] = Field(None, alias="resourceType")
    created: Optional[str] = None
    last_modified: Optional[str] = Field(None, alias="lastModified")
    location: Optional[str] = None
    version: Optional[str] = None


class PatchOperation(VerifyModel):
    op: str
    path: Optional[str] = None
    value: Optional[Any] = None


PATCH_OP_SCHEMA = "urn:ietf:params:scim:api:messages:2.0:PatchOp"


class SCIMPatch(VerifyModel):
    """SCIM 2.0 PatchOp request body."""

    schemas: List[str] = Field(default_factory=lambda: [PATCH_OP_SCHEMA])
    operations: List[PatchOperation] = Field(default_factory=list, alias="Operations")
