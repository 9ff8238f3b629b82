from typing import Any, Dict, List, Optional

from pydantic import Field, ValidationInfo, model_validator

from verifyctl.models.common import VerifyModel, from_resource_file


class SourceProperty(VerifyModel):
    key: str
    value: Optional[str] = None
    sensitive: Optional[bool] = None


class IdentitySource(VerifyModel):
    """An identity source registered under ``/v2.0/identitysources``."""

    id: Optional[str] = None
    instance_name: str = Field(..., alias="instanceName")
    source_type_id: Optional[int] = Field(None, alias="sourceTypeId")
    enabled: Optional[bool] = None
    status: Optional[str] = None
    predefined: Optional[bool] = None
    properties: Optional[List[SourceProperty]] = None
    attribute_mappings: Optional[List[Dict[str, Any]]] = Field(
        None, alias="attributeMappings"
    )

    @model_validator(mode="after")
    def _check_resource_file(self, info: ValidationInfo) -> "IdentitySource":
        if from_resource_file(info) and self.source_type_id is None:
            raise ValueError("sourceTypeId is required")
        return self

    @classmethod
    def boilerplate(cls) -> "IdentitySource":
        return cls(
            instance_name="<instance name>",
            source_type_id=0,
            enabled=True,
            properties=[SourceProperty(key="<key>", value="<value>", sensitive=False)],
        )
