from typing import List, Optional

from pydantic import Field

from verifyctl.models.common import VerifyModel


class SchemaAttribute(VerifyModel):
    name: Optional[str] = None
    attribute_name: Optional[str] = Field(None, alias="attributeName")
    scim_name: Optional[str] = Field(None, alias="scimName")
    custom_attribute: Optional[bool] = Field(None, alias="customAttribute")


class Attribute(VerifyModel):
    """A tenant attribute definition under ``/v1.0/attributes``."""

    id: Optional[str] = None
    name: str
    description: Optional[str] = None
    scope: Optional[str] = None
    source_type: Optional[str] = Field(None, alias="sourceType")
    datatype: Optional[str] = None
    schema_attribute: Optional[SchemaAttribute] = Field(None, alias="schemaAttribute")
    tags: Optional[List[str]] = None
    value: Optional[str] = None
    cred_name: Optional[str] = Field(None, alias="credName")

    @classmethod
    def boilerplate(cls) -> "Attribute":
        return cls(
            name="<attribute name>",
            description="<description>",
            scope="tenant",
            source_type="schema",
            datatype="string",
            tags=["sso"],
            schema_attribute=SchemaAttribute(
                scim_name="<scim name>", custom_attribute=True
            ),
        )
