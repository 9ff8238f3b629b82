"""SCIM 2.0 user resources."""

from typing import List, Optional

from pydantic import Field

from verifyctl.models.common import Meta, PatchOperation, SCIMPatch, VerifyModel

USER_SCHEMA = "urn:ietf:params:scim:schemas:core:2.0:User"
IBM_USER_SCHEMA = "urn:ietf:params:scim:schemas:extension:ibm:2.0:User"
ENTERPRISE_USER_SCHEMA = "urn:ietf:params:scim:schemas:extension:enterprise:2.0:User"


class Name(VerifyModel):
    formatted: Optional[str] = None
    family_name: Optional[str] = Field(None, alias="familyName")
    given_name: Optional[str] = Field(None, alias="givenName")
    middle_name: Optional[str] = Field(None, alias="middleName")
    honorific_prefix: Optional[str] = Field(None, alias="honorificPrefix")
    honorific_suffix: Optional[str] = Field(None, alias="honorificSuffix")


class Email(VerifyModel):
    type: Optional[str] = None
    value: str


class PhoneNumber(VerifyModel):
    type: Optional[str] = None
    value: str


class UserGroup(VerifyModel):
    id: Optional[str] = None
    display_name: Optional[str] = Field(None, alias="displayName")
    ref: Optional[str] = Field(None, alias="$ref")


class UserCustomAttribute(VerifyModel):
    name: str
    values: List[str] = Field(default_factory=list)


class IBMUserExtension(VerifyModel):
    user_category: Optional[str] = Field(None, alias="userCategory")
    two_fa_enabled: Optional[bool] = Field(None, alias="twoFAEnabled")
    realm: Optional[str] = None
    pwd_changed_time: Optional[str] = Field(None, alias="pwdChangedTime")
    account_expires: Optional[str] = Field(None, alias="accountExpires")
    groups: Optional[List[UserGroup]] = None
    custom_attributes: Optional[List[UserCustomAttribute]] = Field(
        None, alias="customAttributes"
    )


class EnterpriseUserExtension(VerifyModel):
    employee_number: Optional[str] = Field(None, alias="employeeNumber")
    department: Optional[str] = None
    division: Optional[str] = None
    organization: Optional[str] = None


class User(VerifyModel):
    """A tenant user as exposed by ``/v2.0/Users``."""

    schemas: Optional[List[str]] = None
    id: Optional[str] = None
    external_id: Optional[str] = Field(None, alias="externalId")
    user_name: str = Field(..., alias="userName")
    display_name: Optional[str] = Field(None, alias="displayName")
    title: Optional[str] = None
    preferred_language: Optional[str] = Field(None, alias="preferredLanguage")
    active: Optional[bool] = None
    name: Optional[Name] = None
    emails: Optional[List[Email]] = None
    phone_numbers: Optional[List[PhoneNumber]] = Field(None, alias="phoneNumbers")
    password: Optional[str] = None
    ibm_extension: Optional[IBMUserExtension] = Field(None, alias=IBM_USER_SCHEMA)
    enterprise_extension: Optional[EnterpriseUserExtension] = Field(
        None, alias=ENTERPRISE_USER_SCHEMA
    )
    meta: Optional[Meta] = None

    @classmethod
    def boilerplate(cls) -> "User":
        return cls(
            schemas=[USER_SCHEMA, IBM_USER_SCHEMA],
            user_name="<username>",
            name=Name(family_name="<surname>", given_name="<given name>"),
            emails=[Email(type="work", value="<email>")],
            phone_numbers=[PhoneNumber(type="mobile", value="<phone number>")],
            active=True,
            ibm_extension=IBMUserExtension(user_category="regular"),
        )


class UserPatchRequest(VerifyModel):
    """Operations to apply to the user identified by ``userName``."""

    user_name: str = Field(..., alias="userName")
    scim_patch: SCIMPatch = Field(default_factory=SCIMPatch, alias="scimPatch")

    @classmethod
    def boilerplate(cls) -> "UserPatchRequest":
        return cls(
            user_name="<username>",
            scim_patch=SCIMPatch(
                operations=[
                    PatchOperation(op="replace", path="active", value=False),
                    PatchOperation(op="add", path="title", value="<title>"),
                ]
            ),
        )
