from typing import List, Optional

from pydantic import Field

from verifyctl.models.common import Meta, VerifyModel


class PasswordStrength(VerifyModel):
    password_min_length: Optional[int] = Field(None, alias="passwordMinLength")
    password_max_length: Optional[int] = Field(None, alias="passwordMaxLength")
    min_alpha: Optional[int] = Field(None, alias="minAlpha")
    min_lower_case_chars: Optional[int] = Field(None, alias="minLowerCaseChars")
    min_upper_case_chars: Optional[int] = Field(None, alias="minUpperCaseChars")
    min_numbers: Optional[int] = Field(None, alias="minNumbers")
    min_special_chars: Optional[int] = Field(None, alias="minSpecialChars")
    min_other_chars: Optional[int] = Field(None, alias="minOtherChars")
    max_repeated_chars: Optional[int] = Field(None, alias="maxRepeatedChars")
    disallowed_chars: Optional[str] = Field(None, alias="disallowedChars")


class PasswordSecurity(VerifyModel):
    password_max_age: Optional[int] = Field(None, alias="pwdMaxAge")
    password_expire_warning: Optional[int] = Field(None, alias="pwdExpireWarning")
    password_min_age: Optional[int] = Field(None, alias="pwdMinAge")
    password_in_history: Optional[int] = Field(None, alias="pwdInHistory")
    password_lockout: Optional[bool] = Field(None, alias="pwdLockout")
    password_max_failure: Optional[int] = Field(None, alias="pwdMaxFailure")
    password_lockout_duration: Optional[int] = Field(None, alias="pwdLockoutDuration")


class PasswordPolicy(VerifyModel):
    """A password policy under ``/v3.0/passwordpolicies``."""

    id: Optional[str] = None
    schemas: Optional[List[str]] = None
    policy_name: str = Field(..., alias="policyName")
    policy_description: Optional[str] = Field(None, alias="policyDescription")
    password_strength: Optional[PasswordStrength] = Field(None, alias="passwordStrength")
    password_security: Optional[PasswordSecurity] = Field(None, alias="passwordSecurity")
    meta: Optional[Meta] = None

    @classmethod
    def boilerplate(cls) -> "PasswordPolicy":
        return cls(
            policy_name="<policy name>",
            policy_description="<description>",
            password_strength=PasswordStrength(
                password_min_length=8,
                min_lower_case_chars=1,
                min_upper_case_chars=1,
                min_numbers=1,
                min_special_chars=1,
            ),
            password_security=PasswordSecurity(
                password_max_age=7776000,
                password_in_history=5,
                password_lockout=True,
                password_max_failure=5,
            ),
        )
