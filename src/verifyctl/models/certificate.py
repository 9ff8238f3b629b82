"""Personal (key pair) and signer (trusted) certificates."""

from typing import Optional

from pydantic import Field, ValidationInfo, model_validator

from verifyctl.models.common import VerifyModel, from_resource_file


class PersonalCert(VerifyModel):
    label: str
    cert: Optional[str] = None
    password: Optional[str] = None
    is_default: Optional[bool] = Field(None, alias="isDefault")
    subject: Optional[str] = None
    issuer: Optional[str] = None
    not_before: Optional[str] = Field(None, alias="notbefore")
    not_after: Optional[str] = Field(None, alias="notafter")
    keysize: Optional[int] = None
    version: Optional[int] = None
    serial_number: Optional[str] = Field(None, alias="serialNumber")

    @classmethod
    def boilerplate(cls) -> "PersonalCert":
        return cls(
            label="<label>",
            cert="<base64 encoded PKCS#12 key store>",
            password="<key store password>",
            is_default=False,
        )


class SignerCert(VerifyModel):
    label: str
    cert: Optional[str] = None
    subject: Optional[str] = None
    issuer: Optional[str] = None
    not_before: Optional[str] = Field(None, alias="notbefore")
    not_after: Optional[str] = Field(None, alias="notafter")
    serial_number: Optional[str] = Field(None, alias="serialNumber")

    @model_validator(mode="after")
    def _check_resource_file(self, info: ValidationInfo) -> "SignerCert":
        if from_resource_file(info) and not self.cert:
            raise ValueError("cert is required")
        return self

    @classmethod
    def boilerplate(cls) -> "SignerCert":
        return cls(label="<label>", cert="<PEM encoded certificate>")
