"""
The resource envelope shared by every file read or written by verifyctl.

A resource file looks like::

    kind: IBMVerifyUser
    apiVersion: "2.0"
    data:
      userName: bob

Lists returned by ``get`` wrap several envelopes in an ``IBMVerifyList``.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from verifyctl.errors import ResourceFileError

logger = logging.getLogger(__name__)

KIND_PREFIX = "IBMVerify"

AUTH_KIND = "IBMVerifyAuth"
USER_KIND = "IBMVerifyUser"
GROUP_KIND = "IBMVerifyGroup"
APPLICATION_KIND = "IBMVerifyApplication"
API_CLIENT_KIND = "IBMVerifyAPIClient"
ACCESS_POLICY_KIND = "IBMVerifyAccessPolicy"
IDENTITY_SOURCE_KIND = "IBMVerifyIdentitySource"
IDENTITY_AGENT_KIND = "IBMVerifyIdentityAgent"
PERSONAL_CERT_KIND = "IBMVerifyPersonalCert"
SIGNER_CERT_KIND = "IBMVerifySignerCert"
PASSWORD_POLICY_KIND = "IBMVerifyPasswordPolicy"
THEME_KIND = "IBMVerifyTheme"
THEME_FILE_KIND = "IBMVerifyThemeFile"
ATTRIBUTE_KIND = "IBMVerifyAttribute"
LIST_KIND = "IBMVerifyList"

# Spellings written by earlier releases, mapped to the canonical kind.
LEGACY_KINDS = {
    "IBMVerifyApiClient": API_CLIENT_KIND,
    "IBMVerifyApiclient": API_CLIENT_KIND,
    "IBMVerifyApplications": APPLICATION_KIND,
    "IBMVerifyAccesspolicy": ACCESS_POLICY_KIND,
}

JSON_EXTENSIONS = (".json",)
YAML_EXTENSIONS = (".yaml", ".yml")


def normalize_kind(kind: Optional[str]) -> Optional[str]:
    if kind is None:
        return None
    return LEGACY_KINDS.get(kind, kind)


class ResourceObjectMetadata(BaseModel):
    uid: Optional[str] = Field(None, alias="UID")
    name: Optional[str] = None
    uri: Optional[str] = Field(None, alias="resourceUri")
    limit: Optional[int] = None
    page: Optional[int] = None
    total: Optional[int] = None
    count: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True)


def _metadata_dict(metadata: Optional[ResourceObjectMetadata]) -> Dict[str, Any]:
    if metadata is None:
        return {}
    return {key: value for key, value in metadata.model_dump(by_alias=True).items() if value}


class Envelope(BaseModel):
    """A single resource wrapped with its kind and API version."""

    kind: str = ""
    api_version: str = Field("", alias="apiVersion")
    metadata: Optional[ResourceObjectMetadata] = None
    data: Any = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("api_version", mode="before")
    @classmethod
    def _version_as_text(cls, value: Any) -> Any:
        # unquoted YAML versions such as 2.0 parse as numbers
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    def to_dict(self) -> Dict[str, Any]:
        """Envelope as plain data, with empty metadata dropped."""
        result: Dict[str, Any] = {"kind": self.kind, "apiVersion": self.api_version}
        metadata = _metadata_dict(self.metadata)
        if metadata:
            result["metadata"] = metadata
        data = self.data
        if isinstance(data, BaseModel):
            data = data.model_dump(by_alias=True, exclude_none=True, mode="json")
        result["data"] = data
        return result


class ResourceObject(Envelope):
    """Untyped envelope; legacy kind spellings are mapped to the canonical kind."""

    @field_validator("kind", mode="before")
    @classmethod
    def _canonical_kind(cls, value: Any) -> Any:
        if isinstance(value, str):
            return normalize_kind(value)
        return value


class ResourceObjectList(BaseModel):
    """Envelope for the result of a list operation."""

    kind: str = LIST_KIND
    api_version: str = Field("", alias="apiVersion")
    metadata: Optional[ResourceObjectMetadata] = None
    items: List[ResourceObject] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"kind": self.kind, "apiVersion": self.api_version}
        metadata = _metadata_dict(self.metadata)
        if metadata:
            result["metadata"] = metadata
        result["items"] = [item.to_dict() for item in self.items]
        return result


def read_document(path: Union[str, Path]) -> Any:
    """
    Read a JSON or YAML document, choosing the parser from the file extension.

    Args:
        path: File to read

    Returns:
        The parsed document

    Raises:
        ResourceFileError: when the file is missing or cannot be parsed
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ResourceFileError(str(path), e.strerror or str(e)) from e

    try:
        if path.suffix.lower() in JSON_EXTENSIONS:
            return json.loads(content)
        # .yaml, .yml and unknown extensions
        return yaml.safe_load(content)
    except (ValueError, yaml.YAMLError) as e:
        raise ResourceFileError(str(path), str(e)) from e


def load_from_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a resource file and return its top-level mapping."""
    document = read_document(path)
    if not isinstance(document, dict):
        raise ResourceFileError(str(path), "expected a mapping at the top level")
    logger.debug(f"Loaded resource file {path}")
    return document


def load_resource_object(path: Union[str, Path]) -> ResourceObject:
    """Read a resource file as an untyped envelope."""
    document = load_from_file(path)
    try:
        return ResourceObject.model_validate(document)
    except ValueError as e:
        raise ResourceFileError(str(path), str(e)) from e
