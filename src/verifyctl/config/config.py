"""
Configuration for verifyctl.

Two layers live here:

- ``Settings``: process-level knobs read from the environment
  (``VERIFY_HOME``, ``LOG_LEVEL``, ``VERIFY_HTTP_TIMEOUT``).
- ``CLIConfig``: the persisted YAML file holding one bearer token per tenant
  and the tenant currently in use.
"""

import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from verifyctl.errors import NoLoginSessionError, VerifyCtlError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = ".verify"
CONFIG_FILE_NAME = "config"
TRACE_LOG_FILE_NAME = "trace.log"

LOG_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


class Settings(BaseSettings):
    """Environment driven settings.

    Load order precedence (highest to lowest):
    - Environment variables
    - Defaults in this class
    """

    verify_home: Optional[Path] = Field(
        default=None,
        validation_alias=AliasChoices("VERIFY_HOME", "verify_home"),
        description="Directory holding the config file and trace log",
    )
    log_level: str = Field(
        default="info",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
        description="Trace log level: error, warn, info or debug",
    )
    http_timeout: float = Field(
        default=1800.0,
        validation_alias=AliasChoices("VERIFY_HTTP_TIMEOUT", "http_timeout"),
        description="Timeout in seconds for every HTTP request",
    )

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    @property
    def config_dir(self) -> Path:
        if self.verify_home:
            return Path(self.verify_home).expanduser()
        return Path.home() / DEFAULT_CONFIG_DIR

    @property
    def config_path(self) -> Path:
        return self.config_dir / CONFIG_FILE_NAME

    @property
    def trace_log_path(self) -> Path:
        return self.config_dir / TRACE_LOG_FILE_NAME

    @property
    def trace_log_level(self) -> int:
        return LOG_LEVELS.get(self.log_level.strip().lower(), logging.INFO)


def get_settings() -> Settings:
    """Read the settings from the current environment."""
    return Settings()


class AuthConfig(BaseModel):
    """Token issued for one tenant."""

    tenant: str
    token: str
    is_user: bool = Field(False, alias="isUser")

    model_config = ConfigDict(populate_by_name=True)


class CLIConfig(BaseModel):
    """Persisted login state: every tenant token plus the current tenant."""

    api_version: str = Field("1.0", alias="apiVersion")
    kind: str = "Config"
    tenant: str = ""
    auth: List[AuthConfig] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def load(cls, path: Path) -> "CLIConfig":
        """
        Load the config file, returning an empty config when it does not exist.

        Args:
            path: Location of the YAML config file

        Returns:
            The parsed configuration
        """
        path = Path(path)
        if not path.exists():
            logger.debug(f"No config file at {path}, starting empty")
            return cls()

        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise VerifyCtlError(f"unable to read config file '{path}': {e}") from e

        if not isinstance(data, dict):
            raise VerifyCtlError(f"unable to read config file '{path}': not a mapping")

        return cls.model_validate(data)

    def persist(self, path: Path) -> None:
        """Write the config as YAML, creating the parent directory if needed."""
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(
                    self.model_dump(by_alias=True),
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                )
        except OSError as e:
            raise VerifyCtlError(f"unable to write config file '{path}': {e}") from e

        logger.debug(f"Config written to {path}")

    def add_auth(self, auth: AuthConfig) -> None:
        """Store a tenant token, replacing any earlier entry for the same tenant."""
        for i, existing in enumerate(self.auth):
            if existing.tenant == auth.tenant:
                self.auth[i] = auth
                return
        self.auth.append(auth)

    def set_current_tenant(self, tenant: str) -> None:
        self.tenant = tenant

    def get_auth(self, tenant: str) -> Optional[AuthConfig]:
        for auth in self.auth:
            if auth.tenant == tenant:
                return auth
        return None

    def get_current_auth(self) -> AuthConfig:
        """Return the token of the current tenant or raise ``NoLoginSessionError``."""
        auth = self.get_auth(self.tenant) if self.tenant else None
        if auth is None or not auth.token:
            raise NoLoginSessionError()
        return auth
