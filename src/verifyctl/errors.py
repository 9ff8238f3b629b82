"""
Exception hierarchy for verifyctl.

Every failure a command can hit is raised as a ``VerifyCtlError`` subclass so
the CLI layer can report it uniformly and exit with status 1.
"""

from typing import Optional


class VerifyCtlError(Exception):
    """Base class for all verifyctl errors."""


class InvalidInputError(VerifyCtlError):
    """A flag or resource field failed local validation."""


class ResourceFileError(VerifyCtlError):
    """A resource file could not be read or parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"unable to read resource file '{path}': {reason}")


class NoLoginSessionError(VerifyCtlError):
    """No token is stored for the current tenant."""

    def __init__(self, message: str = "No login session available. Use:\n  verifyctl auth -h"):
        super().__init__(message)


class TransportError(VerifyCtlError):
    """The HTTP request never produced a response."""


class ApiError(VerifyCtlError):
    """The tenant answered with a non-success status code."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class LoginRequiredError(ApiError):
    """401: the stored token is missing, expired or revoked."""


class ForbiddenError(ApiError):
    """403: the caller lacks the entitlement for the operation."""


class BadRequestError(ApiError):
    """400: the tenant rejected the request payload."""


class NotFoundError(ApiError):
    """404: the addressed resource does not exist."""


class OAuthError(VerifyCtlError):
    """An OAuth 2.0 token or device authorization request failed."""

    def __init__(self, error: str, description: Optional[str] = None):
        self.error = error
        self.description = description
        message = f"{error}: {description}" if description else error
        super().__init__(message)


class InvalidKeyError(VerifyCtlError):
    """The private key supplied for JWT client authentication is unusable."""
