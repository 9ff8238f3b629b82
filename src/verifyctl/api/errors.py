"""Map tenant HTTP status codes to verifyctl errors."""

import json
from typing import Optional

from verifyctl.api.http_client import Response
from verifyctl.errors import (
    ApiError,
    BadRequestError,
    ForbiddenError,
    LoginRequiredError,
    NotFoundError,
)

LOGIN_AGAIN_MESSAGE = "Login again."
FORBIDDEN_MESSAGE = (
    "You are not allowed to make this request. "
    "Check the client or application entitlements."
)
NOT_FOUND_MESSAGE = "Resource not found"


def classify_error(response: Response, default_message: str) -> Optional[ApiError]:
    """
    Translate the well known error statuses into typed errors.

    Args:
        response: Response returned by the tenant
        default_message: Message used when a 400 body cannot be parsed

    Returns:
        The matching error, or None when the status has no dedicated handling
    """
    status = response.status_code

    if status == 401:
        return LoginRequiredError(LOGIN_AGAIN_MESSAGE, status)

    if status == 403:
        return ForbiddenError(FORBIDDEN_MESSAGE, status)

    if status == 400:
        try:
            payload = json.loads(response.body or b"")
        except ValueError:
            return BadRequestError(f"bad request: {default_message}", status)

        message_id = message_description = ""
        if isinstance(payload, dict):
            message_id = payload.get("messageId") or ""
            message_description = payload.get("messageDescription") or ""

        if not message_id and not message_description:
            return BadRequestError(f"bad request: {response.text}", status)
        return BadRequestError(f"{message_id} {message_description}".strip(), status)

    if status == 404:
        return NotFoundError(NOT_FOUND_MESSAGE, status)

    return None


def raise_for_response(response: Response, default_message: str) -> None:
    """Raise the classified error, or a generic ``ApiError``, for a non-2xx response."""
    if response.ok:
        return

    error = classify_error(response, default_message)
    if error is None:
        error = ApiError(
            f"{default_message}; code={response.status_code}, body={response.text}",
            response.status_code,
        )
    raise error
