"""
Thin HTTP client shared by every API and OAuth call.

All verbs return the same ``Response`` triple (status, body, headers) and
leave status handling to the caller. Redirects are never followed.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

import requests

from verifyctl.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 1800.0

Body = Union[bytes, str, Mapping[str, Any], None]


@dataclass
class Response:
    """Status code, raw body and headers of an HTTP exchange."""

    status_code: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


class HttpClient:
    """
    HTTP client built on a ``requests.Session``.

    ``body`` may be raw bytes/str (sent as is) or a mapping (form encoded).
    ``files`` is passed through to requests for multipart uploads.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
        verify_ssl: bool = True,
    ):
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.session = session or requests.Session()

    def request(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        body: Body = None,
        files: Optional[Dict[str, Any]] = None,
    ) -> Response:
        """
        Send a request and capture the response.

        Args:
            method: HTTP verb
            url: Absolute request URL
            headers: Request headers
            params: Query parameters
            body: Request body
            files: Multipart file parts

        Returns:
            The captured response

        Raises:
            TransportError: when no response could be obtained
        """
        logger.debug(f"{method} {url}")
        try:
            resp = self.session.request(
                method,
                url,
                headers=headers,
                params=params,
                data=body,
                files=files,
                timeout=self.timeout,
                verify=self.verify_ssl,
                allow_redirects=False,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        logger.debug(f"{method} {url} -> {resp.status_code}")
        return Response(
            status_code=resp.status_code,
            body=resp.content or b"",
            headers=dict(resp.headers),
        )

    def get(self, url: str, headers=None, params=None) -> Response:
        return self.request("GET", url, headers=headers, params=params)

    def post(self, url: str, headers=None, params=None, body: Body = None, files=None) -> Response:
        return self.request("POST", url, headers=headers, params=params, body=body, files=files)

    def put(self, url: str, headers=None, params=None, body: Body = None, files=None) -> Response:
        return self.request("PUT", url, headers=headers, params=params, body=body, files=files)

    def patch(self, url: str, headers=None, params=None, body: Body = None) -> Response:
        return self.request("PATCH", url, headers=headers, params=params, body=body)

    def delete(self, url: str, headers=None, params=None) -> Response:
        return self.request("DELETE", url, headers=headers, params=params)
