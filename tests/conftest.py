import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest

from verifyctl.api.http_client import HttpClient, Response
from verifyctl.config.config import AuthConfig, CLIConfig

TENANT = "abc.verify.ibm.com"
TOKEN = "token-123"


@dataclass
class RecordedCall:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    params: Optional[Dict[str, Any]] = None
    body: Any = None
    files: Optional[Dict[str, Any]] = None

    @property
    def json(self) -> Any:
        return json.loads(self.body)


class FakeHttpClient(HttpClient):
    """HttpClient that records requests and replays queued responses."""

    def __init__(self):
        super().__init__(session=MagicMock())
        self.responses: List[Response] = []
        self.calls: List[RecordedCall] = []

    def queue(self, status_code: int = 200, body: Any = None, headers=None) -> "FakeHttpClient":
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode("utf-8")
        elif isinstance(body, str):
            body = body.encode("utf-8")
        self.responses.append(Response(status_code, body or b"", headers or {}))
        return self

    def request(self, method, url, headers=None, params=None, body=None, files=None) -> Response:
        self.calls.append(RecordedCall(method, url, dict(headers or {}), params, body, files))
        if not self.responses:
            raise AssertionError(f"unexpected request: {method} {url}")
        return self.responses.pop(0)


@pytest.fixture(autouse=True)
def verify_home(tmp_path, monkeypatch):
    """Keep the config file and trace log inside a temporary directory."""
    home = tmp_path / "verify"
    monkeypatch.setenv("VERIFY_HOME", str(home))
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("VERIFY_HTTP_TIMEOUT", raising=False)
    return home


@pytest.fixture
def fake_http():
    return FakeHttpClient()


@pytest.fixture
def auth_config():
    return AuthConfig(tenant=TENANT, token=TOKEN)


@pytest.fixture
def logged_in(verify_home, auth_config):
    """Config file with a session for the test tenant."""
    config = CLIConfig(tenant=TENANT, auth=[auth_config])
    config.persist(verify_home / "config")
    return config
