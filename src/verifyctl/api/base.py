"""Common plumbing for the per-resource API clients."""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
from urllib.parse import quote, urlencode

from pydantic import BaseModel

from verifyctl.api.errors import raise_for_response
from verifyctl.api.http_client import HttpClient, Response
from verifyctl.config.config import AuthConfig
from verifyctl.errors import ApiError

T = TypeVar("T", bound=BaseModel)

JSON = "application/json"
SCIM_JSON = "application/scim+json"

logger = logging.getLogger(__name__)


class ResourceClient:
    """
    Base class for tenant API clients.

    Subclasses set ``path`` to the collection endpoint (for example
    ``v2.0/Users``) and build their operations from the helpers below.
    """

    path = ""
    content_type = JSON

    def __init__(self, auth: AuthConfig, http_client: Optional[HttpClient] = None):
        """
        Initialize the client.

        Args:
            auth: Tenant and bearer token to call with
            http_client: HTTP client to use; a new one is created when omitted
        """
        self.auth = auth
        self.http = http_client or HttpClient()

    @property
    def base_url(self) -> str:
        return f"https://{self.auth.tenant}/{self.path}"

    def _url(self, *parts: str) -> str:
        url = self.base_url
        for part in parts:
            url += "/" + quote(str(part), safe="")
        return url

    def _headers(self, content_type: Optional[str] = None, accept: Optional[str] = None) -> Dict[str, str]:
        headers = {
            "Accept": accept or self.content_type,
            "Authorization": f"Bearer {self.auth.token}",
        }
        if content_type:
            headers["Content-Type"] = content_type
        return headers

    def _dump(self, data: Any) -> bytes:
        if isinstance(data, BaseModel):
            data = data.model_dump(by_alias=True, exclude_none=True, mode="json")
        return json.dumps(data).encode("utf-8")

    def _check(self, response: Response, action: str) -> None:
        """Raise the classified error for a failed call."""
        if response.ok:
            return
        logger.error(
            f"unable to {action}; code={response.status_code}, body={response.text}"
        )
        raise_for_response(response, f"unable to {action}")

    def _json(self, response: Response, action: str) -> Any:
        try:
            return json.loads(response.body or b"null")
        except ValueError as e:
            raise ApiError(f"unable to {action}; invalid JSON response: {e}") from e

    def _parse_model(self, data: Dict[str, Any], model_class: Type[T]) -> T:
        """
        Parse JSON data into a Pydantic model.

        Args:
            data: The JSON data to parse
            model_class: The Pydantic model class to use

        Returns:
            An instance of the model class
        """
        return model_class.model_validate(data)

    def _parse_model_list(
        self, data: List[Dict[str, Any]], model_class: Type[T]
    ) -> List[T]:
        return [self._parse_model(item, model_class) for item in data]

    def _created_uri(self, response: Response, body: Any = None) -> str:
        """URI of a created resource from the response ``id`` or ``Location`` header."""
        if isinstance(body, dict) and body.get("id"):
            return self._url(str(body["id"]))
        location = response.header("Location")
        if location:
            return location
        return self.base_url

    def _create(self, data: Any, action: str, params: Optional[Dict[str, Any]] = None) -> str:
        """POST a new resource to the collection and return its URI."""
        response = self.http.post(
            self.base_url,
            headers=self._headers(content_type=self.content_type),
            params=params,
            body=self._dump(data),
        )
        self._check(response, action)
        body = self._json(response, action) if response.body else None
        return self._created_uri(response, body)

    def _fetch(self, url: str, action: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = self.http.get(url, headers=self._headers(), params=params)
        self._check(response, action)
        return self._json(response, action)

    def _get_one(self, url: str, model_class: Type[T], action: str, params: Optional[Dict[str, Any]] = None) -> T:
        return self._parse_model(self._fetch(url, action, params), model_class)

    def _list(
        self,
        model_class: Type[T],
        action: str,
        key: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> "ListPage[T]":
        """
        GET the collection and parse the items found under ``key``.

        Args:
            model_class: Model for each item
            action: Action name used in error messages
            key: Dotted path to the item array, or None when the body is the array
            params: Query parameters
            page: Requested page, used when the response does not report it
            limit: Requested page size, used when the response does not report it
        """
        body = self._fetch(self.base_url, action, params)
        items = body
        if key:
            for part in key.split("."):
                items = items.get(part) if isinstance(items, dict) else None
        items = items or []

        total = count = None
        if isinstance(body, dict):
            total = body.get("totalResults", body.get("totalCount", body.get("total")))
            count = body.get("count")
            limit = body.get("limit", limit)
            page = body.get("page", page)

        return ListPage(
            items=self._parse_model_list(items, model_class),
            uri=self.base_url,
            raw=body,
            total=total if total is not None else len(items),
            limit=limit,
            page=page,
            count=count if count is not None else len(items),
        )

    def _update(self, url: str, data: Any, action: str, method: str = "PUT", params: Optional[Dict[str, Any]] = None) -> None:
        response = self.http.request(
            method,
            url,
            headers=self._headers(content_type=self.content_type),
            params=params,
            body=self._dump(data),
        )
        self._check(response, action)

    def _delete(self, url: str, action: str) -> None:
        response = self.http.delete(url, headers=self._headers())
        self._check(response, action)


def pagination_param(page: Optional[int] = None, limit: Optional[int] = None) -> Optional[str]:
    """Nested ``pagination`` query value used by the v1.0 endpoints."""
    values = {}
    if page:
        values["page"] = page
    if limit:
        values["limit"] = limit
    return urlencode(values) if values else None


def list_params(**params: Any) -> Dict[str, Any]:
    """Drop unset query parameters."""
    return {key: value for key, value in params.items() if value not in (None, "")}


@dataclass
class ListPage(Generic[T]):
    """One page of a list operation plus the paging details the tenant reported."""

    items: List[T]
    uri: str
    raw: Any = None
    total: Optional[int] = None
    limit: Optional[int] = None
    page: Optional[int] = None
    count: Optional[int] = None
