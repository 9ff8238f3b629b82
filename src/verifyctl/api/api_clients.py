"""Client for API client registrations (``/v1.0/apiclients``)."""

import logging
from typing import Optional, Tuple

from verifyctl.api.base import ListPage, ResourceClient, list_params, pagination_param
from verifyctl.errors import NotFoundError
from verifyctl.models.api_client import APIClient

logger = logging.getLogger(__name__)


class APIClientClient(ResourceClient):
    path = "v1.0/apiclients"

    def create_api_client(self, client: APIClient) -> str:
        return self._create(client, "create the API client")

    def get_api_client_id(self, client_name: str) -> str:
        """
        Resolve a client name to the API client ID.

        The tenant search is a substring match, so the result is filtered down
        to the exact name.
        """
        body = self._fetch(
            self.base_url,
            "get the API client ID",
            params={"search": f'clientName contains "{client_name}"'},
        )
        for item in (body or {}).get("apiClients") or []:
            if item.get("clientName") == client_name and item.get("id"):
                logger.debug(f"Resolved clientName {client_name} to ID {item['id']}")
                return item["id"]
        raise NotFoundError(f"no API client found with exact clientName {client_name}", 404)

    def get_api_client_by_id(self, client_id: str) -> Tuple[APIClient, str]:
        url = self._url(client_id)
        return self._get_one(url, APIClient, "get the API client"), url

    def get_api_client(self, client_name: str) -> Tuple[APIClient, str]:
        return self.get_api_client_by_id(self.get_api_client_id(client_name))

    def list_api_clients(
        self,
        search: Optional[str] = None,
        sort: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> ListPage[APIClient]:
        params = list_params(
            search=search, sort=sort, pagination=pagination_param(page, limit)
        )
        return self._list(
            APIClient, "get the API clients", key="apiClients", params=params, page=page, limit=limit
        )

    def update_api_client(self, client: APIClient) -> None:
        """Replace the API client with the same ``clientName``."""
        client_id = self.get_api_client_id(client.client_name)
        self._update(self._url(client_id), client, "update the API client")

    def delete_api_client(self, client_name: str) -> None:
        self.delete_api_client_by_id(self.get_api_client_id(client_name))

    def delete_api_client_by_id(self, client_id: str) -> None:
        self._delete(self._url(client_id), "delete the API client")
