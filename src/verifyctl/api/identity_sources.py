from typing import Optional, Tuple

from verifyctl.api.base import ListPage, ResourceClient, list_params
from verifyctl.errors import NotFoundError
from verifyctl.models.identity_source import IdentitySource


class IdentitySourceClient(ResourceClient):
    """Client for identity sources (``/v2.0/identitysources``)."""

    path = "v2.0/identitysources"

    def create_identity_source(self, source: IdentitySource) -> str:
        return self._create(source, "create the identity source")

    def get_identity_source_id(self, instance_name: str) -> str:
        body = self._fetch(
            self.base_url,
            "get the identity source ID",
            params={"search": f'instanceName = "{instance_name}"'},
        )
        sources = (body or {}).get("identitySources") or []
        if not sources or not sources[0].get("id"):
            raise NotFoundError(
                f"no identity source found with instanceName {instance_name}", 404
            )
        return sources[0]["id"]

    def get_identity_source(self, instance_name: str) -> Tuple[IdentitySource, str]:
        url = self._url(self.get_identity_source_id(instance_name))
        return self._get_one(url, IdentitySource, "get the identity source"), url

    def list_identity_sources(
        self,
        search: Optional[str] = None,
        sort: Optional[str] = None,
        count: Optional[str] = None,
    ) -> ListPage[IdentitySource]:
        params = list_params(search=search, sort=sort, count=count)
        return self._list(
            IdentitySource, "get the identity sources", key="identitySources", params=params
        )

    def update_identity_source(self, source: IdentitySource) -> None:
        source_id = self.get_identity_source_id(source.instance_name)
        self._update(self._url(source_id), source, "update the identity source")

    def delete_identity_source(self, instance_name: str) -> None:
        source_id = self.get_identity_source_id(instance_name)
        self._delete(self._url(source_id), "delete the identity source")
