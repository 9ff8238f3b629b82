from typing import Optional, Tuple

from verifyctl.api.base import ListPage, ResourceClient, list_params
from verifyctl.errors import NotFoundError
from verifyctl.models.access_policy import AccessPolicy


class AccessPolicyClient(ResourceClient):
    """Client for access policies in the policy vault."""

    path = "v5.0/policyvault/accesspolicy"

    def create_access_policy(self, policy: AccessPolicy) -> str:
        return self._create(policy, "create the access policy")

    def get_access_policy_id(self, name: str) -> str:
        body = self._fetch(
            self.base_url,
            "get the access policy ID",
            params={"search": f'name = "{name}"'},
        )
        policies = (body or {}).get("policies") or []
        if not policies or policies[0].get("id") is None:
            raise NotFoundError(f"no access policy found with name {name}", 404)
        return str(policies[0]["id"])

    def get_access_policy_by_id(self, policy_id: str) -> Tuple[AccessPolicy, str]:
        url = self._url(policy_id)
        return self._get_one(url, AccessPolicy, "get the access policy"), url

    def get_access_policy(self, name: str) -> Tuple[AccessPolicy, str]:
        return self.get_access_policy_by_id(self.get_access_policy_id(name))

    def list_access_policies(
        self, search: Optional[str] = None, sort: Optional[str] = None
    ) -> ListPage[AccessPolicy]:
        params = list_params(search=search, sort=sort)
        return self._list(AccessPolicy, "get the access policies", key="policies", params=params)

    def update_access_policy(self, policy: AccessPolicy) -> None:
        """Replace the policy with the same name."""
        policy_id = self.get_access_policy_id(policy.name)
        self._update(self._url(policy_id), policy, "update the access policy")

    def delete_access_policy(self, name: str) -> None:
        self.delete_access_policy_by_id(self.get_access_policy_id(name))

    def delete_access_policy_by_id(self, policy_id: str) -> None:
        self._delete(self._url(policy_id), "delete the access policy")
