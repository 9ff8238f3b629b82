from typing import Optional, Tuple

from verifyctl.api.base import SCIM_JSON, ListPage, ResourceClient, list_params
from verifyctl.errors import InvalidInputError
from verifyctl.models.password_policy import PasswordPolicy


class PasswordPolicyClient(ResourceClient):
    """Client for password policies (``/v3.0/passwordpolicies``)."""

    path = "v3.0/passwordpolicies"
    content_type = SCIM_JSON

    def create_password_policy(self, policy: PasswordPolicy) -> str:
        return self._create(policy, "create the password policy")

    def get_password_policy(self, policy_id: str) -> Tuple[PasswordPolicy, str]:
        url = self._url(policy_id)
        return self._get_one(url, PasswordPolicy, "get the password policy"), url

    def list_password_policies(
        self,
        filter: Optional[str] = None,
        sort: Optional[str] = None,
        count: Optional[str] = None,
    ) -> ListPage[PasswordPolicy]:
        params = list_params(filter=filter, sort=sort, count=count)
        return self._list(
            PasswordPolicy, "get the password policies", key="Resources", params=params
        )

    def update_password_policy(self, policy: PasswordPolicy) -> None:
        if not policy.id:
            raise InvalidInputError("'id' is required")
        self._update(self._url(policy.id), policy, "update the password policy")

    def delete_password_policy(self, policy_id: str) -> None:
        self._delete(self._url(policy_id), "delete the password policy")
