"""SCIM 2.0 client for tenant users."""

from typing import List, Optional, Tuple

from verifyctl.api.base import SCIM_JSON, ListPage, ResourceClient, list_params
from verifyctl.errors import NotFoundError
from verifyctl.models.common import PatchOperation, SCIMPatch
from verifyctl.models.user import User

_NO_PASSWORD_RESET = {"usershouldnotneedtoresetpassword": "false"}


class UserClient(ResourceClient):
    path = "v2.0/Users"
    content_type = SCIM_JSON

    def create_user(self, user: User) -> str:
        """Create a user and return its URI."""
        return self._create(user, "create the user", params=_NO_PASSWORD_RESET)

    def get_user_id(self, user_name: str) -> str:
        """Resolve a user name to the user ID."""
        body = self._fetch(
            self.base_url,
            "get the user",
            params={"filter": f'userName eq "{user_name}"'},
        )
        resources = body.get("Resources") if isinstance(body, dict) else None
        if not resources or not resources[0].get("id"):
            raise NotFoundError(f"no user found with userName {user_name}", 404)
        return resources[0]["id"]

    def get_user(self, user_name: str) -> Tuple[User, str]:
        """
        Get a user by user name.

        Returns:
            The user and its URI
        """
        user_id = self.get_user_id(user_name)
        url = self._url(user_id)
        return self._get_one(url, User, "get the user"), url

    def list_users(
        self,
        sort_by: Optional[str] = None,
        count: Optional[str] = None,
        filter: Optional[str] = None,
        attributes: Optional[str] = None,
    ) -> ListPage[User]:
        params = list_params(sortBy=sort_by, count=count, filter=filter, attributes=attributes)
        return self._list(User, "get the users", key="Resources", params=params)

    def update_user(self, user_name: str, operations: List[PatchOperation]) -> None:
        """Apply SCIM patch operations to the user."""
        user_id = self.get_user_id(user_name)
        self._update(
            self._url(user_id),
            SCIMPatch(operations=operations),
            "update the user",
            method="PATCH",
            params=_NO_PASSWORD_RESET,
        )

    def delete_user(self, user_name: str) -> None:
        user_id = self.get_user_id(user_name)
        self._delete(self._url(user_id), "delete the user")
