"""SCIM 2.0 client for tenant groups."""

import logging
import re
from typing import List, Optional, Tuple

from verifyctl.api.base import SCIM_JSON, ListPage, ResourceClient, list_params
from verifyctl.api.users import UserClient
from verifyctl.errors import NotFoundError
from verifyctl.models.common import PatchOperation, SCIMPatch
from verifyctl.models.group import Group

logger = logging.getLogger(__name__)

_MEMBER_FILTER = re.compile(r'value eq "?([^"\]]+)"?')


def member_from_path(path: Optional[str]) -> Optional[str]:
    """Extract the member value from a ``members[value eq "x"]`` patch path."""
    if not path:
        return None
    match = _MEMBER_FILTER.search(path)
    return match.group(1) if match else None


class GroupClient(ResourceClient):
    path = "v2.0/Groups"
    content_type = SCIM_JSON

    def __init__(self, auth, http_client=None):
        super().__init__(auth, http_client)
        self.users = UserClient(auth, self.http)

    def create_group(self, group: Group) -> str:
        """
        Create a group and return its URI.

        Members are given by user name and resolved to user IDs first.
        """
        group = group.model_copy(deep=True)
        for member in group.members or []:
            member.value = self.users.get_user_id(member.value)
        return self._create(group, "create the group")

    def get_group_id(self, display_name: str) -> str:
        body = self._fetch(
            self.base_url,
            "get the group",
            params={"filter": f'displayName eq "{display_name}"'},
        )
        resources = body.get("Resources") if isinstance(body, dict) else None
        if not resources or not resources[0].get("id"):
            raise NotFoundError(f"no group found with group name {display_name}", 404)
        return resources[0]["id"]

    def get_group(self, display_name: str) -> Tuple[Group, str]:
        group_id = self.get_group_id(display_name)
        url = self._url(group_id)
        return self._get_one(url, Group, "get the group"), url

    def list_groups(
        self,
        sort_by: Optional[str] = None,
        count: Optional[str] = None,
        filter: Optional[str] = None,
    ) -> ListPage[Group]:
        params = list_params(sortBy=sort_by, count=count, filter=filter)
        return self._list(Group, "get the groups", key="Resources", params=params)

    def resolve_members(self, operations: List[PatchOperation]) -> List[PatchOperation]:
        """
        Rewrite member operations that name users into ones that use user IDs.

        ``add`` to ``members`` maps each member value; ``remove`` with a
        ``members[value eq "<user name>"]`` path is rewritten to the user ID.
        """
        resolved = []
        for operation in operations:
            operation = operation.model_copy(deep=True)
            if operation.op == "add" and operation.path == "members" and isinstance(operation.value, list):
                for member in operation.value:
                    if isinstance(member, dict) and isinstance(member.get("value"), str):
                        member["value"] = self.users.get_user_id(member["value"])
            elif operation.op == "remove":
                user_name = member_from_path(operation.path)
                if user_name:
                    user_id = self.users.get_user_id(user_name)
                    operation.path = f'members[value eq "{user_id}"]'
            resolved.append(operation)
        return resolved

    def update_group(self, display_name: str, operations: List[PatchOperation]) -> None:
        group_id = self.get_group_id(display_name)
        patch = SCIMPatch(operations=self.resolve_members(operations))
        logger.debug(f"Patching group {display_name} with {len(patch.operations)} operations")
        self._update(self._url(group_id), patch, "update the group", method="PATCH")

    def delete_group(self, display_name: str) -> None:
        group_id = self.get_group_id(display_name)
        self._delete(self._url(group_id), "delete the group")
