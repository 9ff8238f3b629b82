from typing import Optional, Tuple

from verifyctl.api.base import ListPage, ResourceClient, list_params, pagination_param
from verifyctl.errors import InvalidInputError
from verifyctl.models.identity_agent import IdentityAgent


class IdentityAgentClient(ResourceClient):
    """Client for on-premise identity agents, addressed by ID."""

    path = "v1.0/identity-agents"

    def create_identity_agent(self, agent: IdentityAgent) -> str:
        return self._create(agent, "create the identity agent")

    def get_identity_agent(self, agent_id: str) -> Tuple[IdentityAgent, str]:
        url = self._url(agent_id)
        return self._get_one(url, IdentityAgent, "get the identity agent"), url

    def list_identity_agents(
        self,
        search: Optional[str] = None,
        sort: Optional[str] = None,
        count: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> ListPage[IdentityAgent]:
        params = list_params(
            search=search, sort=sort, count=count, pagination=pagination_param(page, limit)
        )
        return self._list(
            IdentityAgent, "get the identity agents", params=params, page=page, limit=limit
        )

    def update_identity_agent(self, agent: IdentityAgent) -> None:
        if not agent.id:
            raise InvalidInputError("'id' is required")
        self._update(self._url(agent.id), agent, "update the identity agent")

    def delete_identity_agent(self, agent_id: str) -> None:
        self._delete(self._url(agent_id), "delete the identity agent")
