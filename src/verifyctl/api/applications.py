from typing import Optional, Tuple

from verifyctl.api.base import ListPage, ResourceClient, list_params, pagination_param
from verifyctl.errors import NotFoundError
from verifyctl.models.application import Application


class ApplicationClient(ResourceClient):
    """Client for single sign-on applications (``/v1.0/applications``)."""

    path = "v1.0/applications"

    def create_application(self, application: Application) -> str:
        return self._create(application, "create the application")

    def find_application(self, name: str) -> Application:
        """Find the application with exactly this name among the search results."""
        page = self.list_applications(search=f'name = "{name}"')
        for application in page.items:
            if application.name == name:
                return application
        raise NotFoundError(f"no application found with name {name}", 404)

    def get_application_id(self, name: str) -> str:
        application_id = self.find_application(name).application_id
        if not application_id:
            raise NotFoundError(f"no application found with name {name}", 404)
        return application_id

    def get_application_by_id(self, application_id: str) -> Tuple[Application, str]:
        url = self._url(application_id)
        return self._get_one(url, Application, "get the application"), url

    def get_application(self, name: str) -> Tuple[Application, str]:
        return self.get_application_by_id(self.get_application_id(name))

    def list_applications(
        self,
        search: Optional[str] = None,
        sort: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> ListPage[Application]:
        params = list_params(search=search, sort=sort, pagination=pagination_param(page, limit))
        return self._list(
            Application,
            "get the applications",
            key="_embedded.applications",
            params=params,
            page=page,
            limit=limit,
        )

    def update_application(self, application: Application) -> None:
        """Replace the application identified by ``id``, else by name."""
        application_id = application.application_id or self.get_application_id(application.name)
        self._update(self._url(application_id), application, "update the application")

    def delete_application(self, application_id: str) -> None:
        self._delete(self._url(application_id), "delete the application")
