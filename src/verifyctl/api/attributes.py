from typing import Optional, Tuple

from verifyctl.api.base import ListPage, ResourceClient, list_params, pagination_param
from verifyctl.errors import InvalidInputError
from verifyctl.models.attribute import Attribute


class AttributeClient(ResourceClient):
    """Client for attribute definitions (``/v1.0/attributes``)."""

    path = "v1.0/attributes"

    def create_attribute(self, attribute: Attribute) -> str:
        attribute = attribute.model_copy(deep=True)
        schema = attribute.schema_attribute
        # custom attributes default their attribute name to the SCIM name
        if schema and schema.custom_attribute and not schema.attribute_name:
            schema.attribute_name = schema.scim_name
        return self._create(attribute, "create the attribute")

    def get_attribute(self, attribute_id: str) -> Tuple[Attribute, str]:
        url = self._url(attribute_id)
        return self._get_one(url, Attribute, "get the attribute"), url

    def list_attributes(
        self,
        search: Optional[str] = None,
        sort: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> ListPage[Attribute]:
        params = list_params(search=search, sort=sort, pagination=pagination_param(page, limit))
        return self._list(Attribute, "get the attributes", params=params, page=page, limit=limit)

    def update_attribute(self, attribute: Attribute) -> None:
        if not attribute.id:
            raise InvalidInputError("'id' is required")
        self._update(self._url(attribute.id), attribute, "update the attribute")

    def delete_attribute(self, attribute_id: str) -> None:
        self._delete(self._url(attribute_id), "delete the attribute")
