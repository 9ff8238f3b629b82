"""Tests for the v1.0 - v5.0 resource clients."""

from urllib.parse import parse_qs

import pytest

from verifyctl.api.access_policies import AccessPolicyClient
from verifyctl.api.api_clients import APIClientClient
from verifyctl.api.applications import ApplicationClient
from verifyctl.api.attributes import AttributeClient
from verifyctl.api.base import list_params, pagination_param
from verifyctl.api.certificates import PersonalCertClient, SignerCertClient
from verifyctl.api.identity_agents import IdentityAgentClient
from verifyctl.api.identity_sources import IdentitySourceClient
from verifyctl.api.password_policies import PasswordPolicyClient
from verifyctl.errors import ApiError, BadRequestError, InvalidInputError, NotFoundError
from verifyctl.models.api_client import APIClient
from verifyctl.models.application import Application
from verifyctl.models.attribute import Attribute, SchemaAttribute
from verifyctl.models.certificate import PersonalCert, SignerCert
from verifyctl.models.identity_agent import IdentityAgent
from verifyctl.models.password_policy import PasswordPolicy

BASE = "https://abc.verify.ibm.com"


class TestHelpers:
    def test_pagination_param(self):
        assert pagination_param() is None
        assert parse_qs(pagination_param(2, 50)) == {"page": ["2"], "limit": ["50"]}

    def test_list_params_drops_unset(self):
        assert list_params(search="", sort=None, count="5") == {"count": "5"}


class TestAPIClientClient:
    def test_get_by_name_requires_exact_match(self, auth_config, fake_http):
        fake_http.queue(
            200,
            {
                "apiClients": [
                    {"id": "1", "clientName": "cli-admin"},
                    {"id": "2", "clientName": "cli"},
                ]
            },
        )
        fake_http.queue(200, {"id": "2", "clientName": "cli", "entitlements": ["manageUsers"]})

        api_client, uri = APIClientClient(auth_config, fake_http).get_api_client("cli")

        assert fake_http.calls[0].params == {"search": 'clientName contains "cli"'}
        assert fake_http.calls[1].url == f"{BASE}/v1.0/apiclients/2"
        assert api_client.entitlements == ["manageUsers"]
        assert uri == f"{BASE}/v1.0/apiclients/2"

    def test_get_by_name_without_exact_match(self, auth_config, fake_http):
        fake_http.queue(200, {"apiClients": [{"id": "1", "clientName": "cli-admin"}]})

        with pytest.raises(NotFoundError):
            APIClientClient(auth_config, fake_http).get_api_client("cli")

    def test_list_uses_nested_pagination(self, auth_config, fake_http):
        fake_http.queue(200, {"total": 3, "apiClients": [{"id": "1", "clientName": "a"}]})

        page = APIClientClient(auth_config, fake_http).list_api_clients(page=1, limit=1)

        params = fake_http.calls[0].params
        assert parse_qs(params["pagination"]) == {"page": ["1"], "limit": ["1"]}
        assert page.total == 3
        assert page.page == 1
        assert page.limit == 1

    def test_update_puts_to_resolved_id(self, auth_config, fake_http):
        fake_http.queue(200, {"apiClients": [{"id": "7", "clientName": "cli"}]})
        fake_http.queue(204)
        client = APIClient(client_name="cli", entitlements=["manageUsers"])

        APIClientClient(auth_config, fake_http).update_api_client(client)

        assert fake_http.calls[1].method == "PUT"
        assert fake_http.calls[1].url == f"{BASE}/v1.0/apiclients/7"
        assert fake_http.calls[1].json["clientName"] == "cli"

    def test_bad_request_message(self, auth_config, fake_http):
        fake_http.queue(400, {"messageId": "CSIAH0001E", "messageDescription": "Invalid."})
        client = APIClient(client_name="cli", entitlements=["manageUsers"])

        with pytest.raises(BadRequestError, match="CSIAH0001E Invalid."):
            APIClientClient(auth_config, fake_http).create_api_client(client)


class TestApplicationClient:
    def test_list_reads_embedded_applications(self, auth_config, fake_http):
        fake_http.queue(
            200,
            {
                "totalCount": 1,
                "_embedded": {
                    "applications": [
                        {
                            "name": "portal",
                            "_links": {"self": {"href": "/v1.0/applications/555"}},
                        }
                    ]
                },
            },
        )

        page = ApplicationClient(auth_config, fake_http).list_applications()

        assert page.total == 1
        assert page.items[0].application_id == "555"

    def test_get_by_name(self, auth_config, fake_http):
        fake_http.queue(
            200,
            {
                "_embedded": {
                    "applications": [
                        {"name": "portal-2", "_links": {"self": {"href": "/v1.0/applications/1"}}},
                        {"name": "portal", "_links": {"self": {"href": "/v1.0/applications/2"}}},
                    ]
                }
            },
        )
        fake_http.queue(200, {"name": "portal", "templateId": "1"})

        application, uri = ApplicationClient(auth_config, fake_http).get_application("portal")

        assert fake_http.calls[0].params == {"search": 'name = "portal"'}
        assert uri == f"{BASE}/v1.0/applications/2"
        assert application.template_id == "1"

    def test_update_uses_id_when_present(self, auth_config, fake_http):
        fake_http.queue(204)

        ApplicationClient(auth_config, fake_http).update_application(
            Application(id="9", name="portal")
        )

        assert len(fake_http.calls) == 1
        assert fake_http.calls[0].url == f"{BASE}/v1.0/applications/9"


class TestAccessPolicyClient:
    def test_get_by_name(self, auth_config, fake_http):
        fake_http.queue(200, {"policies": [{"id": 12, "name": "mfa"}]})
        fake_http.queue(200, {"id": 12, "name": "mfa", "rules": []})

        policy, uri = AccessPolicyClient(auth_config, fake_http).get_access_policy("mfa")

        assert fake_http.calls[0].params == {"search": 'name = "mfa"'}
        assert uri == f"{BASE}/v5.0/policyvault/accesspolicy/12"
        assert policy.id == 12

    def test_non_numeric_id_is_used_as_is(self, auth_config, fake_http):
        fake_http.queue(200, {"policies": [{"id": "ap-7", "name": "mfa"}]})
        fake_http.queue(204)

        AccessPolicyClient(auth_config, fake_http).delete_access_policy("mfa")

        assert fake_http.calls[1].url == f"{BASE}/v5.0/policyvault/accesspolicy/ap-7"

    def test_delete_unknown_name(self, auth_config, fake_http):
        fake_http.queue(200, {"policies": []})

        with pytest.raises(NotFoundError):
            AccessPolicyClient(auth_config, fake_http).delete_access_policy("mfa")


class TestIdentitySourceClient:
    def test_list_reads_identity_sources(self, auth_config, fake_http):
        fake_http.queue(
            200,
            {"identitySources": [{"id": "1", "instanceName": "ldap", "sourceTypeId": 2}]},
        )

        page = IdentitySourceClient(auth_config, fake_http).list_identity_sources(search="x")

        assert fake_http.calls[0].params == {"search": "x"}
        assert page.items[0].instance_name == "ldap"

    def test_delete_resolves_instance_name(self, auth_config, fake_http):
        fake_http.queue(200, {"identitySources": [{"id": "s1", "instanceName": "ldap"}]})
        fake_http.queue(204)

        IdentitySourceClient(auth_config, fake_http).delete_identity_source("ldap")

        assert fake_http.calls[0].params == {"search": 'instanceName = "ldap"'}
        assert fake_http.calls[1].url == f"{BASE}/v2.0/identitysources/s1"


class TestAttributeClient:
    def test_custom_attribute_name_defaults_to_scim_name(self, auth_config, fake_http):
        fake_http.queue(201, {"id": "a1"})
        attribute = Attribute(
            name="dept",
            schema_attribute=SchemaAttribute(scim_name="department", custom_attribute=True),
        )

        uri = AttributeClient(auth_config, fake_http).create_attribute(attribute)

        assert uri == f"{BASE}/v1.0/attributes/a1"
        schema = fake_http.calls[0].json["schemaAttribute"]
        assert schema["attributeName"] == "department"

    def test_list_reads_bare_array(self, auth_config, fake_http):
        fake_http.queue(200, [{"id": "1", "name": "email"}, {"id": "2", "name": "mobile"}])

        page = AttributeClient(auth_config, fake_http).list_attributes()

        assert [a.name for a in page.items] == ["email", "mobile"]
        assert page.total == 2

    def test_update_requires_id(self, auth_config, fake_http):
        with pytest.raises(InvalidInputError, match="'id' is required"):
            AttributeClient(auth_config, fake_http).update_attribute(Attribute(name="x"))
        assert fake_http.calls == []


class TestCertificateClients:
    def test_personal_cert_uri_falls_back_to_label(self, auth_config, fake_http):
        fake_http.queue(201)

        uri = PersonalCertClient(auth_config, fake_http).create_personal_cert(
            PersonalCert(label="server")
        )

        assert uri == f"{BASE}/v1.0/personalcert/server"

    def test_signer_cert_label_is_quoted(self, auth_config, fake_http):
        fake_http.queue(200, {"label": "my ca", "cert": "PEM"})

        cert, uri = SignerCertClient(auth_config, fake_http).get_signer_cert("my ca")

        assert uri == f"{BASE}/v1.0/signercert/my%20ca"
        assert cert.cert == "PEM"

    def test_server_error_is_reported_with_code(self, auth_config, fake_http):
        fake_http.queue(500, b"oops")

        with pytest.raises(ApiError, match="code=500, body=oops"):
            SignerCertClient(auth_config, fake_http).create_signer_cert(
                SignerCert(label="ca", cert="PEM")
            )


class TestPasswordPolicyClient:
    def test_list_reads_resources(self, auth_config, fake_http):
        fake_http.queue(200, {"totalResults": 1, "Resources": [{"id": "p1", "policyName": "x"}]})

        page = PasswordPolicyClient(auth_config, fake_http).list_password_policies(count="1")

        assert fake_http.calls[0].headers["Accept"] == "application/scim+json"
        assert page.items[0].policy_name == "x"

    def test_update_puts_by_id(self, auth_config, fake_http):
        fake_http.queue(200)

        PasswordPolicyClient(auth_config, fake_http).update_password_policy(
            PasswordPolicy(id="p1", policy_name="x")
        )

        assert fake_http.calls[0].method == "PUT"
        assert fake_http.calls[0].url == f"{BASE}/v3.0/passwordpolicies/p1"


class TestIdentityAgentClient:
    def test_create_returns_uri_from_id(self, auth_config, fake_http):
        fake_http.queue(201, {"id": "a1"})

        uri = IdentityAgentClient(auth_config, fake_http).create_identity_agent(
            IdentityAgent(name="ldap-agent", purpose="LDAPAUTH")
        )

        assert fake_http.calls[0].url == f"{BASE}/v1.0/identity-agents"
        assert fake_http.calls[0].json == {"name": "ldap-agent", "purpose": "LDAPAUTH"}
        assert uri == f"{BASE}/v1.0/identity-agents/a1"

    def test_list_reads_array_with_pagination(self, auth_config, fake_http):
        fake_http.queue(200, [{"id": "a1", "name": "one"}, {"id": "a2", "name": "two"}])

        page = IdentityAgentClient(auth_config, fake_http).list_identity_agents(page=1, limit=2)

        assert parse_qs(fake_http.calls[0].params["pagination"]) == {"page": ["1"], "limit": ["2"]}
        assert [agent.name for agent in page.items] == ["one", "two"]
        assert page.total == 2

    def test_update_requires_id(self, auth_config, fake_http):
        with pytest.raises(InvalidInputError, match="'id' is required"):
            IdentityAgentClient(auth_config, fake_http).update_identity_agent(
                IdentityAgent(name="ldap-agent")
            )
        assert fake_http.calls == []

    def test_update_and_delete_by_id(self, auth_config, fake_http):
        fake_http.queue(204)
        fake_http.queue(204)
        client = IdentityAgentClient(auth_config, fake_http)

        client.update_identity_agent(IdentityAgent(id="a1", name="ldap-agent"))
        client.delete_identity_agent("a1")

        assert [(call.method, call.url) for call in fake_http.calls] == [
            ("PUT", f"{BASE}/v1.0/identity-agents/a1"),
            ("DELETE", f"{BASE}/v1.0/identity-agents/a1"),
        ]
