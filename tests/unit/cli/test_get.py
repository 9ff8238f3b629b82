"""Tests for the get commands."""

import base64
import json

import yaml

TENANT = "abc.verify.ibm.com"
USERS_URL = f"https://{TENANT}/v2.0/Users"
APICLIENTS_URL = f"https://{TENANT}/v1.0/apiclients"
THEMES_URL = f"https://{TENANT}/v1.0/branding/themes"

USER_LIST = {
    "totalResults": 2,
    "Resources": [
        {"id": "u1", "userName": "bob"},
        {"id": "u2", "userName": "alice"},
    ],
}


class TestIdentifierFlags:
    def test_singular_requires_identifier(self, run, fake_http, logged_in):
        result = run("get", "user")

        assert result.exit_code == 1
        assert "'userName' flag is required." in result.output
        assert fake_http.calls == []

    def test_singular_with_two_identifiers_names_both(self, run, fake_http, logged_in):
        result = run("get", "apiclient")

        assert result.exit_code == 1
        assert "either 'clientName' or 'clientID' flag is required." in result.output

    def test_conflicting_identifiers(self, run, fake_http, logged_in):
        result = run("get", "apiclients", "--clientName", "a", "--clientID", "b")

        assert result.exit_code == 1
        assert "only one of 'clientName' or 'clientID' can be provided" in result.output
        assert fake_http.calls == []

    def test_flags_are_checked_before_login(self, run, fake_http):
        result = run("get", "user")

        assert "'userName' flag is required." in result.output


class TestListOutput:
    def test_users_as_yaml(self, run, fake_http, logged_in):
        fake_http.queue(200, USER_LIST)

        result = run("get", "users", "--count", "2", "--filter", 'userName sw "a"')

        assert result.exit_code == 0, result.output
        assert fake_http.calls[0].params == {"count": "2", "filter": 'userName sw "a"'}
        document = yaml.safe_load(result.output)
        assert document["kind"] == "IBMVerifyList"
        assert document["apiVersion"] == "2.0"
        assert document["metadata"]["resourceUri"] == USERS_URL
        assert document["metadata"]["total"] == 2
        assert document["metadata"]["count"] == 2
        first = document["items"][0]
        assert first["kind"] == "IBMVerifyUser"
        assert first["metadata"] == {"UID": "u1", "name": "bob"}
        assert first["data"] == {"id": "u1", "userName": "bob"}

    def test_users_as_json(self, run, fake_http, logged_in):
        fake_http.queue(200, USER_LIST)

        result = run("get", "users", "-o", "json")

        assert result.exit_code == 0
        assert [item["data"]["userName"] for item in json.loads(result.output)["items"]] == [
            "bob",
            "alice",
        ]

    def test_users_raw_is_the_api_payload(self, run, fake_http, logged_in):
        fake_http.queue(200, USER_LIST)

        result = run("get", "users", "-o", "raw")

        assert json.loads(result.output) == USER_LIST

    def test_outfile_extension_selects_json(self, run, fake_http, logged_in, tmp_path):
        fake_http.queue(200, USER_LIST)
        outfile = tmp_path / "out" / "users.json"

        result = run("get", "users", "--outfile", str(outfile))

        assert result.exit_code == 0
        assert result.output == ""
        assert json.loads(outfile.read_text())["kind"] == "IBMVerifyList"

    def test_api_clients_paging(self, run, fake_http, logged_in):
        fake_http.queue(
            200,
            {
                "total": 1,
                "apiClients": [{"id": "c1", "clientName": "cli", "entitlements": ["readUsers"]}],
            },
        )

        result = run("get", "apiclients", "--page", "2", "--limit", "10", "--search", "x")

        assert result.exit_code == 0, result.output
        params = fake_http.calls[0].params
        assert params["pagination"] == "page=2&limit=10"
        document = yaml.safe_load(result.output)
        assert document["metadata"]["page"] == 2
        assert document["metadata"]["limit"] == 10
        assert document["items"][0]["metadata"] == {"UID": "c1", "name": "cli"}

    def test_items_without_create_fields(self, run, fake_http, logged_in):
        fake_http.queue(
            200,
            {
                "total": 2,
                "apiClients": [
                    {"id": "1", "clientName": "reader", "entitlements": []},
                    {"id": "2", "clientName": "legacy"},
                ],
            },
        )

        result = run("get", "apiclients")

        assert result.exit_code == 0, result.output
        items = yaml.safe_load(result.output)["items"]
        assert items[0]["data"]["entitlements"] == []
        assert "entitlements" not in items[1]["data"]

    def test_signer_certs_without_pem(self, run, fake_http, logged_in):
        fake_http.queue(200, [{"label": "root", "subject": "CN=root"}])

        result = run("get", "signercerts")

        assert result.exit_code == 0, result.output
        assert yaml.safe_load(result.output)["items"][0]["data"]["label"] == "root"


class TestSingleResource:
    def test_get_user(self, run, fake_http, logged_in):
        fake_http.queue(200, {"Resources": [{"id": "u1"}]})
        fake_http.queue(200, {"id": "u1", "userName": "bob", "title": "Dev"})

        result = run("get", "user", "--userName", "bob")

        assert result.exit_code == 0, result.output
        document = yaml.safe_load(result.output)
        assert document["metadata"] == {
            "UID": "u1",
            "name": "bob",
            "resourceUri": f"{USERS_URL}/u1",
        }
        assert document["data"]["title"] == "Dev"

    def test_plural_with_identifier_gets_one(self, run, fake_http, logged_in):
        fake_http.queue(200, {"id": "c1", "clientName": "cli", "entitlements": ["manageUsers"]})

        result = run("get", "apiclients", "--clientID", "c1", "-o", "raw")

        assert fake_http.calls[0].url == f"{APICLIENTS_URL}/c1"
        assert json.loads(result.output)["clientName"] == "cli"

    def test_not_found(self, run, fake_http, logged_in):
        fake_http.queue(200, {"Resources": []})

        result = run("get", "user", "--userName", "ghost")

        assert result.exit_code == 1
        assert "no user found with userName ghost" in result.output

    def test_expired_token(self, run, fake_http, logged_in):
        fake_http.queue(401)

        result = run("get", "users")

        assert result.exit_code == 1
        assert "Login again." in result.output


class TestThemes:
    def test_raw_theme_bytes(self, run, fake_http, logged_in):
        fake_http.queue(200, b"PK\x03\x04zip")

        result = run("get", "theme", "--id", "t1", "-o", "raw")

        assert result.exit_code == 0
        assert result.stdout_bytes == b"PK\x03\x04zip"

    def test_theme_envelope_is_base64(self, run, fake_http, logged_in):
        fake_http.queue(200, b"zip-bytes")

        result = run("get", "theme", "--id", "t1")

        document = yaml.safe_load(result.output)
        assert document["kind"] == "IBMVerifyTheme"
        assert document["metadata"] == {"UID": "t1", "resourceUri": f"{THEMES_URL}/t1"}
        assert base64.b64decode(document["data"]) == b"zip-bytes"

    def test_template_file(self, run, fake_http, logged_in):
        fake_http.queue(200, b"<html/>")

        result = run("get", "theme", "--id", "t1", "-T", "templates/en/login.html")

        document = yaml.safe_load(result.output)
        assert document["kind"] == "IBMVerifyThemeFile"
        assert fake_http.calls[0].url == f"{THEMES_URL}/t1/templates/en/login.html"

    def test_unpack_requires_dir(self, run, fake_http, logged_in):
        result = run("get", "theme", "--id", "t1", "--unpack")

        assert result.exit_code == 1
        assert "'dir' flag is required when 'unpack' flag is used." in result.output
        assert fake_http.calls == []


class TestIdentityAgents:
    def test_list(self, run, fake_http, logged_in):
        fake_http.queue(200, [{"id": "a1", "name": "ldap-agent", "purpose": "LDAPAUTH"}])

        result = run("get", "identityagents")

        assert result.exit_code == 0, result.output
        document = yaml.safe_load(result.output)
        assert document["items"][0]["kind"] == "IBMVerifyIdentityAgent"
        assert document["items"][0]["metadata"] == {"UID": "a1", "name": "ldap-agent"}

    def test_single_requires_id(self, run, fake_http, logged_in):
        result = run("get", "identityagent")

        assert result.exit_code == 1
        assert "'identityAgentID' flag is required." in result.output

    def test_single(self, run, fake_http, logged_in):
        fake_http.queue(200, {"id": "a1", "name": "ldap-agent"})

        result = run("get", "identityagent", "--identityAgentID", "a1", "-o", "json")

        assert result.exit_code == 0, result.output
        document = json.loads(result.output)
        assert document["metadata"]["resourceUri"] == f"https://{TENANT}/v1.0/identity-agents/a1"
