import base64

import pytest
import requests
import responses

from grafapi.transport import BaseClient, GrafanaError, HTTPError, StatusMessage

BASE = "http://localhost:3000"


def test_bearer_token_and_standard_headers():
    client = BaseClient(BASE, "token")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE + "/api/org", body=b"{}", status=200)
        raw, code = client._get("api/org")
        sent = rsps.calls[0].request
    assert code == 200
    assert raw == b"{}"
    assert sent.headers["Authorization"] == "Bearer token"
    assert sent.headers["User-Agent"] == "autograf"
    assert sent.headers["Accept"] == "application/json"
    assert sent.headers["Content-Type"] == "application/json"


def test_basic_auth_credentials():
    client = BaseClient(BASE, "user:password")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE + "/api/user", body=b"{}")
        client._get("api/user")
        sent = rsps.calls[0].request
    expected = "Basic " + base64.b64encode(b"user:password").decode()
    assert sent.headers["Authorization"] == expected


def test_no_authentication_when_key_empty():
    client = BaseClient(BASE, "")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE + "/api/search", body=b"[]")
        client._get("api/search")
        sent = rsps.calls[0].request
    assert "Authorization" not in sent.headers


def test_leading_slash_query_joins_base():
    client = BaseClient(BASE, "")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE + "/api/health", body=b"{}")
        client._get("/api/health")
        sent = rsps.calls[0].request
    assert sent.url == BASE + "/api/health"


def test_path_is_joined_and_cleaned():
    client = BaseClient(BASE + "/grafana/", "")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.PUT, BASE + "/grafana/api/org/preferences", body=b"{}")
        client._put("api/org/preferences/", b"{}")
        sent = rsps.calls[0].request
    assert sent.url == BASE + "/grafana/api/org/preferences"


def test_params_are_sorted_and_encoded():
    client = BaseClient(BASE, "")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, BASE + "/api/search", body=b"[]")
        client._get("api/search", {"b": ["2"], "a": ["1", "x y"]})
        sent = rsps.calls[0].request
    assert sent.url.split("?", 1)[1] == "a=1&a=x+y&b=2"


def test_post_sends_body_and_returns_status():
    client = BaseClient(BASE, "")
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, BASE + "/api/orgs", body=b'{"message":"done"}', status=409)
        raw, code = client._post("api/orgs", b'{"name":"x"}')
        sent = rsps.calls[0].request
    assert code == 409
    assert raw == b'{"message":"done"}'
    assert sent.body == b'{"name":"x"}'
    assert sent.method == "POST"


def test_custom_session_is_used():
    session = requests.Session()
    session.headers["X-Extra"] = "yes"
    client = BaseClient(BASE, "", session)
    with responses.RequestsMock() as rsps:
        rsps.add(responses.DELETE, BASE + "/api/teams/3", body=b"{}")
        client._delete("api/teams/3")
        sent = rsps.calls[0].request
    assert sent.headers["X-Extra"] == "yes"


def test_connection_failure_raises_grafana_error():
    client = BaseClient(BASE, "")
    with responses.RequestsMock(assert_all_requests_are_fired=False):
        with pytest.raises(GrafanaError):
            client._get("api/nowhere")


def test_expect_ok_raises_http_error():
    with pytest.raises(HTTPError) as info:
        BaseClient._expect_ok(b"not found", 404)
    assert info.value.status_code == 404
    assert str(info.value) == "HTTP error 404: returns not found"


def test_expect_ok_accepts_only_200():
    assert BaseClient._expect_ok(b"", 200) is None
    with pytest.raises(HTTPError) as info:
        BaseClient._expect_ok(b"created", 201)
    assert info.value.status_code == 201
    assert isinstance(info.value, GrafanaError)


def test_decode_invalid_json_raises():
    with pytest.raises(GrafanaError, match="unmarshal response message"):
        BaseClient._decode(b"{bad", "unmarshal response message")


def test_decode_empty_body_raises():
    with pytest.raises(GrafanaError):
        BaseClient._decode(b"")


def test_dump_uses_to_dict():
    class Payload:
        def to_dict(self):
            return {"userId": 7}

    assert BaseClient._dump(Payload()) == b'{"userId":7}'


def test_status_message_from_dict():
    msg = StatusMessage.from_dict(
        {"id": 5, "orgId": 2, "message": "ok", "uid": "abc", "url": "/d/abc", "version": 3}
    )
    assert msg.id == 5
    assert msg.org_id == 2
    assert msg.message == "ok"
    assert msg.uid == "abc"
    assert msg.url == "/d/abc"
    assert msg.version == 3
    assert msg.slug is None
    assert msg.status is None


def test_status_message_from_empty():
    assert StatusMessage.from_dict(None) == StatusMessage()