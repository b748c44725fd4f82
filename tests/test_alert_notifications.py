import json

import pytest
import requests
import responses

from grafapi.alert_notifications import AlertNotificationsMixin
from grafapi.transport import GrafanaError, HTTPError

BASE = "http://localhost:3000"


@pytest.fixture
def server():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def client():
    return AlertNotificationsMixin(BASE, "")


def _notification(name="team-a-email-notifier"):
    return {
        "name": name,
        "type": "email",
        "isDefault": False,
        "disableResolveMessage": False,
        "sendReminder": False,
        "frequency": "15m",
        "uid": "foobar",
        "settings": {"addresses": "user@example.com"},
    }


def test_crud_flow(server, client):
    server.add(responses.GET, f"{BASE}/api/alert-notifications", json=[])
    assert client.get_all_alert_notifications() == []

    an = _notification()
    server.add(responses.POST, f"{BASE}/api/alert-notifications", json={"id": 7})
    created = client.create_alert_notification(an)
    assert created == 7
    assert json.loads(server.calls[-1].request.body) == an

    server.add(responses.GET, f"{BASE}/api/alert-notifications/7", json=an)
    retrieved = client.get_alert_notification_id(created)
    assert retrieved["name"] == an["name"]

    an["name"] = "alertnotification2"
    server.add(responses.PUT, f"{BASE}/api/alert-notifications/uid/foobar", json={})
    client.update_alert_notification_uid(an, "foobar")
    assert json.loads(server.calls[-1].request.body)["name"] == "alertnotification2"

    server.add(responses.DELETE, f"{BASE}/api/alert-notifications/uid/foobar", json={})
    client.delete_alert_notification_uid("foobar")
    assert server.calls[-1].request.method == "DELETE"

    server.add(
        responses.GET,
        f"{BASE}/api/alert-notifications/uid/foobar",
        json={"message": "Alert notification not found"},
        status=404,
    )
    with pytest.raises(HTTPError) as info:
        client.get_alert_notification_uid("foobar")
    assert info.value.status_code == 404


def test_get_all_returns_list(server, client):
    server.add(
        responses.GET, f"{BASE}/api/alert-notifications", json=[_notification()]
    )
    result = client.get_all_alert_notifications()
    assert [item["uid"] for item in result] == ["foobar"]


def test_get_all_error_status(server, client):
    server.add(responses.GET, f"{BASE}/api/alert-notifications", body="denied", status=403)
    with pytest.raises(HTTPError) as info:
        client.get_all_alert_notifications()
    assert str(info.value) == "HTTP error 403: returns denied"


def test_create_error_status(server, client):
    server.add(responses.POST, f"{BASE}/api/alert-notifications", body="bad", status=400)
    with pytest.raises(HTTPError) as info:
        client.create_alert_notification(_notification())
    assert info.value.status_code == 400


def test_update_by_id_path_and_body(server, client):
    server.add(responses.PUT, f"{BASE}/api/alert-notifications/5", json={})
    result = client.update_alert_notification_id(_notification(), 5)
    assert result is None
    call = server.calls[-1]
    assert call.request.url == f"{BASE}/api/alert-notifications/5"
    assert json.loads(call.request.body)["frequency"] == "15m"


def test_update_by_id_error(server, client):
    server.add(responses.PUT, f"{BASE}/api/alert-notifications/5", body="no", status=500)
    with pytest.raises(HTTPError):
        client.update_alert_notification_id(_notification(), 5)


def test_delete_by_id(server, client):
    server.add(responses.DELETE, f"{BASE}/api/alert-notifications/5", json={})
    result = client.delete_alert_notification_id(5)
    assert result is None
    assert server.calls[-1].request.url == f"{BASE}/api/alert-notifications/5"
    assert server.calls[-1].request.method == "DELETE"


def test_delete_by_uid_error(server, client):
    server.add(
        responses.DELETE, f"{BASE}/api/alert-notifications/uid/gone", body="x", status=404
    )
    with pytest.raises(HTTPError):
        client.delete_alert_notification_uid("gone")


def test_invalid_json_raises(server, client):
    server.add(responses.GET, f"{BASE}/api/alert-notifications/1", body="not json")
    with pytest.raises(GrafanaError):
        client.get_alert_notification_id(1)


def test_connection_error_raises(server, client):
    server.add(
        responses.GET,
        f"{BASE}/api/alert-notifications",
        body=requests.ConnectionError("refused"),
    )
    with pytest.raises(GrafanaError) as info:
        client.get_all_alert_notifications()
    assert "refused" in str(info.value)