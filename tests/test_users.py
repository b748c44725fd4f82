from urllib.parse import parse_qs, urlsplit

import pytest
import responses

from grafapi.transport import GrafanaError, HTTPError
from grafapi.users import UsersMixin

BASE = "http://grafana.example.com"

ADMIN = {"id": 1, "login": "admin", "name": "Admin", "email": "admin@example.com"}
OTHER = {"id": 2, "login": "bob", "name": "Bob", "email": "bob@example.com"}


@pytest.fixture
def mock():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def client():
    return UsersMixin(BASE, "token")


def _query(call):
    return parse_qs(urlsplit(call.request.url).query)


def test_user_smoke(mock, client):
    mock.add(responses.GET, f"{BASE}/api/user", json=ADMIN)
    mock.add(responses.GET, f"{BASE}/api/users/1", json=ADMIN)
    mock.add(responses.GET, f"{BASE}/api/users", json=[OTHER, ADMIN])

    actual = client.get_actual_user()
    retrieved = client.get_user(actual.id)
    assert actual.name == retrieved.name

    all_users = client.get_all_users()
    assert any(u.id == retrieved.id and u.name == retrieved.name for u in all_users)
    assert _query(mock.calls[2]) == {"perpage": ["99999"]}


def test_search_users_without_options_sends_no_query(mock, client):
    mock.add(
        responses.GET,
        f"{BASE}/api/users/search",
        json={"totalCount": 2, "users": [OTHER, ADMIN], "page": 1, "perPage": 1000},
    )
    page = client.search_users_with_paging(None, None, None)
    assert urlsplit(mock.calls[0].request.url).query == ""
    logins = [u.login for u in page.users]
    assert logins.index("admin") == 1
    assert page.total_count == 2


def test_search_users_with_query_and_paging(mock, client):
    mock.add(
        responses.GET,
        f"{BASE}/api/users/search",
        json={"totalCount": 0, "users": [], "page": 1, "perPage": 1001},
    )
    page = client.search_users_with_paging("foobar", 1001, 1)
    assert _query(mock.calls[0]) == {"perpage": ["1001"], "page": ["1"], "query": ["foobar"]}
    assert page.total_count == 0
    assert len(page.users) == 0


def test_search_users_paging_needs_both_values(mock, client):
    mock.add(responses.GET, f"{BASE}/api/users/search", json={"totalCount": 1, "users": [OTHER]})
    page = client.search_users_with_paging(None, 50, None)
    assert _query(mock.calls[0]) == {}
    assert [u.login for u in page.users] == ["bob"]
    assert page.total_count == 1


def test_get_user_http_error(mock, client):
    mock.add(responses.GET, f"{BASE}/api/users/99", body="not found", status=404)
    with pytest.raises(HTTPError) as info:
        client.get_user(99)
    assert info.value.status_code == 404


def test_get_actual_user_bad_json(mock, client):
    mock.add(responses.GET, f"{BASE}/api/user", body="<html>")
    with pytest.raises(GrafanaError, match="unmarshal user"):
        client.get_actual_user()


def test_switch_actual_user_context(mock, client):
    mock.add(
        responses.POST,
        f"{BASE}/api/user/using/3",
        json={"message": "Active organization changed"},
    )
    status = client.switch_actual_user_context(3)
    assert status.message == "Active organization changed"
    assert mock.calls[0].request.method == "POST"
    assert urlsplit(mock.calls[0].request.url).path == "/api/user/using/3"