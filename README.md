# grafapi

A Python client for the Grafana HTTP API, built on `requests`. It covers
dashboards and their versions, search, folders and folder permissions, data
sources, alert notification channels, annotations, snapshots, organisations,
teams, users and the server health endpoint.

## Installation

```
pip install grafapi
```

For running the test suite:

```
pip install "grafapi[test]"
pytest
```

## Connecting

```python
import requests

from grafapi.client import Client

client = Client("http://localhost:3000", "placeholder", requests.Session())
```

The second argument is either a Grafana API key, sent as a bearer token, or
a `login:password` pair, sent as HTTP basic authentication. An empty string
means no authentication. The session is optional; without one the client
creates its own `requests.Session`.

Every request carries `Accept: application/json`,
`Content-Type: application/json` and the user agent `autograf`.

## Layout

| Module | Contents |
| --- | --- |
| `grafapi.client` | `Client`, which combines all the endpoint groups below |
| `grafapi.transport` | `BaseClient`, `StatusMessage`, `GrafanaError`, `HTTPError` |
| `grafapi.query` | query options for search, annotations, folders, teams and versions |
| `grafapi.models` | `Team`, `PageTeams`, `TeamMember`, `TeamPreferences`, `User`, `UserRole`, `UserPermissions`, `PageUsers`, `CreateSnapshotRequest` |
| `grafapi.dashboards` | `DashboardsMixin`, `BoardProperties`, `FoundBoard`, `DashboardVersion`, `SetDashboardParams`, `RawBoardRequest`, `set_prefix`, `clean_prefix` |
| `grafapi.folders` | `FoldersMixin` |
| `grafapi.datasources` | `DatasourcesMixin` |
| `grafapi.alert_notifications` | `AlertNotificationsMixin` |
| `grafapi.annotations` | `AnnotationsMixin` |
| `grafapi.snapshots` | `SnapshotsMixin` |
| `grafapi.orgs` | `OrgsMixin` |
| `grafapi.teams` | `TeamsMixin`, `TeamNotFoundError` |
| `grafapi.users` | `UsersMixin` |
| `grafapi.health` | `HealthMixin`, `HealthResponse` |

Teams, users, dashboard metadata, search results, versions and health come
back as dataclasses. Dashboards, folders, data sources, organisations, alert
notification channels and annotations are passed and returned as plain
dictionaries in Grafana's own JSON shape. Calls that create, update or delete
usually return a `StatusMessage`.

## Examples

Check that the server is up:

```python
health = client.get_health()
print(health.version, health.database)
```

Search for dashboards, combining query options:

```python
from grafapi.query import search_query, search_tag, search_limit

for found in client.search(search_query("cpu"), search_tag("prod"), search_limit(50)):
    print(found.uid, found.title)
```

`search_query` and `search_tag` ignore empty strings, and `search_limit` and
`search_page` ignore zero. Tags, dashboard ids and folder ids accumulate; the
other options keep only the last value given.

Fetch a dashboard as JSON bytes, together with its metadata:

```python
raw, props = client.get_raw_dashboard_by_uid("abc123")
print(props.version, props.folder_title)
```

Save a dashboard model. Unless `overwrite` is set, its id is reset to 0 so
that Grafana creates a new dashboard:

```python
from grafapi.dashboards import SetDashboardParams

status = client.set_dashboard({"title": "CPU", "uid": "cpu"}, SetDashboardParams(folder_id=0))
print(status.uid, status.url)
```

Look up annotations for one dashboard:

```python
from grafapi.query import with_dashboard, with_limit, with_tag

annotations = client.get_annotations(with_dashboard(1), with_tag("deploy"), with_limit(10))
```

Find a team by name:

```python
from grafapi.teams import TeamNotFoundError

try:
    team = client.get_team_by_name("backend")
except TeamNotFoundError:
    team = None
```

Page through users:

```python
page = client.search_users_with_paging(None, 100, 1)
print(page.total_count, [user.login for user in page.users])
```

## Errors

All errors raised by the package derive from `grafapi.transport.GrafanaError`,
including failures of the underlying HTTP connection and responses that are
not valid JSON. Calls that check the response status raise
`grafapi.transport.HTTPError`, which carries `status_code` and `body`, when
Grafana does not answer 200; `create_snapshot` accepts any 2xx status. Some
create, update and delete calls do not check the status and return the
`StatusMessage` Grafana sent back. `get_folder_by_id` raises `ValueError` for
an id that is not positive.

## What it does not do

There is no typed model of a dashboard's panels, rows or templating, and no
helpers for building dashboards: dashboards are handled as plain
dictionaries. The package has no command-line tool.