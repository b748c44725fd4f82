"""The full Grafana API client."""

from __future__ import annotations

from .alert_notifications import AlertNotificationsMixin
from .annotations import AnnotationsMixin
from .dashboards import DashboardsMixin
from .datasources import DatasourcesMixin
from .folders import FoldersMixin
from .health import HealthMixin
from .orgs import OrgsMixin
from .snapshots import SnapshotsMixin
from .teams import TeamsMixin
from .users import UsersMixin


class Client(
    DashboardsMixin,
    AlertNotificationsMixin,
    AnnotationsMixin,
    DatasourcesMixin,
    FoldersMixin,
    HealthMixin,
    OrgsMixin,
    SnapshotsMixin,
    TeamsMixin,
    UsersMixin,
):
    """Client for a Grafana server's REST API.

    The credentials are either "username:password" for basic
    authentication or an API key; an empty string means no authentication.
    """