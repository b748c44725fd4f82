"""Data types for teams, users and snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


def _field(data: Mapping[str, Any], key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None else value


@dataclass
class Team:
    id: int = 0
    name: str = ""
    email: str = ""
    org_id: int = 0
    created: str = ""
    updated: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Team":
        return cls(
            id=_field(data, "id", 0),
            name=_field(data, "name", ""),
            email=_field(data, "email", ""),
            org_id=_field(data, "orgId", 0),
            created=_field(data, "created", ""),
            updated=_field(data, "updated", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "orgId": self.org_id,
            "created": self.created,
            "updated": self.updated,
        }


@dataclass
class PageTeams:
    total_count: int = 0
    teams: list[Team] = field(default_factory=list)
    page: int = 0
    per_page: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PageTeams":
        return cls(
            total_count=_field(data, "totalCount", 0),
            teams=[Team.from_dict(item) for item in _field(data, "teams", [])],
            page=_field(data, "page", 0),
            per_page=_field(data, "perPage", 0),
        )


@dataclass
class TeamMember:
    org_id: int = 0
    team_id: int = 0
    user_id: int = 0
    email: str = ""
    login: str = ""
    avatar_url: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TeamMember":
        return cls(
            org_id=_field(data, "orgId", 0),
            team_id=_field(data, "teamId", 0),
            user_id=_field(data, "userId", 0),
            email=_field(data, "email", ""),
            login=_field(data, "login", ""),
            avatar_url=_field(data, "avatarUrl", ""),
        )


@dataclass
class TeamPreferences:
    theme: str = ""
    home_dashboard_id: int = 0
    timezone: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TeamPreferences":
        return cls(
            theme=_field(data, "theme", ""),
            home_dashboard_id=_field(data, "homeDashboardId", 0),
            timezone=_field(data, "timezone", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "theme": self.theme,
            "homeDashboardId": self.home_dashboard_id,
            "timezone": self.timezone,
        }


@dataclass
class User:
    id: int = 0
    login: str = ""
    name: str = ""
    email: str = ""
    org_id: int = 0
    theme: str = ""
    password: str = ""
    is_disabled: bool = False
    auth_labels: list[str] = field(default_factory=list)
    is_grafana_admin: bool = False
    is_external: bool = False
    # The search endpoint reports admin rights through this field.
    is_admin: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "User":
        return cls(
            id=_field(data, "id", 0),
            login=_field(data, "login", ""),
            name=_field(data, "name", ""),
            email=_field(data, "email", ""),
            org_id=_field(data, "orgId", 0),
            theme=_field(data, "theme", ""),
            password=_field(data, "password", ""),
            is_disabled=_field(data, "isDisabled", False),
            auth_labels=list(_field(data, "authLabels", [])),
            is_grafana_admin=_field(data, "isGrafanaAdmin", False),
            is_external=_field(data, "isExternal", False),
            is_admin=_field(data, "isAdmin", False),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "login": self.login,
            "name": self.name,
            "email": self.email,
            "orgId": self.org_id,
            "theme": self.theme,
            "password": self.password,
            "isDisabled": self.is_disabled,
            "authLabels": list(self.auth_labels),
            "isGrafanaAdmin": self.is_grafana_admin,
            "isExternal": self.is_external,
            "isAdmin": self.is_admin,
        }


@dataclass
class UserRole:
    login_or_email: str = ""
    role: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"loginOrEmail": self.login_or_email, "role": self.role}


@dataclass
class UserPermissions:
    is_grafana_admin: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"isGrafanaAdmin": self.is_grafana_admin}


@dataclass
class PageUsers:
    total_count: int = 0
    users: list[User] = field(default_factory=list)
    page: int = 0
    per_page: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PageUsers":
        return cls(
            total_count=_field(data, "totalCount", 0),
            users=[User.from_dict(item) for item in _field(data, "users", [])],
            page=_field(data, "page", 0),
            per_page=_field(data, "perPage", 0),
        )


@dataclass
class CreateSnapshotRequest:
    """Snapshot request; the dashboard is its JSON model as a mapping."""

    expires: int = 0
    dashboard: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        dashboard = self.dashboard
        if hasattr(dashboard, "to_dict"):
            dashboard = dashboard.to_dict()
        return {"expires": self.expires, "dashboard": dashboard}