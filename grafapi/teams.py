"""Team endpoints: teams, their members and preferences."""

from __future__ import annotations

import json
from typing import Any, Callable, Mapping, TypeVar, Union

from .models import PageTeams, Team, TeamMember, TeamPreferences
from .query import QueryParam, build_query, with_team
from .transport import BaseClient, GrafanaError, StatusMessage

_T = TypeVar("_T")


class TeamNotFoundError(GrafanaError):
    """Raised when no team matches the requested name."""

    def __init__(self, message: str = "team not found") -> None:
        super().__init__(message)


def _payload(obj: Any) -> dict[str, Any]:
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return dict(obj)


def _status(data: Any) -> StatusMessage:
    if data is not None and not isinstance(data, dict):
        raise GrafanaError("unmarshal response message: JSON object expected")
    return StatusMessage.from_dict(data)


def _load(raw: bytes, context: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError as exc:
        text = raw.decode("utf-8", "replace")
        raise GrafanaError(f"unmarshal {context}: {exc}\n{text}") from exc


def _build(factory: Callable[[Any], _T], data: Any, context: str) -> _T:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise GrafanaError(f"unmarshal {context}: JSON object expected")
    try:
        return factory(data)
    except (TypeError, ValueError, AttributeError) as exc:
        raise GrafanaError(f"unmarshal {context}: {exc}") from exc


class TeamsMixin(BaseClient):
    """Team operations of the Grafana API."""

    def search_teams(self, *args: QueryParam) -> PageTeams:
        """Search teams, narrowed and paged by the given options."""
        raw, code = self._get("api/teams/search", build_query(args))
        self._expect_ok(raw, code)
        return _build(PageTeams.from_dict, _load(raw, "teams"), "teams")

    def get_team_by_name(self, name: str) -> Team:
        """Return the first team with the given name."""
        page = self.search_teams(with_team(name))
        if not page.teams:
            raise TeamNotFoundError()
        return page.teams[0]

    def get_team(self, team_id: int) -> Team:
        """Fetch a team by id."""
        raw, code = self._get(f"api/teams/{int(team_id)}")
        self._expect_ok(raw, code)
        return _build(Team.from_dict, _load(raw, "team"), "team")

    def create_team(self, team: Union[Team, Mapping[str, Any]]) -> StatusMessage:
        """Create a team."""
        raw, _ = self._post("api/teams", self._dump(_payload(team)))
        return _status(self._decode(raw))

    def update_team(
        self, team_id: int, team: Union[Team, Mapping[str, Any]]
    ) -> StatusMessage:
        """Update the team with the given id."""
        raw, _ = self._put(f"api/teams/{int(team_id)}", self._dump(_payload(team)))
        return _status(self._decode(raw))

    def delete_team(self, team_id: int) -> StatusMessage:
        """Delete the team with the given id."""
        raw, _ = self._delete(f"api/teams/{int(team_id)}")
        return _status(self._decode(raw))

    def get_team_members(self, team_id: int) -> list[TeamMember]:
        """List the members of a team."""
        raw, code = self._get(f"api/teams/{int(team_id)}/members")
        self._expect_ok(raw, code)
        data = _load(raw, "team")
        if data is None:
            return []
        if not isinstance(data, list):
            raise GrafanaError("unmarshal team: JSON array expected")
        return [_build(TeamMember.from_dict, item, "team") for item in data]

    def add_team_member(self, team_id: int, user_id: int) -> StatusMessage:
        """Add a user to a team."""
        body = self._dump({"userId": int(user_id)})
        raw, _ = self._post(f"api/teams/{int(team_id)}/members", body)
        return _status(self._decode(raw))

    def delete_team_member(self, team_id: int, user_id: int) -> StatusMessage:
        """Remove a user from a team."""
        raw, _ = self._delete(f"api/teams/{int(team_id)}/members/{int(user_id)}")
        return _status(self._decode(raw))

    def get_team_preferences(self, team_id: int) -> TeamPreferences:
        """Fetch the preferences of a team."""
        raw, code = self._get(f"api/teams/{int(team_id)}/preferences")
        self._expect_ok(raw, code)
        return _build(TeamPreferences.from_dict, _load(raw, "team"), "team")

    def update_team_preferences(
        self, team_id: int, preferences: Union[TeamPreferences, Mapping[str, Any]]
    ) -> StatusMessage:
        """Replace the preferences of a team."""
        raw, _ = self._put(
            f"api/teams/{int(team_id)}/preferences", self._dump(_payload(preferences))
        )
        return _status(self._decode(raw))