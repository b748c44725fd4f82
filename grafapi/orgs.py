"""Organization endpoints: organizations, their users, preferences and addresses."""

from __future__ import annotations

import json
from typing import Any, Mapping

from .transport import BaseClient, GrafanaError, StatusMessage


def _payload(obj: Any) -> dict[str, Any]:
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return dict(obj)


def _status(data: Any) -> StatusMessage:
    if data is not None and not isinstance(data, dict):
        raise GrafanaError("unmarshal response message: JSON object expected")
    return StatusMessage.from_dict(data)


class OrgsMixin(BaseClient):
    """Organization operations of the Grafana API."""

    def _fetch(self, path: str, context: str) -> Any:
        raw, code = self._get(path)
        self._expect_ok(raw, code)
        try:
            return json.loads(raw)
        except ValueError as exc:
            text = raw.decode("utf-8", "replace")
            raise GrafanaError(f"unmarshal {context}: {exc}\n{text}") from exc

    def _fetch_object(self, path: str, context: str) -> dict[str, Any]:
        data = self._fetch(path, context)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise GrafanaError(f"unmarshal {context}: JSON object expected")
        return data

    def _fetch_list(self, path: str, context: str) -> list[dict[str, Any]]:
        data = self._fetch(path, context)
        if data is None:
            return []
        if not isinstance(data, list):
            raise GrafanaError(f"unmarshal {context}: JSON array expected")
        return data

    def create_org(self, org: Mapping[str, Any]) -> StatusMessage:
        """Create an organization."""
        raw, _ = self._post("api/orgs", self._dump(_payload(org)))
        return _status(self._decode(raw))

    def get_all_orgs(self) -> list[dict[str, Any]]:
        """List every organization."""
        return self._fetch_list("api/orgs", "orgs")

    def get_actual_org(self) -> dict[str, Any]:
        """Fetch the current organization."""
        return self._fetch_object("api/org", "org")

    def get_org_by_id(self, org_id: int) -> dict[str, Any]:
        """Fetch an organization by id."""
        return self._fetch_object(f"api/orgs/{int(org_id)}", "org")

    def get_org_by_org_name(self, name: str) -> dict[str, Any]:
        """Fetch an organization by name."""
        return self._fetch_object(f"api/orgs/name/{name}", "org")

    def update_actual_org(self, org: Mapping[str, Any]) -> StatusMessage:
        """Update the current organization."""
        raw, _ = self._put("api/org", self._dump(_payload(org)))
        return _status(self._decode(raw))

    def update_org(self, org: Mapping[str, Any], org_id: int) -> StatusMessage:
        """Update the organization with the given id."""
        raw, _ = self._put(f"api/orgs/{int(org_id)}", self._dump(_payload(org)))
        return _status(self._decode(raw))

    def delete_org(self, org_id: int) -> StatusMessage:
        """Delete the organization with the given id."""
        raw, _ = self._delete(f"api/orgs/{int(org_id)}")
        return _status(self._decode(raw))

    def get_actual_org_users(self) -> list[dict[str, Any]]:
        """List the users of the current organization."""
        return self._fetch_list("api/org/users", "org")

    def get_org_users(self, org_id: int) -> list[dict[str, Any]]:
        """List the users of the organization with the given id."""
        return self._fetch_list(f"api/orgs/{int(org_id)}/users", "org")

    def add_actual_org_user(self, user_role: Any) -> StatusMessage:
        """Add a global user to the current organization."""
        raw, _ = self._post("api/org/users", self._dump(_payload(user_role)))
        return _status(self._decode(raw))

    def update_actual_org_user(self, user_role: Any, user_id: int) -> StatusMessage:
        """Change the role of a user in the current organization."""
        raw, _ = self._post(
            f"api/org/users/{int(user_id)}", self._dump(_payload(user_role))
        )
        return _status(self._decode(raw))

    def delete_actual_org_user(self, user_id: int) -> StatusMessage:
        """Remove a user from the current organization."""
        raw, _ = self._delete(f"api/org/users/{int(user_id)}")
        return _status(self._decode(raw))

    def add_org_user(self, user_role: Any, org_id: int) -> StatusMessage:
        """Add a user to the organization with the given id."""
        raw, _ = self._post(
            f"api/orgs/{int(org_id)}/users", self._dump(_payload(user_role))
        )
        return _status(self._decode(raw))

    def update_org_user(self, user_role: Any, org_id: int, user_id: int) -> StatusMessage:
        """Change the role of a user within the given organization."""
        raw, _ = self._patch(
            f"api/orgs/{int(org_id)}/users/{int(user_id)}",
            self._dump(_payload(user_role)),
        )
        return _status(self._decode(raw))

    def delete_org_user(self, org_id: int, user_id: int) -> StatusMessage:
        """Remove a user from the given organization."""
        raw, _ = self._delete(f"api/orgs/{int(org_id)}/users/{int(user_id)}")
        return _status(self._decode(raw))

    def update_actual_org_preferences(self, prefs: Mapping[str, Any]) -> StatusMessage:
        """Update the preferences of the current organization."""
        raw, _ = self._put("api/org/preferences/", self._dump(_payload(prefs)))
        return _status(self._decode(raw))

    def get_actual_org_preferences(self) -> dict[str, Any]:
        """Fetch the preferences of the current organization."""
        return self._fetch_object("/api/org/preferences", "prefs")

    def update_actual_org_address(self, address: Mapping[str, Any]) -> StatusMessage:
        """Update the address of the current organization."""
        raw, _ = self._put("api/org/address", self._dump(_payload(address)))
        return _status(self._decode(raw))

    def update_org_address(self, address: Mapping[str, Any], org_id: int) -> StatusMessage:
        """Update the address of the organization with the given id."""
        raw, _ = self._put(
            f"api/orgs/{int(org_id)}/address", self._dump(_payload(address))
        )
        return _status(self._decode(raw))