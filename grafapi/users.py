"""User endpoints."""

from __future__ import annotations

import json
from typing import Any, Callable, Optional, TypeVar

from .models import PageUsers, User
from .transport import BaseClient, GrafanaError, Query, StatusMessage

_T = TypeVar("_T")


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


class UsersMixin(BaseClient):
    """User operations of the Grafana API."""

    def _fetch_user(self, path: str) -> User:
        raw, code = self._get(path)
        self._expect_ok(raw, code)
        return _build(User.from_dict, _load(raw, "user"), "user")

    def get_actual_user(self) -> User:
        """Fetch the user the client is signed in as."""
        return self._fetch_user("api/user")

    def get_user(self, user_id: int) -> User:
        """Fetch a user by id."""
        return self._fetch_user(f"api/users/{int(user_id)}")

    def get_all_users(self) -> list[User]:
        """List every user."""
        raw, code = self._get("api/users", {"perpage": ["99999"]})
        self._expect_ok(raw, code)
        data = _load(raw, "users")
        if data is None:
            return []
        if not isinstance(data, list):
            raise GrafanaError("unmarshal users: JSON array expected")
        return [_build(User.from_dict, item, "users") for item in data]

    def search_users_with_paging(
        self,
        query: Optional[str] = None,
        perpage: Optional[int] = None,
        page: Optional[int] = None,
    ) -> PageUsers:
        """Search users by name, login or e-mail; paging needs both perpage and page."""
        params: Optional[Query] = None
        if perpage is not None and page is not None:
            params = {"perpage": [str(perpage)], "page": [str(page)]}
        if query is not None:
            params = params if params is not None else {}
            params["query"] = [query]
        raw, code = self._get("api/users/search", params)
        self._expect_ok(raw, code)
        return _build(PageUsers.from_dict, _load(raw, "users"), "users")

    def switch_actual_user_context(self, org_id: int) -> StatusMessage:
        """Make the given organization the current one for the signed-in user."""
        raw, _ = self._post(f"/api/user/using/{int(org_id)}", b"")
        data = self._decode(raw)
        if data is not None and not isinstance(data, dict):
            raise GrafanaError("unmarshal response message: JSON object expected")
        return StatusMessage.from_dict(data)