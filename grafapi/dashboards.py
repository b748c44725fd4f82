"""Dashboard endpoints: loading, saving, searching and deleting dashboards."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, TypeVar, Union

from .query import (
    QueryParam,
    SearchParamType,
    build_query,
    search_query,
    search_starred,
    search_tag,
    search_type,
)
from .transport import BaseClient, GrafanaError, HTTPError, StatusMessage

DEFAULT_FOLDER_ID = 0
"""Id of the general folder, which always exists and cannot be removed."""

_T = TypeVar("_T")
_FRACTION = re.compile(r"\.(\d+)")


def _get(data: Mapping[str, Any], key: str, default: Any) -> Any:
    value = data.get(key)
    return default if value is None else value


def _fix_fraction(match: "re.Match[str]") -> str:
    return "." + match.group(1)[:6].ljust(6, "0")


def _parse_time(value: Any) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp as Grafana sends it."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(_fix_fraction, text, count=1)
    return datetime.fromisoformat(text)


@dataclass
class BoardProperties:
    """Metadata that Grafana keeps about a dashboard."""

    is_starred: bool = False
    is_home: bool = False
    is_snapshot: bool = False
    type: str = ""
    can_save: bool = False
    can_edit: bool = False
    can_star: bool = False
    slug: str = ""
    expires: Optional[datetime] = None
    created: Optional[datetime] = None
    updated: Optional[datetime] = None
    updated_by: str = ""
    created_by: str = ""
    version: int = 0
    folder_id: int = 0
    folder_title: str = ""
    folder_url: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BoardProperties":
        return cls(
            is_starred=_get(data, "isStarred", False),
            is_home=_get(data, "isHome", False),
            is_snapshot=_get(data, "isSnapshot", False),
            type=_get(data, "type", ""),
            can_save=_get(data, "canSave", False),
            can_edit=_get(data, "canEdit", False),
            can_star=_get(data, "canStar", False),
            slug=_get(data, "slug", ""),
            expires=_parse_time(data.get("expires")),
            created=_parse_time(data.get("created")),
            updated=_parse_time(data.get("updated")),
            updated_by=_get(data, "updatedBy", ""),
            created_by=_get(data, "createdBy", ""),
            version=_get(data, "version", 0),
            folder_id=_get(data, "folderId", 0),
            folder_title=_get(data, "folderTitle", ""),
            folder_url=_get(data, "folderUrl", ""),
        )


@dataclass
class FoundBoard:
    """A dashboard or folder returned by a search."""

    id: int = 0
    uid: str = ""
    title: str = ""
    uri: str = ""
    url: str = ""
    slug: str = ""
    type: str = ""
    tags: list[str] = field(default_factory=list)
    is_starred: bool = False
    folder_id: int = 0
    folder_uid: str = ""
    folder_title: str = ""
    folder_url: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FoundBoard":
        return cls(
            id=_get(data, "id", 0),
            uid=_get(data, "uid", ""),
            title=_get(data, "title", ""),
            uri=_get(data, "uri", ""),
            url=_get(data, "url", ""),
            slug=_get(data, "slug", ""),
            type=_get(data, "type", ""),
            tags=list(_get(data, "tags", [])),
            is_starred=_get(data, "isStarred", False),
            folder_id=_get(data, "folderId", 0),
            folder_uid=_get(data, "folderUid", ""),
            folder_title=_get(data, "folderTitle", ""),
            folder_url=_get(data, "folderUrl", ""),
        )


@dataclass
class DashboardVersion:
    """One saved version of a dashboard."""

    id: int = 0
    dashboard_id: int = 0
    parent_version: int = 0
    restored_from: int = 0
    version: int = 0
    created: Optional[datetime] = None
    created_by: str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DashboardVersion":
        return cls(
            id=_get(data, "id", 0),
            dashboard_id=_get(data, "dashboardId", 0),
            parent_version=_get(data, "parentVersion", 0),
            restored_from=_get(data, "restoredFrom", 0),
            version=_get(data, "version", 0),
            created=_parse_time(data.get("created")),
            created_by=_get(data, "createdBy", ""),
            message=_get(data, "message", ""),
        )


@dataclass
class SetDashboardParams:
    """Where and how a dashboard is stored."""

    folder_id: int = DEFAULT_FOLDER_ID
    overwrite: bool = False
    preserve_id: bool = False


@dataclass
class RawBoardRequest:
    """A serialized dashboard together with the parameters to save it with."""

    dashboard: Union[bytes, str]
    parameters: SetDashboardParams = field(default_factory=SetDashboardParams)

    def to_json(self) -> bytes:
        """Serialize as Grafana expects; the id is reset unless it is preserved."""
        try:
            board = json.loads(self.dashboard)
        except ValueError as exc:
            raise GrafanaError(f"unmarshal dashboard: {exc}") from exc
        if board is None:
            board = {}
        if not isinstance(board, dict):
            raise GrafanaError("unmarshal dashboard: JSON object expected")
        if not self.parameters.preserve_id:
            board["id"] = 0
        payload = {
            "dashboard": board,
            "FolderID": self.parameters.folder_id,
            "Overwrite": self.parameters.overwrite,
        }
        return json.dumps(payload, separators=(",", ":")).encode("utf-8")


def set_prefix(slug: str) -> str:
    """Treat a slug as a database dashboard unless it says otherwise."""
    if slug.startswith("db") or slug.startswith("file/"):
        return slug
    return f"db/{slug}"


def clean_prefix(slug: str) -> tuple[str, bool]:
    """Strip the source prefix; the flag tells whether it is a database dashboard."""
    if slug.startswith("db"):
        return slug[3:], True
    if slug.startswith("file"):
        return slug[3:], False
    return slug, True


def _build(factory: Callable[[Any], _T], data: Any, context: str) -> _T:
    try:
        return factory(data)
    except (ValueError, TypeError, AttributeError) as exc:
        raise GrafanaError(f"{context}: {exc}") from exc


def _status(data: Any) -> StatusMessage:
    if data is not None and not isinstance(data, dict):
        raise GrafanaError("unmarshal response message: JSON object expected")
    return StatusMessage.from_dict(data)


def _board_dict(board: Any) -> dict[str, Any]:
    if hasattr(board, "to_dict"):
        board = board.to_dict()
    return dict(board)


class DashboardsMixin(BaseClient):
    """Dashboard operations of the Grafana API."""

    def _get_raw_dashboard(self, path: str) -> tuple[Any, BoardProperties]:
        raw, code = self._get(f"api/dashboards/{path}")
        self._expect_ok(raw, code)
        data = self._decode(raw, "unmarshal board")
        if not isinstance(data, dict):
            raise GrafanaError("unmarshal board: JSON object expected")
        meta = _build(BoardProperties.from_dict, data.get("meta") or {}, "unmarshal board")
        return data.get("dashboard"), meta

    def _get_dashboard(self, path: str) -> tuple[dict[str, Any], BoardProperties]:
        board, meta = self._get_raw_dashboard(path)
        if board is None:
            board = {}
        if not isinstance(board, dict):
            raise GrafanaError("unmarshal board: JSON object expected")
        return board, meta

    def get_dashboard_by_uid(self, uid: str) -> tuple[dict[str, Any], BoardProperties]:
        """Load a dashboard model and its metadata by uid."""
        return self._get_dashboard(f"uid/{uid}")

    def get_dashboard_by_slug(self, slug: str) -> tuple[dict[str, Any], BoardProperties]:
        """Load a dashboard by slug; prefix "file/" for dashboards from files."""
        return self._get_dashboard(set_prefix(slug))

    def get_dashboard_versions_by_dashboard_id(
        self, dashboard_id: int, *args: QueryParam
    ) -> list[DashboardVersion]:
        """List saved versions of a dashboard, newest first."""
        raw, code = self._get(
            f"api/dashboards/id/{int(dashboard_id)}/versions", build_query(args)
        )
        self._expect_ok(raw, code)
        data = self._decode(raw) or []
        return [_build(DashboardVersion.from_dict, item, "unmarshal versions") for item in data]

    def get_raw_dashboard_by_uid(self, uid: str) -> tuple[bytes, BoardProperties]:
        """Load a dashboard as JSON bytes, without interpreting it."""
        board, meta = self._get_raw_dashboard(f"uid/{uid}")
        return json.dumps(board).encode("utf-8"), meta

    def get_raw_dashboard_by_slug(self, slug: str) -> tuple[bytes, BoardProperties]:
        """Load a dashboard as JSON bytes by slug."""
        board, meta = self._get_raw_dashboard(set_prefix(slug))
        return json.dumps(board).encode("utf-8"), meta

    def search_dashboards(self, query: str, starred: bool, *args: str) -> list[FoundBoard]:
        """Search dashboards by title substring, starred flag and tags."""
        params = [
            search_type(SearchParamType.DASHBOARD),
            search_query(query),
            search_starred(starred),
        ]
        params.extend(search_tag(tag) for tag in args)
        return self.search(*params)

    def search(self, *args: QueryParam) -> list[FoundBoard]:
        """Search folders and dashboards with the given options."""
        raw, code = self._get("api/search", build_query(args))
        self._expect_ok(raw, code)
        data = self._decode(raw) or []
        return [_build(FoundBoard.from_dict, item, "unmarshal search") for item in data]

    def set_dashboard(
        self, board: Mapping[str, Any], params: SetDashboardParams
    ) -> StatusMessage:
        """Create or update a database dashboard from its model."""
        model = _board_dict(board)
        slug, from_db = clean_prefix(model.get("slug") or "")
        if not from_db:
            raise GrafanaError(
                "only database dashboard (with 'db/' prefix in a slug) can be set"
            )
        if "slug" in model:
            model["slug"] = slug
        if not params.overwrite:
            model["id"] = 0
        payload = {
            "dashboard": model,
            "folderId": params.folder_id,
            "overwrite": params.overwrite,
        }
        raw, code = self._post("api/dashboards/db", self._dump(payload))
        resp = _status(self._decode(raw))
        if code != 200:
            raise HTTPError(code, resp.message or "")
        return resp

    def set_raw_dashboard_with_param(self, request: RawBoardRequest) -> StatusMessage:
        """Save a serialized dashboard with the request's parameters."""
        raw, code = self._post("api/dashboards/db", request.to_json())
        resp = _status(self._decode(raw))
        if code != 200:
            raise HTTPError(code, resp.message or "")
        return resp

    def set_raw_dashboard(self, raw: Union[bytes, str]) -> StatusMessage:
        """Save a serialized dashboard in the general folder, overwriting."""
        params = SetDashboardParams(folder_id=DEFAULT_FOLDER_ID, overwrite=True)
        return self.set_raw_dashboard_with_param(RawBoardRequest(raw, params))

    def delete_dashboard(self, slug: str) -> StatusMessage:
        """Delete a database dashboard by slug."""
        slug, from_db = clean_prefix(slug)
        if not from_db:
            raise GrafanaError(
                "only database dashboards (with 'db/' prefix in a slug) can be removed"
            )
        raw, _ = self._delete(f"api/dashboards/db/{slug}")
        return _status(self._decode(raw))

    def delete_dashboard_by_uid(self, uid: str) -> StatusMessage:
        """Delete a dashboard by uid."""
        raw, _ = self._delete(f"api/dashboards/uid/{uid}")
        return _status(self._decode(raw))