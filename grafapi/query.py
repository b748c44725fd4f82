"""Query parameter options for the Grafana search and listing endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable

Query = dict[str, list[str]]
QueryParam = Callable[[Query], None]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class SearchParamType(str, Enum):
    """Entity kinds accepted by :func:`search_type`."""

    FOLDER = "dash-folder"
    DASHBOARD = "dash-db"


def _set(values: Query, key: str, value: str) -> None:
    values[key] = [value]


def _add(values: Query, key: str, value: str) -> None:
    values.setdefault(key, []).append(value)


def _unsigned(value: int, name: str) -> str:
    number = int(value)
    if number < 0:
        raise ValueError(f"{name} must not be negative")
    return str(number)


def build_query(params: Iterable[QueryParam]) -> Query:
    """Apply each option in turn and return the resulting query values."""
    values: Query = {}
    for param in params:
        param(values)
    return values


def to_milliseconds(t: datetime) -> int:
    """Milliseconds since the Unix epoch; naive times are taken as local."""
    if t.tzinfo is None:
        t = t.astimezone()
    delta = t - _EPOCH
    micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
    return micros // 1000 if micros >= 0 else -((-micros) // 1000)


# Annotation options.

def with_tag(tag: str) -> QueryParam:
    return lambda values: _add(values, "tags", tag)


def with_limit(limit: int) -> QueryParam:
    text = _unsigned(limit, "limit")
    return lambda values: _set(values, "limit", text)


def with_annotation_type() -> QueryParam:
    return lambda values: _set(values, "type", "annotation")


def with_alert_type() -> QueryParam:
    return lambda values: _set(values, "type", "alert")


def with_dashboard(dashboard_id: int) -> QueryParam:
    text = _unsigned(dashboard_id, "dashboard id")
    return lambda values: _set(values, "dashboardId", text)


def with_panel(panel_id: int) -> QueryParam:
    text = _unsigned(panel_id, "panel id")
    return lambda values: _set(values, "panelId", text)


def with_user(user_id: int) -> QueryParam:
    text = _unsigned(user_id, "user id")
    return lambda values: _set(values, "userId", text)


def with_start_time(t: datetime) -> QueryParam:
    text = str(to_milliseconds(t))
    return lambda values: _set(values, "from", text)


def with_end_time(t: datetime) -> QueryParam:
    text = str(to_milliseconds(t))
    return lambda values: _set(values, "to", text)


# Generic paging options.

def query_param_start(start: int) -> QueryParam:
    text = _unsigned(start, "start")
    return lambda values: _set(values, "start", text)


def query_param_limit(limit: int) -> QueryParam:
    text = _unsigned(limit, "limit")
    return lambda values: _set(values, "limit", text)


# Search options.

def search_query(query: str) -> QueryParam:
    """Set the search query; an empty query is ignored."""

    def apply(values: Query) -> None:
        if query:
            _set(values, "query", query)

    return apply


def search_tag(tag: str) -> QueryParam:
    """Add a tag to search for; an empty tag is ignored."""

    def apply(values: Query) -> None:
        if tag:
            _add(values, "tag", tag)

    return apply


def search_type(search_type: SearchParamType | str) -> QueryParam:
    text = search_type.value if isinstance(search_type, SearchParamType) else str(search_type)
    return lambda values: _set(values, "type", text)


def search_dashboard_id(dashboard_id: int) -> QueryParam:
    text = str(int(dashboard_id))
    return lambda values: _add(values, "dashboardIds", text)


def search_folder_id(folder_id: int) -> QueryParam:
    text = str(int(folder_id))
    return lambda values: _add(values, "folderIds", text)


def search_starred(starred: bool) -> QueryParam:
    text = "true" if starred else "false"
    return lambda values: _set(values, "starred", text)


def search_limit(limit: int) -> QueryParam:
    """Set the result limit; zero leaves the parameter out."""
    text = _unsigned(limit, "limit")

    def apply(values: Query) -> None:
        if int(text) > 0:
            _set(values, "limit", text)

    return apply


def search_page(page: int) -> QueryParam:
    """Set the page number; zero is ignored since pages start at one."""
    text = _unsigned(page, "page")

    def apply(values: Query) -> None:
        if int(text) > 0:
            _set(values, "page", text)

    return apply


# Folder options.

def folder_limit(limit: int) -> QueryParam:
    text = _unsigned(limit, "limit")
    return lambda values: _set(values, "limit", text)


# Team search options.

def with_query(query: str) -> QueryParam:
    return lambda values: _set(values, "query", query)


def with_pagesize(size: int) -> QueryParam:
    text = _unsigned(size, "page size")
    return lambda values: _set(values, "perpage", text)


def with_page(page: int) -> QueryParam:
    text = _unsigned(page, "page")
    return lambda values: _set(values, "page", text)


def with_team(team: str) -> QueryParam:
    return lambda values: _set(values, "team", team)