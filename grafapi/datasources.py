"""Datasource endpoints."""

from __future__ import annotations

from typing import Any, Mapping

from .transport import BaseClient, GrafanaError, StatusMessage


def _status(data: Any) -> StatusMessage:
    if data is not None and not isinstance(data, dict):
        raise GrafanaError("unmarshal response message: JSON object expected")
    return StatusMessage.from_dict(data)


def _as_dict(obj: Any) -> dict[str, Any]:
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return dict(obj)


def _object(data: Any) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise GrafanaError("unmarshal datasource: JSON object expected")
    return data


class DatasourcesMixin(BaseClient):
    """Datasource operations of the Grafana API."""

    def get_all_datasources(self) -> list[dict[str, Any]]:
        """List every datasource."""
        raw, code = self._get("api/datasources")
        self._expect_ok(raw, code)
        data = self._decode(raw)
        if data is None:
            return []
        if not isinstance(data, list):
            raise GrafanaError("unmarshal datasources: JSON array expected")
        return data

    def get_datasource(self, datasource_id: int) -> dict[str, Any]:
        """Fetch a datasource by id."""
        raw, code = self._get(f"api/datasources/{int(datasource_id)}")
        self._expect_ok(raw, code)
        return _object(self._decode(raw))

    def get_datasource_by_name(self, name: str) -> dict[str, Any]:
        """Fetch a datasource by name."""
        raw, code = self._get(f"api/datasources/name/{name}")
        self._expect_ok(raw, code)
        return _object(self._decode(raw))

    def create_datasource(self, datasource: Mapping[str, Any]) -> StatusMessage:
        """Create a datasource."""
        raw, _ = self._post("api/datasources", self._dump(_as_dict(datasource)))
        return _status(self._decode(raw))

    def update_datasource(self, datasource: Mapping[str, Any]) -> StatusMessage:
        """Update the datasource identified by the id it carries."""
        payload = _as_dict(datasource)
        datasource_id = int(payload.get("id") or 0)
        raw, _ = self._put(f"api/datasources/{datasource_id}", self._dump(payload))
        return _status(self._decode(raw))

    def delete_datasource(self, datasource_id: int) -> StatusMessage:
        """Delete a datasource by id."""
        raw, _ = self._delete(f"api/datasources/{int(datasource_id)}")
        return _status(self._decode(raw))

    def delete_datasource_by_name(self, name: str) -> StatusMessage:
        """Delete a datasource by name."""
        raw, _ = self._delete(f"api/datasources/name/{name}")
        return _status(self._decode(raw))

    def get_datasource_types(self) -> dict[str, dict[str, Any]]:
        """Map of available datasource plugins, keyed by plugin id."""
        raw, code = self._get("api/datasources/plugins")
        self._expect_ok(raw, code)
        data = self._decode(raw)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise GrafanaError("unmarshal datasource types: JSON object expected")
        return data