"""Server health endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .transport import BaseClient, GrafanaError


@dataclass
class HealthResponse:
    """Health of a Grafana server."""

    commit: str = ""
    database: str = ""
    version: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HealthResponse":
        return cls(
            commit=data.get("commit") or "",
            database=data.get("database") or "",
            version=data.get("version") or "",
        )


class HealthMixin(BaseClient):
    """Health check of the Grafana API."""

    def get_health(self) -> HealthResponse:
        """Fetch the server's health report."""
        raw, _ = self._get("/api/health")
        data = self._decode(raw)
        if data is None:
            return HealthResponse()
        if not isinstance(data, dict):
            raise GrafanaError("unmarshal health: JSON object expected")
        return HealthResponse.from_dict(data)