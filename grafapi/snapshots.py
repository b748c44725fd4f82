"""Dashboard snapshot endpoint."""

from __future__ import annotations

from typing import Any

from .models import CreateSnapshotRequest
from .transport import BaseClient, GrafanaError, StatusMessage


class SnapshotsMixin(BaseClient):
    """Snapshot operations of the Grafana API."""

    def create_snapshot(self, request: CreateSnapshotRequest) -> StatusMessage:
        """Create a snapshot of a dashboard."""
        try:
            body = self._dump(request)
        except (TypeError, ValueError) as exc:
            raise GrafanaError(f"marshal request: {exc}") from exc
        try:
            raw, code = self._post("api/snapshots", body)
        except GrafanaError as exc:
            raise GrafanaError(f"create snapshot: {exc}") from exc
        if code // 100 != 2:
            raise GrafanaError(f"bad response: {code}")
        data: Any = self._decode(raw, "unmarshal response message")
        if data is not None and not isinstance(data, dict):
            raise GrafanaError("unmarshal response message: JSON object expected")
        return StatusMessage.from_dict(data)