"""Alert notification channel endpoints."""

from __future__ import annotations

from typing import Any, Mapping

from .transport import BaseClient, GrafanaError


def _object(data: Any, context: str) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise GrafanaError(f"{context}: JSON object expected")
    return data


class AlertNotificationsMixin(BaseClient):
    """Alert notification channel operations of the Grafana API."""

    def _fetch_notification(self, path: str) -> dict[str, Any]:
        raw, code = self._get(path)
        self._expect_ok(raw, code)
        return _object(self._decode(raw), "unmarshal alert notification")

    def get_all_alert_notifications(self) -> list[dict[str, Any]]:
        """List every alert notification channel."""
        raw, code = self._get("api/alert-notifications")
        self._expect_ok(raw, code)
        data = self._decode(raw)
        if data is None:
            return []
        if not isinstance(data, list):
            raise GrafanaError("unmarshal alert notifications: JSON array expected")
        return data

    def get_alert_notification_uid(self, uid: str) -> dict[str, Any]:
        """Fetch the channel with the given uid."""
        return self._fetch_notification(f"api/alert-notifications/uid/{uid}")

    def get_alert_notification_id(self, notification_id: int) -> dict[str, Any]:
        """Fetch the channel with the given id."""
        return self._fetch_notification(f"api/alert-notifications/{int(notification_id)}")

    def create_alert_notification(self, notification: Mapping[str, Any]) -> int:
        """Create a channel and return its id."""
        raw, code = self._post("api/alert-notifications", self._dump(notification))
        self._expect_ok(raw, code)
        data = _object(self._decode(raw), "unmarshal alert notification")
        return int(data.get("id") or 0)

    def update_alert_notification_uid(self, notification: Mapping[str, Any], uid: str) -> None:
        """Replace the channel with the given uid."""
        raw, code = self._put(f"api/alert-notifications/uid/{uid}", self._dump(notification))
        self._expect_ok(raw, code)

    def update_alert_notification_id(
        self, notification: Mapping[str, Any], notification_id: int
    ) -> None:
        """Replace the channel with the given id."""
        raw, code = self._put(
            f"api/alert-notifications/{int(notification_id)}", self._dump(notification)
        )
        self._expect_ok(raw, code)

    def delete_alert_notification_uid(self, uid: str) -> None:
        """Delete the channel with the given uid."""
        raw, code = self._delete(f"api/alert-notifications/uid/{uid}")
        self._expect_ok(raw, code)

    def delete_alert_notification_id(self, notification_id: int) -> None:
        """Delete the channel with the given id."""
        raw, code = self._delete(f"api/alert-notifications/{int(notification_id)}")
        self._expect_ok(raw, code)