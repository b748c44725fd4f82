"""Folder and folder permission endpoints."""

from __future__ import annotations

from typing import Any, Mapping

from .query import QueryParam, build_query
from .transport import BaseClient, GrafanaError, StatusMessage


def _payload(obj: Any) -> dict[str, Any]:
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return dict(obj)


def _object(data: Any, context: str) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise GrafanaError(f"unmarshal {context}: JSON object expected")
    return data


def _array(data: Any, context: str) -> list[dict[str, Any]]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise GrafanaError(f"unmarshal {context}: JSON array expected")
    return data


class FoldersMixin(BaseClient):
    """Folder operations of the Grafana API."""

    def get_all_folders(self, *args: QueryParam) -> list[dict[str, Any]]:
        """List folders, narrowed by the given options."""
        raw, code = self._get("api/folders", build_query(args))
        self._expect_ok(raw, code)
        return _array(self._decode(raw), "folders")

    def get_folder_by_uid(self, uid: str) -> dict[str, Any]:
        """Fetch a folder by uid."""
        raw, code = self._get(f"api/folders/{uid}")
        self._expect_ok(raw, code)
        return _object(self._decode(raw), "folder")

    def create_folder(self, folder: Mapping[str, Any]) -> dict[str, Any]:
        """Create a folder and return it as stored."""
        raw, code = self._post("api/folders", self._dump(_payload(folder)))
        self._expect_ok(raw, code)
        return _object(self._decode(raw), "folder")

    def update_folder_by_uid(self, folder: Mapping[str, Any]) -> dict[str, Any]:
        """Update the folder identified by the uid it carries."""
        payload = _payload(folder)
        uid = payload.get("uid") or ""
        raw, code = self._put(f"api/folders/{uid}", self._dump(payload))
        self._expect_ok(raw, code)
        return _object(self._decode(raw), "folder")

    def delete_folder_by_uid(self, uid: str) -> bool:
        """Delete a folder by uid; returns True once deleted."""
        raw, code = self._delete(f"api/folders/{uid}")
        self._expect_ok(raw, code)
        return True

    def get_folder_by_id(self, folder_id: int) -> dict[str, Any]:
        """Fetch a folder by its positive id."""
        if int(folder_id) <= 0:
            raise ValueError("ID cannot be less than zero")
        raw, code = self._get(f"api/folders/id/{int(folder_id)}")
        self._expect_ok(raw, code)
        return _object(self._decode(raw), "folder")

    def get_folder_permissions(self, folder_uid: str) -> list[dict[str, Any]]:
        """List the permissions of a folder."""
        raw, code = self._get(f"api/folders/{folder_uid}/permissions")
        self._expect_ok(raw, code)
        return _array(self._decode(raw), "folder permissions")

    def update_folder_permissions(self, folder_uid: str, *args: Any) -> StatusMessage:
        """Replace the permissions of a folder with the given ones."""
        items = [_payload(item) for item in args]
        payload = {"items": items or None}
        raw, code = self._post(f"api/folders/{folder_uid}/permissions", self._dump(payload))
        self._expect_ok(raw, code)
        data = self._decode(raw)
        if data is not None and not isinstance(data, dict):
            raise GrafanaError("unmarshal response message: JSON object expected")
        return StatusMessage.from_dict(data)