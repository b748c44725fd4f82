"""Annotation endpoints."""

from __future__ import annotations

from typing import Any, Mapping

from .query import QueryParam, build_query
from .transport import BaseClient, GrafanaError, StatusMessage


def _status(data: Any) -> StatusMessage:
    if data is not None and not isinstance(data, dict):
        raise GrafanaError("unmarshal response message: JSON object expected")
    return StatusMessage.from_dict(data)


class AnnotationsMixin(BaseClient):
    """Annotation operations of the Grafana API."""

    def _marshal(self, request: Mapping[str, Any]) -> bytes:
        try:
            return self._dump(request)
        except (TypeError, ValueError) as exc:
            raise GrafanaError(f"marshal request: {exc}") from exc

    def create_annotation(self, request: Mapping[str, Any]) -> StatusMessage:
        """Create an annotation."""
        body = self._marshal(request)
        try:
            raw, _ = self._post("api/annotations", body)
        except GrafanaError as exc:
            raise GrafanaError(f"create annotation: {exc}") from exc
        return _status(self._decode(raw, "unmarshal response message"))

    def patch_annotation(
        self, annotation_id: int, request: Mapping[str, Any]
    ) -> StatusMessage:
        """Change fields of the annotation with the given id."""
        body = self._marshal(request)
        try:
            raw, _ = self._patch(f"api/annotations/{int(annotation_id)}", body)
        except GrafanaError as exc:
            raise GrafanaError(f"patch annotation: {exc}") from exc
        return _status(self._decode(raw, "unmarshal response message"))

    def get_annotations(self, *args: QueryParam) -> list[dict[str, Any]]:
        """Find annotations matching the given options."""
        try:
            raw, _ = self._get("api/annotations", build_query(args))
        except GrafanaError as exc:
            raise GrafanaError(f"get annotations: {exc}") from exc
        data = self._decode(raw, "unmarshal response message")
        if data is None:
            return []
        if not isinstance(data, list):
            raise GrafanaError("unmarshal response message: JSON array expected")
        return data

    def delete_annotation(self, annotation_id: int) -> StatusMessage:
        """Delete the annotation with the given id."""
        try:
            raw, _ = self._delete(f"api/annotations/{int(annotation_id)}")
        except GrafanaError as exc:
            raise GrafanaError(f"delete annotation: {exc}") from exc
        return _status(self._decode(raw, "unmarshal response message"))