"""HTTP transport shared by every Grafana API call."""

from __future__ import annotations

import json
import posixpath
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import urlencode, urlsplit, urlunsplit

import requests

USER_AGENT = "autograf"

Query = dict[str, list[str]]


class GrafanaError(Exception):
    """Raised when a call to the Grafana API fails."""


class HTTPError(GrafanaError):
    """Raised when Grafana answers with an unexpected HTTP status."""

    def __init__(self, status_code: int, body: bytes | str) -> None:
        text = body.decode("utf-8", "replace") if isinstance(body, bytes) else str(body)
        super().__init__(f"HTTP error {status_code}: returns {text}")
        self.status_code = status_code
        self.body = text


@dataclass
class StatusMessage:
    """Status message as returned by the Grafana REST API."""

    id: Optional[int] = None
    org_id: Optional[int] = None
    message: Optional[str] = None
    slug: Optional[str] = None
    version: Optional[int] = None
    status: Optional[str] = None
    uid: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "StatusMessage":
        data = data or {}
        return cls(
            id=data.get("id"),
            org_id=data.get("orgId"),
            message=data.get("message"),
            slug=data.get("slug"),
            version=data.get("version"),
            status=data.get("status"),
            uid=data.get("uid"),
            url=data.get("url"),
        )


def _join_path(base: str, query: str) -> str:
    parts = [part for part in (base, query) if part]
    if not parts:
        return ""
    cleaned = posixpath.normpath("/".join(parts))
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def _encode_query(params: Query) -> str:
    pairs = [(key, value) for key in sorted(params) for value in params[key]]
    return urlencode(pairs)


class BaseClient:
    """Low-level access to a Grafana server over HTTP."""

    def __init__(
        self,
        api_url: str,
        api_key_or_basic_auth: str = "",
        session: Optional[requests.Session] = None,
    ) -> None:
        self._parts = urlsplit(api_url)
        self._basic_auth = ":" in api_key_or_basic_auth
        self._key = ""
        self._auth: Optional[tuple[str, str]] = None
        if api_key_or_basic_auth:
            if not self._basic_auth:
                self._key = f"Bearer {api_key_or_basic_auth}"
            else:
                pieces = api_key_or_basic_auth.split(":")
                self._auth = (pieces[0], pieces[1])
        self._session = session if session is not None else requests.Session()

    def _build_url(self, query: str, params: Optional[Query]) -> str:
        path = _join_path(self._parts.path, query)
        if path and self._parts.netloc and not path.startswith("/"):
            path = "/" + path
        raw_query = self._parts.query if params is None else _encode_query(params)
        return urlunsplit(
            (self._parts.scheme, self._parts.netloc, path, raw_query, self._parts.fragment)
        )

    def _request(
        self,
        method: str,
        query: str,
        params: Optional[Query] = None,
        body: Optional[bytes] = None,
    ) -> tuple[bytes, int]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": USER_AGENT,
        }
        if not self._basic_auth and self._key:
            headers["Authorization"] = self._key
        try:
            response = self._session.request(
                method,
                self._build_url(query, params),
                data=body,
                headers=headers,
                auth=self._auth,
            )
        except requests.RequestException as exc:
            raise GrafanaError(str(exc)) from exc
        return response.content, response.status_code

    def _get(self, query: str, params: Optional[Query] = None) -> tuple[bytes, int]:
        return self._request("GET", query, params)

    def _post(
        self, query: str, body: bytes = b"", params: Optional[Query] = None
    ) -> tuple[bytes, int]:
        return self._request("POST", query, params, body)

    def _put(
        self, query: str, body: bytes = b"", params: Optional[Query] = None
    ) -> tuple[bytes, int]:
        return self._request("PUT", query, params, body)

    def _patch(
        self, query: str, body: bytes = b"", params: Optional[Query] = None
    ) -> tuple[bytes, int]:
        return self._request("PATCH", query, params, body)

    def _delete(self, query: str) -> tuple[bytes, int]:
        return self._request("DELETE", query)

    @staticmethod
    def _expect_ok(raw: bytes, code: int) -> None:
        if code != 200:
            raise HTTPError(code, raw)

    @staticmethod
    def _decode(raw: bytes, context: Optional[str] = None) -> Any:
        try:
            return json.loads(raw)
        except ValueError as exc:
            message = f"{context}: {exc}" if context else str(exc)
            raise GrafanaError(message) from exc

    @staticmethod
    def _dump(payload: Any) -> bytes:
        if hasattr(payload, "to_dict"):
            payload = payload.to_dict()
        return json.dumps(payload, separators=(",", ":")).encode("utf-8")