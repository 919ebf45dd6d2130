"""Client for the remote license registry (GitHub ``/licenses`` API shape)."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Optional, Protocol
from urllib.parse import quote

import requests

from . import __version__
from .config import Settings, load_settings
from .errors import RetrievalError, UnavailableError

logger = logging.getLogger(__name__)

Payload = Dict[str, Any]


def _text(payload: Payload, field: str) -> str:
    value = payload.get(field)
    return value if isinstance(value, str) else ""


def _tags(payload: Payload, field: str) -> FrozenSet[str]:
    value = payload.get(field) or ()
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"field '{field}' is not a list")
    return frozenset(str(item) for item in value)


def _is_key(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


@dataclass(frozen=True)
class LicenseSummary:
    key: str
    name: str
    url: str

    @classmethod
    def from_payload(cls, payload: Any) -> "LicenseSummary":
        if not isinstance(payload, dict) or not _is_key(payload.get("key")):
            raise ValueError("license entry without a key")
        return cls(key=payload["key"], name=_text(payload, "name"), url=_text(payload, "url"))


@dataclass(frozen=True)
class LicenseRecord:
    key: str
    name: str
    spdx_id: str
    url: str
    html_url: str
    description: str
    implementation_notes: str
    permissions: FrozenSet[str]
    conditions: FrozenSet[str]
    limitations: FrozenSet[str]
    body: str
    featured: bool = False

    @classmethod
    def from_payload(cls, payload: Any) -> "LicenseRecord":
        """Build a record from one registry JSON object.

        ``implementation`` in the payload becomes ``implementation_notes``.
        Raises ``ValueError`` when the payload is not an object or has no
        ``key``/``body``.
        """
        if not isinstance(payload, dict):
            raise ValueError("expected a JSON object")
        if not _is_key(payload.get("key")):
            raise ValueError("response has no string 'key' field")
        body = payload.get("body")
        if not isinstance(body, str):
            raise ValueError("response has no 'body' field")
        return cls(
            key=payload["key"],
            name=_text(payload, "name"),
            spdx_id=_text(payload, "spdx_id"),
            url=_text(payload, "url"),
            html_url=_text(payload, "html_url"),
            description=_text(payload, "description"),
            implementation_notes=_text(payload, "implementation"),
            permissions=_tags(payload, "permissions"),
            conditions=_tags(payload, "conditions"),
            limitations=_tags(payload, "limitations"),
            body=body,
            featured=bool(payload.get("featured", False)),
        )


class LicenseRegistry(Protocol):
    def fetch_all(self) -> List[LicenseSummary]:
        ...

    def fetch_one(self, key: str) -> LicenseRecord:
        ...


class HttpLicenseRegistry:
    """Registry backed by ``GET <base>/licenses`` and ``GET <base>/licenses/<key>``."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": f"licensefetch/{__version__}",
        }
        if self.settings.token:
            headers["Authorization"] = f"Bearer {self.settings.token}"
        return headers

    def _get_json(self, path: str) -> Any:
        url = f"{self.settings.base_url}/{path}"
        logger.debug("GET %s", url)
        response = self.session.get(url, headers=self._headers(), timeout=self.settings.timeout)
        response.raise_for_status()
        return response.json()

    def fetch_all(self) -> List[LicenseSummary]:
        try:
            payload = self._get_json("licenses")
            if not isinstance(payload, list):
                raise ValueError("expected a JSON array")
            summaries = [LicenseSummary.from_payload(item) for item in payload]
        except (requests.exceptions.RequestException, ValueError) as exc:
            raise UnavailableError(f"License registry is unavailable: {exc}") from exc
        logger.debug("Registry advertised %d licenses", len(summaries))
        return summaries

    def fetch_one(self, key: str) -> LicenseRecord:
        try:
            payload = self._get_json(f"licenses/{quote(key, safe='')}")
            return LicenseRecord.from_payload(payload)
        except (requests.exceptions.RequestException, ValueError) as exc:
            raise RetrievalError(key, str(exc)) from exc
