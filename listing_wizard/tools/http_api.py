# listing_wizard/tools/http_api.py
"""
requests-based adapters for the listing service.

`HttpListingApi` implements core.wizard.collaborators.ListingApi and
`HttpMediaUploader` implements MediaUploader. One attempt per call, timeout
from settings, no retries. Transport and HTTP failures come out as typed
CollaboratorError subclasses (see core.errors.classify_collaborator_error).

Endpoints (relative to settings.api_base_url)
---------------------------------------------
GET  /property, /zonesubarea, /block, /<master kind>   master rows under data.data
GET  /create-property/{id}
POST /create-property                   PUT /create-property/{id}
GET  /create-property/next-id?transactionType=...       → {"nextId": "..."}
POST /create-property/validate-property-no               4xx + "property no" message on duplicates
POST /upload/property-media (multipart: file, type)      → {"url": "..."}
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import requests

from listing_wizard.core.errors import (
    ApiRejectedError,
    CollaboratorError,
    DuplicatePropertyNoError,
    UploadError,
    collaborator_error_guard,
)
from listing_wizard.core.log import get_logger
from listing_wizard.core.variants import localized_label
from listing_wizard.core.wizard.collaborators import UploadSource
from listing_wizard.inputs.settings import WizardSettings
from listing_wizard.schemas.labels import MasterKind, TransactionVariant
from listing_wizard.schemas.models import LocalizedValue, MediaKind

logger = get_logger(__name__)

HIERARCHY_ENDPOINTS: dict[str, str] = {
    "projects": "/property",
    "zones": "/zonesubarea",
    "blocks": "/block",
}


def _unwrap(body: Any) -> Any:
    """{"success": ..., "data": {...}} → the inner record; anything else unchanged."""
    if isinstance(body, Mapping) and isinstance(body.get("data"), Mapping):
        return body["data"]
    return body


class _HttpClient:
    def __init__(self, settings: WizardSettings | None = None, *, token: str | None = None) -> None:
        self.settings = settings or WizardSettings()
        self.base_url = self.settings.api_base_url.rstrip("/")
        self.timeout = self.settings.timeout_s
        self._token = token

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _send(self, fn: Callable[..., requests.Response], path: str, action: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        with collaborator_error_guard(action):
            resp = fn(url, headers=self._headers(), timeout=self.timeout, **kwargs)
            resp.raise_for_status()
            try:
                return resp.json()
            except ValueError as e:
                raise CollaboratorError(f"{action}: response from {url} is not JSON") from e


class HttpListingApi(_HttpClient):
    def validate_property_no(
        self,
        *,
        property_no: LocalizedValue,
        transaction_type: TransactionVariant,
        exclude_id: str | None = None,
    ) -> bool:
        body = {
            "propertyNo": property_no.model_dump(),
            "transactionType": localized_label(transaction_type).model_dump(),
            "excludeId": exclude_id,
        }
        try:
            self._send(requests.post, "/create-property/validate-property-no", "validate property number", json=body)
        except ApiRejectedError as e:
            if "property no" in str(e).lower():
                raise DuplicatePropertyNoError(str(property_no), str(e)) from e
            raise
        return True

    def next_property_id(self, transaction_type: TransactionVariant) -> str:
        body = self._send(
            requests.get,
            "/create-property/next-id",
            "allocate property id",
            params={"transactionType": transaction_type.value},
        )
        next_id = body.get("nextId") if isinstance(body, Mapping) else None
        if next_id is None and isinstance(body, Mapping):
            inner = body.get("data")
            next_id = inner.get("nextId") if isinstance(inner, Mapping) else None
        if not next_id:
            raise CollaboratorError("allocate property id: response has no nextId")
        return str(next_id)

    def create_listing(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        body = self._send(requests.post, "/create-property", "create listing", json=dict(payload))
        data = _unwrap(body)
        return dict(data) if isinstance(data, Mapping) else {}

    def update_listing(self, listing_id: str, payload: Mapping[str, Any]) -> dict[str, Any]:
        body = self._send(requests.put, f"/create-property/{listing_id}", "update listing", json=dict(payload))
        data = _unwrap(body)
        return dict(data) if isinstance(data, Mapping) else {}

    def fetch_listing(self, listing_id: str) -> dict[str, Any]:
        body = self._send(requests.get, f"/create-property/{listing_id}", "fetch listing")
        data = _unwrap(body)
        return dict(data) if isinstance(data, Mapping) else {}

    def fetch_masters(self) -> dict[str, Any]:
        """Raw master rows keyed for MasterData.from_raw."""
        out: dict[str, Any] = {}
        for key, path in HIERARCHY_ENDPOINTS.items():
            out[key] = self._send(requests.get, path, f"fetch {key}")
        for kind in MasterKind:
            out[kind.value] = self._send(requests.get, f"/{kind.value}", f"fetch {kind.value}")
        logger.debug("fetched master data: %s", ", ".join(out))
        return out


class HttpMediaUploader(_HttpClient):
    def upload(self, file: UploadSource, kind: MediaKind) -> dict[str, Any]:
        if isinstance(file, Path):
            with file.open("rb") as fh:
                body = self._post_file((file.name, fh), kind)
        else:
            body = self._post_file(file, kind)

        url = body.get("url") if isinstance(body, Mapping) else None
        if not url and isinstance(body, Mapping) and isinstance(body.get("data"), Mapping):
            url = body["data"].get("url")
        if not isinstance(url, str) or not url:
            raise UploadError(f"upload {kind}: response has no url")
        return {"url": url}

    def _post_file(self, file: tuple[str, Any], kind: MediaKind) -> Any:
        return self._send(
            requests.post,
            "/upload/property-media",
            f"upload {kind}",
            files={"file": file},
            data={"type": kind},
        )
