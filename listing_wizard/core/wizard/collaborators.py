# listing_wizard/core/wizard/collaborators.py
"""
Contracts for the services the wizard talks to.

The controller depends only on these Protocols. A requests-based adapter lives
in `listing_wizard.tools.http_api`; tests use in-memory fakes.

Failures: implementations may raise anything. The controller routes every call
through `collaborator_error_guard`, so callers only ever see
WizardValidationError or CollaboratorError subclasses.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from listing_wizard.schemas.labels import TransactionVariant
from listing_wizard.schemas.models import LocalizedValue, MediaKind

# What an uploader accepts: a path on disk or the raw bytes plus a filename.
UploadSource = Path | tuple[str, bytes]


@runtime_checkable
class ListingApi(Protocol):
    """Listing service: validation, id allocation, persistence and master data."""

    def validate_property_no(
        self,
        *,
        property_no: LocalizedValue,
        transaction_type: TransactionVariant,
        exclude_id: str | None = None,
    ) -> bool:
        """
        Return True when `property_no` is free for this transaction type.
        Implementations may instead raise DuplicatePropertyNoError with the service message.

        `exclude_id` is the record being edited, so it does not collide with itself.
        """
        ...

    def next_property_id(self, transaction_type: TransactionVariant) -> str:
        """Allocate the next listing code for a variant (e.g. "PS1023")."""
        ...

    def create_listing(self, payload: Mapping[str, Any]) -> dict[str, Any]: ...

    def update_listing(self, listing_id: str, payload: Mapping[str, Any]) -> dict[str, Any]: ...

    def fetch_listing(self, listing_id: str) -> dict[str, Any]:
        """Return the wire record for `listing_id`."""
        ...

    def fetch_masters(self) -> dict[str, Any]:
        """
        Return raw master rows keyed by "projects", "zones", "blocks" and the
        option kinds ("unit", "currency", …). See core.hierarchy.masters.MasterData.from_raw.
        """
        ...


@runtime_checkable
class MediaUploader(Protocol):
    def upload(self, file: UploadSource, kind: MediaKind) -> dict[str, Any]:
        """Store a file and return at least {"url": "<public url>"}."""
        ...
