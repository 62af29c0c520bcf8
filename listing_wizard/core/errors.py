# listing_wizard/core/errors.py
"""
Typed errors + utilities for the listing wizard.

Two families:
- WizardValidationError: the user must fix something before the wizard moves on.
- CollaboratorError: an external service (listing API, upload) failed or refused.

Neither is fatal. The controller leaves the draft and the step untouched and
lets the caller surface the message.

Exports
-------
- ListingWizardError, WizardValidationError, CollaboratorError and subclasses
- VALIDATION_ERRORS, COLLABORATOR_ERRORS
- classify_collaborator_error(exc)
- collaborator_error_guard(action)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any

import requests

from listing_wizard.core.log import get_logger

logger = get_logger(__name__)

# =========================
# Exception types
# =========================


class ListingWizardError(RuntimeError):
    """Base class for every listing-wizard failure."""


class WizardValidationError(ListingWizardError):
    """Blocking validation failure; the wizard stays on the current step."""


class DuplicatePropertyNoError(WizardValidationError):
    """The listing service already has this property number for the transaction type."""

    def __init__(self, property_no: str, message: str | None = None) -> None:
        self.property_no = property_no
        super().__init__(message or f"Property number already exists: {property_no!r}")


class MissingRequiredFieldError(WizardValidationError):
    """One or more required fields are empty."""

    def __init__(self, fields: Iterable[str]) -> None:
        self.fields = tuple(fields)
        super().__init__(f"Missing required field(s): {', '.join(self.fields)}")


class UnknownTransactionTypeError(WizardValidationError):
    """Transaction type does not match any known variant or synonym."""

    def __init__(self, raw: Any) -> None:
        self.raw = raw
        super().__init__(f"Unknown transaction type: {raw!r}")


class UnknownHierarchyEntityError(WizardValidationError):
    """Project, zone or block id is not present in the master data."""


class StepTransitionError(WizardValidationError):
    """Invalid step move (prev on the first step, next on the last, or after cancel)."""


class MediaTooLargeError(WizardValidationError):
    """File exceeds the configured size limit for its media kind."""

    def __init__(self, kind: str, size: int, limit: int) -> None:
        self.kind = kind
        self.size = size
        self.limit = limit
        super().__init__(f"{kind} file is {size} bytes; limit is {limit} bytes")


class ReadOnlyFieldError(WizardValidationError):
    """Attempt to overwrite a field that is fixed once assigned (property id)."""


class CollaboratorError(ListingWizardError):
    """External service failure (listing API, media upload)."""


class NetworkError(CollaboratorError):
    """HTTP/transport failure while talking to a collaborator."""


class UploadError(CollaboratorError):
    """Upload finished without a usable file URL, or the upload service failed."""


class ApiRejectedError(CollaboratorError):
    """The listing service answered with a 4xx and a message."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


# Selector tuples for grouped exception handling
VALIDATION_ERRORS = (
    DuplicatePropertyNoError,
    MissingRequiredFieldError,
    UnknownTransactionTypeError,
    UnknownHierarchyEntityError,
    StepTransitionError,
    MediaTooLargeError,
    ReadOnlyFieldError,
)

COLLABORATOR_ERRORS = (
    NetworkError,
    UploadError,
    ApiRejectedError,
)

# =========================
# Classification helpers
# =========================


def _response_message(resp: requests.Response | None) -> str | None:
    if resp is None:
        return None
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        msg = body.get("message")
        if isinstance(msg, str) and msg.strip():
            return msg.strip()
    return None


def classify_collaborator_error(exc: Exception) -> ListingWizardError:
    """
    Map arbitrary exceptions raised by a collaborator to a typed error.

    Heuristics:
      - Any ListingWizardError → passed through
      - requests.HTTPError with a 4xx response → ApiRejectedError (service message when present)
      - Other requests.* errors → NetworkError
      - Fallback → CollaboratorError
    """
    if isinstance(exc, ListingWizardError):
        return exc

    if isinstance(exc, requests.HTTPError):
        resp = exc.response
        status = resp.status_code if resp is not None else None
        if status is not None and 400 <= status < 500:
            return ApiRejectedError(_response_message(resp) or str(exc), status_code=status)
        return NetworkError(str(exc))

    if isinstance(exc, (requests.Timeout, requests.ConnectionError, requests.RequestException)):
        return NetworkError(str(exc))

    return CollaboratorError(f"{type(exc).__name__}: {exc}")


@contextmanager
def collaborator_error_guard(action: str = "collaborator call") -> Iterator[None]:
    """Context manager to normalize unexpected exceptions from collaborator calls."""
    try:
        yield
    except ListingWizardError:
        raise
    except Exception as exc:  # noqa: BLE001
        err = classify_collaborator_error(exc)
        logger.warning("%s failed: %s", action, err)
        raise err from exc


__all__ = [
    "ListingWizardError",
    "WizardValidationError",
    "DuplicatePropertyNoError",
    "MissingRequiredFieldError",
    "UnknownTransactionTypeError",
    "UnknownHierarchyEntityError",
    "StepTransitionError",
    "MediaTooLargeError",
    "ReadOnlyFieldError",
    "CollaboratorError",
    "NetworkError",
    "UploadError",
    "ApiRejectedError",
    "VALIDATION_ERRORS",
    "COLLABORATOR_ERRORS",
    "classify_collaborator_error",
    "collaborator_error_guard",
]
