# listing_wizard/tools/wizard_session.py
"""
Wizard session bootstrap: master data + (edit mode) record → WizardController.

Pipeline:
  1) api.fetch_masters() → MasterData (hierarchy index + option lists)
  2) edit mode: api.fetch_listing(id) → to_form → hierarchy restore (id, then name)
  3) create mode: fresh draft with defaults; an initial transaction type also
     allocates the property id

This is the single integration point for the CLI and for host applications.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from listing_wizard.core.errors import collaborator_error_guard
from listing_wizard.core.hierarchy import HierarchySelector, MasterData
from listing_wizard.core.log import get_logger
from listing_wizard.core.transform import to_form
from listing_wizard.core.wizard import ListingApi, MediaUploader, WizardController
from listing_wizard.inputs.settings import WizardSettings
from listing_wizard.schemas.models import ListingDraft

logger = get_logger(__name__)


def hydrate_draft(record: Any, masters: MasterData, *, settings: WizardSettings | None = None) -> ListingDraft:
    """Wire record → draft with the hierarchy restored against master data."""
    draft = to_form(record, settings=settings)
    selector = HierarchySelector(masters.build_index())
    restored = selector.restore(draft.hierarchy)
    if restored != draft.hierarchy:
        logger.debug("hierarchy restored: %s → %s", draft.hierarchy.summary(), restored.summary())
    return draft.model_copy(update={"hierarchy": restored})


def open_wizard(
    api: ListingApi,
    uploader: MediaUploader,
    *,
    listing_id: str | None = None,
    transaction_type: Any = None,
    settings: WizardSettings | None = None,
    today: date | None = None,
) -> WizardController:
    """
    Load everything a wizard session needs and return its controller.

    Raises:
        CollaboratorError subclasses when master data or the record cannot be loaded.
        UnknownTransactionTypeError when `transaction_type` is given but not recognised.
    """
    cfg = settings or WizardSettings()

    with collaborator_error_guard("fetch master data"):
        raw_masters = api.fetch_masters()
    masters = MasterData.from_raw(raw_masters)

    draft: ListingDraft | None = None
    if listing_id:
        with collaborator_error_guard("fetch listing"):
            record = api.fetch_listing(listing_id)
        draft = hydrate_draft(record, masters, settings=cfg)
        if draft.record_id is None:
            draft = draft.model_copy(update={"record_id": listing_id})
        logger.info("editing listing %s (%s)", listing_id, draft.summary())

    controller = WizardController(
        api=api,
        uploader=uploader,
        masters=masters,
        draft=draft,
        settings=cfg,
        today=today,
    )
    if draft is None and transaction_type is not None:
        controller.set_transaction_type(transaction_type)
    return controller
