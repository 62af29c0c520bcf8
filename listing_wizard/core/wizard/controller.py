# listing_wizard/core/wizard/controller.py
"""
Five-step listing wizard.

State machine
-------------
LISTING_PROPERTY → FINANCIAL_MEDIA → CONTACT → SEO → REVIEW, moved only by
`next()` / `prev()`. `next()` runs the validation for the step being left:

  1  title/description/view/address reconciled; property number checked with the API
  2  transaction type must be a known variant; its required financial fields set
  4  slug and meta title auto-filled from the title

Every mutation builds a new ListingDraft and swaps it in only after all
validation and collaborator calls succeed, so a failure never leaves a
half-applied change behind.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date
from pathlib import Path
from typing import Any

from listing_wizard.core.errors import (
    DuplicatePropertyNoError,
    MediaTooLargeError,
    MissingRequiredFieldError,
    ReadOnlyFieldError,
    StepTransitionError,
    UploadError,
    collaborator_error_guard,
)
from listing_wizard.core.hierarchy import HierarchyIndex, HierarchySelector, MasterData, default_currency, default_unit
from listing_wizard.core.localize import coerce_localized, get_text, reconcile_for_save, set_lang
from listing_wizard.core.log import get_logger
from listing_wizard.core.seo.slug import autofill_seo
from listing_wizard.core.transform import resolve_status, to_wire, to_wire_dict
from listing_wizard.core.variants import fields_for, missing_required, normalize, normalize_for_form
from listing_wizard.core.visibility.flags import set_flag
from listing_wizard.core.wizard.collaborators import ListingApi, MediaUploader, UploadSource
from listing_wizard.core.wizard.steps import FIRST_STEP, LAST_STEP, WizardStep
from listing_wizard.inputs.settings import WizardSettings
from listing_wizard.schemas.labels import (
    FinancialField,
    HierarchyLevel,
    Language,
    ListingStatus,
    MasterKind,
    TransactionVariant,
    VisibilitySection,
)
from listing_wizard.schemas.models import (
    MEDIA_KIND_ATTRS,
    HierarchyEntity,
    ListingDraft,
    LocalizedValue,
    MediaItem,
    MediaKind,
    UtilityItem,
)
from listing_wizard.schemas.wire import ListingPayload

logger = get_logger(__name__)

# Reconciled when leaving step 1
_STEP1_BILINGUAL_GROUP = ("title", "description", "view", "address")


def _replace_path(model: Any, path: Sequence[str], value: Any) -> Any:
    """model_copy along a dotted attribute path ("seo.meta_title")."""
    head, *rest = path
    if not rest:
        return model.model_copy(update={head: value})
    return model.model_copy(update={head: _replace_path(getattr(model, head), rest, value)})


def _read_path(model: Any, path: Sequence[str]) -> Any:
    cur = model
    for part in path:
        if not hasattr(cur, part):
            raise ValueError(f"Unknown draft field: {'.'.join(path)!r}")
        cur = getattr(cur, part)
    return cur


def _file_size(file: UploadSource) -> int:
    if isinstance(file, Path):
        return file.stat().st_size
    _name, data = file
    return len(data)


class WizardController:
    """
    Owns one ListingDraft for the lifetime of a wizard session.

    Create mode when the draft has no `record_id`, edit mode otherwise.
    """

    def __init__(
        self,
        *,
        api: ListingApi,
        uploader: MediaUploader,
        masters: MasterData | None = None,
        draft: ListingDraft | None = None,
        settings: WizardSettings | None = None,
        today: date | None = None,
    ) -> None:
        self._api = api
        self._uploader = uploader
        self._settings = settings or WizardSettings()
        self._masters = masters or MasterData()
        self._index: HierarchyIndex = self._masters.build_index()
        self._selector = HierarchySelector(self._index)
        self._step = FIRST_STEP
        self._cancelled = False

        if draft is None:
            draft = self._create_defaults(ListingDraft(), today or date.today())
        self._draft: ListingDraft | None = draft

    # ---------- read-only state ----------

    @property
    def draft(self) -> ListingDraft:
        if self._cancelled or self._draft is None:
            raise StepTransitionError("The wizard was cancelled.")
        return self._draft

    @property
    def step(self) -> WizardStep:
        return self._step

    @property
    def is_edit_mode(self) -> bool:
        return self._draft is not None and self._draft.record_id is not None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def masters(self) -> MasterData:
        return self._masters

    @property
    def selector(self) -> HierarchySelector:
        return self._selector

    @property
    def variant(self) -> TransactionVariant:
        """Variant the form renders (unknown → Sale)."""
        return normalize_for_form(self.draft.transaction_type)

    @property
    def financial_fields(self) -> tuple[FinancialField, ...]:
        return fields_for(self.variant)

    def visible_zones(self) -> tuple[HierarchyEntity, ...]:
        return self._selector.visible_zones(self.draft.hierarchy)

    def visible_blocks(self) -> tuple[HierarchyEntity, ...]:
        return self._selector.visible_blocks(self.draft.hierarchy)

    def text(self, field: str, lang: Language | str | None = None) -> str:
        """Display text of a bilingual field, falling back to the other language."""
        value = _read_path(self.draft, field.split("."))
        if not isinstance(value, LocalizedValue):
            raise ValueError(f"{field!r} is not a bilingual field")
        return get_text(value, lang or self._settings.default_language, self._settings.fallback_language)

    # ---------- generic patching ----------

    def patch(self, **fields: Any) -> ListingDraft:
        """
        Shallow update of top-level draft fields, validated by the draft model.
        A patched `hierarchy` is reconciled against master data before it is stored.

        Raises:
            ValueError: unknown field name or invalid value.
            ReadOnlyFieldError: attempt to change an assigned property id.
        """
        draft = self.draft
        unknown = sorted(set(fields) - set(ListingDraft.model_fields))
        if unknown:
            raise ValueError(f"Unknown draft field(s): {', '.join(unknown)}")
        if "property_id" in fields and draft.property_id and fields["property_id"] != draft.property_id:
            raise ReadOnlyFieldError(f"property_id is read-only once assigned ({draft.property_id!r})")
        if not fields:
            return draft
        updated = ListingDraft.model_validate({**dict(draft), **fields})
        if "hierarchy" in fields:
            reconciled = self._selector.reconcile(updated.hierarchy)
            if reconciled != updated.hierarchy:
                logger.info("patched hierarchy adjusted to %s", reconciled.summary())
            updated = updated.model_copy(update={"hierarchy": reconciled})
        return self._commit(updated)

    def patch_draft(self, partial: Mapping[str, Any]) -> ListingDraft:
        return self.patch(**dict(partial))

    def set_localized(self, field: str, lang: Language | str, text: str) -> ListingDraft:
        """Edit one language side of a bilingual field; `field` may be dotted ("seo.meta_title")."""
        draft = self.draft
        path = field.split(".")
        current = _read_path(draft, path)
        if not isinstance(current, LocalizedValue):
            raise ValueError(f"{field!r} is not a bilingual field")
        return self._commit(_replace_path(draft, path, set_lang(current, lang, text)))

    def set_visibility(self, section: VisibilitySection | str | None, field: str, value: bool) -> ListingDraft:
        draft = self.draft
        vmap = set_flag(draft.visibility, section, field, value)
        return self._commit(draft.model_copy(update={"visibility": vmap}))

    # ---------- hierarchy ----------

    def _set_hierarchy(self, sel: Any) -> ListingDraft:
        return self._commit(self.draft.model_copy(update={"hierarchy": sel}))

    def select_project(self, project_id: str) -> ListingDraft:
        return self._set_hierarchy(self._selector.select_project(self.draft.hierarchy, project_id))

    def select_zone(self, zone_id: str) -> ListingDraft:
        return self._set_hierarchy(self._selector.select_zone(self.draft.hierarchy, zone_id))

    def select_block(self, block_id: str) -> ListingDraft:
        return self._set_hierarchy(self._selector.select_block(self.draft.hierarchy, block_id))

    def clear_hierarchy(self, level: HierarchyLevel | str) -> ListingDraft:
        if isinstance(level, HierarchyLevel):
            lvl = level
        else:
            try:
                lvl = HierarchyLevel[str(level).strip().lower()]
            except KeyError:
                raise ValueError(f"Unknown hierarchy level: {level!r}") from None
        return self._set_hierarchy(self._selector.clear(self.draft.hierarchy, lvl))

    def reload_masters(self, masters: MasterData | None = None) -> ListingDraft:
        """Swap in fresh master data and drop any selection it no longer supports."""
        draft = self.draft
        if masters is None:
            with collaborator_error_guard("fetch master data"):
                raw = self._api.fetch_masters()
            masters = MasterData.from_raw(raw)
        index = masters.build_index()
        selector = HierarchySelector(index)
        reconciled = selector.reconcile(draft.hierarchy)

        self._masters, self._index, self._selector = masters, index, selector
        if reconciled != draft.hierarchy:
            logger.info("hierarchy selection adjusted after master reload: %s", reconciled.summary())
        return self._commit(draft.model_copy(update={"hierarchy": reconciled}))

    # ---------- utilities ----------

    def add_utility(self, name: LocalizedValue | Mapping[str, Any] | str, icon: str = "") -> ListingDraft:
        draft = self.draft
        item = UtilityItem(name=coerce_localized(name), icon=icon)
        return self._commit(draft.model_copy(update={"utilities": (*draft.utilities, item)}))

    def update_utility(
        self,
        position: int,
        *,
        name: LocalizedValue | Mapping[str, Any] | str | None = None,
        icon: str | None = None,
    ) -> ListingDraft:
        draft = self.draft
        items = list(draft.utilities)
        current = items[position]
        updates: dict[str, Any] = {}
        if name is not None:
            updates["name"] = coerce_localized(name)
        if icon is not None:
            updates["icon"] = icon
        items[position] = current.model_copy(update=updates)
        return self._commit(draft.model_copy(update={"utilities": tuple(items)}))

    def remove_utility(self, position: int) -> ListingDraft:
        draft = self.draft
        items = list(draft.utilities)
        del items[position]
        return self._commit(draft.model_copy(update={"utilities": tuple(items)}))

    # ---------- media ----------

    def _media_attr(self, kind: MediaKind) -> str:
        try:
            return MEDIA_KIND_ATTRS[kind]
        except KeyError:
            raise ValueError(f"Unknown media kind: {kind!r}") from None

    def _set_media(self, draft: ListingDraft, attr: str, items: Sequence[MediaItem]) -> ListingDraft:
        media = draft.media.model_copy(update={attr: tuple(items)})
        return self._commit(draft.model_copy(update={"media": media}))

    def add_media(self, kind: MediaKind, file: UploadSource) -> MediaItem:
        """
        Upload one file and append its URL to the matching media list.

        Raises:
            MediaTooLargeError: file exceeds the configured limit (no upload attempted).
            UploadError / NetworkError: upload failed or returned no URL.
        """
        draft = self.draft
        attr = self._media_attr(kind)
        size = _file_size(file)
        limit = self._settings.max_bytes_for(kind)
        if size > limit:
            raise MediaTooLargeError(kind, size, limit)

        with collaborator_error_guard(f"upload {kind}"):
            resp = self._uploader.upload(file, kind)
        url = resp.get("url") if isinstance(resp, Mapping) else None
        if not isinstance(url, str) or not url:
            raise UploadError(f"upload of {kind} returned no url")

        item = MediaItem(url=url, is_server_file=True)
        self._set_media(draft, attr, (*getattr(draft.media, attr), item))
        logger.debug("uploaded %s → %s", kind, url)
        return item

    def remove_media(self, kind: MediaKind, position: int) -> ListingDraft:
        draft = self.draft
        attr = self._media_attr(kind)
        items = list(getattr(draft.media, attr))
        del items[position]
        return self._set_media(draft, attr, items)

    def reorder_media(self, kind: MediaKind, order: Sequence[int]) -> ListingDraft:
        """`order` lists the current positions in their new order; it must be a permutation."""
        draft = self.draft
        attr = self._media_attr(kind)
        items = getattr(draft.media, attr)
        if sorted(order) != list(range(len(items))):
            raise ValueError(f"order must be a permutation of 0..{len(items) - 1}")
        return self._set_media(draft, attr, [items[i] for i in order])

    # ---------- transaction type ----------

    def set_transaction_type(self, raw: TransactionVariant | LocalizedValue | Mapping[str, Any] | str) -> ListingDraft:
        """
        Set the transaction type (validated strictly).

        In create mode, the first recognised type also allocates the property id.
        Financial fields of other variants are kept.
        """
        draft = self.draft
        variant = normalize(raw)
        stored: LocalizedValue | str
        if isinstance(raw, TransactionVariant):
            stored = raw.value
        elif isinstance(raw, str):
            stored = raw
        else:
            stored = coerce_localized(raw)
        updated = draft.model_copy(update={"transaction_type": stored})

        if not self.is_edit_mode and not draft.property_id:
            with collaborator_error_guard("allocate property id"):
                pid = self._api.next_property_id(variant)
            updated = updated.model_copy(update={"property_id": str(pid or "")})
            logger.info("allocated property id %s for %s", pid, variant.value)
        return self._commit(updated)

    # ---------- step transitions ----------

    def next(self) -> WizardStep:
        draft = self.draft
        nxt = self._step.next()
        if nxt is None:
            raise StepTransitionError("Already on the review step; submit instead.")

        if self._step is WizardStep.LISTING_PROPERTY:
            draft = self._validate_listing_step(draft)
        elif self._step is WizardStep.FINANCIAL_MEDIA:
            self._validate_financial_step(draft)
        elif self._step is WizardStep.SEO:
            draft = draft.model_copy(update={"seo": autofill_seo(draft.seo, draft.title)})

        self._commit(draft)
        logger.debug("step %s → %s", self._step.name, nxt.name)
        self._step = nxt
        return nxt

    def prev(self) -> WizardStep:
        self._ensure_open()
        prv = self._step.prev()
        if prv is None:
            raise StepTransitionError("Already on the first step.")
        logger.debug("step %s → %s", self._step.name, prv.name)
        self._step = prv
        return prv

    def _validate_listing_step(self, draft: ListingDraft) -> ListingDraft:
        reconciled = draft.model_copy(
            update={name: reconcile_for_save(getattr(draft, name)) for name in _STEP1_BILINGUAL_GROUP}
        )
        property_no = reconcile_for_save(reconciled.property_no)
        if property_no.is_empty():
            return reconciled

        variant = normalize_for_form(reconciled.transaction_type)
        with collaborator_error_guard("validate property number"):
            free = self._api.validate_property_no(
                property_no=property_no,
                transaction_type=variant,
                exclude_id=reconciled.record_id,
            )
        if not free:
            raise DuplicatePropertyNoError(str(property_no))
        return reconciled

    def _validate_financial_step(self, draft: ListingDraft) -> None:
        variant = normalize(draft.transaction_type)
        missing = missing_required(draft.financial, variant)
        if missing:
            raise MissingRequiredFieldError(f.value for f in missing)

    # ---------- review & submit ----------

    def preview(self) -> ListingPayload:
        return to_wire(self.draft, settings=self._settings)

    def submit(self, status: ListingStatus | str | None = ListingStatus.draft) -> dict[str, Any]:
        """
        Persist the listing with the chosen status (create or update by mode).
        `status=None` keeps the draft's current status.

        Raises:
            StepTransitionError: not on the review step.
            UnknownTransactionTypeError / MissingRequiredFieldError: draft not submittable.
            CollaboratorError subclasses: the service refused or failed.
        """
        draft = self.draft
        if self._step is not LAST_STEP:
            raise StepTransitionError(f"Submit is only available on {LAST_STEP.name}, not {self._step.name}.")
        self._validate_financial_step(draft)

        final_status = resolve_status(status, draft.status)
        payload = to_wire_dict(draft, final_status, settings=self._settings)

        with collaborator_error_guard("save listing"):
            if draft.record_id is not None:
                resp = self._api.update_listing(draft.record_id, payload)
            else:
                resp = self._api.create_listing(payload)

        updates: dict[str, Any] = {"status": final_status}
        new_id = resp.get("_id") if isinstance(resp, Mapping) else None
        if draft.record_id is None and isinstance(new_id, str) and new_id:
            updates["record_id"] = new_id
        self._commit(draft.model_copy(update=updates))
        logger.info("listing %s saved as %s", draft.property_id or "(new)", final_status.value)
        return dict(resp) if isinstance(resp, Mapping) else {}

    def cancel(self) -> None:
        """Discard the draft. Uploaded media is left on the server."""
        self._cancelled = True
        self._draft = None
        logger.debug("wizard cancelled on step %s", self._step.name)

    # ---------- internals ----------

    def _ensure_open(self) -> None:
        if self._cancelled:
            raise StepTransitionError("The wizard was cancelled.")

    def _commit(self, draft: ListingDraft) -> ListingDraft:
        self._draft = draft
        return draft

    def _create_defaults(self, draft: ListingDraft, today: date) -> ListingDraft:
        updates: dict[str, Any] = {}
        if not draft.date_listed:
            updates["date_listed"] = today.isoformat()
        if draft.unit.is_empty():
            unit = default_unit(self._masters.options_for(MasterKind.units))
            if unit is not None:
                updates["unit"] = unit
        fin_updates: dict[str, Any] = {
            "check_in": self._settings.default_check_in,
            "check_out": self._settings.default_check_out,
        }
        if not draft.financial.currency.code:
            currency = default_currency(self._masters.options_for(MasterKind.currencies))
            if currency is not None:
                fin_updates["currency"] = currency
        updates["financial"] = draft.financial.model_copy(update=fin_updates)
        return draft.model_copy(update=updates)
