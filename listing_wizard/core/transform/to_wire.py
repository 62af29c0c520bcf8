# listing_wizard/core/transform/to_wire.py
"""
ListingDraft → wire payload.

Re-nests every draft field into its wire section, reconciles every bilingual
value (fill-from-sibling), coerces numeric inputs, and derives the currency
scalar from `currency.code`. Fields outside the active variant's field set are
written too, so a later variant switch finds them intact.
"""

from __future__ import annotations

from typing import Any

from listing_wizard.core.localize import reconcile_for_save
from listing_wizard.core.transform.coerce import clean_num
from listing_wizard.core.variants import localized_label, normalize
from listing_wizard.inputs.settings import WizardSettings
from listing_wizard.schemas.labels import LISTING_FLAG_FIELDS, VISIBILITY_DEFAULT_FIELDS, ListingStatus, VisibilitySection
from listing_wizard.schemas.models import ListingDraft, LocalizedList, LocalizedValue
from listing_wizard.schemas.wire import (
    ContactManagementWire,
    FinancialDetailsWire,
    ImagesVideosWire,
    ListingInformationWire,
    ListingPayload,
    PropertyInformationWire,
    SeoInformationWire,
    UtilityWire,
    WhatNearbyWire,
    WireRef,
)

_DEFAULT_SETTINGS = WizardSettings()

_r = reconcile_for_save


def _ref(entity_id: str, name: LocalizedValue) -> WireRef:
    lv = _r(name)
    return WireRef(en=lv.en, vi=lv.vi, _id=entity_id)


def _keywords(kw: LocalizedList) -> LocalizedList:
    # Same fill-from-sibling rule as LocalizedValue
    if kw.en and not kw.vi:
        return LocalizedList(en=kw.en, vi=kw.en)
    if kw.vi and not kw.en:
        return LocalizedList(en=kw.vi, vi=kw.vi)
    return kw


def _visibility(flags: dict[str, bool], section_name: VisibilitySection) -> dict[str, bool]:
    merged = {name: False for name in VISIBILITY_DEFAULT_FIELDS[section_name]}
    merged.update({k: bool(v) for k, v in flags.items()})
    return merged


def resolve_status(status: ListingStatus | str | None, fallback: ListingStatus) -> ListingStatus:
    if status is None:
        return fallback
    if isinstance(status, ListingStatus):
        return status
    text = str(status).strip().lower()
    for member in ListingStatus:
        if member.value.lower() == text:
            return member
    raise ValueError(f"Unknown listing status: {status!r}")


def to_wire(
    draft: ListingDraft,
    status: ListingStatus | str | None = None,
    *,
    settings: WizardSettings | None = None,
) -> ListingPayload:
    """
    Build the create/update payload.

    Raises:
        UnknownTransactionTypeError: the draft's transaction type is not a known variant.
        ValueError: `status` is not Draft/Pending/Published.
    """
    cfg = settings or _DEFAULT_SETTINGS
    variant = normalize(draft.transaction_type)
    raw_tt = draft.transaction_type
    transaction_type = _r(raw_tt) if isinstance(raw_tt, LocalizedValue) else localized_label(variant)

    sel = draft.hierarchy
    fin = draft.financial
    contact = draft.contact
    seo = draft.seo
    vis = draft.visibility

    return ListingPayload(
        _id=draft.record_id,
        listing_information=ListingInformationWire(
            listing_information_property_id=draft.property_id,
            listing_information_transaction_type=transaction_type,
            listing_information_project_community=_ref(sel.project_id, sel.project_name),
            listing_information_zone_sub_area=_ref(sel.zone_id, sel.zone_name),
            listing_information_block_name=_ref(sel.block_id, sel.block_name),
            listing_information_property_no=_r(draft.property_no),
            listing_information_property_type=_r(draft.property_type),
            listing_information_date_listed=draft.date_listed,
            listing_information_availability_status=_r(draft.availability_status),
            listing_information_property_title=_r(draft.title),
            listing_information_available_from=draft.available_from,
            listing_information_google_maps_iframe=_r(draft.google_maps_iframe),
            listing_information_address=_r(draft.address),
        ),
        property_information=PropertyInformationWire(
            information_unit=_r(draft.unit),
            information_unit_size=clean_num(draft.unit_size),
            information_bedrooms=clean_num(draft.bedrooms),
            information_bathrooms=clean_num(draft.bathrooms),
            information_floors=_r(draft.floors),
            information_furnishing=_r(draft.furnishing),
            information_view=_r(draft.view),
        ),
        what_nearby=WhatNearbyWire(what_nearby_description=_r(draft.description)),
        property_utility=[
            UtilityWire(property_utility_unit_name=_r(u.name), property_utility_icon=u.icon) for u in draft.utilities
        ],
        images_videos=ImagesVideosWire(
            property_images=[m.url for m in draft.media.images],
            property_video=[m.url for m in draft.media.videos],
            floor_plan=[m.url for m in draft.media.floor_plans],
        ),
        financial_details=FinancialDetailsWire(
            financial_details_currency=fin.currency.code,
            financial_details_price=clean_num(fin.price),
            financial_details_lease_price=clean_num(fin.lease_price),
            financial_details_contract_length=fin.contract_length,
            financial_details_price_per_night=clean_num(fin.price_per_night),
            financial_details_check_in=fin.check_in or cfg.default_check_in,
            financial_details_check_out=fin.check_out or cfg.default_check_out,
            financial_details_terms=_r(fin.payment_terms),
            financial_details_deposit=_r(fin.deposit),
            financial_details_main_fee=_r(fin.maintenance_fee),
            financial_details_agent_fee=clean_num(fin.agent_fee),
            financial_details_agent_payment_agenda=_r(fin.agent_payment_agenda),
            financial_details_fee_tax=_r(fin.fee_tax),
            financial_details_legal_doc=_r(fin.legal_doc),
        ),
        **{name: bool(vis.flags.get(name, False)) for name in LISTING_FLAG_FIELDS},
        listing_information_visibility=_visibility(vis.listing, VisibilitySection.listing),
        property_information_visibility=_visibility(vis.property, VisibilitySection.property),
        financial_visibility=_visibility(vis.financial, VisibilitySection.financial),
        contact_management=ContactManagementWire(
            contact_management_owner=_r(contact.owner),
            contact_management_owner_phone=list(contact.owner_phones),
            contact_management_owner_notes=_r(contact.owner_notes),
            contact_management_consultant=_r(contact.consultant),
            contact_management_connecting_point=_r(contact.connecting_point),
            contact_management_connecting_point_notes=_r(contact.connecting_point_notes),
            contact_management_internal_notes=_r(contact.internal_notes),
            contact_management_source=_r(contact.source),
            contact_management_agent_fee=clean_num(contact.agent_fee),
        ),
        seo_information=SeoInformationWire(
            meta_title=_r(seo.meta_title),
            meta_description=_r(seo.meta_description),
            meta_keywords=_keywords(seo.meta_keywords),
            slug_url=_r(seo.slug_url),
            canonical_url=_r(seo.canonical_url),
            schema_type=_r(seo.schema_type),
            allow_indexing=seo.allow_indexing,
            og_title=_r(seo.og_title),
            og_description=_r(seo.og_description),
            og_images=list(seo.og_images),
        ),
        status=resolve_status(status, draft.status),
    )


def to_wire_dict(
    draft: ListingDraft,
    status: ListingStatus | str | None = None,
    *,
    settings: WizardSettings | None = None,
) -> dict[str, Any]:
    """JSON-ready, wire-keyed dict of `to_wire(draft, status)`."""
    return to_wire(draft, status, settings=settings).to_json_dict()
