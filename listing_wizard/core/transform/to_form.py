# listing_wizard/core/transform/to_form.py
"""
Wire record → ListingDraft.

Total by construction: every nested path is read defensively and a missing or
malformed value degrades to the field's empty value ("", 0, (), empty
LocalizedValue). Nothing in here raises on bad input.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from listing_wizard.core.localize import coerce_localized, coerce_localized_list
from listing_wizard.core.log import get_logger
from listing_wizard.core.transform.coerce import as_bool, as_str_list, as_text, clean_num, cut_date, section
from listing_wizard.core.variants import localized_label
from listing_wizard.inputs.settings import WizardSettings
from listing_wizard.schemas.labels import (
    LISTING_FLAG_FIELDS,
    VISIBILITY_DEFAULT_FIELDS,
    ListingStatus,
    VisibilitySection,
    variant_from_alias,
)
from listing_wizard.schemas.models import (
    ContactInfo,
    Currency,
    FinancialDetails,
    HierarchySelection,
    ListingDraft,
    LocalizedValue,
    MediaItem,
    MediaSet,
    SeoInfo,
    UtilityItem,
    VisibilityMap,
)
from listing_wizard.schemas.wire import ListingPayload

logger = get_logger(__name__)

_DEFAULT_SETTINGS = WizardSettings()


# ----------------------------
# Field readers
# ----------------------------


def _ref(raw: Any) -> tuple[str, LocalizedValue]:
    """Hierarchy reference → (id, cached name). Accepts `{_id, en, vi}` or a bare name."""
    name = coerce_localized(raw)
    rid = raw.get("_id") if isinstance(raw, Mapping) else None
    return (rid if isinstance(rid, str) else ""), name


def _transaction_type(raw: Any) -> LocalizedValue | str:
    if isinstance(raw, str):
        # known variants are stored as their canonical label
        variant = variant_from_alias(raw)
        return localized_label(variant) if variant is not None else raw
    return coerce_localized(raw)


def _media(raw: Any) -> tuple[MediaItem, ...]:
    items: list[MediaItem] = []
    if isinstance(raw, list):
        for entry in raw:
            url = entry.get("url") if isinstance(entry, Mapping) else entry
            if isinstance(url, str) and url:
                items.append(MediaItem(url=url, is_server_file=True))
    return tuple(items)


def _utilities(raw: Any) -> tuple[UtilityItem, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(
        UtilityItem(
            name=coerce_localized(u.get("propertyUtilityUnitName")),
            icon=as_text(u.get("propertyUtilityIcon")),
        )
        for u in raw
        if isinstance(u, Mapping)
    )


def _currency(raw: Any) -> Currency:
    if isinstance(raw, Mapping):
        code = as_text(raw.get("code"))
        return Currency(
            symbol=as_text(raw.get("symbol")) or code,
            code=code,
            name=as_text(raw.get("name")) or code,
        )
    code = as_text(raw)
    return Currency(symbol=code, code=code, name=code)


def _visibility_section(raw: Any, section_name: VisibilitySection) -> dict[str, bool]:
    flags = {name: False for name in VISIBILITY_DEFAULT_FIELDS[section_name]}
    if isinstance(raw, Mapping):
        for key, val in raw.items():
            if isinstance(key, str):
                flags[key] = as_bool(val)
    return flags


def _status(raw: Any) -> ListingStatus:
    text = as_text(raw).strip().lower()
    for member in ListingStatus:
        if member.value.lower() == text:
            return member
    if text:
        logger.debug("unknown status %r; defaulting to Draft", raw)
    return ListingStatus.draft


# ----------------------------
# Public API
# ----------------------------


def to_form(wire: Mapping[str, Any] | ListingPayload | None, *, settings: WizardSettings | None = None) -> ListingDraft:
    """Flatten a wire record into a ListingDraft. Never raises on malformed input."""
    cfg = settings or _DEFAULT_SETTINGS
    if isinstance(wire, ListingPayload):
        wire = wire.to_json_dict()
    if not isinstance(wire, Mapping):
        logger.debug("to_form received %s; returning an empty draft", type(wire).__name__)
        wire = {}

    li = section(wire, "listingInformation")
    pi = section(wire, "propertyInformation")
    wn = section(wire, "whatNearby")
    iv = section(wire, "imagesVideos")
    fd = section(wire, "financialDetails")
    cm = section(wire, "contactManagement")
    seo = section(wire, "seoInformation")

    project_id, project_name = _ref(li.get("listingInformationProjectCommunity"))
    zone_id, zone_name = _ref(li.get("listingInformationZoneSubArea"))
    block_id, block_name = _ref(li.get("listingInformationBlockName"))

    financial = FinancialDetails(
        currency=_currency(fd.get("financialDetailsCurrency")),
        price=clean_num(fd.get("financialDetailsPrice")),
        lease_price=clean_num(fd.get("financialDetailsLeasePrice")),
        contract_length=as_text(fd.get("financialDetailsContractLength")),
        price_per_night=clean_num(fd.get("financialDetailsPricePerNight")),
        check_in=as_text(fd.get("financialDetailsCheckIn")) or cfg.default_check_in,
        check_out=as_text(fd.get("financialDetailsCheckOut")) or cfg.default_check_out,
        payment_terms=coerce_localized(fd.get("financialDetailsTerms")),
        deposit=coerce_localized(fd.get("financialDetailsDeposit")),
        maintenance_fee=coerce_localized(fd.get("financialDetailsMainFee")),
        agent_fee=clean_num(fd.get("financialDetailsAgentFee")),
        agent_payment_agenda=coerce_localized(fd.get("financialDetailsAgentPaymentAgenda")),
        fee_tax=coerce_localized(fd.get("financialDetailsFeeTax")),
        legal_doc=coerce_localized(fd.get("financialDetailsLegalDoc")),
    )

    contact = ContactInfo(
        owner=coerce_localized(cm.get("contactManagementOwner")),
        owner_phones=tuple(as_str_list(cm.get("contactManagementOwnerPhone"))),
        owner_notes=coerce_localized(cm.get("contactManagementOwnerNotes")),
        consultant=coerce_localized(cm.get("contactManagementConsultant")),
        connecting_point=coerce_localized(cm.get("contactManagementConnectingPoint")),
        connecting_point_notes=coerce_localized(cm.get("contactManagementConnectingPointNotes")),
        internal_notes=coerce_localized(cm.get("contactManagementInternalNotes")),
        source=coerce_localized(cm.get("contactManagementSource")),
        agent_fee=clean_num(cm.get("contactManagementAgentFee")),
    )

    seo_info = SeoInfo(
        meta_title=coerce_localized(seo.get("metaTitle")),
        meta_description=coerce_localized(seo.get("metaDescription")),
        meta_keywords=coerce_localized_list(seo.get("metaKeywords")),
        slug_url=coerce_localized(seo.get("slugUrl")),
        canonical_url=coerce_localized(seo.get("canonicalUrl")),
        schema_type=coerce_localized(seo.get("schemaType")),
        allow_indexing=as_bool(seo.get("allowIndexing"), default=True),
        og_title=coerce_localized(seo.get("ogTitle")),
        og_description=coerce_localized(seo.get("ogDescription")),
        og_images=tuple(as_str_list(seo.get("ogImages"))),
    )

    visibility = VisibilityMap(
        listing=_visibility_section(wire.get(VisibilitySection.listing.value), VisibilitySection.listing),
        property=_visibility_section(wire.get(VisibilitySection.property.value), VisibilitySection.property),
        financial=_visibility_section(wire.get(VisibilitySection.financial.value), VisibilitySection.financial),
        flags={name: as_bool(wire.get(name)) for name in LISTING_FLAG_FIELDS},
    )

    record_id = as_text(wire.get("_id")) or None

    return ListingDraft(
        record_id=record_id,
        transaction_type=_transaction_type(li.get("listingInformationTransactionType")),
        property_id=as_text(li.get("listingInformationPropertyId")),
        hierarchy=HierarchySelection(
            project_id=project_id,
            zone_id=zone_id,
            block_id=block_id,
            project_name=project_name,
            zone_name=zone_name,
            block_name=block_name,
        ),
        title=coerce_localized(li.get("listingInformationPropertyTitle")),
        description=coerce_localized(wn.get("whatNearbyDescription")),
        address=coerce_localized(li.get("listingInformationAddress")),
        property_no=coerce_localized(li.get("listingInformationPropertyNo")),
        property_type=coerce_localized(li.get("listingInformationPropertyType")),
        availability_status=coerce_localized(li.get("listingInformationAvailabilityStatus")),
        google_maps_iframe=coerce_localized(li.get("listingInformationGoogleMapsIframe")),
        date_listed=cut_date(li.get("listingInformationDateListed")),
        available_from=cut_date(li.get("listingInformationAvailableFrom")),
        unit=coerce_localized(pi.get("informationUnit")),
        unit_size=clean_num(pi.get("informationUnitSize")),
        bedrooms=clean_num(pi.get("informationBedrooms")),
        bathrooms=clean_num(pi.get("informationBathrooms")),
        floors=coerce_localized(pi.get("informationFloors")),
        furnishing=coerce_localized(pi.get("informationFurnishing")),
        view=coerce_localized(pi.get("informationView")),
        financial=financial,
        utilities=_utilities(wire.get("propertyUtility")),
        media=MediaSet(
            images=_media(iv.get("propertyImages")),
            videos=_media(iv.get("propertyVideo")),
            floor_plans=_media(iv.get("floorPlan")),
        ),
        visibility=visibility,
        contact=contact,
        seo=seo_info,
        status=_status(wire.get("status")),
    )
