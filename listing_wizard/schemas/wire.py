# listing_wizard/schemas/wire.py
"""
Wire (API) schema for a property listing.

The listing service speaks nested camelCase JSON. Field names below are the
snake_case spelling of the wire keys; `alias_generator=to_camel` restores the
wire spelling on `model_dump(by_alias=True)`.

Only the write path builds these models (see core.transform.to_wire). The read
path (core.transform.to_form) walks raw dicts so that malformed records
degrade to empties instead of raising.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_serializer
from pydantic.alias_generators import to_camel

from listing_wizard.schemas.labels import ListingStatus
from listing_wizard.schemas.models import LocalizedList, LocalizedValue


class _WireModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class WireRef(BaseModel):
    """Hierarchy reference: bilingual display name plus the master `_id`."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    en: str = ""
    vi: str = ""
    id: str = Field("", alias="_id")

    @model_serializer(mode="wrap")
    def _drop_blank_id(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        if not self.id:
            data.pop("_id", None)
            data.pop("id", None)
        return data


# =========================
# Sections
# =========================


class ListingInformationWire(_WireModel):
    listing_information_property_id: str = ""
    listing_information_transaction_type: LocalizedValue = Field(default_factory=LocalizedValue)
    listing_information_project_community: WireRef = Field(default_factory=WireRef)
    listing_information_zone_sub_area: WireRef = Field(default_factory=WireRef)
    listing_information_block_name: WireRef = Field(default_factory=WireRef)
    listing_information_property_no: LocalizedValue = Field(default_factory=LocalizedValue)
    listing_information_property_type: LocalizedValue = Field(default_factory=LocalizedValue)
    listing_information_date_listed: str = ""
    listing_information_availability_status: LocalizedValue = Field(default_factory=LocalizedValue)
    listing_information_property_title: LocalizedValue = Field(default_factory=LocalizedValue)
    listing_information_available_from: str = ""
    listing_information_google_maps_iframe: LocalizedValue = Field(default_factory=LocalizedValue)
    listing_information_address: LocalizedValue = Field(default_factory=LocalizedValue)


class PropertyInformationWire(_WireModel):
    information_unit: LocalizedValue = Field(default_factory=LocalizedValue)
    information_unit_size: int | float = 0
    information_bedrooms: int | float = 0
    information_bathrooms: int | float = 0
    information_floors: LocalizedValue = Field(default_factory=LocalizedValue)
    information_furnishing: LocalizedValue = Field(default_factory=LocalizedValue)
    information_view: LocalizedValue = Field(default_factory=LocalizedValue)


class WhatNearbyWire(_WireModel):
    what_nearby_description: LocalizedValue = Field(default_factory=LocalizedValue)


class UtilityWire(_WireModel):
    property_utility_unit_name: LocalizedValue = Field(default_factory=LocalizedValue)
    property_utility_icon: str = ""


class ImagesVideosWire(_WireModel):
    property_images: list[str] = Field(default_factory=list)
    property_video: list[str] = Field(default_factory=list)
    floor_plan: list[str] = Field(default_factory=list)


class FinancialDetailsWire(_WireModel):
    financial_details_currency: str = ""
    financial_details_price: int | float = 0
    financial_details_lease_price: int | float = 0
    financial_details_contract_length: str = ""
    financial_details_price_per_night: int | float = 0
    financial_details_check_in: str = "2:00 PM"
    financial_details_check_out: str = "11:00 AM"
    financial_details_terms: LocalizedValue = Field(default_factory=LocalizedValue)
    financial_details_deposit: LocalizedValue = Field(default_factory=LocalizedValue)
    financial_details_main_fee: LocalizedValue = Field(default_factory=LocalizedValue)
    financial_details_agent_fee: int | float = 0
    financial_details_agent_payment_agenda: LocalizedValue = Field(default_factory=LocalizedValue)
    financial_details_fee_tax: LocalizedValue = Field(default_factory=LocalizedValue)
    financial_details_legal_doc: LocalizedValue = Field(default_factory=LocalizedValue)


class ContactManagementWire(_WireModel):
    contact_management_owner: LocalizedValue = Field(default_factory=LocalizedValue)
    contact_management_owner_phone: list[str] = Field(default_factory=list)
    contact_management_owner_notes: LocalizedValue = Field(default_factory=LocalizedValue)
    contact_management_consultant: LocalizedValue = Field(default_factory=LocalizedValue)
    contact_management_connecting_point: LocalizedValue = Field(default_factory=LocalizedValue)
    contact_management_connecting_point_notes: LocalizedValue = Field(default_factory=LocalizedValue)
    contact_management_internal_notes: LocalizedValue = Field(default_factory=LocalizedValue)
    contact_management_source: LocalizedValue = Field(default_factory=LocalizedValue)
    contact_management_agent_fee: int | float = 0


class SeoInformationWire(_WireModel):
    meta_title: LocalizedValue = Field(default_factory=LocalizedValue)
    meta_description: LocalizedValue = Field(default_factory=LocalizedValue)
    meta_keywords: LocalizedList = Field(default_factory=LocalizedList)
    slug_url: LocalizedValue = Field(default_factory=LocalizedValue)
    canonical_url: LocalizedValue = Field(default_factory=LocalizedValue)
    schema_type: LocalizedValue = Field(default_factory=LocalizedValue)
    allow_indexing: bool = True
    og_title: LocalizedValue = Field(default_factory=LocalizedValue)
    og_description: LocalizedValue = Field(default_factory=LocalizedValue)
    og_images: list[str] = Field(default_factory=list)


# =========================
# Root
# =========================


class ListingPayload(_WireModel):
    """Complete create/update body. `id` is only set for records read back from the service."""

    id: str | None = Field(None, alias="_id")

    listing_information: ListingInformationWire = Field(default_factory=ListingInformationWire)
    property_information: PropertyInformationWire = Field(default_factory=PropertyInformationWire)
    what_nearby: WhatNearbyWire = Field(default_factory=WhatNearbyWire)
    property_utility: list[UtilityWire] = Field(default_factory=list)
    images_videos: ImagesVideosWire = Field(default_factory=ImagesVideosWire)
    financial_details: FinancialDetailsWire = Field(default_factory=FinancialDetailsWire)

    video_visibility: bool = False
    floor_image_visibility: bool = False
    title_visibility: bool = False
    description_visibility: bool = False
    what_nearby_visibility: bool = False
    property_utility_visibility: bool = False
    listing_information_visibility: dict[str, bool] = Field(default_factory=dict)
    property_information_visibility: dict[str, bool] = Field(default_factory=dict)
    financial_visibility: dict[str, bool] = Field(default_factory=dict)

    contact_management: ContactManagementWire = Field(default_factory=ContactManagementWire)
    seo_information: SeoInformationWire = Field(default_factory=SeoInformationWire)
    status: ListingStatus = ListingStatus.draft

    def to_json_dict(self) -> dict[str, Any]:
        """Wire-shaped dict; `_id` is omitted when unset."""
        data = self.model_dump(by_alias=True, mode="json")
        if data.get("_id") is None:
            data.pop("_id", None)
        return data
