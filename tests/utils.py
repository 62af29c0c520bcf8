# tests/utils.py
"""
Single source of truth for test data, factories, and canonical payloads.
Update values here to cascade across the test suite.

Master data scenario (used everywhere):
    Ecopark (p-eco)
      ├── Zone A (z-a)   → Block 5 (b-5), Block 6 (b-6)
      └── Zone B (z-b)   → Block 7 (b-7)
    Vinhomes (p-vin)
      └── Zone C (z-c, Inactive)
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from listing_wizard.core.hierarchy import HierarchyIndex, MasterData
from listing_wizard.schemas.labels import TransactionVariant
from listing_wizard.schemas.models import HierarchyEntity, ListingDraft, LocalizedValue

# -----------------------------
# Global defaults (edit once)
# -----------------------------

DEFAULT_TODAY_ISO = "2024-05-01"
DEFAULT_RECORD_ID = "rec-001"
DEFAULT_PROPERTY_ID = "PS1001"

# -----------------------------
# Small helpers
# -----------------------------


def lv(en: str = "", vi: str = "") -> LocalizedValue:
    return LocalizedValue(en=en, vi=vi)


# -----------------------------
# Hierarchy factories
# -----------------------------


def make_project(pid: str = "p-eco", en: str = "Ecopark", vi: str = "Ecopark", *, status: str = "Active") -> HierarchyEntity:
    return HierarchyEntity(id=pid, name=lv(en, vi), status=status)


def make_zone(
    zid: str = "z-a",
    project_id: str = "p-eco",
    en: str = "Zone A",
    vi: str = "Khu A",
    *,
    status: str = "Active",
) -> HierarchyEntity:
    return HierarchyEntity(id=zid, name=lv(en, vi), parent_id=project_id, status=status)


def make_block(
    bid: str = "b-5",
    zone_id: str = "z-a",
    en: str = "Block 5",
    vi: str = "Tòa 5",
    *,
    status: str = "Active",
) -> HierarchyEntity:
    return HierarchyEntity(id=bid, name=lv(en, vi), parent_id=zone_id, status=status)


def default_entities() -> tuple[tuple[HierarchyEntity, ...], tuple[HierarchyEntity, ...], tuple[HierarchyEntity, ...]]:
    projects = (make_project(), make_project("p-vin", "Vinhomes", "Vinhomes"))
    zones = (
        make_zone(),
        make_zone("z-b", "p-eco", "Zone B", "Khu B"),
        make_zone("z-c", "p-vin", "Zone C", "Khu C", status="Inactive"),
    )
    blocks = (
        make_block(),
        make_block("b-6", "z-a", "Block 6", "Tòa 6"),
        make_block("b-7", "z-b", "Block 7", "Tòa 7"),
    )
    return projects, zones, blocks


def make_index() -> HierarchyIndex:
    projects, zones, blocks = default_entities()
    return HierarchyIndex.build(projects, zones, blocks)


# -----------------------------
# Master data (wire rows)
# -----------------------------


def _row(rid: str, en: str, vi: str, **extra: Any) -> dict[str, Any]:
    return {"_id": rid, "name": {"en": en, "vi": vi}, "status": extra.pop("status", "Active"), **extra}


def make_masters_raw() -> dict[str, Any]:
    """Raw master rows in the service envelope, keyed for MasterData.from_raw."""
    return {
        "projects": {
            "success": True,
            "data": {
                "data": [
                    _row("p-eco", "Ecopark", "Ecopark"),
                    _row("p-vin", "Vinhomes", "Vinhomes"),
                ]
            },
        },
        "zones": {
            "data": [
                _row("z-a", "Zone A", "Khu A", property={"_id": "p-eco"}),
                _row("z-b", "Zone B", "Khu B", property="p-eco"),
                _row("z-c", "Zone C", "Khu C", property={"_id": "p-vin"}, status="Inactive"),
            ]
        },
        "blocks": [
            _row("b-5", "Block 5", "Tòa 5", zone={"_id": "z-a"}),
            _row("b-6", "Block 6", "Tòa 6", zone={"_id": "z-a"}),
            _row("b-7", "Block 7", "Tòa 7", zone="z-b"),
        ],
        "unit": [
            _row("u-sqft", "Square foot", "Feet vuông", symbol={"en": "sqft", "vi": "ft²"}),
            _row("u-sqm", "Square meter", "Mét vuông", symbol={"en": "sqm", "vi": "m²"}, isDefault=True),
        ],
        "currency": [
            {"_id": "c-usd", "currencyName": {"en": "US Dollar", "vi": "Đô la Mỹ"}, "currencyCode": {"en": "USD", "vi": "USD"},
             "currencySymbol": {"en": "$", "vi": "$"}, "status": "Active"},
            {"_id": "c-vnd", "currencyName": {"en": "Vietnamese Dong", "vi": "Việt Nam Đồng"},
             "currencyCode": {"en": "VND", "vi": "VND"}, "currencySymbol": {"en": "₫", "vi": "₫"},
             "isDefault": True, "status": "Active"},
        ],
        "furnishing": [
            _row("f-full", "Fully furnished", "Đầy đủ nội thất"),
            _row("f-old", "Legacy", "Cũ", status="Inactive"),
        ],
    }


def make_masters() -> MasterData:
    return MasterData.from_raw(make_masters_raw())


# -----------------------------
# Wire records
# -----------------------------

_BASE_WIRE_RECORD: dict[str, Any] = {
    "_id": DEFAULT_RECORD_ID,
    "listingInformation": {
        "listingInformationPropertyId": DEFAULT_PROPERTY_ID,
        "listingInformationTransactionType": {"en": "Sale", "vi": "Bán"},
        "listingInformationProjectCommunity": {"_id": "p-eco", "en": "Ecopark", "vi": "Ecopark"},
        "listingInformationZoneSubArea": {"_id": "z-a", "en": "Zone A", "vi": "Khu A"},
        "listingInformationBlockName": {"_id": "b-5", "en": "Block 5", "vi": "Tòa 5"},
        "listingInformationPropertyNo": {"en": "A-1203", "vi": "A-1203"},
        "listingInformationPropertyType": {"en": "Apartment", "vi": "Căn hộ"},
        "listingInformationDateListed": "2024-05-01",
        "listingInformationAvailabilityStatus": {"en": "Available", "vi": "Còn trống"},
        "listingInformationPropertyTitle": {"en": "Lake view apartment", "vi": "Căn hộ view hồ"},
        "listingInformationAvailableFrom": "2024-06-01",
        "listingInformationGoogleMapsIframe": {"en": "<iframe src='m'></iframe>", "vi": "<iframe src='m'></iframe>"},
        "listingInformationAddress": {"en": "12 Lake Road", "vi": "12 Đường Hồ"},
    },
    "propertyInformation": {
        "informationUnit": {"en": "sqm", "vi": "m²"},
        "informationUnitSize": 85,
        "informationBedrooms": 2,
        "informationBathrooms": 2,
        "informationFloors": {"en": "10-15", "vi": "10-15"},
        "informationFurnishing": {"en": "Fully furnished", "vi": "Đầy đủ nội thất"},
        "informationView": {"en": "Lake", "vi": "Hồ"},
    },
    "whatNearby": {"whatNearbyDescription": {"en": "Near the park", "vi": "Gần công viên"}},
    "propertyUtility": [
        {"propertyUtilityUnitName": {"en": "Pool", "vi": "Hồ bơi"}, "propertyUtilityIcon": "pool.svg"},
        {"propertyUtilityUnitName": {"en": "Gym", "vi": "Phòng gym"}, "propertyUtilityIcon": "gym.svg"},
    ],
    "imagesVideos": {
        "propertyImages": ["https://cdn.example/1.jpg", "https://cdn.example/2.jpg"],
        "propertyVideo": ["https://cdn.example/tour.mp4"],
        "floorPlan": ["https://cdn.example/plan.png"],
    },
    "financialDetails": {
        "financialDetailsCurrency": "VND",
        "financialDetailsPrice": 3500000000,
        "financialDetailsLeasePrice": 0,
        "financialDetailsContractLength": "",
        "financialDetailsPricePerNight": 0,
        "financialDetailsCheckIn": "2:00 PM",
        "financialDetailsCheckOut": "11:00 AM",
        "financialDetailsTerms": {"en": "30% upfront", "vi": "Trả trước 30%"},
        "financialDetailsDeposit": {"en": "10%", "vi": "10%"},
        "financialDetailsMainFee": {"en": "Included", "vi": "Đã bao gồm"},
        "financialDetailsAgentFee": 2,
        "financialDetailsAgentPaymentAgenda": {"en": "On signing", "vi": "Khi ký"},
        "financialDetailsFeeTax": {"en": "Buyer pays", "vi": "Người mua trả"},
        "financialDetailsLegalDoc": {"en": "Pink book", "vi": "Sổ hồng"},
    },
    "videoVisibility": False,
    "floorImageVisibility": True,
    "titleVisibility": False,
    "descriptionVisibility": False,
    "whatNearbyVisibility": False,
    "propertyUtilityVisibility": False,
    "listingInformationVisibility": {
        "transactionType": False,
        "propertyId": False,
        "projectCommunity": False,
        "areaZone": False,
        "blockName": False,
        "propertyNo": True,
        "dateListed": False,
        "availableFrom": False,
        "availabilityStatus": False,
        "googleMap": True,
    },
    "propertyInformationVisibility": {
        "unit": False,
        "unitSize": False,
        "bedrooms": False,
        "bathrooms": False,
        "floorRange": False,
        "furnishing": False,
        "view": False,
    },
    "financialVisibility": {
        "contractLength": False,
        "deposit": False,
        "paymentTerm": False,
        "feeTaxes": True,
        "legalDocs": False,
        "agentFee": True,
        "checkIn": False,
        "checkOut": False,
    },
    "contactManagement": {
        "contactManagementOwner": {"en": "Mr. Nam", "vi": "Anh Nam"},
        "contactManagementOwnerPhone": ["+84 90 000 0000"],
        "contactManagementOwnerNotes": {"en": "Call after 6pm", "vi": "Gọi sau 6 giờ"},
        "contactManagementConsultant": {"en": "Linh", "vi": "Linh"},
        "contactManagementConnectingPoint": {"en": "Front desk", "vi": "Lễ tân"},
        "contactManagementConnectingPointNotes": {"en": "Ask for keys", "vi": "Hỏi chìa khóa"},
        "contactManagementInternalNotes": {"en": "Motivated seller", "vi": "Chủ cần bán"},
        "contactManagementSource": {"en": "Referral", "vi": "Giới thiệu"},
        "contactManagementAgentFee": 1,
    },
    "seoInformation": {
        "metaTitle": {"en": "Lake view apartment", "vi": "Căn hộ view hồ"},
        "metaDescription": {"en": "Two bedrooms by the lake", "vi": "Hai phòng ngủ cạnh hồ"},
        "metaKeywords": {"en": ["ecopark", "lake"], "vi": ["ecopark", "hồ"]},
        "slugUrl": {"en": "lake-view-apartment", "vi": "can-ho-view-ho"},
        "canonicalUrl": {"en": "https://site/en/lake", "vi": "https://site/vi/ho"},
        "schemaType": {"en": "Apartment", "vi": "Apartment"},
        "allowIndexing": True,
        "ogTitle": {"en": "Lake view", "vi": "View hồ"},
        "ogDescription": {"en": "Best lake view", "vi": "View hồ đẹp nhất"},
        "ogImages": ["https://cdn.example/og.jpg"],
    },
    "status": "Published",
}


def _merge(base: dict[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Recursive dict merge; mapping values merge, everything else replaces."""
    out = dict(base)
    for key, val in overrides.items():
        if isinstance(val, Mapping) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], val)
        else:
            out[key] = val
    return out


def make_wire_record(**overrides: Any) -> dict[str, Any]:
    """
    Fully bilingual wire record (Sale, Ecopark > Zone A > Block 5).

    Usage:
        make_wire_record(financialDetails={"financialDetailsPrice": "1,000,000"})
    """
    return _merge(copy.deepcopy(_BASE_WIRE_RECORD), overrides)


def make_draft(**fields: Any) -> ListingDraft:
    """Minimal submittable Sale draft in create mode; override any top-level field."""
    base: dict[str, Any] = {
        "transaction_type": {"en": "Sale", "vi": "Bán"},
        "title": {"en": "Lake view apartment", "vi": ""},
        "property_no": {"en": "A-1203", "vi": ""},
        "financial": {"price": "1,000,000", "currency": {"symbol": "₫", "code": "VND", "name": "Vietnamese Dong"}},
        "date_listed": DEFAULT_TODAY_ISO,
    }
    base.update(fields)
    return ListingDraft.model_validate(base)


# -----------------------------
# Fake collaborators
# -----------------------------


@dataclass
class FakeListingApi:
    """
    In-memory ListingApi.

    - taken_property_nos: property numbers (en side) reported as duplicates
    - fail_with: exception raised by every call (simulates an outage)
    """

    masters_raw: dict[str, Any] = field(default_factory=make_masters_raw)
    records: dict[str, dict[str, Any]] = field(default_factory=dict)
    taken_property_nos: set[str] = field(default_factory=set)
    next_ids: dict[TransactionVariant, str] = field(
        default_factory=lambda: {
            TransactionVariant.sale: "PS1023",
            TransactionVariant.lease: "PL2001",
            TransactionVariant.home_stay: "PH3001",
        }
    )
    fail_with: Exception | None = None
    calls: list[tuple[str, Any]] = field(default_factory=list)

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def validate_property_no(self, *, property_no, transaction_type, exclude_id=None) -> bool:
        self.calls.append(("validate_property_no", (property_no, transaction_type, exclude_id)))
        self._maybe_fail()
        return property_no.en not in self.taken_property_nos

    def next_property_id(self, transaction_type) -> str:
        self.calls.append(("next_property_id", transaction_type))
        self._maybe_fail()
        return self.next_ids[transaction_type]

    def create_listing(self, payload) -> dict[str, Any]:
        self.calls.append(("create_listing", payload))
        self._maybe_fail()
        new_id = f"rec-{len(self.records) + 100}"
        self.records[new_id] = {**payload, "_id": new_id}
        return {"_id": new_id, "status": payload.get("status")}

    def update_listing(self, listing_id, payload) -> dict[str, Any]:
        self.calls.append(("update_listing", (listing_id, payload)))
        self._maybe_fail()
        self.records[listing_id] = {**payload, "_id": listing_id}
        return {"_id": listing_id, "status": payload.get("status")}

    def fetch_listing(self, listing_id) -> dict[str, Any]:
        self.calls.append(("fetch_listing", listing_id))
        self._maybe_fail()
        return copy.deepcopy(self.records[listing_id])

    def fetch_masters(self) -> dict[str, Any]:
        self.calls.append(("fetch_masters", None))
        self._maybe_fail()
        return copy.deepcopy(self.masters_raw)

    def called(self, name: str) -> list[Any]:
        return [args for n, args in self.calls if n == name]


@dataclass
class FakeUploader:
    """In-memory MediaUploader returning deterministic CDN URLs."""

    base_url: str = "https://cdn.example/uploads"
    response: dict[str, Any] | None = None
    fail_with: Exception | None = None
    uploads: list[tuple[str, str]] = field(default_factory=list)

    def upload(self, file, kind) -> dict[str, Any]:
        if self.fail_with is not None:
            raise self.fail_with
        name = file.name if hasattr(file, "name") else file[0]
        self.uploads.append((name, kind))
        if self.response is not None:
            return self.response
        return {"url": f"{self.base_url}/{kind}/{name}"}
