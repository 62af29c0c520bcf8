# listing_wizard/schemas/models.py

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from listing_wizard.schemas.labels import (
    LISTING_FLAG_FIELDS,
    VISIBILITY_DEFAULT_FIELDS,
    Language,
    ListingStatus,
    VisibilitySection,
)

# Numeric form inputs keep whatever the user typed ("1,000,000") until submission.
NumberLike = int | float | str

# Upload kinds accepted by the media service.
MediaKind = Literal["image", "video", "floor"]

# =========================
# Bilingual primitives
# =========================


class LocalizedValue(BaseModel):
    """
    One logical text field in both languages.

    Both sides always exist; an unset side is the empty string. Reconciliation
    (fill-from-sibling) happens only at save time, see core.localize.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    en: str = Field("", description="English text.")
    vi: str = Field("", description="Vietnamese text.")

    def __getitem__(self, lang: Language | str) -> str:
        return getattr(self, Language(lang).value)

    def is_empty(self) -> bool:
        return not self.en.strip() and not self.vi.strip()

    def __str__(self) -> str:
        return self.en or self.vi


class LocalizedList(BaseModel):
    """Per-language list of strings (SEO keywords)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    en: tuple[str, ...] = ()
    vi: tuple[str, ...] = ()


# =========================
# Master data
# =========================


class HierarchyEntity(BaseModel):
    """A Project, Zone or Block. Zones point at a Project, Blocks at a Zone."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., min_length=1, description="Master-data identifier (`_id` on the wire).")
    name: LocalizedValue = Field(default_factory=LocalizedValue)
    parent_id: str | None = Field(None, description="Zone → Project id; Block → Zone id; None for projects.")
    status: str = Field("Active", description="Master-data status; only Active entries are offered.")


class MasterOption(BaseModel):
    """Generic option row (unit, furnishing, currency, deposit, payment, …)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: LocalizedValue = Field(default_factory=LocalizedValue)
    status: str = "Active"
    is_default: bool = False
    symbol: LocalizedValue = Field(default_factory=LocalizedValue, description="Unit/currency symbol when relevant.")
    code: LocalizedValue = Field(default_factory=LocalizedValue, description="Currency code when relevant.")


# =========================
# Draft sub-records
# =========================


class Currency(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    symbol: str = ""
    code: str = ""
    name: str = ""


class UtilityItem(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    name: LocalizedValue = Field(default_factory=LocalizedValue)
    icon: str = Field("", description="Icon reference (URL or icon key).")


class MediaItem(BaseModel):
    """Pointer to an uploaded file. The draft never holds file bytes."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    url: str
    is_server_file: bool = Field(False, description="True once the URL was returned by the upload service.")


class MediaSet(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    images: tuple[MediaItem, ...] = ()
    videos: tuple[MediaItem, ...] = ()
    floor_plans: tuple[MediaItem, ...] = ()

    def for_kind(self, kind: MediaKind) -> tuple[MediaItem, ...]:
        return getattr(self, MEDIA_KIND_ATTRS[kind])


MEDIA_KIND_ATTRS: dict[str, str] = {
    "image": "images",
    "video": "videos",
    "floor": "floor_plans",
}


class HierarchySelection(BaseModel):
    """Project → Zone → Block selection plus cached display names."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    project_id: str = ""
    zone_id: str = ""
    block_id: str = ""
    project_name: LocalizedValue = Field(default_factory=LocalizedValue)
    zone_name: LocalizedValue = Field(default_factory=LocalizedValue)
    block_name: LocalizedValue = Field(default_factory=LocalizedValue)

    def summary(self) -> str:
        return " > ".join(str(n) or "-" for n in (self.project_name, self.zone_name, self.block_name))


class FinancialDetails(BaseModel):
    """
    Every financial field for every transaction variant.

    Fields that do not apply to the active variant are kept so a later
    variant switch does not lose data.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    currency: Currency = Field(default_factory=Currency)

    # Sale
    price: NumberLike = ""
    fee_tax: LocalizedValue = Field(default_factory=LocalizedValue)
    legal_doc: LocalizedValue = Field(default_factory=LocalizedValue)

    # Lease
    lease_price: NumberLike = ""
    contract_length: str = ""
    agent_payment_agenda: LocalizedValue = Field(default_factory=LocalizedValue)

    # Home Stay
    price_per_night: NumberLike = ""
    check_in: str = "2:00 PM"
    check_out: str = "11:00 AM"

    # Shared
    deposit: LocalizedValue = Field(default_factory=LocalizedValue)
    payment_terms: LocalizedValue = Field(default_factory=LocalizedValue)
    maintenance_fee: LocalizedValue = Field(default_factory=LocalizedValue)
    agent_fee: NumberLike = ""


class ContactInfo(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    owner: LocalizedValue = Field(default_factory=LocalizedValue)
    owner_phones: tuple[str, ...] = ()
    owner_notes: LocalizedValue = Field(default_factory=LocalizedValue)
    consultant: LocalizedValue = Field(default_factory=LocalizedValue)
    connecting_point: LocalizedValue = Field(default_factory=LocalizedValue)
    connecting_point_notes: LocalizedValue = Field(default_factory=LocalizedValue)
    internal_notes: LocalizedValue = Field(default_factory=LocalizedValue)
    source: LocalizedValue = Field(default_factory=LocalizedValue)
    agent_fee: NumberLike = 0


class SeoInfo(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    meta_title: LocalizedValue = Field(default_factory=LocalizedValue)
    meta_description: LocalizedValue = Field(default_factory=LocalizedValue)
    meta_keywords: LocalizedList = Field(default_factory=LocalizedList)
    slug_url: LocalizedValue = Field(default_factory=LocalizedValue)
    canonical_url: LocalizedValue = Field(default_factory=LocalizedValue)
    schema_type: LocalizedValue = Field(default_factory=LocalizedValue)
    allow_indexing: bool = True
    og_title: LocalizedValue = Field(default_factory=LocalizedValue)
    og_description: LocalizedValue = Field(default_factory=LocalizedValue)
    og_images: tuple[str, ...] = ()


def _section_defaults(section: VisibilitySection) -> dict[str, bool]:
    return {name: False for name in VISIBILITY_DEFAULT_FIELDS[section]}


class VisibilityMap(BaseModel):
    """
    "Hide on public page" flags. Purely informational: a flag never clears or
    changes the value of the field it refers to.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    listing: dict[str, bool] = Field(default_factory=lambda: _section_defaults(VisibilitySection.listing))
    property: dict[str, bool] = Field(default_factory=lambda: _section_defaults(VisibilitySection.property))
    financial: dict[str, bool] = Field(default_factory=lambda: _section_defaults(VisibilitySection.financial))
    flags: dict[str, bool] = Field(
        default_factory=lambda: {name: False for name in LISTING_FLAG_FIELDS},
        description="Root-level flags (titleVisibility, videoVisibility, …).",
    )


# =========================
# Aggregate root
# =========================


class ListingDraft(BaseModel):
    """
    Authoritative wizard form state.

    Created empty (create mode) or hydrated from a wire record (edit mode),
    replaced wholesale on every mutation, converted to a wire payload on submit.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    record_id: str | None = Field(None, description="Server id of the listing being edited; None in create mode.")
    transaction_type: LocalizedValue | str = Field("", description="Raw variant value as stored or typed.")
    property_id: str = Field("", description="System-generated listing code; read-only once assigned.")
    hierarchy: HierarchySelection = Field(default_factory=HierarchySelection)

    title: LocalizedValue = Field(default_factory=LocalizedValue)
    description: LocalizedValue = Field(default_factory=LocalizedValue)
    address: LocalizedValue = Field(default_factory=LocalizedValue)
    property_no: LocalizedValue = Field(default_factory=LocalizedValue)
    property_type: LocalizedValue = Field(default_factory=LocalizedValue)
    availability_status: LocalizedValue = Field(default_factory=LocalizedValue)
    google_maps_iframe: LocalizedValue = Field(default_factory=LocalizedValue)
    date_listed: str = Field("", description="ISO date (YYYY-MM-DD).")
    available_from: str = Field("", description="ISO date (YYYY-MM-DD).")

    unit: LocalizedValue = Field(default_factory=LocalizedValue)
    unit_size: NumberLike = ""
    bedrooms: NumberLike = ""
    bathrooms: NumberLike = ""
    floors: LocalizedValue = Field(default_factory=LocalizedValue, description="Floor-range label.")
    furnishing: LocalizedValue = Field(default_factory=LocalizedValue)
    view: LocalizedValue = Field(default_factory=LocalizedValue)

    financial: FinancialDetails = Field(default_factory=FinancialDetails)
    utilities: tuple[UtilityItem, ...] = ()
    media: MediaSet = Field(default_factory=MediaSet)
    visibility: VisibilityMap = Field(default_factory=VisibilityMap)
    contact: ContactInfo = Field(default_factory=ContactInfo)
    seo: SeoInfo = Field(default_factory=SeoInfo)
    status: ListingStatus = ListingStatus.draft

    def summary(self) -> str:
        bits: list[str] = []
        tt = self.transaction_type
        bits.append(str(tt) if isinstance(tt, LocalizedValue) else (tt or "?"))
        if self.property_id:
            bits.append(self.property_id)
        if not self.title.is_empty():
            bits.append(str(self.title))
        bits.append(self.hierarchy.summary())
        bits.append(self.status.value)
        return " | ".join(bits)
