# listing_wizard/schemas/labels.py
from __future__ import annotations

import re
import unicodedata
from enum import Enum, IntEnum

# =========================
# Canonical label enums
# =========================


class Language(str, Enum):
    en = "en"
    vi = "vi"


class TransactionVariant(str, Enum):
    """Canonical transaction tag. Values are the English display labels used on the wire."""

    sale = "Sale"
    lease = "Lease"
    home_stay = "Home Stay"


class ListingStatus(str, Enum):
    draft = "Draft"
    pending = "Pending"
    published = "Published"


class HierarchyLevel(IntEnum):
    # Ordered from least to most specific
    project = 1
    zone = 2
    block = 3


class VisibilitySection(str, Enum):
    listing = "listingInformationVisibility"
    property = "propertyInformationVisibility"
    financial = "financialVisibility"


class FinancialField(str, Enum):
    price = "price"
    lease_price = "leasePrice"
    contract_length = "contractLength"
    price_per_night = "pricePerNight"
    check_in = "checkIn"
    check_out = "checkOut"
    deposit = "deposit"
    payment_term = "paymentTerm"
    fee_tax = "feeTax"
    legal_doc = "legalDoc"
    agent_fee = "agentFee"
    agent_payment_agenda = "agentPaymentAgenda"


class MasterKind(str, Enum):
    """Option lists served by the master-data endpoints (besides the hierarchy)."""

    property_types = "propertytype"
    statuses = "availabilitystatus"
    units = "unit"
    furnishings = "furnishing"
    floor_ranges = "floorrange"
    fee_taxes = "feetax"
    legal_docs = "legaldocument"
    deposits = "deposit"
    payments = "payment"
    currencies = "currency"


# =========================
# Alias/token maps (with synonyms)
# =========================

TRANSACTION_TYPE_ALIASES = {
    "sale": TransactionVariant.sale,
    "bán": TransactionVariant.sale,
    "lease": TransactionVariant.lease,
    "cho thuê": TransactionVariant.lease,
    "homestay": TransactionVariant.home_stay,
    "home stay": TransactionVariant.home_stay,
}

VARIANT_LABELS: dict[TransactionVariant, tuple[str, str]] = {
    TransactionVariant.sale: ("Sale", "Bán"),
    TransactionVariant.lease: ("Lease", "Cho thuê"),
    TransactionVariant.home_stay: ("Home Stay", "Homestay"),
}

# Ordered: the wizard renders financial inputs in this order.
VARIANT_FINANCIAL_FIELDS: dict[TransactionVariant, tuple[FinancialField, ...]] = {
    TransactionVariant.sale: (
        FinancialField.price,
        FinancialField.deposit,
        FinancialField.payment_term,
        FinancialField.fee_tax,
        FinancialField.legal_doc,
        FinancialField.agent_fee,
    ),
    TransactionVariant.lease: (
        FinancialField.lease_price,
        FinancialField.contract_length,
        FinancialField.deposit,
        FinancialField.payment_term,
        FinancialField.agent_fee,
        FinancialField.agent_payment_agenda,
    ),
    TransactionVariant.home_stay: (
        FinancialField.price_per_night,
        FinancialField.check_in,
        FinancialField.check_out,
        FinancialField.deposit,
        FinancialField.payment_term,
    ),
}

VARIANT_REQUIRED_FIELDS: dict[TransactionVariant, tuple[FinancialField, ...]] = {
    TransactionVariant.sale: (FinancialField.price,),
    TransactionVariant.lease: (FinancialField.lease_price, FinancialField.contract_length),
    TransactionVariant.home_stay: (FinancialField.price_per_night, FinancialField.check_in, FinancialField.check_out),
}

# FinancialField -> attribute on FinancialDetails
FINANCIAL_FIELD_ATTRS: dict[FinancialField, str] = {
    FinancialField.price: "price",
    FinancialField.lease_price: "lease_price",
    FinancialField.contract_length: "contract_length",
    FinancialField.price_per_night: "price_per_night",
    FinancialField.check_in: "check_in",
    FinancialField.check_out: "check_out",
    FinancialField.deposit: "deposit",
    FinancialField.payment_term: "payment_terms",
    FinancialField.fee_tax: "fee_tax",
    FinancialField.legal_doc: "legal_doc",
    FinancialField.agent_fee: "agent_fee",
    FinancialField.agent_payment_agenda: "agent_payment_agenda",
}

NUMERIC_FINANCIAL_FIELDS = frozenset(
    {
        FinancialField.price,
        FinancialField.lease_price,
        FinancialField.price_per_night,
        FinancialField.agent_fee,
    }
)

# =========================
# Visibility surfaces
# =========================

VISIBILITY_DEFAULT_FIELDS: dict[VisibilitySection, tuple[str, ...]] = {
    VisibilitySection.listing: (
        "transactionType",
        "propertyId",
        "projectCommunity",
        "areaZone",
        "blockName",
        "propertyNo",
        "dateListed",
        "availableFrom",
        "availabilityStatus",
        "googleMap",
    ),
    VisibilitySection.property: (
        "unit",
        "unitSize",
        "bedrooms",
        "bathrooms",
        "floorRange",
        "furnishing",
        "view",
    ),
    VisibilitySection.financial: (
        "contractLength",
        "deposit",
        "paymentTerm",
        "feeTaxes",
        "legalDocs",
        "agentFee",
        "checkIn",
        "checkOut",
    ),
}

# Root-level flags on the wire (not namespaced by a section)
LISTING_FLAG_FIELDS: tuple[str, ...] = (
    "titleVisibility",
    "descriptionVisibility",
    "videoVisibility",
    "floorImageVisibility",
    "whatNearbyVisibility",
    "propertyUtilityVisibility",
)

# =========================
# Normalization helpers
# =========================

_WS_RE = re.compile(r"\s+")


def fold_label(text: str) -> str:
    """NFC, trimmed, lower-cased, single-spaced: the lookup key for alias tables."""
    s = unicodedata.normalize("NFC", text)
    return _WS_RE.sub(" ", s).strip().lower()


def variant_from_alias(text: str) -> TransactionVariant | None:
    return TRANSACTION_TYPE_ALIASES.get(fold_label(text))
