# listing_wizard/core/variants/resolver.py
"""
Transaction-variant resolution.

Raw transaction types arrive as `{en, vi}` objects, bare strings, or enum
members. `normalize` is the only way to turn them into a TransactionVariant;
downstream code switches on the enum, never on raw text.

Two strictness levels:
- normalize(raw): unknown → UnknownTransactionTypeError (payload/submit path)
- normalize_for_form(raw): unknown → Sale (form rendering only)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from listing_wizard.core.errors import UnknownTransactionTypeError
from listing_wizard.core.log import get_logger
from listing_wizard.schemas.labels import (
    FINANCIAL_FIELD_ATTRS,
    NUMERIC_FINANCIAL_FIELDS,
    VARIANT_FINANCIAL_FIELDS,
    VARIANT_LABELS,
    VARIANT_REQUIRED_FIELDS,
    FinancialField,
    TransactionVariant,
    variant_from_alias,
)
from listing_wizard.schemas.models import FinancialDetails, LocalizedValue

logger = get_logger(__name__)


def _candidate_text(raw: Any) -> str:
    """Pick the text to match: mapping → en (then vi), str → itself."""
    if isinstance(raw, TransactionVariant):
        return raw.value
    if isinstance(raw, LocalizedValue):
        return raw.en or raw.vi
    if isinstance(raw, str):
        return raw
    if isinstance(raw, Mapping):
        en = raw.get("en")
        if isinstance(en, str) and en.strip():
            return en
        vi = raw.get("vi")
        return vi if isinstance(vi, str) else ""
    return ""


def _match(raw: Any) -> TransactionVariant | None:
    if isinstance(raw, TransactionVariant):
        return raw
    hit = variant_from_alias(_candidate_text(raw))
    if hit is None and isinstance(raw, (Mapping, LocalizedValue)):
        # en side present but unrecognised: give the vi side a chance
        vi = raw.get("vi") if isinstance(raw, Mapping) else raw.vi
        if isinstance(vi, str):
            hit = variant_from_alias(vi)
    return hit


def normalize(raw: Any) -> TransactionVariant:
    variant = _match(raw)
    if variant is None:
        raise UnknownTransactionTypeError(raw)
    return variant


def normalize_for_form(raw: Any) -> TransactionVariant:
    variant = _match(raw)
    if variant is None:
        logger.debug("transaction type %r not recognised; defaulting to %s", raw, TransactionVariant.sale.value)
        return TransactionVariant.sale
    return variant


def fields_for(variant: TransactionVariant) -> tuple[FinancialField, ...]:
    return VARIANT_FINANCIAL_FIELDS[variant]


def required_fields_for(variant: TransactionVariant) -> tuple[FinancialField, ...]:
    return VARIANT_REQUIRED_FIELDS[variant]


def _is_missing(field: FinancialField, value: Any) -> bool:
    if isinstance(value, LocalizedValue):
        return value.is_empty()
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if field in NUMERIC_FINANCIAL_FIELDS and isinstance(value, (int, float)):
        # a zero price is an unset price
        return value == 0
    return False


def missing_required(financial: FinancialDetails, variant: TransactionVariant) -> list[FinancialField]:
    """Required fields of `variant` that are empty in `financial`, in render order."""
    return [f for f in required_fields_for(variant) if _is_missing(f, getattr(financial, FINANCIAL_FIELD_ATTRS[f]))]


def localized_label(variant: TransactionVariant) -> LocalizedValue:
    en, vi = VARIANT_LABELS[variant]
    return LocalizedValue(en=en, vi=vi)
