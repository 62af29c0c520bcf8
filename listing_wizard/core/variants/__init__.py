# listing_wizard/core/variants/__init__.py
from .resolver import (
    fields_for,
    localized_label,
    missing_required,
    normalize,
    normalize_for_form,
    required_fields_for,
)

__all__ = [
    "normalize",
    "normalize_for_form",
    "fields_for",
    "required_fields_for",
    "missing_required",
    "localized_label",
]
