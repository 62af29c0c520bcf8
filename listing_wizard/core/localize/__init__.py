# listing_wizard/core/localize/__init__.py
from .values import (
    coerce_localized,
    coerce_localized_list,
    get_text,
    is_blank,
    reconcile_for_save,
    resolve_language,
    set_lang,
)

__all__ = [
    "get_text",
    "set_lang",
    "reconcile_for_save",
    "coerce_localized",
    "coerce_localized_list",
    "resolve_language",
    "is_blank",
]
