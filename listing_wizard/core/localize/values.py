# listing_wizard/core/localize/values.py
"""
Operations on bilingual `{en, vi}` values.

Editing never copies text across languages; typing into one side leaves the
other alone. `reconcile_for_save` is the only place a side is back-filled, and
it runs at save time (plus the step-1 title/description group).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from listing_wizard.schemas.labels import Language
from listing_wizard.schemas.models import LocalizedList, LocalizedValue

EMPTY = LocalizedValue()


def resolve_language(lang: Language | str) -> Language:
    """Accept an enum member or a code; unknown codes raise ValueError."""
    if isinstance(lang, Language):
        return lang
    code = str(lang).strip().lower()
    try:
        return Language(code)
    except ValueError:
        raise ValueError(f"Unknown language code: {lang!r}") from None


def is_blank(text: str | None) -> bool:
    return not text or not text.strip()


def get_text(
    value: LocalizedValue | None,
    lang: Language | str,
    fallback_lang: Language | str | None = None,
) -> str:
    """Active side if non-empty, else the fallback side, else ""."""
    lv = value or EMPTY
    primary = lv[resolve_language(lang)]
    if primary:
        return primary
    if fallback_lang is None:
        return ""
    return lv[resolve_language(fallback_lang)]


def set_lang(value: LocalizedValue | None, lang: Language | str, text: str) -> LocalizedValue:
    lv = value or EMPTY
    return lv.model_copy(update={resolve_language(lang).value: text})


def reconcile_for_save(value: LocalizedValue | None) -> LocalizedValue:
    """
    Fill-from-sibling.

    Exactly one side blank → copy the other side in. Both filled → unchanged.
    Both blank → both "" (whitespace is not preserved on an otherwise empty value).
    """
    lv = value or EMPTY
    en_blank = is_blank(lv.en)
    vi_blank = is_blank(lv.vi)
    if en_blank and vi_blank:
        return EMPTY if (lv.en or lv.vi) else lv
    if en_blank:
        return LocalizedValue(en=lv.vi, vi=lv.vi)
    if vi_blank:
        return LocalizedValue(en=lv.en, vi=lv.en)
    return lv


def coerce_localized(raw: Any) -> LocalizedValue:
    """
    Total conversion of any raw wire value.

    None → empty; str → same text on both sides; mapping → its en/vi strings
    (non-string sides become ""); anything else → empty.
    """
    if raw is None:
        return EMPTY
    if isinstance(raw, LocalizedValue):
        return raw
    if isinstance(raw, str):
        return LocalizedValue(en=raw, vi=raw)
    if isinstance(raw, Mapping):
        en = raw.get("en")
        vi = raw.get("vi")
        return LocalizedValue(
            en=en if isinstance(en, str) else "",
            vi=vi if isinstance(vi, str) else "",
        )
    return EMPTY


def coerce_localized_list(raw: Any) -> LocalizedList:
    if isinstance(raw, LocalizedList):
        return raw
    if not isinstance(raw, Mapping):
        return LocalizedList()

    def _strings(v: Any) -> tuple[str, ...]:
        if isinstance(v, str):
            return (v,) if v else ()
        if isinstance(v, (list, tuple)):
            return tuple(x for x in v if isinstance(x, str))
        return ()

    return LocalizedList(en=_strings(raw.get("en")), vi=_strings(raw.get("vi")))
