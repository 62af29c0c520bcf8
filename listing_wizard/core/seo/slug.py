# listing_wizard/core/seo/slug.py
"""SEO auto-fill: URL slug and meta title derived from the listing title."""

from __future__ import annotations

import re
import unicodedata

from listing_wizard.schemas.models import LocalizedValue, SeoInfo

_NON_SLUG_RE = re.compile(r"[^a-z0-9\s-]")
_WS_RE = re.compile(r"\s+")
_DASHES_RE = re.compile(r"-+")


def _fold_accents(text: str) -> str:
    # đ/Đ has no combining-mark decomposition
    text = text.replace("đ", "d").replace("Đ", "D")
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def slugify(title: str) -> str:
    """
    "Căn hộ 2 phòng ngủ – Ecopark" → "can-ho-2-phong-ngu-ecopark"
    """
    s = _fold_accents(title or "").lower()
    s = _NON_SLUG_RE.sub("", s)
    s = _WS_RE.sub("-", s.strip())
    return _DASHES_RE.sub("-", s).strip("-")


def autofill_seo(seo: SeoInfo, title: LocalizedValue) -> SeoInfo:
    """
    Fill slug and meta title from the listing title.

    Runs only when both slug sides are empty, so a manually edited slug is
    never overwritten. Meta-title sides that are already set are kept.
    """
    source = title.en or title.vi
    if not source or seo.slug_url.en or seo.slug_url.vi:
        return seo

    slug = slugify(source)
    meta_title = LocalizedValue(
        en=seo.meta_title.en or title.en or source,
        vi=seo.meta_title.vi or title.vi or source,
    )
    return seo.model_copy(update={"slug_url": LocalizedValue(en=slug, vi=slug), "meta_title": meta_title})
