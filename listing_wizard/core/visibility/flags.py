# listing_wizard/core/visibility/flags.py
"""
"Hide on public page" flags.

Three namespaced sections plus the flat listing-level flags (section=None).
Flags are informational only: setting one never touches the value of the field
it names, and unknown field names inside a known section are kept for
forward-compatibility.
"""

from __future__ import annotations

from listing_wizard.schemas.labels import VisibilitySection
from listing_wizard.schemas.models import VisibilityMap

_SECTION_ATTRS: dict[VisibilitySection, str] = {
    VisibilitySection.listing: "listing",
    VisibilitySection.property: "property",
    VisibilitySection.financial: "financial",
}


def _section_attr(section: VisibilitySection | str | None) -> str:
    if section is None:
        return "flags"
    try:
        return _SECTION_ATTRS[VisibilitySection(section)]
    except ValueError:
        raise ValueError(f"Unknown visibility section: {section!r}") from None


def get_flag(vmap: VisibilityMap, section: VisibilitySection | str | None, field: str) -> bool:
    return bool(getattr(vmap, _section_attr(section)).get(field, False))


def set_flag(vmap: VisibilityMap, section: VisibilitySection | str | None, field: str, value: bool) -> VisibilityMap:
    attr = _section_attr(section)
    current: dict[str, bool] = getattr(vmap, attr)
    if field in current and current[field] == bool(value):
        return vmap
    return vmap.model_copy(update={attr: {**current, field: bool(value)}})
