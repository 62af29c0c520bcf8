# listing_wizard/core/hierarchy/masters.py
"""
Master-data rows → typed records.

The listing service returns master rows shaped like
    {"_id": "...", "name": {"en": "...", "vi": "..."}, "status": "Active",
     "property": {"_id": "..."} | "<id>", "zone": {...}, "isDefault": true}

Rows without an `_id` are skipped. Everything else is tolerated: missing names
become empty LocalizedValues and unknown keys are ignored.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from listing_wizard.core.hierarchy.index import HierarchyIndex
from listing_wizard.core.localize import coerce_localized
from listing_wizard.core.log import get_logger
from listing_wizard.schemas.labels import HierarchyLevel, MasterKind
from listing_wizard.schemas.models import Currency, HierarchyEntity, LocalizedValue, MasterOption

logger = get_logger(__name__)

T = TypeVar("T", HierarchyEntity, MasterOption)

# Which ref key carries the parent id at each level
_PARENT_KEYS: dict[HierarchyLevel, str | None] = {
    HierarchyLevel.project: None,
    HierarchyLevel.zone: "property",
    HierarchyLevel.block: "zone",
}


def filter_active(items: Iterable[T]) -> list[T]:
    """Keep items whose status is Active (case-insensitive)."""
    return [it for it in items if (it.status or "").strip().lower() == "active"]


def _ref_id(ref: Any) -> str | None:
    if isinstance(ref, str):
        return ref or None
    if isinstance(ref, Mapping):
        rid = ref.get("_id") or ref.get("id")
        return rid if isinstance(rid, str) and rid else None
    return None


def _rows(raw: Any) -> list[Mapping[str, Any]]:
    # Accept the bare list or the service envelope {"data": [...]} / {"data": {"data": [...]}}
    cur = raw
    for _ in range(2):
        if isinstance(cur, Mapping) and "data" in cur:
            cur = cur["data"]
    if not isinstance(cur, list):
        return []
    return [r for r in cur if isinstance(r, Mapping)]


def parse_entities(raw: Any, level: HierarchyLevel) -> list[HierarchyEntity]:
    parent_key = _PARENT_KEYS[level]
    out: list[HierarchyEntity] = []
    for row in _rows(raw):
        rid = _ref_id(row)
        if not rid:
            logger.debug("skipping %s row without _id: %r", level.name, row)
            continue
        out.append(
            HierarchyEntity(
                id=rid,
                name=coerce_localized(row.get("name")),
                parent_id=_ref_id(row.get(parent_key)) if parent_key else None,
                status=str(row.get("status") or "Active"),
            )
        )
    return out


def parse_options(raw: Any) -> list[MasterOption]:
    out: list[MasterOption] = []
    for row in _rows(raw):
        rid = _ref_id(row)
        if not rid:
            continue
        name = row.get("name")
        if name is None:
            name = row.get("currencyName")
        out.append(
            MasterOption(
                id=rid,
                name=coerce_localized(name),
                status=str(row.get("status") or "Active"),
                is_default=bool(row.get("isDefault", False)),
                symbol=coerce_localized(row.get("symbol", row.get("currencySymbol"))),
                code=coerce_localized(row.get("currencyCode")),
            )
        )
    return out


def _first_default(options: Iterable[MasterOption]) -> MasterOption | None:
    return next((o for o in options if o.is_default), None)


def default_currency(options: Iterable[MasterOption]) -> Currency | None:
    opt = _first_default(options)
    if opt is None:
        return None
    return Currency(
        symbol=opt.symbol.en or opt.symbol.vi,
        code=opt.code.en or opt.code.vi,
        name=opt.name.en or opt.name.vi,
    )


def default_unit(options: Iterable[MasterOption]) -> LocalizedValue | None:
    """Default unit as its bilingual symbol (e.g. {"en": "sqm", "vi": "m²"})."""
    opt = _first_default(options)
    if opt is None:
        return None
    return opt.symbol if not opt.symbol.is_empty() else opt.name


@dataclass(frozen=True)
class MasterData:
    """Everything the wizard loads from master-data endpoints, already parsed."""

    projects: tuple[HierarchyEntity, ...] = ()
    zones: tuple[HierarchyEntity, ...] = ()
    blocks: tuple[HierarchyEntity, ...] = ()
    options: dict[MasterKind, tuple[MasterOption, ...]] = field(default_factory=dict)

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> MasterData:
        """
        Parse a `{"projects": rows, "zones": rows, "blocks": rows, "<kind>": rows}` mapping.

        Option keys are MasterKind values ("unit", "currency", …).
        """
        options: dict[MasterKind, tuple[MasterOption, ...]] = {}
        for kind in MasterKind:
            if kind.value in raw:
                options[kind] = tuple(parse_options(raw[kind.value]))
        return cls(
            projects=tuple(parse_entities(raw.get("projects"), HierarchyLevel.project)),
            zones=tuple(parse_entities(raw.get("zones"), HierarchyLevel.zone)),
            blocks=tuple(parse_entities(raw.get("blocks"), HierarchyLevel.block)),
            options=options,
        )

    def options_for(self, kind: MasterKind, *, active_only: bool = True) -> tuple[MasterOption, ...]:
        opts = self.options.get(kind, ())
        return tuple(filter_active(opts)) if active_only else opts

    def build_index(self) -> HierarchyIndex:
        return HierarchyIndex.build(self.projects, self.zones, self.blocks)
