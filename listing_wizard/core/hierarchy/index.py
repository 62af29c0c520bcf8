# listing_wizard/core/hierarchy/index.py
"""
Read-only index over Project / Zone / Block master data.

Every entity is resolvable by id (so edit-mode hydration can still show an
inactive zone), but only Active entities are *offered* as choices.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from listing_wizard.schemas.labels import HierarchyLevel, fold_label
from listing_wizard.schemas.models import HierarchyEntity


def is_active(entity: HierarchyEntity) -> bool:
    return entity.status.strip().lower() == "active"


@dataclass(frozen=True)
class HierarchyIndex:
    by_id: dict[HierarchyLevel, dict[str, HierarchyEntity]] = field(default_factory=dict)
    children: dict[HierarchyLevel, dict[str, tuple[HierarchyEntity, ...]]] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        projects: Iterable[HierarchyEntity] = (),
        zones: Iterable[HierarchyEntity] = (),
        blocks: Iterable[HierarchyEntity] = (),
    ) -> HierarchyIndex:
        by_id: dict[HierarchyLevel, dict[str, HierarchyEntity]] = {}
        children: dict[HierarchyLevel, dict[str, tuple[HierarchyEntity, ...]]] = {}
        for level, items in (
            (HierarchyLevel.project, projects),
            (HierarchyLevel.zone, zones),
            (HierarchyLevel.block, blocks),
        ):
            table: dict[str, HierarchyEntity] = {}
            grouped: dict[str, list[HierarchyEntity]] = {}
            for ent in items:
                # First occurrence wins on duplicate ids
                table.setdefault(ent.id, ent)
                if ent.parent_id and table[ent.id] is ent:
                    grouped.setdefault(ent.parent_id, []).append(ent)
            by_id[level] = table
            children[level] = {k: tuple(v) for k, v in grouped.items()}
        return cls(by_id=by_id, children=children)

    # ---------- lookups ----------

    def get(self, level: HierarchyLevel, entity_id: str | None) -> HierarchyEntity | None:
        if not entity_id:
            return None
        return self.by_id.get(level, {}).get(entity_id)

    def projects(self) -> tuple[HierarchyEntity, ...]:
        return tuple(p for p in self.by_id.get(HierarchyLevel.project, {}).values() if is_active(p))

    def zones_of(self, project_id: str | None) -> tuple[HierarchyEntity, ...]:
        if not project_id:
            return ()
        return tuple(z for z in self.children.get(HierarchyLevel.zone, {}).get(project_id, ()) if is_active(z))

    def blocks_of(self, zone_id: str | None) -> tuple[HierarchyEntity, ...]:
        if not zone_id:
            return ()
        return tuple(b for b in self.children.get(HierarchyLevel.block, {}).get(zone_id, ()) if is_active(b))

    def find_by_name(
        self,
        level: HierarchyLevel,
        name: str,
        *,
        lang: str = "en",
        parent_id: str | None = None,
    ) -> HierarchyEntity | None:
        """
        First entity whose `name[lang]` equals `name` (case/whitespace-insensitive).

        With `parent_id`, entities under that parent are tried first, then the
        whole level.
        """
        key = fold_label(name or "")
        if not key:
            return None
        pool = list(self.by_id.get(level, {}).values())
        if parent_id:
            pool.sort(key=lambda e: e.parent_id != parent_id)
        for ent in pool:
            if fold_label(getattr(ent.name, lang)) == key:
                return ent
        return None

    def __len__(self) -> int:
        return sum(len(t) for t in self.by_id.values())
