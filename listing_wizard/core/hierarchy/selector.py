# listing_wizard/core/hierarchy/selector.py
"""
Cascading Project → Zone → Block selection.

Reducer-style: every method takes a HierarchySelection and returns a new one.
The more specific level is authoritative when the user selects it directly:
selecting a zone overwrites the project, selecting a block overwrites both.

Invariant after every transition: a non-empty zone_id belongs to project_id
and a non-empty block_id belongs to zone_id.
"""

from __future__ import annotations

from dataclasses import dataclass

from listing_wizard.core.errors import UnknownHierarchyEntityError
from listing_wizard.core.hierarchy.index import HierarchyIndex, is_active
from listing_wizard.core.log import get_logger
from listing_wizard.schemas.labels import HierarchyLevel
from listing_wizard.schemas.models import HierarchyEntity, HierarchySelection, LocalizedValue

logger = get_logger(__name__)

_EMPTY_NAME = LocalizedValue()


def _require(index: HierarchyIndex, level: HierarchyLevel, entity_id: str) -> HierarchyEntity:
    ent = index.get(level, entity_id)
    if ent is None:
        raise UnknownHierarchyEntityError(f"Unknown {level.name} id: {entity_id!r}")
    if not is_active(ent):
        raise UnknownHierarchyEntityError(f"{level.name.capitalize()} {entity_id!r} is not active")
    return ent


@dataclass(frozen=True)
class HierarchySelector:
    index: HierarchyIndex

    # ---------- user-driven transitions ----------

    def select_project(self, sel: HierarchySelection, project_id: str) -> HierarchySelection:
        if not project_id:
            return self.clear(sel, HierarchyLevel.project)
        project = _require(self.index, HierarchyLevel.project, project_id)
        return HierarchySelection(project_id=project.id, project_name=project.name)

    def select_zone(self, sel: HierarchySelection, zone_id: str) -> HierarchySelection:
        if not zone_id:
            return self.clear(sel, HierarchyLevel.zone)
        zone = _require(self.index, HierarchyLevel.zone, zone_id)
        project = self.index.get(HierarchyLevel.project, zone.parent_id)
        if project is None:
            raise UnknownHierarchyEntityError(f"Zone {zone.id!r} points at unknown project {zone.parent_id!r}")
        return HierarchySelection(
            project_id=project.id,
            project_name=project.name,
            zone_id=zone.id,
            zone_name=zone.name,
        )

    def select_block(self, sel: HierarchySelection, block_id: str) -> HierarchySelection:
        if not block_id:
            return self.clear(sel, HierarchyLevel.block)
        block = _require(self.index, HierarchyLevel.block, block_id)
        zone = self.index.get(HierarchyLevel.zone, block.parent_id)
        if zone is None:
            raise UnknownHierarchyEntityError(f"Block {block.id!r} points at unknown zone {block.parent_id!r}")
        project = self.index.get(HierarchyLevel.project, zone.parent_id)
        if project is None:
            raise UnknownHierarchyEntityError(f"Zone {zone.id!r} points at unknown project {zone.parent_id!r}")
        return HierarchySelection(
            project_id=project.id,
            project_name=project.name,
            zone_id=zone.id,
            zone_name=zone.name,
            block_id=block.id,
            block_name=block.name,
        )

    def clear(self, sel: HierarchySelection, level: HierarchyLevel) -> HierarchySelection:
        updates: dict[str, object] = {"block_id": "", "block_name": _EMPTY_NAME}
        if level <= HierarchyLevel.zone:
            updates.update(zone_id="", zone_name=_EMPTY_NAME)
        if level <= HierarchyLevel.project:
            updates.update(project_id="", project_name=_EMPTY_NAME)
        return sel.model_copy(update=updates)

    # ---------- visible option lists ----------

    def visible_zones(self, sel: HierarchySelection) -> tuple[HierarchyEntity, ...]:
        return self.index.zones_of(sel.project_id)

    def visible_blocks(self, sel: HierarchySelection) -> tuple[HierarchyEntity, ...]:
        return self.index.blocks_of(sel.zone_id)

    # ---------- consistency ----------

    def reconcile(self, sel: HierarchySelection) -> HierarchySelection:
        """Drop any level that vanished or no longer sits under its selected parent."""
        out = sel
        if out.project_id and self.index.get(HierarchyLevel.project, out.project_id) is None:
            logger.info("project %s vanished from master data; clearing selection", out.project_id)
            return self.clear(out, HierarchyLevel.project)

        if out.zone_id:
            zone = self.index.get(HierarchyLevel.zone, out.zone_id)
            if zone is None or zone.parent_id != out.project_id:
                logger.info("zone %s is not under project %s; clearing zone", out.zone_id, out.project_id)
                return self.clear(out, HierarchyLevel.zone)

        if out.block_id:
            block = self.index.get(HierarchyLevel.block, out.block_id)
            owner = self.index.get(HierarchyLevel.zone, block.parent_id) if block is not None else None
            if owner is not None and owner.parent_id != out.project_id:
                logger.info("block %s moved out of project %s; clearing zone", out.block_id, out.project_id)
                return self.clear(out, HierarchyLevel.zone)
            if block is None or block.parent_id != out.zone_id:
                logger.info("block %s is not under zone %s; clearing block", out.block_id, out.zone_id)
                out = self.clear(out, HierarchyLevel.block)
        return out

    def is_consistent(self, sel: HierarchySelection) -> bool:
        return self.reconcile(sel) == sel

    # ---------- hydration ----------

    def _resolve(
        self,
        level: HierarchyLevel,
        entity_id: str,
        name: LocalizedValue,
        parent_id: str | None,
    ) -> HierarchyEntity | None:
        ent = self.index.get(level, entity_id)
        if ent is not None:
            return ent
        for lang in ("en", "vi"):
            text = getattr(name, lang)
            if text:
                ent = self.index.find_by_name(level, text, lang=lang, parent_id=parent_id)
                if ent is not None:
                    logger.debug("restored %s %r by %s name", level.name, text, lang)
                    return ent
        return None

    def restore(self, sel: HierarchySelection) -> HierarchySelection:
        """
        Edit-mode hydration from ids-or-names.

        Each level resolves by id, then by name.en, then by name.vi (scoped to the
        resolved parent first). Empty ancestors are filled from resolved
        descendants, cached names are refreshed from master data, and the result
        goes through `reconcile`. A level that cannot be resolved keeps its cached
        name with an empty id.
        """
        project = self._resolve(HierarchyLevel.project, sel.project_id, sel.project_name, None)
        zone = self._resolve(
            HierarchyLevel.zone, sel.zone_id, sel.zone_name, project.id if project is not None else None
        )
        block = self._resolve(
            HierarchyLevel.block, sel.block_id, sel.block_name, zone.id if zone is not None else None
        )

        if block is not None and zone is None:
            zone = self.index.get(HierarchyLevel.zone, block.parent_id)
        if zone is not None and project is None:
            project = self.index.get(HierarchyLevel.project, zone.parent_id)

        restored = HierarchySelection(
            project_id=project.id if project is not None else "",
            project_name=project.name if project is not None else sel.project_name,
            zone_id=zone.id if zone is not None else "",
            zone_name=zone.name if zone is not None else sel.zone_name,
            block_id=block.id if block is not None else "",
            block_name=block.name if block is not None else sel.block_name,
        )
        for level, rid, cached in (
            (HierarchyLevel.project, restored.project_id, sel.project_name),
            (HierarchyLevel.zone, restored.zone_id, sel.zone_name),
            (HierarchyLevel.block, restored.block_id, sel.block_name),
        ):
            if not rid and not cached.is_empty():
                logger.info("%s %r not found in master data; keeping cached name", level.name, str(cached))
        return self.reconcile(restored)
