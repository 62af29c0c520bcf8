# tests/unit/test_hierarchy_index.py
from __future__ import annotations

from listing_wizard.core.hierarchy import HierarchyIndex
from listing_wizard.schemas.labels import HierarchyLevel
from tests.utils import make_block, make_project, make_zone


def test_active_lists_exclude_inactive(index):
    assert [p.id for p in index.projects()] == ["p-eco", "p-vin"]
    assert [z.id for z in index.zones_of("p-eco")] == ["z-a", "z-b"]
    # Zone C is Inactive
    assert index.zones_of("p-vin") == ()
    assert [b.id for b in index.blocks_of("z-a")] == ["b-5", "b-6"]


def test_get_resolves_inactive_entities(index):
    zone = index.get(HierarchyLevel.zone, "z-c")
    assert zone is not None
    assert zone.status == "Inactive"
    assert index.get(HierarchyLevel.zone, "") is None
    assert index.get(HierarchyLevel.block, "missing") is None


def test_empty_parent_yields_no_children(index):
    assert index.zones_of("") == ()
    assert index.blocks_of(None) == ()


def test_find_by_name_is_case_and_space_insensitive(index):
    block = index.find_by_name(HierarchyLevel.block, "  block   5 ")
    assert block is not None and block.id == "b-5"
    vi = index.find_by_name(HierarchyLevel.zone, "khu b", lang="vi")
    assert vi is not None and vi.id == "z-b"
    assert index.find_by_name(HierarchyLevel.block, "") is None


def test_find_by_name_prefers_parent_scope():
    idx = HierarchyIndex.build(
        [make_project()],
        [make_zone("z-a"), make_zone("z-b", en="Zone B", vi="Khu B")],
        [make_block("b-1", "z-a", "Tower", "Tháp"), make_block("b-2", "z-b", "Tower", "Tháp")],
    )
    hit = idx.find_by_name(HierarchyLevel.block, "Tower", parent_id="z-b")
    assert hit is not None and hit.id == "b-2"


def test_duplicate_ids_keep_first_occurrence():
    idx = HierarchyIndex.build([make_project("p1", "First"), make_project("p1", "Second")])
    project = idx.get(HierarchyLevel.project, "p1")
    assert project is not None and project.name.en == "First"
    assert len(idx) == 1
