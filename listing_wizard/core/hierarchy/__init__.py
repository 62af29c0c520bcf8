# listing_wizard/core/hierarchy/__init__.py
from .index import HierarchyIndex, is_active
from .masters import (
    MasterData,
    default_currency,
    default_unit,
    filter_active,
    parse_entities,
    parse_options,
)
from .selector import HierarchySelector

__all__ = [
    "HierarchyIndex",
    "HierarchySelector",
    "MasterData",
    "is_active",
    "filter_active",
    "parse_entities",
    "parse_options",
    "default_currency",
    "default_unit",
]
