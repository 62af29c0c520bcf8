# listing_wizard/core/transform/__init__.py
from .coerce import clean_num, cut_date
from .to_form import to_form
from .to_wire import resolve_status, to_wire, to_wire_dict

__all__ = [
    "to_form",
    "to_wire",
    "to_wire_dict",
    "resolve_status",
    "clean_num",
    "cut_date",
]
