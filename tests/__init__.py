# tests/__init__.py
"""
Expose common test utilities so tests can import directly:
    from tests import make_wire_record, make_draft, make_index
"""

from .utils import make_draft, make_index, make_masters, make_wire_record

__all__ = ["make_wire_record", "make_draft", "make_index", "make_masters"]
