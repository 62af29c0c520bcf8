# tests/unit/test_log.py
from __future__ import annotations

import logging

from listing_wizard.core import log


def test_loggers_live_under_the_package_namespace():
    assert log.get_logger().name == "listing_wizard"
    assert log.get_logger("listing_wizard.core.errors").name == "listing_wizard.core.errors"
    assert log.get_logger("tests.something").name == "listing_wizard.tests.something"


def test_debug_flag(monkeypatch):
    monkeypatch.setenv("LISTING_WIZARD_DEBUG", "on")
    assert log.debug_enabled()
    monkeypatch.setenv("LISTING_WIZARD_DEBUG", "0")
    assert not log.debug_enabled()


def test_debug_attaches_rotating_handler_once(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LISTING_WIZARD_DEBUG", "1")
    monkeypatch.setattr(log, "_FILE_HANDLER_ATTACHED", False)
    root = logging.getLogger(log.ROOT_LOGGER_NAME)
    before = list(root.handlers)
    old_level = root.level
    try:
        log.get_logger("a")
        log.get_logger("b")
        added = [h for h in root.handlers if h not in before]
        assert len(added) <= 1
        assert (tmp_path / "logs").is_dir()
    finally:
        for h in list(root.handlers):
            if h not in before:
                root.removeHandler(h)
                h.close()
        root.setLevel(old_level)
