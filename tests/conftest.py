# tests/conftest.py
from __future__ import annotations

from datetime import date

import pytest

from listing_wizard.core.hierarchy import HierarchySelector
from listing_wizard.core.wizard import WizardController
from listing_wizard.inputs.settings import WizardSettings
from tests.utils import (
    DEFAULT_TODAY_ISO,
    FakeListingApi,
    FakeUploader,
    make_index,
    make_masters,
    make_wire_record,
)


# -------- Environment isolation --------
@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Settings env overrides must not leak in from the developer's shell."""
    for suffix in ("API_BASE_URL", "TIMEOUT_S", "LANGUAGE", "DEBUG"):
        monkeypatch.delenv(f"LISTING_WIZARD_{suffix}", raising=False)
    yield


# -------- Domain fixtures --------
@pytest.fixture
def index():
    return make_index()


@pytest.fixture
def selector(index):
    return HierarchySelector(index)


@pytest.fixture
def masters():
    return make_masters()


@pytest.fixture
def wire_record():
    return make_wire_record()


@pytest.fixture
def settings():
    return WizardSettings()


@pytest.fixture
def today() -> date:
    return date.fromisoformat(DEFAULT_TODAY_ISO)


# -------- Collaborators --------
@pytest.fixture
def fake_api():
    return FakeListingApi()


@pytest.fixture
def fake_uploader():
    return FakeUploader()


@pytest.fixture
def controller_factory(fake_api, fake_uploader, masters, settings, today):
    """
    Callable factory for a WizardController wired to the fakes.

    Usage:
        ctl = controller_factory()                 # create mode
        ctl = controller_factory(draft=some_draft) # edit mode when draft.record_id is set
    """

    def _factory(**overrides):
        kwargs = dict(api=fake_api, uploader=fake_uploader, masters=masters, settings=settings, today=today)
        kwargs.update(overrides)
        return WizardController(**kwargs)

    return _factory


# -------- Pytest markers --------
def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
    config.addinivalue_line("markers", "integration: marks integration tests")
