# listing_wizard/tools/__init__.py
"""
Listing wizard tools package

  - HttpListingApi / HttpMediaUploader   (from .http_api)
  - open_wizard / hydrate_draft          (from .wizard_session)
"""

from __future__ import annotations

from .http_api import HttpListingApi, HttpMediaUploader
from .wizard_session import hydrate_draft, open_wizard

__all__ = ["HttpListingApi", "HttpMediaUploader", "open_wizard", "hydrate_draft"]
