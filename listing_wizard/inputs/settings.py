# listing_wizard/inputs/settings.py
"""
Settings loader for the listing wizard.

Goals
-----
- File-first settings with validation via Pydantic.
- Every field has a sane default, so an empty file (or no file) is valid.
- Minimal environment-variable overrides for CI/CLI convenience.

Supported JSON shape
--------------------
{
  "api_base_url": "https://dev.placetest.in/api/v1",
  "timeout_s": 15,
  "default_language": "vi",
  "fallback_language": "en",
  "image_max_bytes": 5242880,
  "video_max_bytes": 52428800
}

A `{"wizard": {...}}` wrapper is accepted too.

Environment overrides (optional)
--------------------------------
- LISTING_WIZARD_API_BASE_URL -> api_base_url
- LISTING_WIZARD_TIMEOUT_S    -> timeout_s (float)
- LISTING_WIZARD_LANGUAGE     -> default_language ("en" | "vi")
- LISTING_WIZARD_DEBUG        -> debug (1/true/yes/on)

Public API
----------
- class SettingsLoader:
    - load(path: str | Path | None) -> WizardSettings
    - load_json(text: str) -> WizardSettings
    - with_overrides(cfg, **kwargs) -> WizardSettings (non-destructive copies)
- function load_settings(path: str | Path | None) -> WizardSettings  (convenience)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from listing_wizard.schemas.labels import Language

MB = 1024 * 1024

# ----------------------------
# Pydantic model
# ----------------------------


class WizardSettings(BaseModel):
    """Runtime options for the wizard core and its HTTP adapter."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    api_base_url: str = Field("http://localhost:8080/api/v1", description="Listing service base URL.")
    timeout_s: float = Field(15.0, gt=0, description="Per-request timeout for collaborator calls.")
    default_language: Language = Field(Language.vi, description="Language the editor opens in.")
    fallback_language: Language = Field(Language.en, description="Language read when the active side is empty.")
    default_check_in: str = "2:00 PM"
    default_check_out: str = "11:00 AM"
    image_max_bytes: int = Field(5 * MB, gt=0, description="Limit for images and floor plans.")
    video_max_bytes: int = Field(50 * MB, gt=0, description="Limit for videos.")
    debug: bool = False

    def max_bytes_for(self, kind: str) -> int:
        return self.video_max_bytes if kind == "video" else self.image_max_bytes


# ----------------------------
# Loader
# ----------------------------


@dataclass(frozen=True)
class SettingsLoader:
    """
    File-first settings loader with light env overrides.

    Default search (when path=None):
        1) ./listing_wizard.json
        2) ./config.json
        3) built-in defaults
    """

    env_prefix: str = "LISTING_WIZARD_"

    # ---------- Public API ----------

    def load(self, path: str | Path | None = None) -> WizardSettings:
        p = self._resolve_path(path)
        raw = self._read_json_file(p) if p is not None else {}
        cfg = self._parse_root(raw)
        return self._apply_env_overrides(cfg)

    def load_json(self, text: str) -> WizardSettings:
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("Settings JSON must be an object.")
        cfg = self._parse_root(raw)
        return self._apply_env_overrides(cfg)

    def with_overrides(
        self,
        cfg: WizardSettings,
        *,
        api_base_url: str | None = None,
        timeout_s: float | None = None,
        default_language: Language | str | None = None,
        debug: bool | None = None,
    ) -> WizardSettings:
        """
        Return a *new* WizardSettings with provided non-null overrides applied.
        Does not mutate the original instance.
        """
        updates: dict[str, Any] = {}
        if api_base_url is not None:
            updates["api_base_url"] = api_base_url
        if timeout_s is not None:
            updates["timeout_s"] = timeout_s
        if default_language is not None:
            updates["default_language"] = Language(default_language)
        if debug is not None:
            updates["debug"] = debug

        if not updates:
            return cfg
        return cfg.model_copy(update=updates)

    # ---------- Internals ----------

    def _resolve_path(self, path: str | Path | None) -> Path | None:
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise FileNotFoundError(f"Settings file not found: {p}")
            return p

        for candidate in (Path("listing_wizard.json"), Path("config.json")):
            if candidate.exists():
                return candidate
        return None

    def _read_json_file(self, p: Path) -> dict[str, Any]:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported settings format for {p.name}; only .json is supported.")
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Settings in {p} must be a JSON object.")
        return cast(dict[str, Any], data)

    def _parse_root(self, data: dict[str, Any]) -> WizardSettings:
        if isinstance(data.get("wizard"), dict):
            data = data["wizard"]
        try:
            return WizardSettings.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Settings validation failed:\n{e}") from e

    def _apply_env_overrides(self, cfg: WizardSettings) -> WizardSettings:
        prefix = self.env_prefix
        updates: dict[str, Any] = {}

        base = os.getenv(f"{prefix}API_BASE_URL")
        if base:
            updates["api_base_url"] = base.strip()

        timeout = os.getenv(f"{prefix}TIMEOUT_S")
        if timeout:
            try:
                value = float(timeout)
            except ValueError:
                # Ignore bad value; keep validated cfg.timeout_s
                value = 0.0
            if value > 0:
                updates["timeout_s"] = value

        lang = os.getenv(f"{prefix}LANGUAGE")
        if lang and lang.strip().lower() in {m.value for m in Language}:
            updates["default_language"] = Language(lang.strip().lower())

        debug = os.getenv(f"{prefix}DEBUG")
        if debug:
            updates["debug"] = debug.strip().lower() in {"1", "true", "yes", "on"}

        if not updates:
            return cfg
        return cfg.model_copy(update=updates)


# ----------------------------
# Convenience function
# ----------------------------


def load_settings(path: str | Path | None = None) -> WizardSettings:
    """Convenience wrapper for one-shot callers."""
    return SettingsLoader().load(path)
