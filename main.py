# main.py
"""
Entry Point: listing wizard payload tools

Purpose
-------
Inspect how listing records move between the wire schema and the wizard form:
  1) to-form:   wire record JSON → hydrated ListingDraft (hierarchy restored
                against master data when --masters is given).
  2) to-wire:   ListingDraft JSON → create/update payload.
  3) roundtrip: wire record → form → wire → form; reports whether it is stable.

Usage
-----
    python main.py to-form data/sample/record.json --masters data/sample/masters.json
    python main.py to-wire draft.json --status Published
    python main.py roundtrip data/sample/record.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from listing_wizard.core.errors import ListingWizardError
from listing_wizard.core.hierarchy import MasterData
from listing_wizard.core.transform import to_form, to_wire_dict
from listing_wizard.inputs.settings import WizardSettings, load_settings
from listing_wizard.schemas.models import ListingDraft
from listing_wizard.tools.wizard_session import hydrate_draft


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Convert listing records between wire and form shapes.")
    p.add_argument("--config", type=str, default=None, help="Path to settings JSON (optional).")
    sub = p.add_subparsers(dest="command", required=True)

    tf = sub.add_parser("to-form", help="Wire record → wizard draft.")
    tf.add_argument("record", type=str, help="Path to a wire record JSON file.")
    tf.add_argument("--masters", type=str, default=None, help="Master data JSON (projects/zones/blocks/options).")

    tw = sub.add_parser("to-wire", help="Wizard draft → wire payload.")
    tw.add_argument("draft", type=str, help="Path to a ListingDraft JSON file.")
    tw.add_argument("--status", type=str, default=None, help="Draft | Pending | Published (default: draft status).")

    rt = sub.add_parser("roundtrip", help="Check wire → form → wire → form stability.")
    rt.add_argument("record", type=str, help="Path to a wire record JSON file.")
    return p.parse_args(argv)


def _read_json(path: str) -> Any:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _print_json(data: Any) -> None:
    print(json.dumps(data, ensure_ascii=False, indent=2))


def cmd_to_form(args: argparse.Namespace, settings: WizardSettings) -> int:
    record = _read_json(args.record)
    if args.masters:
        draft = hydrate_draft(record, MasterData.from_raw(_read_json(args.masters)), settings=settings)
    else:
        draft = to_form(record, settings=settings)
    _print_json(draft.model_dump(mode="json"))
    return 0


def cmd_to_wire(args: argparse.Namespace, settings: WizardSettings) -> int:
    draft = ListingDraft.model_validate(_read_json(args.draft))
    _print_json(to_wire_dict(draft, args.status, settings=settings))
    return 0


def cmd_roundtrip(args: argparse.Namespace, settings: WizardSettings) -> int:
    first = to_form(_read_json(args.record), settings=settings)
    second = to_form(to_wire_dict(first, settings=settings), settings=settings)
    stable = to_wire_dict(first, settings=settings) == to_wire_dict(second, settings=settings)
    print(f"roundtrip: {'stable' if stable else 'UNSTABLE'} ({first.summary()})")
    return 0 if stable else 1


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = load_settings(args.config)

    handlers = {
        "to-form": cmd_to_form,
        "to-wire": cmd_to_wire,
        "roundtrip": cmd_roundtrip,
    }
    try:
        return handlers[args.command](args, settings)
    except ListingWizardError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
