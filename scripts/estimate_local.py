#!/usr/bin/env python3
"""
Interactive local estimator harness (no HTTP, no browser).

Usage:
  python3 scripts/estimate_local.py

What it does:
- Keeps one EstimatorState for the session and walks the wizard steps
- Re-prints the live quote after every change (subscriber callback)
- Submits through the same SubmitQuoteUseCase the API uses (MockCrm in dev)
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from estimator.application.use_cases.estimator_session import EstimatorState
from estimator.application.utils.formatting import format_currency, format_range
from estimator.domain.entities.submission import ContactInfo
from estimator.wiring.dependencies import get_catalog, get_submit_quote_use_case, new_estimator_state


HELP = """Commands:
  toggle <service_id>                 select / deselect a service
  industry <id> | scale <id>          scope for all services
  level <service_id> <level_id>       standard | premium | luxury
  caps <service_id> <id> [<id> ...]   set capabilities for a service
  addons <service_id> <id> [...]      set add-ons for a service
  video on|off                        walkthrough video preference
  next | back                         move through the wizard
  submit <email> <first> [last]       send the quote (contact step)
  catalog | quote | reset | help | quit"""


def _print_quote(state: EstimatorState) -> None:
    quote = state.quote
    print("-" * 60)
    print(f"step: {state.current_step} ({state.progress_percentage:.0f}%)")
    for line in quote.services:
        print(f"  {line.service_name}: {format_currency(line.subtotal)}")
        for item in line.breakdown:
            label = "included" if item.included else format_currency(item.amount)
            print(f"    + {item.name}: {label}")
    for bundle in quote.applied_bundles:
        print(f"  bundle: {bundle.name} (-{format_currency(bundle.savings)})")
    if quote.total_discount:
        print(f"  discount: -{format_currency(quote.total_discount)}")
    print(f"  total: {format_currency(quote.final_total)}  range: {format_range(quote.final_total_range)}")
    print(f"  typical agency: {format_range(quote.anchor_range)}")
    print("-" * 60)


def _print_catalog() -> None:
    catalog = get_catalog().catalog
    print("services:   " + ", ".join(catalog.services))
    print("industries: " + ", ".join(catalog.industries))
    print("scales:     " + ", ".join(catalog.scales))
    print("levels:     " + ", ".join(catalog.service_levels))
    print("caps:       " + ", ".join(catalog.capabilities))
    print("addons:     " + ", ".join(catalog.addons))


def _handle(state: EstimatorState, parts: list[str]) -> bool:
    cmd, args = parts[0].lower(), parts[1:]

    if cmd in {"quit", "exit", "/quit"}:
        return False
    if cmd == "help":
        print(HELP)
    elif cmd == "catalog":
        _print_catalog()
    elif cmd == "quote":
        _print_quote(state)
    elif cmd == "toggle" and args:
        state.toggle_service(args[0])
    elif cmd == "industry" and args:
        state.update_common_config(industry=args[0])
    elif cmd == "scale" and args:
        state.update_common_config(scale=args[0])
    elif cmd == "level" and len(args) == 2:
        state.update_service_config(args[0], service_level=args[1])
    elif cmd == "caps" and args:
        state.update_service_config(args[0], capabilities=args[1:])
    elif cmd == "addons" and args:
        state.update_service_config(args[0], addons=args[1:])
    elif cmd == "video" and args:
        state.update_preferences(wants_video=args[0].lower() in {"on", "yes", "true"})
    elif cmd == "next":
        if not state.next_step():
            print(f"Step '{state.current_step}' is not complete yet.")
    elif cmd == "back":
        state.previous_step()
    elif cmd == "submit" and len(args) >= 2:
        if state.current_step != "contact":
            print("Finish the review step first.")
            return True
        contact = ContactInfo.normalize(email=args[0], first_name=args[1], last_name=" ".join(args[2:]))
        result = get_submit_quote_use_case().execute(contact, state.quote, state.snapshot())
        if result.success:
            print(f"Submitted. contact_id={result.contact_id}")
            state.reset()
        else:
            print(f"Submission failed: {result.error} (saved_for_retry={result.saved_for_retry})")
    elif cmd == "reset":
        state.reset()
    else:
        print("Unknown command. Type 'help'.")
    return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Walk the service estimator locally.")
    parser.add_argument("--quiet", action="store_true", help="do not print the quote after every change")
    opts = parser.parse_args()

    state = new_estimator_state()
    if not opts.quiet:
        state.subscribe(_print_quote)

    print("\nLocal Estimator Harness")
    print(HELP)
    while True:
        try:
            raw = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not raw:
            continue
        if not _handle(state, raw.split()):
            break


if __name__ == "__main__":
    main()
