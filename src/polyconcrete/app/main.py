"""
Run with: python -m polyconcrete
"""
from __future__ import annotations

import sys
from typing import Optional, TextIO

from polyconcrete.app.application import create_app
from polyconcrete.app.state import MoldStore
from polyconcrete.app.storage import SettingsStorage
from polyconcrete.logging_config import setup_logging


def print_summary(store: MoldStore, out: Optional[TextIO] = None) -> None:
    """Print the molds, the totals and the mixture split (to stdout by default)."""
    if out is None:
        out = sys.stdout
    molds = store.molds
    if not molds:
        print("No molds saved.", file=out)
    for mold in molds:
        marker = "x" if mold.active else " "
        print(f"[{marker}] {mold.name:<20} {mold.volume_ml:>10} ml", file=out)

    print(f"Total volume: {store.total_volume} ml", file=out)
    print(f"Total mass:   {store.total_mass} g", file=out)
    for component, grams in store.mixture.to_dict().items():
        print(f"  {component:<13} {grams:>8} g", file=out)


def main() -> int:
    """Main entry point for the application."""
    setup_logging()
    create_app()
    store = MoldStore(SettingsStorage())
    store.load()
    print_summary(store)
    return 0


if __name__ == "__main__":
    sys.exit(main())
