"""
Configuration & Constants
=========================
This module serves as the central registry for storage keys and the
physical constants of the mixture calculation.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (density, percentages, timeouts)
   scattered throughout the model and the store.
2. Compatibility: The storage keys are part of the on-disk format and must
   never change silently, so they live in one place.

Exports:
    STORAGE_KEY (str): Key of the current (v2) state snapshot.
    LEGACY_STORAGE_KEY (str): Key of the v1 snapshot migrated on load.
    DENSITY_G_PER_ML (int): Density of the poured mixture.
    MIX_PERCENTAGES (dict): Share of each component in the total mass.
    UNDO_TIMEOUT_MS (int): Lifetime of the undo buffer after delete/clear.
"""
from typing import Dict

STORAGE_KEY: str = "poly_concrete_state_v2"
LEGACY_STORAGE_KEY: str = "poly_concrete_state_v1"

# g/ml
DENSITY_G_PER_ML: int = 2

# Order matters: putty is last and absorbs the rounding remainder
MIX_PERCENTAGES: Dict[str, float] = {
    "water": 0.2,
    "bond": 0.05,
    "white_cement": 0.15,
    "putty": 0.6,
}

UNDO_TIMEOUT_MS: int = 3500
