"""
Mixture Proportions
===================
Splits the total poured mass into the four mixture components.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
import math
from typing import Dict

import numpy as np

from polyconcrete.config import MIX_PERCENTAGES
from polyconcrete.model.molds import Number

_COMPONENTS = tuple(MIX_PERCENTAGES.keys())
_FRACTIONS = np.array([MIX_PERCENTAGES[c] for c in _COMPONENTS], dtype=np.float64)


@dataclass(frozen=True)
class MixtureResult:
    """Component masses in grams. Always sums to the input total."""
    water: Number = 0
    bond: Number = 0
    white_cement: Number = 0
    putty: Number = 0

    @property
    def total(self) -> Number:
        return self.water + self.bond + self.white_cement + self.putty

    def to_dict(self) -> Dict[str, Number]:
        return asdict(self)


def compute_mixture(total: Number) -> MixtureResult:
    """
    Compute the component masses for `total` grams of mixture.

    Each component is rounded half-up independently, so the rounded parts may
    not add back up to `total`. The whole difference goes to putty.

    Examples:
        >>> compute_mixture(1000)
        MixtureResult(water=200, bond=50, white_cement=150, putty=600)
        >>> compute_mixture(7)
        MixtureResult(water=1, bond=0, white_cement=1, putty=5)
    """
    if total <= 0:
        return MixtureResult()

    if isinstance(total, float) and total.is_integer():
        total = int(total)

    # floor(x + 0.5) is round-half-up for the non-negative values seen here.
    # Python ints keep totals beyond the int64 range exact.
    raw = float(total) * _FRACTIONS + 0.5
    parts = {name: math.floor(value) for name, value in zip(_COMPONENTS, raw.tolist())}

    diff = total - sum(parts.values())
    if diff != 0:
        parts["putty"] += diff

    return MixtureResult(**parts)
