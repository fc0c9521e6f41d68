"""
Weight table for signal aggregation.

Each signal name maps to a non-negative weight. After every public
mutation the weights sum to 1. The default table is used as-is until the
first mutation and does not have to be normalized.
"""

import logging
import math
import threading
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .entropy import entropy_shares
from .exceptions import InvalidWeightError

logger = logging.getLogger(__name__)

# Default influence of each built-in host signal
DEFAULT_WEIGHTS: Dict[str, float] = {
    "fonts": 0.20,
    "gpu": 0.20,
    "audio": 0.15,
    "math": 0.15,
    "platform": 0.10,
    "hardware": 0.10,
    "locale": 0.10,
}

# Tolerance for the sum-to-one invariant
NORMALIZATION_TOLERANCE = 1e-9


def repeat_count(weight: float) -> int:
    """
    Number of times a signal digest is repeated in the combined string.

    Weights below 0.01 collapse to zero repetitions, so such a signal
    contributes nothing to the identifier for that run.
    """
    return max(0, math.floor(weight * 100))


def validate_weight(name: str, weight) -> Optional[str]:
    """
    Check a single weight value.

    Returns an error message if invalid, None if OK.
    """
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        return f"{name}={weight!r} is not a number"
    if math.isnan(weight) or math.isinf(weight):
        return f"{name}={weight} is not finite"
    if weight < 0:
        return f"{name}={weight} must be non-negative"
    return None


def _normalize(weights: Dict[str, float]) -> Dict[str, float]:
    # Scale by the largest weight first so large finite weights cannot
    # overflow the sum to inf.
    largest = max(weights.values(), default=0.0)
    if largest <= 0:
        raise InvalidWeightError(
            f"Weights sum to {sum(weights.values())}; cannot normalize a zero total"
        )
    scaled = {name: value / largest for name, value in weights.items()}
    total = sum(scaled.values())
    return {name: value / total for name, value in scaled.items()}


class WeightTable:
    """
    Mutable signal-name -> weight mapping owned by one engine.

    All reads and writes go through a lock so an aggregation run can take
    one consistent snapshot while another thread updates the table.
    """

    def __init__(self, initial: Optional[Mapping[str, float]] = None):
        self._lock = threading.RLock()
        weights = dict(DEFAULT_WEIGHTS if initial is None else initial)

        for name, value in weights.items():
            error = validate_weight(name, value)
            if error:
                raise InvalidWeightError(f"Invalid initial weight: {error}")

        self._weights: Dict[str, float] = {
            name: float(value) for name, value in weights.items()
        }

    def get_weights(self) -> Dict[str, float]:
        """Return a copy of the current weights."""
        with self._lock:
            return dict(self._weights)

    def snapshot(self) -> Dict[str, float]:
        """Consistent copy of the table for one aggregation run."""
        return self.get_weights()

    def names(self) -> List[str]:
        with self._lock:
            return list(self._weights.keys())

    def total(self) -> float:
        with self._lock:
            return sum(self._weights.values())

    def set_weights(self, partial: Mapping[str, float]) -> None:
        """
        Merge ``partial`` into the table and renormalize every entry.

        Keys missing from ``partial`` keep their previous weight before
        renormalization, so their proportions to each other are preserved.

        Raises:
            InvalidWeightError: for a negative, non-finite or non-numeric
                weight, or when the merged total is zero. The table is left
                unchanged.
        """
        for name, value in partial.items():
            error = validate_weight(name, value)
            if error:
                raise InvalidWeightError(error)

        with self._lock:
            merged = dict(self._weights)
            merged.update({name: float(value) for name, value in partial.items()})
            self._weights = _normalize(merged)
            logger.info(f"Weights updated: {self._format(self._weights)}")

    def adjust(self, digests: Sequence[Tuple[str, str]]) -> None:
        """
        Re-derive weights from the entropy of each signal's digest.

        Every listed signal gets its share of the subset's total entropy,
        then the whole table is renormalized. Signals not listed keep their
        relative proportions to each other.

        Raises:
            DegenerateEntropyError: if the total entropy of the listed
                digests is zero. The table is left unchanged.
            ValueError: if a signal name is listed more than once.
        """
        names = [name for name, _ in digests]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate signal names: {', '.join(duplicates)}")

        shares = entropy_shares(dict(digests))

        with self._lock:
            merged = dict(self._weights)
            merged.update(shares)
            self._weights = _normalize(merged)
            logger.info(
                f"Weights adjusted from entropy of {len(shares)} signal(s): "
                f"{self._format(self._weights)}"
            )

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._weights

    def __len__(self) -> int:
        with self._lock:
            return len(self._weights)

    def __repr__(self) -> str:
        return f"WeightTable({self._format(self.get_weights())})"

    @staticmethod
    def _format(weights: Mapping[str, float]) -> str:
        return ", ".join(f"{name}={value:.3f}" for name, value in weights.items())


def restrict(weights: Mapping[str, float], names: Iterable[str]) -> Dict[str, float]:
    """Default weights for the given signal names; unknown names get 0."""
    return {name: weights.get(name, 0.0) for name in names}
