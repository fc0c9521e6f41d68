"""
Shannon entropy of digest strings.

Used to re-derive signal weights: a digest whose characters are spread
more evenly is treated as more discriminating between devices.
"""

import math
from collections import Counter
from typing import Dict, Mapping

from .exceptions import DegenerateEntropyError


def entropy(text: str) -> float:
    """
    Base-2 Shannon entropy of the character distribution of ``text``.

    Computed over the string's own alphabet, so a constant string is 0.0
    and ``k`` equally frequent characters give ``log2(k)``.
    """
    length = len(text)
    if length == 0:
        return 0.0

    result = 0.0
    for count in Counter(text).values():
        p = count / length
        result -= p * math.log2(p)

    return result


def entropy_shares(values: Mapping[str, str]) -> Dict[str, float]:
    """
    Entropy of each named digest as a share of the total.

    Raises:
        DegenerateEntropyError: if the total entropy is zero
    """
    entropies = {name: entropy(value) for name, value in values.items()}
    total = sum(entropies.values())

    if total == 0:
        raise DegenerateEntropyError(
            f"Total entropy is zero across {len(entropies)} signal(s); "
            "cannot derive weights"
        )

    return {name: value / total for name, value in entropies.items()}
