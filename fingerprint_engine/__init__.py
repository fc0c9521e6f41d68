"""
Fingerprint Engine - weighted device identifier aggregation.
"""

from .digest import digest, DIGEST_LENGTH
from .engine import FingerprintEngine
from .entropy import entropy
from .exceptions import DegenerateEntropyError, FingerprintError, InvalidWeightError
from .weights import WeightTable, repeat_count

__all__ = [
    "FingerprintEngine",
    "WeightTable",
    "digest",
    "entropy",
    "repeat_count",
    "DIGEST_LENGTH",
    "FingerprintError",
    "InvalidWeightError",
    "DegenerateEntropyError",
]
