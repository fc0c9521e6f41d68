"""
Exceptions raised by the fingerprint engine.

Provider incapability is not represented here: a provider that cannot
sample returns an empty string instead of raising.
"""


class FingerprintError(Exception):
    """Base class for fingerprint engine errors."""


class InvalidWeightError(FingerprintError, ValueError):
    """A weight update was rejected; the weight table is unchanged."""


class DegenerateEntropyError(FingerprintError, ArithmeticError):
    """Total entropy of the reweighting subset is zero; weights are unchanged."""
