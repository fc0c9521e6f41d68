"""
Signal providers module.
"""

from .base import Signal, SignalProvider
from .static import CallableProvider, DelayedProvider, StaticProvider

__all__ = [
    "Signal",
    "SignalProvider",
    "StaticProvider",
    "CallableProvider",
    "DelayedProvider",
]
