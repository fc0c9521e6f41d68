"""
Data models for the fingerprint engine.
"""

from .fingerprint import SignalComponent, VisitorFingerprint

__all__ = ["SignalComponent", "VisitorFingerprint"]
