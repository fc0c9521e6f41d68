"""
Fingerprint models describing one aggregation run.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional


@dataclass
class SignalComponent:
    """Contribution of a single signal to the visitor identifier."""
    name: str
    digest: str
    weight: float
    repeat_count: int
    entropy: float
    empty: bool = False

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "digest": self.digest,
            "weight": round(self.weight, 6),
            "repeat_count": self.repeat_count,
            "entropy": round(self.entropy, 6),
            "empty": self.empty,
        }


@dataclass
class VisitorFingerprint:
    """Visitor identifier together with the components it was built from."""
    visitor_id: str
    components: List[SignalComponent]
    timestamp: datetime
    # Weight snapshot used for this run
    weights: Dict[str, float] = field(default_factory=dict)

    def component(self, name: str) -> Optional[SignalComponent]:
        """Get the component for a signal name, if it was sampled."""
        for component in self.components:
            if component.name == name:
                return component
        return None

    @property
    def signals_sampled(self) -> int:
        return len(self.components)

    @property
    def signals_empty(self) -> int:
        return sum(1 for c in self.components if c.empty)

    def to_dict(self) -> dict:
        return {
            "visitor_id": self.visitor_id,
            "components": [c.to_dict() for c in self.components],
            "weights": {k: round(v, 6) for k, v in self.weights.items()},
            "signals_sampled": self.signals_sampled,
            "signals_empty": self.signals_empty,
            "timestamp": self.timestamp.isoformat() + "Z",
        }
