"""
Fingerprint engine: combines signal digests into a visitor identifier.
"""

import asyncio
import logging
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .digest import digest
from .entropy import entropy
from .models.fingerprint import SignalComponent, VisitorFingerprint
from .signals.base import Signal, SignalProvider
from .signals.registry import SignalRegistry
from .weights import DEFAULT_WEIGHTS, WeightTable, repeat_count, restrict

logger = logging.getLogger(__name__)


class FingerprintEngine:
    """
    Weighted aggregation of environment signals into one identifier.

    Flow:
    1. Snapshot the weight table once
    2. Sample every provider (canonical order)
    3. Digest each raw value
    4. Repeat each digest repeat_count(weight) times
    5. Concatenate in canonical order and digest the result

    The order of the providers passed in is the canonical order. It must be
    stable between runs for identifiers to be reproducible.
    """

    def __init__(
        self,
        providers: Sequence[SignalProvider],
        weights: Optional[Mapping[str, float]] = None,
        concurrent: bool = False,
    ):
        names = [p.name for p in providers]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate signal names: {', '.join(duplicates)}")

        self.providers: List[SignalProvider] = list(providers)
        self.concurrent = concurrent

        if weights is None:
            weights = restrict(DEFAULT_WEIGHTS, names)
        self.weight_table = WeightTable(weights)

    @classmethod
    def from_config(cls, config: dict, concurrent: Optional[bool] = None) -> "FingerprintEngine":
        """Build an engine from a signals configuration dict."""
        providers, weights = SignalRegistry.load_signals_from_config(config)
        if not providers:
            logger.warning("No signals loaded! Check your configuration.")

        if concurrent is None:
            concurrent = bool(config.get("engine", {}).get("concurrent_sampling", False))
        return cls(providers, weights=weights, concurrent=concurrent)

    @classmethod
    def from_settings(cls, settings) -> "FingerprintEngine":
        """Build an engine from application settings."""
        config = settings.load_signals_config()

        # An explicitly set value (env, .env or constructor) overrides the YAML
        if "concurrent_sampling" in settings.model_fields_set:
            concurrent = settings.concurrent_sampling
        else:
            concurrent = bool(config.get("engine", {}).get("concurrent_sampling", False))
        return cls.from_config(config, concurrent=concurrent)

    @property
    def signal_names(self) -> List[str]:
        return [p.name for p in self.providers]

    # ------------------------------------------------------------------
    # Weights
    # ------------------------------------------------------------------

    def get_weights(self) -> Dict[str, float]:
        """Current weights (a copy)."""
        return self.weight_table.get_weights()

    def set_weights(self, partial: Mapping[str, float]) -> None:
        """
        Merge custom weights and renormalize.

        Raises:
            InvalidWeightError: weight table is left unchanged
        """
        self.weight_table.set_weights(partial)

    async def adjust_weights(
        self,
        signals: Optional[Sequence[Tuple[str, str]]] = None,
    ) -> None:
        """
        Re-derive weights from digest entropy.

        Args:
            signals: Ordered (name, digest) pairs. When omitted, every
                provider is sampled and digested first.

        Raises:
            DegenerateEntropyError: weight table is left unchanged
        """
        if signals is None:
            sampled = await self._sample_all()
            signals = [(s.name, digest(s.raw_value)) for s in sampled]

        self.weight_table.adjust(signals)

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    async def generate_fingerprint(self) -> VisitorFingerprint:
        """Sample all signals and build the weighted visitor fingerprint."""
        weights = self.weight_table.snapshot()
        sampled = await self._sample_all()

        components = []
        fragments = []
        for signal in sampled:
            signal_digest = digest(signal.raw_value)
            weight = weights.get(signal.name, 0.0)
            repeats = repeat_count(weight)

            fragments.append(signal_digest * repeats)
            components.append(SignalComponent(
                name=signal.name,
                digest=signal_digest,
                weight=weight,
                repeat_count=repeats,
                entropy=entropy(signal_digest),
                empty=signal.empty,
            ))
            logger.debug(
                f"Signal {signal.name}: digest={signal_digest[:12]} "
                f"weight={weight:.3f} repeats={repeats}"
                f"{' (empty)' if signal.empty else ''}"
            )

        visitor_id = digest("".join(fragments))

        empty = [c.name for c in components if c.empty]
        if empty:
            logger.info(f"Signals unavailable on this host: {', '.join(empty)}")
        logger.info(f"Generated visitor id {visitor_id[:12]}... from {len(components)} signals")

        return VisitorFingerprint(
            visitor_id=visitor_id,
            components=components,
            timestamp=datetime.utcnow(),
            weights=weights,
        )

    async def generate_visitor_id(self) -> str:
        """Sample all signals and return the visitor identifier."""
        fingerprint = await self.generate_fingerprint()
        return fingerprint.visitor_id

    async def _sample_all(self) -> List[Signal]:
        """Sample every provider; results are always in canonical order."""
        if self.concurrent:
            return list(await asyncio.gather(*(p.sample() for p in self.providers)))

        return [await p.sample() for p in self.providers]

    def __repr__(self) -> str:
        return f"FingerprintEngine(signals={self.signal_names}, concurrent={self.concurrent})"
