"""
Signal registry for discovering and instantiating providers.
"""

import logging
from typing import Dict, List, Optional, Tuple, Type

from ..weights import DEFAULT_WEIGHTS, validate_weight
from .base import SignalProvider
from .host_probes import (
    AudioProvider,
    FontProvider,
    GpuProvider,
    HardwareProvider,
    LocaleProvider,
    MathProvider,
    PlatformProvider,
)

logger = logging.getLogger(__name__)


# Registry mapping config names to provider classes.
# Insertion order is the canonical combination order.
SIGNAL_REGISTRY: Dict[str, Type[SignalProvider]] = {
    "math": MathProvider,
    "gpu": GpuProvider,
    "audio": AudioProvider,
    "fonts": FontProvider,
    "platform": PlatformProvider,
    "hardware": HardwareProvider,
    "locale": LocaleProvider,
}

# Constructor options each provider accepts from config
PROVIDER_OPTIONS: Dict[str, Tuple[str, ...]] = {
    "fonts": ("search_dirs", "candidates"),
    "gpu": ("sysfs_root",),
    "audio": ("cards_path",),
}


class SignalRegistry:
    """
    Registry for managing signal providers.

    Provides methods to:
    - Create providers from configuration
    - Load all enabled providers with their weights
    - Get provider class by name
    """

    @staticmethod
    def get_available_signals() -> List[str]:
        """Get list of all available signal names in canonical order."""
        return list(SIGNAL_REGISTRY.keys())

    @staticmethod
    def get_provider_class(signal_name: str) -> Optional[Type[SignalProvider]]:
        """Get the provider class for a given name."""
        return SIGNAL_REGISTRY.get(signal_name)

    @staticmethod
    def _validate_weight(signal_name: str, weight) -> Optional[str]:
        """
        Validate a configured weight.

        Returns an error message if invalid, None if OK.
        """
        return validate_weight(signal_name, weight)

    @staticmethod
    def create_provider(signal_name: str, config: dict) -> Optional[SignalProvider]:
        """
        Create a provider instance from configuration.

        Args:
            signal_name: Name of the signal (e.g., 'fonts')
            config: Configuration dict with provider options

        Returns:
            SignalProvider instance or None if not found
        """
        provider_class = SIGNAL_REGISTRY.get(signal_name)
        if provider_class is None:
            logger.warning(f"Unknown signal: {signal_name}")
            return None

        params = {
            key: config[key]
            for key in PROVIDER_OPTIONS.get(signal_name, ())
            if key in config
        }

        try:
            return provider_class(**params)
        except (TypeError, ValueError) as e:
            logger.error(f"Failed to create provider {signal_name}: {e}")
            return None

    @staticmethod
    def load_signals_from_config(config: dict) -> Tuple[List[SignalProvider], Dict[str, float]]:
        """
        Load all enabled providers from configuration.

        Providers are returned in canonical registry order regardless of
        the order they appear in the config.

        Args:
            config: Full configuration dict with 'signals' section

        Returns:
            Tuple of (list of providers, dict of signal weights)
        """
        providers = []
        weights = {}

        signals_config = config.get("signals", {}) or {}

        for name in SIGNAL_REGISTRY:
            if name not in signals_config:
                continue
            signal_config = signals_config[name] or {}

            if not signal_config.get("enabled", True):
                logger.info(f"Skipping disabled signal: {name}")
                continue

            provider = SignalRegistry.create_provider(name, signal_config)
            if provider is None:
                continue

            default = DEFAULT_WEIGHTS.get(name, 0.0)
            weight = signal_config.get("weight", default)
            error = SignalRegistry._validate_weight(name, weight)
            if error:
                logger.warning(f"Signal {name} has invalid weight ({error}), defaulting to {default}")
                weight = default

            providers.append(provider)
            weights[name] = float(weight)
            logger.info(f"Loaded signal: {name} (weight: {weights[name]})")

        for name in signals_config:
            if name not in SIGNAL_REGISTRY:
                logger.warning(f"Unknown signal in config: {name}")

        logger.info(f"Loaded {len(providers)} signals")
        return providers, weights

    @staticmethod
    def describe_signals() -> str:
        """Get a human-readable description of all available signals."""
        lines = ["Available Signals:", "=" * 40]

        for name, provider_class in SIGNAL_REGISTRY.items():
            provider = provider_class()
            lines.append(f"\n{name}:")
            lines.append(f"  Description: {provider.description}")
            lines.append(f"  Default weight: {DEFAULT_WEIGHTS.get(name, 0.0)}")

        return "\n".join(lines)
