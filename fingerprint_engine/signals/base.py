"""
Base classes for signal providers.

Providers are designed to be:
1. Self-documenting with name and description
2. Stateless between samples
3. Unable to fail: incapability becomes an empty string
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Signal:
    """
    One raw environment sample.

    Attributes:
        name: Canonical signal name (registry key)
        raw_value: Probe output, empty when the capability is unavailable
    """
    name: str
    raw_value: str

    @property
    def empty(self) -> bool:
        return self.raw_value == ""


class SignalProvider(ABC):
    """
    Base class for signal providers.

    To create a new provider:
    1. Subclass this class
    2. Implement name, description, and collect()

    Example:
        class ScreenProvider(SignalProvider):
            @property
            def name(self) -> str:
                return "screen"

            @property
            def description(self) -> str:
                return "Primary display resolution and colour depth"

            async def collect(self) -> str:
                # ... probe logic, may raise ...
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Canonical signal name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """
        Natural language description of what the probe reads.

        Example: "Font families installed on the host"
        """
        pass

    @abstractmethod
    async def collect(self) -> str:
        """
        Read the raw value from the environment.

        May raise; provide() converts failures to an empty string.
        """
        pass

    async def provide(self) -> str:
        """
        Sample the signal, never failing.

        Any error raised by collect() is logged and reported as an empty
        string. Cancellation is not intercepted.
        """
        try:
            value = await self.collect()
        except Exception as e:
            logger.debug(f"Signal {self.name} unavailable: {e}")
            return ""

        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    async def sample(self) -> Signal:
        return Signal(name=self.name, raw_value=await self.provide())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"
