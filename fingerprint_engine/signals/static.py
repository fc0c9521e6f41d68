"""
Providers that do not probe the host.

Used to inject raw values acquired elsewhere, and as deterministic fakes
in tests.
"""

import asyncio
import inspect
from typing import Awaitable, Callable, Union

from .base import SignalProvider


class StaticProvider(SignalProvider):
    """Returns a fixed raw value."""

    def __init__(self, name: str, value: str, description: str = ""):
        self._name = name
        self.value = value
        self._description = description or f"Fixed value for {name}"

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    async def collect(self) -> str:
        return self.value


class CallableProvider(SignalProvider):
    """Wraps a zero-argument sync or async callable."""

    def __init__(
        self,
        name: str,
        func: Callable[[], Union[str, Awaitable[str]]],
        description: str = "",
    ):
        self._name = name
        self._func = func
        self._description = description or f"Callable source for {name}"

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    async def collect(self) -> str:
        result = self._func()
        if inspect.isawaitable(result):
            result = await result
        return result


class DelayedProvider(SignalProvider):
    """
    Waits a fixed interval before sampling another provider.

    Models probes that need a settle time before their value is readable.
    """

    def __init__(self, inner: SignalProvider, delay_seconds: float):
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be non-negative")
        self.inner = inner
        self.delay_seconds = delay_seconds

    @property
    def name(self) -> str:
        return self.inner.name

    @property
    def description(self) -> str:
        return f"{self.inner.description} (after {self.delay_seconds}s settle)"

    async def collect(self) -> str:
        await asyncio.sleep(self.delay_seconds)
        return await self.inner.provide()
