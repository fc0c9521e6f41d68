"""
Host capability probes.

Each probe reads one facet of the machine it runs on. A probe that cannot
read its facet (missing file, unsupported platform, permission error)
raises from collect(), which SignalProvider.provide() turns into an empty
string.
"""

import asyncio
import locale
import logging
import math
import os
import platform
import re
import time
from pathlib import Path
from typing import List, Optional, Sequence

from .base import SignalProvider

logger = logging.getLogger(__name__)

# Candidate font families checked against the installed font files
FONT_CANDIDATES = (
    "Arial", "Helvetica", "Times New Roman", "Courier", "Verdana", "Georgia",
    "Palatino", "Garamond", "Bookman", "Comic Sans MS", "Trebuchet MS",
    "Arial Black", "Impact",
)

FONT_SUFFIXES = {".ttf", ".otf", ".ttc", ".dfont", ".pfb", ".woff", ".woff2"}

# Style words allowed after a family name in a font file stem (arialbd,
# georgiaz, TimesNewRoman-BoldItalic, ArialMT)
FONT_STYLE_SUFFIX = re.compile(
    r"(?:bold|italic|oblique|regular|light|medium|black|semibold|condensed"
    r"|narrow|book|psmt|mt|bd|bi|it|[biz])*"
)

# PCI vendor ids seen on display adapters
GPU_VENDORS = {
    "0x10de": "NVIDIA Corporation",
    "0x1002": "Advanced Micro Devices, Inc.",
    "0x8086": "Intel Corporation",
    "0x1af4": "Red Hat, Inc.",
    "0x15ad": "VMware",
    "0x1234": "QEMU",
    "0x106b": "Apple Inc.",
}

# Sound card listing is only stable once the driver has settled. Fixed.
AUDIO_SETTLE_SECONDS = 0.1


def _normalize_font_name(name: str) -> str:
    return re.sub(r"[^a-z0-9]", "", name.lower())


def default_font_dirs() -> List[Path]:
    """Platform font directories, most specific last."""
    system = platform.system()
    home = Path.home()

    if system == "Windows":
        windir = os.environ.get("WINDIR", r"C:\Windows")
        dirs = [Path(windir) / "Fonts"]
        local = os.environ.get("LOCALAPPDATA")
        if local:
            dirs.append(Path(local) / "Microsoft" / "Windows" / "Fonts")
        return dirs

    if system == "Darwin":
        return [
            Path("/System/Library/Fonts"),
            Path("/Library/Fonts"),
            home / "Library" / "Fonts",
        ]

    return [
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        home / ".fonts",
        home / ".local" / "share" / "fonts",
    ]


class FontProvider(SignalProvider):
    """Detects which candidate font families are installed."""

    def __init__(
        self,
        search_dirs: Optional[Sequence[str]] = None,
        candidates: Sequence[str] = FONT_CANDIDATES,
    ):
        self.search_dirs = [Path(d) for d in search_dirs] if search_dirs else None
        self.candidates = tuple(candidates)

    @property
    def name(self) -> str:
        return "fonts"

    @property
    def description(self) -> str:
        return "Candidate font families found in the platform font directories"

    async def collect(self) -> str:
        return await asyncio.to_thread(self._detect)

    def _detect(self) -> str:
        dirs = self.search_dirs if self.search_dirs is not None else default_font_dirs()
        stems = set()

        for directory in dirs:
            if not directory.is_dir():
                continue
            for path in directory.rglob("*"):
                if path.suffix.lower() in FONT_SUFFIXES:
                    stems.add(_normalize_font_name(path.stem))

        keys = {font: _normalize_font_name(font) for font in self.candidates}
        detected = set()

        # A file belongs to the longest candidate it starts with, and only
        # when the rest of the stem is style words (ArialBlack is Arial
        # Black, not Arial; CourierNew is not Courier).
        for stem in stems:
            matches = [
                font for font, key in keys.items()
                if stem.startswith(key) and FONT_STYLE_SUFFIX.fullmatch(stem[len(key):])
            ]
            if matches:
                detected.add(max(matches, key=lambda font: len(keys[font])))

        return ",".join(font for font in self.candidates if font in detected)


class GpuProvider(SignalProvider):
    """Display adapter vendor and device ids from the DRM sysfs tree."""

    def __init__(self, sysfs_root: str = "/sys/class/drm"):
        self.sysfs_root = Path(sysfs_root)

    @property
    def name(self) -> str:
        return "gpu"

    @property
    def description(self) -> str:
        return "Graphics adapter vendor~renderer identifiers"

    async def collect(self) -> str:
        return await asyncio.to_thread(self._read)

    def _read(self) -> str:
        adapters = []
        # card0, card1, ... ; connectors look like card0-HDMI-A-1
        for card in sorted(self.sysfs_root.glob("card*")):
            if "-" in card.name:
                continue
            device_dir = card / "device"
            vendor_file = device_dir / "vendor"
            if not vendor_file.is_file():
                continue

            vendor_id = vendor_file.read_text().strip().lower()
            device_file = device_dir / "device"
            renderer = device_file.read_text().strip().lower() if device_file.is_file() else ""

            vendor = GPU_VENDORS.get(vendor_id, vendor_id)
            adapters.append(f"{vendor}~{renderer}")

        return "|".join(adapters)


class AudioProvider(SignalProvider):
    """
    Sound hardware listing, read after a fixed settle delay.

    This is the only probe that must wait in real time; a full sampling
    run takes at least AUDIO_SETTLE_SECONDS.
    """

    def __init__(self, cards_path: str = "/proc/asound/cards"):
        self.cards_path = Path(cards_path)

    @property
    def name(self) -> str:
        return "audio"

    @property
    def description(self) -> str:
        return "Sound card listing after driver settle delay"

    async def collect(self) -> str:
        await asyncio.sleep(AUDIO_SETTLE_SECONDS)
        text = await asyncio.to_thread(self.cards_path.read_text)

        lines = [" ".join(line.split()) for line in text.splitlines()]
        lines = [line for line in lines if line]
        if not lines or lines[0].startswith("--- no soundcards"):
            return ""
        return ",".join(lines)


class MathProvider(SignalProvider):
    """
    Results of a fixed battery of floating-point functions.

    Last-digit differences between libm builds and CPUs tell hosts apart.
    """

    BATTERY = (
        ("acos", math.acos, 0.123124234234234242),
        ("acosh", math.acosh, 1e308),
        ("asin", math.asin, 0.123124234234234242),
        ("asinh", math.asinh, 1.0),
        ("atan", math.atan, 0.5),
        ("atanh", math.atanh, 0.5),
        ("sin", math.sin, -1e300),
        ("sinh", math.sinh, 1.0),
        ("cos", math.cos, 10.000000000123),
        ("cosh", math.cosh, 1.0),
        ("tan", math.tan, -1e300),
        ("tanh", math.tanh, 1.0),
        ("exp", math.exp, 1.0),
        ("expm1", math.expm1, 1.0),
        ("log1p", math.log1p, 10.0),
    )

    @property
    def name(self) -> str:
        return "math"

    @property
    def description(self) -> str:
        return "Floating-point library results for fixed inputs"

    async def collect(self) -> str:
        return ",".join(f"{label}={func(arg)!r}" for label, func, arg in self.BATTERY)


class PlatformProvider(SignalProvider):
    """Operating system name, release, version and machine type."""

    @property
    def name(self) -> str:
        return "platform"

    @property
    def description(self) -> str:
        return "Operating system and architecture"

    async def collect(self) -> str:
        return "|".join([
            platform.system(),
            platform.release(),
            platform.version(),
            platform.machine(),
        ])


class HardwareProvider(SignalProvider):
    """CPU count, processor and physical memory hints."""

    @property
    def name(self) -> str:
        return "hardware"

    @property
    def description(self) -> str:
        return "Logical CPU count, processor and physical memory"

    async def collect(self) -> str:
        parts = [
            f"cpus={os.cpu_count() or ''}",
            f"machine={platform.machine()}",
            f"processor={platform.processor()}",
        ]
        memory = self._physical_memory()
        if memory is not None:
            parts.append(f"memory={memory}")
        return "|".join(parts)

    @staticmethod
    def _physical_memory() -> Optional[int]:
        try:
            return os.sysconf("SC_PAGE_SIZE") * os.sysconf("SC_PHYS_PAGES")
        except (AttributeError, ValueError, OSError):
            # Not exposed on Windows
            return None


class LocaleProvider(SignalProvider):
    """Locale, preferred encoding and time zone."""

    @property
    def name(self) -> str:
        return "locale"

    @property
    def description(self) -> str:
        return "Locale, text encoding and time zone offset"

    async def collect(self) -> str:
        language, encoding = locale.getlocale()
        in_dst = time.daylight and time.localtime().tm_isdst > 0
        offset = -(time.altzone if in_dst else time.timezone)
        return "|".join([
            f"locale={language or ''}.{encoding or ''}",
            f"encoding={locale.getpreferredencoding(False)}",
            f"tz={','.join(time.tzname)}",
            f"offset={offset}",
        ])
