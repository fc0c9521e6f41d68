"""Tests for signal providers: contract, static providers, and host probes."""

import pytest

from fingerprint_engine.signals.base import Signal, SignalProvider
from fingerprint_engine.signals.host_probes import (
    AUDIO_SETTLE_SECONDS,
    AudioProvider,
    FontProvider,
    GpuProvider,
    HardwareProvider,
    LocaleProvider,
    MathProvider,
    PlatformProvider,
)
from fingerprint_engine.signals.static import (
    CallableProvider,
    DelayedProvider,
    StaticProvider,
)


# ---------------------------------------------------------------------------
# SignalProvider contract
# ---------------------------------------------------------------------------

class NumberProvider(SignalProvider):
    def __init__(self, value):
        self.value = value

    @property
    def name(self) -> str:
        return "number"

    @property
    def description(self) -> str:
        return "Returns a non-string value"

    async def collect(self):
        return self.value


class TestSignalProviderContract:
    @pytest.mark.asyncio
    async def test_non_string_result_is_stringified(self):
        assert await NumberProvider(42).provide() == "42"

    @pytest.mark.asyncio
    async def test_none_result_is_empty(self):
        assert await NumberProvider(None).provide() == ""

    @pytest.mark.asyncio
    async def test_sample_returns_signal(self):
        signal = await StaticProvider("canvas", "X").sample()
        assert signal == Signal(name="canvas", raw_value="X")
        assert signal.empty is False

    def test_empty_signal(self):
        assert Signal(name="gpu", raw_value="").empty is True

    def test_repr(self):
        assert repr(StaticProvider("canvas", "X")) == "StaticProvider(name='canvas')"

    def test_abstract_provider_cannot_instantiate(self):
        with pytest.raises(TypeError):
            SignalProvider()


class TestStaticProviders:
    @pytest.mark.asyncio
    async def test_static(self):
        provider = StaticProvider("fonts", "Arial,Georgia")
        assert provider.name == "fonts"
        assert await provider.provide() == "Arial,Georgia"

    @pytest.mark.asyncio
    async def test_callable_sync(self):
        assert await CallableProvider("a", lambda: "sync").provide() == "sync"

    @pytest.mark.asyncio
    async def test_callable_async(self):
        async def source():
            return "async"

        assert await CallableProvider("a", source).provide() == "async"

    @pytest.mark.asyncio
    async def test_callable_failure_is_empty(self):
        def source():
            raise PermissionError("denied")

        assert await CallableProvider("a", source).provide() == ""

    @pytest.mark.asyncio
    async def test_delayed_delegates(self):
        provider = DelayedProvider(StaticProvider("audio", "Z"), 0.01)
        assert provider.name == "audio"
        assert await provider.provide() == "Z"

    def test_delayed_rejects_negative(self):
        with pytest.raises(ValueError):
            DelayedProvider(StaticProvider("audio", "Z"), -1)


# ---------------------------------------------------------------------------
# FontProvider
# ---------------------------------------------------------------------------

class TestFontProvider:
    @pytest.mark.asyncio
    async def test_detects_installed_candidates_in_candidate_order(self, tmp_path):
        (tmp_path / "truetype").mkdir()
        (tmp_path / "truetype" / "Georgia.ttf").write_bytes(b"")
        (tmp_path / "arial.ttf").write_bytes(b"")
        (tmp_path / "Times_New_Roman-Bold.otf").write_bytes(b"")
        (tmp_path / "Impact.txt").write_bytes(b"")

        provider = FontProvider(search_dirs=[str(tmp_path)])
        assert await provider.provide() == "Arial,Times New Roman,Georgia"

    @pytest.mark.asyncio
    async def test_arial_does_not_imply_arial_black(self, tmp_path):
        (tmp_path / "Arial.ttf").write_bytes(b"")
        assert "Arial Black" not in await FontProvider(search_dirs=[str(tmp_path)]).provide()

    @pytest.mark.asyncio
    async def test_missing_directories_yield_empty(self, tmp_path):
        provider = FontProvider(search_dirs=[str(tmp_path / "nope")])
        assert await provider.provide() == ""

    @pytest.mark.asyncio
    async def test_custom_candidates(self, tmp_path):
        (tmp_path / "DejaVuSans.ttf").write_bytes(b"")
        provider = FontProvider(search_dirs=[str(tmp_path)], candidates=["DejaVu Sans", "Arial"])
        assert await provider.provide() == "DejaVu Sans"

    @pytest.mark.asyncio
    async def test_longer_family_file_does_not_imply_shorter_family(self, tmp_path):
        (tmp_path / "ArialBlack.ttf").write_bytes(b"")
        (tmp_path / "CourierNew.ttf").write_bytes(b"")
        assert await FontProvider(search_dirs=[str(tmp_path)]).provide() == "Arial Black"

    @pytest.mark.asyncio
    async def test_style_variants_detect_family(self, tmp_path):
        for stem in ("arialbd", "georgiaz", "VerdanaBoldItalic", "Courier-Oblique"):
            (tmp_path / f"{stem}.ttf").write_bytes(b"")
        provider = FontProvider(search_dirs=[str(tmp_path)])
        assert await provider.provide() == "Arial,Courier,Verdana,Georgia"


# ---------------------------------------------------------------------------
# GpuProvider
# ---------------------------------------------------------------------------

class TestGpuProvider:
    def _card(self, root, card, vendor, device):
        device_dir = root / card / "device"
        device_dir.mkdir(parents=True)
        (device_dir / "vendor").write_text(vendor + "\n")
        (device_dir / "device").write_text(device + "\n")

    @pytest.mark.asyncio
    async def test_vendor_and_renderer(self, tmp_path):
        self._card(tmp_path, "card0", "0x8086", "0x3E92")
        (tmp_path / "card0-HDMI-A-1").mkdir()
        assert await GpuProvider(sysfs_root=str(tmp_path)).provide() == "Intel Corporation~0x3e92"

    @pytest.mark.asyncio
    async def test_multiple_adapters_and_unknown_vendor(self, tmp_path):
        self._card(tmp_path, "card0", "0x10de", "0x2204")
        self._card(tmp_path, "card1", "0xabcd", "0x0001")
        result = await GpuProvider(sysfs_root=str(tmp_path)).provide()
        assert result == "NVIDIA Corporation~0x2204|0xabcd~0x0001"

    @pytest.mark.asyncio
    async def test_no_drm_tree_yields_empty(self, tmp_path):
        assert await GpuProvider(sysfs_root=str(tmp_path / "missing")).provide() == ""


# ---------------------------------------------------------------------------
# AudioProvider
# ---------------------------------------------------------------------------

class TestAudioProvider:
    def test_settle_delay_is_fixed(self):
        assert AUDIO_SETTLE_SECONDS == 0.1

    @pytest.mark.asyncio
    async def test_reads_card_listing(self, tmp_path):
        cards = tmp_path / "cards"
        cards.write_text(
            " 0 [PCH            ]: HDA-Intel - HDA Intel PCH\n"
            "                      HDA Intel PCH at 0xf7f10000 irq 32\n"
        )
        result = await AudioProvider(cards_path=str(cards)).provide()
        assert result == "0 [PCH ]: HDA-Intel - HDA Intel PCH,HDA Intel PCH at 0xf7f10000 irq 32"

    @pytest.mark.asyncio
    async def test_no_soundcards_yields_empty(self, tmp_path):
        cards = tmp_path / "cards"
        cards.write_text("--- no soundcards ---\n")
        assert await AudioProvider(cards_path=str(cards)).provide() == ""

    @pytest.mark.asyncio
    async def test_missing_listing_yields_empty(self, tmp_path):
        assert await AudioProvider(cards_path=str(tmp_path / "cards")).provide() == ""


# ---------------------------------------------------------------------------
# Pure host probes
# ---------------------------------------------------------------------------

class TestHostProbes:
    @pytest.mark.asyncio
    async def test_math_is_deterministic(self):
        provider = MathProvider()
        first = await provider.provide()
        assert first == await provider.provide()
        assert "exp=2.718281828459045" in first
        assert len(first.split(",")) == len(MathProvider.BATTERY)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("provider_class,name", [
        (PlatformProvider, "platform"),
        (HardwareProvider, "hardware"),
        (LocaleProvider, "locale"),
    ])
    async def test_returns_string(self, provider_class, name):
        provider = provider_class()
        assert provider.name == name
        value = await provider.provide()
        assert isinstance(value, str)
        assert value == await provider.provide()

    @pytest.mark.asyncio
    async def test_hardware_reports_cpu_count(self):
        assert (await HardwareProvider().provide()).startswith("cpus=")
