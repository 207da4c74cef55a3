"""Pytest configuration and shared fixtures for city-vitals tests."""

import pytest

from city_vitals.app.dashboard import DashboardController
from city_vitals.app.settings_model import Settings
from city_vitals.app.sources import FixedSource
from city_vitals.core.counters import CityCounters
from city_vitals.io.settings import SettingsStore
from tests.harness.recording_host import RecordingHost


SCREEN = (1920, 1080)


# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def settings_path(tmp_path):
    """Settings file location inside the test's temp dir (not created)."""
    return tmp_path / "city-vitals" / "settings.json"


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path, monkeypatch):
    """Keep the default settings path away from the real ~/.config."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


# ---------------------------------------------------------------------------
# Dashboard fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def store(settings_path):
    return SettingsStore(settings_path)


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def host():
    return RecordingHost()


@pytest.fixture
def counters():
    return CityCounters(
        electricity_capacity=120_000,
        electricity_consumption=100_000,
        water_capacity=3_000,
        water_consumption=1_500,
        sewage_capacity=2_000,
        sewage_accumulation=2_500,
        garbage_capacity=400_000,
        garbage_amount=100_000,
        incineration_capacity=0,
        garbage_accumulation=850,
        dead_capacity=0,
        dead_amount=12,
        cremate_capacity=40,
        dead_count=0,
        unemployment=7.6,
    )


@pytest.fixture
def source(counters):
    return FixedSource(counters)


@pytest.fixture
def make_controller(settings, store, host, source):
    """Factory building a controller over the shared fixtures."""

    def _make(screen=SCREEN, **kwargs):
        controller = DashboardController(
            kwargs.pop("settings", settings),
            kwargs.pop("store", store),
            kwargs.pop("host", host),
            kwargs.pop("source", source),
            screen_size=lambda: screen,
            **kwargs,
        )
        return controller

    return _make
