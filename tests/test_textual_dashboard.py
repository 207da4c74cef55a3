"""Dashboard tests using the Textual in-process harness."""

import pytest

from city_vitals.core.counters import CityCounters
from city_vitals.core.stat_catalog import StatId
from city_vitals.io.settings import SettingsStore
from city_vitals.tui.chip import ToggleChip
from city_vitals.tui.vitals_panel import VitalsPanel
from city_vitals.tui.widgets import MeterBar, StatLabel
from tests.harness import press_and_settle, resize_and_settle, run_app, tick_and_settle

pytestmark = pytest.mark.textual


COUNTERS = CityCounters(
    garbage_capacity=400_000,
    garbage_amount=100_000,
    water_capacity=3_000,
    water_consumption=1_500,
)


async def test_panel_built_on_startup(settings_path):
    async with run_app(settings_path) as (pilot, app):
        assert app.controller.is_built
        panel = app.host.panel
        assert panel.is_mounted
        assert len(app.query(VitalsPanel)) == 1
        assert len(app.query(MeterBar)) == 8
        assert len(app.query(StatLabel)) == 8
        assert app.query(StatLabel).first().stat_id == StatId.ELECTRICITY_AVAILABILITY


async def test_frame_updates_meters(settings_path):
    async with run_app(settings_path, counters=COUNTERS) as (pilot, app):
        await tick_and_settle(pilot)

        landfill = app.host.meters[StatId.LANDFILL_USAGE]
        assert landfill.value == 25.0
        assert landfill.tooltip == "25%"
        water = app.host.meters[StatId.WATER_AVAILABILITY]
        assert water.value == 100.0
        assert water.tooltip == "1,500 / 3,000"


async def test_toggle_panel_action(settings_path):
    async with run_app(settings_path) as (pilot, app):
        app.action_toggle_panel()
        await pilot.pause()
        assert not app.host.is_visible()
        assert app.host.panel.display is False

        app.action_toggle_panel()
        await pilot.pause()
        assert app.host.is_visible()


async def test_settings_panel_enables_stat(settings_path):
    async with run_app(settings_path) as (pilot, app):
        await press_and_settle(pilot, "s")
        panel = app.settings_panel
        assert panel is not None

        chip = panel.query_one("#setting-stat-crime_rate", ToggleChip)
        assert chip.value is False
        chip.toggle()
        panel.close()
        await pilot.pause()

        assert app.settings_panel is None
        assert app.controller.teardown_count == 1
        assert app.controller.build_count == 2
        assert StatId.CRIME_RATE in app.host.meters
        assert len(app.query(VitalsPanel)) == 1
        assert app.controller.settings.is_stat_enabled(StatId.CRIME_RATE)


async def test_settings_panel_without_changes_keeps_panel(settings_path):
    async with run_app(settings_path) as (pilot, app):
        await press_and_settle(pilot, "s")
        app.settings_panel.close()
        await pilot.pause()
        assert app.settings_panel is None
        assert app.controller.build_count == 1


async def test_missing_container_aborts_build(settings_path):
    async with run_app(settings_path, root_selector="#missing") as (pilot, app):
        assert not app.controller.is_built
        assert len(app.query(VitalsPanel)) == 0
        await tick_and_settle(pilot, frames=2)
        assert app.controller.readings == {}


async def test_resize_rebuilds_for_new_resolution(settings_path):
    async with run_app(settings_path, size=(100, 40)) as (pilot, app):
        await resize_and_settle(pilot, 120, 50)
        assert app.controller.resolution.key == (120, 50)
        assert app.controller.build_count == 2


async def test_exit_saves_settings(settings_path):
    async with run_app(settings_path, size=(90, 30)) as (pilot, app):
        app.host.panel.move_to(12, 5)

    saved = SettingsStore(settings_path).load()
    resolution = saved.find_resolution(90, 30)
    assert resolution is not None
    assert resolution.panel_position.as_tuple() == (12.0, 5.0)


async def test_rows_flow_to_layout_offsets(settings_path):
    async with run_app(settings_path) as (pilot, app):
        panel = app.host.panel
        rows = sorted(app.controller.layout.rows, key=lambda r: r.z_order)
        pad = app.controller.layout.padding
        assert len(panel.rows) == len(rows)
        for widget, row in zip(panel.rows, rows):
            # Row padding sits inside the widget, so content starts pad.top below its edge.
            assert widget.region.y - panel.region.y + pad.top == row.offset
            assert widget.region.height == row.height + pad.vertical
