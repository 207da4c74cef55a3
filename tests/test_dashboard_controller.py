"""Dashboard controller lifecycle tests against a recording host."""

import json

import pytest

from city_vitals.app.dashboard import (
    HOVERED_OPACITY,
    UNHOVERED_OPACITY,
    DashboardController,
)
from city_vitals.app.settings_editor import SettingsDraft
from city_vitals.app.settings_model import Position, Settings
from city_vitals.app.sources import FixedSource
from city_vitals.core.locale import ENGLISH, PANEL_TITLE
from city_vitals.core.stat_catalog import MENU_WATER, StatId
from tests.harness import RecordingHost


DEFAULT_ORDER = [
    StatId.ELECTRICITY_AVAILABILITY,
    StatId.WATER_AVAILABILITY,
    StatId.SEWAGE_TREATMENT,
    StatId.LANDFILL_USAGE,
    StatId.INCINERATION_STATUS,
    StatId.CEMETERY_USAGE,
    StatId.CREMATORIUM_AVAILABILITY,
    StatId.EMPLOYMENT,
]


# ─── Build ────────────────────────────────────────────────────────────────────


def test_build_creates_panel_toggle_and_rows(make_controller, host):
    controller = make_controller()
    assert controller.build() is True

    assert host.calls == ["create_panel", "create_toggle_button", "create_rows"]
    assert host.panel["title"] == PANEL_TITLE
    assert host.panel["height"] == controller.layout.panel_height
    assert [d.id for d in host.layout.stats] == DEFAULT_ORDER
    assert host.labels[0] == ENGLISH["INFO_ELECTRICITY_AVAILABILITY"]
    assert host.visible is True
    assert host.opacity == HOVERED_OPACITY
    assert controller.build_count == 1


def test_build_twice_is_an_error(make_controller):
    controller = make_controller()
    controller.build()
    with pytest.raises(RuntimeError):
        controller.build()


def test_build_respects_default_visibility(make_controller, settings, host):
    settings.default_panel_visibility = False
    make_controller().build()
    assert host.visible is False


def test_build_uses_default_positions_for_new_resolution(make_controller, settings, host):
    controller = make_controller(screen=(800, 600))
    controller.build()
    assert controller.resolution is settings.find_resolution(800, 600)
    assert host.panel_pos == (2.0, 2.0)
    assert host.toggle_pos == (0.0, 0.0)


@pytest.mark.parametrize("step", ["create_panel", "create_toggle_button", "create_rows"])
def test_missing_host_dependency_aborts_and_destroys(make_controller, step):
    host = RecordingHost(fail_on=step)
    controller = make_controller(host=host)

    assert controller.build() is False
    assert host.calls[-1] == "destroy"
    assert host.destroyed == 1
    assert controller.is_built is False
    assert controller.tick() == []


def test_create_loads_settings_from_store(store, host, source):
    saved = Settings(default_panel_visibility=False)
    saved.set_stat_enabled(StatId.FIRE_HAZARD, True)
    store.save(saved)

    controller = DashboardController.create(store, host, source, screen_size=lambda: (100, 40))

    assert controller.is_built
    assert host.visible is False
    assert StatId.FIRE_HAZARD in [d.id for d in host.layout.stats]


# ─── Tick ─────────────────────────────────────────────────────────────────────


def test_tick_updates_only_enabled_meters(make_controller, host):
    controller = make_controller()
    controller.build()
    readings = controller.tick()

    assert [r.stat_id for r in readings] == DEFAULT_ORDER
    assert set(host.meters) == set(DEFAULT_ORDER)
    assert host.meters[StatId.LANDFILL_USAGE] == (25.0, "25%")
    assert host.meters[StatId.ELECTRICITY_AVAILABILITY] == (pytest.approx(60.0), "100 / 120")
    assert controller.readings[StatId.EMPLOYMENT].raw_value == 92


def test_tick_skipped_while_hidden(make_controller, host, source):
    controller = make_controller()
    controller.build()
    host.on_close()

    assert controller.tick() == []
    assert host.meters == {}
    assert source.read_count == 0


def test_tick_without_simulation_uses_zero_counters(make_controller, host):
    source = FixedSource(available=False)
    controller = make_controller(source=source)
    controller.build()
    controller.tick()

    assert source.read_count == 0
    assert host.meters[StatId.WATER_AVAILABILITY] == (0.0, "0 / 0")
    assert host.meters[StatId.EMPLOYMENT] == (100.0, "100%")


def test_tick_picks_up_new_counters(make_controller, host, source, counters):
    from dataclasses import replace

    controller = make_controller()
    controller.build()
    controller.tick()
    source.counters = replace(counters, garbage_amount=200_000)
    controller.tick()
    assert host.meters[StatId.LANDFILL_USAGE] == (50.0, "50%")


# ─── Hover opacity ────────────────────────────────────────────────────────────


def test_unhovered_panel_turns_translucent(make_controller, host):
    controller = make_controller()
    controller.build()

    controller.tick(hovered=False)
    assert host.opacity == UNHOVERED_OPACITY
    controller.tick(hovered=True)
    assert host.opacity == HOVERED_OPACITY


def test_opacity_only_set_on_hover_change(make_controller, host):
    controller = make_controller()
    controller.build()
    for _ in range(5):
        controller.tick(hovered=False)
    # one from build, one for the transition
    assert host.opacity_changes == [HOVERED_OPACITY, UNHOVERED_OPACITY]


def test_opaque_when_transparency_disabled(make_controller, settings, host):
    settings.transparent_when_unhovered = False
    controller = make_controller()
    controller.build()
    controller.tick(hovered=False)
    assert host.opacity == HOVERED_OPACITY


# ─── Teardown / rebuild ───────────────────────────────────────────────────────


def test_teardown_captures_positions_and_saves(make_controller, settings, host, settings_path):
    controller = make_controller(screen=(120, 50))
    controller.build()
    host.panel_pos = (30.0, 12.0)
    host.toggle_pos = (4.0, 1.0)

    controller.teardown()

    resolution = settings.find_resolution(120, 50)
    assert resolution.panel_position == Position(30.0, 12.0)
    assert resolution.toggle_button_position == Position(4.0, 1.0)
    assert host.destroyed == 1
    assert controller.is_built is False
    stored = json.loads(settings_path.read_text())
    assert stored["resolutions"][0]["panel_position"] == {"x": 30.0, "y": 12.0}


def test_teardown_when_not_built_is_noop(make_controller, host, settings_path):
    controller = make_controller()
    controller.teardown()
    assert host.destroyed == 0
    assert not settings_path.exists()


def test_rebuild_restores_saved_positions(make_controller, host):
    controller = make_controller()
    controller.build()
    host.panel_pos = (18.0, 7.0)
    controller.rebuild()
    assert host.panel_pos == (18.0, 7.0)
    assert controller.build_count == 2


def test_enabling_stat_rebuilds_once_with_row_in_catalog_position(make_controller, settings, host):
    controller = make_controller()
    controller.build()
    draft = SettingsDraft.from_settings(settings)
    draft.enabled_stats[StatId.CRIME_RATE] = True

    assert controller.apply_settings(draft) is True

    assert controller.teardown_count == 1
    assert controller.build_count == 2
    stats = [d.id for d in host.layout.stats]
    assert stats == DEFAULT_ORDER[:7] + [StatId.CRIME_RATE, StatId.EMPLOYMENT]
    assert len(host.layout.rows) == 2 * len(stats)


def test_unchanged_draft_does_not_rebuild(make_controller, settings):
    controller = make_controller()
    controller.build()
    assert controller.apply_settings(SettingsDraft.from_settings(settings)) is False
    assert controller.teardown_count == 0
    assert controller.build_count == 1


def test_disabling_every_stat_leaves_title_bar(make_controller, settings, host):
    controller = make_controller()
    controller.build()
    draft = SettingsDraft.from_settings(settings)
    draft.enabled_stats = {stat_id: False for stat_id in draft.enabled_stats}
    controller.apply_settings(draft)
    assert host.layout.rows == ()
    assert host.panel["height"] == controller.layout.panel_height
    assert controller.tick() == []


# ─── Host callbacks ───────────────────────────────────────────────────────────


def test_toggle_button_flips_visibility(make_controller, host):
    make_controller().build()
    host.on_toggle()
    assert host.visible is False
    host.on_toggle()
    assert host.visible is True


def test_close_button_hides_panel(make_controller, host):
    make_controller().build()
    host.on_close()
    assert host.visible is False


def test_stat_click_navigates_to_info_view(make_controller, host):
    make_controller().build()
    host.on_stat_click(StatId.WATER_AVAILABILITY)
    assert host.navigations == [MENU_WATER]
