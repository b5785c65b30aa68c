"""Behaviour tests for preset switching using pytest-bdd.

These scenarios drive :func:`homepage_builder.presets.apply_preset` against
an in-memory store and check that the operator's footer survives a preset
switch and that unknown presets leave storage untouched.

Usage
-----
Run ``pytest tests/bdd/test_preset_switch.py -v``.
"""

from __future__ import annotations

import asyncio
import typing as typ
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from homepage_builder.presets import (
    BUILTIN_PRESETS,
    UnknownPresetError,
    apply_preset,
    detect_active_preset,
)

if typ.TYPE_CHECKING:
    from homepage_builder.storage import ConfigurationStore

FEATURE_FILE = Path(__file__).resolve().parents[2] / "features" / "preset_switch.feature"
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    return {}


@given("a saved homepage with a webring footer")
def a_saved_homepage_with_a_webring_footer(store: ConfigurationStore) -> None:
    asyncio.run(
        store.save({"layout": "single-column", "footer": [{"type": "webring"}]})
    )


@given("no homepage has been saved")
def no_homepage_has_been_saved(store: ConfigurationStore) -> None:
    assert asyncio.run(store.load()) is None


@when(parsers.parse('I apply the "{preset_id}" preset'))
def i_apply_the_preset(
    preset_id: str, store: ConfigurationStore, scenario_state: ScenarioState
) -> None:
    try:
        scenario_state["config"] = asyncio.run(
            apply_preset(preset_id, BUILTIN_PRESETS, store)
        )
    except UnknownPresetError as exc:
        scenario_state["error"] = exc


@then(parsers.parse('the homepage layout is "{layout}"'))
def the_homepage_layout_is(layout: str, scenario_state: ScenarioState) -> None:
    assert scenario_state["config"]["layout"] == layout


@then(parsers.parse('the section types are "{types}"'))
def the_section_types_are(types: str, scenario_state: ScenarioState) -> None:
    sections = scenario_state["config"]["sections"]
    assert ",".join(entry["type"] for entry in sections) == types


@then("the footer still holds the webring")
def the_footer_still_holds_the_webring(scenario_state: ScenarioState) -> None:
    assert scenario_state["config"]["footer"] == [{"type": "webring"}]


@then(parsers.parse('the active preset is "{preset_id}"'))
def the_active_preset_is(preset_id: str, scenario_state: ScenarioState) -> None:
    assert detect_active_preset(scenario_state["config"], BUILTIN_PRESETS) == preset_id


@then("the preset is reported as unknown")
def the_preset_is_reported_as_unknown(scenario_state: ScenarioState) -> None:
    assert isinstance(scenario_state.get("error"), UnknownPresetError)


@then("nothing has been stored or mirrored")
def nothing_has_been_stored_or_mirrored(store: ConfigurationStore) -> None:
    assert asyncio.run(store.load()) is None
    assert not store.mirror_path.exists()
