"""Behaviour tests for two-phase extension discovery using pytest-bdd."""

from __future__ import annotations

import typing as typ
from pathlib import Path
from types import SimpleNamespace

import pytest
from pytest_bdd import given, parsers, scenarios, then, when

from homepage_builder.registry import ExtensionHost, HomepageEndpoint
from homepage_builder.storage import MemoryDatabase

FEATURE_FILE = (
    Path(__file__).resolve().parents[2] / "features" / "extension_discovery.feature"
)
scenarios(FEATURE_FILE)

ScenarioState = dict[str, typ.Any]


@pytest.fixture
def scenario_state() -> ScenarioState:
    return {}


@given("an extension host with the homepage endpoint registered")
def an_extension_host_with_the_homepage_endpoint(scenario_state: ScenarioState) -> None:
    host = ExtensionHost(database=MemoryDatabase())
    endpoint = HomepageEndpoint()
    host.register(endpoint)
    scenario_state.update(host=host, endpoint=endpoint)


@given(
    parsers.parse(
        'an extension "{name}" contributing the section "{section_id}" registered afterwards'
    )
)
def an_extension_contributing_a_section(
    name: str, section_id: str, scenario_state: ScenarioState
) -> None:
    extension = SimpleNamespace(name=name, homepage_sections=[{"id": section_id}])
    scenario_state["host"].register(extension)


@given(
    parsers.parse(
        'an extension "{name}" without homepage contributions registered afterwards'
    )
)
def an_extension_without_contributions(name: str, scenario_state: ScenarioState) -> None:
    scenario_state["host"].register(SimpleNamespace(name=name))


@when("the host boots")
def the_host_boots(scenario_state: ScenarioState) -> None:
    scenario_state["host"].boot()


@then(parsers.parse('the catalog sections are "{ids}"'))
def the_catalog_sections_are(ids: str, scenario_state: ScenarioState) -> None:
    catalog = scenario_state["endpoint"].context.catalog
    assert ",".join(entry.id for entry in catalog.sections) == ids


@then(parsers.parse('the section "{section_id}" is tagged with source "{name}"'))
def the_section_is_tagged(
    section_id: str, name: str, scenario_state: ScenarioState
) -> None:
    catalog = scenario_state["endpoint"].context.catalog
    matches = [entry for entry in catalog.sections if entry.id == section_id]
    assert [entry.source_plugin for entry in matches] == [name]


@then("no catalog entry carries a source")
def no_catalog_entry_carries_a_source(scenario_state: ScenarioState) -> None:
    catalog = scenario_state["endpoint"].context.catalog
    entries = (*catalog.sections, *catalog.widgets)
    assert all(entry.source_plugin is None for entry in entries)
