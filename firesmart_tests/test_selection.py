import pytest

from firesmart.result import FireSimulation, ModalKind
from firesmart.selection import EMPTY_SELECTION, NO_ZONES, SELECT_ORIGINS
from firesmart.session import FireLocation
from firesmart.zone import Coords, Zone


@pytest.fixture
def zones(registry):
    return [
        registry.add(Zone(id="a", name="Tank Room", coords=Coords(10, 20))),
        registry.add(Zone(id="b", name="Store B", coords=Coords(60, 40))),
        registry.add(Zone(id="c", name="Office")),
    ]


def test_start_requires_zones(selection, session):
    assert selection.start() is False
    assert selection.active is False
    assert session.error_message == NO_ZONES


def test_start(selection, session, zones):
    assert selection.start() is True
    assert selection.active is True
    assert selection.selected_ids == frozenset()
    assert session.error_message == SELECT_ORIGINS


def test_start_closes_open_modal(selection, session, zones):
    session.modal.open(ModalKind.ANALYSIS, "Tank Room")
    selection.start()
    assert session.modal.is_open is False


def test_toggle_adds_and_removes(selection, zones):
    selection.start()
    selection.toggle("a")
    assert selection.selected_ids == {"a"}
    selection.toggle("b")
    assert selection.selected_ids == {"a", "b"}
    selection.toggle("a")
    assert selection.selected_ids == {"b"}


@pytest.mark.parametrize("initial", [[], ["a"], ["a", "b"]])
def test_toggle_twice_restores_membership(selection, zones, initial):
    selection.start()
    for zone_id in initial:
        selection.toggle(zone_id)
    before = selection.selected_ids
    selection.toggle("a")
    selection.toggle("a")
    assert selection.selected_ids == before


def test_toggle_ignores_unknown_zone(selection, zones):
    selection.start()
    selection.toggle("missing")
    assert selection.selected_ids == frozenset()


def test_toggle_ignored_while_inactive(selection, zones):
    selection.toggle("a")
    assert selection.selected_ids == frozenset()


def test_cancel(selection, session, zones):
    selection.start()
    selection.toggle("a")
    selection.cancel()
    assert selection.active is False
    assert selection.selected_ids == frozenset()
    assert session.error_message is None


@pytest.mark.asyncio
async def test_execute_with_empty_selection_is_rejected(
    selection, session, gateway, zones
):
    selection.start()
    assert await selection.execute() is None
    assert selection.active is True
    assert session.error_message == EMPTY_SELECTION
    assert session.modal.is_open is False
    gateway.simulate_fire.assert_not_called()


@pytest.mark.asyncio
async def test_execute_without_image_is_rejected(
    selection, session, orchestrator, gateway, zones
):
    orchestrator.remove_image()
    selection.start()
    selection.toggle("a")
    assert await selection.execute() is None
    assert selection.active is True
    assert selection.selected_ids == {"a"}
    gateway.simulate_fire.assert_not_called()


@pytest.mark.asyncio
async def test_execute_dispatches_simulation(
    selection, session, gateway, zones, simulation_payload
):
    simulation = FireSimulation.decode(simulation_payload)
    gateway.simulate_fire.return_value = simulation
    modal_states = []
    session.modal.on_change(lambda m: modal_states.append((m.kind, m.loading)))

    selection.start()
    selection.toggle("b")
    selection.toggle("a")
    result = await selection.execute()

    assert result is simulation
    gateway.simulate_fire.assert_awaited_once()
    _, dispatched_zones, origin_ids = gateway.simulate_fire.call_args[0]
    assert set(origin_ids) == {"a", "b"}
    assert len(origin_ids) == 2
    assert [z.id for z in dispatched_zones] == ["a", "b", "c"]

    assert modal_states[0] == (ModalKind.SIMULATION, True)
    assert session.modal.kind == ModalKind.SIMULATION
    assert session.modal.target == "Multi-Zone Simulation"
    assert session.modal.data is simulation
    assert selection.active is False
    assert selection.selected_ids == frozenset()
    assert session.error_message is None


@pytest.mark.asyncio
async def test_execute_captures_fire_locations_for_mapped_zones(
    selection, session, gateway, zones, simulation_payload
):
    gateway.simulate_fire.return_value = FireSimulation.decode(simulation_payload)
    selection.start()
    selection.toggle("a")
    selection.toggle("c")
    await selection.execute()

    assert session.modal.fire_locations == [FireLocation(x=10, y=20, name="Tank Room")]
    assert set(gateway.simulate_fire.call_args[0][2]) == {"a", "c"}


@pytest.mark.asyncio
async def test_execute_resets_selection_on_failure(selection, session, gateway, zones):
    gateway.simulate_fire.side_effect = RuntimeError("boom")
    selection.start()
    selection.toggle("a")
    assert await selection.execute() is None
    assert selection.active is False
    assert selection.selected_ids == frozenset()
    assert session.modal.is_open is False
    assert session.error_message == "Simulation failed."


@pytest.mark.asyncio
async def test_execute_skips_zones_removed_after_selection(
    selection, registry, gateway, zones, simulation_payload
):
    gateway.simulate_fire.return_value = FireSimulation.decode(simulation_payload)
    selection.start()
    selection.toggle("a")
    selection.toggle("b")
    registry.remove("b")
    await selection.execute()
    assert list(gateway.simulate_fire.call_args[0][2]) == ["a"]
