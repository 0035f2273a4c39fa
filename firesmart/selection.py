import logging
from typing import FrozenSet, Set

from .orchestrator import Orchestrator
from .result import ModalResult
from .session import FireLocation, Session

_LOGGER = logging.getLogger(__name__)

NO_ZONES = "Add rooms before running a simulation."
SELECT_ORIGINS = "Select the rooms where fire is detected, then run the simulation."
EMPTY_SELECTION = "Select at least one room to simulate fire."


class SelectionController:
    """Marks a subset of zones as active fire origins before a simulation."""

    def __init__(self, session: Session, orchestrator: Orchestrator) -> None:
        self._session = session
        self._orchestrator = orchestrator
        self.active = False
        self._selected: Set[str] = set()

    @property
    def selected_ids(self) -> FrozenSet[str]:
        return frozenset(self._selected)

    def start(self) -> bool:
        if len(self._session.zones) == 0:
            self._session.set_error(NO_ZONES)
            return False

        if self._session.modal.is_open:
            self._session.modal.close()
        self.active = True
        self._selected = set()
        self._session.set_error(SELECT_ORIGINS)
        _LOGGER.debug("Selection mode started")
        return True

    def toggle(self, zone_id: str) -> None:
        if not self.active or zone_id not in self._session.zones:
            return
        if zone_id in self._selected:
            self._selected.discard(zone_id)
        else:
            self._selected.add(zone_id)

    def cancel(self) -> None:
        self._reset()
        self._session.set_error(None)

    async def execute(self) -> ModalResult | None:
        zones = [z for z in self._session.zones if z.id in self._selected]
        if not self.active or not zones or self._session.image is None:
            self._session.set_error(EMPTY_SELECTION)
            return None

        fire_locations = [
            FireLocation(x=z.coords.x, y=z.coords.y, name=z.name)
            for z in zones
            if z.coords is not None
        ]
        origin_ids = [z.id for z in zones]
        self._reset()
        _LOGGER.debug("Dispatching simulation for origins %s", origin_ids)
        return await self._orchestrator.simulate_fire(origin_ids, fire_locations)

    def _reset(self) -> None:
        self.active = False
        self._selected = set()
