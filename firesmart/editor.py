import logging
from dataclasses import dataclass
from enum import Enum

from .zone import Coords, Zone, ZoneRegistry

_LOGGER = logging.getLogger(__name__)

DEFAULT_INVENTORY = "General Storage"


class EditorMode(Enum):
    CLOSED = "CLOSED"
    PLACING_NEW = "PLACING_NEW"
    EDITING = "EDITING"


@dataclass
class PointerDown:
    """
    A pointer press on the floor plan.

    Offsets are in pixels relative to the rendered image. ``pin_id`` is set
    when the press landed on a zone pin; a pin hit is never also treated as
    a click on the image underneath it.
    """

    offset_x: float
    offset_y: float
    width: float
    height: float
    pin_id: str | None = None


@dataclass
class EditorForm:
    name: str = ""
    inventory: str = ""


class AnnotationEditor:
    """
    Translates pointer input on the floor plan into zone edits.

    CLOSED -> (image click) -> PLACING_NEW -> (submit/cancel) -> CLOSED
    CLOSED/PLACING_NEW -> (pin click) -> EDITING -> (submit/cancel) -> CLOSED
    """

    def __init__(self, zones: ZoneRegistry) -> None:
        self._zones = zones
        self.mode = EditorMode.CLOSED
        self.temp_coords: Coords | None = None
        self.editing_zone_id: str | None = None
        self.form = EditorForm()

    @property
    def is_open(self) -> bool:
        return self.mode != EditorMode.CLOSED

    def handle_pointer(self, event: PointerDown) -> None:
        if event.pin_id is not None:
            self._handle_pin(event.pin_id)
        else:
            self._handle_image(event)

    def _handle_image(self, event: PointerDown) -> None:
        if self.mode != EditorMode.CLOSED:
            return
        if event.width <= 0 or event.height <= 0:
            return

        self.temp_coords = Coords.clamped(
            event.offset_x / event.width * 100,
            event.offset_y / event.height * 100,
        )
        self.editing_zone_id = None
        self.form = EditorForm()
        self._set_mode(EditorMode.PLACING_NEW)

    def _handle_pin(self, zone_id: str) -> None:
        zone = self._zones.find(zone_id)
        if zone is None or zone.coords is None:
            return

        self.temp_coords = zone.coords
        self.editing_zone_id = zone.id
        self.form = EditorForm(name=zone.name, inventory=zone.inventory)
        self._set_mode(EditorMode.EDITING)

    def submit(self) -> Zone | None:
        name = self.form.name
        if not name.strip() or self.temp_coords is None:
            return None

        inventory = self.form.inventory or DEFAULT_INVENTORY
        if self.mode == EditorMode.PLACING_NEW:
            zone: Zone | None = self._zones.add(
                Zone(name=name, inventory=inventory, coords=self.temp_coords)
            )
        elif self.mode == EditorMode.EDITING and self.editing_zone_id is not None:
            zone = self._zones.update(
                self.editing_zone_id,
                name=name,
                inventory=inventory,
                coords=self.temp_coords,
            )
        else:
            return None

        self._close()
        return zone

    def cancel(self) -> None:
        self._close()

    def remove(self, zone_id: str) -> None:
        self._zones.remove(zone_id)
        if self.mode == EditorMode.EDITING and self.editing_zone_id == zone_id:
            self._close()

    def _close(self) -> None:
        self.temp_coords = None
        self.editing_zone_id = None
        self.form = EditorForm()
        self._set_mode(EditorMode.CLOSED)

    def _set_mode(self, mode: EditorMode) -> None:
        if self.mode != mode:
            _LOGGER.debug("Editor %s -> %s", self.mode.name, mode.name)
            self.mode = mode
