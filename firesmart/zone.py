import itertools
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterable, Iterator, List

_LOGGER = logging.getLogger(__name__)

EMPTY_INVENTORY = "Empty"
INVENTORY_SEPARATOR = ", "

# Shared across registries so ids stay unique for the life of the process.
_ID_COUNTER = itertools.count(1)


@dataclass(frozen=True)
class Coords:
    """Position on the floor plan as a percentage of image width/height."""

    x: float
    y: float

    def __post_init__(self) -> None:
        if not (0 <= self.x <= 100 and 0 <= self.y <= 100):
            raise ValueError(
                "Coordinates must be within 0-100: ({}, {})".format(self.x, self.y)
            )

    @classmethod
    def clamped(cls, x: float, y: float) -> "Coords":
        return cls(x=min(max(float(x), 0.0), 100.0), y=min(max(float(y), 0.0), 100.0))


@dataclass
class Zone:
    name: str
    inventory: str = EMPTY_INVENTORY
    coords: Coords | None = None
    id: str = ""

    @property
    def mapped(self) -> bool:
        return self.coords is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "inventory": self.inventory,
            "coords": (
                {"x": self.coords.x, "y": self.coords.y}
                if self.coords is not None
                else None
            ),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Zone":
        coords = data.get("coords")
        return cls(
            id=str(data.get("id") or ""),
            name=str(data["name"]),
            inventory=str(data.get("inventory") or EMPTY_INVENTORY),
            coords=Coords(x=coords["x"], y=coords["y"]) if coords else None,
        )


def append_inventory(existing: str, item: str) -> str:
    """
    Append an item to a free-text inventory.

    The "Empty" sentinel and blank inventories are replaced by the item rather
    than prefixed with a separator.
    """
    current = "" if existing == EMPTY_INVENTORY else existing
    if current.strip():
        return current + INVENTORY_SEPARATOR + item
    return item


class _Unset:
    pass


_UNSET: Any = _Unset()


class ZoneRegistry:
    """
    The authoritative list of zones for a session.

    All operations are synchronous. Updating or removing an unknown id is a
    no-op.
    """

    def __init__(self, zones: Iterable[Zone] | None = None) -> None:
        self._zones: List[Zone] = []
        self._on_change: Callable[[List[Zone]], None] | None = None
        if zones is not None:
            self.add_many(zones)

    def __iter__(self) -> Iterator[Zone]:
        return iter(list(self._zones))

    def __len__(self) -> int:
        return len(self._zones)

    def __contains__(self, zone_id: object) -> bool:
        return any(z.id == zone_id for z in self._zones)

    def ids(self) -> List[str]:
        return [z.id for z in self._zones]

    def find(self, zone_id: str) -> Zone | None:
        for zone in self._zones:
            if zone.id == zone_id:
                return zone
        return None

    def add(self, zone: Zone, id_prefix: str = "zone") -> Zone:
        zone = self._insert(zone, id_prefix)
        self._notify()
        return zone

    def add_many(self, zones: Iterable[Zone], id_prefix: str = "zone") -> List[Zone]:
        added = [self._insert(zone, id_prefix) for zone in zones]
        if added:
            self._notify()
        return added

    def update(
        self,
        zone_id: str,
        *,
        name: str = _UNSET,
        inventory: str = _UNSET,
        coords: Coords | None = _UNSET,
    ) -> Zone | None:
        for i, zone in enumerate(self._zones):
            if zone.id != zone_id:
                continue
            changes: Dict[str, Any] = {}
            if name is not _UNSET:
                changes["name"] = name
            if inventory is not _UNSET:
                changes["inventory"] = inventory
            if coords is not _UNSET:
                changes["coords"] = coords
            updated = replace(zone, **changes)
            self._zones[i] = updated
            _LOGGER.debug("Updated zone %s: %s", zone_id, changes)
            self._notify()
            return updated

        _LOGGER.debug("Ignoring update for unknown zone %s", zone_id)
        return None

    def remove(self, zone_id: str) -> Zone | None:
        for i, zone in enumerate(self._zones):
            if zone.id == zone_id:
                del self._zones[i]
                _LOGGER.debug("Removed zone %s", zone_id)
                self._notify()
                return zone
        return None

    def on_change(self, f: Callable[[List[Zone]], None]) -> None:
        self._on_change = f

    def _insert(self, zone: Zone, id_prefix: str) -> Zone:
        if zone.id:
            if zone.id in self:
                raise ValueError("Duplicate zone id: {}".format(zone.id))
        else:
            zone = replace(zone, id=self._generate_id(id_prefix))
        self._zones.append(zone)
        _LOGGER.debug("Added zone %s (%s)", zone.id, zone.name)
        return zone

    def _generate_id(self, prefix: str) -> str:
        while True:
            zone_id = "{}-{}".format(prefix, next(_ID_COUNTER))
            if zone_id not in self:
                return zone_id

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(list(self._zones))
