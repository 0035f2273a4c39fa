from __future__ import annotations

import dataclasses
import json
import logging
from typing import Any, List, Sequence, TextIO

from ..gateway import FacilityImage, Gateway
from ..result import (
    EmergencyPlan,
    FireSimulation,
    StorageOptimization,
    StorageRecommendation,
    ZoneAnalysis,
)
from ..zone import Coords, Zone

_LOGGER = logging.getLogger(__name__)


def _summarize(value: Any) -> str:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = dataclasses.asdict(value)
    elif isinstance(value, list):
        value = [
            dataclasses.asdict(v) if dataclasses.is_dataclass(v) else v for v in value
        ]
    return json.dumps(value, default=str)


class LoggingGateway(Gateway):
    """Wrap a gateway and log each request and response."""

    def __init__(self, inner: Gateway, log_file: TextIO) -> None:
        self._inner = inner
        self._log_file = log_file

    def _write(self, direction: str, operation: str, payload: str) -> None:
        try:
            self._log_file.write(f"{direction} {operation} {payload}\n")
            self._log_file.flush()
        except OSError:
            _LOGGER.warning("Failed to write gateway log", exc_info=True)

    def _tx(self, operation: str, image: FacilityImage, **params: Any) -> None:
        params["image"] = repr(image)
        self._write("TX", operation, _summarize(params))

    async def full_facility_report(
        self, image: FacilityImage, zones: Sequence[Zone]
    ) -> str:
        self._tx("full_facility_report", image, zones=[z.id for z in zones])
        result = await self._inner.full_facility_report(image, zones)
        self._write("RX", "full_facility_report", _summarize(result))
        return result

    async def analyze_zone(self, image: FacilityImage, zone: Zone) -> ZoneAnalysis:
        self._tx("analyze_zone", image, zone=zone.id)
        result = await self._inner.analyze_zone(image, zone)
        self._write("RX", "analyze_zone", _summarize(result))
        return result

    async def emergency_plan(self, image: FacilityImage, zone: Zone) -> EmergencyPlan:
        self._tx("emergency_plan", image, zone=zone.id)
        result = await self._inner.emergency_plan(image, zone)
        self._write("RX", "emergency_plan", _summarize(result))
        return result

    async def optimize_storage(
        self, image: FacilityImage, zones: Sequence[Zone]
    ) -> StorageOptimization:
        self._tx("optimize_storage", image, zones=[z.id for z in zones])
        result = await self._inner.optimize_storage(image, zones)
        self._write("RX", "optimize_storage", _summarize(result))
        return result

    async def simulate_fire(
        self, image: FacilityImage, zones: Sequence[Zone], origin_ids: Sequence[str]
    ) -> FireSimulation:
        self._tx(
            "simulate_fire",
            image,
            zones=[z.id for z in zones],
            origins=list(origin_ids),
        )
        result = await self._inner.simulate_fire(image, zones, origin_ids)
        self._write("RX", "simulate_fire", _summarize(result))
        return result

    async def find_safe_zone(
        self, image: FacilityImage, zones: Sequence[Zone], item: str
    ) -> StorageRecommendation:
        self._tx("find_safe_zone", image, zones=[z.id for z in zones], item=item)
        result = await self._inner.find_safe_zone(image, zones, item)
        self._write("RX", "find_safe_zone", _summarize(result))
        return result

    async def detect_zones(self, image: FacilityImage) -> List[Coords]:
        self._tx("detect_zones", image)
        result = await self._inner.detect_zones(image)
        self._write("RX", "detect_zones", _summarize(result))
        return result
