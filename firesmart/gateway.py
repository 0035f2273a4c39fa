import mimetypes
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from .result import (
    EmergencyPlan,
    FireSimulation,
    StorageOptimization,
    StorageRecommendation,
    ZoneAnalysis,
)
from .zone import Coords, Zone


class GatewayError(RuntimeError):
    """Raised when the analysis provider fails or returns an unusable payload."""


@dataclass(frozen=True)
class FacilityImage:
    data: bytes
    mime_type: str = "image/jpeg"

    @classmethod
    def from_path(cls, path: str | Path) -> "FacilityImage":
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(data=path.read_bytes(), mime_type=mime_type or "image/jpeg")

    def __repr__(self) -> str:
        return "<FacilityImage {} {} bytes>".format(self.mime_type, len(self.data))


class Gateway(ABC):
    """Represents the intelligence provider that analyses an annotated facility"""

    @abstractmethod
    async def full_facility_report(
        self, image: FacilityImage, zones: Sequence[Zone]
    ) -> str:
        raise NotImplementedError()

    @abstractmethod
    async def analyze_zone(self, image: FacilityImage, zone: Zone) -> ZoneAnalysis:
        raise NotImplementedError()

    @abstractmethod
    async def emergency_plan(self, image: FacilityImage, zone: Zone) -> EmergencyPlan:
        raise NotImplementedError()

    @abstractmethod
    async def optimize_storage(
        self, image: FacilityImage, zones: Sequence[Zone]
    ) -> StorageOptimization:
        raise NotImplementedError()

    @abstractmethod
    async def simulate_fire(
        self, image: FacilityImage, zones: Sequence[Zone], origin_ids: Sequence[str]
    ) -> FireSimulation:
        raise NotImplementedError()

    @abstractmethod
    async def find_safe_zone(
        self, image: FacilityImage, zones: Sequence[Zone], item: str
    ) -> StorageRecommendation:
        raise NotImplementedError()

    @abstractmethod
    async def detect_zones(self, image: FacilityImage) -> List[Coords]:
        raise NotImplementedError()
