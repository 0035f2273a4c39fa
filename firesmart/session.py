import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Sequence

from .gateway import FacilityImage
from .result import ModalKind, ModalResult, StorageRecommendation
from .zone import ZoneRegistry

_LOGGER = logging.getLogger(__name__)


class ReportStatus(Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


class Action(Enum):
    REPORT = "REPORT"
    ANALYZE_ZONE = "ANALYZE_ZONE"
    EMERGENCY = "EMERGENCY"
    OPTIMIZE = "OPTIMIZE"
    SIMULATE = "SIMULATE"
    FIND_SAFE_ZONE = "FIND_SAFE_ZONE"
    DETECT_ZONES = "DETECT_ZONES"


@dataclass(frozen=True)
class FireLocation:
    """An active fire origin drawn on the simulation overlay."""

    x: float
    y: float
    name: str


class Modal:
    """
    The single slot holding the currently displayed action result.

    Every open() or close() advances the invocation token. A result is only
    committed by the invocation holding the current token, so a late
    response from a superseded or dismissed request is dropped.
    """

    def __init__(self) -> None:
        self.is_open = False
        self.loading = False
        self.kind = ModalKind.ANALYSIS
        self.target = ""
        self.data: ModalResult | None = None
        self.fire_locations: List[FireLocation] = []
        self._token = 0
        self._on_change: Callable[["Modal"], None] | None = None

    @property
    def token(self) -> int:
        return self._token

    def open(
        self,
        kind: ModalKind,
        target: str,
        fire_locations: Sequence[FireLocation] = (),
    ) -> int:
        self._token += 1
        self.is_open = True
        self.loading = True
        self.kind = kind
        self.target = target
        self.data = None
        if kind == ModalKind.SIMULATION:
            self.fire_locations = list(fire_locations)
        _LOGGER.debug("Modal opened: %s (%s) token=%d", kind.name, target, self._token)
        self._notify()
        return self._token

    def show(self, token: int, data: ModalResult) -> bool:
        if token != self._token:
            return False
        if data.kind != self.kind:
            raise ValueError(
                "Result kind {} does not match modal kind {}".format(
                    data.kind.name, self.kind.name
                )
            )
        self.data = data
        self.loading = False
        self._notify()
        return True

    def fail(self, token: int) -> bool:
        if token != self._token:
            return False
        self.close()
        return True

    def close(self) -> None:
        self._token += 1
        self.is_open = False
        self.loading = False
        self._notify()

    def on_change(self, f: Callable[["Modal"], None]) -> None:
        self._on_change = f

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self)


class Session:
    """
    In-memory state of a single annotation and analysis session.

    Nothing here outlives the process.
    """

    def __init__(self, zones: ZoneRegistry | None = None) -> None:
        self.zones = zones if zones is not None else ZoneRegistry()
        self.image: FacilityImage | None = None
        self.status = ReportStatus.IDLE
        self.report_markdown = ""
        self.error_message: str | None = None
        self.storage_recommendation: StorageRecommendation | None = None
        self.modal = Modal()

        self._in_flight: Counter[Action] = Counter()
        self._on_status_change: Callable[[ReportStatus], None] | None = None
        self._on_error: Callable[[str | None], None] | None = None

    def is_loading(self, action: Action) -> bool:
        return self._in_flight[action] > 0

    def begin(self, action: Action) -> None:
        self._in_flight[action] += 1

    def end(self, action: Action) -> None:
        if self._in_flight[action] > 0:
            self._in_flight[action] -= 1

    def set_error(self, message: str | None) -> None:
        if self.error_message != message:
            self.error_message = message
            if self._on_error is not None:
                self._on_error(message)

    def update_status(self, status: ReportStatus) -> None:
        if self.status != status:
            _LOGGER.debug("Report status %s -> %s", self.status.name, status.name)
            self.status = status
            if self._on_status_change is not None:
                self._on_status_change(status)

    def on_status_change(self, f: Callable[[ReportStatus], None]) -> None:
        self._on_status_change = f

    def on_error(self, f: Callable[[str | None], None]) -> None:
        self._on_error = f
