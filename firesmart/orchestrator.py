import logging
from typing import Awaitable, Callable, List, Sequence, Tuple, TypeVar

from .gateway import FacilityImage, Gateway, GatewayError
from .result import ModalKind, ModalResult, StorageRecommendation
from .session import Action, FireLocation, ReportStatus, Session
from .zone import EMPTY_INVENTORY, Zone, append_inventory

_LOGGER = logging.getLogger(__name__)

R = TypeVar("R", bound=ModalResult)

MISSING_IMAGE = "Please upload a floor plan first."

PRECONDITION_MESSAGES = {
    Action.REPORT: "Please add at least one room/zone with inventory.",
    Action.OPTIMIZE: "Add zones and import manifest first to optimize layout.",
    Action.SIMULATE: "Select at least one room to simulate fire.",
    Action.FIND_SAFE_ZONE: "Upload floor plan and define zones first.",
}

FAILURE_MESSAGES = {
    Action.REPORT: "Analysis failed. Please check your network or API key.",
    Action.ANALYZE_ZONE: "Failed to analyze room.",
    Action.EMERGENCY: "Failed to generate emergency plan.",
    Action.OPTIMIZE: "Failed to generate optimization plan.",
    Action.SIMULATE: "Simulation failed.",
    Action.FIND_SAFE_ZONE: "Failed to find a safe zone.",
    Action.DETECT_ZONES: "Failed to auto-detect rooms. Please try adding them manually.",
}

FACILITY_WIDE = "Facility Wide"
MULTI_ZONE_SIMULATION = "Multi-Zone Simulation"


class Orchestrator:
    """
    Sequences the analysis workflows against a :py:class:`Session`.

    Every action checks its preconditions, calls the gateway exactly once and
    records the outcome on the session. Failures are never raised to the
    caller; they are written to ``session.error_message`` and the action
    returns ``None``.
    """

    def __init__(self, gateway: Gateway, session: Session | None = None) -> None:
        self.session = session if session is not None else Session()
        self._gateway = gateway

    def load_image(self, image: FacilityImage) -> None:
        self.session.image = image

    def remove_image(self) -> None:
        self.session.image = None

    async def generate_report(self) -> str | None:
        session = self.session
        if session.image is None:
            session.set_error("Please upload a floor plan image first.")
            return None
        if len(session.zones) == 0:
            session.set_error(PRECONDITION_MESSAGES[Action.REPORT])
            return None

        session.update_status(ReportStatus.RUNNING)
        session.set_error(None)
        session.begin(Action.REPORT)
        try:
            markdown = await self._gateway.full_facility_report(
                session.image, list(session.zones)
            )
        except Exception:
            _LOGGER.warning("Facility report failed", exc_info=True)
            session.set_error(FAILURE_MESSAGES[Action.REPORT])
            session.update_status(ReportStatus.FAILED)
            return None
        finally:
            session.end(Action.REPORT)

        session.report_markdown = markdown
        session.update_status(ReportStatus.SUCCEEDED)
        _LOGGER.info("Facility report generated (%d chars)", len(markdown))
        return markdown

    def reset_report(self) -> None:
        self.session.report_markdown = ""
        self.session.update_status(ReportStatus.IDLE)

    async def analyze_zone(self, zone_id: str) -> ModalResult | None:
        target = self._zone_for_modal(zone_id)
        if target is None:
            return None
        image, zone = target
        return await self._run_modal_action(
            Action.ANALYZE_ZONE,
            ModalKind.ANALYSIS,
            zone.name,
            lambda: self._gateway.analyze_zone(image, zone),
        )

    async def report_fire(self, zone_id: str) -> ModalResult | None:
        target = self._zone_for_modal(zone_id)
        if target is None:
            return None
        image, zone = target
        return await self._run_modal_action(
            Action.EMERGENCY,
            ModalKind.EMERGENCY,
            zone.name,
            lambda: self._gateway.emergency_plan(image, zone),
        )

    async def optimize_storage(self) -> ModalResult | None:
        image = self.session.image
        if image is None:
            self.session.set_error(MISSING_IMAGE)
            return None
        if len(self.session.zones) == 0:
            self.session.set_error(PRECONDITION_MESSAGES[Action.OPTIMIZE])
            return None

        zones = list(self.session.zones)
        return await self._run_modal_action(
            Action.OPTIMIZE,
            ModalKind.OPTIMIZATION,
            FACILITY_WIDE,
            lambda: self._gateway.optimize_storage(image, zones),
        )

    async def simulate_fire(
        self,
        origin_ids: Sequence[str],
        fire_locations: Sequence[FireLocation] = (),
    ) -> ModalResult | None:
        image = self.session.image
        if image is None:
            self.session.set_error(MISSING_IMAGE)
            return None
        if len(self.session.zones) == 0 or not origin_ids:
            self.session.set_error(PRECONDITION_MESSAGES[Action.SIMULATE])
            return None

        zones = list(self.session.zones)
        origins = list(origin_ids)
        return await self._run_modal_action(
            Action.SIMULATE,
            ModalKind.SIMULATION,
            MULTI_ZONE_SIMULATION,
            lambda: self._gateway.simulate_fire(image, zones, origins),
            fire_locations=fire_locations,
        )

    def dismiss_modal(self) -> None:
        self.session.modal.close()

    async def find_safe_zone(self, item: str) -> StorageRecommendation | None:
        session = self.session
        if not item.strip():
            return None
        image = session.image
        if image is None or len(session.zones) == 0:
            session.set_error(PRECONDITION_MESSAGES[Action.FIND_SAFE_ZONE])
            return None

        session.set_error(None)
        session.storage_recommendation = None
        session.begin(Action.FIND_SAFE_ZONE)
        try:
            recommendation = await self._gateway.find_safe_zone(
                image, list(session.zones), item
            )
        except Exception:
            _LOGGER.warning("Safe zone search failed", exc_info=True)
            session.set_error(FAILURE_MESSAGES[Action.FIND_SAFE_ZONE])
            return None
        finally:
            session.end(Action.FIND_SAFE_ZONE)

        session.storage_recommendation = recommendation

        target = session.zones.find(recommendation.recommended_zone_id)
        if target is not None:
            session.zones.update(
                target.id, inventory=append_inventory(target.inventory, item)
            )
            _LOGGER.info("Stored '%s' in zone %s", item, target.id)
        else:
            _LOGGER.info(
                "Recommended zone %s is not in the registry",
                recommendation.recommended_zone_id,
            )
        return recommendation

    async def detect_zones(self) -> List[Zone] | None:
        session = self.session
        image = session.image
        if image is None:
            session.set_error(MISSING_IMAGE)
            return None

        session.set_error(None)
        session.begin(Action.DETECT_ZONES)
        try:
            points = await self._gateway.detect_zones(image)
        except Exception:
            _LOGGER.warning("Zone detection failed", exc_info=True)
            session.set_error(FAILURE_MESSAGES[Action.DETECT_ZONES])
            return None
        finally:
            session.end(Action.DETECT_ZONES)

        # No dedup against existing zones: there is no overlap rule to merge on.
        added = session.zones.add_many(
            (
                Zone(name="Room {}".format(n), inventory=EMPTY_INVENTORY, coords=point)
                for n, point in enumerate(points, start=1)
            ),
            id_prefix="auto",
        )
        _LOGGER.info("Detected %d zones", len(added))
        return added

    def _zone_for_modal(self, zone_id: str) -> Tuple[FacilityImage, Zone] | None:
        image = self.session.image
        if image is None:
            self.session.set_error(MISSING_IMAGE)
            return None
        zone = self.session.zones.find(zone_id)
        if zone is None:
            self.session.set_error("Unknown zone: {}".format(zone_id))
            return None
        return image, zone

    async def _run_modal_action(
        self,
        action: Action,
        kind: ModalKind,
        target: str,
        call: Callable[[], Awaitable[R]],
        fire_locations: Sequence[FireLocation] = (),
    ) -> R | None:
        session = self.session
        session.set_error(None)
        token = session.modal.open(kind, target, fire_locations)
        session.begin(action)
        try:
            result = await call()
            if getattr(result, "kind", None) != kind:
                raise GatewayError(
                    "Unexpected {} result: {!r}".format(action.name, result)
                )
        except Exception:
            _LOGGER.warning("%s failed", action.name, exc_info=True)
            session.set_error(FAILURE_MESSAGES[action])
            session.modal.fail(token)
            return None
        finally:
            session.end(action)

        if not session.modal.show(token, result):
            _LOGGER.debug("Discarding stale %s result", action.name)
            return None
        _LOGGER.info("%s completed for %s", action.name, target)
        return result
