"""Typed results returned by the analysis gateway."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, List, Union

from .zone import Coords


class ModalKind(Enum):
    ANALYSIS = "ANALYSIS"
    EMERGENCY = "EMERGENCY"
    OPTIMIZATION = "OPTIMIZATION"
    SIMULATION = "SIMULATION"


class SafetyStatus(Enum):
    SAFE = "SAFE"
    UNSAFE = "UNSAFE"
    CRITICAL = "CRITICAL"


class Priority(Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class RouteRisk(Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    EXTREME = "EXTREME"


class MarkerType(Enum):
    CAUTION = "CAUTION"
    DANGER = "DANGER"


class ImpactType(Enum):
    THERMAL = "THERMAL"
    SMOKE = "SMOKE"
    EXPLOSION = "EXPLOSION"
    STRUCTURAL_COLLAPSE = "STRUCTURAL_COLLAPSE"


class Severity(Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


def _strings(data: Dict[str, Any], key: str) -> List[str]:
    return [str(v) for v in data.get(key) or []]


@dataclass
class Finding:
    category: str
    description: str
    severity: str


@dataclass
class CorrectiveAction:
    description: str
    priority: str
    due_date_hint: str | None = None


@dataclass
class ZoneAnalysis:
    kind: ClassVar[ModalKind] = ModalKind.ANALYSIS

    title: str
    score: int
    risk_level: str
    findings: List[Finding] = field(default_factory=list)
    actions: List[CorrectiveAction] = field(default_factory=list)
    notes: str | None = None

    @classmethod
    def decode(cls, data: Dict[str, Any]) -> "ZoneAnalysis":
        return cls(
            title=str(data["report_title"]),
            score=int(data["safety_score"]),
            risk_level=str(data["risk_level"]),
            findings=[
                Finding(
                    category=str(f.get("category", "")),
                    description=str(f.get("description", "")),
                    severity=str(f.get("severity", "")),
                )
                for f in data.get("key_findings") or []
            ],
            actions=[
                CorrectiveAction(
                    description=str(a.get("description", "")),
                    priority=str(a.get("priority", "")),
                    due_date_hint=a.get("due_date_suggestion"),
                )
                for a in data.get("corrective_actions") or []
            ],
            notes=data.get("additional_notes"),
        )


@dataclass
class Hazard:
    type: str
    details: str
    urgency: str


@dataclass
class ExtinguishingAgents:
    recommended: List[str]
    prohibited: List[str]
    details: str


@dataclass
class EntryExitGuidance:
    entry_point: str
    evac_route: str
    considerations: str


@dataclass
class EmergencyPlan:
    kind: ClassVar[ModalKind] = ModalKind.EMERGENCY

    incident_summary: str
    hazards: List[Hazard]
    agents: ExtinguishingAgents
    ppe: List[str]
    entry_exit_guidance: EntryExitGuidance
    containment_strategy: str

    @classmethod
    def decode(cls, data: Dict[str, Any]) -> "EmergencyPlan":
        agents = data["extinguishing_agents"]
        guidance = data["entry_exit_guidance"]
        return cls(
            incident_summary=str(data["incident_summary"]),
            hazards=[
                Hazard(
                    type=str(h.get("hazard_type", "")),
                    details=str(h.get("details", "")),
                    urgency=str(h.get("urgency", "")),
                )
                for h in data.get("primary_hazards") or []
            ],
            agents=ExtinguishingAgents(
                recommended=_strings(agents, "recommended"),
                prohibited=_strings(agents, "prohibited"),
                details=str(agents.get("details", "")),
            ),
            ppe=_strings(data, "firefighter_ppe"),
            entry_exit_guidance=EntryExitGuidance(
                entry_point=str(guidance.get("safest_entry_point", "")),
                evac_route=str(guidance.get("primary_evacuation_route", "")),
                considerations=str(guidance.get("special_considerations", "")),
            ),
            containment_strategy=str(data["containment_strategy"]),
        )


@dataclass
class Relocation:
    item: str
    from_zone: str
    to_zone: str
    reason: str
    priority: Priority


@dataclass
class ZoneLayout:
    zone_id: str
    zone_name: str
    items: List[str]
    rationale: str
    compatibility_notes: str = ""


@dataclass
class StorageOptimization:
    kind: ClassVar[ModalKind] = ModalKind.OPTIMIZATION

    status: SafetyStatus
    assessment: str
    moves: List[Relocation]
    layouts: List[ZoneLayout]
    rules_applied: List[str]

    @classmethod
    def decode(cls, data: Dict[str, Any]) -> "StorageOptimization":
        return cls(
            status=SafetyStatus(data["safety_status"]),
            assessment=str(data["safety_assessment"]),
            moves=[
                Relocation(
                    item=str(m.get("item_name", "")),
                    from_zone=str(m.get("current_room", "")),
                    to_zone=str(m.get("suggested_room", "")),
                    reason=str(m.get("reason", "")),
                    priority=Priority(m.get("priority", Priority.MEDIUM.value)),
                )
                for m in data.get("relocation_plan") or []
            ],
            layouts=[
                ZoneLayout(
                    zone_id=str(layout.get("room_id", "")),
                    zone_name=str(layout.get("room_name", "")),
                    items=_strings(layout, "assigned_items"),
                    rationale=str(layout.get("safety_rationale", "")),
                    compatibility_notes=str(layout.get("compatibility_notes", "")),
                )
                for layout in data.get("recommended_zone_layouts") or []
            ],
            rules_applied=_strings(data, "segregation_rules_applied"),
        )


@dataclass
class EntryRoute:
    entry_point: str
    path_description: str
    hazards: List[str]
    risk: RouteRisk


@dataclass
class TacticalMarker:
    position: Coords
    type: MarkerType
    label: str
    protocol: str


@dataclass
class Propagation:
    zone_id: str
    zone_name: str
    impact_type: ImpactType
    severity: Severity
    eta_text: str
    reason: str


@dataclass
class FireSimulation:
    """
    Predicted fire spread from one or more origin zones.

    ``route_points`` are ordered, the first point being the entry point.
    """

    kind: ClassVar[ModalKind] = ModalKind.SIMULATION

    primary_zones: List[str]
    entry_route: EntryRoute
    route_points: List[Coords]
    markers: List[TacticalMarker]
    propagation: List[Propagation]
    recommendations: List[str]

    @classmethod
    def decode(cls, data: Dict[str, Any]) -> "FireSimulation":
        route = data["firefighter_entry_route"]
        return cls(
            primary_zones=_strings(data, "primary_fire_zones"),
            entry_route=EntryRoute(
                entry_point=str(route.get("entry_point", "")),
                path_description=str(route.get("path_description", "")),
                hazards=_strings(route, "hazards_on_path"),
                risk=RouteRisk(route["estimated_risk"]),
            ),
            route_points=[
                Coords.clamped(p["x"], p["y"])
                for p in data.get("route_coordinates") or []
            ],
            markers=[
                TacticalMarker(
                    position=Coords.clamped(m["x"], m["y"]),
                    type=MarkerType(m["type"]),
                    label=str(m.get("label", "")),
                    protocol=str(m.get("action_protocol", "")),
                )
                for m in data.get("tactical_markers") or []
            ],
            propagation=[
                Propagation(
                    zone_id=str(p.get("affected_room_id", "")),
                    zone_name=str(p.get("room_name", "")),
                    impact_type=ImpactType(p["impact_type"]),
                    severity=Severity(p["severity"]),
                    eta_text=str(p.get("time_to_impact_estimate", "")),
                    reason=str(p.get("reason", "")),
                )
                for p in data.get("fire_propagation_analysis") or []
            ],
            recommendations=_strings(data, "tactical_recommendations"),
        )


@dataclass
class StorageRecommendation:
    recommended_zone_id: str
    zone_name: str
    reasoning: str
    safety_tips: str

    @classmethod
    def decode(cls, data: Dict[str, Any]) -> "StorageRecommendation":
        return cls(
            recommended_zone_id=str(data["recommended_room_id"]),
            zone_name=str(data["room_name"]),
            reasoning=str(data.get("reasoning", "")),
            safety_tips=str(data.get("safety_tips", "")),
        )


ModalResult = Union[ZoneAnalysis, EmergencyPlan, StorageOptimization, FireSimulation]
