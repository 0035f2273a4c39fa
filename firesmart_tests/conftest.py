from typing import Any, Dict
from unittest.mock import AsyncMock

import pytest

from firesmart.editor import AnnotationEditor
from firesmart.gateway import FacilityImage, Gateway
from firesmart.orchestrator import Orchestrator
from firesmart.selection import SelectionController
from firesmart.session import Session
from firesmart.zone import ZoneRegistry


@pytest.fixture
def registry() -> ZoneRegistry:
    return ZoneRegistry()


@pytest.fixture
def session(registry: ZoneRegistry) -> Session:
    return Session(zones=registry)


@pytest.fixture
def image() -> FacilityImage:
    return FacilityImage(data=b"\x89PNG\r\n\x1a\n", mime_type="image/png")


@pytest.fixture
def gateway() -> AsyncMock:
    return AsyncMock(spec=Gateway)


@pytest.fixture
def orchestrator(gateway, session, image) -> Orchestrator:
    orchestrator = Orchestrator(gateway=gateway, session=session)
    orchestrator.load_image(image)
    return orchestrator


@pytest.fixture
def editor(registry: ZoneRegistry) -> AnnotationEditor:
    return AnnotationEditor(registry)


@pytest.fixture
def selection(session, orchestrator) -> SelectionController:
    return SelectionController(session, orchestrator)


@pytest.fixture
def analysis_payload() -> Dict[str, Any]:
    return {
        "report_title": "Tank Room Review",
        "room_id": "a",
        "safety_score": 62,
        "risk_level": "HIGH",
        "key_findings": [
            {
                "category": "Segregation",
                "description": "Oxidizers stored beside fuels",
                "severity": "HIGH",
            }
        ],
        "corrective_actions": [
            {
                "action_id": "CA-1",
                "description": "Move oxidizers to a dedicated cabinet",
                "priority": "HIGH",
                "due_date_suggestion": "Within 7 days",
            },
            {
                "action_id": "CA-2",
                "description": "Post GHS signage",
                "priority": "LOW",
            },
        ],
    }


@pytest.fixture
def emergency_payload() -> Dict[str, Any]:
    return {
        "incident_summary": "Fire in solvent store",
        "room_id": "a",
        "primary_hazards": [
            {"hazard_type": "Flammable vapour", "details": "Acetone", "urgency": "HIGH"}
        ],
        "extinguishing_agents": {
            "recommended": ["AR-AFFF foam"],
            "prohibited": ["Water jet"],
            "details": "Polar solvents require alcohol resistant foam",
        },
        "firefighter_ppe": ["SCBA", "Structural gear"],
        "entry_exit_guidance": {
            "safest_entry_point": "North loading door",
            "primary_evacuation_route": "East corridor",
            "special_considerations": "Ventilate before entry",
        },
        "containment_strategy": "Protect adjacent oxidizer store",
    }


@pytest.fixture
def optimization_payload() -> Dict[str, Any]:
    return {
        "safety_status": "UNSAFE",
        "safety_assessment": "Oxidizers adjacent to fuels",
        "relocation_plan": [
            {
                "item_name": "Sodium chlorate",
                "current_room": "Tank Room",
                "suggested_room": "Store B",
                "reason": "Separate from solvents",
                "priority": "HIGH",
            }
        ],
        "recommended_zone_layouts": [
            {
                "room_id": "b",
                "room_name": "Store B",
                "assigned_items": ["Sodium chlorate"],
                "safety_rationale": "Isolated room",
                "compatibility_notes": "No organics",
            }
        ],
        "segregation_rules_applied": ["Oxidizers away from fuels"],
    }


@pytest.fixture
def simulation_payload() -> Dict[str, Any]:
    return {
        "simulation_id": "sim-1",
        "primary_fire_zones": ["Tank Room"],
        "firefighter_entry_route": {
            "entry_point": "North door",
            "path_description": "Along the west wall",
            "hazards_on_path": ["Gas cylinders"],
            "estimated_risk": "HIGH",
        },
        "route_coordinates": [{"x": 5, "y": 95}, {"x": 40, "y": 60}, {"x": 120, "y": -3}],
        "tactical_markers": [
            {
                "x": 45,
                "y": 55,
                "type": "DANGER",
                "label": "Cylinder bank",
                "action_protocol": "Cool from a distance",
            }
        ],
        "fire_propagation_analysis": [
            {
                "affected_room_id": "b",
                "room_name": "Store B",
                "impact_type": "EXPLOSION",
                "severity": "CRITICAL",
                "time_to_impact_estimate": "5-10 minutes",
                "reason": "Shared wall with oxidizers",
            }
        ],
        "tactical_recommendations": ["Establish a defensive perimeter"],
    }


@pytest.fixture
def safe_zone_payload() -> Dict[str, Any]:
    return {
        "recommended_room_id": "a",
        "room_name": "Tank Room",
        "reasoning": "Isolated from oxidizers",
        "safety_tips": "Keep dry",
    }
