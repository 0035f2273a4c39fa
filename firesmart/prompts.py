"""Prompt text and JSON response schemas sent to the analysis provider."""

from typing import Any, Dict, Sequence

from .zone import Zone

FIRE_SAFETY_SYSTEM_INSTRUCTION = """
You are a Senior Fire Safety Engineer and Hazardous Materials (HAZMAT) Specialist.
Your goal is to analyze factory floor plans (images) and chemical inventories (text) to provide actionable safety intelligence for facility managers and emergency responders.

Operational Guidelines:
1. Visual Analysis: Identify spatial relationships, exit routes, and potential bottlenecks from the uploaded floor plan image.
2. Chemical Logic: Cross-reference stored items provided in the text with the GHS (Globally Harmonized System) for chemical classification.
3. Response Protocol: Focus on generating a "Tactical Worksheet" for firefighters (extinguishing agents, PPE, and hazards).
4. Safety Standards: Base all recommendations on NFPA (National Fire Protection Association) or equivalent international safety standards.

Output Format:
Use structured Markdown.
- Use Level 2 Headers (##) for main sections.
- Use bold tables for data.
- Ensure the output is concise and mobile-friendly.

Required Sections in Response:
1. **Executive Summary**: Brief overview of the facility risk level.
2. **Tactical Worksheet (Responders)**:
    - Primary Hazards
    - Recommended Extinguishing Agents
    - Required PPE Level
3. **Room-by-Room Analysis**: Combine visual data (location) with text data (chemicals) to identify specific hotspots.
4. **Code Compliance & Gaps**: Potential NFPA violations based on the layout and storage.
"""


def _location(zone: Zone) -> str:
    if zone.coords is None:
        return ""
    return " [Map Coords: X={:.1f}%, Y={:.1f}%]".format(zone.coords.x, zone.coords.y)


def zone_context(zones: Sequence[Zone], with_ids: bool = True) -> str:
    lines = []
    for zone in zones:
        if with_ids:
            lines.append(
                '- Room: "{}" (ID: {}){}\n  Inventory: {}'.format(
                    zone.name, zone.id, _location(zone), zone.inventory
                )
            )
        else:
            lines.append(
                '- Room/Zone: "{}"{}\n  Inventory/Hazards: {}'.format(
                    zone.name, _location(zone), zone.inventory
                )
            )
    return "\n".join(lines)


def facility_report_prompt(zones: Sequence[Zone]) -> str:
    return "Analyze the attached floor plan with this inventory:\n{}".format(
        zone_context(zones, with_ids=False)
    )


def zone_analysis_prompt(zone: Zone) -> str:
    if zone.coords is not None:
        location = "Location on Map: X={:.1f}%, Y={:.1f}%".format(
            zone.coords.x, zone.coords.y
        )
    else:
        location = "Location: Not mapped"
    return "Analyze room {} with inventory: {}. {}".format(
        zone.name, zone.inventory, location
    )


def emergency_prompt(zone: Zone) -> str:
    location = ""
    if zone.coords is not None:
        location = "(Map Location: X={:.1f}%, Y={:.1f}%)".format(
            zone.coords.x, zone.coords.y
        )
    return "Fire reported in {} {}. Provide tactical instructions.".format(
        zone.name, location
    )


def optimization_prompt(zones: Sequence[Zone]) -> str:
    return """
Context: Factory Inventory Optimization.
Data:
{}

STRICT SAFETY RULE:
Interactive materials (those that enhance combustion or trigger explosions) MUST NOT be stored in adjacent rooms.
There must be a safe separation distance. Ensure that high-risk materials are relocated so that they do not share boundaries with incompatible hazards.

Goal: Reorganize the facility to minimize fire propagation risk and ensure interactive materials are far apart.

Output Format: JSON
""".format(zone_context(zones))


def simulation_prompt(zones: Sequence[Zone], origin_ids: Sequence[str]) -> str:
    origins = ", ".join(z.name for z in zones if z.id in origin_ids)
    return """
Context: Active Fire Incident.
Origin(s): [ {} ].

Floor Plan and Inventory:
{}

Request:
1. Calculate firefighter entry path.
2. Predict spread to adjacent rooms based on chemical hazards.
3. Identify tactical danger/caution points.

Output Format: JSON
""".format(origins, zone_context(zones))


def safe_zone_prompt(zones: Sequence[Zone], item: str) -> str:
    context = "\n".join(
        '- Room: "{}" (ID: {})\n  Current Inventory: {}'.format(
            z.name, z.id, z.inventory
        )
        for z in zones
    )
    return """
Context: User wants to store a NEW ITEM in the facility.
New Item: "{}"

Existing Zones & Inventory:
{}

STRICT STORAGE SAFETY RULES:
1. Incompatible or interactive materials (e.g., fuels vs oxidizers, or items that cause secondary explosions) MUST be separated by a safe distance.
2. DO NOT suggest a room that is ADJACENT to (shares a wall or is directly next to) a room containing materials that could interact dangerously with the new item.
3. Maintain a buffer of at least one empty or non-hazardous room between major interactive hazard classes.

Identify the SAFEST Room for this new item.

Output Format: JSON
""".format(item, context)


DETECT_ZONES_PROMPT = """
Analyze this floor plan image to identify storage zones.

STRICT DETECTION RULES:
1. Identify ONLY clearly delineated, fully enclosed rooms or confirmed major storage zones.
2. IGNORE hallways, corridors, stairwells, lobbies, or any ambiguous open spaces.
3. If a space is not clearly a specific room (e.g., walls are missing or it looks like a transit area), DO NOT label it.
4. Estimate the center coordinates (x, y) as percentages (0-100).

Output Format: JSON
"""


def _string() -> Dict[str, Any]:
    return {"type": "STRING"}


def _enum(*values: str) -> Dict[str, Any]:
    return {"type": "STRING", "enum": list(values)}


def _array(items: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": "ARRAY", "items": items}


def _object(required: Sequence[str] = (), **properties: Dict[str, Any]) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": "OBJECT", "properties": properties}
    if required:
        schema["required"] = list(required)
    return schema


_POINT = _object(["x", "y"], x={"type": "NUMBER"}, y={"type": "NUMBER"})

DETECT_ZONES_SCHEMA = _object(["rooms"], rooms=_array(_POINT))

SAFE_ZONE_SCHEMA = _object(
    ["recommended_room_id", "room_name", "reasoning", "safety_tips"],
    recommended_room_id=_string(),
    room_name=_string(),
    reasoning=_string(),
    safety_tips=_string(),
)

ZONE_ANALYSIS_SCHEMA = _object(
    [
        "report_title",
        "room_id",
        "safety_score",
        "risk_level",
        "key_findings",
        "corrective_actions",
    ],
    report_title=_string(),
    room_id=_string(),
    safety_score={"type": "INTEGER"},
    risk_level=_string(),
    key_findings=_array(
        _object(category=_string(), description=_string(), severity=_string())
    ),
    corrective_actions=_array(
        _object(
            action_id=_string(),
            description=_string(),
            priority=_string(),
            due_date_suggestion=_string(),
        )
    ),
    additional_notes=_string(),
)

EMERGENCY_SCHEMA = _object(
    [
        "incident_summary",
        "room_id",
        "primary_hazards",
        "extinguishing_agents",
        "firefighter_ppe",
        "entry_exit_guidance",
        "containment_strategy",
    ],
    incident_summary=_string(),
    room_id=_string(),
    primary_hazards=_array(
        _object(hazard_type=_string(), details=_string(), urgency=_string())
    ),
    extinguishing_agents=_object(
        recommended=_array(_string()),
        prohibited=_array(_string()),
        details=_string(),
    ),
    firefighter_ppe=_array(_string()),
    entry_exit_guidance=_object(
        safest_entry_point=_string(),
        primary_evacuation_route=_string(),
        special_considerations=_string(),
    ),
    containment_strategy=_string(),
)

OPTIMIZATION_SCHEMA = _object(
    [
        "safety_status",
        "safety_assessment",
        "relocation_plan",
        "recommended_zone_layouts",
        "segregation_rules_applied",
    ],
    safety_status=_enum("SAFE", "UNSAFE", "CRITICAL"),
    safety_assessment=_string(),
    relocation_plan=_array(
        _object(
            item_name=_string(),
            current_room=_string(),
            suggested_room=_string(),
            reason=_string(),
            priority=_enum("HIGH", "MEDIUM", "LOW"),
        )
    ),
    recommended_zone_layouts=_array(
        _object(
            room_id=_string(),
            room_name=_string(),
            assigned_items=_array(_string()),
            safety_rationale=_string(),
            compatibility_notes=_string(),
        )
    ),
    segregation_rules_applied=_array(_string()),
)

SIMULATION_SCHEMA = _object(
    [
        "simulation_id",
        "primary_fire_zones",
        "firefighter_entry_route",
        "route_coordinates",
        "tactical_markers",
        "fire_propagation_analysis",
        "tactical_recommendations",
    ],
    simulation_id=_string(),
    primary_fire_zones=_array(_string()),
    firefighter_entry_route=_object(
        entry_point=_string(),
        path_description=_string(),
        hazards_on_path=_array(_string()),
        estimated_risk=_enum("LOW", "MEDIUM", "HIGH", "EXTREME"),
    ),
    route_coordinates=_array(_POINT),
    tactical_markers=_array(
        _object(
            x={"type": "NUMBER"},
            y={"type": "NUMBER"},
            type=_enum("CAUTION", "DANGER"),
            label=_string(),
            action_protocol=_string(),
        )
    ),
    fire_propagation_analysis=_array(
        _object(
            affected_room_id=_string(),
            room_name=_string(),
            impact_type=_enum("THERMAL", "SMOKE", "EXPLOSION", "STRUCTURAL_COLLAPSE"),
            severity=_enum("LOW", "MEDIUM", "HIGH", "CRITICAL"),
            time_to_impact_estimate=_string(),
            reason=_string(),
        )
    ),
    tactical_recommendations=_array(_string()),
)
