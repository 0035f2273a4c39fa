import asyncio
from typing import Tuple

import click

from .common import build_workspace, finish, to_json, workspace_options


@click.command(help="Generate a full facility safety report (markdown)")
@workspace_options
def report(
    api_key: str, model: str, image_path: str, zones_path: str | None, logfile: str | None
) -> None:
    workspace = build_workspace(api_key, model, image_path, zones_path, logfile)
    markdown = asyncio.run(workspace.orchestrator.generate_report())
    finish(workspace, markdown)


@click.command(help="Analyze a single zone")
@workspace_options
@click.argument("zone_id")
def analyze(
    api_key: str,
    model: str,
    image_path: str,
    zones_path: str | None,
    logfile: str | None,
    zone_id: str,
) -> None:
    workspace = build_workspace(api_key, model, image_path, zones_path, logfile)
    result = asyncio.run(workspace.orchestrator.analyze_zone(zone_id))
    finish(workspace, to_json(result) if result is not None else None)


@click.command(help="Generate an emergency plan for a fire reported in a zone")
@workspace_options
@click.argument("zone_id")
def emergency(
    api_key: str,
    model: str,
    image_path: str,
    zones_path: str | None,
    logfile: str | None,
    zone_id: str,
) -> None:
    workspace = build_workspace(api_key, model, image_path, zones_path, logfile)
    result = asyncio.run(workspace.orchestrator.report_fire(zone_id))
    finish(workspace, to_json(result) if result is not None else None)


@click.command(help="Propose a safer storage layout for the whole facility")
@workspace_options
def optimize(
    api_key: str, model: str, image_path: str, zones_path: str | None, logfile: str | None
) -> None:
    workspace = build_workspace(api_key, model, image_path, zones_path, logfile)
    result = asyncio.run(workspace.orchestrator.optimize_storage())
    finish(workspace, to_json(result) if result is not None else None)


@click.command(help="Simulate fire spreading from one or more origin zones")
@workspace_options
@click.argument("origin_ids", nargs=-1, required=True)
def simulate(
    api_key: str,
    model: str,
    image_path: str,
    zones_path: str | None,
    logfile: str | None,
    origin_ids: Tuple[str, ...],
) -> None:
    workspace = build_workspace(api_key, model, image_path, zones_path, logfile)
    selection = workspace.selection
    if selection.start():
        for zone_id in origin_ids:
            selection.toggle(zone_id)
        result = asyncio.run(selection.execute())
    else:
        result = None

    output = None
    if result is not None:
        output = to_json(
            {
                "fire_locations": workspace.session.modal.fire_locations,
                "simulation": result,
            }
        )
    finish(workspace, output)
