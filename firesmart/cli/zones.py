import asyncio

import click

from .common import build_workspace, dump_zones, finish, to_json, workspace_options


@click.command(help="Auto-detect zones on the floor plan and print the zone list")
@workspace_options
def detect(
    api_key: str, model: str, image_path: str, zones_path: str | None, logfile: str | None
) -> None:
    workspace = build_workspace(api_key, model, image_path, zones_path, logfile)
    added = asyncio.run(workspace.orchestrator.detect_zones())
    finish(workspace, dump_zones(workspace) if added is not None else None)


@click.command(
    "find-safe-zone",
    help="Find the safest zone for a new item and print the updated zone list",
)
@workspace_options
@click.argument("item")
def find_safe_zone(
    api_key: str,
    model: str,
    image_path: str,
    zones_path: str | None,
    logfile: str | None,
    item: str,
) -> None:
    workspace = build_workspace(api_key, model, image_path, zones_path, logfile)
    recommendation = asyncio.run(workspace.orchestrator.find_safe_zone(item))
    output = None
    if recommendation is not None:
        output = "{}\n{}".format(to_json(recommendation), dump_zones(workspace))
    finish(workspace, output)
