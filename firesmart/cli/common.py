import dataclasses
import json
import sys
from enum import Enum
from typing import Any, Callable, List, TextIO, TypeVar

import click

from ..gateway import FacilityImage, Gateway
from ..gemini import DEFAULT_MODEL, GeminiGateway
from ..workspace import Workspace
from ..zone import Zone
from .logging_gateway import LoggingGateway

F = TypeVar("F", bound=Callable[..., Any])


def workspace_options(f: F) -> F:
    """Options shared by every command that talks to the analysis provider."""
    options = [
        click.option("--api-key", envvar="GEMINI_API_KEY", required=True),
        click.option("--model", default=DEFAULT_MODEL, show_default=True),
        click.option(
            "--image",
            "image_path",
            type=click.Path(exists=True, dir_okay=False),
            required=True,
            help="Floor plan image",
        ),
        click.option(
            "--zones",
            "zones_path",
            type=click.Path(exists=True, dir_okay=False),
            help="JSON file containing a list of zones",
        ),
        click.option(
            "--logfile", type=click.Path(), help="Write gateway requests/responses to file"
        ),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def load_zones(path: str | None) -> List[Zone]:
    if path is None:
        return []
    with open(path) as fp:
        data = json.load(fp)
    return [Zone.from_dict(item) for item in data]


def build_workspace(
    api_key: str,
    model: str,
    image_path: str,
    zones_path: str | None,
    logfile: str | None,
) -> Workspace:
    gateway: Gateway = GeminiGateway(api_key=api_key, model=model)
    if logfile is not None:
        log_fp: TextIO = open(logfile, "a")
        gateway = LoggingGateway(gateway, log_fp)

    workspace = Workspace(gateway=gateway)
    try:
        workspace.session.zones.add_many(load_zones(zones_path))
    except (ValueError, KeyError, TypeError) as e:
        raise click.BadParameter(
            "invalid zone list: {}".format(e), param_hint="'--zones'"
        ) from e
    workspace.orchestrator.load_image(FacilityImage.from_path(image_path))
    return workspace


def _default(o: Any) -> Any:
    if dataclasses.is_dataclass(o) and not isinstance(o, type):
        return dataclasses.asdict(o)
    if isinstance(o, Enum):
        return o.value
    return str(o)


def to_json(value: Any) -> str:
    return json.dumps(value, indent=2, default=_default)


def finish(workspace: Workspace, output: str | None) -> None:
    """Print the action output, or the session error and exit non-zero."""
    if output is not None:
        click.echo(output)
    error = workspace.session.error_message
    if output is None and error is not None:
        click.echo(error, err=True)
        sys.exit(1)


def dump_zones(workspace: Workspace) -> str:
    return json.dumps([z.to_dict() for z in workspace.session.zones], indent=2)
