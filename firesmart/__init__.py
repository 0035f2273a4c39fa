"""Public package API exports for firesmart."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as importlib_version

from .editor import AnnotationEditor, EditorMode, PointerDown
from .gateway import FacilityImage, Gateway, GatewayError
from .orchestrator import Orchestrator
from .result import ModalKind
from .selection import SelectionController
from .session import Action, ReportStatus, Session
from .workspace import Workspace
from .zone import Coords, Zone, ZoneRegistry

try:
    __version__ = importlib_version("firesmart")
except PackageNotFoundError:  # pragma: no cover - running from a source tree
    __version__ = "0.0.0"

__all__ = [
    "Action",
    "AnnotationEditor",
    "Coords",
    "EditorMode",
    "FacilityImage",
    "Gateway",
    "GatewayError",
    "ModalKind",
    "Orchestrator",
    "PointerDown",
    "ReportStatus",
    "SelectionController",
    "Session",
    "Workspace",
    "Zone",
    "ZoneRegistry",
]
