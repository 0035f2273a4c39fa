from .editor import AnnotationEditor
from .gateway import Gateway
from .gemini import DEFAULT_MODEL, GeminiGateway
from .orchestrator import Orchestrator
from .selection import SelectionController
from .session import Session


class Workspace:
    """
    Wires a session to the editor, the selection controller and the
    orchestrator.

    :param gateway: Analysis provider. When omitted a :py:class:`GeminiGateway`
        is built from ``api_key`` and ``model``.
    :param session: Existing session to attach to
    """

    def __init__(
        self,
        gateway: Gateway | None = None,
        api_key: str | None = None,
        model: str = DEFAULT_MODEL,
        session: Session | None = None,
    ) -> None:
        if gateway is None:
            if api_key is None:
                raise ValueError("Must provide gateway or api_key")
            gateway = GeminiGateway(api_key=api_key, model=model)

        self.session = session if session is not None else Session()
        self.gateway = gateway
        self.orchestrator = Orchestrator(gateway=gateway, session=self.session)
        self.editor = AnnotationEditor(self.session.zones)
        self.selection = SelectionController(self.session, self.orchestrator)
