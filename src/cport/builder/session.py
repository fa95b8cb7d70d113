import logging
from enum import Enum
from typing import List, Optional

from ..config import BuildConfig
from ..datacls import BuildPhase, ContainerHandle
from ..exceptions import BuildToolError
from ..protocols import ContainerRuntimeProtocol
from .args import phase_commands
from .relay import OutputRelay

logger = logging.getLogger(__name__)


class SessionState(Enum):
    UNSTARTED = "unstarted"
    STARTED = "started"
    PROVISIONED = "provisioned"
    CONFIGURED = "configured"
    BUILT = "built"
    STOPPED = "stopped"


_PHASE_STATES = {
    BuildPhase.PROVISION: SessionState.PROVISIONED,
    BuildPhase.CONFIGURE: SessionState.CONFIGURED,
    BuildPhase.BUILD: SessionState.BUILT,
}


class ContainerSession:
    """
    Drives one build container through start, phases and stop.

    Calls block until the runtime is done, output included. Nothing is
    rolled back: a failed phase leaves the container in the last reached
    state, and stopping it is up to the caller.
    """

    def __init__(
        self,
        runtime: ContainerRuntimeProtocol,
        handle: ContainerHandle,
        config: BuildConfig,
        relay: Optional[OutputRelay] = None,
    ):
        self.runtime = runtime
        self.handle = handle
        self.config = config
        self.relay = relay or OutputRelay()
        self.state = SessionState.UNSTARTED

    @property
    def container_id(self) -> str:
        return self.handle.id

    def start(self) -> None:
        logger.info(f"[Session] Start container: {self.handle.short_id}")
        self.runtime.start_container(self.container_id)
        self.state = SessionState.STARTED

    def stop(self) -> None:
        logger.info(f"[Session] Stop container: {self.handle.short_id}")
        self.runtime.stop_container(self.container_id)
        self.state = SessionState.STOPPED

    def provision(self) -> None:
        """apt update, then apt install of the configured packages."""
        logger.info("[Session] apt install")
        self.run_phase(BuildPhase.PROVISION)

    def configure(self) -> None:
        logger.info("[Session] cmake configure step")
        self.run_phase(BuildPhase.CONFIGURE)

    def build(self) -> None:
        logger.info("[Session] cmake build step")
        self.run_phase(BuildPhase.BUILD)

    def run_phase(self, phase: BuildPhase) -> None:
        for argv in phase_commands(phase, self.config):
            self._exec(phase, argv)
        self.state = _PHASE_STATES[phase]
        logger.debug(f"[Session] Container {self.handle.short_id} is now {self.state.value}")

    def _exec(self, phase: BuildPhase, argv: List[str]) -> None:
        logger.debug(f"[Session] exec in {self.handle.short_id}: {' '.join(argv)}")
        stream = self.runtime.exec_stream(self.container_id, argv)
        self.relay.relay(stream)
        exit_code = stream.exit_code()
        if exit_code is None:
            logger.debug(f"[Session] Exit code of '{argv[0]}' unavailable, assuming success")
        elif exit_code != 0:
            raise BuildToolError(phase.value, exit_code, argv)
