import logging
from typing import Optional

from ..config import BuildConfig
from ..datacls import BuildCommand, BuildPhase, ContainerIdentity
from ..exceptions import CPortError
from ..protocols import ContainerRuntimeProtocol
from ..utils import LogSettings, setup_logger
from .locator import ContainerLocator
from .relay import OutputRelay
from .session import ContainerSession

logger = logging.getLogger(__name__)


class Builder:
    """
    Container builder corresponding to one cport.toml.

    The container is identified by the labels `cport.image`, `cport.source`
    and `cport.build`; see ContainerIdentity.
    """

    def __init__(
        self,
        config: BuildConfig,
        runtime: ContainerRuntimeProtocol,
        log_settings: Optional[LogSettings] = None,
        relay: Optional[OutputRelay] = None,
    ):
        self.config = config
        self.runtime = runtime
        # Library callers keep their own logging unless settings are passed
        self.log_settings = log_settings
        if log_settings is not None:
            setup_logger(log_settings)
        self.relay = relay or OutputRelay()
        self.identity = ContainerIdentity.from_config(config)
        self.locator = ContainerLocator(runtime)
        logger.debug(f"[Builder] Initialized for {self.identity}")

    def get_container(self) -> ContainerSession:
        """Find or create the build container and wrap it in a session."""
        handle = self.locator.create_or_adopt(self.identity, self.config)
        return ContainerSession(self.runtime, handle, self.config, relay=self.relay)

    def run(self, command: BuildCommand) -> ContainerSession:
        """
        Run a pipeline: start, the command's phases in order, stop.

        A failing phase still stops the container before the error
        propagates; a failure of that stop is only logged.
        """
        logger.info(f"[Builder] Starting '{command.value}' for {self.identity}")
        session = self.get_container()
        session.start()
        try:
            for phase in command.phases:
                self._run_phase(session, phase)
        except CPortError:
            self._stop_after_failure(session)
            raise
        session.stop()
        logger.info(f"[Builder] '{command.value}' finished")
        return session

    def build(self) -> ContainerSession:
        """Configure and build."""
        return self.run(BuildCommand.BUILD)

    def install(self) -> ContainerSession:
        """Install apt packages."""
        return self.run(BuildCommand.INSTALL)

    @staticmethod
    def _run_phase(session: ContainerSession, phase: BuildPhase):
        if phase is BuildPhase.PROVISION:
            session.provision()
        elif phase is BuildPhase.CONFIGURE:
            session.configure()
        elif phase is BuildPhase.BUILD:
            session.build()

    @staticmethod
    def _stop_after_failure(session: ContainerSession):
        try:
            session.stop()
        except CPortError as e:
            logger.error(f"[Builder] Failed to stop container {session.handle.short_id}: {e}")
