from enum import Enum
from typing import Tuple


class BuildPhase(Enum):
    """A named step executed as remote command(s) inside the build container."""

    PROVISION = "provision"
    CONFIGURE = "configure"
    BUILD = "build"


class BuildCommand(Enum):
    """User-facing pipelines and the phases they run between start and stop."""

    BUILD = "build"
    INSTALL = "install"

    @property
    def phases(self) -> Tuple[BuildPhase, ...]:
        if self is BuildCommand.INSTALL:
            return (BuildPhase.PROVISION,)
        return (BuildPhase.CONFIGURE, BuildPhase.BUILD)
