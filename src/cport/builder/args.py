import logging
from typing import List

from .. import constants
from ..config import BuildConfig
from ..datacls import BuildPhase

logger = logging.getLogger(__name__)


def build_args(phase: BuildPhase, config: BuildConfig) -> List[str]:
    """
    Argument vector of the cmake invocation for a phase.

    Configure:  cmake -B<build> -H<source> -G<generator> -D<key>=<value>...
    Build:      cmake --build <build>

    Options keep the order of the mapping, so the same config always yields
    the same vector.
    """
    if phase is BuildPhase.CONFIGURE:
        args = [
            constants.CMAKE,
            f"-B{config.build_path}",
            f"-H{config.source}",
            f"-G{config.generator}",
        ]
        args.extend(f"-D{key}={value}" for key, value in config.options.items())
    elif phase is BuildPhase.BUILD:
        args = [constants.CMAKE, "--build", str(config.build_path)]
    else:
        raise ValueError(f"No cmake invocation for the {phase.value} phase")
    logger.debug(f"[Args] Generate command: {' '.join(args)}")
    return args


def provision_commands(config: BuildConfig) -> List[List[str]]:
    """Refresh the package index, then install the configured packages."""
    return [
        list(constants.APT_UPDATE),
        constants.APT_INSTALL + list(config.packages),
    ]


def phase_commands(phase: BuildPhase, config: BuildConfig) -> List[List[str]]:
    """Every argument vector a phase executes, in order."""
    if phase is BuildPhase.PROVISION:
        return provision_commands(config)
    return [build_args(phase, config)]
