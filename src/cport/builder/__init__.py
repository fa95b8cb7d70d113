"""
cport Builder Module

- Builder: find-or-create the build container and run a pipeline in it
- ContainerLocator: label-based container lookup and creation
- ContainerSession: start / provision / configure / build / stop
- OutputRelay: streams command output to the caller
- build_args, provision_commands: argument vectors of each phase

Usage:
    from cport.builder import Builder
    from cport.config import read_toml
    from cport.runtime import DockerRuntime

    builder = Builder(read_toml("cport.toml"), DockerRuntime.from_env())
    builder.build()
"""

from .build import Builder
from .locator import ContainerLocator
from .session import ContainerSession, SessionState
from .relay import OutputRelay
from .args import build_args, provision_commands, phase_commands

__all__ = [
    'Builder',
    'ContainerLocator',
    'ContainerSession',
    'SessionState',
    'OutputRelay',
    'build_args',
    'provision_commands',
    'phase_commands',
]
