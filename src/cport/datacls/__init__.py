"""
cport data classes

- phases: BuildPhase and BuildCommand enums
- identity: ContainerIdentity (label triple) and ContainerHandle
- runtime: records exchanged with the container runtime
"""

from .phases import BuildPhase, BuildCommand
from .identity import ContainerIdentity, ContainerHandle
from .runtime import BindMount, ContainerSpec, CreatedContainer, ContainerSummary, ExecStream

__all__ = [
    'BuildPhase',
    'BuildCommand',
    'ContainerIdentity',
    'ContainerHandle',
    'BindMount',
    'ContainerSpec',
    'CreatedContainer',
    'ContainerSummary',
    'ExecStream',
]
