"""
cport Protocol Definitions

The container runtime is an external collaborator. The orchestrator only
depends on this protocol, so tests can drive it with a recording fake and
the Docker implementation lives in ``cport.runtime``.
"""

from typing import List, Mapping, Optional, Protocol, runtime_checkable

from .datacls.runtime import ContainerSpec, ContainerSummary, CreatedContainer, ExecStream


# ============================================================================
# Runtime Protocols
# ============================================================================

@runtime_checkable
class ContainerRuntimeProtocol(Protocol):
    """
    Protocol for the container runtime primitives cport relies on.

    Every method blocks until the runtime answers. Implementations raise
    ``ContainerFault`` for structured rejections and ``TransportError``
    for anything else.
    """

    def list_containers(self, labels: Mapping[str, Optional[str]]) -> List[ContainerSummary]:
        """
        List containers, stopped ones included, filtered by label.

        Args:
            labels: Label key to required value; ``None`` only requires the key

        Returns:
            Summaries in the runtime's own order
        """
        ...

    def create_container(self, spec: ContainerSpec) -> CreatedContainer:
        """
        Create (but do not start) a container.

        Returns:
            The new container id and any non-fatal warnings
        """
        ...

    def start_container(self, container_id: str) -> None:
        ...

    def stop_container(self, container_id: str, timeout: Optional[int] = None) -> None:
        """
        Stop a container.

        Args:
            timeout: Seconds before a forced kill; ``None`` keeps the runtime default
        """
        ...

    def exec_stream(self, container_id: str, argv: List[str]) -> ExecStream:
        """
        Run a command in a started container with stdout and stderr attached.

        Returns:
            Stream of merged output chunks as they are produced
        """
        ...
