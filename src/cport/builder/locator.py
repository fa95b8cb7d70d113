import logging
from typing import List, Optional

from ..config import BuildConfig
from ..datacls import BindMount, ContainerHandle, ContainerIdentity, ContainerSpec, ContainerSummary
from ..protocols import ContainerRuntimeProtocol

logger = logging.getLogger(__name__)


class ContainerLocator:
    """
    Find-or-create for build containers.

    A container created by cport carries its identity as labels; a later
    run with the same identity adopts it instead of creating another one.
    """

    def __init__(self, runtime: ContainerRuntimeProtocol):
        self.runtime = runtime

    def locate(self, identity: ContainerIdentity) -> Optional[str]:
        """
        Look up a container (running or stopped) carrying all identity labels.

        When several match, the most recently created one wins (ties broken by
        id) and a warning lists the others.
        """
        found = self.runtime.list_containers(identity.labels)
        # The runtime filters by label already; double check in case it is lax
        found = [c for c in found if identity.matches(c.labels)]
        if not found:
            logger.info(f"[Locator] No container found for {identity}")
            return None
        chosen = self._pick(found)
        if len(found) > 1:
            others = ", ".join(c.short_id for c in found if c.id != chosen.id)
            logger.warning(
                f"[Locator] {len(found)} containers match {identity}; "
                f"using newest {chosen.short_id}, ignoring {others}"
            )
        logger.info(f"[Locator] Container found: {chosen.id}")
        return chosen.id

    @staticmethod
    def _pick(candidates: List[ContainerSummary]) -> ContainerSummary:
        return sorted(candidates, key=lambda c: (-c.created, c.id))[0]

    def create_or_adopt(self, identity: ContainerIdentity, config: BuildConfig) -> ContainerHandle:
        """
        Adopt the container of ``identity`` as is, or create it.

        The new container bind-mounts the source tree at the same path so
        absolute paths are valid on both sides, keeps a tty, and is not
        auto-removed so the next run can reuse it.
        """
        existing = self.locate(identity)
        if existing is not None:
            return ContainerHandle(id=existing, created=False)

        src = str(config.source)
        spec = ContainerSpec(
            image=config.image,
            binds=[BindMount(src=src, dst=src)],
            tty=True,
            labels=identity.labels,
            auto_remove=False,
        )
        created = self.runtime.create_container(spec)
        for warning in created.warnings:
            logger.warning(f"[Locator] {warning}")
        logger.info(f"[Locator] New container created: {created.id}")
        return ContainerHandle(id=created.id, created=True)
