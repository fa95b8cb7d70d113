"""
Container identity

A build container is identified by the (image, source, build directory)
triple. The triple is stored as labels on the container so a later run
with the same configuration can find and reuse it.
"""

from typing import Dict

from pydantic import BaseModel, ConfigDict

from .. import constants
from ..config import BuildConfig


class ContainerIdentity(BaseModel):
    """Idempotence key of a build container. Derived, never persisted by cport."""
    model_config = ConfigDict(frozen=True)

    image: str
    source: str
    build_dir: str

    @classmethod
    def from_config(cls, config: BuildConfig) -> "ContainerIdentity":
        return cls(
            image=config.image,
            source=str(config.source),
            build_dir=config.build_dir,
        )

    @property
    def labels(self) -> Dict[str, str]:
        return {
            constants.LABEL_IMAGE: self.image,
            constants.LABEL_SOURCE: self.source,
            constants.LABEL_BUILD: self.build_dir,
        }

    def matches(self, labels: Dict[str, str]) -> bool:
        """True when every identity label is present with the same value."""
        return all(labels.get(key) == value for key, value in self.labels.items())

    def __str__(self) -> str:
        return f"{self.image} @ {self.source} ({self.build_dir})"


class ContainerHandle(BaseModel):
    """Runtime-assigned container id owned by one run."""
    model_config = ConfigDict(frozen=True)

    id: str
    created: bool = False

    @property
    def short_id(self) -> str:
        return self.id[:12]
