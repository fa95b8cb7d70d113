from typing import Callable, Dict, Iterable, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BindMount(BaseModel):
    model_config = ConfigDict(frozen=True)

    src: str
    dst: str
    mode: str = "rw"

    def __str__(self) -> str:
        return f"{self.src}:{self.dst}:{self.mode}"


class ContainerSpec(BaseModel):
    """Everything the runtime needs to create a build container."""
    model_config = ConfigDict(frozen=True)

    image: str
    binds: List[BindMount] = Field(default_factory=list)
    tty: bool = True
    labels: Dict[str, str] = Field(default_factory=dict)
    auto_remove: bool = False


class CreatedContainer(BaseModel):
    id: str
    warnings: List[str] = Field(default_factory=list)


class ContainerSummary(BaseModel):
    """One entry of a container listing."""
    id: str
    image: str = ""
    labels: Dict[str, str] = Field(default_factory=dict)
    state: str = ""
    status: str = ""
    created: int = 0

    @property
    def short_id(self) -> str:
        return self.id[:12]


class ExecStream:
    """
    Output of a command running inside a container.

    Iterating yields raw output chunks in the order the runtime delivers
    them. ``exit_code()`` is meaningful once the stream is exhausted.
    """

    def __init__(self, chunks: Iterable[bytes], exit_code: Callable[[], Optional[int]]):
        self._chunks = chunks
        self._exit_code = exit_code

    def __iter__(self) -> Iterator[bytes]:
        return iter(self._chunks)

    def exit_code(self) -> Optional[int]:
        return self._exit_code()
