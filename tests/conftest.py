import logging
from pathlib import Path
from typing import Dict, List, Optional

import pytest

from cport.config import BuildConfig
from cport.datacls import ContainerSpec, ContainerSummary, CreatedContainer, ExecStream
from cport.exceptions import ContainerFault


class FakeRuntime:
    """Recording container runtime for testing without a Docker daemon.

    Containers live in ``self.containers`` in runtime listing order. Every
    call is appended to ``self.calls`` as ``(name, args)``.
    """

    def __init__(self):
        self.calls: List[tuple] = []
        self.containers: List[ContainerSummary] = []
        self.create_fault: Optional[ContainerFault] = None
        self.start_fault: Optional[ContainerFault] = None
        self.stop_fault: Optional[ContainerFault] = None
        self.create_warnings: List[str] = []
        # argv[0:2] joined by space -> exit code, default 0
        self.exit_codes: Dict[str, int] = {}
        self.output: Dict[str, List[bytes]] = {}
        self._next_id = 1

    def add_container(self, labels: Dict[str, str], created: int = 0, cid: Optional[str] = None) -> str:
        cid = cid or f"existing{len(self.containers):056d}"
        self.containers.append(ContainerSummary(id=cid, image="debian", labels=labels, state="exited", created=created))
        return cid

    def list_containers(self, labels):
        self.calls.append(("list", (dict(labels),)))
        found = []
        for c in self.containers:
            if all(k in c.labels and (v is None or c.labels[k] == v) for k, v in labels.items()):
                found.append(c)
        return found

    def create_container(self, spec: ContainerSpec) -> CreatedContainer:
        self.calls.append(("create", (spec,)))
        if self.create_fault:
            raise self.create_fault
        cid = f"created{self._next_id:057d}"
        self._next_id += 1
        self.containers.append(ContainerSummary(id=cid, image=spec.image, labels=dict(spec.labels), state="created"))
        return CreatedContainer(id=cid, warnings=list(self.create_warnings))

    def start_container(self, container_id: str) -> None:
        self.calls.append(("start", (container_id,)))
        if self.start_fault:
            raise self.start_fault

    def stop_container(self, container_id: str, timeout=None) -> None:
        self.calls.append(("stop", (container_id, timeout)))
        if self.stop_fault:
            raise self.stop_fault

    def exec_stream(self, container_id: str, argv: List[str]) -> ExecStream:
        self.calls.append(("exec", (container_id, list(argv))))
        key = " ".join(argv[:2])
        chunks = self.output.get(key, [f"$ {' '.join(argv)}\n".encode()])
        return ExecStream(chunks, lambda: self.exit_codes.get(key, 0))

    # --- helpers for assertions ---
    @property
    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def exec_argvs(self) -> List[List[str]]:
        return [args[1] for name, args in self.calls if name == "exec"]


@pytest.fixture
def runtime():
    return FakeRuntime()


@pytest.fixture
def proj_config():
    """The reference configuration used across scenarios."""
    return BuildConfig(
        source=Path("/proj"),
        image="debian",
        options={"CMAKE_BUILD_TYPE": "Release"},
    )


@pytest.fixture
def project_dir(tmp_path: Path):
    """A project directory with a CMakeLists.txt and a helper to write cport.toml."""
    (tmp_path / "CMakeLists.txt").write_text("cmake_minimum_required(VERSION 3.10)\nproject(demo)\n")

    def _write(content: str) -> Path:
        toml_path = tmp_path / "cport.toml"
        toml_path.write_text(content)
        return toml_path
    _write.root = tmp_path
    return _write


@pytest.fixture(autouse=True)
def reset_cport_logging():
    """Drop handlers installed by setup_logger so each test starts clean."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_cport", False):
            root.removeHandler(handler)
    root.setLevel(logging.WARNING)
