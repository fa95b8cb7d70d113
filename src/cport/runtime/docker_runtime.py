import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

import docker
import requests
from docker.errors import APIError, DockerException
from docker.utils.socket import SocketError

from ..datacls import ContainerSpec, ContainerSummary, CreatedContainer, ExecStream
from ..exceptions import ContainerFault, TransportError

logger = logging.getLogger(__name__)


@contextmanager
def translate_errors(action: str):
    """Turn docker SDK failures into ContainerFault / TransportError."""
    try:
        yield
    except APIError as e:
        message = e.explanation or str(e)
        if isinstance(message, bytes):
            message = message.decode("utf-8", errors="replace")
        logger.debug(f"[Docker] {action} rejected: {e.status_code} {message}")
        raise ContainerFault(e.status_code, str(message).strip()) from e
    except (DockerException, requests.exceptions.RequestException, SocketError, OSError) as e:
        logger.debug(f"[Docker] {action} failed: {e!r}")
        raise TransportError(f"Failed to {action}: {e}") from e


class DockerRuntime:
    """Container runtime backed by the Docker Engine API (docker SDK low-level client)."""

    def __init__(self, api: docker.APIClient):
        self.api = api

    @classmethod
    def from_env(cls, timeout: Optional[int] = None) -> "DockerRuntime":
        """Connect with DOCKER_HOST / DOCKER_TLS_VERIFY / DOCKER_CERT_PATH like the docker CLI."""
        kwargs = {} if timeout is None else {"timeout": timeout}
        with translate_errors("connect to the Docker daemon"):
            client = docker.from_env(**kwargs)
        return cls(client.api)

    def list_containers(self, labels: Mapping[str, Optional[str]]) -> List[ContainerSummary]:
        filters = [key if value is None else f"{key}={value}" for key, value in labels.items()]
        with translate_errors("list containers"):
            raw = self.api.containers(all=True, filters={"label": filters} if filters else None)
        return [self._summary(entry) for entry in raw]

    @staticmethod
    def _summary(entry: Dict[str, Any]) -> ContainerSummary:
        return ContainerSummary(
            id=entry["Id"],
            image=entry.get("Image") or "",
            labels=entry.get("Labels") or {},
            state=entry.get("State") or "",
            status=entry.get("Status") or "",
            created=entry.get("Created") or 0,
        )

    def create_container(self, spec: ContainerSpec) -> CreatedContainer:
        with translate_errors(f"create a container from {spec.image}"):
            host_config = self.api.create_host_config(
                binds=[str(bind) for bind in spec.binds],
                auto_remove=spec.auto_remove,
            )
            resp = self.api.create_container(
                spec.image,
                tty=spec.tty,
                labels=dict(spec.labels),
                volumes=[bind.dst for bind in spec.binds],
                host_config=host_config,
            )
        return CreatedContainer(id=resp["Id"], warnings=resp.get("Warnings") or [])

    def start_container(self, container_id: str) -> None:
        with translate_errors(f"start container {container_id[:12]}"):
            self.api.start(container_id)

    def stop_container(self, container_id: str, timeout: Optional[int] = None) -> None:
        kwargs = {} if timeout is None else {"timeout": timeout}
        with translate_errors(f"stop container {container_id[:12]}"):
            self.api.stop(container_id, **kwargs)

    def exec_stream(self, container_id: str, argv: List[str]) -> ExecStream:
        with translate_errors(f"exec '{argv[0]}' in container {container_id[:12]}"):
            exec_id = self.api.exec_create(container_id, argv, stdout=True, stderr=True)["Id"]
            chunks = self.api.exec_start(exec_id, stream=True)
        return ExecStream(self._guarded(chunks, argv[0]), lambda: self._exit_code(exec_id))

    @staticmethod
    def _guarded(chunks: Iterable[bytes], program: str) -> Iterator[bytes]:
        with translate_errors(f"read output of '{program}'"):
            yield from chunks

    def _exit_code(self, exec_id: str) -> Optional[int]:
        with translate_errors("inspect exec result"):
            return self.api.exec_inspect(exec_id).get("ExitCode")
