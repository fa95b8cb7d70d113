"""
cport container runtimes

- DockerRuntime: ContainerRuntimeProtocol over the Docker Engine API
"""

from .docker_runtime import DockerRuntime, translate_errors

__all__ = [
    'DockerRuntime',
    'translate_errors',
]
