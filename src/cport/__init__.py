"""
cport - cmake container builder

Builds a CMake project inside a reusable Docker container. The container
is found again on the next run through its labels, so packages installed
with `cport install` and the build directory survive between runs.

Main modules:
- config: cport.toml loading and validation
- builder: container lookup, session and build pipelines
- runtime: Docker Engine implementation of the runtime protocol
- datacls: identity, phases and runtime records
- utils: logging setup

Quick start example:
```python
from cport import Builder, DockerRuntime, read_toml

builder = Builder(read_toml("cport.toml"), DockerRuntime.from_env())
builder.build()
```
"""

__version__ = "0.3.0"

from .config import BuildConfig, Config, ConfigModel, read_toml
from .builder import Builder, ContainerLocator, ContainerSession, OutputRelay, build_args
from .datacls import BuildPhase, BuildCommand, ContainerIdentity, ContainerHandle
from .protocols import ContainerRuntimeProtocol
from .runtime import DockerRuntime
from .utils import LogSettings, setup_logger
from .exceptions import (
    CPortError,
    ErrorKind,
    ConfigurationError,
    ConfigValidationError,
    ContainerError,
    ContainerFault,
    TransportError,
    BuildToolError,
)

__all__ = [
    # Version
    '__version__',
    # Config
    'BuildConfig',
    'Config',
    'ConfigModel',
    'read_toml',
    # Builder
    'Builder',
    'ContainerLocator',
    'ContainerSession',
    'OutputRelay',
    'build_args',
    # Data classes
    'BuildPhase',
    'BuildCommand',
    'ContainerIdentity',
    'ContainerHandle',
    # Runtime
    'ContainerRuntimeProtocol',
    'DockerRuntime',
    # Logging
    'LogSettings',
    'setup_logger',
    # Exceptions
    'CPortError',
    'ErrorKind',
    'ConfigurationError',
    'ConfigValidationError',
    'ContainerError',
    'ContainerFault',
    'TransportError',
    'BuildToolError',
]
