import logging
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Optional, Union

import tomli
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from . import constants
from .exceptions import (
    ConfigFileMissingError,
    ConfigParsingError,
    ConfigReadError,
    ConfigValidationError,
)


logger = logging.getLogger(__name__)


def _option_text(key: str, value: Any) -> str:
    """Render a TOML scalar the way cmake expects it after ``-D<key>=``."""
    if isinstance(value, bool):
        return "ON" if value else "OFF"
    if isinstance(value, (int, float, str)):
        return str(value)
    raise ValueError(f"Option '{key}' must be a string, number or boolean, got {type(value).__name__}")


class CPortModel(BaseModel):
    """
        Class Config-Validation Model describe `[cport]`
    """
    image: str
    apt: List[str] = Field(default_factory=list)
    model_config = ConfigDict(extra="forbid")


class CMakeModel(BaseModel):
    """
        Class Config-Validation Model describe `[cmake]`
    """
    generator: Optional[str] = None
    build: Optional[str] = None
    option: Dict[str, Any] = Field(default_factory=dict)
    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """
        Class Config-Validation Model desribe top-level of cport.toml
    """
    source: Optional[str] = None
    cport: CPortModel
    cmake: CMakeModel = Field(default_factory=CMakeModel)
    model_config = ConfigDict(extra="forbid")


class BuildConfig(BaseModel):
    """
    Normalized, flattened build parameters.

    Read-only once loaded; every other component only consumes it.
    """
    model_config = ConfigDict(frozen=True)

    # Directory holding the root CMakeLists.txt, always absolute
    source: Path
    image: str
    # Packages installed by `cport install`, in the order given
    packages: List[str] = Field(default_factory=list)
    generator: str = constants.DEFAULT_GENERATOR
    # Relative to `source`
    build_dir: str = constants.DEFAULT_BUILD_DIR
    options: Dict[str, str] = Field(default_factory=dict)

    @field_validator("source")
    @classmethod
    def check_absolute_source(cls, value: Path) -> Path:
        if not value.is_absolute():
            raise ValueError(f"source must be an absolute path, got '{value}'")
        return value

    @field_validator("image")
    @classmethod
    def check_image(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("image must not be empty")
        return value

    @field_validator("packages")
    @classmethod
    def dedupe_packages(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))

    @field_validator("build_dir")
    @classmethod
    def check_build_dir(cls, value: str) -> str:
        path = PurePosixPath(value)
        if not value or path.is_absolute():
            raise ValueError(f"build directory must be relative to source, got '{value}'")
        if ".." in path.parts:
            raise ValueError(f"build directory must stay under source, got '{value}'")
        return value

    @field_validator("options", mode="before")
    @classmethod
    def stringify_options(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        rendered = {}
        for key, item in value.items():
            if not key or "=" in key or any(ch.isspace() for ch in key):
                raise ValueError(f"Invalid cmake option name: '{key}'")
            rendered[key] = _option_text(key, item)
        return rendered

    @property
    def build_path(self) -> Path:
        return self.source / self.build_dir


class Config:
    """
    Loads and validates cport.toml using Pydantic models.
    It is the sole gatekeeper for configuration.
    """
    def __init__(self, config_path: Union[str, Path]):
        self.path = Path(config_path)
        logger.info(f"Loading configuration from '{self.path}'...")
        raw_data = self._load_raw_config()

        try:
            self.model = ConfigModel.model_validate(raw_data)
        except ValidationError as e:
            raise ConfigValidationError(f"Configuration validation failed:\n{e}")
        self.record = self._normalize()
        logger.info(f"Load {self.path}: {self.record!r}")

    def _load_raw_config(self) -> Dict[str, Any]:
        try:
            with open(self.path, "rb") as f:
                config_data = tomli.load(f)
            logger.debug(f"Successfully parsed TOML from '{self.path}'.")
            return config_data
        except FileNotFoundError:
            raise ConfigFileMissingError(f"Configuration file not found at: {self.path}")
        except IsADirectoryError:
            raise ConfigFileMissingError(f"Configuration path is a directory: {self.path}")
        except tomli.TOMLDecodeError as e:
            raise ConfigParsingError(f"Error parsing TOML file {self.path}: {e}")
        except UnicodeDecodeError as e:
            raise ConfigParsingError(f"Error parsing TOML file {self.path}: not valid UTF-8 ({e})")
        except OSError as e:
            raise ConfigReadError(f"Cannot read configuration file {self.path}: {e}")

    def _resolve_source(self) -> Path:
        """The TOML's directory unless `source` is given; relative sources hang off that directory."""
        base = self.path.resolve().parent
        if self.model.source is None:
            return base
        source = Path(self.model.source).expanduser()
        if not source.is_absolute():
            source = base / source
        return source.resolve()

    def _normalize(self) -> BuildConfig:
        source = self._resolve_source()
        if not source.is_dir():
            raise ConfigValidationError(f"Source directory does not exist: {source}")
        if not (source / constants.CMAKE_LISTS).is_file():
            raise ConfigValidationError(f"No {constants.CMAKE_LISTS} found in source directory: {source}")

        cmake = self.model.cmake
        try:
            return BuildConfig(
                source=source,
                image=self.model.cport.image,
                packages=self.model.cport.apt,
                generator=cmake.generator or constants.DEFAULT_GENERATOR,
                build_dir=cmake.build or constants.DEFAULT_BUILD_DIR,
                options=cmake.option,
            )
        except ValidationError as e:
            raise ConfigValidationError(f"Configuration validation failed:\n{e}")


def read_toml(config_path: Union[str, Path]) -> BuildConfig:
    """Read and normalize a configuration TOML."""
    return Config(config_path).record
