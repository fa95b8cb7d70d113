# logger.py
import logging
import os
import sys
from typing import Dict, Optional

import colorlog
from pydantic import BaseModel, ConfigDict, Field

from .. import constants


class LogSettings(BaseModel):
    """
    Explicit logging configuration, built once from CLI flags and handed to
    whatever needs to set up logging.
    """
    model_config = ConfigDict(frozen=True)

    level: int = logging.WARNING
    module_levels: Dict[str, str] = Field(default_factory=dict)
    log_file: Optional[str] = None

    @classmethod
    def from_flags(
        cls,
        debug: bool = False,
        verbose: bool = False,
        quiet: bool = False,
        log_levels: Optional[str] = None,
        log_file: Optional[str] = None,
    ) -> "LogSettings":
        """Map verbosity flags to one of four levels; --debug wins over -v, -v over -q."""
        if debug:
            level = logging.DEBUG
        elif verbose:
            level = logging.INFO
        elif quiet:
            level = logging.ERROR
        else:
            level = logging.WARNING
        return cls(level=level, module_levels=parse_module_levels(log_levels), log_file=log_file)

    @property
    def debug(self) -> bool:
        return self.level <= logging.DEBUG


def parse_module_levels(log_levels: Optional[str]) -> Dict[str, str]:
    """Parse 'name=LEVEL,name=LEVEL' into a mapping; malformed pairs are skipped."""
    module_levels = {}
    if not log_levels:
        return module_levels
    for pair in log_levels.split(','):
        pair = pair.strip()
        if not pair or '=' not in pair:
            continue
        name, lvl = pair.split('=', 1)
        module_levels[name.strip()] = lvl.strip().upper()
    return module_levels


def setup_logger(settings: Optional[LogSettings] = None):
    """
    Configures the root logger for the application with colored output.

    Args:
        settings: Level, per-module levels and optional log file
    """
    settings = settings or LogSettings()
    logger = logging.getLogger()
    logger.setLevel(settings.level)

    # Prevent duplicate handlers if this function is called multiple times
    if any(getattr(h, "_cport", False) for h in logger.handlers):
        # Even if handlers exist, still allow adjusting module levels dynamically
        _apply_module_levels(settings.module_levels)
        return

    # Respect NO_COLOR env var (https://no-color.org/)
    use_colors = sys.stderr.isatty() and not os.environ.get("NO_COLOR")

    # Console handler (stderr); stdout carries the build output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.NOTSET)

    if use_colors:
        console_formatter = colorlog.ColoredFormatter(
            '%(log_color)s[%(levelname).4s]%(reset)s %(cyan)s%(name)s%(reset)s: %(message)s',
            log_colors={
                'DEBUG': 'cyan',
                'INFO': 'green',
                'WARNING': 'yellow',
                'ERROR': 'red',
                'CRITICAL': 'red,bg_white',
            },
            reset=True,
            style='%'
        )
    else:
        console_formatter = logging.Formatter('[%(levelname).4s] %(name)s: %(message)s')

    console_handler.setFormatter(console_formatter)
    console_handler._cport = True
    logger.addHandler(console_handler)

    if settings.log_file:
        try:
            file_handler = logging.FileHandler(settings.log_file, mode='w', encoding='utf-8')
            file_handler.setLevel(logging.NOTSET)
            file_formatter = logging.Formatter(
                '%(asctime)s [%(levelname).4s] %(name)s: %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            file_handler._cport = True
            logger.addHandler(file_handler)
            logging.info(f"Logging to file: {settings.log_file}")
        except OSError as e:
            logging.error(f"Failed to create log file handler for '{settings.log_file}': {e}")

    _apply_module_levels(settings.module_levels)


def _apply_module_levels(module_levels: Optional[Dict[str, str]]):
    """Apply per-module logger levels, e.g. {"loc": "DEBUG", "cport.runtime": "INFO"}."""
    if not module_levels:
        return

    for name, lvl_str in module_levels.items():
        lvl = logging.getLevelName(lvl_str.upper())
        if not isinstance(lvl, int):
            logging.warning(f"Ignoring unknown log level '{lvl_str}' for '{name}'")
            continue
        logging.getLogger(_normalize_module_name(name)).setLevel(lvl)


def _normalize_module_name(name: str) -> str:
    """Normalize provided module name with alias and auto-prefix.

    - If name is an alias, expand to full module path.
    - If name ends with '.*', treat it as base logger (strip the wildcard).
    - If name does not start with 'cport.' and begins with a known top module, prefix 'cport.'.
    """
    if name in constants.LOG_ALIAS_MAP:
        return constants.LOG_ALIAS_MAP[name]
    if name.endswith('.*'):
        name = name[:-2]
    if not name.startswith('cport.'):
        first = name.split('.', 1)[0]
        if first in constants.KNOWN_TOP_MODULES:
            name = f'cport.{name}'
    return name
