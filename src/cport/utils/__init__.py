"""
cport Utils Module

- logger: Logging setup and configuration

Usage:
    from cport.utils import LogSettings, setup_logger
"""

from .logger import LogSettings, setup_logger, parse_module_levels

__all__ = [
    'LogSettings',
    'setup_logger',
    'parse_module_levels',
]
