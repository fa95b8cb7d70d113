import logging
import traceback

import click

from . import __version__, constants
from .builder import Builder
from .config import read_toml
from .exceptions import (
    BuildToolError,
    ContainerFault,
    CPortError,
    ErrorKind,
)
from .runtime import DockerRuntime
from .utils import LogSettings, setup_logger


def _report_configuration(e: CPortError):
    logging.error(f"Configuration error: {e}")


def _report_fault(e: ContainerFault):
    logging.error(f"Container runtime fault: reason = {e.code}")
    logging.error(e.message)


def _report_transport(e: CPortError):
    logging.error("Unknown error around container manipulation")
    logging.error(f"{e}")


def _report_build_tool(e: BuildToolError):
    logging.error(f"Build error: {e}")


# One reporter per ErrorKind; tests keep this table exhaustive
REPORTERS = {
    ErrorKind.CONFIGURATION: _report_configuration,
    ErrorKind.CONTAINER_FAULT: _report_fault,
    ErrorKind.TRANSPORT: _report_transport,
    ErrorKind.BUILD_TOOL: _report_build_tool,
}


def handle_errors(func):
    """Decorator to report errors by kind and exit with status 1"""
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except CPortError as e:
            REPORTERS[e.kind](e)
            _maybe_traceback()
            raise click.Abort()
        except Exception as e:
            logging.error(f"An unexpected error occurred: {e}")
            _maybe_traceback()
            raise click.Abort()
    return wrapper


def _maybe_traceback():
    ctx = click.get_current_context()
    settings = ctx.obj.get('log_settings')
    if settings is not None and settings.debug:
        traceback.print_exc()


def _runtime(obj: dict):
    """Runtime injected by the caller (tests) or the local Docker daemon."""
    runtime = obj.get('runtime')
    if runtime is None:
        runtime = DockerRuntime.from_env(timeout=obj.get('timeout'))
    return runtime


@handle_errors
def do_build(obj: dict):
    """Execute build command"""
    config = read_toml(obj['config_toml'])
    builder = Builder(config, _runtime(obj), log_settings=obj['log_settings'])
    builder.build()


@handle_errors
def do_install(obj: dict):
    """Execute install command"""
    config = read_toml(obj['config_toml'])
    builder = Builder(config, _runtime(obj), log_settings=obj['log_settings'])
    builder.install()


@handle_errors
def do_ps(obj: dict, show_all: bool):
    """List build containers managed by cport"""
    containers = _runtime(obj).list_containers({constants.LABEL_SOURCE: None})
    if not show_all:
        containers = [c for c in containers if c.state == "running"]
    if not containers:
        logging.info("No cport containers found.")
        return
    click.echo(f"{'CONTAINER ID':<14}{'STATE':<10}{'IMAGE':<24}SOURCE (BUILD)")
    for c in containers:
        source = c.labels.get(constants.LABEL_SOURCE, "")
        build = c.labels.get(constants.LABEL_BUILD, "")
        click.echo(f"{c.short_id:<14}{c.state:<10}{c.image:<24}{source} ({build})")


@click.group()
@click.option('-f', '--config-toml', default=constants.DEFAULT_CONFIG_FILE, show_default=True,
              type=click.Path(dir_okay=False), help='Path of configure TOML file')
@click.option('--debug', is_flag=True, help='Debug output')
@click.option('-v', '--verbose', is_flag=True, help='Verbose output (info level)')
@click.option('-q', '--quiet', is_flag=True, help='Less verbose output (error level)')
@click.option('-l', '--log-levels', help="Comma-separated per-module log levels (e.g., 'loc=DEBUG,docker=INFO')")
@click.option('--log-file', help='Path to log file')
@click.option('--timeout', type=int, help='Docker API timeout in seconds (output streams never time out)')
@click.version_option(version=__version__, prog_name='cport')
@click.pass_context
def cli(ctx, config_toml, debug, verbose, quiet, log_levels, log_file, timeout):
    """cmake container builder"""
    ctx.ensure_object(dict)
    settings = LogSettings.from_flags(
        debug=debug, verbose=verbose, quiet=quiet, log_levels=log_levels, log_file=log_file
    )
    setup_logger(settings)
    ctx.obj['log_settings'] = settings
    ctx.obj['config_toml'] = config_toml
    ctx.obj['timeout'] = timeout


@cli.command()
@click.pass_context
def build(ctx):
    """Configure and build"""
    do_build(ctx.obj)


@cli.command()
@click.pass_context
def install(ctx):
    """Install apt packages"""
    do_install(ctx.obj)


@cli.command()
@click.option('-a', '--all', 'show_all', is_flag=True, help='Include stopped containers')
@click.pass_context
def ps(ctx, show_all):
    """List build containers"""
    do_ps(ctx.obj, show_all)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
