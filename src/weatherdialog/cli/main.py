"""Main CLI entry point."""

import logging
from pathlib import Path
from typing import Optional

import click

from weatherdialog import __version__
from weatherdialog.models.config import DEFAULT_CONFIG_PATH

from .commands import config, midi_group, run
from .runner import echo_error, run_orchestrator, setup_logging

logger = logging.getLogger(__name__)


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__, prog_name="weatherdialog")
@click.option(
    '--config', '-c', 'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help='Configuration file'
)
@click.option(
    '--no-midi',
    is_flag=True,
    help='Do not connect to Launchpad hardware (simulator only)'
)
@click.option(
    '-v', '--verbose',
    count=True,
    help='Increase verbosity (-v: INFO, -vv: DEBUG)'
)
@click.option(
    '--debug',
    is_flag=True,
    help='Enable debug mode (DEBUG level, logs to ./weatherdialog-debug.log)'
)
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Custom log file path'
)
@click.option(
    '--log-level',
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    default='INFO',
    help='Log level for file logging (default: INFO)'
)
def cli(
    ctx,
    config_path: Path,
    no_midi: bool,
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str
):
    """
    Weather Dialog - gesture-driven spoken questionnaire on a 30-LED strip.

    Without a command, opens the simulator: ten on-screen buttons (keys 0-9
    toggle them), the LED strip and the dialog state. Press S to start the
    dialog. If a Launchpad is connected it drives the same dialog.

    \b
    Examples:
      # Simulator (and hardware if present)
      weatherdialog

      # Simulator only, verbose log
      weatherdialog --no-midi -v

      # Hardware only, no UI
      weatherdialog run

      # Write the default configuration
      weatherdialog config init

      # List MIDI devices
      weatherdialog midi list
    """
    ctx.ensure_object(dict)
    ctx.obj.update(
        config_path=config_path,
        verbose=verbose,
        debug=debug,
        log_file=log_file,
        log_level=log_level,
    )

    if ctx.invoked_subcommand is not None:
        return

    # Lazy imports keep --help and the small commands fast
    from weatherdialog.exceptions import ConfigurationError
    from weatherdialog.models import AppConfig
    from weatherdialog.orchestration import Orchestrator
    from weatherdialog.tui import DialogSimulator

    # The TUI owns the terminal, so logs go to a file only
    log_path = setup_logging(verbose, debug, log_file, log_level)
    logger.info("Starting Weather Dialog simulator")

    try:
        config_obj = AppConfig.load_or_default(config_path)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e.technical_message}")
        echo_error(e, log_path)
        ctx.exit(1)
        return

    if no_midi:
        config_obj.midi.enabled = False

    orchestrator = Orchestrator(config=config_obj, headless=False)
    orchestrator.register_ui(DialogSimulator(orchestrator))
    run_orchestrator(orchestrator, log_path)


cli.add_command(config)
cli.add_command(midi_group)
cli.add_command(run)


if __name__ == '__main__':
    cli()
