"""Run command - the dialog on Launchpad hardware, without a UI."""

import logging

import click

from weatherdialog.exceptions import ConfigurationError

from ..runner import echo_error, run_orchestrator, setup_logging

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--speech",
    type=click.Choice(["espeak", "simulated"], case_sensitive=False),
    default=None,
    help="Override the configured speech engine",
)
@click.pass_context
def run(ctx, speech):
    """
    Run the dialog headless with MIDI hardware.

    Buttons and LEDs come from the Launchpad named in the configuration.
    The dialog starts immediately; press Ctrl+C to stop.

    \b
    Examples:
      weatherdialog run
      weatherdialog -v run --speech simulated
    """
    from weatherdialog.models import AppConfig
    from weatherdialog.orchestration import Orchestrator

    opts = ctx.obj
    log_path = setup_logging(
        opts["verbose"], opts["debug"], opts["log_file"], opts["log_level"], console=True
    )

    try:
        config_obj = AppConfig.load_or_default(opts["config_path"])
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e.technical_message}")
        echo_error(e, log_path)
        ctx.exit(1)
        return

    if speech:
        config_obj.speech.engine = speech.lower()
    if not config_obj.midi.enabled:
        logger.warning("MIDI is disabled in the configuration; nothing will drive the dialog")

    orchestrator = Orchestrator(config=config_obj, headless=True)
    run_orchestrator(orchestrator, log_path)
