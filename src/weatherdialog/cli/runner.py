"""Logging setup and the guarded application run shared by CLI commands."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import click

from weatherdialog.exceptions import format_error_for_display

if TYPE_CHECKING:
    from weatherdialog.orchestration import Orchestrator

logger = logging.getLogger(__name__)

LOG_DIR = Path.home() / ".weatherdialog" / "logs"
DEBUG_LOG_NAME = "weatherdialog-debug.log"


def resolve_log_path(debug: bool, log_file: Optional[Path]) -> Path:
    """Where log records go for the given flags."""
    if log_file:
        return log_file
    if debug:
        return Path.cwd() / DEBUG_LOG_NAME
    return LOG_DIR / "weatherdialog.log"


def setup_logging(
    verbose: int,
    debug: bool,
    log_file: Optional[Path],
    log_level: str,
    console: bool = False,
) -> Path:
    """
    Configure logging for the application.

    Args:
        verbose: Verbosity count (0 = WARNING, 1 = INFO, 2+ = DEBUG)
        debug: If True, enable debug mode with file logging in the current directory
        log_file: Custom log file path (optional)
        log_level: Log level for file logging (DEBUG/INFO/WARNING/ERROR)
        console: Also log to stderr (headless runs; the TUI owns stdout)

    Returns:
        Path of the log file
    """
    if debug or verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    if log_file:
        level = getattr(logging, log_level.upper())

    log_path = resolve_log_path(debug, log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Keeps last 5 files, max 10MB each
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter('%(levelname)s %(name)s: %(message)s'))
        root_logger.addHandler(console_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path


def echo_error(error: Exception, log_path: Optional[Path] = None) -> None:
    """Print an error banner with its recovery hint."""
    user_message, recovery_hint = format_error_for_display(error)

    click.echo("\n" + "=" * 70, err=True)
    click.echo(f"ERROR: {user_message}", err=True)
    click.echo("=" * 70, err=True)

    if recovery_hint:
        click.echo(f"\n{recovery_hint}", err=True)
    if log_path:
        click.echo(f"\nFor details, check the log file: {log_path}", err=True)
        click.echo("For logging options, run: weatherdialog --help", err=True)


def run_orchestrator(orchestrator: "Orchestrator", log_path: Path) -> None:
    """
    Run the orchestrator, turning failures into a clean message and exit code.

    Always shuts the orchestrator down.
    """
    try:
        orchestrator.run()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
        click.echo("\nShutting down...", err=True)
    except SystemExit as e:
        # Clean exit from the UI, keep its code
        if e.code not in (0, None):
            logger.error(f"Application exited with error code: {e.code}")
        raise
    except click.Abort:
        raise
    except Exception as e:
        logger.exception("Error running application")
        echo_error(e, log_path)
        sys.exit(1)
    finally:
        orchestrator.shutdown()
