"""Config command group."""

import json

import click

from weatherdialog.exceptions import ConfigurationError
from weatherdialog.models import AppConfig

from ..runner import echo_error


@click.group(name="config")
def config():
    """Show or create the configuration file."""
    pass


@config.command(name="path")
@click.pass_context
def config_path(ctx):
    """Print the configuration file location."""
    click.echo(str(ctx.obj["config_path"]))


@config.command(name="show")
@click.option("--field", "-f", type=str, default=None, help="Show one section (dialog, speech, midi)")
@click.pass_context
def config_show(ctx, field):
    """Display the effective configuration."""
    path = ctx.obj["config_path"]
    try:
        cfg = AppConfig.load_or_default(path)
    except ConfigurationError as e:
        echo_error(e)
        ctx.exit(1)
        return

    data = cfg.model_dump(mode="json")
    if field:
        if field not in data:
            raise click.BadParameter(f"Unknown section '{field}'. Choose from: {', '.join(data)}")
        data = {field: data[field]}

    source = path if path.exists() else "defaults (no config file)"
    click.echo(f"# {source}")
    click.echo(json.dumps(data, indent=2))


@config.command(name="init")
@click.option("--force", is_flag=True, help="Overwrite an existing file (a .bak copy is kept)")
@click.pass_context
def config_init(ctx, force):
    """Write the default configuration file."""
    path = ctx.obj["config_path"]
    if path.exists() and not force:
        click.echo(f"Config already exists: {path} (use --force to overwrite)")
        ctx.exit(1)
        return
    AppConfig().save(path)
    click.echo(f"Wrote default configuration to {path}")
