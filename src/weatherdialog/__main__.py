"""Allow ``python -m weatherdialog``."""

from weatherdialog.cli import cli

if __name__ == "__main__":
    cli()
