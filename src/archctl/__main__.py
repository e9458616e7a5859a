"""Allow ``python -m archctl``."""

from archctl.cli import cli

cli()
