"""Allow ``python -m deployctl``."""

from deployctl.cli import cli

cli()
