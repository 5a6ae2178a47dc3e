"""Allow ``python -m race_analytics``."""

from .adapters.inbound.cli.commands import app

app()
