"""deployctl — multi-tenant deployment CLI."""

__version__ = "0.1.0"
