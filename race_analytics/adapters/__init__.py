"""Inbound (CLI) and outbound (data source) adapters."""
