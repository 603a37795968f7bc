"""Operational scripts (``python -m dashboard.scripts.<name>``)."""
