"""Production order lifecycle and quantity reconciliation engine."""

__version__ = "1.0.0"
