"""rollbook: role-gated console manager for a flat-file student record store."""

__version__ = "0.1.0"
