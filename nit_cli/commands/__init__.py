"""CLI commands for nit."""

__all__ = [
    "cache",
    "catalog",
    "pick",
    "use",
]
