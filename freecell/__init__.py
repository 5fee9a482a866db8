"""Core engine package for FreeCell."""

__all__ = [
    "cards",
    "deck",
    "receptacles",
    "events",
    "game",
    "rules_schema",
    "service",
]
