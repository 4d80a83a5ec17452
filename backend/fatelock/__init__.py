"""Fate-locked progression engine: key rolls, gacha unlocks and saves."""

__version__ = "1.0.0"
