"""Bundled static data shipped with the engine."""
