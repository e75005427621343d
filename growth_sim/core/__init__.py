"""Projection engine, formatting and export helpers."""
