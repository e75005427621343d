"""Pydantic data contracts."""
