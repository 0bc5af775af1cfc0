"""Schemas — Pydantic request models for the relay's API boundary."""
