"""Shared enums, errors, models, settings and timer abstractions."""
