"""Concrete run-time variants."""
