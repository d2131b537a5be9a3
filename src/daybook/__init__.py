"""Daybook - personal journal with a today/history view."""
