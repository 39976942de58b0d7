"""Shared helpers for folio CLI commands."""
