"""Logging configuration for the harness."""

from server_smoke.logging.setup import configure_logging

__all__ = ["configure_logging"]
