"""Smoke tests for a running nginx deployment."""

__version__ = "0.1.0"
