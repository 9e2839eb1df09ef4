"""Merge guard status API: process health, service status and metadata over HTTP."""

__version__ = "0.1.0"
