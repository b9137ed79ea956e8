"""Gatekeeper - permission resolution and enforcement for the hosting panel."""

__version__ = "0.1.0"
