"""Detect phase of the bundle-install buildpack."""

__version__ = "0.1.0"
