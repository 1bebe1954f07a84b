"""Accessible walking routes through places with accessibility features."""

__version__ = "0.1.0"
