"""Scheduled funds transfers between accounts with tiered fees."""

__version__ = "0.1.0"
