"""taskdeck - terminal task manager for a REST task API."""

__version__ = "0.1.0"
