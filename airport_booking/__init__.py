"""Airport booking core: flight inventory, passengers and the booking lifecycle."""

__version__ = "1.0.0"
