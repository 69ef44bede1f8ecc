"""weekfit: guided workout planning, weekly calendar, and training stats."""

__version__ = "0.1.0"
