"""Citizen services record keeper: storage core, domain services and HTTP layer."""

__version__ = "0.1.0"
