"""Team roster service: member records with profile images."""

__version__ = "1.0.0"
