"""Continuity restraint force that keeps groups of particles connected."""

__version__ = "0.1.0"
__all__ = ["context", "force", "reference", "serialization"]