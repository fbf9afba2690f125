"""Solar lead relay: enrich lead-capture submissions with Google Solar insights."""

__version__ = "1.0.0"
