"""Blog admin backend: content storage, role enforcement and analytics."""

__version__ = "1.0.0"
