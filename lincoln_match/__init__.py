"""Course match persistence, email gating, and sharing for Lincoln Match."""

__version__ = "0.1.0"
