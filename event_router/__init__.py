"""Event Router - routes GitHub events to the agents that should handle them."""

__version__ = "0.1.0"
