"""Mini Todo API: per-user task lists behind JWT bearer authentication."""

__version__ = "1.0.0"
