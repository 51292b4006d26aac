"""A JSON HTTP service for posts and contact messages with JPEG uploads."""

__version__ = "0.1.0"
__all__ = ["__version__"]