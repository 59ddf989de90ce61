"""Discord login gateway that provisions panel accounts on first sign-in."""

from .app import create_app

__all__ = ["create_app"]
