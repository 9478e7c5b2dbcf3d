"""HTTP service exposing drafting and import."""

from eletters.server.app import create_app

__all__ = ["create_app"]
