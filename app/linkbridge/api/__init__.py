"""HTTP API for linkbridge."""

from linkbridge.api.server import create_app

__all__ = ["create_app"]
