"""HTTP surface of the stub."""

from chari_stub.api.app import create_app

__all__ = ["create_app"]
