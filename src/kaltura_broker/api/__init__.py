"""HTTP API for the Kaltura service broker."""

from kaltura_broker.api.app import create_app

__all__ = ["create_app"]
