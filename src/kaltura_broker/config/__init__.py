"""Configuration module for the Kaltura service broker."""

from kaltura_broker.config.cfenv import ServiceDiscoveryError, database_url_from_vcap
from kaltura_broker.config.settings import Settings, get_settings

__all__ = ["ServiceDiscoveryError", "Settings", "database_url_from_vcap", "get_settings"]
