"""Open Service Broker for Kaltura VPaaS."""

__version__ = "0.1.0"
