"""Basic authentication for broker endpoints."""

from kaltura_broker.auth.dependencies import (
    BrokerUser,
    check_api_version,
    require_broker_credentials,
)

__all__ = ["BrokerUser", "check_api_version", "require_broker_credentials"]
