"""Kaltura partner registration integration."""

from kaltura_broker.partner.client import PartnerRegistrationClient, get_registration_client
from kaltura_broker.partner.models import (
    KALTURA_API_EXCEPTION,
    PartnerRegistration,
    PartnerRegistrationResult,
)

__all__ = [
    "KALTURA_API_EXCEPTION",
    "PartnerRegistration",
    "PartnerRegistrationClient",
    "PartnerRegistrationResult",
    "get_registration_client",
]
