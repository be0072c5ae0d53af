"""Client for the Kaltura partner registration API."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError as PydanticValidationError

from kaltura_broker.config import get_settings
from kaltura_broker.errors import RegistrationError
from kaltura_broker.partner.models import PartnerRegistration, PartnerRegistrationResult

logger = logging.getLogger(__name__)

KALTURA_ERROR_FALLBACK = "Kaltura API exception"


class PartnerRegistrationClient:
    """Registers new Kaltura partner accounts.

    Each call posts one form-encoded request to the registration endpoint
    and asks for a JSON response (``format=1``). Calls are not retried and
    carry no idempotency key, so every call creates a distinct partner.
    """

    def __init__(
        self,
        registration_url: str | None = None,
        description: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the registration client.

        Args:
            registration_url: Registration endpoint URL. Defaults to settings.
            description: Description attached to new partners. Defaults to settings.
            timeout: Request timeout in seconds. Defaults to settings.
            http_client: Optional HTTP client for testing.
        """
        settings = get_settings()
        self._registration_url = registration_url or settings.partner_registration_url
        self._description = description or settings.partner_description
        self._timeout = timeout or settings.partner_request_timeout_seconds
        self._http_client = http_client

    def _build_form(self, registration: PartnerRegistration) -> dict[str, str]:
        return {
            "partner[objectType]": "KalturaPartner",
            "partner[description]": self._description,
            "partner[name]": registration.company,
            "partner[adminName]": registration.name,
            "partner[adminEmail]": registration.email,
            "partner[referenceId]": registration.instance_id,
            "format": "1",
        }

    async def register(self, registration: PartnerRegistration) -> PartnerRegistrationResult:
        """Register a new partner account.

        Args:
            registration: Details of the partner to create.

        Returns:
            The parsed registration response.

        Raises:
            RegistrationError: If the request fails, the response is not the
                expected JSON, or Kaltura reports an API exception.
        """
        form = self._build_form(registration)

        logger.info(
            "Registering Kaltura partner for instance %s",
            registration.instance_id,
        )

        try:
            if self._http_client:
                response = await self._http_client.post(
                    self._registration_url,
                    data=form,
                    timeout=self._timeout,
                )
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(
                        self._registration_url,
                        data=form,
                        timeout=self._timeout,
                    )
        except httpx.HTTPError as e:
            logger.error("Partner registration request failed: %s", e)
            raise RegistrationError(f"Partner registration request failed: {e}") from e

        logger.debug(
            "Received partner registration response (status=%s, bytes=%d)",
            response.status_code,
            len(response.content),
        )

        try:
            result = PartnerRegistrationResult.model_validate_json(response.content)
        except PydanticValidationError as e:
            logger.error(
                "Unexpected partner registration response (status=%s)",
                response.status_code,
            )
            raise RegistrationError(
                "Invalid partner registration response",
                details={"status_code": response.status_code},
            ) from e

        if result.is_error:
            logger.warning(
                "Kaltura rejected partner registration for instance %s: %s",
                registration.instance_id,
                result.error_message,
            )
            raise RegistrationError(result.error_message or KALTURA_ERROR_FALLBACK)

        if result.id is None or not result.admin_secret:
            raise RegistrationError(
                "Partner registration response is missing id or adminSecret",
                details={"status_code": response.status_code},
            )

        logger.info(
            "Registered Kaltura partner %s for instance %s",
            result.id,
            registration.instance_id,
        )
        return result


_registration_client: PartnerRegistrationClient | None = None


def get_registration_client() -> PartnerRegistrationClient:
    """Get the global partner registration client instance.

    Returns:
        PartnerRegistrationClient instance.
    """
    global _registration_client
    if _registration_client is None:
        _registration_client = PartnerRegistrationClient()
    return _registration_client
