"""Tests for the Kaltura partner registration client."""

import httpx
import pytest

from kaltura_broker.errors import RegistrationError
from kaltura_broker.partner import PartnerRegistration, PartnerRegistrationClient

REGISTRATION = PartnerRegistration(
    name="Jane Doe",
    company="Acme",
    email="jane@acme.test",
    instance_id="instance-123",
)


class TestPartnerRegistrationClient:
    """Tests for partner registration."""

    @pytest.mark.asyncio
    async def test_successful_registration(self, registration_client, partner_api):
        """Test parsing a successful registration response."""
        result = await registration_client.register(REGISTRATION)

        assert result.id == 42
        assert result.admin_secret == "s3cr3t"
        assert result.is_error is False

    @pytest.mark.asyncio
    async def test_form_fields(self, registration_client, partner_api):
        """Test the form posted to the registration endpoint."""
        await registration_client.register(REGISTRATION)

        assert len(partner_api.requests) == 1
        form = partner_api.requests[0]
        assert form["partner[objectType]"] == ["KalturaPartner"]
        assert form["partner[description]"] == ["SAP Cloud Platform provisioned"]
        assert form["partner[name]"] == ["Acme"]
        assert form["partner[adminName]"] == ["Jane Doe"]
        assert form["partner[adminEmail]"] == ["jane@acme.test"]
        assert form["partner[referenceId]"] == ["instance-123"]
        assert form["format"] == ["1"]

    @pytest.mark.asyncio
    async def test_api_exception(self, registration_client, partner_api):
        """Test that a Kaltura API exception surfaces its message."""
        partner_api.payload = {
            "objectType": "KalturaAPIException",
            "code": "PARTNER_REGISTRATION_ERROR",
            "message": "quota exceeded",
        }

        with pytest.raises(RegistrationError) as exc_info:
            await registration_client.register(REGISTRATION)

        assert str(exc_info.value) == "quota exceeded"

    @pytest.mark.asyncio
    async def test_unparsable_response(self, registration_client, partner_api):
        """Test that a non-JSON body is a registration failure."""
        partner_api.raw_body = b"<html>Service Unavailable</html>"
        partner_api.status_code = 503

        with pytest.raises(RegistrationError) as exc_info:
            await registration_client.register(REGISTRATION)

        assert exc_info.value.details["status_code"] == 503

    @pytest.mark.asyncio
    async def test_unexpected_shape(self, registration_client, partner_api):
        """Test that a JSON body of the wrong shape is a registration failure."""
        partner_api.payload = {"objectType": "KalturaPartner", "id": "not-a-number"}

        with pytest.raises(RegistrationError):
            await registration_client.register(REGISTRATION)

    @pytest.mark.asyncio
    async def test_missing_credentials_in_response(self, registration_client, partner_api):
        """Test that a response without id and secret is rejected."""
        partner_api.payload = {"objectType": "KalturaPartner"}

        with pytest.raises(RegistrationError, match="missing id or adminSecret"):
            await registration_client.register(REGISTRATION)

    @pytest.mark.asyncio
    async def test_transport_error(self):
        """Test that connection failures are registration failures."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = PartnerRegistrationClient(
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

        with pytest.raises(RegistrationError, match="connection refused"):
            await client.register(REGISTRATION)

    @pytest.mark.asyncio
    async def test_each_call_registers_again(self, registration_client, partner_api):
        """Test that repeated calls are not deduplicated."""
        await registration_client.register(REGISTRATION)
        await registration_client.register(REGISTRATION)

        assert len(partner_api.requests) == 2
