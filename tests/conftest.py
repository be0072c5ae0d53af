"""Pytest configuration and fixtures."""

import json
import os
import tempfile
from urllib.parse import parse_qs

import httpx
import pytest

# Set test environment variables before importing application modules
_test_db_dir = tempfile.mkdtemp(prefix="kaltura-broker-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_db_dir}/broker.db"
os.environ["BROKER_USER"] = "test-user"
os.environ["BROKER_PASS"] = "test-pass"
os.environ["PARTNER_REGISTRATION_URL"] = "https://kaltura.test/api_v3/service/partner/action/register"
os.environ["DEBUG"] = "true"
os.environ["OTEL_ENABLED"] = "false"
os.environ.pop("VCAP_SERVICES", None)


class PartnerAPIStub:
    """Stand-in for the Kaltura partner registration endpoint.

    Records every request and answers with a configurable JSON payload.
    """

    def __init__(self, payload: dict | None = None, status_code: int = 200):
        self.payload = payload if payload is not None else {
            "objectType": "KalturaPartner",
            "id": 42,
            "adminSecret": "s3cr3t",
        }
        self.status_code = status_code
        self.raw_body: bytes | None = None
        self.requests: list[dict[str, list[str]]] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(parse_qs(request.content.decode("utf-8")))
        if self.raw_body is not None:
            return httpx.Response(self.status_code, content=self.raw_body)
        return httpx.Response(self.status_code, content=json.dumps(self.payload).encode())

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def partner_api():
    """Provide a stubbed partner registration endpoint."""
    return PartnerAPIStub()


@pytest.fixture
def registration_client(partner_api):
    """Provide a registration client talking to the stub."""
    from kaltura_broker.partner import PartnerRegistrationClient

    return PartnerRegistrationClient(http_client=partner_api.http_client())


@pytest.fixture
def instance_store():
    """Provide an empty in-memory instance store."""
    from kaltura_broker.broker import InMemoryInstanceRepository

    return InMemoryInstanceRepository()


@pytest.fixture
def broker_service(instance_store, registration_client):
    """Provide a broker service wired to in-memory collaborators."""
    from kaltura_broker.broker import BrokerService

    return BrokerService(store=instance_store, registration_client=registration_client)

