"""Cloud Foundry service discovery from the VCAP_SERVICES document."""

import json
import logging
from typing import Any
from urllib.parse import quote

logger = logging.getLogger(__name__)


class ServiceDiscoveryError(Exception):
    """Bound service could not be discovered from the environment."""


def parse_vcap_services(raw: str) -> dict[str, list[dict[str, Any]]]:
    """Parse a VCAP_SERVICES JSON document.

    Args:
        raw: The VCAP_SERVICES value.

    Returns:
        Mapping of service offering name to its bound service instances.

    Raises:
        ServiceDiscoveryError: If the document is not a JSON object.
    """
    try:
        services = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ServiceDiscoveryError(f"VCAP_SERVICES is not valid JSON: {e}") from e
    if not isinstance(services, dict):
        raise ServiceDiscoveryError("VCAP_SERVICES must be a JSON object")
    return services


def find_services_by_label(raw: str, label: str) -> list[dict[str, Any]]:
    """Return all bound services carrying the given label."""
    matches = []
    for instances in parse_vcap_services(raw).values():
        for service in instances or []:
            if service.get("label") == label:
                matches.append(service)
    return matches


def database_url_from_vcap(raw: str, label: str = "postgresql") -> str:
    """Build an async PostgreSQL URL from the single bound database service.

    Args:
        raw: The VCAP_SERVICES value.
        label: Service label identifying the database.

    Returns:
        A ``postgresql+asyncpg`` SQLAlchemy URL.

    Raises:
        ServiceDiscoveryError: If there is not exactly one matching service
            or its credentials are incomplete.
    """
    services = find_services_by_label(raw, label)
    if len(services) != 1:
        raise ServiceDiscoveryError(
            f"Expected exactly one '{label}' service, found {len(services)}"
        )

    credentials = services[0].get("credentials") or {}
    try:
        user = quote(str(credentials["username"]), safe="")
        password = quote(str(credentials["password"]), safe="")
        host = credentials["hostname"]
        port = credentials["port"]
        dbname = credentials["dbname"]
    except KeyError as e:
        raise ServiceDiscoveryError(
            f"'{label}' service credentials are missing {e.args[0]}"
        ) from e

    logger.info("Discovered database service '%s' at %s:%s", services[0].get("name"), host, port)
    return f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{dbname}"
