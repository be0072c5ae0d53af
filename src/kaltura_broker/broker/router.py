"""FastAPI router for the Open Service Broker API v2 endpoints."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse

from kaltura_broker.auth import check_api_version, require_broker_credentials
from kaltura_broker.broker.models import BindDetails, ProvisionDetails, UpdateDetails
from kaltura_broker.broker.service import BrokerService, get_broker_service
from kaltura_broker.errors import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/v2",
    tags=["Service Broker"],
    dependencies=[Depends(require_broker_credentials), Depends(check_api_version)],
)

Broker = Annotated[BrokerService, Depends(get_broker_service)]


@router.get("/catalog")
async def get_catalog(broker: Broker) -> dict[str, Any]:
    """Return the service catalog."""
    return broker.catalog().model_dump(by_alias=True, exclude_none=True)


@router.put("/service_instances/{instance_id}", status_code=status.HTTP_201_CREATED)
async def provision(
    instance_id: str,
    broker: Broker,
    details: Annotated[ProvisionDetails, Body()] = ProvisionDetails(),
    accepts_incomplete: Annotated[bool, Query()] = False,
) -> dict[str, Any]:
    """Provision a service instance.

    Provisioning always completes synchronously, so ``accepts_incomplete``
    has no effect.

    Args:
        instance_id: Platform-assigned instance ID.
        broker: Broker service instance.
        details: Provision request body; ``parameters`` carries the
            name, company and email of the new partner.
        accepts_incomplete: Whether the platform supports async provisioning.

    Returns:
        Body with the dashboard URL.
    """
    spec = await broker.provision(instance_id, details.parameters)
    return spec.model_dump(exclude_none=True)


@router.patch("/service_instances/{instance_id}")
async def update(
    instance_id: str,
    broker: Broker,
    details: Annotated[UpdateDetails, Body()] = UpdateDetails(),
    accepts_incomplete: Annotated[bool, Query()] = False,
) -> dict[str, Any]:
    """Accept an update request without changing the instance."""
    await broker.update(instance_id, details)
    return {}


@router.delete("/service_instances/{instance_id}")
async def deprovision(
    instance_id: str,
    broker: Broker,
    service_id: Annotated[str | None, Query()] = None,
    plan_id: Annotated[str | None, Query()] = None,
    accepts_incomplete: Annotated[bool, Query()] = False,
) -> JSONResponse:
    """Deprovision a service instance.

    Returns:
        200 with an empty body, or 410 if the instance does not exist.
    """
    try:
        await broker.deprovision(instance_id)
    except NotFoundError as e:
        logger.warning("Deprovision of unknown instance: %s", e)
        return JSONResponse(status_code=status.HTTP_410_GONE, content={})
    return JSONResponse(status_code=status.HTTP_200_OK, content={})


@router.get("/service_instances/{instance_id}/last_operation")
async def last_operation(
    instance_id: str,
    broker: Broker,
    operation: Annotated[str | None, Query()] = None,
) -> dict[str, Any]:
    """Report the last operation, which is never pending."""
    result = await broker.last_operation(instance_id, operation)
    return result.model_dump(exclude_none=True)


@router.put(
    "/service_instances/{instance_id}/service_bindings/{binding_id}",
    status_code=status.HTTP_201_CREATED,
)
async def bind(
    instance_id: str,
    binding_id: str,
    broker: Broker,
    details: Annotated[BindDetails, Body()] = BindDetails(),
) -> dict[str, Any]:
    """Create a binding and return the partner credentials."""
    binding = await broker.bind(instance_id, binding_id)
    return binding.model_dump(by_alias=True)


@router.delete("/service_instances/{instance_id}/service_bindings/{binding_id}")
async def unbind(
    instance_id: str,
    binding_id: str,
    broker: Broker,
    service_id: Annotated[str | None, Query()] = None,
    plan_id: Annotated[str | None, Query()] = None,
) -> dict[str, Any]:
    """Remove a binding. Nothing is stored per binding, so this always succeeds."""
    await broker.unbind(instance_id, binding_id)
    return {}
