"""Service-broker lifecycle operations for Kaltura VPaaS instances."""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from kaltura_broker.broker.models import (
    Binding,
    BindingCredentials,
    Catalog,
    LastOperation,
    ProvisionedServiceSpec,
    ProvisionParameters,
    Service,
    ServiceMetadata,
    ServicePlan,
    UpdateDetails,
)
from kaltura_broker.broker.repository import InstanceRepository, InstanceStore
from kaltura_broker.config import get_settings
from kaltura_broker.errors import NotFoundError, PersistenceError, ValidationError
from kaltura_broker.partner import (
    PartnerRegistration,
    PartnerRegistrationClient,
    get_registration_client,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "kaltura-vpaas"
PLAN_NAME = "default"

LONG_DESCRIPTION = (
    "Kaltura VPaaS (Video Platform as a Service) allows you to build any video "
    "experience or workflow, and to integrate rich video experiences into existing "
    "applications, business workflows and environments.\n"
    "Kaltura VPaaS eliminates all complexities involved in handling video at scale: "
    "ingestion, transcoding, metadata, playback, distribution, analytics, "
    "accessibility, monetization, security, search, interactivity and more.\n"
    "Available as an open API, with a set of SDKs, developer tools and dozens of "
    "code recipes, we're making the video experience creation process as easy as it gets."
)


class BrokerService:
    """Implements the broker lifecycle for Kaltura VPaaS.

    Instance states are ``absent -> provisioned -> absent``. Every operation
    completes synchronously; asynchronous provisioning is never offered.
    """

    def __init__(
        self,
        store: InstanceStore,
        registration_client: PartnerRegistrationClient,
        service_id: str | None = None,
        plan_id: str | None = None,
        dashboard_url: str | None = None,
    ) -> None:
        """Initialize the broker service.

        Args:
            store: Store holding provisioned instances.
            registration_client: Client for the partner registration API.
            service_id: Catalog service ID. Defaults to settings.
            plan_id: Catalog plan ID. Defaults to settings.
            dashboard_url: Dashboard URL for new instances. Defaults to settings.
        """
        settings = get_settings()
        self._store = store
        self._registration_client = registration_client
        self._service_id = service_id or settings.catalog_service_id
        self._plan_id = plan_id or settings.catalog_plan_id
        self._dashboard_url = dashboard_url or settings.dashboard_url

    def catalog(self) -> Catalog:
        """Return the service catalog."""
        logger.info("Got a request to retrieve the catalog")
        return Catalog(
            services=[
                Service(
                    id=self._service_id,
                    name=SERVICE_NAME,
                    description=(
                        "Use Kaltura to create Video Experiences and Workflows "
                        "in your application"
                    ),
                    bindable=True,
                    metadata=ServiceMetadata(
                        display_name="Video Platform as a Service - Kaltura",
                        image_url="https://vpaas.kaltura.com/images/VPaaS-logo-full.png",
                        long_description=LONG_DESCRIPTION,
                        provider_display_name="Kaltura Inc.",
                        documentation_url="https://developer.kaltura.com",
                        support_url="https://forum.kaltura.org",
                    ),
                    plans=[
                        ServicePlan(
                            id=self._plan_id,
                            name=PLAN_NAME,
                            description=(
                                "Pay As You Go with base REE package. For more details "
                                "see: https://vpaas.kaltura.com/pricing"
                            ),
                        )
                    ],
                )
            ]
        )

    async def provision(
        self,
        instance_id: str,
        parameters: dict[str, Any] | None,
    ) -> ProvisionedServiceSpec:
        """Provision a new instance by registering a Kaltura partner.

        The partner is registered first and the instance record is written
        only after the registration succeeded. If the write fails the
        partner stays registered remotely.

        Args:
            instance_id: Platform-assigned instance ID.
            parameters: Raw provisioning parameters (name, company, email).

        Returns:
            Spec carrying the dashboard URL.

        Raises:
            ValidationError: If a required parameter is missing.
            RegistrationError: If the partner registration failed.
            PersistenceError: If the instance record could not be stored.
        """
        logger.info("Got a request to provision instance %s", instance_id)

        params = self._parse_parameters(parameters)

        result = await self._registration_client.register(
            PartnerRegistration(
                name=params.name,
                company=params.company,
                email=params.email,
                instance_id=instance_id,
            )
        )

        try:
            await self._store.create(instance_id, result.id, result.admin_secret)
        except PersistenceError:
            logger.error(
                "Partner %s registered but instance %s was not stored",
                result.id,
                instance_id,
            )
            raise

        return ProvisionedServiceSpec(dashboard_url=self._dashboard_url)

    async def deprovision(self, instance_id: str) -> None:
        """Deprovision an instance by deleting its record.

        Raises:
            NotFoundError: If the instance does not exist.
        """
        logger.info("Got a request to deprovision instance %s", instance_id)
        instance = await self._store.find(instance_id)
        if instance is None:
            raise NotFoundError(f"No such instance: {instance_id}")
        await self._store.delete(instance_id)

    async def bind(self, instance_id: str, binding_id: str) -> Binding:
        """Bind an application to an instance.

        No binding record is kept, so every binding of an instance receives
        the same partner credentials.

        Raises:
            NotFoundError: If the instance does not exist.
        """
        logger.info(
            "Got a request to bind binding %s for instance %s", binding_id, instance_id
        )
        instance = await self._store.find(instance_id)
        if instance is None:
            raise NotFoundError(f"No such instance: {instance_id}")
        return Binding(
            credentials=BindingCredentials(
                admin_secret=instance.admin_secret,
                partner_id=instance.partner_id,
            )
        )

    async def unbind(self, instance_id: str, binding_id: str) -> None:
        logger.info(
            "Got a request to unbind binding %s for instance %s", binding_id, instance_id
        )

    async def update(self, instance_id: str, details: UpdateDetails) -> None:
        # Plan and parameter changes are accepted but not applied
        logger.info("Got a request to update instance %s", instance_id)

    async def last_operation(
        self, instance_id: str, operation_data: str | None = None
    ) -> LastOperation:
        return LastOperation()

    def _parse_parameters(self, parameters: dict[str, Any] | None) -> ProvisionParameters:
        if parameters is None:
            raise ValidationError("Missing parameters")
        try:
            params = ProvisionParameters.model_validate(parameters)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid parameters: {e.error_count()} invalid field(s)") from e

        missing = params.missing_fields()
        if missing:
            raise ValidationError(
                "Missing parameters",
                details={"missing": missing},
            )
        return params


_broker_service: BrokerService | None = None


def get_broker_service() -> BrokerService:
    """Get the global broker service instance.

    Returns:
        BrokerService instance backed by the database.
    """
    global _broker_service
    if _broker_service is None:
        _broker_service = BrokerService(
            store=InstanceRepository(),
            registration_client=get_registration_client(),
        )
    return _broker_service
