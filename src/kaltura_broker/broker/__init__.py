"""Open Service Broker API implementation for Kaltura VPaaS.

Handles the instance lifecycle:
- Catalog listing
- Provisioning (Kaltura partner registration + instance record)
- Deprovisioning
- Binding and unbinding (partner credentials)
"""

from kaltura_broker.broker.models import (
    Binding,
    BindingCredentials,
    Catalog,
    Instance,
    LastOperation,
    ProvisionedServiceSpec,
    ProvisionParameters,
)
from kaltura_broker.broker.repository import (
    InMemoryInstanceRepository,
    InstanceRepository,
    InstanceStore,
)
from kaltura_broker.broker.service import BrokerService, get_broker_service
from kaltura_broker.broker.router import router as broker_router

__all__ = [
    # Models
    "Binding",
    "BindingCredentials",
    "Catalog",
    "Instance",
    "LastOperation",
    "ProvisionedServiceSpec",
    "ProvisionParameters",
    # Repository
    "InMemoryInstanceRepository",
    "InstanceRepository",
    "InstanceStore",
    # Service
    "BrokerService",
    "get_broker_service",
    # Router
    "broker_router",
]
