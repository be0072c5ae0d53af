"""Data models for the Open Service Broker API and stored instances."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Instance(BaseModel):
    """Stored Kaltura service instance record."""

    id: str = Field(..., description="Platform-assigned service instance ID")
    partner_id: int = Field(..., description="Kaltura partner ID")
    admin_secret: str = Field(..., description="Kaltura partner admin secret")


class ProvisionParameters(BaseModel):
    """Raw provisioning parameters supplied by the platform user."""

    name: str = ""
    company: str = ""
    email: str = ""

    def missing_fields(self) -> list[str]:
        """Return the names of required fields left empty."""
        return [field for field in ("name", "company", "email") if not getattr(self, field)]


# Catalog


class ServiceMetadata(BaseModel):
    """Display metadata of a catalog service."""

    model_config = ConfigDict(populate_by_name=True)

    display_name: str = Field(..., alias="displayName")
    image_url: str | None = Field(None, alias="imageUrl")
    long_description: str | None = Field(None, alias="longDescription")
    provider_display_name: str | None = Field(None, alias="providerDisplayName")
    documentation_url: str | None = Field(None, alias="documentationUrl")
    support_url: str | None = Field(None, alias="supportUrl")


class ServicePlan(BaseModel):
    """A plan offered by a catalog service."""

    id: str
    name: str
    description: str
    free: bool | None = None


class Service(BaseModel):
    """A service offering advertised in the catalog."""

    id: str
    name: str
    description: str
    bindable: bool = True
    plan_updateable: bool | None = None
    tags: list[str] = Field(default_factory=list)
    metadata: ServiceMetadata | None = None
    plans: list[ServicePlan] = Field(default_factory=list)


class Catalog(BaseModel):
    """Catalog response body."""

    services: list[Service]


# Requests


class ProvisionDetails(BaseModel):
    """Body of a provision request."""

    model_config = ConfigDict(extra="allow")

    service_id: str | None = None
    plan_id: str | None = None
    organization_guid: str | None = None
    space_guid: str | None = None
    parameters: dict[str, Any] | None = None


class UpdateDetails(BaseModel):
    """Body of an update request."""

    model_config = ConfigDict(extra="allow")

    service_id: str | None = None
    plan_id: str | None = None
    parameters: dict[str, Any] | None = None
    previous_values: dict[str, Any] | None = None


class BindDetails(BaseModel):
    """Body of a bind request."""

    model_config = ConfigDict(extra="allow")

    service_id: str | None = None
    plan_id: str | None = None
    app_guid: str | None = None
    bind_resource: dict[str, Any] | None = None
    parameters: dict[str, Any] | None = None


# Results


class ProvisionedServiceSpec(BaseModel):
    """Result of a provision operation."""

    dashboard_url: str | None = None


class BindingCredentials(BaseModel):
    """Credentials handed to applications bound to an instance."""

    model_config = ConfigDict(populate_by_name=True)

    admin_secret: str = Field(..., alias="adminSecret")
    partner_id: int = Field(..., alias="partnerId")


class Binding(BaseModel):
    """Result of a bind operation."""

    credentials: BindingCredentials


class LastOperation(BaseModel):
    """Result of a last operation poll.

    Provisioning is always synchronous so there is never anything to report.
    """

    state: str | None = None
    description: str | None = None
