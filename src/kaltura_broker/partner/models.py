"""Data models for Kaltura partner registration."""

from pydantic import BaseModel, ConfigDict, Field

# objectType of a Kaltura API error payload
KALTURA_API_EXCEPTION = "KalturaAPIException"


class PartnerRegistration(BaseModel):
    """Details of the partner account to register."""

    name: str = Field(..., description="Administrator name")
    company: str = Field(..., description="Partner (company) name")
    email: str = Field(..., description="Administrator email")
    instance_id: str = Field(..., description="Service instance ID, sent as reference ID")


class PartnerRegistrationResult(BaseModel):
    """JSON body returned by the partner registration endpoint."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int | None = Field(None, description="Kaltura partner ID")
    admin_secret: str | None = Field(None, alias="adminSecret")
    object_type: str | None = Field(None, alias="objectType")
    error_message: str | None = Field(None, alias="message")

    @property
    def is_error(self) -> bool:
        """Whether the payload describes a remote API exception."""
        return self.object_type == KALTURA_API_EXCEPTION
