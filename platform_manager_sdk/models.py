"""
Pydantic models for platform resources.

These models provide type-safe views of the JSON resources returned by the
platform API. Unknown fields are ignored so newer API versions keep working.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class Resource(BaseModel):
    """Base class for all API resources."""

    guid: str = Field(..., description="Unique resource identifier")

    model_config = ConfigDict(extra="ignore")


class User(Resource):
    """A platform user account."""

    username: str = Field(..., description="Login name of the user")
    origin: Optional[str] = Field(None, description="Identity provider origin (e.g. uaa, ldap)")


class ServiceBroker(Resource):
    """A registered service broker."""

    name: str = Field(..., description="Service broker name")
    url: Optional[str] = Field(None, description="Broker catalog URL")
    space_guid: Optional[str] = Field(
        None, description="Owning space GUID when the broker is space-scoped"
    )


class ServiceBrokerRequest(BaseModel):
    """
    Payload for creating or updating a service broker.

    Every field is optional so the same model serves partial updates;
    ``to_payload`` only emits what was set.
    """

    name: Optional[str] = None
    url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = Field(None, repr=False)
    space_guid: Optional[str] = None

    def to_payload(self) -> dict:
        payload: dict = {}
        if self.name is not None:
            payload["name"] = self.name
        if self.url is not None:
            payload["url"] = self.url
        if self.username is not None or self.password is not None:
            payload["authentication"] = {
                "type": "basic",
                "credentials": {
                    "username": self.username or "",
                    "password": self.password or "",
                },
            }
        if self.space_guid is not None:
            payload["relationships"] = {"space": {"data": {"guid": self.space_guid}}}
        return payload

