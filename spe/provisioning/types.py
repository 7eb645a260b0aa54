"""Type definitions for container types, containers and permissions."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )


class ContainerRole(StrEnum):
    """Roles grantable on a container."""

    READER = "reader"
    WRITER = "writer"
    MANAGER = "manager"
    OWNER = "owner"


class ApplicationPermissions(_CamelModel):
    """Permissions an application holds on a container type."""

    app_id: str
    delegated: list[str] = Field(default_factory=lambda: ["full"])
    app_only: list[str] = Field(default_factory=lambda: ["full"])


class Container(_CamelModel):
    """A file storage container."""

    id: str
    display_name: str
    description: str | None = None
    container_type_id: str
    status: str | None = None
    created_date_time: datetime | None = None


class ContainerPermission(_CamelModel):
    """A role assignment on a container."""

    id: str
    roles: list[str]
    user_principal_name: str | None = None
