"""Type definitions for token endpoint responses."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class AccessToken(BaseModel):
    """Successful client-credentials token response."""

    model_config = ConfigDict(extra="allow")

    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    scope: str | None = None
    ext_expires_in: int | None = None

    def authorization_header(self) -> dict[str, str]:
        """Build the Authorization header for downstream API calls."""
        return {"Authorization": f"{self.token_type} {self.access_token}"}


class ConsentStatus(StrEnum):
    """Outcome of probing a tenant for admin consent."""

    GRANTED = "granted"
    REQUIRED = "required"
