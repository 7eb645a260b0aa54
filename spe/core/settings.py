"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

AUTHORITY_HOST_DEFAULT = "login.microsoftonline.com"
GRAPH_SCOPE_DEFAULT = "https://graph.microsoft.com/.default"
GRAPH_URL_DEFAULT = "https://graph.microsoft.com/v1.0"
ASSERTION_LIFETIME_DEFAULT = 3600
HTTP_TIMEOUT_DEFAULT = 30.0


class IdentitySettings(BaseSettings):
    """Identity provider and application credential settings."""

    model_config = SettingsConfigDict(env_prefix="SPE_")

    tenant_id: str = ""
    client_id: str = ""
    authority_host: str = AUTHORITY_HOST_DEFAULT
    certificate_thumbprint: str = ""
    certificate_dir: str = ""
    assertion_lifetime: int = ASSERTION_LIFETIME_DEFAULT
    default_scope: str = GRAPH_SCOPE_DEFAULT
    http_timeout: float = HTTP_TIMEOUT_DEFAULT

    @property
    def token_endpoint(self) -> str:
        """Build the v2.0 token endpoint for the configured tenant."""
        return (
            f"https://{self.authority_host}/{self.tenant_id}/oauth2/v2.0/token"
        )


class ProvisioningSettings(BaseSettings):
    """Container and container-type provisioning settings."""

    model_config = SettingsConfigDict(env_prefix="SPE_PROVISION_")

    graph_url: str = GRAPH_URL_DEFAULT
    sharepoint_admin_url: str = ""
    container_type_id: str = ""

    @property
    def sharepoint_scope(self) -> str:
        """Scope for the tenant's SharePoint admin endpoint."""
        return f"{self.sharepoint_admin_url.rstrip('/')}/.default"
