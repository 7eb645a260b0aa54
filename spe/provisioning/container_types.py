"""Registration of an owning application on a container type."""

import logging

import httpx

from spe.core.settings import HTTP_TIMEOUT_DEFAULT
from spe.oauth.types import AccessToken
from spe.provisioning.session import ApiSession, SessionClient
from spe.provisioning.types import ApplicationPermissions

logger = logging.getLogger(__name__)


class ContainerTypeClient(SessionClient):
    """Calls the tenant's SharePoint admin API for container types."""

    def __init__(
        self,
        access_token: AccessToken,
        sharepoint_admin_url: str,
        http_client: httpx.Client | None = None,
        timeout: float = HTTP_TIMEOUT_DEFAULT,
    ) -> None:
        self._session = ApiSession(
            access_token,
            f"{sharepoint_admin_url.rstrip('/')}/_api/v2.1",
            http_client,
            timeout,
        )

    def register(
        self,
        container_type_id: str,
        permissions: list[ApplicationPermissions],
    ) -> None:
        """Register the container type in the tenant with app permissions."""
        if not permissions:
            raise ValueError("At least one application permission is required")
        body = {"value": [p.model_dump(by_alias=True) for p in permissions]}
        self._session.request(
            "PUT",
            f"/storageContainerTypes/{container_type_id}/applicationPermissions",
            json=body,
        )
        logger.info(
            "Registered container type %s for %d application(s)",
            container_type_id,
            len(permissions),
        )

    def register_owning_app(self, container_type_id: str, owning_app_id: str) -> None:
        """Register with full delegated and app-only rights for one app."""
        self.register(container_type_id, [ApplicationPermissions(app_id=owning_app_id)])
