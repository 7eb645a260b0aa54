"""Container creation, activation, listing and permissions."""

import logging

import httpx

from spe.core.settings import GRAPH_URL_DEFAULT, HTTP_TIMEOUT_DEFAULT
from spe.oauth.types import AccessToken
from spe.provisioning.session import ApiSession, SessionClient
from spe.provisioning.types import Container, ContainerPermission, ContainerRole

logger = logging.getLogger(__name__)

CONTAINERS_PATH = "/storage/fileStorage/containers"


class ContainerClient(SessionClient):
    """Manages containers through the Graph file storage API."""

    def __init__(
        self,
        access_token: AccessToken,
        graph_url: str = GRAPH_URL_DEFAULT,
        http_client: httpx.Client | None = None,
        timeout: float = HTTP_TIMEOUT_DEFAULT,
    ) -> None:
        self._session = ApiSession(access_token, graph_url, http_client, timeout)

    def create(
        self,
        container_type_id: str,
        display_name: str,
        description: str | None = None,
    ) -> Container:
        """Create a container; it stays inactive until activated."""
        body = {"displayName": display_name, "containerTypeId": container_type_id}
        if description is not None:
            body["description"] = description
        response = self._session.request("POST", CONTAINERS_PATH, json=body)
        container = Container.model_validate(response.json())
        logger.info("Created container %s (%s)", container.id, display_name)
        return container

    def activate(self, container_id: str) -> None:
        self._session.request("POST", f"{CONTAINERS_PATH}/{container_id}/activate")
        logger.info("Activated container %s", container_id)

    def list_by_type(self, container_type_id: str) -> list[Container]:
        """List containers of one container type."""
        response = self._session.request(
            "GET",
            CONTAINERS_PATH,
            params={"$filter": f"containerTypeId eq {container_type_id}"},
        )
        return [Container.model_validate(item) for item in response.json()["value"]]

    def grant_permission(
        self,
        container_id: str,
        user_principal_name: str,
        role: str,
    ) -> ContainerPermission:
        """Grant a user a role on a container."""
        granted = ContainerRole(role)
        body = {
            "roles": [granted.value],
            "grantedToV2": {"user": {"userPrincipalName": user_principal_name}},
        }
        response = self._session.request(
            "POST", f"{CONTAINERS_PATH}/{container_id}/permissions", json=body
        )
        raw = response.json()
        user = raw.get("grantedToV2", {}).get("user", {})
        logger.info(
            "Granted %s on container %s to %s",
            granted.value,
            container_id,
            user_principal_name,
        )
        return ContainerPermission(
            id=raw["id"],
            roles=raw.get("roles", [granted.value]),
            user_principal_name=user.get("userPrincipalName", user_principal_name),
        )
