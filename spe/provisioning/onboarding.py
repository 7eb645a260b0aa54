"""Sequential tenant onboarding: consent, container type, container."""

import logging

import httpx
from pydantic import BaseModel

from spe.core.settings import IdentitySettings, ProvisioningSettings
from spe.crypto.certificates import CertificateCredential
from spe.oauth.consent import probe_admin_consent
from spe.oauth.token_client import acquire_token
from spe.oauth.types import ConsentStatus
from spe.provisioning.container_types import ContainerTypeClient
from spe.provisioning.containers import ContainerClient
from spe.provisioning.types import Container, ContainerRole

logger = logging.getLogger(__name__)


class OnboardingRequest(BaseModel):
    """What to create in the customer tenant."""

    display_name: str
    description: str | None = None
    owners: list[str] = []


class OnboardingResult(BaseModel):
    """Outcome of an onboarding run."""

    consent: ConsentStatus
    container: Container | None = None


def onboard_tenant(
    identity: IdentitySettings,
    provisioning: ProvisioningSettings,
    certificate: CertificateCredential,
    request: OnboardingRequest,
    http_client: httpx.Client | None = None,
) -> OnboardingResult:
    """Run consent check, container type registration and container setup.

    Stops after the consent check when the tenant admin has not consented
    yet; the caller then sends the admin to the consent URL and reruns.
    """
    graph_token = probe_admin_consent(identity, certificate, http_client)
    if graph_token is None:
        return OnboardingResult(consent=ConsentStatus.REQUIRED)

    sharepoint_token = acquire_token(
        identity, certificate, provisioning.sharepoint_scope, http_client
    )
    with ContainerTypeClient(
        sharepoint_token,
        provisioning.sharepoint_admin_url,
        http_client,
        identity.http_timeout,
    ) as container_types:
        container_types.register_owning_app(
            provisioning.container_type_id, identity.client_id
        )

    with ContainerClient(
        graph_token, provisioning.graph_url, http_client, identity.http_timeout
    ) as containers:
        container = containers.create(
            provisioning.container_type_id, request.display_name, request.description
        )
        containers.activate(container.id)
        for owner in request.owners:
            containers.grant_permission(container.id, owner, ContainerRole.OWNER)

    logger.info(
        "Onboarded tenant %s with container %s", identity.tenant_id, container.id
    )
    return OnboardingResult(consent=ConsentStatus.GRANTED, container=container)
