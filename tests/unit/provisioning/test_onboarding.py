"""Tests for the sequential onboarding run."""

from urllib.parse import parse_qs

import httpx
import pytest

from spe.core.errors import ProvisioningRequestError
from spe.core.settings import IdentitySettings, ProvisioningSettings
from spe.crypto.certificates import CertificateCredential
from spe.oauth.types import ConsentStatus
from spe.provisioning.onboarding import OnboardingRequest, onboard_tenant
from tests.support import CLIENT_ID, TOKEN_URL, RecordingTransport, token_body

ADMIN_URL = "https://contoso-admin.sharepoint.com"
CONTAINER_TYPE_ID = "4f0af585-8dcc-0000-223d-661eb2c604e4"
CONTAINER = {
    "id": "b!container-1",
    "displayName": "Contoso",
    "containerTypeId": CONTAINER_TYPE_ID,
    "status": "inactive",
}


@pytest.fixture
def provisioning() -> ProvisioningSettings:
    return ProvisioningSettings(
        sharepoint_admin_url=ADMIN_URL, container_type_id=CONTAINER_TYPE_ID
    )


def _tenant(request: httpx.Request) -> httpx.Response:
    url = str(request.url)
    if url == TOKEN_URL:
        scope = parse_qs(request.content.decode())["scope"][0]
        return httpx.Response(
            200, json={**token_body(scope), "access_token": f"token-for-{scope}"}
        )
    if url.endswith("/applicationPermissions"):
        return httpx.Response(200, json={})
    if url.endswith("/activate"):
        return httpx.Response(204)
    if url.endswith("/permissions"):
        return httpx.Response(201, json={"id": "perm-1", "roles": ["owner"]})
    if url.endswith("/storage/fileStorage/containers"):
        return httpx.Response(201, json=CONTAINER)
    return httpx.Response(404)


class TestOnboardTenant:
    """Tests for onboard_tenant."""

    def test_full_run(
        self,
        identity: IdentitySettings,
        provisioning: ProvisioningSettings,
        credential: CertificateCredential,
    ) -> None:
        transport = RecordingTransport(_tenant)
        client = httpx.Client(transport=transport)
        result = onboard_tenant(
            identity,
            provisioning,
            credential,
            OnboardingRequest(display_name="Contoso", owners=["admin@contoso.com"]),
            client,
        )

        assert result.consent == ConsentStatus.GRANTED
        assert result.container is not None
        assert result.container.id == "b!container-1"
        calls = [(r.method, r.url.path.rsplit("/", 1)[-1]) for r in transport.requests]
        assert calls == [
            ("POST", "token"),
            ("POST", "token"),
            ("PUT", "applicationPermissions"),
            ("POST", "containers"),
            ("POST", "activate"),
            ("POST", "permissions"),
        ]
        registration = transport.json_bodies()[0]
        assert registration["value"][0]["appId"] == CLIENT_ID
        sharepoint_scope = parse_qs(transport.requests[1].content.decode())["scope"]
        assert sharepoint_scope == [f"{ADMIN_URL}/.default"]
        assert transport.requests[2].headers["authorization"] == (
            f"Bearer token-for-{ADMIN_URL}/.default"
        )
        assert transport.requests[3].headers["authorization"] == (
            "Bearer token-for-https://graph.microsoft.com/.default"
        )
        assert not client.is_closed

    def test_stops_when_consent_missing(
        self,
        identity: IdentitySettings,
        provisioning: ProvisioningSettings,
        credential: CertificateCredential,
    ) -> None:
        transport = RecordingTransport(
            lambda _req: httpx.Response(
                400, json={"error": "invalid_grant", "error_codes": [65001]}
            )
        )
        result = onboard_tenant(
            identity,
            provisioning,
            credential,
            OnboardingRequest(display_name="Contoso"),
            httpx.Client(transport=transport),
        )
        assert result.consent == ConsentStatus.REQUIRED
        assert result.container is None
        assert len(transport.requests) == 1

    def test_registration_failure_propagates(
        self,
        identity: IdentitySettings,
        provisioning: ProvisioningSettings,
        credential: CertificateCredential,
    ) -> None:
        def _handler(request: httpx.Request) -> httpx.Response:
            if request.method == "PUT":
                return httpx.Response(403, text="denied")
            return _tenant(request)

        transport = RecordingTransport(_handler)
        with pytest.raises(ProvisioningRequestError):
            onboard_tenant(
                identity,
                provisioning,
                credential,
                OnboardingRequest(display_name="Contoso"),
                httpx.Client(transport=transport),
            )
        assert transport.requests[-1].method == "PUT"
