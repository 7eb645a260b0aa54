"""Tenant admin consent URL and consent probing."""

import logging
from urllib.parse import urlencode

import httpx

from spe.core.errors import TokenRequestError
from spe.core.settings import IdentitySettings
from spe.crypto.certificates import CertificateCredential
from spe.oauth.token_client import acquire_token
from spe.oauth.types import AccessToken, ConsentStatus

logger = logging.getLogger(__name__)


def build_admin_consent_url(
    tenant_id: str,
    client_id: str,
    redirect_uri: str,
    *,
    authority_host: str,
    state: str | None = None,
) -> str:
    """Build the URL a tenant admin opens to consent to the application."""
    params = {"client_id": client_id, "redirect_uri": redirect_uri}
    if state is not None:
        params["state"] = state
    return f"https://{authority_host}/{tenant_id}/adminconsent?{urlencode(params)}"


def probe_admin_consent(
    settings: IdentitySettings,
    certificate: CertificateCredential,
    http_client: httpx.Client | None = None,
) -> AccessToken | None:
    """Request a default-scope token; ``None`` means consent is missing.

    Only a missing-consent rejection maps to ``None``; every other
    ``TokenRequestError`` propagates.
    """
    try:
        return acquire_token(settings, certificate, http_client=http_client)
    except TokenRequestError as exc:
        if not exc.consent_required:
            raise
        logger.info(
            "Admin consent required for client %s in tenant %s",
            settings.client_id,
            settings.tenant_id,
        )
        return None


def verify_admin_consent(
    settings: IdentitySettings,
    certificate: CertificateCredential,
    http_client: httpx.Client | None = None,
) -> ConsentStatus:
    """Probe the tenant with a token request to see if consent exists."""
    if probe_admin_consent(settings, certificate, http_client) is None:
        return ConsentStatus.REQUIRED
    return ConsentStatus.GRANTED
