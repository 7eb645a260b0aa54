"""Client-credentials token exchange with a certificate assertion."""

import logging

import httpx

from spe.core.errors import TokenRequestError
from spe.core.settings import (
    AUTHORITY_HOST_DEFAULT,
    GRAPH_SCOPE_DEFAULT,
    IdentitySettings,
)
from spe.crypto.assertion import build_client_assertion, token_endpoint
from spe.crypto.certificates import CertificateCredential
from spe.oauth.types import AccessToken

logger = logging.getLogger(__name__)

GRANT_TYPE = "client_credentials"
CLIENT_ASSERTION_TYPE = "urn:ietf:params:oauth:client-assertion-type:jwt-bearer"


def exchange_for_token(
    tenant_id: str,
    client_id: str,
    assertion: str,
    scope: str = GRAPH_SCOPE_DEFAULT,
    *,
    authority_host: str = AUTHORITY_HOST_DEFAULT,
    http_client: httpx.Client | None = None,
    timeout: float | None = None,
) -> AccessToken:
    """Redeem a client assertion for an app-only access token.

    One POST, no retry. A rejection raises ``TokenRequestError`` with the
    provider's status code and body verbatim; transport errors propagate
    as raised by httpx.
    """
    url = token_endpoint(authority_host, tenant_id)
    form = {
        "client_id": client_id,
        "client_assertion": assertion,
        "client_assertion_type": CLIENT_ASSERTION_TYPE,
        "scope": scope,
        "grant_type": GRANT_TYPE,
    }
    if http_client is None:
        with httpx.Client(timeout=timeout) as client:
            response = client.post(url, data=form)
    elif timeout is None:
        response = http_client.post(url, data=form)
    else:
        response = http_client.post(url, data=form, timeout=timeout)

    if not response.is_success:
        error = TokenRequestError(response.status_code, response.text)
        logger.warning(
            "Token request for client %s in tenant %s rejected: HTTP %d %s",
            client_id,
            tenant_id,
            response.status_code,
            error.error or "-",
        )
        raise error

    # ValidationError and JSONDecodeError are both ValueErrors
    try:
        token = AccessToken.model_validate(response.json())
    except ValueError as exc:
        raise TokenRequestError(response.status_code, response.text) from exc
    logger.info(
        "Issued %s token for client %s in tenant %s (expires in %ds)",
        token.token_type,
        client_id,
        tenant_id,
        token.expires_in,
    )
    return token


def acquire_token(
    settings: IdentitySettings,
    certificate: CertificateCredential,
    scope: str | None = None,
    http_client: httpx.Client | None = None,
) -> AccessToken:
    """Build a fresh assertion and exchange it in one call."""
    assertion = build_client_assertion(
        settings.client_id,
        settings.tenant_id,
        certificate,
        authority_host=settings.authority_host,
        lifetime_seconds=settings.assertion_lifetime,
    )
    return exchange_for_token(
        settings.tenant_id,
        settings.client_id,
        assertion,
        scope or settings.default_scope,
        authority_host=settings.authority_host,
        http_client=http_client,
        timeout=settings.http_timeout,
    )
