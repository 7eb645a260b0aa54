"""Certificate-signed JWT client assertions (RFC 7523)."""

import logging
from datetime import UTC, datetime

import uuid_utils
from jwt.utils import base64url_encode

from spe.core.errors import MissingPrivateKeyError
from spe.core.settings import ASSERTION_LIFETIME_DEFAULT, AUTHORITY_HOST_DEFAULT
from spe.crypto.certificates import CertificateCredential
from spe.crypto.types import AssertionClaims, AssertionHeader

logger = logging.getLogger(__name__)


def token_endpoint(authority_host: str, tenant_id: str) -> str:
    """Return the v2.0 token endpoint URL for a tenant."""
    return f"https://{authority_host}/{tenant_id}/oauth2/v2.0/token"


def _segment(raw: bytes) -> str:
    return base64url_encode(raw).decode("ascii")


def build_client_assertion(
    client_id: str,
    tenant_id: str,
    certificate: CertificateCredential,
    *,
    authority_host: str = AUTHORITY_HOST_DEFAULT,
    lifetime_seconds: int = ASSERTION_LIFETIME_DEFAULT,
    now: datetime | None = None,
) -> str:
    """Build and sign a compact client assertion for one token request.

    The header names the signing certificate by its base64url SHA-1
    thumbprint (``x5t``); the claims are self-issued (``iss == sub ==
    client_id``) with a fresh ``jti`` and ``exp = nbf + lifetime_seconds``.

    Raises:
        MissingPrivateKeyError: the credential cannot sign.
        SigningError: the private key operation failed.
        ValueError: empty client id or non-positive lifetime.
    """
    if not certificate.has_private_key:
        raise MissingPrivateKeyError(certificate.thumbprint_hex)
    if not client_id:
        raise ValueError("client_id must not be empty")
    if lifetime_seconds <= 0:
        raise ValueError("lifetime_seconds must be positive")

    issued = int((now or datetime.now(UTC)).timestamp())
    header = AssertionHeader(x5t=_segment(certificate.thumbprint))
    claims = AssertionClaims(
        aud=token_endpoint(authority_host, tenant_id),
        iss=client_id,
        sub=client_id,
        jti=str(uuid_utils.uuid4()),
        nbf=issued,
        exp=issued + lifetime_seconds,
    )

    signing_input = (
        f"{_segment(header.model_dump_json().encode())}"
        f".{_segment(claims.model_dump_json().encode())}"
    )
    signature = certificate.sign(signing_input.encode("utf-8"))
    logger.debug(
        "Built client assertion jti=%s for client %s in tenant %s",
        claims.jti,
        client_id,
        tenant_id,
    )
    return f"{signing_input}.{_segment(signature)}"


class ClientAssertionBuilder:
    """Builds assertions for one application against any tenant."""

    def __init__(
        self,
        client_id: str,
        authority_host: str = AUTHORITY_HOST_DEFAULT,
        lifetime_seconds: int = ASSERTION_LIFETIME_DEFAULT,
    ) -> None:
        self._client_id = client_id
        self._authority_host = authority_host
        self._lifetime_seconds = lifetime_seconds

    @property
    def client_id(self) -> str:
        return self._client_id

    def build(self, tenant_id: str, certificate: CertificateCredential) -> str:
        """Build a fresh assertion; never reuse the result across requests."""
        return build_client_assertion(
            self._client_id,
            tenant_id,
            certificate,
            authority_host=self._authority_host,
            lifetime_seconds=self._lifetime_seconds,
        )
