"""Shared test fixtures for the onboarding toolkit."""

import pytest

from spe.core.settings import IdentitySettings
from spe.crypto.certificates import CertificateCredential
from tests.support import CLIENT_ID, TENANT_ID, make_certificate


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host SPE_* variables out of settings under test."""
    for name in (
        "SPE_TENANT_ID",
        "SPE_CLIENT_ID",
        "SPE_AUTHORITY_HOST",
        "SPE_ASSERTION_LIFETIME",
        "SPE_DEFAULT_SCOPE",
        "SPE_HTTP_TIMEOUT",
        "SPE_PROVISION_GRAPH_URL",
        "SPE_PROVISION_SHAREPOINT_ADMIN_URL",
        "SPE_PROVISION_CONTAINER_TYPE_ID",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def certificate_pems() -> tuple[bytes, bytes]:
    """One RSA-2048 certificate per test session."""
    return make_certificate()


@pytest.fixture
def credential(certificate_pems: tuple[bytes, bytes]) -> CertificateCredential:
    """A credential with an accessible private key."""
    cert_pem, key_pem = certificate_pems
    return CertificateCredential.from_pem(cert_pem, key_pem)


@pytest.fixture
def public_only_credential(
    certificate_pems: tuple[bytes, bytes],
) -> CertificateCredential:
    """The same certificate without its private key."""
    return CertificateCredential.from_pem(certificate_pems[0])


@pytest.fixture
def identity() -> IdentitySettings:
    return IdentitySettings(tenant_id=TENANT_ID, client_id=CLIENT_ID)
