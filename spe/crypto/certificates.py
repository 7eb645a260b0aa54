"""X.509 certificate credentials and thumbprint-indexed providers."""

import logging
from pathlib import Path
from typing import Protocol

from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from spe.core.errors import (
    CertificateNotFoundError,
    MissingPrivateKeyError,
    SigningError,
)

logger = logging.getLogger(__name__)

CERT_SUFFIXES = (".pem", ".crt", ".cer")
KEY_SUFFIX = ".key"


def normalize_thumbprint(thumbprint: str) -> str:
    """Upper-case a hex thumbprint and strip separators."""
    return "".join(c for c in thumbprint if c.isalnum()).upper()


class CertificateCredential:
    """A certificate plus, optionally, the RSA private key bound to it."""

    def __init__(
        self,
        certificate: x509.Certificate,
        private_key: RSAPrivateKey | None = None,
    ) -> None:
        self._certificate = certificate
        self._private_key = private_key

    @classmethod
    def from_pem(
        cls,
        cert_pem: bytes,
        key_pem: bytes | None = None,
        password: bytes | None = None,
    ) -> "CertificateCredential":
        """Load a credential from PEM-encoded certificate and key bytes."""
        certificate = x509.load_pem_x509_certificate(cert_pem)
        private_key = None
        if key_pem is not None:
            loaded = serialization.load_pem_private_key(key_pem, password=password)
            if not isinstance(loaded, RSAPrivateKey):
                raise TypeError("Client assertions require an RSA private key")
            private_key = loaded
        return cls(certificate, private_key)

    @property
    def certificate(self) -> x509.Certificate:
        return self._certificate

    @property
    def thumbprint(self) -> bytes:
        """SHA-1 digest of the certificate's DER encoding."""
        return self._certificate.fingerprint(hashes.SHA1())  # noqa: S303

    @property
    def thumbprint_hex(self) -> str:
        return self.thumbprint.hex().upper()

    @property
    def has_private_key(self) -> bool:
        return self._private_key is not None

    def sign(self, data: bytes) -> bytes:
        """Sign data with RSASSA-PKCS1-v1_5 over SHA-256."""
        if self._private_key is None:
            raise MissingPrivateKeyError(self.thumbprint_hex)
        try:
            return self._private_key.sign(data, padding.PKCS1v15(), hashes.SHA256())
        except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
            raise SigningError(
                f"Signing with certificate {self.thumbprint_hex} failed: {exc}"
            ) from exc


class CertificateProvider(Protocol):
    """Resolves a certificate credential by its hex thumbprint."""

    def lookup(self, thumbprint: str) -> CertificateCredential: ...


class InMemoryCertificateProvider:
    """Certificate store backed by a dict keyed on thumbprint."""

    def __init__(self, credentials: list[CertificateCredential] | None = None) -> None:
        self._by_thumbprint: dict[str, CertificateCredential] = {}
        for credential in credentials or []:
            self.add(credential)

    def add(self, credential: CertificateCredential) -> None:
        self._by_thumbprint[credential.thumbprint_hex] = credential

    def lookup(self, thumbprint: str) -> CertificateCredential:
        """Return the credential for a thumbprint or raise."""
        key = normalize_thumbprint(thumbprint)
        credential = self._by_thumbprint.get(key)
        if credential is None:
            raise CertificateNotFoundError(key)
        return credential


class PemFileCertificateProvider(InMemoryCertificateProvider):
    """Loads every certificate in a directory, pairing each with a .key file.

    A certificate ``app.pem`` is paired with ``app.key`` when present;
    certificates without a key file are loaded public-only.
    """

    def __init__(self, directory: str | Path, password: bytes | None = None) -> None:
        super().__init__()
        self._directory = Path(directory)
        self._password = password
        self._load()

    def _load(self) -> None:
        for cert_path in sorted(self._directory.iterdir()):
            if cert_path.suffix.lower() not in CERT_SUFFIXES:
                continue
            key_path = cert_path.with_suffix(KEY_SUFFIX)
            key_pem = key_path.read_bytes() if key_path.is_file() else None
            credential = CertificateCredential.from_pem(
                cert_path.read_bytes(), key_pem, self._password
            )
            self.add(credential)
            logger.debug(
                "Loaded certificate %s from %s (private key: %s)",
                credential.thumbprint_hex,
                cert_path.name,
                credential.has_private_key,
            )


def load_configured_credential(
    certificate_dir: str, thumbprint: str
) -> CertificateCredential:
    """Resolve the application's signing credential from a PEM directory."""
    return PemFileCertificateProvider(certificate_dir).lookup(thumbprint)
