"""Constants and helpers shared by unit and integration tests."""

import json
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import httpx
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

CLIENT_ID = "11111111-1111-1111-1111-111111111111"
TENANT_ID = "contoso.onmicrosoft.com"
AUTHORITY_HOST = "login.microsoftonline.com"
TOKEN_URL = f"https://{AUTHORITY_HOST}/{TENANT_ID}/oauth2/v2.0/token"


def make_certificate(common_name: str = "spe-test") -> tuple[bytes, bytes]:
    """Return (certificate PEM, private key PEM) for a fresh self-signed cert."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
    now = datetime.now(UTC)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(minutes=5))
        .not_valid_after(now + timedelta(days=30))
        .sign(key, hashes.SHA256())
    )
    cert_pem = cert.public_bytes(serialization.Encoding.PEM)
    key_pem = key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return cert_pem, key_pem


def token_body(scope: str = "https://graph.microsoft.com/.default") -> dict:
    return {
        "token_type": "Bearer",
        "expires_in": 3599,
        "ext_expires_in": 3599,
        "access_token": "eyJ0eXAi.test.token",
        "scope": scope,
    }


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it handled."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    def json_bodies(self) -> list[dict]:
        """Decode the bodies of JSON requests, skipping form posts."""
        return [
            json.loads(r.content)
            for r in self.requests
            if r.headers.get("content-type", "").startswith("application/json")
        ]
