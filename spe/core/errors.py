"""Exception hierarchy for credential, token and provisioning failures."""

import json
from typing import Any


class SPEError(Exception):
    """Base class for all onboarding errors."""


class CredentialError(SPEError):
    """A certificate credential cannot be used to sign."""


class MissingPrivateKeyError(CredentialError):
    """The credential has no accessible private key."""

    def __init__(self, thumbprint: str) -> None:
        super().__init__(f"Certificate {thumbprint} has no accessible private key")
        self.thumbprint = thumbprint


class SigningError(CredentialError):
    """The private key failed to produce a signature."""


class CertificateNotFoundError(CredentialError):
    """No certificate matches the requested thumbprint."""

    def __init__(self, thumbprint: str) -> None:
        super().__init__(f"No certificate with thumbprint {thumbprint}")
        self.thumbprint = thumbprint


class RemoteRequestError(SPEError):
    """A remote endpoint rejected a request.

    Carries the HTTP status code and the raw response body so callers can
    decide on remediation; nothing is retried here.
    """

    def __init__(self, status_code: int, body: str, message: str = "") -> None:
        super().__init__(message or f"Request failed with HTTP {status_code}")
        self.status_code = status_code
        self.body = body

    def json(self) -> dict[str, Any]:
        """Return the body parsed as a JSON object, or an empty dict."""
        try:
            parsed = json.loads(self.body)
        except ValueError:
            return {}
        return parsed if isinstance(parsed, dict) else {}


CONSENT_ERROR_CODES = frozenset({65001})
CLOCK_SKEW_ERROR_CODES = frozenset({700024})


class TokenRequestError(RemoteRequestError):
    """The identity provider rejected a client-assertion exchange."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        payload = self.json()
        self.error: str = str(payload.get("error", ""))
        self.error_description: str = str(payload.get("error_description", ""))
        codes = payload.get("error_codes") or []
        self.error_codes: list[int] = [c for c in codes if isinstance(c, int)]
        detail = f": {self.error}" if self.error else ""
        super().__init__(
            status_code, body, f"Token request failed with HTTP {status_code}{detail}"
        )

    @property
    def consent_required(self) -> bool:
        """True when the tenant admin has not consented to the application."""
        if self.error == "consent_required":
            return True
        return bool(CONSENT_ERROR_CODES.intersection(self.error_codes))

    @property
    def clock_skew(self) -> bool:
        """True when the assertion lifetime was outside the provider's window."""
        return bool(CLOCK_SKEW_ERROR_CODES.intersection(self.error_codes))


class ProvisioningRequestError(RemoteRequestError):
    """A container or container-type API call was rejected."""
